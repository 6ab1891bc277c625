# tests/helpers.py
import datetime

from sqlalchemy.orm import Session

from app.models.user import User, ROLE_ADMIN, ROLE_USER
from app.schemas.user import UserCreate
from app.services.users import UserService

DEFAULT_PASSWORD = "UserPassw0rd!"


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def create_user_in_db(
    db: Session,
    *,
    username: str,
    email: str | None = None,
    password: str = DEFAULT_PASSWORD,
    birthday: datetime.date = datetime.date(2005, 9, 20),
    address: str = "",
    authorities: tuple = (ROLE_USER,),
) -> User:
    user = UserService(db).save(
        UserCreate(
            username=username,
            password=password,
            email=email or f"{username}@example.com",
            birthday=birthday,
            address=address,
            authorities=list(authorities),
        )
    )
    db.commit()
    db.refresh(user)
    return user


def create_admin_in_db(db: Session, *, username: str, password: str = DEFAULT_PASSWORD) -> User:
    return create_user_in_db(
        db,
        username=username,
        password=password,
        authorities=(ROLE_ADMIN, ROLE_USER),
    )


def login(client, username: str, password: str = DEFAULT_PASSWORD) -> str:
    r = client.post("/auth/login", json={"username": username, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["access_token"]
