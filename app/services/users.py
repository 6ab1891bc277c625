"""
services/users.py

사용자 조회/저장 서비스(Service).

이 파일은 사용자 API가 사용하는 영속성 계층 기능을 담당한다.
조회 필터(UserQueryResolver)와 라우터는 이 클래스를 통해서만
DB에 접근한다.

주요 기능:
- 아이디 부분 일치(대소문자 무시) / 생일 / 이메일 / id 기준 조회
- 중복 사용자 확인
- 사용자 저장 / 수정 / 삭제
- 아이디 기준 활성 상태(is_active) 변경

설계 원칙:
- HTTP / FastAPI 의존성 없음
- flush까지만 수행하고 트랜잭션 제어(commit/rollback)는 라우터에서 수행

관련 파일:
- app.models.user          : User / Authority 모델
- app.services.resolver    : 조회 필터 로직
- app.routers.users        : 사용자 API

"""

import datetime
import logging

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import or_, select, update
from sqlalchemy.orm import Session

from app.core.security import get_password_hash
from app.models.user import Authority, User
from app.schemas.user import UserCreate

logger = logging.getLogger("userregistry.users")


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def by_username_containing(self, text: str) -> list[User]:
        return list(
            self.db.scalars(
                select(User)
                .where(User.username.icontains(text, autoescape=True))
                .order_by(User.id)
            ).all()
        )

    def by_birthday(self, birthday: datetime.date) -> list[User]:
        return list(
            self.db.scalars(
                select(User).where(User.birthday == birthday).order_by(User.id)
            ).all()
        )

    # 저장 시 EmailStr 이 도메인을 소문자로 정규화하므로 검색 값도 동일하게 정규화
    def by_email(self, email: str) -> User | None:
        try:
            normalized = validate_email(email, check_deliverability=False).normalized
        except EmailNotValidError:
            # 형식이 잘못된 이메일은 저장될 수 없음
            return None
        return self.db.scalar(select(User).where(User.email == normalized))

    def by_username(self, username: str) -> User | None:
        return self.db.scalar(select(User).where(User.username == username))

    def by_id(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def all(self) -> list[User]:
        return list(self.db.scalars(select(User).order_by(User.id)).all())

    # 아이디 또는 이메일이 같은 사용자가 있으면 중복으로 판단
    def is_user_exist(self, data: UserCreate) -> bool:
        found = self.db.scalar(
            select(User.id)
            .where(or_(User.username == data.username, User.email == data.email))
            .limit(1)
        )
        return found is not None

    def save(self, data: UserCreate) -> User:
        user = User(
            username=data.username,
            email=data.email,
            password_hash=get_password_hash(data.password),
            birthday=data.birthday,
            address=data.address,
            is_active=True,
            authorities=self._authorities(data.authorities),
        )
        self.db.add(user)
        self.db.flush()
        logger.info("Saved User %s with id %s", user.username, user.id)
        return user

    def update(self, user: User) -> None:
        self.db.add(user)
        self.db.flush()

    def delete_by_id(self, user_id: int) -> None:
        user = self.db.get(User, user_id)
        if user is not None:
            self.db.delete(user)
            self.db.flush()

    """
    활성 상태 변경

    - 이미 조회된 객체는 갱신하지 않음(synchronize_session=False)
    - 같은 요청에서 반환되는 목록은 조회 시점의 값을 유지

    """
    def reactivate_by_username(self, username: str, active: bool) -> None:
        self.db.execute(
            update(User)
            .where(User.username == username)
            .values(is_active=active)
            .execution_options(synchronize_session=False)
        )

    def _authorities(self, names: list[str]) -> list[Authority]:
        wanted = list(dict.fromkeys(names))
        existing = {
            a.name: a
            for a in self.db.scalars(select(Authority).where(Authority.name.in_(wanted))).all()
        }
        result = []
        for name in wanted:
            authority = existing.get(name)
            if authority is None:
                authority = Authority(name=name)
                self.db.add(authority)
            result.append(authority)
        return result
