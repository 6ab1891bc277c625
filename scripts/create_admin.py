"""

초기 관리자(ROLE_ADMIN) 계정 생성 스크립트.

- 서버 최초 세팅 시 단 한 번 실행하는 용도
- .env에 정의된 ADMIN_* 환경 변수를 읽어
  ROLE_ADMIN + ROLE_USER 권한을 가진 계정을 생성한다.
- 이미 ROLE_ADMIN 사용자가 존재하면 생성하지 않고 종료한다.

사용 방법
- 가상환경 접속
- (.venv) ~\backend~$ python -m scripts.create_admin

"""

import datetime
import os
from dotenv import load_dotenv
load_dotenv()

from app.db.session import SessionLocal
from app.models.user import ROLE_ADMIN, ROLE_USER
from app.schemas.user import UserCreate
from app.services.admin import count_admins
from app.services.users import UserService


def main():
    db = SessionLocal()
    try:
        if count_admins(db) > 0:
            print("✅ ROLE_ADMIN user already exists. Skip creation.")
            return

        data = UserCreate(
            username=os.environ.get("ADMIN_USERNAME", "admin"),
            password=os.environ["ADMIN_PASSWORD"],
            email=os.environ["ADMIN_EMAIL"],
            birthday=datetime.date.fromisoformat(os.environ.get("ADMIN_BIRTHDAY", "1970-01-01")),
            address=os.environ.get("ADMIN_ADDRESS", ""),
            authorities=[ROLE_ADMIN, ROLE_USER],
        )

        service = UserService(db)
        if service.is_user_exist(data):
            raise RuntimeError("Username or email already exists but is not ROLE_ADMIN")

        service.save(data)
        db.commit()

        print(f"🚀 ROLE_ADMIN created: {data.username}")

    finally:
        db.close()


if __name__ == "__main__":
    main()
