"""
user.py

사용자(User) 및 권한(Authority) 모델 정의 파일.

이 파일은 사용자의 기본 정보(아이디, 이메일, 생일, 주소)와
부여된 권한 목록, 활성 상태(is_active)를 관리한다.

모든 인증, 권한, 삭제 보호 로직의 기준이 되는 핵심 모델이다.

"""

import datetime

from sqlalchemy import Boolean, Column, Date, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


ROLE_ADMIN = "ROLE_ADMIN"
ROLE_USER = "ROLE_USER"


# 사용자 <-> 권한 다대다 연결 테이블
user_authorities = Table(
    "user_authorities",
    Base.metadata,
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("authority_id", ForeignKey("authorities.id", ondelete="CASCADE"), primary_key=True),
)


"""
권한(Authority) 모델

- name은 "ROLE_ADMIN", "ROLE_USER" 같은 권한 라벨
- 사용자 저장 시 존재하지 않는 라벨은 새로 생성

"""

class Authority(Base):
    __tablename__ = "authorities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)


"""
사용자(User) 모델

- id는 DB가 발급하는 정수 식별자
- username / email 은 고유 식별자
- address 는 수정 API로 변경 가능한 유일한 필드
- is_active 는 재활성화(reactivation) 요청으로 토글됨

"""

class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    birthday: Mapped[datetime.date] = mapped_column(Date, index=True, nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    authorities: Mapped[list[Authority]] = relationship(
        secondary=user_authorities, lazy="selectin"
    )

    @property
    def authority_names(self) -> list[str]:
        return [a.name for a in self.authorities]
