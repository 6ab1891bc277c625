"""
services/resolver.py

사용자 목록 조회 필터 로직.

GET /user 요청의 선택적 쿼리 파라미터(username, birthday, email, reactive)를
받아 어떤 조회를 수행할지 결정하고, 결과를 명시적인 결과 객체로 반환한다.

조회 우선순위:
- username (부분 일치) → birthday (정확히 일치) → email (정확히 일치)
- 가장 먼저 지정된 조건 하나만 적용되며, 조건끼리 조합하지 않음
- reactive 값은 username 조회일 때만 적용

설계 원칙:
- HTTP / FastAPI 의존성 없음, 예외를 던지지 않고 결과 객체를 반환
- DB 접근은 생성 시 주입된 lookup 객체로만 수행

관련 파일:
- app.services.users       : UserLookup 구현체(UserService)
- app.routers.users        : 결과 객체 → HTTP 응답 변환

"""

import datetime
import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol, Sequence, Union

from app.models.user import User

logger = logging.getLogger("userregistry.resolver")


class UserLookup(Protocol):
    def by_username_containing(self, text: str) -> Sequence[User]: ...

    def by_birthday(self, birthday: datetime.date) -> Sequence[User]: ...

    def by_email(self, email: str) -> Optional[User]: ...

    def reactivate_by_username(self, username: str, active: bool) -> None: ...


@dataclass(frozen=True)
class FilterCriteria:
    username: Optional[str] = None
    birthday: Optional[datetime.date] = None
    email: Optional[str] = None
    reactivate: Optional[bool] = None


@dataclass(frozen=True)
class Found:
    users: list = field(default_factory=list)


@dataclass(frozen=True)
class NotFound:
    message: str


@dataclass(frozen=True)
class BadRequest:
    message: str


Resolution = Union[Found, NotFound, BadRequest]


class UserQueryResolver:
    def __init__(self, lookup: UserLookup):
        self.lookup = lookup

    def resolve(self, criteria: FilterCriteria) -> Resolution:
        if criteria.username is not None:
            logger.debug("Fetching User with username %s", criteria.username)
            users = list(self.lookup.by_username_containing(criteria.username))
            if not users:
                return NotFound(f"User with username {criteria.username} NOT_FOUND")
            # 결과 목록이 확정된 뒤에 활성 상태 변경
            if criteria.reactivate is not None:
                for user in users:
                    self.lookup.reactivate_by_username(user.username, criteria.reactivate)
            return Found(users)

        if criteria.birthday is not None:
            logger.debug("Fetching User with birthday %s", criteria.birthday)
            users = list(self.lookup.by_birthday(criteria.birthday))
            if not users:
                return NotFound(f"User with birthday {criteria.birthday.isoformat()} NOT_FOUND")
            return Found(users)

        if criteria.email is not None:
            logger.debug("Fetching User with email %s", criteria.email)
            user = self.lookup.by_email(criteria.email)
            if user is None:
                return NotFound(f"User with email {criteria.email} NOT_FOUND")
            return Found([user])

        return BadRequest("no recognized filter parameter supplied")
