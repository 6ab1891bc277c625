"""
services/admin.py

관리자 관련 비즈니스 로직(Service) 모음.

이 파일은 사용자 삭제 시 사용되는
관리자 정책 판단 로직을 담당한다.
라우터에서는 이 파일의 함수를 호출하여
DB 조회/정책 판단을 수행한다.

주요 기능:
- 현재 ROLE_ADMIN 보유 사용자 수 계산
- 마지막 관리자 삭제 방지 판단

설계 원칙:
- HTTP / FastAPI 의존성 없음
- 트랜잭션 제어는 라우터에서 수행
- 관리자 정책(마지막 ADMIN 보호 등)을 중앙에서 관리

관련 파일:
- app.models.user        : User / Authority 모델
- app.routers.users      : 사용자 삭제 API

"""

from sqlalchemy.orm import Session
from sqlalchemy import select, func, distinct
from app.models.user import User, Authority, ROLE_ADMIN


"""
현재 ROLE_ADMIN 권한을 가진 사용자 수를 반환

- 삭제 요청마다 새로 집계 (저장하지 않음)
- 마지막 ADMIN 보호 로직에서 사용

"""

def count_admins(db: Session) -> int:
    return db.scalar(
        select(func.count(distinct(User.id)))
        .select_from(User)
        .join(User.authorities)
        .where(Authority.name == ROLE_ADMIN)
    ) or 0


# 권한 목록 중 하나라도 ROLE_ADMIN 이면 관리자
def holds_admin_authority(user: User) -> bool:
    return any(name == ROLE_ADMIN for name in user.authority_names)


"""
삭제 가능 여부 판단

- 관리자가 1명 이하이고 대상이 관리자이면 삭제 불가
- 그 외에는 모두 삭제 가능

"""

def can_delete(target: User, admin_count: int) -> bool:
    if admin_count <= 1 and holds_admin_authority(target):
        return False
    return True
