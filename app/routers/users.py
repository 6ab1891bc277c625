"""
users.py

사용자(User) 리소스 CRUD API 모음.

이 파일은 사용자 목록/단건 조회, 조건 검색, 생성, 주소 수정, 삭제와
로그인한 사용자 본인 조회(whoami) 기능을 담당한다.

주요 기능:
- 전체 사용자 목록 조회
- username / birthday / email 조건 검색 (+ username 검색 시 활성 상태 변경)
- id 기준 단건 조회
- 사용자 생성 (중복 시 409)
- 주소(address) 수정
- 사용자 삭제 (마지막 관리자 삭제 방지)

설계 원칙:
- 조회 조건 판단은 services.resolver, 삭제 정책은 services.admin 에 위임
- 트랜잭션 제어(commit/rollback)는 이 파일에서 수행
- 마지막 관리자 삭제 거부는 별도 403이 아닌 404로 응답

관련 파일:
- app.services.users       : UserService (조회/저장)
- app.services.resolver    : 조회 조건 우선순위 로직
- app.services.admin       : 관리자 수 집계 / 삭제 가능 여부
- app.core.deps            : DB 세션 / 인증 의존성

"""

import datetime
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from starlette import status

from app.core.deps import get_current_member, get_db, get_user_service
from app.models.user import User
from app.schemas.user import UserCreate, UserResponse, UserUpdate
from app.services.admin import can_delete, count_admins
from app.services.resolver import BadRequest, FilterCriteria, NotFound, UserQueryResolver
from app.services.users import UserService

logger = logging.getLogger("userregistry.routers.users")

router = APIRouter(tags=["users"])


def _commit(db: Session) -> None:
    try:
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")


"""
전체 사용자 목록 조회 API

- 사용자가 없으면 204 No Content

"""
@router.get("/user/all", response_model=list[UserResponse])
def list_all_users(service: UserService = Depends(get_user_service)):
    logger.debug("Received request to get all User")
    users = service.all()
    if not users:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return [UserResponse.model_validate(u) for u in users]


"""
사용자 조건 검색 API

- 예: /user?username=adm&birthday=2005-09-20
- username > birthday > email 순서로 하나의 조건만 적용
- username 검색 + reactive 지정 시 검색된 모든 사용자의 활성 상태 변경
- 응답은 활성 상태 변경 이전(조회 시점)의 값

"""
@router.get("/user", response_model=list[UserResponse])
def search_users(
    username: str | None = None,
    birthday: datetime.date | None = None,
    email: str | None = None,
    reactive: bool | None = None,
    db: Session = Depends(get_db),
    service: UserService = Depends(get_user_service),
):
    criteria = FilterCriteria(
        username=username,
        birthday=birthday,
        email=email,
        reactivate=reactive,
    )
    outcome = UserQueryResolver(service).resolve(criteria)

    if isinstance(outcome, NotFound):
        logger.info(outcome.message)
        raise HTTPException(status_code=404, detail=outcome.message)
    if isinstance(outcome, BadRequest):
        raise HTTPException(status_code=400, detail=outcome.message)

    payload = [UserResponse.model_validate(u) for u in outcome.users]
    if criteria.reactivate is not None:
        _commit(db)
    return payload


"""
로그인한 사용자 본인 조회 API

- ROLE_USER 권한 필요
- 인증 의존성이 넘겨준 사용자를 그대로 반환

"""
@router.get("/whoami", response_model=UserResponse)
def whoami(current_user: User = Depends(get_current_member)):
    return UserResponse.model_validate(current_user)


@router.get("/user/{user_id}", response_model=UserResponse)
def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    logger.debug("Fetching User with id %s", user_id)
    user = service.by_id(user_id)
    if not user:
        logger.debug("User with id %s not found", user_id)
        raise HTTPException(status_code=404, detail=f"User with id {user_id} not found")
    return UserResponse.model_validate(user)


"""
사용자 생성 API

- 같은 username 또는 email 사용자가 있으면 409
- 생성 성공 시 201 + Location 헤더(/user/{id})

"""
@router.post("/user/", status_code=status.HTTP_201_CREATED)
def create_user(
    data: UserCreate,
    request: Request,
    db: Session = Depends(get_db),
    service: UserService = Depends(get_user_service),
):
    logger.debug("Creating User %s", data.username)

    if service.is_user_exist(data):
        logger.info("A User with name %s already exist", data.username)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"A User with name {data.username} already exist",
        )

    try:
        user = service.save(data)
        user_id = user.id
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"A User with name {data.username} already exist",
        )
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Database error: {type(e).__name__}")

    location = str(request.url_for("get_user", user_id=user_id))
    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": location})


"""
사용자 수정 API

- 요청 바디 중 address 만 반영

"""
@router.put("/user/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    data: UserUpdate,
    db: Session = Depends(get_db),
    service: UserService = Depends(get_user_service),
):
    logger.debug("Updating User %s", user_id)

    user = service.by_id(user_id)
    if not user:
        logger.debug("User with id %s not found", user_id)
        raise HTTPException(status_code=404, detail=f"User with id {user_id} not found")

    user.address = data.address
    service.update(user)
    _commit(db)
    db.refresh(user)
    return UserResponse.model_validate(user)


"""
사용자 삭제 API

- 관리자가 1명 이하이고 대상이 관리자이면 삭제 거부(404)
- 삭제 성공 시 204 No Content

"""
@router.delete("/user/{user_id}")
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    service: UserService = Depends(get_user_service),
):
    logger.debug("Fetching & Deleting User with id %s", user_id)

    user = service.by_id(user_id)
    if not user:
        logger.debug("Unable to delete. User with id %s not found", user_id)
        raise HTTPException(status_code=404, detail=f"User with id {user_id} not found")

    if not can_delete(user, count_admins(db)):
        logger.info("Unable to delete. User with id %s is the last admin", user_id)
        raise HTTPException(status_code=404, detail="Unable to delete the last admin")

    service.delete_by_id(user_id)
    _commit(db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
