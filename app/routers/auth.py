"""
auth.py

인증(Authentication) API.

- username / password 로그인 후 JWT Access Token 발급
- 발급된 토큰은 Authorization: Bearer 헤더로 전달
- 비활성(is_active=False) 사용자는 로그인 불가

관련 파일:
- app.core.security        : 비밀번호 검증 / JWT 생성
- app.core.deps            : 토큰 검증 의존성(get_current_user)

"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.deps import get_user_service
from app.core.security import create_access_token, verify_password
from app.schemas.auth import LoginRequest, TokenResponse
from app.services.users import UserService

logger = logging.getLogger("userregistry.routers.auth")

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
def login(data: LoginRequest, service: UserService = Depends(get_user_service)):
    user = service.by_username(data.username)

    if not user or not verify_password(data.password, user.password_hash):
        logger.info("Rejected login for %s", data.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Inactive user")

    return TokenResponse(access_token=create_access_token(subject=str(user.id)))
