# API dependencies
from fastapi import Header, Depends, Request
from typing import Optional
from sqlalchemy.orm import Session

from app.core.exceptions import AuthenticationError
from app.core.security import decode_access_token
from app.db.database import get_db
from app.models.user import User
from app.services.cookie_service import ACCESS_TOKEN_COOKIE
from app.services.oauth.registry import OAuthProviderRegistry, get_oauth_registry
from app.services.auth_service import AuthService
from app.services.user_service import UserService


def _extract_access_token(request: Request, authorization: Optional[str]) -> Optional[str]:
    """
    Authorization 헤더(Bearer) 우선, 없으면 access_token 쿠키에서 토큰을 꺼냅니다.
    """
    if authorization:
        if not authorization.startswith("Bearer "):
            raise AuthenticationError("Authorization 헤더 형식이 올바르지 않습니다. 'Bearer <token>' 형식이어야 합니다.")
        return authorization[len("Bearer "):]

    return request.cookies.get(ACCESS_TOKEN_COOKIE) or None


def get_current_user_id(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> int:
    """
    JWT 토큰에서 현재 사용자 ID를 추출합니다.

    Raises:
        AuthenticationError: 토큰이 없거나 유효하지 않은 경우
    """
    token = _extract_access_token(request, authorization)
    if not token:
        raise AuthenticationError("로그인이 필요합니다.")

    return decode_access_token(token)


def get_optional_user_id(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> Optional[int]:
    """비로그인 조회를 허용하는 API 용. 토큰이 없거나 잘못되면 None."""
    try:
        token = _extract_access_token(request, authorization)
        return decode_access_token(token) if token else None
    except AuthenticationError:
        return None


def get_current_user(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> User:
    """
    JWT 토큰에서 현재 사용자를 가져옵니다.
    토큰은 유효하지만 사용자가 없으면 401 처리합니다.
    """
    user = db.get(User, user_id)
    if user is None:
        raise AuthenticationError("사용자 정보를 찾을 수 없습니다. 다시 로그인해주세요.")
    return user


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


def get_auth_service(
    db: Session = Depends(get_db),
    registry: OAuthProviderRegistry = Depends(get_oauth_registry),
) -> AuthService:
    return AuthService(db, registry)
