"""
인증 API
소셜 로그인 URL 조회, 토큰 발급, 액세스 토큰 갱신, 로그아웃
"""

from fastapi import APIRouter, Depends, Query, Response, status, Cookie
from typing import Optional
import logging

from app.api.dependencies import get_auth_service
from app.core.exceptions import AuthenticationError
from app.schemas.auth import (
    LoginURLResponse,
    TokenRequest,
    TokenResponse,
    RefreshTokenResponse,
    UserSummary,
)
from app.services.auth_service import AuthService
from app.services.cookie_service import CookieService, get_cookie_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/oauth", response_model=LoginURLResponse)
def get_oauth_login_url(
    provider: str = Query("kakao", description="OAuth 제공자 (kakao, google)"),
    redirect_uri: Optional[str] = Query(None, alias="redirectUri"),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    소셜 로그인 URL 반환
    클라이언트는 이 URL로 사용자를 리다이렉트
    """
    logger.info(f"oauthProvider : {provider}")
    return LoginURLResponse(login_url=auth_service.get_login_url(provider, redirect_uri))


@router.post("/tokens", response_model=TokenResponse)
async def issue_tokens(
    request: TokenRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
    cookie_service: CookieService = Depends(get_cookie_service),
):
    """
    OAuth 콜백으로 받은 authorization code 로 토큰 발급

    토큰 값은 응답 본문에 넣지 않고 쿠키로만 전달한다.
    """
    result = await auth_service.login(
        request.provider,
        request.authorization_code,
        request.redirect_uri,
    )

    cookie_service.add_access_token_cookie(response, result.tokens.access_token, result.tokens.access_expires_in)
    cookie_service.add_refresh_token_cookie(response, result.tokens.refresh_token, result.tokens.refresh_expires_in)

    return TokenResponse(
        expires_in=result.tokens.access_expires_in,
        refresh_expires_in=result.tokens.refresh_expires_in,
        is_new_user=result.is_new_user,
        user=UserSummary.from_user(result.user),
    )


@router.post("/token/refresh", response_model=RefreshTokenResponse)
def refresh_access_token(
    response: Response,
    refresh_token: Optional[str] = Cookie(None),
    auth_service: AuthService = Depends(get_auth_service),
    cookie_service: CookieService = Depends(get_cookie_service),
):
    """리프레시 토큰 쿠키로 새 액세스 토큰 발급 (access_token 쿠키 교체)"""
    if not refresh_token:
        raise AuthenticationError("리프레시 토큰이 없습니다.")

    access_token, expires_in = auth_service.refresh(refresh_token)
    cookie_service.add_access_token_cookie(response, access_token, expires_in)

    return RefreshTokenResponse(expires_in=expires_in)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    refresh_token: Optional[str] = Cookie(None),
    auth_service: AuthService = Depends(get_auth_service),
    cookie_service: CookieService = Depends(get_cookie_service),
):
    """
    로그아웃
    저장되지 않았거나 이미 무효화된 토큰이어도 성공 처리 (중복 요청 안전)
    """
    if refresh_token:
        auth_service.logout(refresh_token)

    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    cookie_service.delete_refresh_token_cookie(response)
    cookie_service.delete_access_token_cookie(response)
    return response
