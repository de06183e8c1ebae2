"""
인증 쿠키 설정/삭제
모든 토큰 쿠키는 Secure, HttpOnly, SameSite=None
"""

import logging
from typing import Optional

from fastapi import Response

from app.core.config import settings

logger = logging.getLogger(__name__)

ACCESS_TOKEN_COOKIE = "access_token"
REFRESH_TOKEN_COOKIE = "refresh_token"


class CookieService:
    def __init__(self, domain: Optional[str] = None, secure: Optional[bool] = None):
        # 빈 문자열이면 Domain 속성을 생략 (host-only 쿠키)
        self.domain = (settings.COOKIE_DOMAIN if domain is None else domain) or None
        self.secure = settings.COOKIE_SECURE if secure is None else secure

    def _set(self, response: Response, key: str, value: str, max_age: int) -> None:
        response.set_cookie(
            key=key,
            value=value,
            max_age=max_age,
            path="/",
            domain=self.domain,
            secure=self.secure,
            httponly=True,
            samesite="none",
        )

    def add_access_token_cookie(self, response: Response, access_token: str, expires_in: int) -> None:
        self._set(response, ACCESS_TOKEN_COOKIE, access_token, expires_in)

    def add_refresh_token_cookie(self, response: Response, refresh_token: str, expires_in: int) -> None:
        self._set(response, REFRESH_TOKEN_COOKIE, refresh_token, expires_in)

    def delete_access_token_cookie(self, response: Response) -> None:
        self._set(response, ACCESS_TOKEN_COOKIE, "", 0)

    def delete_refresh_token_cookie(self, response: Response) -> None:
        self._set(response, REFRESH_TOKEN_COOKIE, "", 0)


def get_cookie_service() -> CookieService:
    return CookieService()
