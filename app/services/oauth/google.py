"""
Google OAuth 클라이언트
"""

from typing import Optional

import httpx

from app.core.config import Settings
from app.core.exceptions import OAuthExchangeError, OAuthProfileFetchError
from app.schemas.auth import OAuthUserInfo
from app.services.oauth.base import OAuthProvider, request_json, extract_access_token


class GoogleOAuthClient:
    provider = OAuthProvider.GOOGLE

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.client_id = settings.GOOGLE_CLIENT_ID
        self.client_secret = settings.GOOGLE_CLIENT_SECRET
        self.redirect_uri = settings.GOOGLE_REDIRECT_URI
        self.authorization_uri = settings.GOOGLE_AUTHORIZATION_URI
        self.token_uri = settings.GOOGLE_TOKEN_URI
        self.userinfo_uri = settings.GOOGLE_USERINFO_URI
        self.timeout = settings.OAUTH_HTTP_TIMEOUT_SECONDS
        self._transport = transport

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=self.timeout)

    def get_login_url(self, redirect_uri: Optional[str] = None) -> str:
        url = httpx.URL(
            self.authorization_uri,
            params={
                "client_id": self.client_id,
                "redirect_uri": redirect_uri or self.redirect_uri,
                "response_type": "code",
                "scope": "openid email profile",
            },
        )
        return str(url)

    async def request_access_token(self, authorization_code: str, redirect_uri: Optional[str] = None) -> str:
        async with self._http_client() as client:
            token_data = await request_json(
                client,
                "POST",
                self.token_uri,
                provider=self.provider,
                error_cls=OAuthExchangeError,
                data={
                    "grant_type": "authorization_code",
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "redirect_uri": redirect_uri or self.redirect_uri,
                    "code": authorization_code,
                },
                headers={"Accept": "application/json"},
            )

        return extract_access_token(token_data, self.provider, OAuthExchangeError)

    async def request_user_info(self, access_token: str) -> OAuthUserInfo:
        async with self._http_client() as client:
            payload = await request_json(
                client,
                "GET",
                self.userinfo_uri,
                provider=self.provider,
                error_cls=OAuthProfileFetchError,
                headers={"Authorization": f"Bearer {access_token}"},
            )

        # OpenID Connect userinfo 는 sub 에 고유 ID를 담는다
        google_id = payload.get("sub") or payload.get("id")
        if not google_id:
            raise OAuthProfileFetchError(self.provider.value, "missing sub")

        return OAuthUserInfo(
            provider_id=str(google_id),
            provider=self.provider.value,
            email=payload.get("email"),
            nickname=payload.get("name"),
            profile_image_url=payload.get("picture"),
        )
