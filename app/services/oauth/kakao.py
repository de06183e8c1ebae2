"""
Kakao OAuth 클라이언트
"""

import json
import logging
from typing import Optional

import httpx

from app.core.config import Settings
from app.core.exceptions import OAuthExchangeError, OAuthProfileFetchError
from app.schemas.auth import OAuthUserInfo
from app.services.oauth.base import OAuthProvider, request_json, extract_access_token

logger = logging.getLogger(__name__)


class KakaoOAuthClient:
    provider = OAuthProvider.KAKAO

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.client_id = settings.KAKAO_CLIENT_ID
        self.client_secret = settings.KAKAO_CLIENT_SECRET
        self.redirect_uri = settings.KAKAO_REDIRECT_URI
        self.authorization_uri = settings.KAKAO_AUTHORIZATION_URI
        self.token_uri = settings.KAKAO_TOKEN_URI
        self.api_url = settings.KAKAO_API_URL.rstrip("/")
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
            },
        )
        return str(url)

    async def request_access_token(self, authorization_code: str, redirect_uri: Optional[str] = None) -> str:
        data = {
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "redirect_uri": redirect_uri or self.redirect_uri,
            "code": authorization_code,
        }
        # client secret 은 카카오 콘솔에서 활성화한 경우에만 필요
        if self.client_secret:
            data["client_secret"] = self.client_secret

        async with self._http_client() as client:
            token_data = await request_json(
                client,
                "POST",
                self.token_uri,
                provider=self.provider,
                error_cls=OAuthExchangeError,
                data=data,
                headers={"Accept": "application/json"},
            )

        return extract_access_token(token_data, self.provider, OAuthExchangeError)

    async def request_user_info(self, access_token: str) -> OAuthUserInfo:
        async with self._http_client() as client:
            payload = await request_json(
                client,
                "POST",
                f"{self.api_url}/v2/user/me",
                provider=self.provider,
                error_cls=OAuthProfileFetchError,
                headers={"Authorization": f"Bearer {access_token}"},
                data={"property_keys": json.dumps(["kakao_account.email", "kakao_account.profile"])},
            )

        kakao_id = payload.get("id")
        if kakao_id is None:
            raise OAuthProfileFetchError(self.provider.value, "missing id")

        account = payload.get("kakao_account") or {}
        profile = account.get("profile") or {}

        return OAuthUserInfo(
            provider_id=str(kakao_id),
            provider=self.provider.value,
            email=account.get("email"),
            nickname=profile.get("nickname"),
            profile_image_url=profile.get("profile_image_url"),
        )
