"""
OAuth 제공자 레지스트리
제공자 이름 -> 로그인 URL 생성과 API 호출을 담당하는 클라이언트
"""

from functools import lru_cache
import logging
from typing import Dict, Iterable, List

from app.core.config import get_settings
from app.core.exceptions import UnsupportedProviderError
from app.services.oauth.base import OAuthProvider, OAuthProviderClient
from app.services.oauth.google import GoogleOAuthClient
from app.services.oauth.kakao import KakaoOAuthClient

logger = logging.getLogger(__name__)


class OAuthProviderRegistry:
    def __init__(self, clients: Iterable[OAuthProviderClient] = ()):
        self._clients: Dict[OAuthProvider, OAuthProviderClient] = {}
        for client in clients:
            self.register(client)

    def register(self, client: OAuthProviderClient) -> None:
        if client.provider in self._clients:
            logger.info(f"OAuth 제공자 클라이언트 교체: {client.provider.value}")
        self._clients[client.provider] = client

    def resolve(self, name: str) -> OAuthProviderClient:
        provider = OAuthProvider.from_string(name)
        client = self._clients.get(provider)
        if client is None:
            raise UnsupportedProviderError(name)
        return client

    def supported_providers(self) -> List[OAuthProvider]:
        return list(self._clients)


@lru_cache()
def get_oauth_registry() -> OAuthProviderRegistry:
    """기본 레지스트리 (FastAPI Depends 에서 사용, 테스트에서 override)"""
    settings = get_settings()
    return OAuthProviderRegistry([
        KakaoOAuthClient(settings),
        GoogleOAuthClient(settings),
    ])
