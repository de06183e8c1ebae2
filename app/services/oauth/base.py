"""
OAuth 제공자 공통 정의

제공자 구현체는 상속 없이 OAuthProviderClient 프로토콜만 만족하면
레지스트리에 등록할 수 있다.
"""

import enum
import logging
from typing import Any, Dict, Optional, Protocol, Type

import httpx

from app.core.exceptions import OAuthUpstreamError, UnsupportedProviderError
from app.schemas.auth import OAuthUserInfo

logger = logging.getLogger(__name__)


class OAuthProvider(str, enum.Enum):
    KAKAO = "kakao"
    GOOGLE = "google"

    @classmethod
    def from_string(cls, name: Optional[str]) -> "OAuthProvider":
        """대소문자 구분 없이 제공자 이름을 찾는다"""
        normalized = (name or "").strip().lower()
        for provider in cls:
            if provider.value == normalized:
                return provider
        raise UnsupportedProviderError(name)


class OAuthProviderClient(Protocol):
    provider: OAuthProvider

    def get_login_url(self, redirect_uri: Optional[str] = None) -> str:
        ...

    async def request_access_token(self, authorization_code: str, redirect_uri: Optional[str] = None) -> str:
        ...

    async def request_user_info(self, access_token: str) -> OAuthUserInfo:
        ...


async def request_json(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    provider: OAuthProvider,
    error_cls: Type[OAuthUpstreamError],
    **kwargs: Any,
) -> Dict[str, Any]:
    """
    제공자 API를 호출하고 JSON 객체를 반환합니다.
    타임아웃, 네트워크 오류, 200 이외의 응답, JSON 파싱 실패는 모두 error_cls 로 변환합니다.
    """
    try:
        response = await client.request(method, url, **kwargs)
    except httpx.TimeoutException as e:
        logger.warning(f"[{provider.value}] {method} {url} 타임아웃")
        raise error_cls(provider.value, "timeout") from e
    except httpx.HTTPError as e:
        logger.warning(f"[{provider.value}] {method} {url} 네트워크 오류: {e}")
        raise error_cls(provider.value, f"network error: {e}") from e

    if response.status_code != 200:
        logger.warning(
            f"[{provider.value}] {method} {url} 실패: status={response.status_code} body={response.text[:200]}"
        )
        raise error_cls(provider.value, f"status {response.status_code}")

    try:
        data = response.json()
    except ValueError as e:
        raise error_cls(provider.value, "malformed response body") from e

    if not isinstance(data, dict):
        raise error_cls(provider.value, "unexpected response body")

    return data


def extract_access_token(data: Dict[str, Any], provider: OAuthProvider, error_cls: Type[OAuthUpstreamError]) -> str:
    if "error" in data:
        logger.warning(f"[{provider.value}] OAuth error: {data.get('error')} {data.get('error_description', '')}")
        raise error_cls(provider.value, str(data.get("error")))

    access_token = data.get("access_token")
    if not access_token or not isinstance(access_token, str):
        raise error_cls(provider.value, "missing access_token")

    return access_token
