from app.services.oauth.base import OAuthProvider, OAuthProviderClient
from app.services.oauth.google import GoogleOAuthClient
from app.services.oauth.kakao import KakaoOAuthClient
from app.services.oauth.registry import OAuthProviderRegistry, get_oauth_registry

__all__ = [
    "OAuthProvider",
    "OAuthProviderClient",
    "GoogleOAuthClient",
    "KakaoOAuthClient",
    "OAuthProviderRegistry",
    "get_oauth_registry",
]
