import pytest
from urllib.parse import urlparse, parse_qs

from app.core.config import get_settings
from app.core.exceptions import UnsupportedProviderError
from app.services.oauth import (
    GoogleOAuthClient,
    KakaoOAuthClient,
    OAuthProvider,
    OAuthProviderRegistry,
    get_oauth_registry,
)


class TestOAuthProvider:
    """제공자 이름 매칭 테스트"""

    @pytest.mark.parametrize("name", ["kakao", "KAKAO", "Kakao", " kakao "])
    def test_case_insensitive_match(self, name):
        assert OAuthProvider.from_string(name) is OAuthProvider.KAKAO

    @pytest.mark.parametrize("name", ["naver", "", None, "kakao2"])
    def test_unknown_provider_raises(self, name):
        with pytest.raises(UnsupportedProviderError) as exc_info:
            OAuthProvider.from_string(name)

        assert exc_info.value.provider == name
        assert exc_info.value.status_code == 400


class TestOAuthProviderRegistry:
    """레지스트리 조회 테스트"""

    @pytest.fixture
    def default_registry(self):
        settings = get_settings()
        return OAuthProviderRegistry([KakaoOAuthClient(settings), GoogleOAuthClient(settings)])

    @pytest.mark.parametrize("name", ["kakao", "KaKaO", "google", "GOOGLE"])
    def test_resolve_supported_providers(self, default_registry, name):
        handle = default_registry.resolve(name)

        assert handle.provider.value == name.lower()
        assert callable(handle.get_login_url)
        assert callable(handle.request_access_token)
        assert callable(handle.request_user_info)

    def test_resolve_unknown_provider(self, default_registry):
        with pytest.raises(UnsupportedProviderError) as exc_info:
            default_registry.resolve("facebook")

        assert "facebook" in exc_info.value.message

    def test_known_but_unregistered_provider(self):
        registry = OAuthProviderRegistry([KakaoOAuthClient(get_settings())])

        with pytest.raises(UnsupportedProviderError):
            registry.resolve("google")

    def test_register_adds_provider(self, kakao_client):
        registry = OAuthProviderRegistry()
        assert registry.supported_providers() == []

        registry.register(kakao_client)

        assert registry.resolve("KAKAO") is kakao_client
        assert registry.supported_providers() == [OAuthProvider.KAKAO]

    def test_default_registry_contains_all_providers(self):
        assert set(get_oauth_registry().supported_providers()) == {OAuthProvider.KAKAO, OAuthProvider.GOOGLE}


class TestLoginUrl:
    """로그인 URL 생성 테스트"""

    def test_kakao_login_url_uses_default_redirect(self):
        settings = get_settings()
        url = urlparse(KakaoOAuthClient(settings).get_login_url())
        query = parse_qs(url.query)

        assert url.netloc == "kauth.kakao.com"
        assert query["client_id"] == ["kakao-client-id"]
        assert query["redirect_uri"] == [settings.KAKAO_REDIRECT_URI]
        assert query["response_type"] == ["code"]

    def test_kakao_login_url_redirect_override(self):
        url = KakaoOAuthClient(get_settings()).get_login_url("https://app.example.com/cb")
        query = parse_qs(urlparse(url).query)

        assert query["redirect_uri"] == ["https://app.example.com/cb"]

    def test_google_login_url_has_scope(self):
        url = urlparse(GoogleOAuthClient(get_settings()).get_login_url())
        query = parse_qs(url.query)

        assert url.netloc == "accounts.google.com"
        assert query["client_id"] == ["google-client-id"]
        assert query["scope"] == ["openid email profile"]
