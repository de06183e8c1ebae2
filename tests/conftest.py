import os

# settings 는 import 시점에 생성되므로 app import 전에 테스트 환경 변수를 지정
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-jwt-signing-0123456789")
os.environ.setdefault("KAKAO_CLIENT_ID", "kakao-client-id")
os.environ.setdefault("GOOGLE_CLIENT_ID", "google-client-id")
os.environ.setdefault("GOOGLE_CLIENT_SECRET", "google-client-secret")

from typing import Dict, Optional

import pytest
from fastapi.testclient import TestClient

from app.core.exceptions import OAuthExchangeError
from app.db.database import Base, create_db_engine, create_session_factory, get_db
from app.main import app
from app.schemas.auth import OAuthUserInfo
from app.services.oauth.base import OAuthProvider
from app.services.oauth.registry import OAuthProviderRegistry, get_oauth_registry


class FakeOAuthClient:
    """authorization code -> 프로필 매핑으로 동작하는 테스트용 제공자 클라이언트"""

    def __init__(self, provider: OAuthProvider, profiles: Optional[Dict[str, OAuthUserInfo]] = None):
        self.provider = provider
        self.profiles = profiles or {}
        self.exchanged_codes = []

    def get_login_url(self, redirect_uri: Optional[str] = None) -> str:
        return f"https://{self.provider.value}.example.com/authorize?redirect_uri={redirect_uri or 'default'}"

    async def request_access_token(self, authorization_code: str, redirect_uri: Optional[str] = None) -> str:
        self.exchanged_codes.append(authorization_code)
        if authorization_code not in self.profiles:
            raise OAuthExchangeError(self.provider.value, "invalid_grant")
        return f"token-{authorization_code}"

    async def request_user_info(self, access_token: str) -> OAuthUserInfo:
        return self.profiles[access_token[len("token-"):]]


@pytest.fixture
def engine(tmp_path):
    """테스트마다 새 SQLite 파일 DB (스레드 간 공유 가능)"""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def kakao_client():
    return FakeOAuthClient(
        OAuthProvider.KAKAO,
        {
            "abc": OAuthUserInfo(
                provider_id="42",
                provider="kakao",
                email="sam@example.com",
                nickname="Sam",
                profile_image_url="https://img.example.com/sam.png",
            ),
        },
    )


@pytest.fixture
def google_client():
    return FakeOAuthClient(
        OAuthProvider.GOOGLE,
        {
            "g-code": OAuthUserInfo(provider_id="1098765", provider="google", nickname="Kim"),
        },
    )


@pytest.fixture
def registry(kakao_client, google_client):
    return OAuthProviderRegistry([kakao_client, google_client])


@pytest.fixture
def client(session_factory, registry):
    def override_get_db():
        db = session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_oauth_registry] = lambda: registry

    # Secure 쿠키가 다시 전송되도록 https 로 요청
    with TestClient(app, base_url="https://testserver") as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    """인가 코드로 로그인 요청을 보내는 헬퍼"""

    def _login(code: str = "abc", provider: str = "kakao"):
        return client.post(
            "/api/v1/auth/tokens",
            json={"authorizationCode": code, "provider": provider},
        )

    return _login
