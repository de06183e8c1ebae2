"""
인증 서비스

로그인 흐름:
1. 제공자 이름으로 OAuth 클라이언트 조회
2. authorization code -> 제공자 access token 교환
3. 제공자 access token -> 사용자 프로필 조회
4. (provider, providerId) 로 회원 조회/생성
5. 액세스 토큰 + 리프레시 토큰 발급
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from app.models.user import User
from app.schemas.auth import OAuthUserInfo
from app.services.oauth.registry import OAuthProviderRegistry
from app.services.token_service import TokenPair, TokenService
from app.services.user_service import UserService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    tokens: TokenPair
    user: User
    is_new_user: bool


class AuthService:
    def __init__(self, db: Session, registry: OAuthProviderRegistry):
        self.db = db
        self.registry = registry
        self.user_service = UserService(db)
        self.token_service = TokenService(db)

    def get_login_url(self, provider: str, redirect_uri: Optional[str] = None) -> str:
        client = self.registry.resolve(provider)
        return client.get_login_url(redirect_uri)

    async def login(self, provider: str, authorization_code: str, redirect_uri: Optional[str] = None) -> LoginResult:
        client = self.registry.resolve(provider)

        oauth_access_token = await client.request_access_token(authorization_code, redirect_uri)
        user_info = await client.request_user_info(oauth_access_token)
        logger.info(f"[{client.provider.value}] 사용자 정보 획득: providerId={user_info.provider_id}")

        # DB 작업은 동기 세션이므로 스레드풀에서 실행
        return await run_in_threadpool(self.complete_login, user_info)

    def complete_login(self, user_info: OAuthUserInfo) -> LoginResult:
        user, is_new_user = self.user_service.resolve(user_info)
        tokens = self.token_service.issue(user)
        self.db.commit()

        logger.info(f"로그인 완료: userId={user.id}, newUser={is_new_user}")
        return LoginResult(tokens=tokens, user=user, is_new_user=is_new_user)

    def refresh(self, refresh_token: str) -> Tuple[str, int]:
        return self.token_service.refresh_access_token(refresh_token)

    def logout(self, refresh_token: str) -> None:
        self.token_service.logout(refresh_token)
