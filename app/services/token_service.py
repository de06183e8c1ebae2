"""
토큰 서비스
액세스 토큰(JWT, 비저장) + 리프레시 토큰(랜덤 문자열, DB 저장) 발급/갱신/무효화
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import TokenExpiredError, TokenNotFoundError
from app.core.security import create_access_token
from app.models.token import RefreshToken, TokenStatus, utcnow
from app.models.user import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
    access_expires_in: int
    refresh_expires_in: int


class TokenService:
    def __init__(self, db: Session):
        self.db = db

    @property
    def refresh_token_lifetime(self) -> timedelta:
        return timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)

    def issue(self, user: User) -> TokenPair:
        """
        로그인 시 토큰 쌍 발급.
        기존 리프레시 토큰은 무효화하지 않는다 (여러 기기 동시 로그인 허용).
        """
        access_token, access_expires_in = create_access_token(user.id)
        refresh_token = self.create_refresh_token(user)

        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token.token,
            access_expires_in=access_expires_in,
            refresh_expires_in=int(self.refresh_token_lifetime.total_seconds()),
        )

    def create_refresh_token(self, user: User) -> RefreshToken:
        now = utcnow()
        token = RefreshToken(
            user_id=user.id,
            status=TokenStatus.ACTIVE,
            token=secrets.token_urlsafe(48),
            created_at=now,
            expired_at=now + self.refresh_token_lifetime,
            is_revoked=False,
        )
        self.db.add(token)
        self.db.flush()

        logger.info(f"새 리프레시 토큰 생성: userId={user.id}")
        return token

    def find_refresh_token(self, refresh_token: str) -> Optional[RefreshToken]:
        return self.db.execute(
            select(RefreshToken).where(RefreshToken.token == refresh_token)
        ).scalars().first()

    def refresh_access_token(self, refresh_token: str) -> Tuple[str, int]:
        """
        리프레시 토큰을 검증하고 새 액세스 토큰을 발급합니다.
        리프레시 토큰 자체는 교체하지 않습니다.

        Raises:
            TokenNotFoundError: 저장된 토큰이 없는 경우
            TokenExpiredError: 무효화되었거나 만료된 경우
        """
        token = self.find_refresh_token(refresh_token)
        if token is None:
            raise TokenNotFoundError()

        if not token.is_usable():
            logger.info(f"만료/무효화된 리프레시 토큰 사용 시도: userId={token.user_id}")
            raise TokenExpiredError()

        access_token, expires_in = create_access_token(token.user_id)
        logger.info(f"액세스 토큰 갱신 완료: userId={token.user_id}")
        return access_token, expires_in

    def logout(self, refresh_token: str) -> None:
        """리프레시 토큰 무효화. 없는 토큰이나 이미 무효화된 토큰은 그대로 성공 처리."""
        token = self.find_refresh_token(refresh_token)
        if token is None:
            logger.info("로그아웃 요청: 저장되지 않은 리프레시 토큰")
            return

        if not token.is_revoked:
            token.revoke()
            self.db.commit()

        logger.info(f"리프레시 토큰 무효화 완료: userId={token.user_id}")
