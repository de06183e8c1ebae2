"""
RefreshToken 모델 - 로그인 세션별 리프레시 토큰
만료/무효화된 토큰도 행으로 남겨둔다 (정리는 외부 작업 담당)
"""

import enum
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey, Text, Enum
from sqlalchemy.orm import relationship
from app.db.database import Base


def utcnow() -> datetime:
    """DB에 저장하는 시각은 naive UTC"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TokenStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    REVOKED = "REVOKED"


class RefreshToken(Base):
    __tablename__ = "refresh_token"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    status = Column(Enum(TokenStatus, native_enum=False, length=10), nullable=False, default=TokenStatus.ACTIVE)
    token = Column(Text, nullable=False, index=True)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    expired_at = Column(DateTime, nullable=False)
    is_revoked = Column(Boolean, nullable=False, default=False)

    # 관계
    user = relationship("User", back_populates="refresh_tokens")

    def is_usable(self, now: Optional[datetime] = None) -> bool:
        """무효화되지 않았고 만료 시각이 지나지 않았을 때만 사용 가능"""
        now = now or utcnow()
        return not self.is_revoked and now <= self.expired_at

    def revoke(self):
        self.is_revoked = True
        self.status = TokenStatus.REVOKED

    def __repr__(self):
        return f"<RefreshToken(id={self.id}, user_id={self.user_id}, revoked={self.is_revoked})>"
