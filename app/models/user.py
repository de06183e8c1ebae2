"""
User 모델 - OAuth 로그인 사용자 정보
"""

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, Boolean, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.database import Base

# 사용자가 닉네임을 직접 설정하기 전까지 붙는 임시 닉네임 접두사
PLACEHOLDER_USERNAME_PREFIX = "user"
USERNAME_MAX_LENGTH = 10


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("provider", "provider_id", name="uq_users_provider_provider_id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    provider_id = Column(String(64), nullable=False)
    provider = Column(String(10), nullable=False)
    username = Column(String(USERNAME_MAX_LENGTH), unique=True, nullable=False)
    image_url = Column(String(255), nullable=True)
    introduction = Column(String(70), nullable=True)

    # 약관 동의
    is_privacy_agreed = Column(Boolean, nullable=False, default=False)
    is_location_agreed = Column(Boolean, nullable=False, default=False)
    privacy_agreed_at = Column(DateTime, nullable=True)

    # 타임스탬프
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # 관계
    refresh_tokens = relationship("RefreshToken", back_populates="user", cascade="all, delete-orphan")
    moments = relationship("Moment", back_populates="user", cascade="all, delete-orphan")

    @property
    def is_profile_completed(self) -> bool:
        """임시 닉네임(user...)을 벗어났으면 프로필 설정 완료로 본다"""
        return not self.username.startswith(PLACEHOLDER_USERNAME_PREFIX)

    def update_profile(self, username=None, image_url=None, introduction=None):
        if username:
            self.username = username
        if image_url is not None:
            self.image_url = image_url
        if introduction is not None:
            self.introduction = introduction

    def agree_to_terms(self, is_privacy_agreed: bool, is_location_agreed: bool):
        self.is_privacy_agreed = is_privacy_agreed
        self.is_location_agreed = is_location_agreed

        if is_privacy_agreed:
            self.privacy_agreed_at = datetime.now(timezone.utc).replace(tzinfo=None)

    def __repr__(self):
        return f"<User(id={self.id}, provider={self.provider}, username={self.username})>"
