from pydantic import Field
from typing import Optional

from app.schemas.base import CamelModel


class OAuthUserInfo(CamelModel):
    """제공자별 프로필 응답을 정규화한 사용자 정보"""
    provider_id: str = Field(..., description="제공자 측 사용자 ID")
    provider: str = Field(..., description="OAuth 제공자 (kakao, google)")
    email: Optional[str] = None
    nickname: Optional[str] = None
    profile_image_url: Optional[str] = None


class LoginURLResponse(CamelModel):
    """소셜 로그인 URL 응답"""
    login_url: str = Field(..., description="OAuth 인증 URL")


class TokenRequest(CamelModel):
    """인가 코드로 토큰 발급 요청"""
    authorization_code: str = Field(..., min_length=1, description="OAuth 제공자에서 받은 authorization code")
    provider: str = Field(default="kakao", description="OAuth 제공자")
    redirect_uri: Optional[str] = Field(None, description="로그인 URL 생성 시 사용한 redirect URI")


class UserSummary(CamelModel):
    """로그인 응답에 포함되는 사용자 요약 정보"""
    id: int
    username: str
    profile_image_url: Optional[str] = None
    provider: str
    is_privacy_agreed: bool
    is_location_agreed: bool
    is_profile_completed: bool

    @classmethod
    def from_user(cls, user) -> "UserSummary":
        return cls(
            id=user.id,
            username=user.username,
            profile_image_url=user.image_url,
            provider=user.provider,
            is_privacy_agreed=user.is_privacy_agreed,
            is_location_agreed=user.is_location_agreed,
            is_profile_completed=user.is_profile_completed,
        )


class TokenResponse(CamelModel):
    """토큰 발급 응답 (토큰 값은 쿠키로만 전달)"""
    token_type: str = "Bearer"
    expires_in: int = Field(..., description="액세스 토큰 만료까지 남은 초")
    refresh_expires_in: int = Field(..., description="리프레시 토큰 만료까지 남은 초")
    is_new_user: bool
    user: UserSummary


class RefreshTokenResponse(CamelModel):
    """액세스 토큰 갱신 응답"""
    token_type: str = "Bearer"
    expires_in: int
