from datetime import datetime
from pydantic import Field
from typing import Optional

from app.schemas.base import CamelModel


class AgreementRequest(CamelModel):
    privacy_agreed: bool
    location_agreed: bool


class UserProfileUpdateRequest(CamelModel):
    nickname: Optional[str] = Field(None, min_length=1, max_length=10)
    profile_image: Optional[str] = Field(None, max_length=255)
    introduction: Optional[str] = Field(None, max_length=70)


class UserProfileResponse(CamelModel):
    id: int
    username: str
    image_url: Optional[str] = None
    introduction: Optional[str] = None


class MyProfileResponse(UserProfileResponse):
    provider: str
    is_privacy_agreed: bool
    is_location_agreed: bool
    privacy_agreed_at: Optional[datetime] = None
    is_profile_completed: bool


class UserRegisterRequest(UserProfileUpdateRequest):
    """최초 프로필 설정. 닉네임 필수."""
    nickname: str = Field(..., min_length=1, max_length=10)
