"""
사용자 API
내 정보 조회, 최초 프로필 등록, 프로필 수정, 약관 동의
"""

from fastapi import APIRouter, Depends, status
import logging

from app.api.dependencies import get_current_user, get_user_service
from app.models.user import User
from app.schemas.user import (
    AgreementRequest,
    MyProfileResponse,
    UserProfileResponse,
    UserProfileUpdateRequest,
    UserRegisterRequest,
)
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me", response_model=MyProfileResponse)
def get_my_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.get("/{user_id}", response_model=UserProfileResponse)
def get_user_profile(user_id: int, user_service: UserService = Depends(get_user_service)):
    return user_service.get_user(user_id)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserProfileResponse)
def register_user(
    request: UserRegisterRequest,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    """최초 로그인 후 닉네임/프로필 등록 (닉네임 필수)"""
    user = user_service.update_profile(
        current_user.id,
        username=request.nickname,
        image_url=request.profile_image,
        introduction=request.introduction,
    )
    logger.info(f"[프로필 등록] userId={user.id}")
    return user


@router.patch("", response_model=UserProfileResponse)
def update_user_profile(
    request: UserProfileUpdateRequest,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    """
    프로필 수정
    닉네임을 바꾸면 중복 검사 후 반영 (임시 닉네임을 벗어나면 프로필 설정 완료)
    """
    user = user_service.update_profile(
        current_user.id,
        username=request.nickname,
        image_url=request.profile_image,
        introduction=request.introduction,
    )
    logger.info(f"[프로필 수정] userId={user.id}")
    return user


@router.post("/agreement", status_code=status.HTTP_201_CREATED, response_model=MyProfileResponse)
def save_agreement(
    request: AgreementRequest,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    return user_service.agree_to_terms(
        current_user.id,
        request.privacy_agreed,
        request.location_agreed,
    )
