"""
사용자 서비스
OAuth 프로필로 회원을 찾거나 생성하고, 프로필/약관 동의를 변경한다.
"""

import logging
from typing import Optional, Tuple

from sqlalchemy import select, exists
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    DuplicateUsernameError,
    InternalError,
    InvalidParameterError,
    UserNotFoundError,
)
from app.models.user import User, PLACEHOLDER_USERNAME_PREFIX, USERNAME_MAX_LENGTH
from app.schemas.auth import OAuthUserInfo

logger = logging.getLogger(__name__)

# 임시 닉네임 기본형은 "user" + providerId 앞 2자리 (최대 6자, 접미사 공간 4자)
USERNAME_BASE_LENGTH = 6
MAX_USERNAME_CONFLICTS = 20


def alphanumeric_suffix(number: int) -> str:
    """1 -> a, 26 -> z, 27 -> aa ..."""
    suffix = ""
    while number > 0:
        number -= 1
        suffix = chr(ord("a") + number % 26) + suffix
        number //= 26
    return suffix


def username_candidate(base: str, attempt: int) -> str:
    """attempt 0 은 기본형 그대로, 이후는 접미사를 붙이고 10자를 넘지 않게 기본형을 줄인다"""
    if attempt == 0:
        return base
    suffix = alphanumeric_suffix(attempt)
    return base[:USERNAME_MAX_LENGTH - len(suffix)] + suffix


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise UserNotFoundError()
        return user

    def find_by_provider(self, provider: str, provider_id: str) -> Optional[User]:
        return self.db.execute(
            select(User).where(User.provider == provider, User.provider_id == provider_id)
        ).scalar_one_or_none()

    def resolve(self, user_info: OAuthUserInfo) -> Tuple[User, bool]:
        """
        (provider, providerId) 로만 회원을 식별합니다.
        이메일/닉네임은 비어 있거나 계정 간 중복될 수 있으므로 사용하지 않습니다.

        Returns:
            (사용자, 신규 가입 여부)
        """
        if not user_info.provider_id:
            raise InvalidParameterError("유효하지 않은 소셜 로그인 정보입니다.")

        existing = self.find_by_provider(user_info.provider, user_info.provider_id)
        if existing is not None:
            return existing, False

        return self._create_user(user_info)

    def _create_user(self, user_info: OAuthUserInfo) -> Tuple[User, bool]:
        base = (PLACEHOLDER_USERNAME_PREFIX + user_info.provider_id[:2])[:USERNAME_BASE_LENGTH]
        attempt = 0

        for _ in range(MAX_USERNAME_CONFLICTS):
            attempt, username = self._next_free_username(base, attempt)
            user = User(
                provider=user_info.provider,
                provider_id=user_info.provider_id,
                username=username,
                image_url=user_info.profile_image_url,
                is_privacy_agreed=False,
                is_location_agreed=False,
            )

            try:
                with self.db.begin_nested():
                    self.db.add(user)
            except IntegrityError:
                # 동시에 같은 계정으로 첫 로그인한 요청이 먼저 저장된 경우
                concurrent = self.find_by_provider(user_info.provider, user_info.provider_id)
                if concurrent is not None:
                    logger.info(f"동시 가입 감지, 기존 사용자 반환: userId={concurrent.id}")
                    return concurrent, False

                logger.info(f"닉네임 충돌, 다음 후보로 재시도: {username}")
                attempt += 1
                continue

            logger.info(f"신규 사용자 생성: userId={user.id}, provider={user.provider}")
            return user, True

        raise InternalError("임시 닉네임 생성에 실패했습니다.")

    def _next_free_username(self, base: str, attempt: int) -> Tuple[int, str]:
        candidate = username_candidate(base, attempt)
        while self._username_exists(candidate):
            attempt += 1
            candidate = username_candidate(base, attempt)
        return attempt, candidate

    def _username_exists(self, username: str) -> bool:
        return bool(self.db.scalar(select(exists().where(User.username == username))))

    def update_profile(
        self,
        user_id: int,
        username: Optional[str] = None,
        image_url: Optional[str] = None,
        introduction: Optional[str] = None,
    ) -> User:
        user = self.get_user(user_id)

        if username and username != user.username and self._username_exists(username):
            raise DuplicateUsernameError()

        user.update_profile(username, image_url, introduction)
        try:
            self.db.commit()
        except IntegrityError as e:
            # 중복 검사 이후 다른 요청이 같은 닉네임을 선점한 경우
            self.db.rollback()
            raise DuplicateUsernameError() from e

        return user

    def agree_to_terms(self, user_id: int, is_privacy_agreed: bool, is_location_agreed: bool) -> User:
        user = self.get_user(user_id)
        user.agree_to_terms(is_privacy_agreed, is_location_agreed)
        self.db.commit()
        return user
