"""
사용자 조회/생성 서비스 테스트
"""

from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import func, select

from app.core.exceptions import DuplicateUsernameError, InvalidParameterError, UserNotFoundError
from app.models.user import User
from app.schemas.auth import OAuthUserInfo
from app.services.user_service import UserService, alphanumeric_suffix, username_candidate


def profile(provider_id: str, provider: str = "kakao", **kwargs) -> OAuthUserInfo:
    return OAuthUserInfo(provider_id=provider_id, provider=provider, **kwargs)


def count_users(db) -> int:
    return db.scalar(select(func.count()).select_from(User))


class TestUsernameCandidates:
    def test_alphanumeric_suffix(self):
        assert alphanumeric_suffix(1) == "a"
        assert alphanumeric_suffix(26) == "z"
        assert alphanumeric_suffix(27) == "aa"
        assert alphanumeric_suffix(28) == "ab"

    def test_candidate_never_exceeds_max_length(self):
        assert username_candidate("user42", 0) == "user42"
        assert username_candidate("user42", 1) == "user42a"
        assert all(len(username_candidate("user42", n)) <= 10 for n in range(1, 20000, 97))


class TestResolve:
    """(provider, providerId) 기준 회원 조회/생성"""

    def test_new_user_is_created(self, db_session):
        user, is_new = UserService(db_session).resolve(
            profile("42", nickname="Sam", profile_image_url="https://img/sam.png")
        )
        db_session.commit()

        assert is_new is True
        assert user.id is not None
        assert user.username == "user42"
        assert user.is_profile_completed is False
        assert user.is_privacy_agreed is False
        assert user.is_location_agreed is False
        assert user.image_url == "https://img/sam.png"
        assert count_users(db_session) == 1

    def test_existing_user_is_returned_unchanged(self, db_session):
        service = UserService(db_session)
        first, _ = service.resolve(profile("42"))
        first.update_profile(username="sam")
        first.agree_to_terms(True, True)
        db_session.commit()

        second, is_new = service.resolve(profile("42", nickname="Other", email="other@example.com"))

        assert is_new is False
        assert second.id == first.id
        assert second.username == "sam"
        assert second.is_privacy_agreed is True
        assert count_users(db_session) == 1

    def test_same_provider_id_on_other_provider_is_new_user(self, db_session):
        service = UserService(db_session)
        kakao_user, _ = service.resolve(profile("42", provider="kakao"))
        google_user, is_new = service.resolve(profile("42", provider="google"))

        assert is_new is True
        assert kakao_user.id != google_user.id
        assert google_user.username == "user42a"

    def test_email_is_not_used_for_matching(self, db_session):
        service = UserService(db_session)
        service.resolve(profile("1", email="same@example.com"))
        _, is_new = service.resolve(profile("2", email="same@example.com"))

        assert is_new is True
        assert count_users(db_session) == 2

    def test_username_collision_gets_suffix(self, db_session):
        service = UserService(db_session)
        names = [service.resolve(profile(pid))[0].username for pid in ("4200", "4201", "4202")]

        assert names == ["user42", "user42a", "user42b"]

    def test_missing_provider_id_is_rejected(self, db_session):
        with pytest.raises(InvalidParameterError):
            UserService(db_session).resolve(profile(""))

    def test_integrity_error_on_username_retries_next_candidate(self, db_session, monkeypatch):
        """중복 검사와 INSERT 사이에 다른 요청이 닉네임을 선점한 상황"""
        service = UserService(db_session)
        taken, _ = service.resolve(profile("4200"))
        db_session.commit()

        # 중복 검사를 통과시키면 INSERT 시점에 unique 제약 위반이 발생
        monkeypatch.setattr(service, "_username_exists", lambda username: False)
        user, is_new = service.resolve(profile("4299"))
        db_session.commit()

        assert is_new is True
        assert user.username != taken.username
        assert user.username == "user42a"

    def test_concurrent_first_login_for_same_account(self, db_session, monkeypatch):
        """다른 요청이 같은 계정을 먼저 저장했다면 그 사용자를 반환"""
        service = UserService(db_session)
        existing, _ = service.resolve(profile("77"))
        db_session.commit()

        # 첫 조회에서는 아직 저장되지 않은 것처럼 보이게 한다
        real_find = service.find_by_provider
        calls = []

        def racing_find(provider, provider_id):
            calls.append(provider_id)
            if len(calls) == 1:
                return None
            return real_find(provider, provider_id)

        monkeypatch.setattr(service, "find_by_provider", racing_find)
        monkeypatch.setattr(service, "_username_exists", lambda username: False)

        user, is_new = service.resolve(profile("77"))

        assert is_new is False
        assert user.id == existing.id
        assert count_users(db_session) == 1

    def test_concurrent_creation_produces_unique_usernames(self, session_factory):
        """같은 기본 닉네임을 가진 사용자를 동시에 생성해도 닉네임이 겹치지 않는다"""

        def create(provider_id: str) -> str:
            db = session_factory()
            try:
                user, _ = UserService(db).resolve(profile(provider_id))
                db.commit()
                return user.username
            finally:
                db.close()

        provider_ids = [f"42{i:03d}" for i in range(30)]
        with ThreadPoolExecutor(max_workers=8) as executor:
            usernames = list(executor.map(create, provider_ids))

        assert len(set(usernames)) == len(provider_ids)
        assert all(name.startswith("user42") for name in usernames)


class TestProfileOperations:
    def test_update_profile_completes_profile(self, db_session):
        service = UserService(db_session)
        user, _ = service.resolve(profile("42"))
        db_session.commit()

        updated = service.update_profile(user.id, username="sammy", introduction="hello")

        assert updated.username == "sammy"
        assert updated.introduction == "hello"
        assert updated.is_profile_completed is True

    def test_update_profile_duplicate_username(self, db_session):
        service = UserService(db_session)
        first, _ = service.resolve(profile("1"))
        second, _ = service.resolve(profile("2"))
        service.update_profile(first.id, username="taken")

        with pytest.raises(DuplicateUsernameError):
            service.update_profile(second.id, username="taken")

    def test_update_profile_keeping_own_username(self, db_session):
        service = UserService(db_session)
        user, _ = service.resolve(profile("1"))
        service.update_profile(user.id, username="mine")

        updated = service.update_profile(user.id, username="mine", image_url="https://img/new.png")

        assert updated.image_url == "https://img/new.png"

    def test_agree_to_terms_sets_timestamp(self, db_session):
        service = UserService(db_session)
        user, _ = service.resolve(profile("1"))

        updated = service.agree_to_terms(user.id, True, False)

        assert updated.is_privacy_agreed is True
        assert updated.is_location_agreed is False
        assert updated.privacy_agreed_at is not None

    def test_get_unknown_user(self, db_session):
        with pytest.raises(UserNotFoundError):
            UserService(db_session).get_user(999)
