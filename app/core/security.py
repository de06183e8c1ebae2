"""
JWT 액세스 토큰 생성/검증
액세스 토큰은 DB에 저장하지 않는 self-contained 토큰이다.
"""

from datetime import datetime, timedelta, timezone
from typing import Tuple

from jose import jwt, JWTError

from app.core.config import settings
from app.core.exceptions import AuthenticationError


def create_access_token(user_id: int) -> Tuple[str, int]:
    """
    사용자 ID로 액세스 토큰을 생성합니다.

    Returns:
        (JWT 문자열, 만료까지 남은 초)
    """
    expires_in = settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
    now = datetime.now(timezone.utc)

    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + timedelta(seconds=expires_in),
    }

    token = jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return token, expires_in


def decode_access_token(token: str) -> int:
    """액세스 토큰을 검증하고 사용자 ID를 반환합니다."""
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError as e:
        raise AuthenticationError() from e

    subject = payload.get("sub")
    if subject is None:
        raise AuthenticationError()

    try:
        return int(subject)
    except ValueError as e:
        raise AuthenticationError("사용자 ID가 올바르지 않습니다.") from e
