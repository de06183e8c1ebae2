"""
데이터베이스 모델
"""

from app.models.user import User
from app.models.token import RefreshToken, TokenStatus
from app.models.moment import Moment

__all__ = ["User", "RefreshToken", "TokenStatus", "Moment"]
