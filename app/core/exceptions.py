"""
애플리케이션 예외 정의

서비스 계층은 아래 예외만 던지고, HTTP 응답으로의 변환은
app.main 의 예외 핸들러가 담당한다.
"""

from typing import Optional

from fastapi import status


class AppException(Exception):
    """모든 비즈니스 예외의 부모 클래스"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"
    message: str = "서버 내부 오류가 발생했습니다."

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InternalError(AppException):
    pass


class InvalidParameterError(AppException):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "INVALID_PARAMETER"
    message = "요청 파라미터가 올바르지 않습니다."


class UnsupportedProviderError(AppException):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "UNSUPPORTED_PROVIDER"

    def __init__(self, provider: Optional[str]):
        self.provider = provider
        super().__init__(f"지원하지 않는 OAuth 제공자입니다: {provider}")


class AuthenticationError(AppException):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"
    message = "인증 정보가 유효하지 않습니다."


class TokenNotFoundError(AuthenticationError):
    code = "TOKEN_NOT_FOUND"
    message = "리프레시 토큰을 찾을 수 없습니다."


class TokenExpiredError(AuthenticationError):
    code = "TOKEN_EXPIRED"
    message = "리프레시 토큰이 만료되었거나 무효화되었습니다."


class ForbiddenError(AppException):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"
    message = "접근 권한이 없습니다."


class NotFoundError(AppException):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    message = "요청한 리소스를 찾을 수 없습니다."


class UserNotFoundError(NotFoundError):
    code = "USER_NOT_FOUND"
    message = "사용자를 찾을 수 없습니다."


class MomentNotFoundError(NotFoundError):
    code = "MOMENT_NOT_FOUND"
    message = "기록을 찾을 수 없습니다."


class DuplicateUsernameError(AppException):
    status_code = status.HTTP_409_CONFLICT
    code = "NICKNAME_DUPLICATE"
    message = "이미 존재하는 닉네임입니다."


class OAuthUpstreamError(AppException):
    """OAuth 제공자 호출 실패. reason 은 로그에만 남기고 응답에는 노출하지 않는다."""

    status_code = status.HTTP_502_BAD_GATEWAY
    action = "요청"

    def __init__(self, provider: str, reason: str):
        self.provider = provider
        self.reason = reason
        super().__init__(f"{provider} 로그인 {self.action}에 실패했습니다.")


class OAuthExchangeError(OAuthUpstreamError):
    code = "OAUTH_EXCHANGE_FAILED"
    action = "토큰 발급"


class OAuthProfileFetchError(OAuthUpstreamError):
    code = "OAUTH_PROFILE_FETCH_FAILED"
    action = "사용자 정보 조회"


class CounterUpdateFailedError(AppException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "COUNTER_UPDATE_FAILED"
    message = "조회수 업데이트에 실패했습니다. 잠시 후 다시 시도해주세요."
