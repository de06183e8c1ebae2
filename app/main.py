from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.api.v1 import api_router
from app.core.config import settings
from app.core.exceptions import AppException, InvalidParameterError, InternalError
from app.db.database import check_connection
import logging
import time
import uuid

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json"
)

# CORS 설정
cors_origins = settings.cors_origins
logger.info(f"CORS allowed origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,  # 쿠키 인증을 위해 필요
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
    max_age=3600,  # preflight 요청 캐시 시간 (1시간)
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """요청 단위 로그 (request id, 처리 시간)"""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]
    started = time.perf_counter()

    response = await call_next(request)

    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        f"[{request_id}] {request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)"
    )
    response.headers["X-Request-ID"] = request_id
    return response


def _error_response(exc: AppException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": exc.code, "detail": exc.message},
    )


@app.exception_handler(AppException)
async def handle_app_exception(request: Request, exc: AppException):
    if exc.status_code >= 500:
        logger.error(f"Business exception occurred: {exc.code} {exc.message}", exc_info=exc)
    else:
        logger.warning(f"Business exception occurred: {exc.code} {exc.message}")
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    message = ", ".join(
        f"{'.'.join(str(loc) for loc in error['loc'][1:])}: {error['msg']}" for error in exc.errors()
    )
    logger.warning(f"Validation exception occurred: {message}")
    return _error_response(InvalidParameterError(message or None))


@app.exception_handler(Exception)
async def handle_unexpected_exception(request: Request, exc: Exception):
    # 내부 정보는 로그에만 남기고 클라이언트에는 일반 메시지만 반환
    logger.exception(f"Unhandled exception occurred: {request.method} {request.url.path}")
    return _error_response(InternalError())


# API 라우터 등록
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/")
async def root():
    return {
        "message": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "docs": "/docs"
    }


@app.get("/health")
def health_check():
    if not check_connection():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "database": "unavailable"},
        )
    return {"status": "healthy", "database": "ok"}
