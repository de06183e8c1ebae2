from fastapi import APIRouter
from app.api.v1.endpoints import auth, users, moments

api_router = APIRouter()

# 엔드포인트 등록
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(moments.router, prefix="/moments", tags=["moments"])
