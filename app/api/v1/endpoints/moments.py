"""
기록(Moment) API
기록 생성, 상세 조회 (상세 조회 시 조회수 증가)
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Optional

from app.api.dependencies import get_current_user, get_optional_user_id
from app.db.database import get_db
from app.models.user import User
from app.schemas.moment import MomentCreateRequest, MomentResponse
from app.services.moment_service import MomentService

router = APIRouter()


def get_moment_service(db: Session = Depends(get_db)) -> MomentService:
    return MomentService(db)


@router.post("", response_model=MomentResponse, status_code=status.HTTP_201_CREATED)
def create_moment(
    request: MomentCreateRequest,
    current_user: User = Depends(get_current_user),
    moment_service: MomentService = Depends(get_moment_service),
):
    return moment_service.create_moment(current_user, request)


@router.get("/{moment_id}", response_model=MomentResponse)
def get_moment_detail(
    moment_id: int,
    viewer_id: Optional[int] = Depends(get_optional_user_id),
    moment_service: MomentService = Depends(get_moment_service),
):
    return moment_service.view_moment(moment_id, viewer_id)
