"""
기록(Moment) 서비스
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.core.exceptions import ForbiddenError, MomentNotFoundError
from app.models.moment import Moment
from app.models.user import User
from app.schemas.moment import MomentCreateRequest
from app.services.view_count_service import ViewCountService

logger = logging.getLogger(__name__)


class MomentService:
    def __init__(self, db: Session, view_count_service: Optional[ViewCountService] = None):
        self.db = db
        self.view_count_service = view_count_service or ViewCountService(db)

    def create_moment(self, user: User, request: MomentCreateRequest) -> Moment:
        moment = Moment(
            user_id=user.id,
            place_id=request.place_id,
            place_name=request.place_name,
            title=request.title,
            content=request.content,
            is_public=request.is_public,
            view_count=0,
        )
        self.db.add(moment)
        self.db.commit()
        self.db.refresh(moment)

        logger.info(f"[기록 생성] userId={user.id}, momentId={moment.id}")
        return moment

    def get_moment(self, moment_id: int) -> Moment:
        moment = self.db.get(Moment, moment_id)
        if moment is None:
            raise MomentNotFoundError()
        return moment

    def view_moment(self, moment_id: int, viewer_id: Optional[int] = None) -> Moment:
        """
        기록 상세 조회. 조회할 때마다 조회수가 증가한다 (작성자 본인 조회 포함, 중복 방지 없음).
        조회 도중 기록이 삭제되면 이번 조회수는 버리고 이미 읽은 기록을 그대로 반환한다.
        """
        moment = self.get_moment(moment_id)

        if not moment.is_public and moment.user_id != viewer_id:
            raise ForbiddenError("비공개 기록입니다.")

        self.view_count_service.increment_view_count(moment_id)

        # 증가된 조회수를 다시 읽는다
        reloaded = self.db.get(Moment, moment_id, populate_existing=True)
        if reloaded is None:
            logger.info(f"조회 중 삭제된 기록: momentId={moment_id}")
            return moment
        return reloaded
