"""
조회수 증가 서비스

조회수는 애플리케이션에서 읽고-더해서-쓰지 않고 항상
UPDATE moments SET view_count = view_count + 1 한 문장으로만 증가시킨다.
동시에 여러 요청이 들어와도 DB가 원자적으로 처리하므로 유실이 없다.
"""

import logging
import time

from sqlalchemy import select, update, exists
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import CounterUpdateFailedError, MomentNotFoundError
from app.models.moment import Moment

logger = logging.getLogger(__name__)


class ViewCountService:
    def __init__(
        self,
        db: Session,
        max_attempts: int = settings.VIEW_COUNT_MAX_ATTEMPTS,
        retry_delay: float = settings.VIEW_COUNT_RETRY_DELAY_SECONDS,
    ):
        self.db = db
        self.max_attempts = max(1, max_attempts)
        self.retry_delay = retry_delay

    def increment_view_count(self, moment_id: int) -> None:
        """
        조회수를 1 증가시킵니다.
        락 경합이나 일시적인 연결 오류는 고정 간격으로 재시도하고,
        재시도를 모두 소진하면 CounterUpdateFailedError 를 던집니다.

        시도마다 세션의 트랜잭션을 직접 커밋/롤백하므로,
        호출하는 쪽은 미처리 변경사항을 먼저 커밋한 뒤 호출해야 합니다.

        Raises:
            MomentNotFoundError: 기록이 존재하지 않는 경우 (재시도하지 않음)
            CounterUpdateFailedError: 재시도 소진
        """
        for attempt in range(1, self.max_attempts + 1):
            try:
                self._increment_once(moment_id)
                return
            except OperationalError as e:
                self.db.rollback()
                if attempt >= self.max_attempts:
                    logger.error(
                        f"조회수 증가 실패 (재시도 소진): momentId={moment_id}, attempts={attempt}",
                        exc_info=True,
                    )
                    raise CounterUpdateFailedError() from e

                logger.warning(
                    f"조회수 증가 재시도: momentId={moment_id}, attempt={attempt}/{self.max_attempts}, error={e.orig}"
                )
                time.sleep(self.retry_delay)

    def _increment_once(self, moment_id: int) -> None:
        # 전체 행을 읽지 않고 존재 여부만 확인
        if not self.db.scalar(select(exists().where(Moment.id == moment_id))):
            self.db.rollback()
            raise MomentNotFoundError()

        result = self.db.execute(
            update(Moment)
            .where(Moment.id == moment_id)
            .values(view_count=Moment.view_count + 1)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()

        if result.rowcount > 0:
            logger.debug(f"View count incremented - momentId: {moment_id}")
        else:
            # 존재 확인과 UPDATE 사이에 삭제된 경우. 이번 조회는 버린다.
            logger.warning(f"Failed to increment view count - momentId: {moment_id}")
