"""
Moment 모델 - 장소 기반 기록(게시글)
"""

from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.database import Base


class Moment(Base):
    __tablename__ = "moments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # 장소 정보
    place_id = Column(Integer, nullable=False, index=True)
    place_name = Column(String(100), nullable=False)

    title = Column(String(50), nullable=False)
    content = Column(Text, nullable=False)
    is_public = Column(Boolean, nullable=False, default=True)

    # 조회수는 ViewCountService 의 원자적 UPDATE 로만 변경
    view_count = Column(Integer, nullable=False, default=0, server_default="0")

    # 타임스탬프
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # 관계
    user = relationship("User", back_populates="moments")

    def __repr__(self):
        return f"<Moment(id={self.id}, title={self.title}, views={self.view_count})>"
