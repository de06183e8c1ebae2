from datetime import datetime
from pydantic import Field
from typing import Optional

from app.schemas.base import CamelModel


class MomentCreateRequest(CamelModel):
    place_id: int
    place_name: str = Field(..., min_length=1, max_length=100)
    title: str = Field(..., min_length=1, max_length=50)
    content: str = Field(..., min_length=1)
    is_public: bool = True


class MomentResponse(CamelModel):
    id: int
    user_id: int
    place_id: int
    place_name: str
    title: str
    content: str
    is_public: bool
    view_count: int
    created_at: Optional[datetime] = None
