from pydantic import Field, field_validator
from typing import Optional
import uuid
from datetime import datetime

from videohub.core.responses import CamelModel
from videohub.domains.shared.schemas import OwnerSnippet


class CommentBase(CamelModel):
    """Базовая схема комментария"""
    content: str = Field(..., min_length=1, max_length=5000)

    @field_validator('content')
    @classmethod
    def validate_content(cls, v):
        if not v.strip():
            raise ValueError('Content is required')
        return v.strip()


class CommentCreate(CommentBase):
    pass


class CommentUpdate(CommentBase):
    pass


class CommentView(CamelModel):
    """Комментарий с профилем автора и счетчиком лайков"""
    id: uuid.UUID
    video_id: uuid.UUID
    content: str
    created_at: datetime
    updated_at: datetime
    owner: OwnerSnippet
    likes_count: int
    is_liked: Optional[bool] = None
