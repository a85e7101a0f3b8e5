from pydantic import Field, field_validator
from typing import Optional
import uuid
from datetime import datetime

from videohub.core.responses import CamelModel
from videohub.domains.shared.schemas import OwnerSnippet


class TweetBase(CamelModel):
    """Базовая схема твита"""
    content: str = Field(..., min_length=1, max_length=1000)

    @field_validator('content')
    @classmethod
    def validate_content(cls, v):
        if not v.strip():
            raise ValueError('Content is required')
        return v.strip()


class TweetCreate(TweetBase):
    pass


class TweetUpdate(TweetBase):
    pass


class TweetResponse(CamelModel):
    id: uuid.UUID
    owner_id: uuid.UUID
    content: str
    created_at: datetime
    updated_at: datetime


class TweetView(CamelModel):
    """Твит с профилем автора и лайками"""
    id: uuid.UUID
    content: str
    created_at: datetime
    updated_at: datetime
    owner: OwnerSnippet
    likes_count: int
    is_liked: Optional[bool] = None
