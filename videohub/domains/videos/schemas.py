from pydantic import Field, field_validator
from typing import Optional, List
import uuid
from datetime import datetime

from videohub.core.responses import CamelModel
from videohub.domains.shared.schemas import OwnerSnippet
from videohub.domains.comments.schemas import CommentView


class VideoBase(CamelModel):
    """Базовая схема видео"""
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1, max_length=5000)

    @field_validator('title', 'description')
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError('Title and description are required')
        return v.strip()


class VideoCreate(VideoBase):
    """Схема для публикации видео"""
    pass


class VideoUpdate(CamelModel):
    """Схема для обновления видео"""
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)

    @field_validator('title', 'description')
    @classmethod
    def validate_not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError('Field cannot be empty')
        return v.strip() if v else v


class VideoResponse(CamelModel):
    """Запись видео без соединений"""
    id: uuid.UUID
    owner_id: uuid.UUID
    title: str
    description: str
    video_url: str
    thumbnail_url: str
    duration: float
    views: int
    is_published: bool
    created_at: datetime
    updated_at: datetime


class VideoView(CamelModel):
    """Составное представление видео для конкретного зрителя"""
    id: uuid.UUID
    title: str
    description: str
    video_url: str
    thumbnail_url: str
    duration: float
    views: int
    is_published: bool
    created_at: datetime
    owner: OwnerSnippet
    likes_count: int
    is_liked: Optional[bool] = None


class VideoDetailView(VideoView):
    comments: List[CommentView] = Field(default_factory=list)
