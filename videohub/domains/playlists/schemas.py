from pydantic import Field, field_validator
from typing import Optional, List
import uuid
from datetime import datetime

from videohub.core.responses import CamelModel
from videohub.domains.shared.schemas import OwnerSnippet


class PlaylistBase(CamelModel):
    """Базовая схема плейлиста"""
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1, max_length=5000)

    @field_validator('name', 'description')
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError('Name and description are both required')
        return v.strip()


class PlaylistCreate(PlaylistBase):
    """Схема для создания плейлиста"""
    pass


class PlaylistUpdate(CamelModel):
    """Схема для обновления плейлиста"""
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)

    @field_validator('name', 'description')
    @classmethod
    def validate_not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError('Field cannot be empty')
        return v.strip() if v else v


class PlaylistVideoItem(CamelModel):
    id: uuid.UUID
    title: str
    description: str
    video_url: str
    thumbnail_url: str
    duration: float
    views: int
    created_at: datetime


class PlaylistSummary(CamelModel):
    """Плейлист в списке пользователя"""
    id: uuid.UUID
    name: str
    description: str
    total_videos: int
    total_views: int
    created_at: datetime
    updated_at: datetime


class PlaylistView(PlaylistSummary):
    """Плейлист с владельцем и видео в порядке добавления"""
    owner: OwnerSnippet
    videos: List[PlaylistVideoItem] = Field(default_factory=list)
