import uuid
from typing import Optional

from videohub.core.responses import CamelModel


class OwnerSnippet(CamelModel):
    """Публичный профиль владельца внутри составного представления"""
    id: uuid.UUID
    username: str
    full_name: str
    avatar_url: str
    subscribers_count: Optional[int] = None
    is_subscribed: Optional[bool] = None


class LikeStatus(CamelModel):
    is_liked: bool


class PublishStatus(CamelModel):
    is_published: bool
