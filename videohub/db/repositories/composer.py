"""SQL-строительные блоки составных представлений.

Каждое представление собирается одним SELECT: корневая сущность,
профиль владельца через JOIN на users и производные счетчики через
коррелированные подзапросы. Флаги зрителя (is_liked, is_subscribed)
добавляются только если зритель известен.
"""
import uuid
from typing import Any, List, Mapping, Optional

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from videohub.db.models import Like, LikeTarget, Subscription, User, Video
from videohub.domains.shared.schemas import OwnerSnippet


def owner_columns() -> List[Any]:
    return [
        User.id.label("owner_user_id"),
        User.username.label("owner_username"),
        User.full_name.label("owner_full_name"),
        User.avatar_url.label("owner_avatar_url"),
    ]


def likes_count(kind: LikeTarget, target_id_column):
    return (
        select(func.count(Like.id))
        .where(and_(Like.target_kind == kind, Like.target_id == target_id_column))
        .scalar_subquery()
        .label("likes_count")
    )


def is_liked(kind: LikeTarget, target_id_column, viewer_id: uuid.UUID):
    return (
        select(Like.id)
        .where(
            and_(
                Like.target_kind == kind,
                Like.target_id == target_id_column,
                Like.liked_by == viewer_id,
            )
        )
        .exists()
        .label("is_liked")
    )


def engagement_columns(kind: LikeTarget, target_id_column, viewer_id: Optional[uuid.UUID]) -> List[Any]:
    """likes_count всегда, is_liked только для известного зрителя"""
    columns = [likes_count(kind, target_id_column)]
    if viewer_id is not None:
        columns.append(is_liked(kind, target_id_column, viewer_id))
    return columns


def subscription_columns(channel_column, viewer_id: Optional[uuid.UUID]) -> List[Any]:
    if viewer_id is None:
        return []
    return [
        select(func.count(Subscription.id))
        .where(Subscription.channel_id == channel_column)
        .scalar_subquery()
        .label("owner_subscribers_count"),
        select(Subscription.id)
        .where(
            and_(
                Subscription.channel_id == channel_column,
                Subscription.subscriber_id == viewer_id,
            )
        )
        .exists()
        .label("owner_is_subscribed"),
    ]


def visible_videos(viewer_id: Optional[uuid.UUID]):
    """Неопубликованные видео видит только их владелец"""
    if viewer_id is None:
        return Video.is_published.is_(True)
    return or_(Video.is_published.is_(True), Video.owner_id == viewer_id)


def escape_like(text: str) -> str:
    """Экранирование %, _ и \\ для LIKE ... ESCAPE '\\'"""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def to_owner_snippet(mapping: Mapping[str, Any]) -> OwnerSnippet:
    subscribers = mapping.get("owner_subscribers_count")
    subscribed = mapping.get("owner_is_subscribed")
    return OwnerSnippet(
        id=mapping["owner_user_id"],
        username=mapping["owner_username"],
        full_name=mapping["owner_full_name"],
        avatar_url=mapping["owner_avatar_url"],
        subscribers_count=subscribers,
        is_subscribed=None if subscribed is None else bool(subscribed),
    )


def viewer_flag(mapping: Mapping[str, Any], key: str = "is_liked") -> Optional[bool]:
    value = mapping.get(key)
    return None if value is None else bool(value)


def dialect_insert(session: AsyncSession, table):
    """INSERT с поддержкой ON CONFLICT для текущего диалекта"""
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise RuntimeError(f"Unsupported dialect for conflict-aware insert: {dialect}")
    return insert(table)
