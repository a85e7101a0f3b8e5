from typing import Optional, List, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, or_, not_, Select
import uuid

from videohub.db.base import utcnow
from videohub.db.models import Video as VideoModel, User, Like, LikeTarget
from videohub.db.repositories.composer import (
    owner_columns, engagement_columns, subscription_columns, visible_videos,
    to_owner_snippet, viewer_flag, escape_like
)
from videohub.domains.videos.schemas import VideoView


class VideoRepository:
    """Репозиторий для работы с видео"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        owner_id: uuid.UUID,
        title: str,
        description: str,
        video_url: str,
        thumbnail_url: str,
        duration: float,
        is_published: bool = True
    ) -> VideoModel:
        """Создание записи видео"""
        db_video = VideoModel(
            id=uuid.uuid4(),
            owner_id=owner_id,
            title=title,
            description=description,
            video_url=video_url,
            thumbnail_url=thumbnail_url,
            duration=duration,
            views=0,
            is_published=is_published
        )

        self.session.add(db_video)
        await self.session.commit()
        await self.session.refresh(db_video)
        return db_video

    async def get_by_id(self, video_id: uuid.UUID) -> Optional[VideoModel]:
        """Получение видео по id"""
        result = await self.session.execute(
            select(VideoModel).where(VideoModel.id == video_id)
        )
        return result.scalar_one_or_none()

    async def exists(self, video_id: uuid.UUID, viewer_id: Optional[uuid.UUID] = None, lock: bool = False) -> bool:
        """Существует ли видео, видимое данному зрителю.

        lock=True берет FOR SHARE на строку до конца транзакции: каскадное
        удаление видео ждет ее завершения.
        """
        stmt = select(VideoModel.id).where(VideoModel.id == video_id, visible_videos(viewer_id))
        if lock:
            stmt = stmt.with_for_update(read=True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def update(self, video_id: uuid.UUID, **values: Any) -> Optional[VideoModel]:
        """Обновление полей видео"""
        if values:
            await self.session.execute(
                update(VideoModel)
                .where(VideoModel.id == video_id)
                .values(updated_at=utcnow(), **values)
            )
            await self.session.commit()
        return await self._reload(video_id)

    async def toggle_published(self, video_id: uuid.UUID) -> Optional[bool]:
        """Инвертирует флаг публикации одним UPDATE"""
        result = await self.session.execute(
            update(VideoModel)
            .where(VideoModel.id == video_id)
            .values(is_published=not_(VideoModel.is_published), updated_at=utcnow())
        )
        await self.session.commit()
        if result.rowcount == 0:
            return None
        video = await self._reload(video_id)
        return video.is_published

    async def _reload(self, video_id: uuid.UUID) -> Optional[VideoModel]:
        result = await self.session.execute(
            select(VideoModel)
            .where(VideoModel.id == video_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    def composed_query(
        self,
        viewer_id: Optional[uuid.UUID] = None,
        query: Optional[str] = None,
        owner_id: Optional[uuid.UUID] = None,
        with_subscriptions: bool = False
    ) -> Select:
        """SELECT видео с владельцем, лайками и флагами зрителя"""
        columns: List[Any] = [VideoModel, *owner_columns()]
        columns += engagement_columns(LikeTarget.VIDEO, VideoModel.id, viewer_id)
        if with_subscriptions:
            columns += subscription_columns(User.id, viewer_id)

        stmt = (
            select(*columns)
            .join(User, User.id == VideoModel.owner_id)
            .where(visible_videos(viewer_id))
        )

        if query:
            pattern = f"%{escape_like(query)}%"
            stmt = stmt.where(
                or_(
                    VideoModel.title.ilike(pattern, escape="\\"),
                    VideoModel.description.ilike(pattern, escape="\\")
                )
            )

        if owner_id:
            stmt = stmt.where(VideoModel.owner_id == owner_id)

        return stmt

    async def get_composed(self, video_id: uuid.UUID, viewer_id: Optional[uuid.UUID] = None) -> Optional[VideoView]:
        """Составное представление одного видео"""
        stmt = self.composed_query(viewer_id, with_subscriptions=True).where(VideoModel.id == video_id)
        row = (await self.session.execute(stmt)).first()
        return self.to_view(row) if row else None

    def liked_by_query(self, actor_id: uuid.UUID) -> Select:
        """Видео, которые лайкнул пользователь, последние лайки первыми"""
        return (
            self.composed_query(viewer_id=actor_id)
            .join(
                Like,
                (Like.target_kind == LikeTarget.VIDEO) & (Like.target_id == VideoModel.id),
            )
            .where(Like.liked_by == actor_id)
            .order_by(Like.created_at.desc(), Like.id.desc())
        )

    def to_view(self, row) -> VideoView:
        """Преобразование строки составного запроса в представление"""
        mapping = row._mapping
        video = mapping[VideoModel]
        return VideoView(
            id=video.id,
            title=video.title,
            description=video.description,
            video_url=video.video_url,
            thumbnail_url=video.thumbnail_url,
            duration=video.duration,
            views=video.views,
            is_published=video.is_published,
            created_at=video.created_at,
            owner=to_owner_snippet(mapping),
            likes_count=mapping["likes_count"],
            is_liked=viewer_flag(mapping)
        )
