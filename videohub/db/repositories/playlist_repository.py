from typing import Optional, List, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func, and_, Select
import uuid

from videohub.db.base import utcnow
from videohub.db.models import Playlist as PlaylistModel, PlaylistVideo, Video, User
from videohub.db.repositories.composer import (
    owner_columns, visible_videos, to_owner_snippet, dialect_insert
)
from videohub.domains.playlists.schemas import PlaylistSummary, PlaylistView, PlaylistVideoItem


class PlaylistRepository:
    """Репозиторий для работы с плейлистами"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, owner_id: uuid.UUID, name: str, description: str) -> PlaylistModel:
        db_playlist = PlaylistModel(
            id=uuid.uuid4(),
            owner_id=owner_id,
            name=name,
            description=description
        )

        self.session.add(db_playlist)
        await self.session.commit()
        await self.session.refresh(db_playlist)
        return db_playlist

    async def get_by_id(self, playlist_id: uuid.UUID) -> Optional[PlaylistModel]:
        result = await self.session.execute(
            select(PlaylistModel).where(PlaylistModel.id == playlist_id)
        )
        return result.scalar_one_or_none()

    async def update(self, playlist_id: uuid.UUID, **values: Any) -> None:
        await self.session.execute(
            update(PlaylistModel)
            .where(PlaylistModel.id == playlist_id)
            .values(updated_at=utcnow(), **values)
        )
        await self.session.commit()

    async def add_video(self, playlist_id: uuid.UUID, video_id: uuid.UUID) -> bool:
        """Объединение множеств: повторное добавление ничего не меняет.

        Позиция вычисляется в том же INSERT, дубликат отсекает
        ограничение uq_playlist_video.
        """
        now = utcnow()
        next_position = (
            select(func.coalesce(func.max(PlaylistVideo.position), 0) + 1)
            .where(PlaylistVideo.playlist_id == playlist_id)
            .scalar_subquery()
        )
        stmt = (
            dialect_insert(self.session, PlaylistVideo.__table__)
            .values(
                id=uuid.uuid4(),
                playlist_id=playlist_id,
                video_id=video_id,
                position=next_position,
                created_at=now,
                updated_at=now
            )
            .on_conflict_do_nothing(index_elements=["playlist_id", "video_id"])
        )
        result = await self.session.execute(stmt)
        added = result.rowcount == 1
        if added:
            await self._touch(playlist_id)
        await self.session.commit()
        return added

    async def remove_video(self, playlist_id: uuid.UUID, video_id: uuid.UUID) -> bool:
        """Разность множеств: отсутствующий id не ошибка"""
        result = await self.session.execute(
            delete(PlaylistVideo).where(
                and_(PlaylistVideo.playlist_id == playlist_id, PlaylistVideo.video_id == video_id)
            )
        )
        removed = result.rowcount > 0
        if removed:
            await self._touch(playlist_id)
        await self.session.commit()
        return removed

    async def _touch(self, playlist_id: uuid.UUID) -> None:
        await self.session.execute(
            update(PlaylistModel).where(PlaylistModel.id == playlist_id).values(updated_at=utcnow())
        )

    def _totals(self, viewer_id: Optional[uuid.UUID]):
        """Подзапросы totalVideos/totalViews по видимым зрителю видео"""
        visible_entries = (
            select(PlaylistVideo.playlist_id, Video.views)
            .join(Video, Video.id == PlaylistVideo.video_id)
            .where(visible_videos(viewer_id))
            .subquery()
        )
        total_videos = (
            select(func.count())
            .select_from(visible_entries)
            .where(visible_entries.c.playlist_id == PlaylistModel.id)
            .scalar_subquery()
            .label("total_videos")
        )
        total_views = (
            select(func.coalesce(func.sum(visible_entries.c.views), 0))
            .where(visible_entries.c.playlist_id == PlaylistModel.id)
            .scalar_subquery()
            .label("total_views")
        )
        return total_videos, total_views

    def by_owner_query(self, owner_id: uuid.UUID, viewer_id: Optional[uuid.UUID] = None) -> Select:
        """Плейлисты пользователя, последние измененные первыми"""
        total_videos, total_views = self._totals(viewer_id)
        return (
            select(PlaylistModel, total_videos, total_views)
            .where(PlaylistModel.owner_id == owner_id)
            .order_by(PlaylistModel.updated_at.desc(), PlaylistModel.id.desc())
        )

    def to_summary(self, row) -> PlaylistSummary:
        mapping = row._mapping
        playlist = mapping[PlaylistModel]
        return PlaylistSummary(
            id=playlist.id,
            name=playlist.name,
            description=playlist.description,
            total_videos=mapping["total_videos"],
            total_views=mapping["total_views"],
            created_at=playlist.created_at,
            updated_at=playlist.updated_at
        )

    async def get_composed(self, playlist_id: uuid.UUID, viewer_id: Optional[uuid.UUID] = None) -> Optional[PlaylistView]:
        """Плейлист с владельцем и видимыми видео в порядке добавления"""
        result = await self.session.execute(
            select(PlaylistModel, *owner_columns())
            .join(User, User.id == PlaylistModel.owner_id)
            .where(PlaylistModel.id == playlist_id)
            .execution_options(populate_existing=True)
        )
        row = result.first()
        if not row:
            return None

        mapping = row._mapping
        playlist = mapping[PlaylistModel]
        videos = await self._visible_videos(playlist_id, viewer_id)

        return PlaylistView(
            id=playlist.id,
            name=playlist.name,
            description=playlist.description,
            total_videos=len(videos),
            total_views=sum(video.views for video in videos),
            created_at=playlist.created_at,
            updated_at=playlist.updated_at,
            owner=to_owner_snippet(mapping),
            videos=videos
        )

    async def _visible_videos(self, playlist_id: uuid.UUID, viewer_id: Optional[uuid.UUID]) -> List[PlaylistVideoItem]:
        result = await self.session.execute(
            select(Video)
            .join(PlaylistVideo, PlaylistVideo.video_id == Video.id)
            .where(PlaylistVideo.playlist_id == playlist_id, visible_videos(viewer_id))
            .order_by(PlaylistVideo.position.asc(), PlaylistVideo.created_at.asc())
        )
        return [
            PlaylistVideoItem(
                id=video.id,
                title=video.title,
                description=video.description,
                video_url=video.video_url,
                thumbnail_url=video.thumbnail_url,
                duration=video.duration,
                views=video.views,
                created_at=video.created_at
            )
            for video in result.scalars().all()
        ]
