from typing import Optional, Union, Mapping, Any
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

import structlog

from videohub.core.errors import NotFoundError, ValidationError
from videohub.core.validation import validate_payload
from videohub.db.repositories.playlist_repository import PlaylistRepository
from videohub.db.repositories.user_repository import UserRepository
from videohub.db.repositories.video_repository import VideoRepository
from videohub.domains.playlists.schemas import (
    PlaylistCreate, PlaylistUpdate, PlaylistSummary, PlaylistView
)
from videohub.domains.shared.cascade import CascadeCoordinator
from videohub.domains.shared.ownership import ensure_owner
from videohub.domains.shared.pagination import Page, paginate_query

logger = structlog.get_logger(__name__)


class PlaylistService:
    """Сервис для работы с плейлистами"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.playlist_repository = PlaylistRepository(session)
        self.video_repository = VideoRepository(session)
        self.user_repository = UserRepository(session)

    async def create_playlist(self, actor_id: uuid.UUID, playlist_data: PlaylistCreate) -> PlaylistView:
        playlist = await self.playlist_repository.create(
            owner_id=actor_id,
            name=playlist_data.name,
            description=playlist_data.description
        )
        logger.info("playlist_created", playlist_id=str(playlist.id), owner_id=str(actor_id))
        return await self.playlist_repository.get_composed(playlist.id, actor_id)

    async def get_user_playlists(
        self,
        user_id: uuid.UUID,
        viewer_id: Optional[uuid.UUID] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None
    ) -> Page[PlaylistSummary]:
        if not await self.user_repository.get_by_id(user_id):
            raise NotFoundError("User not found")

        stmt = self.playlist_repository.by_owner_query(user_id, viewer_id)
        return await paginate_query(self.session, stmt, self.playlist_repository.to_summary, page, limit)

    async def get_playlist(self, playlist_id: uuid.UUID, viewer_id: Optional[uuid.UUID] = None) -> PlaylistView:
        playlist = await self.playlist_repository.get_composed(playlist_id, viewer_id)

        if not playlist:
            raise NotFoundError("Playlist not found")

        return playlist

    async def update_playlist(
        self,
        actor_id: uuid.UUID,
        playlist_id: uuid.UUID,
        update_data: Union[PlaylistUpdate, Mapping[str, Any]]
    ) -> PlaylistView:
        """Изменение имени и описания (только владелец)"""
        playlist = await self.playlist_repository.get_by_id(playlist_id)
        ensure_owner(playlist, actor_id, "Playlist", "update this playlist")
        update_data = validate_payload(PlaylistUpdate, update_data)

        values = update_data.model_dump(exclude_none=True)
        if not values:
            raise ValidationError("Name or description is required")

        await self.playlist_repository.update(playlist_id, **values)
        return await self.playlist_repository.get_composed(playlist_id, actor_id)

    async def add_video(self, actor_id: uuid.UUID, playlist_id: uuid.UUID, video_id: uuid.UUID) -> PlaylistView:
        """Добавление видео; повторное добавление идемпотентно"""
        playlist = await self.playlist_repository.get_by_id(playlist_id)
        ensure_owner(playlist, actor_id, "Playlist", "add videos to this playlist")

        if not await self.video_repository.exists(video_id, actor_id):
            raise NotFoundError("Video not found")

        added = await self.playlist_repository.add_video(playlist_id, video_id)
        logger.info("playlist_video_added", playlist_id=str(playlist_id), video_id=str(video_id), changed=added)
        return await self.playlist_repository.get_composed(playlist_id, actor_id)

    async def remove_video(self, actor_id: uuid.UUID, playlist_id: uuid.UUID, video_id: uuid.UUID) -> PlaylistView:
        """Удаление видео; отсутствующее видео не считается ошибкой"""
        playlist = await self.playlist_repository.get_by_id(playlist_id)
        ensure_owner(playlist, actor_id, "Playlist", "remove videos from this playlist")

        removed = await self.playlist_repository.remove_video(playlist_id, video_id)
        logger.info("playlist_video_removed", playlist_id=str(playlist_id), video_id=str(video_id), changed=removed)
        return await self.playlist_repository.get_composed(playlist_id, actor_id)

    async def delete_playlist(self, actor_id: uuid.UUID, playlist_id: uuid.UUID) -> None:
        playlist = await self.playlist_repository.get_by_id(playlist_id)
        ensure_owner(playlist, actor_id, "Playlist", "delete this playlist")

        await CascadeCoordinator(self.session).delete_playlist(playlist_id)
