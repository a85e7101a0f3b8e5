from typing import Optional, Union, Mapping, Any
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

import structlog

from videohub.core.blob_storage import BlobStorageClient, MediaFile
from videohub.core.errors import NotFoundError, ValidationError
from videohub.core.validation import validate_payload
from videohub.db.models import Video as VideoModel
from videohub.db.repositories.video_repository import VideoRepository
from videohub.db.repositories.comment_repository import CommentRepository
from videohub.domains.shared.cascade import CascadeCoordinator
from videohub.domains.shared.ownership import ensure_owner
from videohub.domains.shared.pagination import Page, paginate_query
from videohub.domains.shared.schemas import PublishStatus
from videohub.domains.shared.sorting import resolve_sort
from videohub.domains.videos.schemas import (
    VideoCreate, VideoUpdate, VideoResponse, VideoView, VideoDetailView
)

logger = structlog.get_logger(__name__)

VIDEO_SORT_FIELDS = {
    "createdAt": VideoModel.created_at,
    "views": VideoModel.views,
    "title": VideoModel.title,
    "duration": VideoModel.duration,
}


class VideoService:
    """Сервис для работы с видео"""

    def __init__(self, session: AsyncSession, blob_storage: Optional[BlobStorageClient] = None):
        self.session = session
        self.blob_storage = blob_storage or BlobStorageClient()
        self.video_repository = VideoRepository(session)
        self.comment_repository = CommentRepository(session)

    async def list_videos(
        self,
        viewer_id: Optional[uuid.UUID] = None,
        query: Optional[str] = None,
        owner_id: Optional[uuid.UUID] = None,
        sort_by: Optional[str] = None,
        sort_type: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None
    ) -> Page[VideoView]:
        """Лента видео: поиск, фильтр по владельцу, сортировка по белому списку"""
        order_by = resolve_sort(VIDEO_SORT_FIELDS, sort_by, sort_type, tie_breaker=VideoModel.id)

        stmt = self.video_repository.composed_query(
            viewer_id=viewer_id,
            query=query.strip() if query else None,
            owner_id=owner_id
        ).order_by(*order_by)

        return await paginate_query(self.session, stmt, self.video_repository.to_view, page, limit)

    async def publish_video(
        self,
        actor_id: uuid.UUID,
        video_data: VideoCreate,
        video_file: Optional[MediaFile],
        thumbnail: Optional[MediaFile]
    ) -> VideoResponse:
        """Публикация: загрузка файлов в blob storage и создание записи"""
        if video_file is None or thumbnail is None:
            raise ValidationError("Video file and thumbnail are required")

        uploaded_video = await self.blob_storage.upload(video_file)
        uploaded_thumbnail = await self.blob_storage.upload(thumbnail)

        video = await self.video_repository.create(
            owner_id=actor_id,
            title=video_data.title,
            description=video_data.description,
            video_url=uploaded_video.url,
            thumbnail_url=uploaded_thumbnail.url,
            duration=uploaded_video.duration,
            is_published=True
        )

        logger.info("video_published", video_id=str(video.id), owner_id=str(actor_id))
        return VideoResponse.model_validate(video)

    async def get_video(self, video_id: uuid.UUID, viewer_id: Optional[uuid.UUID] = None) -> VideoDetailView:
        """Видео с владельцем, подписчиками, лайками и комментариями"""
        view = await self.video_repository.get_composed(video_id, viewer_id)

        if not view:
            raise NotFoundError("Video not found")

        comments = await self.comment_repository.list_composed_by_video(video_id, viewer_id)
        return VideoDetailView(**view.model_dump(), comments=comments)

    async def update_video(
        self,
        actor_id: uuid.UUID,
        video_id: uuid.UUID,
        update_data: Union[VideoUpdate, Mapping[str, Any]],
        thumbnail: Optional[MediaFile] = None
    ) -> VideoResponse:
        """Обновление видео (только владелец)"""
        video = await self.video_repository.get_by_id(video_id)
        ensure_owner(video, actor_id, "Video", "edit this video")
        update_data = validate_payload(VideoUpdate, update_data)

        values = update_data.model_dump(exclude_none=True)
        if thumbnail is not None:
            uploaded = await self.blob_storage.upload(thumbnail)
            values["thumbnail_url"] = uploaded.url

        if not values:
            raise ValidationError("Nothing to update: provide title, description or thumbnail")

        updated = await self.video_repository.update(video_id, **values)
        logger.info("video_updated", video_id=str(video_id), fields=sorted(values))
        return VideoResponse.model_validate(updated)

    async def delete_video(self, actor_id: uuid.UUID, video_id: uuid.UUID) -> None:
        """Удаление видео вместе с комментариями и лайками"""
        video = await self.video_repository.get_by_id(video_id)
        ensure_owner(video, actor_id, "Video", "delete this video")

        await CascadeCoordinator(self.session).delete_video(video_id)

    async def toggle_publish_status(self, actor_id: uuid.UUID, video_id: uuid.UUID) -> PublishStatus:
        video = await self.video_repository.get_by_id(video_id)
        ensure_owner(video, actor_id, "Video", "edit this video")

        is_published = await self.video_repository.toggle_published(video_id)
        if is_published is None:
            raise NotFoundError("Video not found")

        logger.info("video_publish_toggled", video_id=str(video_id), is_published=is_published)
        return PublishStatus(is_published=is_published)
