from typing import Optional, Union, Mapping, Any
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

import structlog

from videohub.core.errors import NotFoundError
from videohub.core.validation import validate_payload
from videohub.db.repositories.comment_repository import CommentRepository
from videohub.db.repositories.video_repository import VideoRepository
from videohub.domains.comments.schemas import CommentCreate, CommentUpdate, CommentView
from videohub.domains.shared.cascade import CascadeCoordinator
from videohub.domains.shared.ownership import ensure_owner
from videohub.domains.shared.pagination import Page, paginate_query

logger = structlog.get_logger(__name__)


class CommentService:
    """Сервис для работы с комментариями к видео"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.comment_repository = CommentRepository(session)
        self.video_repository = VideoRepository(session)

    async def get_video_comments(
        self,
        video_id: uuid.UUID,
        viewer_id: Optional[uuid.UUID] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None
    ) -> Page[CommentView]:
        """Комментарии видео постранично, новые первыми"""
        if not await self.video_repository.exists(video_id, viewer_id):
            raise NotFoundError("Video not found")

        stmt = self.comment_repository.by_video_query(video_id, viewer_id)
        return await paginate_query(self.session, stmt, self.comment_repository.to_view, page, limit)

    async def add_comment(self, actor_id: uuid.UUID, video_id: uuid.UUID, comment_data: CommentCreate) -> CommentView:
        if not await self.video_repository.exists(video_id, actor_id):
            raise NotFoundError("Video not found")

        comment = await self.comment_repository.create(video_id, actor_id, comment_data.content)
        logger.info("comment_added", comment_id=str(comment.id), video_id=str(video_id))

        return await self.comment_repository.get_composed(comment.id, actor_id)

    async def update_comment(
        self,
        actor_id: uuid.UUID,
        comment_id: uuid.UUID,
        update_data: Union[CommentUpdate, Mapping[str, Any]]
    ) -> CommentView:
        """Изменение текста комментария (только автор)"""
        comment = await self.comment_repository.get_by_id(comment_id)
        ensure_owner(comment, actor_id, "Comment", "update this comment")
        update_data = validate_payload(CommentUpdate, update_data)

        await self.comment_repository.update_content(comment_id, update_data.content)
        return await self.comment_repository.get_composed(comment_id, actor_id)

    async def delete_comment(self, actor_id: uuid.UUID, comment_id: uuid.UUID) -> uuid.UUID:
        comment = await self.comment_repository.get_by_id(comment_id)
        ensure_owner(comment, actor_id, "Comment", "delete this comment")

        await CascadeCoordinator(self.session).delete_comment(comment_id)
        return comment_id
