from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
import uuid

import structlog

from videohub.core.errors import ConflictError, DependencyError, NotFoundError
from videohub.db.models import LikeTarget
from videohub.db.repositories.like_repository import LikeRepository
from videohub.db.repositories.video_repository import VideoRepository
from videohub.db.repositories.comment_repository import CommentRepository
from videohub.db.repositories.tweet_repository import TweetRepository
from videohub.domains.shared.cascade import CascadeCoordinator
from videohub.domains.shared.pagination import Page, paginate_query
from videohub.domains.shared.schemas import LikeStatus
from videohub.domains.videos.schemas import VideoView

logger = structlog.get_logger(__name__)


class LikeService:
    """Переключатель лайков для видео, комментариев и твитов"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.like_repository = LikeRepository(session)
        self.video_repository = VideoRepository(session)
        self.comment_repository = CommentRepository(session)
        self.tweet_repository = TweetRepository(session)

    async def toggle(self, actor_id: uuid.UUID, kind: LikeTarget, target_id: uuid.UUID) -> LikeStatus:
        """Liked <-> NotLiked для пары (пользователь, цель).

        Сначала попытка вставки, защищенная уникальным ограничением;
        конфликт означает, что лайк уже есть, и тогда он удаляется.
        Отдельного чтения текущего состояния нет.

        Цель блокируется FOR SHARE в той же транзакции, а после вставки
        проверяется повторно: лайк не переживает каскадное удаление цели.
        """
        try:
            await self._ensure_target(actor_id, kind, target_id)
            inserted = await self.like_repository.insert_if_absent(actor_id, kind, target_id)
            if inserted:
                await self._ensure_target(actor_id, kind, target_id)
                is_liked = True
            else:
                removed = await self.like_repository.delete_one(actor_id, kind, target_id)
                if removed == 0:
                    raise ConflictError("Like state changed concurrently, retry the request")
                is_liked = False
            await self.session.commit()
        except (ConflictError, NotFoundError):
            await self.session.rollback()
            raise
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("like_toggle_failed", actor_id=str(actor_id), kind=kind.value, target_id=str(target_id), error=str(e))
            raise DependencyError("Failed to toggle like") from e

        logger.info("like_toggled", actor_id=str(actor_id), kind=kind.value, target_id=str(target_id), is_liked=is_liked)
        return LikeStatus(is_liked=is_liked)

    async def toggle_video_like(self, actor_id: uuid.UUID, video_id: uuid.UUID) -> LikeStatus:
        return await self.toggle(actor_id, LikeTarget.VIDEO, video_id)

    async def toggle_comment_like(self, actor_id: uuid.UUID, comment_id: uuid.UUID) -> LikeStatus:
        return await self.toggle(actor_id, LikeTarget.COMMENT, comment_id)

    async def toggle_tweet_like(self, actor_id: uuid.UUID, tweet_id: uuid.UUID) -> LikeStatus:
        return await self.toggle(actor_id, LikeTarget.TWEET, tweet_id)

    async def get_liked_videos(
        self,
        actor_id: uuid.UUID,
        page: Optional[int] = None,
        limit: Optional[int] = None
    ) -> Page[VideoView]:
        """Видео, которые лайкнул пользователь"""
        stmt = self.video_repository.liked_by_query(actor_id)
        return await paginate_query(self.session, stmt, self.video_repository.to_view, page, limit)

    async def purge_orphan_likes(self) -> int:
        return await CascadeCoordinator(self.session).purge_orphan_likes()

    async def _ensure_target(self, actor_id: uuid.UUID, kind: LikeTarget, target_id: uuid.UUID) -> None:
        """Цель существует и видна пользователю; строка блокируется до commit"""
        if kind == LikeTarget.VIDEO:
            found = await self.video_repository.exists(target_id, viewer_id=actor_id, lock=True)
        elif kind == LikeTarget.COMMENT:
            found = await self.comment_repository.exists_visible(target_id, viewer_id=actor_id, lock=True)
        else:
            found = await self.tweet_repository.exists(target_id, lock=True)

        if not found:
            raise NotFoundError(f"{kind.value.capitalize()} not found")
