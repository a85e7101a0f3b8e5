"""Каскадное удаление корневых сущностей.

Все зависимые удаления и удаление корня выполняются в одной транзакции
сессии: либо применяется все, либо откат и DependencyError.
"""
import uuid
from typing import Dict

import structlog
from sqlalchemy import and_, delete, exists, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from videohub.core.errors import DependencyError
from videohub.db.models import Comment, Like, LikeTarget, Playlist, PlaylistVideo, Tweet, Video

logger = structlog.get_logger(__name__)


class CascadeCoordinator:
    """Удаляет зависимые записи вместе с корнем агрегата"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def delete_video(self, video_id: uuid.UUID) -> Dict[str, int]:
        """Видео, его комментарии, лайки видео и комментариев, записи в плейлистах"""
        comment_ids = select(Comment.id).where(Comment.video_id == video_id)

        async def _run():
            await self._lock_root(Video, video_id)
            likes = await self.session.execute(
                delete(Like).where(
                    or_(
                        and_(Like.target_kind == LikeTarget.VIDEO, Like.target_id == video_id),
                        and_(Like.target_kind == LikeTarget.COMMENT, Like.target_id.in_(comment_ids)),
                    )
                )
            )
            comments = await self.session.execute(delete(Comment).where(Comment.video_id == video_id))
            entries = await self.session.execute(delete(PlaylistVideo).where(PlaylistVideo.video_id == video_id))
            root = await self.session.execute(delete(Video).where(Video.id == video_id))
            return {
                "likes": likes.rowcount,
                "comments": comments.rowcount,
                "playlist_entries": entries.rowcount,
                "videos": root.rowcount,
            }

        return await self._in_transaction("video", video_id, _run)

    async def delete_comment(self, comment_id: uuid.UUID) -> Dict[str, int]:
        """Комментарий и все лайки на нем, от любых пользователей"""

        async def _run():
            await self._lock_root(Comment, comment_id)
            likes = await self.session.execute(
                delete(Like).where(
                    and_(Like.target_kind == LikeTarget.COMMENT, Like.target_id == comment_id)
                )
            )
            root = await self.session.execute(delete(Comment).where(Comment.id == comment_id))
            return {"likes": likes.rowcount, "comments": root.rowcount}

        return await self._in_transaction("comment", comment_id, _run)

    async def delete_tweet(self, tweet_id: uuid.UUID, cascade_likes: bool = False) -> Dict[str, int]:
        """Твит; лайки удаляются только при cascade_likes"""

        async def _run():
            await self._lock_root(Tweet, tweet_id)
            removed_likes = 0
            if cascade_likes:
                likes = await self.session.execute(
                    delete(Like).where(
                        and_(Like.target_kind == LikeTarget.TWEET, Like.target_id == tweet_id)
                    )
                )
                removed_likes = likes.rowcount
            root = await self.session.execute(delete(Tweet).where(Tweet.id == tweet_id))
            return {"likes": removed_likes, "tweets": root.rowcount}

        return await self._in_transaction("tweet", tweet_id, _run)

    async def delete_playlist(self, playlist_id: uuid.UUID) -> Dict[str, int]:
        """Плейлист и его записи; сами видео не трогаем"""

        async def _run():
            entries = await self.session.execute(
                delete(PlaylistVideo).where(PlaylistVideo.playlist_id == playlist_id)
            )
            root = await self.session.execute(delete(Playlist).where(Playlist.id == playlist_id))
            return {"playlist_entries": entries.rowcount, "playlists": root.rowcount}

        return await self._in_transaction("playlist", playlist_id, _run)

    async def purge_orphan_likes(self) -> int:
        """Сверка: удаляет лайки, чья цель больше не существует.

        Покрывает лайки удаленных твитов (когда каскад выключен) и
        переключения, совпавшие по времени с удалением цели.
        """
        targets = {
            LikeTarget.VIDEO: Video,
            LikeTarget.COMMENT: Comment,
            LikeTarget.TWEET: Tweet,
        }
        orphaned = or_(
            *[
                and_(
                    Like.target_kind == kind,
                    ~exists().where(model.id == Like.target_id),
                )
                for kind, model in targets.items()
            ]
        )

        async def _run():
            result = await self.session.execute(delete(Like).where(orphaned))
            return {"likes": result.rowcount}

        counts = await self._in_transaction("orphan_likes", None, _run)
        return counts["likes"]

    async def _lock_root(self, model, root_id: uuid.UUID) -> None:
        """FOR UPDATE на корень: переключатели лайков с FOR SHARE ждут commit"""
        await self.session.execute(select(model.id).where(model.id == root_id).with_for_update())

    async def _in_transaction(self, root: str, root_id, operation) -> Dict[str, int]:
        try:
            counts = await operation()
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("cascade_failed", root=root, root_id=str(root_id), error=str(e))
            raise DependencyError(f"Failed to delete {root}, nothing was removed") from e

        logger.info("cascade_deleted", root=root, root_id=str(root_id), **counts)
        return counts
