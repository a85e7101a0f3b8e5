from typing import Optional, List, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, Select
import uuid

from videohub.db.base import utcnow
from videohub.db.models import Comment as CommentModel, User, LikeTarget, Video
from videohub.db.repositories.composer import (
    owner_columns, engagement_columns, to_owner_snippet, viewer_flag, visible_videos
)
from videohub.domains.comments.schemas import CommentView


class CommentRepository:
    """Репозиторий для работы с комментариями"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, video_id: uuid.UUID, owner_id: uuid.UUID, content: str) -> CommentModel:
        """Создание комментария"""
        db_comment = CommentModel(
            id=uuid.uuid4(),
            video_id=video_id,
            owner_id=owner_id,
            content=content
        )

        self.session.add(db_comment)
        await self.session.commit()
        await self.session.refresh(db_comment)
        return db_comment

    async def get_by_id(self, comment_id: uuid.UUID) -> Optional[CommentModel]:
        result = await self.session.execute(
            select(CommentModel).where(CommentModel.id == comment_id)
        )
        return result.scalar_one_or_none()

    async def exists_visible(
        self,
        comment_id: uuid.UUID,
        viewer_id: Optional[uuid.UUID] = None,
        lock: bool = False
    ) -> bool:
        """Комментарий существует и его видео видно зрителю"""
        stmt = (
            select(CommentModel.id)
            .join(Video, Video.id == CommentModel.video_id)
            .where(CommentModel.id == comment_id, visible_videos(viewer_id))
        )
        if lock:
            stmt = stmt.with_for_update(read=True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def update_content(self, comment_id: uuid.UUID, content: str) -> None:
        """Обновление текста; created_at не трогаем"""
        await self.session.execute(
            update(CommentModel)
            .where(CommentModel.id == comment_id)
            .values(content=content, updated_at=utcnow())
        )
        await self.session.commit()

    def composed_query(self, viewer_id: Optional[uuid.UUID] = None) -> Select:
        """SELECT комментариев с автором и лайками"""
        columns: List[Any] = [CommentModel, *owner_columns()]
        columns += engagement_columns(LikeTarget.COMMENT, CommentModel.id, viewer_id)
        return select(*columns).join(User, User.id == CommentModel.owner_id)

    def by_video_query(self, video_id: uuid.UUID, viewer_id: Optional[uuid.UUID] = None) -> Select:
        """Комментарии к видео, новые первыми"""
        return (
            self.composed_query(viewer_id)
            .where(CommentModel.video_id == video_id)
            .order_by(CommentModel.created_at.desc(), CommentModel.id.desc())
        )

    async def get_composed(self, comment_id: uuid.UUID, viewer_id: Optional[uuid.UUID] = None) -> Optional[CommentView]:
        stmt = (
            self.composed_query(viewer_id)
            .where(CommentModel.id == comment_id)
            .execution_options(populate_existing=True)
        )
        row = (await self.session.execute(stmt)).first()
        return self.to_view(row) if row else None

    async def list_composed_by_video(
        self,
        video_id: uuid.UUID,
        viewer_id: Optional[uuid.UUID] = None
    ) -> List[CommentView]:
        result = await self.session.execute(self.by_video_query(video_id, viewer_id))
        return [self.to_view(row) for row in result.all()]

    def to_view(self, row) -> CommentView:
        mapping = row._mapping
        comment = mapping[CommentModel]
        return CommentView(
            id=comment.id,
            video_id=comment.video_id,
            content=comment.content,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            owner=to_owner_snippet(mapping),
            likes_count=mapping["likes_count"],
            is_liked=viewer_flag(mapping)
        )
