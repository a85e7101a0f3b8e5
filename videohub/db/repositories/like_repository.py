from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete, and_
import uuid

from videohub.db.base import utcnow
from videohub.db.models import Like as LikeModel, LikeTarget
from videohub.db.repositories.composer import dialect_insert


class LikeRepository:
    """Репозиторий лайков.

    Уникальность (liked_by, target_kind, target_id) обеспечивает ограничение
    uq_likes_actor_target, а не проверка в коде.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert_if_absent(self, actor_id: uuid.UUID, kind: LikeTarget, target_id: uuid.UUID) -> bool:
        """INSERT ... ON CONFLICT DO NOTHING; True если строка вставлена"""
        now = utcnow()
        stmt = (
            dialect_insert(self.session, LikeModel.__table__)
            .values(
                id=uuid.uuid4(),
                liked_by=actor_id,
                target_kind=kind,
                target_id=target_id,
                created_at=now,
                updated_at=now
            )
            .on_conflict_do_nothing(index_elements=["liked_by", "target_kind", "target_id"])
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def delete_one(self, actor_id: uuid.UUID, kind: LikeTarget, target_id: uuid.UUID) -> int:
        result = await self.session.execute(
            delete(LikeModel).where(
                and_(
                    LikeModel.liked_by == actor_id,
                    LikeModel.target_kind == kind,
                    LikeModel.target_id == target_id
                )
            )
        )
        return result.rowcount
