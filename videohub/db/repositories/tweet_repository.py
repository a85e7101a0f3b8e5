from typing import Optional, List, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, Select
import uuid

from videohub.db.base import utcnow
from videohub.db.models import Tweet as TweetModel, User, LikeTarget
from videohub.db.repositories.composer import (
    owner_columns, engagement_columns, to_owner_snippet, viewer_flag
)
from videohub.domains.tweets.schemas import TweetView


class TweetRepository:
    """Репозиторий для работы с твитами"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, owner_id: uuid.UUID, content: str) -> TweetModel:
        db_tweet = TweetModel(id=uuid.uuid4(), owner_id=owner_id, content=content)

        self.session.add(db_tweet)
        await self.session.commit()
        await self.session.refresh(db_tweet)
        return db_tweet

    async def get_by_id(self, tweet_id: uuid.UUID) -> Optional[TweetModel]:
        result = await self.session.execute(
            select(TweetModel).where(TweetModel.id == tweet_id)
        )
        return result.scalar_one_or_none()

    async def exists(self, tweet_id: uuid.UUID, lock: bool = False) -> bool:
        stmt = select(TweetModel.id).where(TweetModel.id == tweet_id)
        if lock:
            stmt = stmt.with_for_update(read=True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def update_content(self, tweet_id: uuid.UUID, content: str) -> Optional[TweetModel]:
        await self.session.execute(
            update(TweetModel)
            .where(TweetModel.id == tweet_id)
            .values(content=content, updated_at=utcnow())
        )
        await self.session.commit()

        result = await self.session.execute(
            select(TweetModel)
            .where(TweetModel.id == tweet_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    def by_owner_query(self, owner_id: uuid.UUID, viewer_id: Optional[uuid.UUID] = None) -> Select:
        """Твиты пользователя с автором и лайками, новые первыми"""
        columns: List[Any] = [TweetModel, *owner_columns()]
        columns += engagement_columns(LikeTarget.TWEET, TweetModel.id, viewer_id)
        return (
            select(*columns)
            .join(User, User.id == TweetModel.owner_id)
            .where(TweetModel.owner_id == owner_id)
            .order_by(TweetModel.created_at.desc(), TweetModel.id.desc())
        )

    def to_view(self, row) -> TweetView:
        mapping = row._mapping
        tweet = mapping[TweetModel]
        return TweetView(
            id=tweet.id,
            content=tweet.content,
            created_at=tweet.created_at,
            updated_at=tweet.updated_at,
            owner=to_owner_snippet(mapping),
            likes_count=mapping["likes_count"],
            is_liked=viewer_flag(mapping)
        )
