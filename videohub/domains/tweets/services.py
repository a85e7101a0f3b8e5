from typing import Optional, Union, Mapping, Any
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

import structlog

from videohub.core.config import settings
from videohub.core.errors import NotFoundError
from videohub.core.validation import validate_payload
from videohub.db.repositories.tweet_repository import TweetRepository
from videohub.db.repositories.user_repository import UserRepository
from videohub.domains.shared.cascade import CascadeCoordinator
from videohub.domains.shared.ownership import ensure_owner
from videohub.domains.shared.pagination import Page, paginate_query
from videohub.domains.tweets.schemas import TweetCreate, TweetUpdate, TweetResponse, TweetView

logger = structlog.get_logger(__name__)


class TweetService:
    """Сервис для работы с твитами"""

    def __init__(self, session: AsyncSession, cascade_likes: Optional[bool] = None):
        self.session = session
        self.cascade_likes = settings.cascade_tweet_likes if cascade_likes is None else cascade_likes
        self.tweet_repository = TweetRepository(session)
        self.user_repository = UserRepository(session)

    async def create_tweet(self, actor_id: uuid.UUID, tweet_data: TweetCreate) -> TweetResponse:
        tweet = await self.tweet_repository.create(actor_id, tweet_data.content)
        logger.info("tweet_created", tweet_id=str(tweet.id), owner_id=str(actor_id))
        return TweetResponse.model_validate(tweet)

    async def get_user_tweets(
        self,
        user_id: uuid.UUID,
        viewer_id: Optional[uuid.UUID] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None
    ) -> Page[TweetView]:
        """Твиты пользователя с лайками"""
        if not await self.user_repository.get_by_id(user_id):
            raise NotFoundError("User not found")

        stmt = self.tweet_repository.by_owner_query(user_id, viewer_id)
        return await paginate_query(self.session, stmt, self.tweet_repository.to_view, page, limit)

    async def update_tweet(self, actor_id: uuid.UUID, tweet_id: uuid.UUID, update_data: Union[TweetUpdate, Mapping[str, Any]]) -> TweetResponse:
        tweet = await self.tweet_repository.get_by_id(tweet_id)
        ensure_owner(tweet, actor_id, "Tweet", "update this tweet")
        update_data = validate_payload(TweetUpdate, update_data)

        updated = await self.tweet_repository.update_content(tweet_id, update_data.content)
        return TweetResponse.model_validate(updated)

    async def delete_tweet(self, actor_id: uuid.UUID, tweet_id: uuid.UUID) -> uuid.UUID:
        tweet = await self.tweet_repository.get_by_id(tweet_id)
        ensure_owner(tweet, actor_id, "Tweet", "delete this tweet")

        await CascadeCoordinator(self.session).delete_tweet(tweet_id, cascade_likes=self.cascade_likes)
        return tweet_id
