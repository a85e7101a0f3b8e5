from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, Dict, Any
import uuid

from videohub.core.auth import get_current_actor, get_optional_actor
from videohub.core.db import get_db
from videohub.core.responses import ApiResponse
from videohub.domains.tweets.schemas import TweetCreate
from videohub.domains.tweets.services import TweetService

router = APIRouter(prefix="/tweets", tags=["tweets"])


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_tweet(
    tweet_data: TweetCreate,
    actor_id: uuid.UUID = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db)
):
    tweet_service = TweetService(db)
    tweet = await tweet_service.create_tweet(actor_id, tweet_data)
    return ApiResponse.ok(tweet, "Tweet added successfully", status.HTTP_201_CREATED)


@router.get("/user/{user_id}", response_model=ApiResponse)
async def get_user_tweets(
    user_id: uuid.UUID,
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    viewer_id: Optional[uuid.UUID] = Depends(get_optional_actor),
    db: AsyncSession = Depends(get_db)
):
    """Твиты пользователя"""
    tweet_service = TweetService(db)
    tweets = await tweet_service.get_user_tweets(user_id, viewer_id, page, limit)
    return ApiResponse.ok(tweets, "Tweets fetched successfully")


@router.patch("/{tweet_id}", response_model=ApiResponse)
async def update_tweet(
    tweet_id: uuid.UUID,
    update_data: Dict[str, Any] = Body(...),
    actor_id: uuid.UUID = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db)
):
    tweet_service = TweetService(db)
    tweet = await tweet_service.update_tweet(actor_id, tweet_id, update_data)
    return ApiResponse.ok(tweet, "Tweet updated successfully")


@router.delete("/{tweet_id}", response_model=ApiResponse)
async def delete_tweet(
    tweet_id: uuid.UUID,
    actor_id: uuid.UUID = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db)
):
    tweet_service = TweetService(db)
    deleted_id = await tweet_service.delete_tweet(actor_id, tweet_id)
    return ApiResponse.ok(str(deleted_id), "Tweet deleted successfully")
