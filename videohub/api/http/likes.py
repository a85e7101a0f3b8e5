from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import uuid

from videohub.core.auth import get_current_actor
from videohub.core.db import get_db
from videohub.core.responses import ApiResponse
from videohub.db.models import LikeTarget
from videohub.domains.likes.services import LikeService

router = APIRouter(prefix="/likes", tags=["likes"])


async def _toggle(db: AsyncSession, actor_id: uuid.UUID, kind: LikeTarget, target_id: uuid.UUID) -> ApiResponse:
    like_service = LikeService(db)
    status = await like_service.toggle(actor_id, kind, target_id)
    return ApiResponse.ok(status, "Like toggled successfully")


@router.post("/toggle/v/{video_id}", response_model=ApiResponse)
async def toggle_video_like(
    video_id: uuid.UUID,
    actor_id: uuid.UUID = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db)
):
    return await _toggle(db, actor_id, LikeTarget.VIDEO, video_id)


@router.post("/toggle/c/{comment_id}", response_model=ApiResponse)
async def toggle_comment_like(
    comment_id: uuid.UUID,
    actor_id: uuid.UUID = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db)
):
    return await _toggle(db, actor_id, LikeTarget.COMMENT, comment_id)


@router.post("/toggle/t/{tweet_id}", response_model=ApiResponse)
async def toggle_tweet_like(
    tweet_id: uuid.UUID,
    actor_id: uuid.UUID = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db)
):
    return await _toggle(db, actor_id, LikeTarget.TWEET, tweet_id)


@router.get("/videos", response_model=ApiResponse)
async def get_liked_videos(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    actor_id: uuid.UUID = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db)
):
    """Понравившиеся видео текущего пользователя"""
    like_service = LikeService(db)
    videos = await like_service.get_liked_videos(actor_id, page, limit)
    return ApiResponse.ok(videos, "Liked videos fetched successfully")
