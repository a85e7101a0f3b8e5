from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, Dict, Any
import uuid

from videohub.core.auth import get_current_actor, get_optional_actor
from videohub.core.db import get_db
from videohub.core.responses import ApiResponse
from videohub.domains.comments.schemas import CommentCreate
from videohub.domains.comments.services import CommentService

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("/{video_id}", response_model=ApiResponse)
async def get_video_comments(
    video_id: uuid.UUID,
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    viewer_id: Optional[uuid.UUID] = Depends(get_optional_actor),
    db: AsyncSession = Depends(get_db)
):
    """Комментарии к видео"""
    comment_service = CommentService(db)
    comments = await comment_service.get_video_comments(video_id, viewer_id, page, limit)
    return ApiResponse.ok(comments, "Video comments fetched successfully")


@router.post("/{video_id}", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def add_comment(
    video_id: uuid.UUID,
    comment_data: CommentCreate,
    actor_id: uuid.UUID = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db)
):
    comment_service = CommentService(db)
    comment = await comment_service.add_comment(actor_id, video_id, comment_data)
    return ApiResponse.ok(comment, "Comment added successfully", status.HTTP_201_CREATED)


@router.patch("/c/{comment_id}", response_model=ApiResponse)
async def update_comment(
    comment_id: uuid.UUID,
    update_data: Dict[str, Any] = Body(...),
    actor_id: uuid.UUID = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db)
):
    comment_service = CommentService(db)
    comment = await comment_service.update_comment(actor_id, comment_id, update_data)
    return ApiResponse.ok(comment, "Comment updated successfully")


@router.delete("/c/{comment_id}", response_model=ApiResponse)
async def delete_comment(
    comment_id: uuid.UUID,
    actor_id: uuid.UUID = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db)
):
    comment_service = CommentService(db)
    deleted_id = await comment_service.delete_comment(actor_id, comment_id)
    return ApiResponse.ok(str(deleted_id), "Comment deleted successfully")
