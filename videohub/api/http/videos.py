from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import uuid

from videohub.core.auth import get_current_actor, get_optional_actor
from videohub.core.blob_storage import BlobStorageClient, MediaFile, get_blob_storage
from videohub.core.db import get_db
from videohub.core.responses import ApiResponse
from videohub.domains.videos.schemas import VideoCreate
from videohub.domains.videos.services import VideoService

router = APIRouter(prefix="/videos", tags=["videos"])


async def _read_upload(upload: Optional[UploadFile]) -> Optional[MediaFile]:
    if upload is None:
        return None
    return MediaFile(
        filename=upload.filename or "upload",
        content=await upload.read(),
        content_type=upload.content_type or "application/octet-stream"
    )


@router.get("", response_model=ApiResponse)
async def get_all_videos(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    query: Optional[str] = Query(None, max_length=100),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_type: Optional[str] = Query(None, alias="sortType"),
    user_id: Optional[uuid.UUID] = Query(None, alias="userId"),
    viewer_id: Optional[uuid.UUID] = Depends(get_optional_actor),
    db: AsyncSession = Depends(get_db)
):
    """Лента опубликованных видео"""
    video_service = VideoService(db)

    videos = await video_service.list_videos(
        viewer_id=viewer_id,
        query=query,
        owner_id=user_id,
        sort_by=sort_by,
        sort_type=sort_type,
        page=page,
        limit=limit
    )

    return ApiResponse.ok(videos, "Videos fetched successfully")


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def publish_video(
    title: str = Form(...),
    description: str = Form(...),
    video_file: UploadFile = File(..., alias="videoFile"),
    thumbnail: UploadFile = File(...),
    actor_id: uuid.UUID = Depends(get_current_actor),
    blob_storage: BlobStorageClient = Depends(get_blob_storage),
    db: AsyncSession = Depends(get_db)
):
    """Публикация видео"""
    video_service = VideoService(db, blob_storage)

    video = await video_service.publish_video(
        actor_id,
        VideoCreate(title=title, description=description),
        await _read_upload(video_file),
        await _read_upload(thumbnail)
    )

    return ApiResponse.ok(video, "Video published successfully", status.HTTP_201_CREATED)


@router.get("/{video_id}", response_model=ApiResponse)
async def get_video_by_id(
    video_id: uuid.UUID,
    viewer_id: Optional[uuid.UUID] = Depends(get_optional_actor),
    db: AsyncSession = Depends(get_db)
):
    video_service = VideoService(db)
    video = await video_service.get_video(video_id, viewer_id)
    return ApiResponse.ok(video, "Video details")


@router.patch("/{video_id}", response_model=ApiResponse)
async def update_video(
    video_id: uuid.UUID,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    thumbnail: Optional[UploadFile] = File(None),
    actor_id: uuid.UUID = Depends(get_current_actor),
    blob_storage: BlobStorageClient = Depends(get_blob_storage),
    db: AsyncSession = Depends(get_db)
):
    """Обновление видео"""
    video_service = VideoService(db, blob_storage)

    video = await video_service.update_video(
        actor_id,
        video_id,
        {key: value for key, value in {"title": title, "description": description}.items() if value is not None},
        await _read_upload(thumbnail)
    )

    return ApiResponse.ok(video, "Video updated successfully")


@router.delete("/{video_id}", response_model=ApiResponse)
async def delete_video(
    video_id: uuid.UUID,
    actor_id: uuid.UUID = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db)
):
    video_service = VideoService(db)
    await video_service.delete_video(actor_id, video_id)
    return ApiResponse.ok({}, "Video deleted successfully")


@router.patch("/toggle/publish/{video_id}", response_model=ApiResponse)
async def toggle_publish_status(
    video_id: uuid.UUID,
    actor_id: uuid.UUID = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db)
):
    video_service = VideoService(db)
    result = await video_service.toggle_publish_status(actor_id, video_id)
    return ApiResponse.ok(result, "Video publish status toggled successfully")
