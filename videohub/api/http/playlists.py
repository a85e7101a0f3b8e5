from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, Dict, Any
import uuid

from videohub.core.auth import get_current_actor, get_optional_actor
from videohub.core.db import get_db
from videohub.core.responses import ApiResponse
from videohub.domains.playlists.schemas import PlaylistCreate
from videohub.domains.playlists.services import PlaylistService

router = APIRouter(prefix="/playlists", tags=["playlists"])


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_playlist(
    playlist_data: PlaylistCreate,
    actor_id: uuid.UUID = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db)
):
    playlist_service = PlaylistService(db)
    playlist = await playlist_service.create_playlist(actor_id, playlist_data)
    return ApiResponse.ok(playlist, "Playlist created successfully", status.HTTP_201_CREATED)


@router.get("/user/{user_id}", response_model=ApiResponse)
async def get_user_playlists(
    user_id: uuid.UUID,
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    viewer_id: Optional[uuid.UUID] = Depends(get_optional_actor),
    db: AsyncSession = Depends(get_db)
):
    playlist_service = PlaylistService(db)
    playlists = await playlist_service.get_user_playlists(user_id, viewer_id, page, limit)
    return ApiResponse.ok(playlists, "User playlists fetched successfully")


@router.get("/{playlist_id}", response_model=ApiResponse)
async def get_playlist_by_id(
    playlist_id: uuid.UUID,
    viewer_id: Optional[uuid.UUID] = Depends(get_optional_actor),
    db: AsyncSession = Depends(get_db)
):
    playlist_service = PlaylistService(db)
    playlist = await playlist_service.get_playlist(playlist_id, viewer_id)
    return ApiResponse.ok(playlist, "Playlist fetched successfully")


@router.patch("/{playlist_id}", response_model=ApiResponse)
async def update_playlist(
    playlist_id: uuid.UUID,
    update_data: Dict[str, Any] = Body(...),
    actor_id: uuid.UUID = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db)
):
    playlist_service = PlaylistService(db)
    playlist = await playlist_service.update_playlist(actor_id, playlist_id, update_data)
    return ApiResponse.ok(playlist, "Playlist updated successfully")


@router.delete("/{playlist_id}", response_model=ApiResponse)
async def delete_playlist(
    playlist_id: uuid.UUID,
    actor_id: uuid.UUID = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db)
):
    playlist_service = PlaylistService(db)
    await playlist_service.delete_playlist(actor_id, playlist_id)
    return ApiResponse.ok({}, "Playlist deleted successfully")


@router.patch("/add/{video_id}/{playlist_id}", response_model=ApiResponse)
async def add_video_to_playlist(
    video_id: uuid.UUID,
    playlist_id: uuid.UUID,
    actor_id: uuid.UUID = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db)
):
    """Добавление видео в плейлист"""
    playlist_service = PlaylistService(db)
    playlist = await playlist_service.add_video(actor_id, playlist_id, video_id)
    return ApiResponse.ok(playlist, "Video added to playlist successfully")


@router.patch("/remove/{video_id}/{playlist_id}", response_model=ApiResponse)
async def remove_video_from_playlist(
    video_id: uuid.UUID,
    playlist_id: uuid.UUID,
    actor_id: uuid.UUID = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db)
):
    """Удаление видео из плейлиста"""
    playlist_service = PlaylistService(db)
    playlist = await playlist_service.remove_video(actor_id, playlist_id, video_id)
    return ApiResponse.ok(playlist, "Video removed from playlist successfully")
