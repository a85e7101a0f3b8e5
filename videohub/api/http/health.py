from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from videohub.core.db import get_db
from videohub.core.errors import DependencyError
from videohub.core.responses import ApiResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=ApiResponse)
async def health(db: AsyncSession = Depends(get_db)):
    """Проверка доступности хранилища"""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        raise DependencyError("Database is unavailable") from e
    return ApiResponse.ok({"status": "ok"}, "Service is healthy")
