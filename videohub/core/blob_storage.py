from dataclasses import dataclass
from typing import Optional

import httpx
import structlog

from videohub.core.config import settings
from videohub.core.errors import DependencyError

logger = structlog.get_logger(__name__)


@dataclass
class UploadedMedia:
    url: str
    duration: float = 0.0
    public_id: Optional[str] = None


@dataclass
class MediaFile:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


class BlobStorageClient:
    """Клиент внешнего blob storage: принимает байты, возвращает ссылку и метаданные"""

    def __init__(self, base_url: str = None, token: str = None, timeout: float = None):
        self.base = (base_url if base_url is not None else settings.blob_storage_url).rstrip("/")
        self.token = token if token is not None else settings.blob_storage_token
        self.timeout = timeout or settings.blob_storage_timeout

    async def upload(self, media: MediaFile) -> UploadedMedia:
        if not self.base:
            raise DependencyError("Blob storage is not configured")

        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        files = {"file": (media.filename, media.content, media.content_type)}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(f"{self.base}/upload", headers=headers, files=files)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as e:
            logger.error("blob_upload_failed", filename=media.filename, error=str(e))
            raise DependencyError("Failed to upload media to blob storage") from e

        url = data.get("secure_url") or data.get("url")
        if not url:
            raise DependencyError("Blob storage returned no url")

        logger.info("blob_uploaded", filename=media.filename, url=url)
        return UploadedMedia(
            url=url,
            duration=float(data.get("duration") or 0.0),
            public_id=data.get("public_id"),
        )


def get_blob_storage() -> BlobStorageClient:
    return BlobStorageClient()
