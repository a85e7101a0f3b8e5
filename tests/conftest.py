"""
Test configuration and fixtures for VideoHub.

Every test gets a fresh in-memory SQLite database built from the ORM metadata.
"""

import uuid
from datetime import datetime, timedelta
from typing import List

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from videohub.core.blob_storage import MediaFile, UploadedMedia
from videohub.core.errors import DependencyError
from videohub.db.base import Base
from videohub.db.models import Video, Subscription
from videohub.db.repositories.user_repository import UserRepository


class FakeBlobStorage:
    """Blob storage that records uploads instead of sending them anywhere."""

    def __init__(self, duration: float = 42.5, fail: bool = False):
        self.duration = duration
        self.fail = fail
        self.uploads: List[MediaFile] = []

    async def upload(self, media: MediaFile) -> UploadedMedia:
        if self.fail:
            raise DependencyError("Failed to upload media to blob storage")
        self.uploads.append(media)
        return UploadedMedia(
            url=f"https://blobs.test/{len(self.uploads)}/{media.filename}",
            duration=self.duration,
        )


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def blob_storage():
    return FakeBlobStorage()


@pytest.fixture
async def users(session):
    """Three provisioned users: alice, bob and carol."""
    repo = UserRepository(session)
    return {
        name: await repo.create(
            username=name,
            full_name=name.capitalize() + " Tester",
            avatar_url=f"https://avatars.test/{name}.png",
        )
        for name in ("alice", "bob", "carol")
    }


@pytest.fixture
def alice(users):
    return users["alice"]


@pytest.fixture
def bob(users):
    return users["bob"]


@pytest.fixture
def carol(users):
    return users["carol"]


@pytest.fixture
def make_video(session):
    """Insert a video row directly, with control over views, publish flag and timestamps."""
    base_time = datetime(2024, 1, 1, 12, 0, 0)
    counter = {"n": 0}

    async def _make(owner, title=None, views=0, is_published=True, description="A video", created_at=None):
        counter["n"] += 1
        video = Video(
            id=uuid.uuid4(),
            owner_id=owner.id,
            title=title or f"Video {counter['n']}",
            description=description,
            video_url=f"https://blobs.test/video-{counter['n']}.mp4",
            thumbnail_url=f"https://blobs.test/thumb-{counter['n']}.png",
            duration=60.0,
            views=views,
            is_published=is_published,
            created_at=created_at or base_time + timedelta(minutes=counter["n"]),
        )
        session.add(video)
        await session.commit()
        return video

    return _make


@pytest.fixture
def subscribe(session):
    async def _subscribe(channel, subscriber):
        session.add(Subscription(id=uuid.uuid4(), channel_id=channel.id, subscriber_id=subscriber.id))
        await session.commit()

    return _subscribe


@pytest.fixture
def failing_blob_storage():
    return FakeBlobStorage(fail=True)
