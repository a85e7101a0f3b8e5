import uuid

import pytest
from sqlalchemy import func, select

from videohub.core.errors import ConflictError, NotFoundError
from videohub.db.models import Like, LikeTarget
from videohub.db.repositories.like_repository import LikeRepository
from videohub.domains.comments.schemas import CommentCreate
from videohub.domains.comments.services import CommentService
from videohub.domains.likes.services import LikeService
from videohub.domains.shared.cascade import CascadeCoordinator
from videohub.domains.tweets.schemas import TweetCreate
from videohub.domains.tweets.services import TweetService
from videohub.domains.videos.services import VideoService


@pytest.fixture
def likes(session):
    return LikeService(session)


async def like_rows(session, kind, target_id):
    stmt = select(func.count()).select_from(Like).where(Like.target_kind == kind, Like.target_id == target_id)
    return (await session.execute(stmt)).scalar_one()


async def test_like_then_unlike_video(session, likes, make_video, alice, bob):
    video = await make_video(alice)
    videos = VideoService(session)

    assert (await likes.toggle_video_like(bob.id, video.id)).is_liked is True
    view = await videos.get_video(video.id, viewer_id=bob.id)
    assert view.likes_count == 1
    assert view.is_liked is True

    assert (await likes.toggle_video_like(bob.id, video.id)).is_liked is False
    view = await videos.get_video(video.id, viewer_id=bob.id)
    assert view.likes_count == 0
    assert view.is_liked is False


@pytest.mark.parametrize("toggles", [1, 2, 3, 4, 5])
async def test_toggle_parity(session, likes, make_video, alice, bob, toggles):
    video = await make_video(alice)

    for _ in range(toggles):
        status = await likes.toggle_video_like(bob.id, video.id)

    assert status.is_liked is (toggles % 2 == 1)
    assert await like_rows(session, LikeTarget.VIDEO, video.id) == toggles % 2


async def test_likes_are_per_actor(session, likes, make_video, alice, bob, carol):
    video = await make_video(alice)

    await likes.toggle_video_like(bob.id, video.id)
    await likes.toggle_video_like(carol.id, video.id)
    await likes.toggle_video_like(bob.id, video.id)

    view = await VideoService(session).get_video(video.id, viewer_id=carol.id)
    assert view.likes_count == 1
    assert view.is_liked is True


async def test_toggle_comment_and_tweet(session, likes, make_video, alice, bob):
    video = await make_video(alice)
    comment = await CommentService(session).add_comment(alice.id, video.id, CommentCreate(content="hi"))
    tweet = await TweetService(session).create_tweet(alice.id, TweetCreate(content="hello"))

    assert (await likes.toggle_comment_like(bob.id, comment.id)).is_liked is True
    assert (await likes.toggle_tweet_like(bob.id, tweet.id)).is_liked is True
    assert await like_rows(session, LikeTarget.COMMENT, comment.id) == 1
    assert await like_rows(session, LikeTarget.TWEET, tweet.id) == 1


async def test_same_id_different_kind_is_a_different_target(session, likes, make_video, alice, bob):
    video = await make_video(alice)
    await likes.toggle_video_like(bob.id, video.id)

    with pytest.raises(NotFoundError):
        await likes.toggle_tweet_like(bob.id, video.id)
    assert await like_rows(session, LikeTarget.TWEET, video.id) == 0


@pytest.mark.parametrize("method", ["toggle_video_like", "toggle_comment_like", "toggle_tweet_like"])
async def test_missing_target_is_not_found(session, likes, bob, method):
    with pytest.raises(NotFoundError):
        await getattr(likes, method)(bob.id, uuid.uuid4())

    assert (await session.execute(select(func.count()).select_from(Like))).scalar_one() == 0


async def test_cannot_like_someone_elses_draft(likes, make_video, alice, bob):
    draft = await make_video(alice, is_published=False)

    with pytest.raises(NotFoundError):
        await likes.toggle_video_like(bob.id, draft.id)


async def test_liked_videos(likes, make_video, alice, bob):
    first = await make_video(alice, title="first")
    second = await make_video(alice, title="second")
    await make_video(alice, title="not liked")

    await likes.toggle_video_like(bob.id, first.id)
    await likes.toggle_video_like(bob.id, second.id)

    page = await likes.get_liked_videos(bob.id)

    assert {item.id for item in page.items} == {first.id, second.id}
    assert page.total_items == 2
    assert all(item.is_liked for item in page.items)
    assert all(item.owner.username == "alice" for item in page.items)


async def test_liked_videos_hide_unpublished(session, likes, make_video, alice, bob):
    video = await make_video(alice)
    await likes.toggle_video_like(bob.id, video.id)

    await VideoService(session).toggle_publish_status(alice.id, video.id)

    page = await likes.get_liked_videos(bob.id)
    assert page.items == []
    assert page.total_items == 0


async def test_purge_orphan_likes(session, likes, alice, bob):
    tweets = TweetService(session, cascade_likes=False)
    tweet = await tweets.create_tweet(alice.id, TweetCreate(content="short lived"))
    kept = await tweets.create_tweet(alice.id, TweetCreate(content="kept"))
    await likes.toggle_tweet_like(bob.id, tweet.id)
    await likes.toggle_tweet_like(bob.id, kept.id)

    await tweets.delete_tweet(alice.id, tweet.id)
    assert await like_rows(session, LikeTarget.TWEET, tweet.id) == 1

    assert await likes.purge_orphan_likes() == 1
    assert await like_rows(session, LikeTarget.TWEET, tweet.id) == 0
    assert await like_rows(session, LikeTarget.TWEET, kept.id) == 1


async def test_cannot_like_comment_on_someone_elses_draft(session, likes, make_video, alice, bob):
    draft = await make_video(alice, is_published=False)
    comment = await CommentService(session).add_comment(alice.id, draft.id, CommentCreate(content="note"))

    with pytest.raises(NotFoundError):
        await likes.toggle_comment_like(bob.id, comment.id)

    assert (await likes.toggle_comment_like(alice.id, comment.id)).is_liked is True
    assert await like_rows(session, LikeTarget.COMMENT, comment.id) == 1


async def test_like_does_not_outlive_video_deleted_mid_toggle(
    session, session_factory, likes, make_video, monkeypatch, alice, bob
):
    video = await make_video(alice)
    insert_if_absent = LikeRepository.insert_if_absent

    async def delete_video_then_insert(self, actor_id, kind, target_id):
        async with session_factory() as other:
            await CascadeCoordinator(other).delete_video(target_id)
        return await insert_if_absent(self, actor_id, kind, target_id)

    monkeypatch.setattr(LikeRepository, "insert_if_absent", delete_video_then_insert)

    with pytest.raises(NotFoundError):
        await likes.toggle_video_like(bob.id, video.id)

    assert await like_rows(session, LikeTarget.VIDEO, video.id) == 0


async def test_like_removed_concurrently_is_a_conflict(session, likes, make_video, monkeypatch, alice, bob):
    video = await make_video(alice)
    await likes.toggle_video_like(bob.id, video.id)

    async def already_removed(self, actor_id, kind, target_id):
        return 0

    monkeypatch.setattr(LikeRepository, "delete_one", already_removed)

    with pytest.raises(ConflictError):
        await likes.toggle_video_like(bob.id, video.id)

    assert await like_rows(session, LikeTarget.VIDEO, video.id) == 1
