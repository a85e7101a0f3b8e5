import uuid

import pytest

from videohub.core.errors import ForbiddenError, NotFoundError, ValidationError
from videohub.domains.playlists.schemas import PlaylistCreate
from videohub.domains.playlists.services import PlaylistService
from videohub.domains.videos.services import VideoService


@pytest.fixture
def playlists(session):
    return PlaylistService(session)


@pytest.fixture
async def favorites(playlists, alice):
    return await playlists.create_playlist(alice.id, PlaylistCreate(name="Favorites", description="desc"))


async def test_create_playlist(favorites):
    assert favorites.name == "Favorites"
    assert favorites.owner.username == "alice"
    assert favorites.total_videos == 0
    assert favorites.total_views == 0
    assert favorites.videos == []


async def test_adding_same_video_twice_is_idempotent(playlists, favorites, make_video, alice):
    video = await make_video(alice, views=7)

    await playlists.add_video(alice.id, favorites.id, video.id)
    view = await playlists.add_video(alice.id, favorites.id, video.id)

    assert view.total_videos == 1
    assert view.total_views == 7
    assert [v.id for v in view.videos] == [video.id]


async def test_videos_keep_insertion_order(playlists, favorites, make_video, alice):
    videos = [await make_video(alice, views=n) for n in (3, 1, 2)]

    for video in reversed(videos):
        view = await playlists.add_video(alice.id, favorites.id, video.id)

    assert [v.id for v in view.videos] == [v.id for v in reversed(videos)]
    assert view.total_views == 6


async def test_remove_absent_video_is_noop(playlists, favorites, make_video, alice):
    present = await make_video(alice)
    absent = await make_video(alice)
    before = await playlists.add_video(alice.id, favorites.id, present.id)

    after = await playlists.remove_video(alice.id, favorites.id, absent.id)

    assert [v.id for v in after.videos] == [present.id]
    assert after.updated_at == before.updated_at


async def test_remove_video(playlists, favorites, make_video, alice):
    video = await make_video(alice)
    await playlists.add_video(alice.id, favorites.id, video.id)

    view = await playlists.remove_video(alice.id, favorites.id, video.id)

    assert view.total_videos == 0


async def test_add_missing_video(playlists, favorites, alice):
    with pytest.raises(NotFoundError):
        await playlists.add_video(alice.id, favorites.id, uuid.uuid4())


async def test_non_owner_cannot_modify(playlists, favorites, make_video, alice, bob):
    video = await make_video(bob)

    with pytest.raises(ForbiddenError):
        await playlists.add_video(bob.id, favorites.id, video.id)
    with pytest.raises(ForbiddenError):
        await playlists.remove_video(bob.id, favorites.id, video.id)
    with pytest.raises(ForbiddenError):
        await playlists.update_playlist(bob.id, favorites.id, {"name": ""})
    with pytest.raises(ForbiddenError):
        await playlists.delete_playlist(bob.id, favorites.id)


async def test_update_playlist(playlists, favorites, alice):
    view = await playlists.update_playlist(alice.id, favorites.id, {"name": " Best "})

    assert view.name == "Best"
    assert view.description == "desc"
    assert view.updated_at >= favorites.updated_at

    with pytest.raises(ValidationError):
        await playlists.update_playlist(alice.id, favorites.id, {})


async def test_hidden_videos_excluded_from_totals(playlists, favorites, make_video, alice, bob):
    public = await make_video(alice, views=10)
    draft = await make_video(alice, views=100)
    await playlists.add_video(alice.id, favorites.id, public.id)
    await playlists.add_video(alice.id, favorites.id, draft.id)
    await VideoService(playlists.session).toggle_publish_status(alice.id, draft.id)

    as_owner = await playlists.get_playlist(favorites.id, viewer_id=alice.id)
    as_bob = await playlists.get_playlist(favorites.id, viewer_id=bob.id)

    assert as_owner.total_videos == 2
    assert as_bob.total_videos == 1
    assert as_bob.total_views == 10


async def test_user_playlists_summary(playlists, favorites, make_video, alice):
    await playlists.create_playlist(alice.id, PlaylistCreate(name="Later", description="watch later"))
    video = await make_video(alice, views=4)
    await playlists.add_video(alice.id, favorites.id, video.id)

    page = await playlists.get_user_playlists(alice.id, viewer_id=alice.id)

    assert page.total_items == 2
    by_name = {p.name: p for p in page.items}
    assert by_name["Favorites"].total_videos == 1
    assert by_name["Favorites"].total_views == 4
    assert by_name["Later"].total_videos == 0


async def test_delete_playlist(playlists, favorites, make_video, alice):
    video = await make_video(alice)
    await playlists.add_video(alice.id, favorites.id, video.id)

    await playlists.delete_playlist(alice.id, favorites.id)

    with pytest.raises(NotFoundError):
        await playlists.get_playlist(favorites.id)
