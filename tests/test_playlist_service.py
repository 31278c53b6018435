"""Tests for playlists and their video membership."""

from uuid import uuid4

import pytest
from sqlalchemy import func, select

from vidshare.auth.identity import Actor
from vidshare.db.models import Playlist, playlist_videos
from vidshare.db.services import playlist_service
from vidshare.lib.exceptions import Forbidden, NotFound, ValidationError
from vidshare.lib.pagination import PageParams


async def _memberships(session) -> int:
    return (await session.execute(select(func.count()).select_from(playlist_videos))).scalar_one()


@pytest.fixture
async def playlist(db_session, alice):
    return await playlist_service.create_playlist(db_session, Actor.from_user(alice), "Road trip", "Driving music")


@pytest.fixture
async def video(alice, make_video):
    return await make_video(alice, title="Sunset")


class TestCreatePlaylist:
    @pytest.mark.asyncio
    async def test_creates_owned_playlist(self, playlist, alice):
        assert playlist.owner_id == alice.id
        assert playlist.name == "Road trip"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name, description", [("", "Driving"), ("Road trip", None), ("  ", "  ")])
    async def test_name_and_description_required(self, db_session, alice, name, description):
        with pytest.raises(ValidationError, match="Name and description are required"):
            await playlist_service.create_playlist(db_session, Actor.from_user(alice), name, description)


class TestMembership:
    @pytest.mark.asyncio
    async def test_adding_twice_keeps_one_row(self, db_session, alice, playlist, video):
        actor = Actor.from_user(alice)

        await playlist_service.add_video(db_session, actor, playlist.id, video.id)
        await playlist_service.add_video(db_session, actor, playlist.id, video.id)

        assert await _memberships(db_session) == 1

    @pytest.mark.asyncio
    async def test_remove_video(self, db_session, alice, playlist, video):
        actor = Actor.from_user(alice)
        await playlist_service.add_video(db_session, actor, playlist.id, video.id)

        await playlist_service.remove_video(db_session, actor, playlist.id, video.id)

        assert await _memberships(db_session) == 0

    @pytest.mark.asyncio
    async def test_non_owner_cannot_add(self, db_session, bob, playlist, video):
        with pytest.raises(Forbidden, match="Not authorized to update this playlist"):
            await playlist_service.add_video(db_session, Actor.from_user(bob), playlist.id, video.id)

        assert await _memberships(db_session) == 0

    @pytest.mark.asyncio
    async def test_unknown_video(self, db_session, alice, playlist):
        with pytest.raises(NotFound, match="Video not found"):
            await playlist_service.add_video(db_session, Actor.from_user(alice), playlist.id, uuid4())


class TestUpdateAndDelete:
    @pytest.mark.asyncio
    async def test_no_fields(self, db_session, alice, playlist):
        with pytest.raises(ValidationError, match="No valid fields to update"):
            await playlist_service.update_playlist(db_session, Actor.from_user(alice), playlist.id, name="  ")

    @pytest.mark.asyncio
    async def test_partial_update(self, db_session, alice, playlist):
        updated = await playlist_service.update_playlist(
            db_session, Actor.from_user(alice), playlist.id, description="Long drives"
        )

        assert updated.name == "Road trip"
        assert updated.description == "Long drives"

    @pytest.mark.asyncio
    async def test_delete_clears_membership(self, db_session, alice, playlist, video):
        actor = Actor.from_user(alice)
        await playlist_service.add_video(db_session, actor, playlist.id, video.id)

        await playlist_service.delete_playlist(db_session, actor, playlist.id)

        assert await db_session.get(Playlist, playlist.id) is None
        assert await _memberships(db_session) == 0


class TestListUserPlaylists:
    @pytest.mark.asyncio
    async def test_search_matches_name(self, db_session, alice, playlist):
        await playlist_service.create_playlist(db_session, Actor.from_user(alice), "Workout", "Gym mix")
        params = PageParams.build(1, None, default_limit=playlist_service.DEFAULT_LIMIT, query="road")

        page = await playlist_service.list_user_playlists(db_session, alice.id, params)

        assert [p.name for p in page.items] == ["Road trip"]

    @pytest.mark.asyncio
    async def test_unknown_user(self, db_session):
        params = PageParams.build(1, None, default_limit=playlist_service.DEFAULT_LIMIT)
        with pytest.raises(NotFound, match="User not found"):
            await playlist_service.list_user_playlists(db_session, uuid4(), params)
