"""HTTP tests for the like toggles."""

from uuid import uuid4

import pytest
from sqlalchemy import func, select

from vidshare.db.models import Like


async def _like_count(session_maker) -> int:
    async with session_maker() as session:
        return (await session.execute(select(func.count()).select_from(Like))).scalar_one()


class TestToggleVideoLike:
    @pytest.mark.asyncio
    async def test_like_then_unlike(self, client, session_maker, alice, bob, make_video, auth_headers):
        video = await make_video(alice, title="Sunset")
        url = f"/api/v1/likes/toggle/v/{video.id}"

        response = await client.post(url, headers=auth_headers(bob))
        assert response.status_code == 201
        body = response.json()
        assert body["statusCode"] == 201
        assert body["data"]["liked"] is True
        assert body["data"]["like"]["targetKind"] == "video"
        assert await _like_count(session_maker) == 1

        response = await client.post(url, headers=auth_headers(bob))
        assert response.status_code == 200
        assert response.json()["data"] == {"liked": False}
        assert await _like_count(session_maker) == 0

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client, alice, make_video):
        video = await make_video(alice)

        response = await client.post(f"/api/v1/likes/toggle/v/{video.id}")

        assert response.status_code == 401
        assert response.json() == {"statusCode": 401, "message": "Unauthorized request"}

    @pytest.mark.asyncio
    async def test_malformed_id(self, client, bob, auth_headers):
        response = await client.post("/api/v1/likes/toggle/v/not-an-id", headers=auth_headers(bob))

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid videoId"

    @pytest.mark.asyncio
    async def test_unknown_video(self, client, session_maker, bob, auth_headers):
        response = await client.post(f"/api/v1/likes/toggle/v/{uuid4()}", headers=auth_headers(bob))

        assert response.status_code == 404
        assert await _like_count(session_maker) == 0


class TestLikedVideos:
    @pytest.mark.asyncio
    async def test_lists_liked_published_videos(self, client, alice, bob, make_video, auth_headers):
        liked = await make_video(alice, title="Liked")
        draft = await make_video(alice, title="Draft", published=False)
        await make_video(alice, title="Ignored")

        for video in (liked, draft):
            await client.post(f"/api/v1/likes/toggle/v/{video.id}", headers=auth_headers(alice))

        response = await client.get("/api/v1/likes/videos", headers=auth_headers(alice))

        assert response.status_code == 200
        data = response.json()["data"]
        assert [v["title"] for v in data["videos"]] == ["Liked"]
        assert data["meta"]["total"] == 1
        assert data["meta"]["limit"] == 20
