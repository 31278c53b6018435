"""HTTP tests for healthcheck, subscriptions, playlists, tweets and draft access."""

import pytest


class TestHealthcheck:
    @pytest.mark.asyncio
    async def test_ok(self, client):
        response = await client.get("/api/v1/healthcheck")

        assert response.status_code == 200
        assert response.json()["data"] == {"status": "ok"}


class TestSubscriptionRoutes:
    @pytest.mark.asyncio
    async def test_toggle_and_list(self, client, alice, bob, auth_headers):
        url = f"/api/v1/subscriptions/c/{alice.id}/toggle"

        response = await client.post(url, headers=auth_headers(bob))
        assert response.status_code == 201
        assert response.json()["data"]["subscribed"] is True

        response = await client.get(f"/api/v1/subscriptions/c/{alice.id}/subscribers")
        subscribers = response.json()["data"]["subscribers"]
        assert [s["username"] for s in subscribers] == ["bob"]
        assert "subscribedAt" in subscribers[0]

        response = await client.get(f"/api/v1/subscriptions/u/{bob.id}/channels")
        assert [c["username"] for c in response.json()["data"]["channels"]] == ["alice"]

        response = await client.post(url, headers=auth_headers(bob))
        assert response.status_code == 200
        assert response.json()["message"] == "Unsubscribed successfully"

    @pytest.mark.asyncio
    async def test_self_subscription(self, client, alice, auth_headers):
        response = await client.post(f"/api/v1/subscriptions/c/{alice.id}/toggle", headers=auth_headers(alice))
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_malformed_channel(self, client, bob, auth_headers):
        response = await client.post("/api/v1/subscriptions/c/nope/toggle", headers=auth_headers(bob))

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid channelId"


class TestPlaylistRoutes:
    @pytest.mark.asyncio
    async def test_create_add_and_remove(self, client, alice, make_video, auth_headers):
        video = await make_video(alice, title="Sunset")
        headers = auth_headers(alice)

        response = await client.post(
            "/api/v1/playlists", json={"name": "Evenings", "description": "Calm"}, headers=headers
        )
        assert response.status_code == 201
        playlist = response.json()["data"]
        assert playlist["owner"]["username"] == "alice"
        assert playlist["videos"] == []

        response = await client.post(f"/api/v1/playlists/{playlist['id']}/videos/{video.id}", headers=headers)
        assert response.json()["message"] == "Video added to playlist"
        assert [v["title"] for v in response.json()["data"]["videos"]] == ["Sunset"]

        response = await client.delete(f"/api/v1/playlists/{playlist['id']}/videos/{video.id}", headers=headers)
        assert response.json()["data"]["videos"] == []

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete(self, client, alice, bob, auth_headers):
        response = await client.post(
            "/api/v1/playlists", json={"name": "Mine", "description": "Hands off"}, headers=auth_headers(alice)
        )
        playlist_id = response.json()["data"]["id"]

        response = await client.delete(f"/api/v1/playlists/{playlist_id}", headers=auth_headers(bob))

        assert response.status_code == 403
        assert response.json()["message"] == "Not authorized to delete this playlist"


class TestTweetRoutes:
    @pytest.mark.asyncio
    async def test_create_and_list(self, client, alice, auth_headers):
        response = await client.post("/api/v1/tweets", json={"content": "First post"}, headers=auth_headers(alice))
        assert response.status_code == 201
        assert response.json()["message"] == "Tweet created successfully"

        response = await client.get(f"/api/v1/tweets/user/{alice.id}")
        body = response.json()["data"]
        assert [t["content"] for t in body["tweets"]] == ["First post"]
        assert body["meta"]["total"] == 1

    @pytest.mark.asyncio
    async def test_too_long(self, client, alice, auth_headers):
        response = await client.post("/api/v1/tweets", json={"content": "x" * 281}, headers=auth_headers(alice))

        assert response.status_code == 400


class TestDraftInteractions:
    """A draft is a 404 to everyone but its owner, including likes and comments."""

    @pytest.fixture
    async def draft(self, alice, make_video):
        return await make_video(alice, title="Unreleased", published=False)

    @pytest.mark.asyncio
    async def test_other_user_cannot_like(self, client, bob, draft, auth_headers):
        response = await client.post(f"/api/v1/likes/toggle/v/{draft.id}", headers=auth_headers(bob))

        assert response.status_code == 404
        assert response.json()["message"] == "Video not found"

    @pytest.mark.asyncio
    async def test_other_user_cannot_comment(self, client, bob, draft, auth_headers):
        response = await client.post(
            f"/api/v1/comments/{draft.id}", json={"content": "Sneak peek"}, headers=auth_headers(bob)
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_comments_hidden(self, client, bob, draft, auth_headers):
        response = await client.get(f"/api/v1/comments/{draft.id}", headers=auth_headers(bob))
        assert response.status_code == 404

        response = await client.get(f"/api/v1/comments/{draft.id}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_other_user_cannot_like_draft_comment(self, client, alice, bob, draft, auth_headers):
        response = await client.post(
            f"/api/v1/comments/{draft.id}", json={"content": "Note to self"}, headers=auth_headers(alice)
        )
        comment_id = response.json()["data"]["id"]

        response = await client.post(f"/api/v1/likes/toggle/c/{comment_id}", headers=auth_headers(bob))

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_other_user_cannot_playlist(self, client, bob, draft, auth_headers):
        headers = auth_headers(bob)
        response = await client.post(
            "/api/v1/playlists", json={"name": "Later", "description": "Queue"}, headers=headers
        )
        playlist_id = response.json()["data"]["id"]

        response = await client.post(f"/api/v1/playlists/{playlist_id}/videos/{draft.id}", headers=headers)

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_owner_can_like_and_comment(self, client, alice, draft, auth_headers):
        headers = auth_headers(alice)

        response = await client.post(f"/api/v1/likes/toggle/v/{draft.id}", headers=headers)
        assert response.status_code == 201

        response = await client.post(f"/api/v1/comments/{draft.id}", json={"content": "Almost done"}, headers=headers)
        assert response.status_code == 201

        response = await client.get(f"/api/v1/comments/{draft.id}", headers=headers)
        assert [c["content"] for c in response.json()["data"]["comments"]] == ["Almost done"]
