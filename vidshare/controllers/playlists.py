from __future__ import annotations

from litestar import Controller, Response, delete, get, patch, post
from litestar.status_codes import HTTP_201_CREATED
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.auth.identity import Actor, parse_reference
from vidshare.controllers.helpers import ListQuery, page_payload
from vidshare.db.services import playlist_service
from vidshare.lib.responses import envelope
from vidshare.schemas import PlaylistOut, PlaylistPayload


class PlaylistController(Controller):
    path = "/playlists"

    @post("/")
    async def create_playlist(self, db_session: AsyncSession, current_actor: Actor, data: PlaylistPayload) -> Response:
        playlist = await playlist_service.create_playlist(db_session, current_actor, data.name, data.description)
        return envelope(PlaylistOut.model_validate(playlist), "Playlist created successfully", HTTP_201_CREATED)

    @get("/{playlist_id:str}")
    async def get_playlist(self, db_session: AsyncSession, playlist_id: str) -> Response:
        playlist = await playlist_service.get_playlist(db_session, parse_reference(playlist_id, "playlistId"))
        return envelope(PlaylistOut.model_validate(playlist), "Playlist fetched successfully")

    @get("/user/{user_id:str}")
    async def user_playlists(self, db_session: AsyncSession, list_query: ListQuery, user_id: str) -> Response:
        page = await playlist_service.list_user_playlists(
            db_session,
            parse_reference(user_id, "userId"),
            list_query.params(playlist_service.DEFAULT_LIMIT),
        )
        return envelope(page_payload(page, PlaylistOut, "playlists"), "User playlists fetched successfully")

    @patch("/{playlist_id:str}")
    async def update_playlist(
        self, db_session: AsyncSession, current_actor: Actor, playlist_id: str, data: PlaylistPayload
    ) -> Response:
        playlist = await playlist_service.update_playlist(
            db_session,
            current_actor,
            parse_reference(playlist_id, "playlistId"),
            name=data.name,
            description=data.description,
        )
        return envelope(PlaylistOut.model_validate(playlist), "Playlist updated successfully")

    @delete("/{playlist_id:str}", status_code=200)
    async def delete_playlist(self, db_session: AsyncSession, current_actor: Actor, playlist_id: str) -> Response:
        await playlist_service.delete_playlist(db_session, current_actor, parse_reference(playlist_id, "playlistId"))
        return envelope(None, "Playlist deleted successfully")

    @post("/{playlist_id:str}/videos/{video_id:str}")
    async def add_video(
        self, db_session: AsyncSession, current_actor: Actor, playlist_id: str, video_id: str
    ) -> Response:
        playlist = await playlist_service.add_video(
            db_session,
            current_actor,
            parse_reference(playlist_id, "playlistId"),
            parse_reference(video_id, "videoId"),
        )
        return envelope(PlaylistOut.model_validate(playlist), "Video added to playlist")

    @delete("/{playlist_id:str}/videos/{video_id:str}", status_code=200)
    async def remove_video(
        self, db_session: AsyncSession, current_actor: Actor, playlist_id: str, video_id: str
    ) -> Response:
        playlist = await playlist_service.remove_video(
            db_session,
            current_actor,
            parse_reference(playlist_id, "playlistId"),
            parse_reference(video_id, "videoId"),
        )
        return envelope(PlaylistOut.model_validate(playlist), "Video removed from playlist")
