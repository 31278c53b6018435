from __future__ import annotations

from typing import Annotated, Any

from litestar import Controller, Response, delete, get, patch, post
from litestar.enums import RequestEncodingType
from litestar.params import Body, Parameter
from litestar.status_codes import HTTP_201_CREATED
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.auth.identity import Actor, parse_reference
from vidshare.controllers.helpers import ListQuery, form_file, form_float, form_text, page_payload
from vidshare.db.models import LikeTarget
from vidshare.db.services import like_service, video_service
from vidshare.lib.media import MediaStore
from vidshare.lib.responses import envelope
from vidshare.schemas import VideoDetailOut, VideoOut


class VideoController(Controller):
    path = "/videos"

    @get("/")
    async def list_videos(
        self,
        db_session: AsyncSession,
        actor: Actor | None,
        list_query: ListQuery,
        user_id: Annotated[str | None, Parameter(query="userId")] = None,
    ) -> Response:
        owner_id = parse_reference(user_id, "userId") if user_id else None
        page = await video_service.list_videos(
            db_session,
            list_query.params(video_service.DEFAULT_LIMIT),
            actor=actor,
            owner_id=owner_id,
        )
        return envelope(page_payload(page, VideoOut, "videos"), "Videos fetched successfully")

    @post("/")
    async def publish(
        self,
        db_session: AsyncSession,
        media_store: MediaStore,
        current_actor: Actor,
        data: Annotated[dict[str, Any], Body(media_type=RequestEncodingType.MULTI_PART)],
    ) -> Response:
        video = await video_service.publish_video(
            db_session,
            media_store,
            current_actor,
            title=form_text(data, "title"),
            description=form_text(data, "description"),
            video_file=form_file(data, "videoFile"),
            thumbnail=form_file(data, "thumbnail"),
            duration=form_float(data, "duration"),
        )
        return envelope(VideoOut.model_validate(video), "Video published successfully", HTTP_201_CREATED)

    @get("/{video_id:str}")
    async def get_video(self, db_session: AsyncSession, actor: Actor | None, video_id: str) -> Response:
        video = await video_service.get_video(db_session, parse_reference(video_id, "videoId"), actor)
        likes = await like_service.count_likes(db_session, LikeTarget.video(video.id))
        detail = VideoDetailOut(**VideoOut.model_validate(video).model_dump(), likes_count=likes)
        return envelope(detail, "Video fetched successfully")

    @patch("/{video_id:str}")
    async def update_video(
        self,
        db_session: AsyncSession,
        media_store: MediaStore,
        current_actor: Actor,
        video_id: str,
        data: Annotated[dict[str, Any], Body(media_type=RequestEncodingType.MULTI_PART)],
    ) -> Response:
        video = await video_service.update_video(
            db_session,
            media_store,
            current_actor,
            parse_reference(video_id, "videoId"),
            title=form_text(data, "title"),
            description=form_text(data, "description"),
            thumbnail=form_file(data, "thumbnail"),
        )
        return envelope(VideoOut.model_validate(video), "Video updated successfully")

    @delete("/{video_id:str}", status_code=200)
    async def delete_video(self, db_session: AsyncSession, current_actor: Actor, video_id: str) -> Response:
        await video_service.delete_video(db_session, current_actor, parse_reference(video_id, "videoId"))
        return envelope(None, "Video deleted successfully")

    @patch("/toggle/publish/{video_id:str}")
    async def toggle_publish(self, db_session: AsyncSession, current_actor: Actor, video_id: str) -> Response:
        video = await video_service.toggle_publish(db_session, current_actor, parse_reference(video_id, "videoId"))
        return envelope(VideoOut.model_validate(video), "Video publish status updated successfully")
