from __future__ import annotations

from litestar import Controller, Response, get, post
from litestar.status_codes import HTTP_201_CREATED
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.auth.identity import Actor, parse_reference
from vidshare.controllers.helpers import ListQuery, page_payload
from vidshare.db.models import LikeTarget
from vidshare.db.services import like_service
from vidshare.lib.responses import envelope
from vidshare.schemas import LikeOut, VideoOut


async def _toggle(db_session: AsyncSession, actor: Actor, target: LikeTarget, label: str) -> Response:
    result = await like_service.toggle_like(db_session, actor, target)
    if not result.active:
        return envelope({"liked": False}, f"{label} unliked")
    return envelope(
        {"liked": True, "like": LikeOut.model_validate(result.record) if result.record else None},
        f"{label} liked",
        HTTP_201_CREATED,
    )


class LikeController(Controller):
    path = "/likes"

    @post("/toggle/v/{video_id:str}")
    async def toggle_video_like(self, db_session: AsyncSession, current_actor: Actor, video_id: str) -> Response:
        target = LikeTarget.video(parse_reference(video_id, "videoId"))
        return await _toggle(db_session, current_actor, target, "Video")

    @post("/toggle/c/{comment_id:str}")
    async def toggle_comment_like(self, db_session: AsyncSession, current_actor: Actor, comment_id: str) -> Response:
        target = LikeTarget.comment(parse_reference(comment_id, "commentId"))
        return await _toggle(db_session, current_actor, target, "Comment")

    @post("/toggle/t/{tweet_id:str}")
    async def toggle_tweet_like(self, db_session: AsyncSession, current_actor: Actor, tweet_id: str) -> Response:
        target = LikeTarget.tweet(parse_reference(tweet_id, "tweetId"))
        return await _toggle(db_session, current_actor, target, "Tweet")

    @get("/videos")
    async def liked_videos(self, db_session: AsyncSession, current_actor: Actor, list_query: ListQuery) -> Response:
        page = await like_service.list_liked_videos(
            db_session, current_actor, list_query.params(like_service.DEFAULT_LIMIT)
        )
        return envelope(page_payload(page, VideoOut, "videos"), "Liked videos fetched successfully")
