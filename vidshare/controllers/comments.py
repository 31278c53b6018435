from __future__ import annotations

from litestar import Controller, Response, delete, get, patch, post
from litestar.status_codes import HTTP_201_CREATED
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.auth.identity import Actor, parse_reference
from vidshare.controllers.helpers import ListQuery, page_payload
from vidshare.db.services import comment_service
from vidshare.lib.responses import envelope
from vidshare.schemas import CommentOut, ContentPayload


class CommentController(Controller):
    path = "/comments"

    @get("/{video_id:str}")
    async def list_comments(
        self, db_session: AsyncSession, actor: Actor | None, list_query: ListQuery, video_id: str
    ) -> Response:
        page = await comment_service.list_comments(
            db_session,
            parse_reference(video_id, "videoId"),
            list_query.params(comment_service.DEFAULT_LIMIT),
            actor,
        )
        return envelope(page_payload(page, CommentOut, "comments"), "Comments fetched successfully")

    @post("/{video_id:str}")
    async def add_comment(
        self, db_session: AsyncSession, current_actor: Actor, video_id: str, data: ContentPayload
    ) -> Response:
        comment = await comment_service.add_comment(
            db_session, current_actor, parse_reference(video_id, "videoId"), data.content
        )
        return envelope(CommentOut.model_validate(comment), "Comment added successfully", HTTP_201_CREATED)

    @patch("/c/{comment_id:str}")
    async def update_comment(
        self, db_session: AsyncSession, current_actor: Actor, comment_id: str, data: ContentPayload
    ) -> Response:
        comment = await comment_service.update_comment(
            db_session, current_actor, parse_reference(comment_id, "commentId"), data.content
        )
        return envelope(CommentOut.model_validate(comment), "Comment updated successfully")

    @delete("/c/{comment_id:str}", status_code=200)
    async def delete_comment(self, db_session: AsyncSession, current_actor: Actor, comment_id: str) -> Response:
        await comment_service.delete_comment(db_session, current_actor, parse_reference(comment_id, "commentId"))
        return envelope(None, "Comment deleted successfully")
