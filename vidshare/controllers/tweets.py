from __future__ import annotations

from litestar import Controller, Response, delete, get, patch, post
from litestar.status_codes import HTTP_201_CREATED
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.auth.identity import Actor, parse_reference
from vidshare.controllers.helpers import ListQuery, page_payload
from vidshare.db.services import tweet_service
from vidshare.lib.responses import envelope
from vidshare.schemas import ContentPayload, TweetOut


class TweetController(Controller):
    path = "/tweets"

    @post("/")
    async def create_tweet(self, db_session: AsyncSession, current_actor: Actor, data: ContentPayload) -> Response:
        tweet = await tweet_service.create_tweet(db_session, current_actor, data.content)
        return envelope(TweetOut.model_validate(tweet), "Tweet created successfully", HTTP_201_CREATED)

    @get("/user/{user_id:str}")
    async def user_tweets(self, db_session: AsyncSession, list_query: ListQuery, user_id: str) -> Response:
        page = await tweet_service.list_user_tweets(
            db_session,
            parse_reference(user_id, "userId"),
            list_query.params(tweet_service.DEFAULT_LIMIT),
        )
        return envelope(page_payload(page, TweetOut, "tweets"), "User tweets fetched successfully")

    @patch("/{tweet_id:str}")
    async def update_tweet(
        self, db_session: AsyncSession, current_actor: Actor, tweet_id: str, data: ContentPayload
    ) -> Response:
        tweet = await tweet_service.update_tweet(
            db_session, current_actor, parse_reference(tweet_id, "tweetId"), data.content
        )
        return envelope(TweetOut.model_validate(tweet), "Tweet updated successfully")

    @delete("/{tweet_id:str}", status_code=200)
    async def delete_tweet(self, db_session: AsyncSession, current_actor: Actor, tweet_id: str) -> Response:
        await tweet_service.delete_tweet(db_session, current_actor, parse_reference(tweet_id, "tweetId"))
        return envelope(None, "Tweet deleted successfully")
