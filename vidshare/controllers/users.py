"""Account routes: registration, login/logout, token refresh and channel profiles."""

from __future__ import annotations

from typing import Annotated, Any

from litestar import Controller, Request, Response, get, post
from litestar.datastructures import Cookie
from litestar.enums import RequestEncodingType
from litestar.params import Body
from litestar.status_codes import HTTP_201_CREATED
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.auth.identity import ACCESS_COOKIE, REFRESH_COOKIE, Actor
from vidshare.auth.tokens import TokenPair
from vidshare.config import Settings
from vidshare.controllers.helpers import form_file, form_text
from vidshare.db.models import User
from vidshare.db.services import user_service
from vidshare.lib.media import MediaStore
from vidshare.lib.responses import envelope
from vidshare.schemas import AuthOut, ChannelOut, LoginPayload, RefreshPayload, UserOut


def _token_cookies(pair: TokenPair, settings: Settings) -> list[Cookie]:
    common = dict(httponly=True, secure=settings.auth.cookie_secure, samesite=settings.auth.cookie_samesite, path="/")
    return [
        Cookie(key=ACCESS_COOKIE, value=pair.access_token, max_age=settings.auth.access_token_ttl, **common),
        Cookie(key=REFRESH_COOKIE, value=pair.refresh_token, max_age=settings.auth.refresh_token_ttl, **common),
    ]


def _auth_response(user: User, pair: TokenPair, settings: Settings, message: str) -> Response:
    payload = AuthOut(
        user=UserOut.model_validate(user),
        access_token=pair.access_token,
        refresh_token=pair.refresh_token,
    )
    return envelope(payload, message, cookies=_token_cookies(pair, settings))


class UserController(Controller):
    path = "/users"

    @post("/register")
    async def register(
        self,
        db_session: AsyncSession,
        media_store: MediaStore,
        data: Annotated[dict[str, Any], Body(media_type=RequestEncodingType.MULTI_PART)],
    ) -> Response:
        user = await user_service.register_user(
            db_session,
            media_store,
            username=form_text(data, "username"),
            email=form_text(data, "email"),
            full_name=form_text(data, "fullName"),
            password=form_text(data, "password"),
            avatar=form_file(data, "avatar"),
            cover_image=form_file(data, "coverImage"),
        )
        return envelope(UserOut.model_validate(user), "User registered successfully", HTTP_201_CREATED)

    @post("/login")
    async def login(self, db_session: AsyncSession, settings: Settings, data: LoginPayload) -> Response:
        user = await user_service.authenticate(db_session, data.username_or_email, data.password)
        pair = await user_service.issue_tokens(db_session, user, settings)
        return _auth_response(user, pair, settings, "User logged in successfully")

    @post("/logout")
    async def logout(self, db_session: AsyncSession, current_actor: Actor) -> Response:
        await user_service.logout(db_session, current_actor)
        response = envelope({}, "User logged out")
        response.delete_cookie(ACCESS_COOKIE, path="/")
        response.delete_cookie(REFRESH_COOKIE, path="/")
        return response

    @post("/refresh-token")
    async def refresh_token(
        self,
        request: Request,
        db_session: AsyncSession,
        settings: Settings,
        data: RefreshPayload | None = None,
    ) -> Response:
        token = (data.refresh_token if data else None) or request.cookies.get(REFRESH_COOKIE)
        user, pair = await user_service.rotate_tokens(db_session, token, settings)
        return _auth_response(user, pair, settings, "Access token refreshed")

    @get("/current-user")
    async def current_user(self, db_session: AsyncSession, current_actor: Actor) -> Response:
        user = await user_service.get_current_user(db_session, current_actor)
        return envelope(UserOut.model_validate(user), "Current user fetched successfully")

    @get("/c/{username:str}")
    async def channel(self, db_session: AsyncSession, actor: Actor | None, username: str) -> Response:
        profile = await user_service.get_channel_profile(db_session, username, actor)
        channel = ChannelOut(
            **UserOut.model_validate(profile.user).model_dump(),
            subscribers_count=profile.subscribers_count,
            channels_subscribed_to_count=profile.channels_subscribed_to_count,
            is_subscribed=profile.is_subscribed,
        )
        return envelope(channel, "Channel fetched successfully")
