"""Litestar application factory and the configuration helpers it uses."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from advanced_alchemy.config import EngineConfig
from advanced_alchemy.extensions.litestar import AsyncSessionConfig, SQLAlchemyPlugin
from litestar import Litestar, Router
from litestar.config.cors import CORSConfig
from litestar.di import Provide
from litestar.exceptions import HTTPException
from litestar.static_files import create_static_files_router
from sqlalchemy.exc import IntegrityError

from vidshare.auth.identity import provide_actor, provide_current_actor
from vidshare.controllers import (
    CommentController,
    LikeController,
    PlaylistController,
    SubscriptionController,
    TweetController,
    UserController,
    VideoController,
    healthcheck,
)
from vidshare.controllers.helpers import provide_list_query, provide_media_store, provide_settings
from vidshare.db.base import Base
from vidshare.db.session import SafeSQLAlchemyAsyncConfig
from vidshare.lib import observability
from vidshare.lib.exceptions import (
    http_exception_handler,
    integrity_error_handler,
    internal_server_error_handler,
)
from vidshare.lib.media import MediaStore
from vidshare.lib.storage import StorageManager

if TYPE_CHECKING:
    from vidshare.config import Settings

logger = logging.getLogger(__name__)

EXCEPTION_HANDLERS: dict[type[Exception], Any] = {
    HTTPException: http_exception_handler,
    IntegrityError: integrity_error_handler,
    Exception: internal_server_error_handler,
}


def build_db_config(settings: Settings) -> SafeSQLAlchemyAsyncConfig:
    """Build the advanced-alchemy config; SQLite gets no pool options."""
    if "sqlite" in settings.db.url:
        engine_config = EngineConfig(echo=settings.db.echo)
    else:
        engine_config = EngineConfig(
            pool_size=settings.db.pool_size,
            max_overflow=settings.db.pool_overflow,
            pool_timeout=settings.db.pool_timeout,
            pool_pre_ping=settings.db.pool_pre_ping,
            echo=settings.db.echo,
        )

    return SafeSQLAlchemyAsyncConfig(
        connection_string=settings.db.url,
        metadata=Base.metadata,
        create_all=settings.db.create_all,
        session_config=AsyncSessionConfig(expire_on_commit=False),
        engine_config=engine_config,
    )


def build_cors_config(settings: Settings) -> CORSConfig | None:
    if not settings.cors.allow_origins:
        return None
    return CORSConfig(
        allow_origins=settings.cors.allow_origins,
        allow_credentials=settings.cors.allow_credentials,
    )


def build_media_routers(storage: StorageManager) -> list[Router]:
    """Serve every local store under ``/media/<store>``."""
    return [
        create_static_files_router(
            path=f"/media/{name}",
            directories=[directory],
            name=f"media-{name}",
            include_in_schema=False,
        )
        for name, directory in storage.local_stores().items()
    ]


def create_app(settings: Settings | None = None) -> Litestar:
    """Create the Litestar application serving ``/api/v1``."""
    from vidshare.config import get_settings

    settings = settings or get_settings()
    observability.configure(settings)

    db_config = build_db_config(settings)
    storage = StorageManager(settings.storage)
    media_store = MediaStore(storage, max_upload_size=settings.storage.max_upload_size)

    for directory in storage.local_stores().values():
        directory.mkdir(parents=True, exist_ok=True)

    api = Router(
        path="/api/v1",
        route_handlers=[
            healthcheck,
            UserController,
            VideoController,
            CommentController,
            LikeController,
            SubscriptionController,
            TweetController,
            PlaylistController,
        ],
    )

    async def on_startup(app: Litestar) -> None:
        observability.instrument_sqlalchemy(db_config.get_engine())
        logger.info("vidshare started with media store %r", storage.default_store)

    app = Litestar(
        route_handlers=[api, *build_media_routers(storage)],
        on_startup=[on_startup],
        plugins=[SQLAlchemyPlugin(config=db_config)],
        dependencies={
            "settings": Provide(provide_settings, sync_to_thread=False),
            "media_store": Provide(provide_media_store, sync_to_thread=False),
            "actor": Provide(provide_actor),
            "current_actor": Provide(provide_current_actor),
            "list_query": Provide(provide_list_query),
        },
        cors_config=build_cors_config(settings),
        exception_handlers=EXCEPTION_HANDLERS,
        request_max_body_size=settings.storage.max_upload_size,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.media_store = media_store
    return app
