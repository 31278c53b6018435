"""Shared pytest fixtures.

Service and API tests run against a throwaway SQLite database in ``tmp_path``.
"""

from collections.abc import AsyncIterator
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
import yaml
from litestar.testing import AsyncTestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from werkzeug.security import generate_password_hash

import vidshare.db.models  # noqa: F401
from vidshare.app_factory import create_app
from vidshare.auth.roles import ROLE_ADMIN, ROLE_USER
from vidshare.auth.tokens import issue_token_pair
from vidshare.config import AuthConfig, DatabaseConfig, Settings, StorageConfig, StoreConfig
from vidshare.db.base import Base
from vidshare.db.models import User, Video
from vidshare.lib.media import MediaStore
from vidshare.lib.storage import StorageManager

SECRET = "test-secret-key"
PASSWORD = "correct-horse"


@pytest.fixture
def temp_app_yaml(tmp_path):
    """Write a temporary app.yaml and return its path."""
    config_path = tmp_path / "app.yaml"

    def _create_config(config: dict) -> Path:
        with open(config_path, "w") as f:
            yaml.safe_dump(config, f)
        return config_path

    return _create_config


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        secret_key=SECRET,
        db=DatabaseConfig(url=f"sqlite+aiosqlite:///{tmp_path / 'vidshare.db'}", create_all=True),
        auth=AuthConfig(cookie_secure=False),
        storage=StorageConfig(stores={"default": StoreConfig(local_path=str(tmp_path / "media"))}),
    )


@pytest.fixture
async def engine(settings):
    engine = create_async_engine(settings.db.url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_maker) -> AsyncIterator[AsyncSession]:
    async with session_maker() as session:
        yield session


@pytest.fixture
def media_store(settings) -> MediaStore:
    return MediaStore(StorageManager(settings.storage), max_upload_size=settings.storage.max_upload_size)


@pytest.fixture
def make_user(db_session):
    """Factory inserting a user with the shared test password."""

    async def _make(username: str, role: str = ROLE_USER) -> User:
        user = User(
            username=username,
            email=f"{username}@example.com",
            full_name=username.title(),
            password_hash=generate_password_hash(PASSWORD),
            avatar=f"/media/default/{username}.png",
            role=role,
        )
        db_session.add(user)
        await db_session.commit()
        return user

    return _make


@pytest.fixture
def make_video(db_session):
    """Factory inserting a video; ``age`` pushes created_at into the past."""

    async def _make(owner: User, title: str = "Clip", published: bool = True, age: int = 0) -> Video:
        video = Video(
            owner_id=owner.id,
            video_file=f"/media/default/{title}.mp4",
            thumbnail=f"/media/default/{title}.png",
            title=title,
            description=f"About {title}",
            duration=12.5,
            is_published=published,
            created_at=datetime.now(UTC) - timedelta(minutes=age),
        )
        db_session.add(video)
        await db_session.commit()
        return video

    return _make


@pytest.fixture
async def alice(make_user) -> User:
    return await make_user("alice")


@pytest.fixture
async def bob(make_user) -> User:
    return await make_user("bob")


@pytest.fixture
async def admin(make_user) -> User:
    return await make_user("root", role=ROLE_ADMIN)


@pytest.fixture
def auth_headers(settings):
    """Bearer headers carrying a fresh access token for a user."""

    def _headers(user: User) -> dict[str, str]:
        pair = issue_token_pair(user.id, settings.secret_key, 60, 120)
        return {"Authorization": f"Bearer {pair.access_token}"}

    return _headers


@pytest.fixture
async def client(settings, engine) -> AsyncIterator[AsyncTestClient]:
    app = create_app(settings)
    async with AsyncTestClient(app=app) as client:
        yield client


@pytest.fixture
def password() -> str:
    return PASSWORD


@dataclass
class FakeUpload:
    """Stand-in for a multipart ``UploadFile``."""

    filename: str
    content_type: str
    data: bytes

    async def read(self, size: int = -1) -> bytes:
        return self.data


@pytest.fixture
def make_upload():
    return FakeUpload
