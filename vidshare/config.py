import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env early so env vars are available for YAML interpolation
load_dotenv(Path.cwd() / ".env")

# Pattern to match $VAR_NAME environment variable references
ENV_VAR_PATTERN = re.compile(r"\$([A-Z_][A-Z0-9_]*)")


def interpolate_env_vars(value):
    """Recursively replace $VAR_NAME with os.environ values."""
    if isinstance(value, str):

        def replace(match):
            var = match.group(1)
            val = os.environ.get(var)
            if val is None:
                raise ValueError(f"Environment variable ${var} not set")
            return val

        return ENV_VAR_PATTERN.sub(replace, value)
    elif isinstance(value, dict):
        return {k: interpolate_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [interpolate_env_vars(item) for item in value]
    return value


def get_config_path() -> Path:
    """Return the app.yaml path, honouring VIDSHARE_CONFIG when set."""
    override = os.environ.get("VIDSHARE_CONFIG")
    if override:
        return Path(override)
    return Path.cwd() / "app.yaml"


def load_app_config() -> dict:
    """Load and parse app.yaml with environment variable interpolation."""
    config_path = get_config_path()

    if not config_path.exists():
        raise FileNotFoundError(f"app.yaml not found at {config_path}")

    with open(config_path, "r") as f:
        config = yaml.safe_load(f) or {}

    return interpolate_env_vars(config)


class DatabaseConfig(BaseModel):
    """Database connection configuration."""

    url: str = "sqlite+aiosqlite:///./vidshare.db"
    pool_size: int = 5
    pool_overflow: int = 10
    pool_timeout: int = 30
    pool_pre_ping: bool = True
    echo: bool = False
    create_all: bool = False


class AuthConfig(BaseModel):
    """Access/refresh token and cookie configuration."""

    access_token_ttl: int = 15 * 60
    refresh_token_ttl: int = 10 * 24 * 60 * 60
    cookie_secure: bool = True
    cookie_samesite: Literal["lax", "strict", "none"] = "lax"


class S3Config(BaseModel):
    """S3-compatible bucket configuration."""

    bucket: str
    region: str = "us-east-1"
    endpoint_url: str | None = None
    access_key_id: str | None = None
    secret_access_key: str | None = None
    prefix: str = ""
    acl: str | None = None
    public_url: str | None = None


class StoreConfig(BaseModel):
    """A single named media store."""

    backend: str = "local"
    local_path: str = "./media"
    s3: S3Config | None = None


class StorageConfig(BaseModel):
    """Media storage configuration."""

    default: str = "default"
    stores: dict[str, StoreConfig] = {"default": StoreConfig()}
    max_upload_size: int = 500 * 1024 * 1024


class CORSConfig(BaseModel):
    """Cross-origin configuration for browser clients."""

    allow_origins: list[str] = []
    allow_credentials: bool = True


class LogfireConfig(BaseModel):
    """Pydantic Logfire observability configuration."""

    enabled: bool = False
    service_name: str = "vidshare"
    environment: str | None = None
    sample_rate: float = 1.0
    console: bool = False


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Application
    debug: bool = False
    secret_key: str

    # Sections loaded from app.yaml
    db: DatabaseConfig = DatabaseConfig()
    auth: AuthConfig = AuthConfig()
    storage: StorageConfig = StorageConfig()
    cors: CORSConfig = CORSConfig()
    logfire: LogfireConfig = LogfireConfig()


_SECTIONS: dict[str, type[BaseModel]] = {
    "db": DatabaseConfig,
    "auth": AuthConfig,
    "storage": StorageConfig,
    "cors": CORSConfig,
    "logfire": LogfireConfig,
}


@lru_cache
def get_settings() -> Settings:
    """Build settings from the environment, overlaid with the app.yaml sections."""
    settings = Settings()
    try:
        app_config = load_app_config()
    except FileNotFoundError:
        return settings

    updates: dict = {key: model(**app_config[key]) for key, model in _SECTIONS.items() if app_config.get(key)}
    if "debug" in app_config:
        updates["debug"] = bool(app_config["debug"])
    return settings.model_copy(update=updates) if updates else settings
