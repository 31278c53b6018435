"""Named media stores built from the ``storage`` settings section."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from vidshare.lib.storage.local import LocalStorageBackend

if TYPE_CHECKING:
    from vidshare.config import StorageConfig, StoreConfig
    from vidshare.lib.storage.base import MediaBackend


class StorageManager:
    def __init__(self, config: StorageConfig) -> None:
        self.config = config
        self._backends: dict[str, MediaBackend] = {}

    @property
    def default_store(self) -> str:
        return self.config.default

    def local_stores(self) -> dict[str, Path]:
        """Directories of the stores the app has to serve itself."""
        return {
            name: Path(store.local_path)
            for name, store in self.config.stores.items()
            if store.backend == "local"
        }

    def get(self, name: str | None = None) -> MediaBackend:
        """Backend for store ``name`` (default store when omitted), built once.

        Raises:
            KeyError: No store with that name is configured.
        """
        name = name or self.default_store
        backend = self._backends.get(name)
        if backend is None:
            if name not in self.config.stores:
                raise KeyError(f"Unknown media store: {name!r}")
            backend = self._backends[name] = create_storage_backend(self.config.stores[name], store_name=name)
        return backend


def create_storage_backend(config: StoreConfig, store_name: str = "default") -> MediaBackend:
    if config.backend == "local":
        return LocalStorageBackend(Path(config.local_path), store_name=store_name)

    if config.backend == "s3":
        if config.s3 is None:
            raise ValueError(f"Store {store_name!r} uses the s3 backend but has no s3 section")
        from vidshare.lib.storage.s3 import S3StorageBackend

        return S3StorageBackend(config.s3)

    raise ValueError(f"Unknown storage backend {config.backend!r}. Use 'local' or 's3'.")
