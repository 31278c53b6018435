"""Media stored on the local filesystem and served by the app itself."""

from __future__ import annotations

import asyncio
from pathlib import Path

from vidshare.lib.storage.base import StoredMedia


class LocalStorageBackend:
    """Write media under ``base_path``, fanned out by the first four key characters.

    The app mounts every local store at ``/media/<store_name>/`` so the
    returned URLs resolve without a separate file server.
    """

    def __init__(self, base_path: Path, store_name: str = "default") -> None:
        self.base_path = base_path
        self.store_name = store_name

    def _relative(self, key: str) -> str:
        return f"{key[:2]}/{key[2:4]}/{key}" if len(key) >= 4 else key

    def _path(self, key: str) -> Path:
        return self.base_path / self._relative(key)

    async def put(self, key: str, data: bytes, content_type: str) -> StoredMedia:
        path = self._path(key)

        def _write() -> None:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)

        await asyncio.to_thread(_write)
        return StoredMedia(key=key, url=f"/media/{self.store_name}/{self._relative(key)}", size=len(data))

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self._path(key).unlink, missing_ok=True)

    async def exists(self, key: str) -> bool:
        return await asyncio.to_thread(self._path(key).exists)
