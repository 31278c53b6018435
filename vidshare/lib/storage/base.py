"""Types shared by the media storage backends."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class StoredMedia:
    """Where an uploaded media file ended up."""

    key: str
    url: str
    size: int


class MediaBackend(Protocol):
    async def put(self, key: str, data: bytes, content_type: str) -> StoredMedia: ...

    async def delete(self, key: str) -> None: ...

    async def exists(self, key: str) -> bool: ...
