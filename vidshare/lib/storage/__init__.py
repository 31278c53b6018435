"""Pluggable media storage."""

from vidshare.lib.storage.base import MediaBackend, StoredMedia
from vidshare.lib.storage.local import LocalStorageBackend
from vidshare.lib.storage.manager import StorageManager, create_storage_backend

__all__ = [
    "LocalStorageBackend",
    "MediaBackend",
    "StorageManager",
    "StoredMedia",
    "create_storage_backend",
]
