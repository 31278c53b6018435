"""S3-compatible media storage (requires ``pip install vidshare[s3]``).

Media URLs are stored on videos and users, so objects must be publicly
readable: either through ``public_url`` (a CDN in front of the bucket) or a
``public-read`` ACL.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

try:
    import aioboto3
except ImportError as exc:
    raise ImportError(
        "S3 storage backend requires aioboto3. Install it with: pip install vidshare[s3]"
    ) from exc

from vidshare.lib.storage.base import StoredMedia

if TYPE_CHECKING:
    from vidshare.config import S3Config


class S3StorageBackend:
    def __init__(self, config: S3Config) -> None:
        self.config = config
        self._session = aioboto3.Session()

    def _client(self):
        options: dict[str, Any] = {"region_name": self.config.region}
        for option, value in (
            ("endpoint_url", self.config.endpoint_url),
            ("aws_access_key_id", self.config.access_key_id),
            ("aws_secret_access_key", self.config.secret_access_key),
        ):
            if value:
                options[option] = value
        return self._session.client("s3", **options)

    def _object_key(self, key: str) -> str:
        prefix = self.config.prefix.strip("/")
        return f"{prefix}/{key}" if prefix else key

    def public_url(self, key: str) -> str:
        object_key = self._object_key(key)
        if self.config.public_url:
            return f"{self.config.public_url.rstrip('/')}/{object_key}"
        if self.config.endpoint_url:
            return f"{self.config.endpoint_url.rstrip('/')}/{self.config.bucket}/{object_key}"
        return f"https://{self.config.bucket}.s3.{self.config.region}.amazonaws.com/{object_key}"

    async def put(self, key: str, data: bytes, content_type: str) -> StoredMedia:
        extra: dict[str, Any] = {"ACL": self.config.acl} if self.config.acl else {}
        async with self._client() as s3:
            await s3.put_object(
                Bucket=self.config.bucket,
                Key=self._object_key(key),
                Body=data,
                ContentType=content_type,
                **extra,
            )
        return StoredMedia(key=key, url=self.public_url(key), size=len(data))

    async def delete(self, key: str) -> None:
        async with self._client() as s3:
            await s3.delete_object(Bucket=self.config.bucket, Key=self._object_key(key))

    async def exists(self, key: str) -> bool:
        async with self._client() as s3:
            try:
                await s3.head_object(Bucket=self.config.bucket, Key=self._object_key(key))
            except s3.exceptions.ClientError:
                return False
        return True
