"""MinIO-backed media store."""

from __future__ import annotations

import logging
import mimetypes
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

from minio import Minio
from minio.error import S3Error
from urllib3.exceptions import HTTPError as Urllib3HTTPError

from app.services._shared.ports import MediaStore, StoredMedia

log = logging.getLogger(__name__)

_BUCKET_RACE_CODES = {"BucketAlreadyOwnedByYou", "BucketAlreadyExists"}


@lru_cache
def get_minio_client(endpoint: str, access_key: str, secret_key: str, secure: bool) -> Minio:
    """Return a cached MinIO client for the given credentials."""
    return Minio(endpoint, access_key=access_key, secret_key=secret_key, secure=secure)


def ensure_bucket(client: Minio, bucket: str) -> None:
    """Create ``bucket`` unless it already exists."""
    if client.bucket_exists(bucket):
        return
    try:
        client.make_bucket(bucket)
    except S3Error as exc:
        # Another worker may have created it in between
        if exc.code not in _BUCKET_RACE_CODES:
            raise


@dataclass(slots=True)
class MinioMediaStore(MediaStore):
    """
    Upload staged files to a MinIO (S3 compatible) bucket.

    :param client: MinIO client.
    :param bucket: Target bucket.
    :param public_base_url: URL prefix under which objects are served.
    :param key_prefix: Folder prepended to every object key.
    """

    client: Minio
    bucket: str
    public_base_url: str
    key_prefix: str = ""
    _bucket_ready: bool = False

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> MinioMediaStore:
        endpoint = config["MINIO_ENDPOINT"]
        secure = bool(config.get("MINIO_SECURE", False))
        bucket = config.get("MINIO_BUCKET") or "youtubebackend"
        base_url = config.get("MEDIA_PUBLIC_BASE_URL") or (
            f"{'https' if secure else 'http'}://{endpoint}/{bucket}"
        )
        client = get_minio_client(
            endpoint,
            config.get("MINIO_ACCESS_KEY", ""),
            config.get("MINIO_SECRET_KEY", ""),
            secure,
        )
        return cls(
            client=client,
            bucket=bucket,
            public_base_url=base_url.rstrip("/"),
            key_prefix=(config.get("MEDIA_KEY_PREFIX") or "").strip("/"),
        )

    def _object_key(self, path: Path) -> str:
        name = f"{uuid.uuid4().hex}-{path.name}"
        return f"{self.key_prefix}/{name}" if self.key_prefix else name

    def store(self, local_path: str) -> StoredMedia | None:
        """
        Upload ``local_path`` and return its public location.

        Returns ``None`` when there is nothing to upload or the object store
        rejects the request. The local file is left in place.
        """
        if not local_path:
            return None
        path = Path(local_path)
        if not path.is_file():
            log.warning("media.upload_skipped", extra={"bucket": self.bucket})
            return None

        key = self._object_key(path)
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        try:
            if not self._bucket_ready:
                ensure_bucket(self.client, self.bucket)
                self._bucket_ready = True
            self.client.fput_object(self.bucket, key, str(path), content_type=content_type)
        except (S3Error, Urllib3HTTPError, OSError):
            log.warning("media.upload_failed", extra={"bucket": self.bucket}, exc_info=True)
            return None

        return StoredMedia(url=f"{self.public_base_url}/{key}", key=key)
