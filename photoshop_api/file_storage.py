"""File storage collaborators able to presign URLs for bare paths."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

import boto3

logger = logging.getLogger(__name__)


class FileStorage(Protocol):
    """Storage that turns a path into a time-limited URL."""

    def generate_presign_url(self, path: str, *, permissions: str, expiry_seconds: int) -> str:
        ...


class S3FileStorage:
    """Presign S3 object URLs for paths inside a bucket."""

    def __init__(self, bucket: str, *, prefix: str = "", client: Optional[Any] = None) -> None:
        self._bucket = bucket
        self._prefix = prefix.strip("/")
        self._client = client if client is not None else boto3.client("s3")

    def generate_presign_url(self, path: str, *, permissions: str, expiry_seconds: int) -> str:
        key = self._key(path)
        operation = "put_object" if "w" in permissions else "get_object"
        logger.debug("Presigning s3://%s/%s for %s", self._bucket, key, operation)
        return self._client.generate_presigned_url(
            operation,
            Params={"Bucket": self._bucket, "Key": key},
            ExpiresIn=expiry_seconds,
        )

    def _key(self, path: str) -> str:
        key = path.lstrip("/")
        if self._prefix:
            return f"{self._prefix}/{key}"
        return key
