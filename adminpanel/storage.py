"""
Object storage for uploaded media: S3-compatible buckets and an in-memory double.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import BinaryIO, Dict, Optional, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from adminpanel import config
from adminpanel.exceptions import StorageError

logger = logging.getLogger(__name__)


class StorageClient(Protocol):
    """Defines the operations the API needs from object storage."""

    def upload_fileobj(self, key: str, fileobj: BinaryIO, content_type: Optional[str] = None) -> str:
        """Store ``fileobj`` under ``key`` and return its public URL."""
        ...

    def delete(self, key: str) -> None:
        ...


@dataclass
class InMemoryStorageClient:
    """Storage double used in development and tests."""

    base_url: str = "https://storage.example.test"
    stored_objects: Dict[str, bytes] = field(default_factory=dict)
    content_types: Dict[str, Optional[str]] = field(default_factory=dict)

    def upload_fileobj(self, key: str, fileobj: BinaryIO, content_type: Optional[str] = None) -> str:
        self.stored_objects[key] = fileobj.read()
        self.content_types[key] = content_type
        return f"{self.base_url}/{key}"

    def delete(self, key: str) -> None:
        self.stored_objects.pop(key, None)
        self.content_types.pop(key, None)


@dataclass
class S3StorageClient:
    """
    S3-compatible storage client (AWS S3, Backblaze B2, MinIO).
    """

    bucket: str
    endpoint: Optional[str] = None
    region: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    public_url: Optional[str] = None

    def __post_init__(self):
        self._client = boto3.client(
            "s3",
            endpoint_url=self.endpoint,
            region_name=self.region,
            aws_access_key_id=self.access_key_id,
            aws_secret_access_key=self.secret_access_key,
            config=Config(signature_version="s3v4"),
        )

    def _url_for(self, key: str) -> str:
        if self.public_url:
            return f"{self.public_url.rstrip('/')}/{key}"
        if self.endpoint:
            return f"{self.endpoint.rstrip('/')}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.amazonaws.com/{key}"

    def upload_fileobj(self, key: str, fileobj: BinaryIO, content_type: Optional[str] = None) -> str:
        extra_args = {"ContentType": content_type} if content_type else None
        try:
            self._client.upload_fileobj(fileobj, self.bucket, key, ExtraArgs=extra_args)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Upload of {key} to bucket {self.bucket} failed: {e}")
            raise StorageError(f"Failed to upload file: {e}")
        return self._url_for(key)

    def delete(self, key: str) -> None:
        try:
            self._client.delete_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Delete of {key} from bucket {self.bucket} failed: {e}")
            raise StorageError(f"Failed to delete file: {e}")


@lru_cache(maxsize=1)
def get_storage() -> StorageClient:
    """
    Return the storage client shared across requests.
    """
    if config.USE_IN_MEMORY_STORAGE or not config.STORAGE_BUCKET:
        logger.info("Using in-memory object storage")
        return InMemoryStorageClient()

    logger.info(f"Using S3 object storage bucket: {config.STORAGE_BUCKET}")
    return S3StorageClient(
        bucket=config.STORAGE_BUCKET,
        endpoint=config.STORAGE_ENDPOINT,
        region=config.STORAGE_REGION,
        access_key_id=config.STORAGE_ACCESS_KEY_ID,
        secret_access_key=config.STORAGE_SECRET_ACCESS_KEY,
        public_url=config.STORAGE_PUBLIC_URL,
    )
