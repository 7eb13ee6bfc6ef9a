"""S3 storage adapter for catalog images."""

from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import TYPE_CHECKING
from uuid import uuid4

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from catalog.core.constants import CONTENT_TYPE_TO_EXT
from catalog.core.exceptions import StorageError
from catalog.schemas.assets import ImageAsset

if TYPE_CHECKING:
    from botocore.client import BaseClient

    from catalog.core import Settings

logger = logging.getLogger(__name__)

# S3 reports a missing object on delete/head with these codes
_MISSING_OBJECT_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


class StorageAdapter:
    """Uploads and deletes image objects in one bucket.

    The boto3 client is injected; blocking calls run in the default executor so
    the event loop keeps serving other requests.
    """

    def __init__(self, s3_client: "BaseClient", settings: "Settings") -> None:
        self._s3 = s3_client
        self._bucket = settings.s3_bucket
        self._public_base = str(settings.cdn_domain).rstrip("/")

    @staticmethod
    def build_key(namespace: str, content_type: str) -> str:
        ext = CONTENT_TYPE_TO_EXT.get(content_type, ".bin")
        return f"{namespace.strip('/')}/{uuid4().hex}{ext}"

    def public_url(self, key: str) -> str:
        return f"{self._public_base}/{key}"

    async def put(self, key: str, data: bytes, content_type: str) -> ImageAsset:
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(
                None,
                partial(
                    self._s3.put_object,
                    Bucket=self._bucket,
                    Key=key,
                    Body=data,
                    ContentType=content_type,
                ),
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(key, str(exc)) from exc

        logger.info(
            "Image stored",
            extra={"key": key, "content_type": content_type, "size_bytes": len(data)},
        )
        return ImageAsset(url=self.public_url(key), storage_key=key)

    async def delete(self, storage_key: str) -> None:
        """Delete an object. Deleting a missing key is not an error."""
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(
                None,
                partial(self._s3.delete_object, Bucket=self._bucket, Key=storage_key),
            )
        except ClientError as exc:
            code = str(exc.response.get("Error", {}).get("Code", ""))
            if code in _MISSING_OBJECT_CODES:
                logger.debug("Image already absent", extra={"key": storage_key})
                return
            raise StorageError(storage_key, str(exc)) from exc
        except BotoCoreError as exc:
            raise StorageError(storage_key, str(exc)) from exc

        logger.info("Image deleted", extra={"key": storage_key})


def create_s3_client(settings: "Settings") -> "BaseClient":
    """Build the boto3 S3 client shared by every request."""
    return boto3.client(
        "s3",
        region_name=settings.aws_region,
        endpoint_url=settings.s3_endpoint_url,
    )
