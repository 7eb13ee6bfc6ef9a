"""Image upload pipeline: validate → compress → upload, with compensating deletes.

A batch either fully succeeds, returning one asset per input file in input
order, or fails leaving nothing it uploaded behind in storage (modulo delete
failures, which are logged and counted but never retried).
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Sequence

from catalog.core.exceptions import CompressionError, ImageValidationError, UploadError
from catalog.metrics import COMPENSATING_DELETES, IMAGE_UPLOADS
from catalog.schemas.assets import ImageAsset
from catalog.services.compressor import ImageCompressor
from catalog.services.storage import StorageAdapter

if TYPE_CHECKING:
    from catalog.core import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawFile:
    """An incoming file, read into memory."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class UploadConstraints:
    allowed_types: frozenset[str]
    max_bytes: int
    max_files: int

    @classmethod
    def from_settings(cls, settings: "Settings") -> "UploadConstraints":
        return cls(
            allowed_types=frozenset(settings.allowed_image_types),
            max_bytes=settings.max_image_bytes,
            max_files=settings.max_images_per_request,
        )


def normalize_content_type(content_type: str | None) -> str:
    """``"Image/JPEG; charset=binary"`` → ``"image/jpeg"``."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


class UploadPipeline:
    def __init__(
        self,
        storage: StorageAdapter,
        compressor: ImageCompressor,
        constraints: UploadConstraints,
    ) -> None:
        self._storage = storage
        self._compressor = compressor
        self.constraints = constraints

    def validate(self, files: Sequence[RawFile]) -> None:
        """Reject the whole batch on the first violated constraint."""
        if len(files) > self.constraints.max_files:
            raise ImageValidationError(
                f"at most {self.constraints.max_files} images per request, got {len(files)}"
            )
        for raw in files:
            content_type = normalize_content_type(raw.content_type)
            if content_type not in self.constraints.allowed_types:
                raise ImageValidationError(
                    f"unsupported content type '{raw.content_type or 'unknown'}'",
                    filename=raw.filename,
                )
            if raw.size == 0:
                raise ImageValidationError("file is empty", filename=raw.filename)
            if raw.size > self.constraints.max_bytes:
                raise ImageValidationError(
                    f"file exceeds the {self.constraints.max_bytes} byte limit",
                    filename=raw.filename,
                )

    async def upload_images(self, files: Sequence[RawFile], *, namespace: str) -> list[ImageAsset]:
        """Validate, compress and upload ``files`` under ``namespace``.

        Compression runs concurrently in worker threads before the first upload,
        so a compression failure never leaves anything in storage. Uploads then
        run one at a time in input order; when upload *i* fails, uploads
        1..i-1 are deleted before :class:`UploadError` is raised.
        """
        self.validate(files)
        if not files:
            return []

        payloads = await self._compress_all(files)

        uploaded: list[ImageAsset] = []
        for raw, payload in zip(files, payloads):
            content_type = normalize_content_type(raw.content_type)
            key = self._storage.build_key(namespace, content_type)
            try:
                asset = await self._storage.put(key, payload, content_type)
            except Exception as exc:
                IMAGE_UPLOADS.labels(namespace=namespace, outcome="failed").inc()
                logger.warning(
                    "Image upload failed, rolling back batch",
                    extra={
                        "file_name": raw.filename,
                        "key": key,
                        "namespace": namespace,
                        "uploaded_before_failure": len(uploaded),
                    },
                )
                await self.rollback(uploaded)
                raise UploadError(raw.filename, exc) from exc
            IMAGE_UPLOADS.labels(namespace=namespace, outcome="stored").inc()
            uploaded.append(asset)

        logger.info(
            "Image batch uploaded",
            extra={"namespace": namespace, "count": len(uploaded)},
        )
        return uploaded

    async def rollback(self, assets: Iterable[ImageAsset]) -> None:
        """Compensating delete of assets uploaded earlier in the same request.

        Waits for every delete to settle; never raises.
        """
        for _asset, outcome in await self._delete_all(list(assets)):
            COMPENSATING_DELETES.labels(outcome=outcome).inc()

    async def release(self, assets: Iterable[ImageAsset]) -> None:
        """Best-effort delete of assets no longer referenced by any record."""
        await self._delete_all(list(assets))

    async def _compress_all(self, files: Sequence[RawFile]) -> list[bytes]:
        results = await asyncio.gather(
            *(
                asyncio.to_thread(
                    self._compressor.compress,
                    raw.data,
                    normalize_content_type(raw.content_type),
                    filename=raw.filename,
                )
                for raw in files
            ),
            return_exceptions=True,
        )
        for raw, result in zip(files, results):
            if isinstance(result, CompressionError):
                raise result
            if isinstance(result, Exception):
                raise CompressionError(raw.filename, str(result)) from result
        return list(results)

    async def _delete_all(self, assets: list[ImageAsset]) -> list[tuple[ImageAsset, str]]:
        if not assets:
            return []
        results = await asyncio.gather(
            *(self._storage.delete(asset.storage_key) for asset in assets),
            return_exceptions=True,
        )
        outcomes: list[tuple[ImageAsset, str]] = []
        for asset, result in zip(assets, results):
            if isinstance(result, Exception):
                logger.error(
                    "Image delete failed; storage object left orphaned",
                    extra={"key": asset.storage_key, "error": str(result)},
                )
                outcomes.append((asset, "failed"))
            else:
                outcomes.append((asset, "deleted"))
        return outcomes
