"""Record writes that reference freshly uploaded images.

There is no transaction spanning the database and the bucket, so consistency
between the two is kept by compensating deletes:

    Validating → Uploading → Persisting → Done
                     │            │
                     └────────────┴──→ RollingBack → Failed
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Sequence, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.schemas.assets import ImageAsset
from catalog.services.upload import UploadPipeline

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AssetPersistence:
    def __init__(self, session: AsyncSession, pipeline: UploadPipeline) -> None:
        self.session = session
        self.pipeline = pipeline

    async def persist_with_assets(
        self,
        write: Callable[[], Awaitable[T]],
        assets: Sequence[ImageAsset],
    ) -> T:
        """Run ``write`` and commit; on failure delete ``assets`` and re-raise."""
        try:
            result = await write()
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            if assets:
                logger.warning(
                    "Record write failed, rolling back uploaded images",
                    extra={"keys": [asset.storage_key for asset in assets]},
                )
                await self.pipeline.rollback(assets)
            raise
        return result

    async def replace_assets(
        self,
        write: Callable[[], Awaitable[T]],
        new_assets: Sequence[ImageAsset],
        old_assets: Sequence[ImageAsset],
    ) -> T:
        """Swap images on an existing record.

        Old images are deleted only once the write has committed; a failed
        write leaves them untouched and rolls back ``new_assets`` instead.
        """
        result = await self.persist_with_assets(write, new_assets)

        kept = {asset.storage_key for asset in new_assets}
        stale = [asset for asset in old_assets if asset.storage_key not in kept]
        if stale:
            await self.pipeline.release(stale)
        return result
