"""Request helpers shared by the v1 endpoints."""

from dataclasses import dataclass
from typing import Optional, Sequence

from fastapi import Query, UploadFile

from catalog.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from catalog.schemas import build_pagination
from catalog.services.upload import RawFile


@dataclass(frozen=True)
class PageParams:
    page: int
    limit: int

    def pagination(self, total: int, label: str) -> dict[str, int]:
        return build_pagination(page=self.page, limit=self.limit, total=total, label=label)


def page_params(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> PageParams:
    return PageParams(page=page, limit=limit)


async def read_upload(file: UploadFile, max_bytes: int) -> RawFile:
    """Read at most ``max_bytes + 1`` bytes; an oversized file stays oversized."""
    data = await file.read(max_bytes + 1)
    return RawFile(
        filename=file.filename or "upload",
        content_type=file.content_type or "",
        data=data,
    )


async def read_uploads(files: Optional[Sequence[UploadFile]], max_bytes: int) -> list[RawFile]:
    # browsers send an empty part with no filename when no file is picked
    return [
        await read_upload(file, max_bytes)
        for file in files or ()
        if file.filename or file.size
    ]
