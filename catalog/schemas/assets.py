from __future__ import annotations

from catalog.schemas.common import CamelModel


class ImageAsset(CamelModel):
    """A stored image object: public URL plus the storage key that deletes it."""

    url: str
    storage_key: str

    def to_record(self) -> dict[str, str]:
        return {"url": self.url, "storage_key": self.storage_key}
