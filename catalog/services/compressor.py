"""Re-encode uploaded images at a fixed quality, keeping their format."""

from __future__ import annotations

import io
import logging

from PIL import Image, UnidentifiedImageError

from catalog.core.constants import CONTENT_TYPE_DECODED_FORMATS, CONTENT_TYPE_TO_FORMAT
from catalog.core.exceptions import CompressionError

logger = logging.getLogger(__name__)

DEFAULT_QUALITY = 60


class ImageCompressor:
    """Pure bytes-in, bytes-out compressor.

    JPEG and WebP are re-encoded at ``quality``; PNG and GIF are re-encoded
    losslessly with ``optimize``. Animated GIF/WebP keep all frames; a
    multi-picture JPEG (MPO) keeps only its primary picture. When the
    re-encoded buffer is not smaller the original bytes are returned.
    """

    def __init__(self, quality: int = DEFAULT_QUALITY) -> None:
        self.quality = quality

    def compress(self, data: bytes, content_type: str, *, filename: str | None = None) -> bytes:
        expected_format = CONTENT_TYPE_TO_FORMAT.get(content_type)
        if expected_format is None:
            raise CompressionError(filename, f"unsupported content type {content_type}")

        try:
            with Image.open(io.BytesIO(data)) as image:
                if image.format not in CONTENT_TYPE_DECODED_FORMATS[content_type]:
                    raise CompressionError(
                        filename,
                        f"declared {content_type} but decoded as {image.format or 'unknown'}",
                    )
                image.load()
                output = self._encode(image, expected_format)
        except CompressionError:
            raise
        except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as exc:
            raise CompressionError(filename, str(exc) or type(exc).__name__) from exc

        if len(output) >= len(data):
            return data

        logger.debug(
            "Image compressed",
            extra={
                "file_name": filename,
                "content_type": content_type,
                "original_bytes": len(data),
                "compressed_bytes": len(output),
            },
        )
        return output

    def _encode(self, image: Image.Image, image_format: str) -> bytes:
        buffer = io.BytesIO()
        animated = getattr(image, "is_animated", False)

        if image_format == "JPEG":
            if image.mode not in ("RGB", "L"):
                image = image.convert("RGB")
            image.save(buffer, format="JPEG", quality=self.quality, optimize=True)
        elif image_format == "WEBP":
            image.save(buffer, format="WEBP", quality=self.quality, save_all=animated)
        elif image_format == "GIF":
            image.save(buffer, format="GIF", optimize=True, save_all=animated)
        else:
            image.save(buffer, format=image_format, optimize=True)

        return buffer.getvalue()
