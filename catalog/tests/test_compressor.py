"""Unit tests for ImageCompressor."""

import io

import pytest
from PIL import Image

from catalog.core.exceptions import CompressionError
from catalog.services.compressor import ImageCompressor


def _noisy_jpeg(quality: int = 95) -> bytes:
    buffer = io.BytesIO()
    Image.effect_noise((256, 256), 64).convert("RGB").save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()


def _multi_picture_jpeg() -> bytes:
    frames = [Image.effect_noise((256, 256), 64).convert("RGB") for _ in range(2)]
    buffer = io.BytesIO()
    frames[0].save(buffer, format="MPO", save_all=True, append_images=frames[1:], quality=95)
    return buffer.getvalue()


def _animated_gif(frames: int = 3) -> bytes:
    # full 256-entry palette with one distinct colour per frame; optimize shrinks it on re-encode
    palette = [channel for index in range(256) for channel in (index, 255 - index, index // 2)]
    images = []
    for index in range(frames):
        frame = Image.new("P", (64, 64), color=(index + 1) * 60)
        frame.putpalette(palette)
        images.append(frame)
    buffer = io.BytesIO()
    images[0].save(
        buffer,
        format="GIF",
        save_all=True,
        append_images=images[1:],
        duration=100,
        optimize=False,
    )
    return buffer.getvalue()


@pytest.fixture
def compressor():
    return ImageCompressor(quality=60)


class TestCompress:
    """Re-encoding keeps the declared format."""

    def test_jpeg_is_recompressed_smaller(self, compressor):
        original = _noisy_jpeg()

        output = compressor.compress(original, "image/jpeg", filename="noise.jpg")

        assert len(output) < len(original)
        with Image.open(io.BytesIO(output)) as image:
            assert image.format == "JPEG"
            assert image.size == (256, 256)

    def test_jpg_alias_is_treated_as_jpeg(self, compressor):
        output = compressor.compress(_noisy_jpeg(), "image/jpg")

        with Image.open(io.BytesIO(output)) as image:
            assert image.format == "JPEG"

    def test_png_stays_png_and_never_grows(self, compressor, png_bytes):
        output = compressor.compress(png_bytes, "image/png")

        assert len(output) <= len(png_bytes)
        with Image.open(io.BytesIO(output)) as image:
            assert image.format == "PNG"

    def test_webp_stays_webp(self, compressor):
        buffer = io.BytesIO()
        Image.effect_noise((128, 128), 64).convert("RGB").save(buffer, format="WEBP", quality=100)

        output = compressor.compress(buffer.getvalue(), "image/webp")

        with Image.open(io.BytesIO(output)) as image:
            assert image.format == "WEBP"

    def test_multi_picture_jpeg_is_accepted_as_jpeg(self, compressor):
        """MPO (휴대폰 카메라 JPEG) 은 대표 이미지만 JPEG 로 다시 인코딩합니다."""
        original = _multi_picture_jpeg()
        with Image.open(io.BytesIO(original)) as image:
            assert image.format == "MPO"

        output = compressor.compress(original, "image/jpeg", filename="camera.jpg")

        assert len(output) < len(original)
        with Image.open(io.BytesIO(output)) as image:
            assert image.format == "JPEG"
            assert image.size == (256, 256)

    def test_animated_gif_keeps_frames(self, compressor):
        original = _animated_gif(3)
        with Image.open(io.BytesIO(original)) as image:
            assert image.n_frames == 3

        output = compressor.compress(original, "image/gif")

        assert output != original
        assert len(output) < len(original)
        with Image.open(io.BytesIO(output)) as image:
            assert image.format == "GIF"
            assert image.n_frames == 3

    def test_encode_writes_every_gif_frame(self, compressor):
        with Image.open(io.BytesIO(_animated_gif(3))) as image:
            image.load()
            output = compressor._encode(image, "GIF")

        with Image.open(io.BytesIO(output)) as image:
            assert image.n_frames == 3


class TestCompressErrors:
    """Undecodable or mislabelled input raises CompressionError."""

    def test_garbage_bytes(self, compressor):
        with pytest.raises(CompressionError) as exc_info:
            compressor.compress(b"definitely not an image", "image/png", filename="junk.png")
        assert exc_info.value.filename == "junk.png"

    def test_declared_type_must_match_decoded_format(self, compressor, png_bytes):
        with pytest.raises(CompressionError, match="decoded as PNG"):
            compressor.compress(png_bytes, "image/jpeg", filename="fake.jpg")

    def test_unsupported_content_type(self, compressor, png_bytes):
        with pytest.raises(CompressionError, match="unsupported"):
            compressor.compress(png_bytes, "image/bmp")
