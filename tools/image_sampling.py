"""Decode uploaded clothing photos into RGB pixel samples."""

from __future__ import annotations

import base64
import binascii
import io
import logging
import re
from typing import List, Tuple

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

MAX_DIMENSION = 200
SAMPLE_STRIDE = 4

_DATA_URL = re.compile(r"^data:[^;,]*(?:;[^,]*)?,", re.IGNORECASE)


class ImageDecodeError(ValueError):
    """Raised when an image payload cannot be decoded into pixels."""


def strip_data_url(image_data: str) -> str:
    """Return the base64 body of a ``data:`` URL, or the input unchanged."""

    return _DATA_URL.sub("", image_data.strip(), count=1)


def decode_image(image_b64: str) -> Image.Image:
    """Decode base64 image data into an RGB Pillow image."""

    if not image_b64:
        raise ImageDecodeError("empty image payload")
    try:
        raw = base64.b64decode(strip_data_url(image_b64), validate=False)
        image = Image.open(io.BytesIO(raw))
        image.load()
    except (binascii.Error, UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        raise ImageDecodeError(f"could not decode image: {exc}") from exc
    return image.convert("RGB")


def sample_pixels(image_b64: str, stride: int = SAMPLE_STRIDE) -> List[Tuple[int, int, int]]:
    """Downscale the image and return every ``stride``-th pixel."""

    image = decode_image(image_b64)
    image.thumbnail((MAX_DIMENSION, MAX_DIMENSION))
    pixels = list(image.getdata())
    logger.debug("Sampling %s of %s pixels", len(pixels) // max(1, stride), len(pixels))
    return pixels[:: max(1, stride)]


def all_pixels(image_b64: str) -> List[Tuple[int, int, int]]:
    """Return every pixel of the downscaled image in row order, for texture analysis."""

    image = decode_image(image_b64)
    image.thumbnail((MAX_DIMENSION, MAX_DIMENSION))
    return list(image.getdata())


__all__ = ["ImageDecodeError", "strip_data_url", "decode_image", "sample_pixels", "all_pixels"]
