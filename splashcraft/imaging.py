"""
Image helpers shared by the rasterizer.

Colour parsing, decoding of user-supplied images (raw bytes or ``data:``
URLs), font resolution, and PNG serialization.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import hashlib
import io
import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from PIL import Image, ImageColor, ImageFont, features

from .const import MASK_MAX_SIDE, MASK_SUPERSAMPLE
from .exceptions import RenderingUnavailableError

if TYPE_CHECKING:
    from .models import ImageSource

_LOGGER = logging.getLogger(__name__)

RGBA = tuple[int, int, int, int]
TRANSPARENT: RGBA = (0, 0, 0, 0)

FontType = ImageFont.FreeTypeFont | ImageFont.ImageFont

_BOLD_FONTS = (
    "DejaVuSans-Bold.ttf",
    "LiberationSans-Bold.ttf",
    "Arial Bold.ttf",
    "arialbd.ttf",
    "Helvetica-Bold.ttf",
)
_REGULAR_FONTS = (
    "DejaVuSans.ttf",
    "LiberationSans-Regular.ttf",
    "Arial.ttf",
    "arial.ttf",
)
# Colour emoji fonts only rasterize at their embedded strike sizes.
_EMOJI_FONTS = (
    ("NotoColorEmoji.ttf", 109),
    ("Apple Color Emoji.ttc", 160),
    ("seguiemj.ttf", 128),
)


def parse_color(value: str | None, default: RGBA = TRANSPARENT) -> RGBA:
    """Return ``value`` as an RGBA tuple, or ``default`` if it cannot be parsed."""
    if not value:
        return default
    try:
        rgb = ImageColor.getrgb(value)
    except ValueError:
        _LOGGER.debug("Ignoring unparseable colour %r", value)
        return default
    if len(rgb) == 3:  # noqa: PLR2004
        return (rgb[0], rgb[1], rgb[2], 255)
    return (rgb[0], rgb[1], rgb[2], rgb[3])


def _source_bytes(source: ImageSource) -> bytes | None:
    """Return the encoded image bytes behind a source, or None."""
    if isinstance(source, bytes | bytearray):
        return bytes(source)
    if not source.startswith("data:"):
        return None
    header, _, payload = source.partition(",")
    if not payload:
        return None
    if header.endswith(";base64"):
        return base64.b64decode(payload, validate=True)
    return payload.encode("latin-1")


def decode_image(source: ImageSource | None) -> Image.Image | None:
    """
    Decode an image source into an RGBA image.

    Returns None for missing, malformed, or undecodable input; callers skip the
    draw in that case.
    """
    if not source:
        return None
    try:
        data = _source_bytes(source)
        if data is None:
            _LOGGER.debug("Image source is not a data URL; skipping")
            return None
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return img.convert("RGBA")
    except (binascii.Error, ValueError, OSError, Image.DecompressionBombError) as err:
        _LOGGER.debug("Could not decode image source: %s", err)
        return None


def _cache_key(source: ImageSource) -> str:
    if isinstance(source, str):
        return source
    return "sha1:" + hashlib.sha1(source, usedforsecurity=False).hexdigest()


class ImageLoader:
    """Decode image sources once per run and hand out copies."""

    def __init__(self) -> None:
        """Initialize an empty decode cache."""
        self._cache: dict[str, Image.Image | None] = {}

    async def load(self, source: ImageSource | None) -> Image.Image | None:
        """Return a decoded copy of ``source`` or None if unusable."""
        if not source:
            return None
        key = _cache_key(source)
        if key not in self._cache:
            self._cache[key] = await asyncio.to_thread(decode_image, source)
        cached = self._cache[key]
        return cached.copy() if cached is not None else None

    def clear(self) -> None:
        """Drop every cached image."""
        self._cache.clear()


def ensure_png_support() -> None:
    """Raise RenderingUnavailableError if Pillow cannot write PNG files."""
    if not features.check_codec("zlib"):
        msg = "Pillow was built without zlib; PNG output is unavailable"
        raise RenderingUnavailableError(msg)


def encode_png(image: Image.Image) -> bytes:
    """Serialize an image to PNG bytes."""
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


async def encode_png_async(image: Image.Image) -> bytes:
    """Serialize an image to PNG bytes off the event loop."""
    return await asyncio.to_thread(encode_png, image)


@lru_cache(maxsize=64)
def load_font(size: int, *, bold: bool = True, family: str | None = None) -> FontType:
    """
    Return a scalable font of ``size`` pixels.

    ``family`` is tried first (``<family>-Bold.ttf`` / ``<family>.ttf``), then
    common system fonts, then Pillow's bundled default font.
    """
    size = max(1, int(size))
    candidates: list[str] = []
    if family:
        candidates += [f"{family}-Bold.ttf", f"{family}.ttf"] if bold else [f"{family}.ttf"]
    candidates += list(_BOLD_FONTS if bold else _REGULAR_FONTS)
    for name in candidates:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    _LOGGER.debug("No system font found; using Pillow default at %d px", size)
    return ImageFont.load_default(size=size)


@lru_cache(maxsize=1)
def load_emoji_font() -> ImageFont.FreeTypeFont | None:
    """Return a colour emoji font at its native strike size, if installed."""
    for name, strike in _EMOJI_FONTS:
        try:
            return ImageFont.truetype(name, strike)
        except OSError:
            continue
    return None


def supersample_factor(width: int, height: int) -> int:
    """Return the mask oversampling factor for a ``width`` x ``height`` mask."""
    return max(1, min(MASK_SUPERSAMPLE, MASK_MAX_SIDE // max(width, height, 1)))


def downsample_mask(mask: Image.Image, size: tuple[int, int]) -> Image.Image:
    """Resize an oversampled mask to ``size``; masks already that size are kept."""
    if mask.size == size:
        return mask
    return mask.resize(size, Image.Resampling.LANCZOS)
