"""
Rasterizer for icons, banners, and splash screens.

Icons are painted in a fixed order: background, content, shape mask, badge.
The mask is applied once background and content are both on the canvas so the
content is clipped by the same shape; the badge goes on last and is never
clipped.

Splash screens are painted as background, logo, then text.

Bad inputs (unparseable colours, images that fail to decode) never raise here:
the affected layer is skipped and the rest of the image is still produced.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from PIL import Image, ImageChops, ImageDraw

from .const import (
    BADGE_DIAMETER,
    BADGE_MARGIN,
    BANNER_CONTENT_RATIO,
    CONTENT_GLYPH_RATIO,
    GRADIENT_MAX_SIDE,
    MESH_CENTER_ALPHA,
    MESH_RADIUS,
    MONOCHROME_DEFAULT_PADDING,
    SPLASH_ANCHORS,
    SPLASH_LOGO_TEXT_GAP,
    SPLASH_SCALES,
    SPLASH_TEXT_MAX,
    SPLASH_TEXT_RATIO,
    SQUIRCLE_RADIUS,
    TEXTURE_NOISE_AMPLITUDE,
    WHITE,
)
from .glyphs import glyph_mask, is_known_glyph
from .imaging import (
    RGBA,
    TRANSPARENT,
    ImageLoader,
    downsample_mask,
    encode_png_async,
    load_emoji_font,
    load_font,
    parse_color,
    supersample_factor,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from .models import GradientConfig, IconConfig, SplashConfig

_LOGGER = logging.getLogger(__name__)

_WHITE: RGBA = (255, 255, 255, 255)
_BLACK: RGBA = (0, 0, 0, 255)

Point = tuple[float, float]


@dataclass(frozen=True)
class IconImages:
    """Decoded images an icon render may need."""

    background: Image.Image | None = None
    content: Image.Image | None = None


# ---- Backgrounds ----


def gradient_axis(direction: str, width: float, height: float) -> tuple[Point, Point]:
    """Return the start and end points of a compass-direction gradient."""
    axes = {
        "to-b": ((width / 2, 0), (width / 2, height)),
        "to-t": ((width / 2, height), (width / 2, 0)),
        "to-r": ((0, height / 2), (width, height / 2)),
        "to-l": ((width, height / 2), (0, height / 2)),
        "to-br": ((0, 0), (width, height)),
        "to-bl": ((width, 0), (0, height)),
        "to-tr": ((0, height), (width, 0)),
        "to-tl": ((width, height), (0, 0)),
    }
    return axes.get(direction, axes["to-br"])


def linear_gradient(
    width: int, height: int, colors: Sequence[str], start: Point, end: Point
) -> Image.Image:
    """
    Render a linear gradient between ``start`` and ``end``.

    ``colors`` are spaced evenly over [0, 1]; pixels beyond either end take
    the end colour. Canvases larger than ``GRADIENT_MAX_SIDE`` are computed at
    that size and upscaled.
    """
    stops = [parse_color(c) for c in colors] or [TRANSPARENT]
    if len(stops) == 1:
        return Image.new("RGBA", (width, height), stops[0])

    scale = GRADIENT_MAX_SIDE / max(width, height)
    if scale < 1:
        small = linear_gradient(
            max(1, round(width * scale)),
            max(1, round(height * scale)),
            colors,
            (start[0] * scale, start[1] * scale),
            (end[0] * scale, end[1] * scale),
        )
        return small.resize((width, height), Image.Resampling.BILINEAR)

    ys, xs = np.mgrid[0:height, 0:width].astype(np.float64)
    xs += 0.5
    ys += 0.5
    dx, dy = end[0] - start[0], end[1] - start[1]
    denom = dx * dx + dy * dy
    if denom == 0:
        t = np.zeros((height, width))
    else:
        t = np.clip(((xs - start[0]) * dx + (ys - start[1]) * dy) / denom, 0.0, 1.0)

    positions = np.linspace(0.0, 1.0, len(stops))
    channels = [np.interp(t, positions, [s[k] for s in stops]) for k in range(4)]
    arr = np.rint(np.stack(channels, axis=-1)).astype(np.uint8)
    return Image.fromarray(arr, "RGBA")


def mesh_gradient(size: int, colors: Sequence[str]) -> Image.Image:
    """
    Render a mesh background.

    The first colour fills the canvas, then every colour is blended in as a
    radial glow anchored at alternating corners (index ``i`` sits at
    ``x = (i % 2) * size``, ``y = (i // 2) * size``), fading out at 0.8 of the
    canvas size.
    """
    stops = [parse_color(c) for c in colors]
    if not stops:
        return Image.new("RGBA", (size, size), TRANSPARENT)
    if size > GRADIENT_MAX_SIDE:
        small = mesh_gradient(GRADIENT_MAX_SIDE, colors)
        return small.resize((size, size), Image.Resampling.BILINEAR)

    out = np.empty((size, size, 4), dtype=np.float64)
    out[...] = stops[0]
    ys, xs = np.mgrid[0:size, 0:size].astype(np.float64)
    xs += 0.5
    ys += 0.5
    radius = size * MESH_RADIUS
    for i, color in enumerate(stops):
        cx = (i % 2) * size
        cy = (i // 2) * size
        falloff = np.clip(1.0 - np.hypot(xs - cx, ys - cy) / radius, 0.0, 1.0)
        alpha = falloff * (MESH_CENTER_ALPHA / 255.0) * (color[3] / 255.0)
        alpha = alpha[..., None]
        src = np.array([color[0], color[1], color[2], 255.0])
        out = src * alpha + out * (1.0 - alpha)

    return Image.fromarray(np.rint(np.clip(out, 0, 255)).astype(np.uint8), "RGBA")


def add_noise(image: Image.Image, amplitude: int = TEXTURE_NOISE_AMPLITUDE) -> Image.Image:
    """Perturb R, G and B independently by up to ``amplitude``; alpha is kept."""
    arr = np.asarray(image.convert("RGBA"), dtype=np.int16).copy()
    rng = np.random.default_rng()
    noise = rng.integers(
        -amplitude, amplitude, size=arr.shape[:2] + (3,), endpoint=True, dtype=np.int16
    )
    arr[..., :3] = np.clip(arr[..., :3] + noise, 0, 255)
    return Image.fromarray(arr.astype(np.uint8), "RGBA")


def _solid(width: int, height: int, color: str) -> Image.Image:
    return Image.new("RGBA", (width, height), parse_color(color))


def _gradient_fill(
    width: int, height: int, gradient: GradientConfig, *, direction: str | None = None
) -> Image.Image:
    start, end = gradient_axis(direction or gradient.direction, width, height)
    return linear_gradient(width, height, gradient.colors, start, end)


def icon_background(
    config: IconConfig, size: int, background_image: Image.Image | None = None
) -> Image.Image | None:
    """Return the background layer for an icon, or None for a transparent one."""
    match config.background_type:
        case "color":
            return _solid(size, size, config.background_color)
        case "gradient":
            return _gradient_fill(size, size, config.gradient)
        case "mesh":
            return mesh_gradient(size, config.mesh.colors)
        case "texture":
            return add_noise(_solid(size, size, config.background_color))
        case "image":
            if background_image is None:
                _LOGGER.debug("Background image unavailable; leaving transparent")
                return None
            return background_image.resize((size, size), Image.Resampling.LANCZOS)
        case _:
            return None


# ---- Masks and compositing helpers ----


def _supersampled(
    width: int, height: int, paint: Callable[[ImageDraw.ImageDraw, int, int], None]
) -> Image.Image:
    """Paint a coverage mask at higher resolution and downsample it."""
    factor = supersample_factor(width, height)
    big = (width * factor, height * factor)
    mask = Image.new("L", big, 0)
    paint(ImageDraw.Draw(mask), big[0], big[1])
    return downsample_mask(mask, (width, height))


def hexagon_points(cx: float, cy: float, r: float) -> list[Point]:
    """Return six vertices at 60 degree steps starting on the +x axis."""
    return [
        (cx + r * math.cos(i * math.pi / 3), cy + r * math.sin(i * math.pi / 3))
        for i in range(6)
    ]


def shape_mask(shape: str, size: int) -> Image.Image | None:
    """Return a coverage mask for ``shape``; None means the full square."""

    def paint(draw: ImageDraw.ImageDraw, w: int, h: int) -> None:
        match shape:
            case "squircle":
                draw.rounded_rectangle(
                    (0, 0, w - 1, h - 1), radius=w * SQUIRCLE_RADIUS, fill=255
                )
            case "circle":
                draw.ellipse((0, 0, w - 1, h - 1), fill=255)
            case "themed":
                draw.polygon(hexagon_points(w / 2, h / 2, w / 2), fill=255)

    if shape not in ("squircle", "circle", "themed"):
        return None
    return _supersampled(size, size, paint)


def apply_mask(canvas: Image.Image, mask: Image.Image | None) -> None:
    """Keep only the pixels where both the canvas and ``mask`` have coverage."""
    if mask is None:
        return
    canvas.putalpha(ImageChops.multiply(canvas.getchannel("A"), mask))


def _composite(canvas: Image.Image, layer: Image.Image, x: int, y: int) -> None:
    """Alpha-composite ``layer`` at (x, y), clipping at the canvas edges."""
    if x >= canvas.width or y >= canvas.height:
        return
    src_x, src_y = max(-x, 0), max(-y, 0)
    if src_x >= layer.width or src_y >= layer.height:
        return
    canvas.alpha_composite(layer, dest=(max(x, 0), max(y, 0)), source=(src_x, src_y))


def _stamp(canvas: Image.Image, mask: Image.Image, color: RGBA, x: int, y: int) -> None:
    """Composite a solid ``color`` through ``mask`` at (x, y)."""
    layer = Image.new("RGBA", mask.size, color)
    layer.putalpha(ImageChops.multiply(mask, Image.new("L", mask.size, color[3])))
    _composite(canvas, layer, x, y)


# ---- Content ----


def _draw_text(
    canvas: Image.Image,
    text: str,
    center: Point,
    font_size: float,
    color: RGBA,
    *,
    family: str | None = None,
) -> None:
    if not text or font_size < 1:
        return
    font = load_font(round(font_size), bold=True, family=family)
    ImageDraw.Draw(canvas).text(center, text, fill=color, font=font, anchor="mm")


def _draw_emoji(canvas: Image.Image, text: str, center: Point, box: float) -> None:
    """Draw an emoji scaled to fit a square ``box`` centred on ``center``."""
    if not text or box < 1:
        return
    font = load_emoji_font()
    if font is None:
        _draw_text(canvas, text, center, box, _BLACK)
        return
    strike = int(font.size)
    tmp = Image.new("RGBA", (strike * 3, strike * 3), TRANSPARENT)
    ImageDraw.Draw(tmp).text(
        (tmp.width / 2, tmp.height / 2),
        text,
        font=font,
        anchor="mm",
        embedded_color=True,
        fill=_BLACK,
    )
    bbox = tmp.getbbox()
    if bbox is None:
        return
    glyph = tmp.crop(bbox)
    fit = box / max(glyph.width, glyph.height)
    w, h = max(1, round(glyph.width * fit)), max(1, round(glyph.height * fit))
    glyph = glyph.resize((w, h), Image.Resampling.LANCZOS)
    _composite(canvas, glyph, round(center[0] - w / 2), round(center[1] - h / 2))


def _draw_glyph(
    canvas: Image.Image, name: str, center: Point, box: float, color: RGBA
) -> None:
    if not is_known_glyph(name):
        _LOGGER.warning("Unknown glyph %r; skipping icon content", name)
        return
    side = round(box)
    if side < 1:
        return
    mask = glyph_mask(name, side)
    _stamp(canvas, mask, color, round(center[0] - side / 2), round(center[1] - side / 2))


def _silhouette(image: Image.Image, color: RGBA) -> Image.Image:
    """Return ``image`` recoloured to a flat ``color`` keeping its alpha."""
    layer = Image.new("RGBA", image.size, color)
    layer.putalpha(image.getchannel("A"))
    return layer


def draw_content(
    canvas: Image.Image,
    config: IconConfig,
    origin: Point,
    box: float,
    content_image: Image.Image | None = None,
    *,
    glyph_ratio: float = CONTENT_GLYPH_RATIO,
    color: RGBA = _WHITE,
    monochrome: bool = False,
) -> None:
    """
    Draw the icon's foreground into the square content box at ``origin``.

    Text, emoji and glyphs are centred at ``glyph_ratio`` of the box; raster
    images are stretched to fill the box.
    """
    if box < 1:
        return
    center = (origin[0] + box / 2, origin[1] + box / 2)
    value = config.source_value
    match config.source_type:
        case "text":
            _draw_text(canvas, str(value), center, box * glyph_ratio, color)
        case "clipart":
            if monochrome:
                _draw_text(canvas, str(value), center, box * glyph_ratio, color)
            else:
                _draw_emoji(canvas, str(value), center, box * glyph_ratio)
        case "image":
            if content_image is None:
                _LOGGER.debug("Content image unavailable; skipping content")
                return
            side = max(1, round(box))
            scaled = content_image.resize((side, side), Image.Resampling.LANCZOS)
            if monochrome:
                scaled = _silhouette(scaled, color)
            _composite(canvas, scaled, round(origin[0]), round(origin[1]))
        case _:
            _draw_glyph(canvas, str(value), center, box * glyph_ratio, color)


def draw_badge(canvas: Image.Image, color: str) -> None:
    """Draw the notification badge in the top-right corner."""
    size = canvas.width
    diameter = max(1, round(size * BADGE_DIAMETER))
    x = round(size - size * BADGE_DIAMETER - size * BADGE_MARGIN)
    y = round(size * BADGE_MARGIN)
    mask = _supersampled(
        diameter, diameter, lambda d, w, h: d.ellipse((0, 0, w - 1, h - 1), fill=255)
    )
    _stamp(canvas, mask, parse_color(color), x, y)


# ---- Icons ----


def draw_icon(config: IconConfig, size: int, images: IconImages | None = None) -> Image.Image:
    """Render ``config`` as a square RGBA image of ``size`` pixels."""
    images = images or IconImages()
    canvas = Image.new("RGBA", (size, size), TRANSPARENT)

    background = icon_background(config, size, images.background)
    if background is not None:
        canvas.alpha_composite(background)

    padding = config.padding
    draw_content(
        canvas,
        config,
        (size * padding, size * padding),
        size * (1 - 2 * padding),
        images.content,
    )

    apply_mask(canvas, shape_mask(config.shape, size))

    if config.has_badge:
        draw_badge(canvas, config.badge_color)
    return canvas


def draw_monochrome_icon(
    config: IconConfig, size: int, images: IconImages | None = None
) -> Image.Image:
    """Render a single-colour silhouette of the content on a transparent canvas."""
    images = images or IconImages()
    canvas = Image.new("RGBA", (size, size), TRANSPARENT)
    padding = config.padding if config.effect == "padding" else MONOCHROME_DEFAULT_PADDING
    draw_content(
        canvas,
        config,
        (size * padding, size * padding),
        size * (1 - 2 * padding),
        images.content,
        monochrome=True,
    )
    return canvas


def draw_banner(
    config: IconConfig,
    width: int,
    height: int,
    images: IconImages | None = None,
    *,
    caption: str | None = None,
) -> Image.Image:
    """
    Render a wide banner from an icon design.

    Gradient designs run left to right; every other background kind falls back
    to the solid background colour. The content sits in a centred square of
    0.6 times the short side, with an optional caption underneath.
    """
    images = images or IconImages()
    if config.background_type == "gradient":
        canvas = linear_gradient(
            width, height, config.gradient.colors, (0, height / 2), (width, height / 2)
        )
    else:
        canvas = _solid(width, height, config.background_color)

    box = min(width, height) * BANNER_CONTENT_RATIO
    origin = ((width - box) / 2, (height - box) / 2)
    ratio = 1.0 if config.source_type == "image" else 0.5
    draw_content(canvas, config, origin, box, images.content, glyph_ratio=ratio)

    if caption:
        band_top = origin[1] + box
        _draw_text(
            canvas,
            caption,
            (width / 2, band_top + (height - band_top) / 2),
            (height - band_top) / 2,
            _WHITE,
        )
    return canvas


# ---- Splash ----


def splash_background(
    config: SplashConfig,
    width: int,
    height: int,
    background_image: Image.Image | None = None,
) -> Image.Image:
    """Return the splash background; gradients always run top to bottom."""
    if config.background_type == "gradient":
        return _gradient_fill(width, height, config.gradient, direction="to-b")
    if config.background_type == "image" and background_image is not None:
        return background_image.resize((width, height), Image.Resampling.LANCZOS)
    return _solid(width, height, config.background_color)


def fit_logo(
    logo_size: tuple[int, int], max_width: float, max_height: float
) -> tuple[float, float]:
    """Return the largest (w, h) with the logo's aspect inside the limits."""
    aspect = logo_size[0] / logo_size[1] if logo_size[1] else 1.0
    w = max_width
    h = w / aspect if aspect else max_height
    if h > max_height:
        h = max_height
        w = h * aspect
    return w, h


def draw_splash(
    config: SplashConfig,
    width: int,
    height: int,
    logo: Image.Image | None = None,
    background_image: Image.Image | None = None,
) -> Image.Image:
    """Render ``config`` as a ``width`` x ``height`` RGBA splash screen."""
    canvas = Image.new("RGBA", (width, height), TRANSPARENT)
    canvas.alpha_composite(splash_background(config, width, height, background_image))

    scale = SPLASH_SCALES.get(config.scale, SPLASH_SCALES["medium"])
    max_logo_w = width * scale
    max_logo_h = height * scale * 0.5
    center_y = height * SPLASH_ANCHORS.get(config.position, 0.5)
    both = config.content_type == "logo-text"

    if config.has_logo and logo is not None and logo.width and logo.height:
        logo_w, logo_h = fit_logo(logo.size, max_logo_w, max_logo_h)
        lw, lh = max(1, round(logo_w)), max(1, round(logo_h))
        x = (width - logo_w) / 2
        y = center_y - logo_h / 2 - (SPLASH_LOGO_TEXT_GAP if both else 0)
        scaled = logo.resize((lw, lh), Image.Resampling.LANCZOS)
        _composite(canvas, scaled, round(x), round(y))
    elif config.has_logo:
        _LOGGER.debug("Splash logo unavailable; skipping logo")

    if config.has_text:
        font_size = min(width * SPLASH_TEXT_RATIO, SPLASH_TEXT_MAX)
        text_y = center_y + max_logo_h * 0.3 if both else center_y
        _draw_text(
            canvas,
            config.text,
            (width / 2, text_y),
            font_size,
            parse_color(config.text_color, parse_color(WHITE)),
            family=config.text_font,
        )
    return canvas


# ---- Async entry points ----


async def load_icon_images(config: IconConfig, loader: ImageLoader) -> IconImages:
    """Decode the images ``config`` refers to."""
    background = None
    content = None
    if config.background_type == "image":
        background = await loader.load(config.background_image)
    if config.source_type == "image":
        content = await loader.load(config.source_value)
    return IconImages(background=background, content=content)


async def render_icon_png(
    config: IconConfig, size: int, *, loader: ImageLoader | None = None
) -> bytes:
    """Render an icon and return PNG bytes."""
    images = await load_icon_images(config, loader or ImageLoader())
    return await encode_png_async(draw_icon(config, size, images))


async def render_monochrome_png(
    config: IconConfig, size: int, *, loader: ImageLoader | None = None
) -> bytes:
    """Render a monochrome icon and return PNG bytes."""
    images = await load_icon_images(config, loader or ImageLoader())
    return await encode_png_async(draw_monochrome_icon(config, size, images))


async def render_banner_png(
    config: IconConfig,
    width: int,
    height: int,
    *,
    caption: str | None = None,
    loader: ImageLoader | None = None,
) -> bytes:
    """Render a banner and return PNG bytes."""
    images = await load_icon_images(config, loader or ImageLoader())
    return await encode_png_async(
        draw_banner(config, width, height, images, caption=caption)
    )


async def render_splash_png(
    config: SplashConfig,
    width: int,
    height: int,
    *,
    loader: ImageLoader | None = None,
) -> bytes:
    """Render a splash screen and return PNG bytes."""
    loader = loader or ImageLoader()
    logo = await loader.load(config.logo_image) if config.has_logo else None
    background = None
    if config.background_type == "image":
        background = await loader.load(config.background_image)
    return await encode_png_async(
        draw_splash(config, width, height, logo=logo, background_image=background)
    )
