"""
Glyph registry for ``icon`` sources.

Each glyph is a short list of filled primitives on a 512 px design grid.
Primitives are drawn in order; ``erase`` primitives punch holes into what was
drawn before them. Glyph names are a closed set: configs naming anything else
are rejected when the project is validated, so an export never ends up with a
silently blank icon.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from PIL import Image, ImageDraw

from .imaging import downsample_mask, supersample_factor

if TYPE_CHECKING:
    from collections.abc import Iterable

GRID = 512.0

Point = tuple[float, float]


@dataclass(frozen=True)
class Primitive:
    """One filled shape of a glyph."""

    kind: Literal["polygon", "ellipse", "rect", "rounded"]
    coords: tuple[float, ...] | tuple[Point, ...]
    radius: float = 0.0
    erase: bool = False


def _star(
    cx: float, cy: float, outer: float, inner: float, points: int
) -> tuple[Point, ...]:
    """Return the outline of a star with ``points`` tips, first tip up."""
    out: list[Point] = []
    for i in range(points * 2):
        r = outer if i % 2 == 0 else inner
        angle = -math.pi / 2 + i * math.pi / points
        out.append((cx + r * math.cos(angle), cy + r * math.sin(angle)))
    return tuple(out)


def _ray(angle_deg: float, r0: float, r1: float, half_width: float) -> tuple[Point, ...]:
    """Return a rectangular ray pointing away from the grid centre."""
    a = math.radians(angle_deg)
    dx, dy = math.cos(a), math.sin(a)
    nx, ny = -dy * half_width, dx * half_width
    c = GRID / 2
    return (
        (c + dx * r0 + nx, c + dy * r0 + ny),
        (c + dx * r1 + nx, c + dy * r1 + ny),
        (c + dx * r1 - nx, c + dy * r1 - ny),
        (c + dx * r0 - nx, c + dy * r0 - ny),
    )


def _poly(points: Iterable[Point], *, erase: bool = False) -> Primitive:
    return Primitive("polygon", tuple(points), erase=erase)


def _ellipse(x0: float, y0: float, x1: float, y1: float, *, erase: bool = False) -> Primitive:
    return Primitive("ellipse", (x0, y0, x1, y1), erase=erase)


def _rect(x0: float, y0: float, x1: float, y1: float, *, erase: bool = False) -> Primitive:
    return Primitive("rect", (x0, y0, x1, y1), erase=erase)


def _rounded(
    x0: float, y0: float, x1: float, y1: float, radius: float, *, erase: bool = False
) -> Primitive:
    return Primitive("rounded", (x0, y0, x1, y1), radius=radius, erase=erase)


def _bar(
    x0: float, y0: float, x1: float, y1: float, width: float, *, erase: bool = False
) -> Primitive:
    """Return a straight stroke of ``width`` from (x0, y0) to (x1, y1)."""
    length = math.hypot(x1 - x0, y1 - y0) or 1.0
    nx = -(y1 - y0) / length * width / 2
    ny = (x1 - x0) / length * width / 2
    return _poly(
        [(x0 + nx, y0 + ny), (x1 + nx, y1 + ny), (x1 - nx, y1 - ny), (x0 - nx, y0 - ny)],
        erase=erase,
    )


def _ring(
    x0: float, y0: float, x1: float, y1: float, thickness: float
) -> tuple[Primitive, Primitive]:
    """Return an elliptical ring; the hole also clears anything drawn earlier."""
    return (
        _ellipse(x0, y0, x1, y1),
        _ellipse(x0 + thickness, y0 + thickness, x1 - thickness, y1 - thickness, erase=True),
    )


def _mirror(points: Iterable[Point]) -> list[Point]:
    return [(GRID - x, y) for x, y in points]


GLYPHS: dict[str, tuple[Primitive, ...]] = {
    "Sparkles": (
        _poly(_star(240, 272, 200, 44, 4)),
        _poly(_star(404, 108, 76, 17, 4)),
        _poly(_star(420, 404, 52, 12, 4)),
    ),
    "Star": (_poly(_star(256, 276, 236, 96, 5)),),
    "Heart": (
        _ellipse(56, 80, 272, 296),
        _ellipse(240, 80, 456, 296),
        _poly([(66, 228), (446, 228), (256, 452)]),
    ),
    "Zap": (
        _poly([(296, 24), (88, 296), (240, 296), (208, 488), (424, 208), (272, 208)]),
    ),
    "Home": (
        _poly(
            [
                (256, 48),
                (32, 256),
                (96, 256),
                (96, 464),
                (416, 464),
                (416, 256),
                (480, 256),
            ]
        ),
        _rect(208, 320, 304, 464, erase=True),
    ),
    "Music": (
        _ellipse(80, 344, 240, 464),
        _rect(208, 80, 240, 404),
        _ellipse(304, 296, 464, 416),
        _rect(432, 40, 464, 356),
        _poly([(208, 80), (464, 40), (464, 120), (208, 160)]),
    ),
    "Camera": (
        _rounded(32, 128, 480, 432, 48),
        _rect(176, 80, 336, 140),
        _ellipse(150, 174, 362, 386, erase=True),
        _ellipse(190, 214, 322, 346),
    ),
    "Bell": (
        _ellipse(136, 64, 376, 304),
        _poly([(136, 184), (376, 184), (408, 384), (104, 384)]),
        _rounded(64, 360, 448, 400, 20),
        _ellipse(216, 404, 296, 476),
    ),
    "Shield": (
        _poly([(256, 32), (448, 104), (432, 272), (256, 480), (80, 272), (64, 104)]),
    ),
    "Sun": (
        _ellipse(160, 160, 352, 352),
        *(_poly(_ray(angle, 132, 236, 18)) for angle in range(0, 360, 45)),
    ),
    "Moon": (
        _ellipse(64, 64, 448, 448),
        _ellipse(192, 16, 528, 352, erase=True),
    ),
    "Cloud": (
        _ellipse(56, 232, 216, 392),
        _ellipse(136, 120, 352, 336),
        _ellipse(272, 176, 456, 360),
        _rounded(56, 272, 456, 400, 64),
    ),
    "Target": (
        _ellipse(32, 32, 480, 480),
        _ellipse(96, 96, 416, 416, erase=True),
        _ellipse(160, 160, 352, 352),
        _ellipse(216, 216, 296, 296, erase=True),
    ),
    "Lock": (
        _ellipse(144, 48, 368, 272),
        _ellipse(192, 96, 320, 224, erase=True),
        _rect(192, 160, 320, 232, erase=True),
        _rounded(96, 224, 416, 464, 36),
        _ellipse(232, 296, 280, 344, erase=True),
        _rect(244, 328, 268, 400, erase=True),
    ),
    "Mail": (
        _rounded(32, 96, 480, 416, 32),
        _poly(
            [(64, 120), (112, 120), (256, 244), (400, 120), (448, 120), (256, 292)],
            erase=True,
        ),
    ),
    "Flame": (
        _ellipse(112, 216, 400, 480),
        _poly([(240, 24), (400, 312), (112, 320), (168, 208), (208, 256)]),
        _ellipse(208, 336, 304, 448, erase=True),
    ),
    "Rocket": (
        _poly([(256, 24), (344, 128), (344, 352), (168, 352), (168, 128)]),
        _poly([(168, 240), (88, 360), (168, 352)]),
        _poly(_mirror([(168, 240), (88, 360), (168, 352)])),
        _ellipse(216, 144, 296, 224, erase=True),
        _poly([(208, 376), (304, 376), (256, 488)]),
    ),
    "ShoppingCart": (
        _poly([(32, 64), (112, 64), (144, 128), (480, 128), (432, 320), (176, 320)]),
        _ellipse(160, 376, 232, 448),
        _ellipse(352, 376, 424, 448),
    ),
    "MessageCircle": (
        _ellipse(40, 40, 472, 440),
        _poly([(80, 320), (40, 472), (208, 424)]),
    ),
    "Settings": (
        _ellipse(96, 96, 416, 416),
        *(_poly(_ray(angle, 140, 236, 40)) for angle in range(0, 360, 45)),
        _ellipse(192, 192, 320, 320, erase=True),
    ),
    "User": (
        _ellipse(160, 40, 352, 232),
        _rounded(72, 264, 440, 480, 96),
    ),
    "Phone": (
        _rounded(144, 24, 368, 488, 40),
        _rect(168, 72, 344, 408, erase=True),
        _ellipse(236, 420, 276, 460, erase=True),
    ),
    "Calendar": (
        _rounded(48, 80, 464, 464, 36),
        _rect(80, 192, 432, 432, erase=True),
        _rect(136, 32, 176, 128),
        _rect(336, 32, 376, 128),
        *(
            _rect(x, y, x + 64, y + 56)
            for y in (240, 336)
            for x in (128, 224, 320)
        ),
    ),
    "Clock": (
        *_ring(32, 32, 480, 480, 48),
        _bar(256, 272, 256, 128, 32),
        _bar(256, 256, 352, 320, 32),
    ),
    "Map": (
        _poly(
            [
                (32, 96),
                (176, 48),
                (336, 112),
                (480, 64),
                (480, 416),
                (336, 464),
                (176, 400),
                (32, 448),
            ]
        ),
        _bar(176, 48, 176, 400, 16, erase=True),
        _bar(336, 112, 336, 464, 16, erase=True),
    ),
    "Gift": (
        _rect(64, 208, 448, 464),
        _rect(40, 144, 472, 224),
        _rect(240, 144, 272, 464, erase=True),
        _ellipse(144, 48, 256, 160),
        _ellipse(256, 48, 368, 160),
    ),
    "Bookmark": (
        _poly([(112, 32), (400, 32), (400, 480), (256, 368), (112, 480)]),
    ),
    "Award": (
        *_ring(112, 32, 400, 320, 56),
        _ellipse(200, 120, 312, 232),
        _poly([(176, 280), (240, 312), (208, 480), (168, 432), (120, 456)]),
        _poly(_mirror([(176, 280), (240, 312), (208, 480), (168, 432), (120, 456)])),
    ),
    "Trophy": (
        *_ring(48, 80, 176, 208, 32),
        *_ring(336, 80, 464, 208, 32),
        _poly(
            [(128, 48), (384, 48), (384, 176), (352, 272), (256, 320), (160, 272), (128, 176)]
        ),
        _rect(232, 300, 280, 400),
        _rounded(144, 400, 368, 464, 16),
    ),
    "Compass": (
        *_ring(32, 32, 480, 480, 40),
        _poly([(352, 160), (288, 288), (160, 352), (224, 224)]),
    ),
    "Umbrella": (
        _ellipse(32, 48, 480, 496),
        _rect(0, 272, 512, 512, erase=True),
        _rect(240, 256, 272, 440),
        *_ring(176, 376, 272, 472, 32),
        _rect(176, 376, 238, 424, erase=True),
    ),
    "Coffee": (
        *_ring(320, 208, 464, 352, 32),
        _rounded(64, 160, 384, 448, 48),
        _bar(160, 40, 160, 120, 28),
        _bar(224, 40, 224, 120, 28),
        _bar(288, 40, 288, 120, 28),
    ),
    "Pizza": (
        _poly([(256, 480), (48, 96), (464, 96)]),
        _rounded(40, 56, 472, 120, 24),
        _ellipse(200, 152, 256, 208, erase=True),
        _ellipse(272, 232, 320, 280, erase=True),
        _ellipse(216, 300, 256, 340, erase=True),
    ),
    "Gamepad2": (
        _rounded(32, 144, 480, 384, 120),
        _rect(104, 240, 184, 272, erase=True),
        _rect(128, 216, 160, 296, erase=True),
        _ellipse(320, 216, 352, 248, erase=True),
        _ellipse(368, 264, 400, 296, erase=True),
    ),
    "Headphones": (
        *_ring(64, 64, 448, 448, 48),
        _rect(0, 256, 512, 512, erase=True),
        _rounded(48, 272, 160, 448, 32),
        _rounded(352, 272, 464, 448, 32),
    ),
    "Mic": (
        *_ring(112, 144, 400, 400, 32),
        _rect(96, 128, 416, 272, erase=True),
        _rounded(176, 32, 336, 320, 80),
        _rect(240, 400, 272, 456),
        _rounded(160, 448, 352, 480, 16),
    ),
    "Video": (
        _rounded(32, 128, 352, 384, 40),
        _poly([(368, 256), (480, 160), (480, 352)]),
    ),
    "Image": (
        _rounded(32, 64, 480, 448, 40),
        _rect(72, 104, 440, 408, erase=True),
        _poly([(72, 408), (208, 240), (304, 336), (360, 288), (440, 368), (440, 408)]),
        _ellipse(312, 136, 376, 200),
    ),
    "Palette": (
        _ellipse(32, 48, 480, 464),
        _ellipse(128, 144, 184, 200, erase=True),
        _ellipse(232, 104, 288, 160, erase=True),
        _ellipse(336, 144, 392, 200, erase=True),
        _ellipse(344, 248, 400, 304, erase=True),
        _ellipse(160, 296, 272, 408, erase=True),
    ),
    "Brush": (
        _bar(456, 56, 240, 272, 40),
        _ellipse(136, 256, 288, 408),
        _poly([(40, 472), (144, 336), (176, 368)]),
    ),
    "Pen": (
        _bar(432, 80, 152, 360, 64),
        _poly([(120, 344), (168, 392), (64, 448)]),
    ),
    "Code": (
        _poly([(192, 112), (48, 256), (192, 400), (224, 368), (112, 256), (224, 144)]),
        _poly(
            _mirror(
                [(192, 112), (48, 256), (192, 400), (224, 368), (112, 256), (224, 144)]
            )
        ),
    ),
    "Terminal": (
        _rounded(32, 64, 480, 448, 40),
        _rect(64, 96, 448, 416, erase=True),
        _poly([(112, 160), (224, 256), (112, 352), (112, 312), (176, 256), (112, 200)]),
        _rect(256, 328, 400, 360),
    ),
    "Database": (
        _rect(80, 96, 432, 416),
        _ellipse(80, 40, 432, 152),
        _ellipse(80, 360, 432, 472),
        _rect(80, 216, 432, 232, erase=True),
        _rect(80, 320, 432, 336, erase=True),
    ),
    "Globe": (
        *_ring(32, 32, 480, 480, 48),
        *_ring(160, 48, 352, 464, 32),
        _rect(48, 240, 464, 272),
        _rect(240, 48, 272, 464),
    ),
    "Wifi": (
        *_ring(32, 96, 480, 544, 48),
        *_ring(112, 176, 400, 464, 48),
        _poly([(256, 420), (0, 164), (0, 512), (512, 512), (512, 164)], erase=True),
        _ellipse(224, 392, 288, 456),
    ),
    "Battery": (
        _rounded(32, 144, 432, 368, 32),
        _rect(64, 176, 400, 336, erase=True),
        _rect(96, 208, 288, 304),
        _rect(448, 208, 480, 304),
    ),
    "Key": (
        *_ring(32, 160, 224, 352, 48),
        _rect(208, 232, 480, 280),
        _rect(384, 280, 416, 344),
        _rect(432, 280, 464, 328),
    ),
    "CreditCard": (
        _rounded(32, 96, 480, 416, 32),
        _rect(32, 176, 480, 224, erase=True),
        _rect(80, 320, 208, 352, erase=True),
    ),
    "Wallet": (
        _rounded(32, 112, 448, 432, 40),
        _rect(64, 160, 400, 176, erase=True),
        _rounded(320, 224, 480, 320, 24),
        _ellipse(360, 256, 392, 288, erase=True),
    ),
    "PiggyBank": (
        _ellipse(64, 128, 416, 416),
        _rounded(384, 208, 464, 304, 24),
        _rect(128, 384, 176, 464),
        _rect(304, 384, 352, 464),
        _poly([(160, 152), (176, 72), (240, 136)]),
        _rect(208, 176, 304, 192, erase=True),
        _ellipse(320, 208, 344, 232, erase=True),
    ),
    "TrendingUp": (
        _bar(32, 400, 192, 240, 32),
        _bar(192, 240, 288, 336, 32),
        _bar(288, 336, 432, 192, 32),
        _poly([(352, 128), (480, 128), (480, 256)]),
    ),
    "BarChart": (
        _rect(64, 288, 144, 448),
        _rect(216, 160, 296, 448),
        _rect(368, 64, 448, 448),
    ),
    "Activity": (
        _bar(32, 256, 160, 256, 28),
        _bar(160, 256, 208, 96, 28),
        _bar(208, 96, 304, 416, 28),
        _bar(304, 416, 352, 256, 28),
        _bar(352, 256, 480, 256, 28),
    ),
    "Dumbbell": (
        _rect(128, 232, 384, 280),
        _rounded(64, 152, 144, 360, 16),
        _rounded(368, 152, 448, 360, 16),
        _rounded(24, 200, 72, 312, 12),
        _rounded(440, 200, 488, 312, 12),
    ),
    "Bike": (
        *_ring(24, 256, 200, 432, 32),
        *_ring(312, 256, 488, 432, 32),
        _bar(112, 344, 224, 344, 20),
        _bar(224, 344, 320, 192, 20),
        _bar(320, 192, 400, 344, 20),
        _bar(112, 344, 192, 200, 20),
        _bar(192, 200, 320, 192, 20),
        _rect(160, 176, 232, 200),
        _bar(320, 192, 344, 136, 20),
    ),
    "Car": (
        _rounded(32, 224, 480, 384, 40),
        _poly([(112, 224), (160, 128), (352, 128), (400, 224)]),
        _poly([(168, 208), (192, 152), (248, 152), (248, 208)], erase=True),
        _poly([(272, 152), (328, 152), (352, 208), (272, 208)], erase=True),
        _ellipse(88, 336, 184, 432),
        _ellipse(328, 336, 424, 432),
        _ellipse(120, 368, 152, 400, erase=True),
        _ellipse(360, 368, 392, 400, erase=True),
    ),
    "Plane": (
        _rounded(224, 32, 288, 448, 32),
        _poly([(256, 176), (480, 304), (480, 344), (256, 272), (32, 344), (32, 304)]),
        _poly([(256, 384), (352, 464), (352, 488), (256, 456), (160, 488), (160, 464)]),
    ),
    "Ship": (
        _poly([(32, 320), (480, 320), (400, 448), (112, 448)]),
        _rect(144, 208, 368, 320),
        _rect(208, 96, 272, 208),
        *(_ellipse(x, 240, x + 32, 272, erase=True) for x in (176, 240, 304)),
    ),
    "Train": (
        _rounded(96, 32, 416, 400, 64),
        _rect(144, 96, 368, 208, erase=True),
        _ellipse(144, 288, 192, 336, erase=True),
        _ellipse(320, 288, 368, 336, erase=True),
        _poly([(144, 400), (192, 400), (128, 480), (80, 480)]),
        _poly(_mirror([(144, 400), (192, 400), (128, 480), (80, 480)])),
    ),
    "Bus": (
        _rounded(64, 48, 448, 416, 48),
        _rect(104, 104, 408, 240, erase=True),
        _ellipse(112, 304, 160, 352, erase=True),
        _ellipse(352, 304, 400, 352, erase=True),
        _rect(104, 416, 168, 472),
        _rect(344, 416, 408, 472),
    ),
    "Building": (
        _rect(96, 32, 416, 480),
        *(
            _rect(x, y, x + 48, y + 48, erase=True)
            for y in (80, 176, 272)
            for x in (144, 232, 320)
        ),
        _rect(216, 384, 296, 480, erase=True),
    ),
}

GLYPH_NAMES: tuple[str, ...] = tuple(sorted(GLYPHS))


def is_known_glyph(name: str) -> bool:
    """Return True if ``name`` is a registered glyph."""
    return name in GLYPHS


def _scale(coords: Iterable[float], s: float) -> list[float]:
    return [c * s for c in coords]


def draw_glyph(draw: ImageDraw.ImageDraw, name: str, s: float) -> None:
    """Draw glyph ``name`` into a mode ``L`` image at scale factor ``s``."""
    for prim in GLYPHS[name]:
        fill = 0 if prim.erase else 255
        if prim.kind == "polygon":
            points = [(x * s, y * s) for x, y in prim.coords]  # type: ignore[misc]
            draw.polygon(points, fill=fill)
        elif prim.kind == "ellipse":
            draw.ellipse(_scale(prim.coords, s), fill=fill)  # type: ignore[arg-type]
        elif prim.kind == "rect":
            draw.rectangle(_scale(prim.coords, s), fill=fill)  # type: ignore[arg-type]
        else:
            draw.rounded_rectangle(
                _scale(prim.coords, s),  # type: ignore[arg-type]
                radius=prim.radius * s,
                fill=fill,
            )


def glyph_mask(name: str, size: int) -> Image.Image:
    """
    Return an anti-aliased coverage mask (mode ``L``) of ``size`` square.

    Raises KeyError for names outside the registry.
    """
    if name not in GLYPHS:
        raise KeyError(name)
    size = max(1, int(size))
    big = size * supersample_factor(size, size)
    mask = Image.new("L", (big, big), 0)
    draw_glyph(ImageDraw.Draw(mask), name, big / GRID)
    return downsample_mask(mask, (size, size))
