"""Shared pytest fixtures for splashcraft tests."""

from __future__ import annotations

import base64
import io
from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, patch

import pytest
from PIL import Image

from splashcraft.models import (
    AndroidStudioOptions,
    GenerationRequest,
    IconConfig,
    SplashConfig,
)

if TYPE_CHECKING:
    from collections.abc import Generator


def png_bytes(size: tuple[int, int], color: tuple[int, int, int, int]) -> bytes:
    """Encode a solid RGBA image as PNG."""
    buf = io.BytesIO()
    Image.new("RGBA", size, color).save(buf, format="PNG")
    return buf.getvalue()


def data_url(data: bytes, mime: str = "image/png") -> str:
    """Wrap encoded image bytes in a base64 data URL."""
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


def open_png(data: bytes) -> Image.Image:
    """Decode PNG bytes into an RGBA image."""
    with Image.open(io.BytesIO(data)) as img:
        img.load()
        return img.convert("RGBA")


@pytest.fixture
def red_png() -> bytes:
    """A 64x64 opaque red PNG."""
    return png_bytes((64, 64), (255, 0, 0, 255))


@pytest.fixture
def wide_logo_png() -> bytes:
    """A 200x100 opaque green PNG."""
    return png_bytes((200, 100), (0, 255, 0, 255))


@pytest.fixture
def solid_icon() -> IconConfig:
    """A plain red square icon with no content and no padding."""
    return IconConfig(
        source_type="text",
        source_value="",
        effect="none",
        background_type="color",
        background_color="#FF0000",
        shape="square",
    )


@pytest.fixture
def text_splash() -> SplashConfig:
    """A blue text-only splash screen."""
    return SplashConfig(content_type="text", text="Hi", background_color="#0000FF")


@pytest.fixture
def base_request() -> GenerationRequest:
    """Android and iOS with the generic Android layout."""
    return GenerationRequest(platforms=("android", "ios"))


@pytest.fixture
def studio_request() -> GenerationRequest:
    """Android only with every Android Studio option on."""
    return GenerationRequest(
        platforms=("android",),
        android_studio=AndroidStudioOptions(enabled=True),
    )


@pytest.fixture
def fake_renderers() -> Generator[dict[str, AsyncMock]]:
    """Replace every renderer the coordinator calls with a cheap stub."""
    mocks = {
        "render_icon_png": AsyncMock(return_value=b"icon"),
        "render_monochrome_png": AsyncMock(return_value=b"mono"),
        "render_banner_png": AsyncMock(return_value=b"banner"),
        "render_splash_png": AsyncMock(return_value=b"splash"),
    }
    with (
        patch("splashcraft.coordinator.render_icon_png", mocks["render_icon_png"]),
        patch(
            "splashcraft.coordinator.render_monochrome_png",
            mocks["render_monochrome_png"],
        ),
        patch("splashcraft.coordinator.render_banner_png", mocks["render_banner_png"]),
        patch("splashcraft.coordinator.render_splash_png", mocks["render_splash_png"]),
    ):
        yield mocks
