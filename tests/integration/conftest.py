"""Shared pytest fixtures for integration tests."""

from __future__ import annotations

import io
import zipfile
from typing import TYPE_CHECKING

import pytest

from splashcraft.archive import zip_bytes
from splashcraft.coordinator import generate_assets
from splashcraft.models import GenerationRequest, SplashConfig

if TYPE_CHECKING:
    from splashcraft.models import GeneratedAsset


@pytest.fixture
def android_ios_request() -> GenerationRequest:
    """Default icon design with a plain text splash for both phone platforms."""
    return GenerationRequest(
        splash=SplashConfig(content_type="text", text="Weather"),
        platforms=("android", "ios"),
    )


@pytest.fixture
async def generated_assets(
    android_ios_request: GenerationRequest,
) -> list[GeneratedAsset]:
    """Run a full generation with the real rasterizer."""
    return await generate_assets(android_ios_request)


@pytest.fixture
def archive(generated_assets: list[GeneratedAsset]) -> zipfile.ZipFile:
    """Open the zip built from the generated assets."""
    return zipfile.ZipFile(io.BytesIO(zip_bytes(generated_assets)))
