"""Generate every platform-specific app icon and splash screen from one design."""

from __future__ import annotations

from .coordinator import AssetCoordinator, generate_assets, plan_assets
from .exceptions import (
    AssetEncodeError,
    DuplicateAssetPathError,
    GenerationCancelledError,
    InvalidProjectError,
    RenderingUnavailableError,
    SplashcraftError,
)
from .models import (
    AdaptiveIconConfig,
    AndroidStudioOptions,
    CustomIconSize,
    ExtendedIconOptions,
    GeneratedAsset,
    GenerationRequest,
    GradientConfig,
    IconConfig,
    MeshConfig,
    SplashConfig,
)
from .schema import request_from_dict

__all__ = [
    "AdaptiveIconConfig",
    "AndroidStudioOptions",
    "AssetCoordinator",
    "AssetEncodeError",
    "CustomIconSize",
    "DuplicateAssetPathError",
    "ExtendedIconOptions",
    "GeneratedAsset",
    "GenerationCancelledError",
    "GenerationRequest",
    "GradientConfig",
    "IconConfig",
    "InvalidProjectError",
    "MeshConfig",
    "RenderingUnavailableError",
    "SplashConfig",
    "SplashcraftError",
    "generate_assets",
    "plan_assets",
    "request_from_dict",
]
