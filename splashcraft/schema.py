"""
Project document validation.

A project document is the designer's saved state as JSON, using the
designer's camelCase keys. The schemas fill in defaults for every omitted key,
clamp percentages, and reject values the generator cannot honour (unknown glyph
names, invalid resource filenames, clashing custom sizes) before any rendering
starts.
"""

from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol

from .const import (
    ADAPTIVE_BACKGROUND_TYPES,
    BACKGROUND_TYPES,
    CUSTOM_SIZE_MAX,
    CUSTOM_SIZE_MIN,
    DEFAULT_FILENAME,
    DEFAULT_ICON_BACKGROUND,
    EFFECTS,
    GRADIENT_DIRECTIONS,
    PLATFORM_ANDROID,
    PLATFORM_IOS,
    PLATFORMS,
    SCALING_MODES,
    SHAPES,
    SOURCE_TYPES,
    SPLASH_BACKGROUND_TYPES,
    SPLASH_CONTENT_TYPES,
    SPLASH_POSITIONS,
    SPLASH_SCALES,
    TEXTURES,
    WHITE,
)
from .exceptions import InvalidProjectError
from .glyphs import GLYPH_NAMES
from .models import (
    AdaptiveIconConfig,
    AndroidStudioOptions,
    CustomIconSize,
    ExtendedIconOptions,
    GenerationRequest,
    GradientConfig,
    IconConfig,
    MeshConfig,
    SplashConfig,
)

_LOGGER = logging.getLogger(__name__)

HEX_COLOR = vol.Match(
    r"^#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$",
    msg="expected a hex colour such as #3B82F6",
)
# Android resource names: lowercase letters, digits and underscores
RESOURCE_NAME = vol.Match(
    r"^[a-z][a-z0-9_]*$", msg="expected a lowercase Android resource name"
)
FILE_STEM = vol.Match(
    r"^[A-Za-z0-9][A-Za-z0-9._ -]*$", msg="expected a plain file name without a path"
)
IMAGE = vol.Any(None, str, bytes)


def _gradient(default_direction: str) -> vol.Schema:
    return vol.Schema(
        {
            vol.Optional("colors", default=["#3B82F6", "#8B5CF6"]): vol.All(
                [HEX_COLOR], vol.Length(min=1)
            ),
            vol.Optional("direction", default=default_direction): vol.In(
                GRADIENT_DIRECTIONS
            ),
        }
    )


MESH_SCHEMA = vol.Schema(
    {
        vol.Optional(
            "colors", default=["#3B82F6", "#8B5CF6", "#EC4899", "#10B981"]
        ): vol.All([HEX_COLOR], vol.Length(min=1)),
    }
)

ADAPTIVE_SCHEMA = vol.Schema(
    {
        vol.Optional("enabled", default=False): bool,
        vol.Optional("foregroundImage", default=None): IMAGE,
        vol.Optional("backgroundType", default="color"): vol.In(
            ADAPTIVE_BACKGROUND_TYPES
        ),
        vol.Optional("backgroundColor", default=DEFAULT_ICON_BACKGROUND): HEX_COLOR,
        vol.Optional("backgroundGradient", default={}): _gradient("to-br"),
        vol.Optional("backgroundImage", default=None): IMAGE,
    }
)


def _check_icon_source(value: dict[str, Any]) -> dict[str, Any]:
    """Reject source values that cannot be drawn for the chosen source type."""
    source_type = value["sourceType"]
    source = value["sourceValue"]
    if source_type == "icon" and source not in GLYPH_NAMES:
        msg = f"unknown glyph {source!r}; expected one of {', '.join(GLYPH_NAMES)}"
        raise vol.Invalid(msg, path=["sourceValue"])
    if source_type in ("text", "clipart") and not isinstance(source, str):
        msg = f"{source_type} sources must be strings"
        raise vol.Invalid(msg, path=["sourceValue"])
    return value


ICON_SCHEMA = vol.All(
    vol.Schema(
        {
            vol.Optional("sourceType", default="icon"): vol.In(SOURCE_TYPES),
            vol.Optional("sourceValue", default="Sparkles"): vol.Any(str, bytes),
            vol.Optional("scalingMode", default="center"): vol.In(SCALING_MODES),
            vol.Optional("effect", default="padding"): vol.In(EFFECTS),
            vol.Optional("paddingPercent", default=15): vol.All(
                vol.Coerce(float), vol.Clamp(min=0, max=100)
            ),
            vol.Optional("backgroundType", default="gradient"): vol.In(BACKGROUND_TYPES),
            vol.Optional("backgroundColor", default=DEFAULT_ICON_BACKGROUND): HEX_COLOR,
            vol.Optional("gradient", default={}): _gradient("to-br"),
            vol.Optional("meshGradient", default={}): MESH_SCHEMA,
            vol.Optional("backgroundImage", default=None): IMAGE,
            vol.Optional("texture", default="noise"): vol.In(TEXTURES),
            vol.Optional("shape", default="squircle"): vol.In(SHAPES),
            vol.Optional("hasBadge", default=False): bool,
            vol.Optional("badgeColor", default="#EF4444"): HEX_COLOR,
            vol.Optional("filename", default=DEFAULT_FILENAME): vol.Any("", RESOURCE_NAME),
            vol.Optional("adaptiveIcon", default={}): ADAPTIVE_SCHEMA,
        }
    ),
    _check_icon_source,
)

SPLASH_SCHEMA = vol.Schema(
    {
        vol.Optional("contentType", default="logo"): vol.In(SPLASH_CONTENT_TYPES),
        vol.Optional("logoImage", default=None): IMAGE,
        vol.Optional("text", default="My App"): str,
        vol.Optional("textColor", default=WHITE): HEX_COLOR,
        vol.Optional("textFont", default="Inter"): str,
        vol.Optional("position", default="center"): vol.In(SPLASH_POSITIONS),
        vol.Optional("scale", default="medium"): vol.In(tuple(SPLASH_SCALES)),
        vol.Optional("backgroundType", default="color"): vol.In(SPLASH_BACKGROUND_TYPES),
        vol.Optional("backgroundColor", default=DEFAULT_ICON_BACKGROUND): HEX_COLOR,
        vol.Optional("gradient", default={}): _gradient("to-b"),
        vol.Optional("backgroundImage", default=None): IMAGE,
    }
)

ANDROID_STUDIO_SCHEMA = vol.Schema(
    {
        vol.Optional("enabled", default=False): bool,
        vol.Optional("generateRoundIcon", default=True): bool,
        vol.Optional("generateForeground", default=True): bool,
        vol.Optional("generateMonochrome", default=True): bool,
        vol.Optional("generateAdaptiveXml", default=True): bool,
        vol.Optional("generateSplashXml", default=True): bool,
    }
)

_PIXELS = vol.All(vol.Coerce(int), vol.Range(min=CUSTOM_SIZE_MIN, max=CUSTOM_SIZE_MAX))

CUSTOM_SIZE_SCHEMA = vol.Schema(
    {
        vol.Optional("id", default=""): vol.Coerce(str),
        vol.Required("name"): FILE_STEM,
        vol.Required("width"): _PIXELS,
        vol.Required("height"): _PIXELS,
        vol.Optional("enabled", default=True): bool,
    }
)


def _unique_custom_names(sizes: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Reject two enabled custom sizes writing the same file."""
    seen: set[str] = set()
    for size in sizes:
        if not size["enabled"]:
            continue
        if size["name"] in seen:
            msg = f"duplicate custom size name {size['name']!r}"
            raise vol.Invalid(msg)
        seen.add(size["name"])
    return sizes


EXTENDED_SCHEMA = vol.Schema(
    {
        vol.Optional("macOS", default=False): bool,
        vol.Optional("web", default=False): bool,
        vol.Optional("tvOS", default=False): bool,
        vol.Optional("androidTV", default=False): bool,
        vol.Optional("playStore", default=False): bool,
        vol.Optional("webAppName", default="My App"): str,
        vol.Optional("webThemeColor", default=DEFAULT_ICON_BACKGROUND): HEX_COLOR,
        vol.Optional("playStoreAppName", default=""): str,
        vol.Optional("customSizes", default=[]): vol.All(
            [CUSTOM_SIZE_SCHEMA], _unique_custom_names
        ),
    }
)

PROJECT_SCHEMA = vol.Schema(
    {
        vol.Optional("icon", default={}): ICON_SCHEMA,
        vol.Optional("splash", default={}): SPLASH_SCHEMA,
        vol.Optional("platforms", default=[PLATFORM_ANDROID, PLATFORM_IOS]): [
            vol.In(PLATFORMS)
        ],
        vol.Optional("androidStudio", default={}): ANDROID_STUDIO_SCHEMA,
        vol.Optional("extended", default={}): EXTENDED_SCHEMA,
    }
)


def _validate(schema: vol.Schema | vol.All, data: Any, what: str) -> dict[str, Any]:
    try:
        return schema(data)
    except vol.Invalid as err:
        msg = f"Invalid {what}: {err}"
        raise InvalidProjectError(msg) from err


def _gradient_from(data: dict[str, Any]) -> GradientConfig:
    return GradientConfig(colors=tuple(data["colors"]), direction=data["direction"])


def _icon_from_validated(data: dict[str, Any]) -> IconConfig:
    adaptive = data["adaptiveIcon"]
    return IconConfig(
        source_type=data["sourceType"],
        source_value=data["sourceValue"],
        scaling_mode=data["scalingMode"],
        effect=data["effect"],
        padding_percent=data["paddingPercent"],
        background_type=data["backgroundType"],
        background_color=data["backgroundColor"],
        gradient=_gradient_from(data["gradient"]),
        mesh=MeshConfig(colors=tuple(data["meshGradient"]["colors"])),
        background_image=data["backgroundImage"],
        texture=data["texture"],
        shape=data["shape"],
        has_badge=data["hasBadge"],
        badge_color=data["badgeColor"],
        filename=data["filename"] or DEFAULT_FILENAME,
        adaptive=AdaptiveIconConfig(
            enabled=adaptive["enabled"],
            foreground=adaptive["foregroundImage"],
            background_type=adaptive["backgroundType"],
            background_color=adaptive["backgroundColor"],
            background_gradient=_gradient_from(adaptive["backgroundGradient"]),
            background_image=adaptive["backgroundImage"],
        ),
    )


def _splash_from_validated(data: dict[str, Any]) -> SplashConfig:
    return SplashConfig(
        content_type=data["contentType"],
        logo_image=data["logoImage"],
        text=data["text"],
        text_color=data["textColor"],
        text_font=data["textFont"],
        position=data["position"],
        scale=data["scale"],
        background_type=data["backgroundType"],
        background_color=data["backgroundColor"],
        gradient=_gradient_from(data["gradient"]),
        background_image=data["backgroundImage"],
    )


def _android_studio_from_validated(data: dict[str, Any]) -> AndroidStudioOptions:
    return AndroidStudioOptions(
        enabled=data["enabled"],
        generate_round_icon=data["generateRoundIcon"],
        generate_foreground=data["generateForeground"],
        generate_monochrome=data["generateMonochrome"],
        generate_adaptive_xml=data["generateAdaptiveXml"],
        generate_splash_xml=data["generateSplashXml"],
    )


def _extended_from_validated(data: dict[str, Any]) -> ExtendedIconOptions:
    return ExtendedIconOptions(
        macos=data["macOS"],
        web=data["web"],
        tvos=data["tvOS"],
        android_tv=data["androidTV"],
        play_store=data["playStore"],
        web_app_name=data["webAppName"],
        web_theme_color=data["webThemeColor"],
        play_store_app_name=data["playStoreAppName"],
        custom_sizes=tuple(
            CustomIconSize(
                id=size["id"] or size["name"],
                name=size["name"],
                width=size["width"],
                height=size["height"],
                enabled=size["enabled"],
            )
            for size in data["customSizes"]
        ),
    )


def icon_config_from_dict(data: dict[str, Any]) -> IconConfig:
    """Validate an icon design and return it as an IconConfig."""
    return _icon_from_validated(_validate(ICON_SCHEMA, data, "icon"))


def splash_config_from_dict(data: dict[str, Any]) -> SplashConfig:
    """Validate a splash design and return it as a SplashConfig."""
    return _splash_from_validated(_validate(SPLASH_SCHEMA, data, "splash"))


def android_studio_from_dict(data: dict[str, Any]) -> AndroidStudioOptions:
    """Validate Android Studio export options."""
    return _android_studio_from_validated(
        _validate(ANDROID_STUDIO_SCHEMA, data, "androidStudio")
    )


def extended_from_dict(data: dict[str, Any]) -> ExtendedIconOptions:
    """Validate extended format options."""
    return _extended_from_validated(_validate(EXTENDED_SCHEMA, data, "extended"))


def request_from_dict(data: dict[str, Any]) -> GenerationRequest:
    """
    Validate a whole project document and return a GenerationRequest.

    Raises InvalidProjectError naming the first offending key.
    """
    project = _validate(PROJECT_SCHEMA, data, "project")
    platforms = tuple(dict.fromkeys(project["platforms"]))
    _LOGGER.debug("Validated project for platforms %s", platforms)
    return GenerationRequest(
        icon=_icon_from_validated(project["icon"]),
        splash=_splash_from_validated(project["splash"]),
        platforms=platforms,
        android_studio=_android_studio_from_validated(project["androidStudio"]),
        extended=_extended_from_validated(project["extended"]),
    )
