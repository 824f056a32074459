"""Data models for the splashcraft asset generator."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, replace
from typing import Literal

from .const import DEFAULT_FILENAME, DEFAULT_ICON_BACKGROUND, WHITE

# Image inputs are either raw encoded bytes or a ``data:`` URL string.
ImageSource = str | bytes

SourceType = Literal["icon", "clipart", "text", "image"]
BackgroundType = Literal["color", "gradient", "mesh", "image", "texture", "none"]
Shape = Literal["square", "squircle", "circle", "themed"]


@dataclass(frozen=True)
class GradientConfig:
    """Linear gradient stops and compass direction."""

    colors: tuple[str, ...] = ("#3B82F6", "#8B5CF6")
    direction: str = "to-br"


@dataclass(frozen=True)
class MeshConfig:
    """Colours blended into a mesh background."""

    colors: tuple[str, ...] = ("#3B82F6", "#8B5CF6", "#EC4899", "#10B981")


@dataclass(frozen=True)
class AdaptiveIconConfig:
    """
    Separate foreground/background layers for Android adaptive icons.

    Outputs use ``foreground`` and, for the ``color`` kind, ``background_color``.
    ``background_gradient`` and ``background_image`` are parsed and kept only so
    a project round-trips unchanged; nothing renders them.
    """

    enabled: bool = False
    foreground: ImageSource | None = None
    background_type: Literal["color", "gradient", "image"] = "color"
    background_color: str = DEFAULT_ICON_BACKGROUND
    background_gradient: GradientConfig = field(
        default_factory=lambda: GradientConfig(direction="to-br")
    )
    background_image: ImageSource | None = None


@dataclass(frozen=True)
class IconConfig:
    """
    One icon design.

    Only the parameter set matching ``background_type`` is used when
    rendering; the others are kept so a designer can switch back without
    losing them.
    """

    source_type: SourceType = "icon"
    source_value: str | bytes = "Sparkles"
    scaling_mode: Literal["center", "crop", "mask"] = "center"
    effect: Literal["none", "padding"] = "padding"
    padding_percent: float = 15
    background_type: BackgroundType = "gradient"
    background_color: str = DEFAULT_ICON_BACKGROUND
    gradient: GradientConfig = field(default_factory=GradientConfig)
    mesh: MeshConfig = field(default_factory=MeshConfig)
    background_image: ImageSource | None = None
    texture: str = "noise"
    shape: Shape = "squircle"
    has_badge: bool = False
    badge_color: str = "#EF4444"
    filename: str = DEFAULT_FILENAME
    adaptive: AdaptiveIconConfig = field(default_factory=AdaptiveIconConfig)

    @property
    def padding(self) -> float:
        """Return the padding fraction applied on each side (0..0.5)."""
        if self.effect != "padding":
            return 0.0
        return max(0.0, min(float(self.padding_percent), 100.0)) / 100.0

    @property
    def output_filename(self) -> str:
        """Return the base filename used for Android outputs."""
        return self.filename or DEFAULT_FILENAME

    @property
    def icon_background_color(self) -> str:
        """Colour written to the ``ic_launcher_background`` resource."""
        if self.adaptive.enabled and self.adaptive.background_type == "color":
            return self.adaptive.background_color
        return self.background_color

    def round_variant(self) -> IconConfig:
        """Return the config used for ``*_round`` launcher icons."""
        return replace(self, shape="circle")

    def foreground_variant(self) -> IconConfig:
        """
        Return the config used for adaptive-icon foreground layers.

        The background is dropped and no mask is applied. When an adaptive
        foreground image is configured it replaces the regular content.
        """
        variant = replace(self, background_type="none", shape="square")
        if self.adaptive.enabled and self.adaptive.foreground:
            variant = replace(
                variant, source_type="image", source_value=self.adaptive.foreground
            )
        return variant


@dataclass(frozen=True)
class SplashConfig:
    """One splash-screen design."""

    content_type: Literal["logo", "text", "logo-text"] = "logo"
    logo_image: ImageSource | None = None
    text: str = "My App"
    text_color: str = WHITE
    text_font: str = "Inter"
    position: Literal["top", "center", "bottom"] = "center"
    scale: Literal["small", "medium", "large"] = "medium"
    background_type: Literal["color", "gradient", "image"] = "color"
    background_color: str = DEFAULT_ICON_BACKGROUND
    gradient: GradientConfig = field(
        default_factory=lambda: GradientConfig(direction="to-b")
    )
    background_image: ImageSource | None = None

    @property
    def has_logo(self) -> bool:
        """Return True if the layout includes a logo slot."""
        return self.content_type in ("logo", "logo-text")

    @property
    def has_text(self) -> bool:
        """Return True if the layout includes a text line."""
        return self.content_type in ("text", "logo-text")


@dataclass(frozen=True)
class AndroidStudioOptions:
    """Toggles for an Android Studio ``res/`` tree."""

    enabled: bool = False
    generate_round_icon: bool = True
    generate_foreground: bool = True
    generate_monochrome: bool = True
    generate_adaptive_xml: bool = True
    generate_splash_xml: bool = True


@dataclass(frozen=True)
class CustomIconSize:
    """A user-defined output size written to ``custom/<name>.png``."""

    id: str
    name: str
    width: int
    height: int
    enabled: bool = True

    @property
    def is_square(self) -> bool:
        """Return True for square sizes rendered as regular icons."""
        return self.width == self.height


@dataclass(frozen=True)
class ExtendedIconOptions:
    """Extra platforms and user-defined sizes."""

    macos: bool = False
    web: bool = False
    tvos: bool = False
    android_tv: bool = False
    play_store: bool = False
    web_app_name: str = "My App"
    web_theme_color: str = DEFAULT_ICON_BACKGROUND
    play_store_app_name: str = ""
    custom_sizes: tuple[CustomIconSize, ...] = ()

    @property
    def enabled_custom_sizes(self) -> tuple[CustomIconSize, ...]:
        """Return only the custom sizes that produce output."""
        return tuple(s for s in self.custom_sizes if s.enabled)


@dataclass(frozen=True)
class SizeDescriptor:
    """A square icon slot in the size registry."""

    name: str
    size: int
    folder: str
    platform: str


@dataclass(frozen=True)
class BannerDescriptor:
    """A non-square slot (splash screens and banners)."""

    name: str
    width: int
    height: int
    folder: str
    platform: str = ""

    @property
    def is_square(self) -> bool:
        """Return True when width equals height."""
        return self.width == self.height


@dataclass(frozen=True)
class GeneratedAsset:
    """One output file: display name, archive path, and content."""

    name: str
    path: str
    content: bytes = field(repr=False)


@dataclass(frozen=True)
class GenerationRequest:
    """Everything one generation run needs."""

    icon: IconConfig = field(default_factory=IconConfig)
    splash: SplashConfig = field(default_factory=SplashConfig)
    platforms: tuple[str, ...] = ("android", "ios")
    android_studio: AndroidStudioOptions = field(default_factory=AndroidStudioOptions)
    extended: ExtendedIconOptions = field(default_factory=ExtendedIconOptions)

    def snapshot(self) -> GenerationRequest:
        """Return a deep copy that later edits cannot reach."""
        return copy.deepcopy(self)

    def has_platform(self, platform: str) -> bool:
        """Return True if the platform token was requested."""
        return platform in self.platforms

    @property
    def use_android_studio(self) -> bool:
        """Return True if the Android Studio layout applies to this run."""
        return self.android_studio.enabled and self.has_platform("android")
