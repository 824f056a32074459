"""
Size registry: every platform output slot the generator knows about.

Rows are grouped per (platform, format) and kept in the order they are
generated. Within one table the (folder, name) pair is unique; the Android
Studio icon table reuses ``ic_launcher`` as the name and relies on the density
folder for uniqueness.
"""

from __future__ import annotations

from .models import BannerDescriptor, SizeDescriptor

_TVOS_BRAND_ASSETS = "tvos/Assets.xcassets/App Icon & Top Shelf Image.brandassets"
_MACOS_ICONSET = "macos/AppIcon.appiconset"

DENSITIES = ("mdpi", "hdpi", "xhdpi", "xxhdpi", "xxxhdpi")
_LAUNCHER_PX = (48, 72, 96, 144, 192)

ANDROID_ICON_SIZES: tuple[SizeDescriptor, ...] = tuple(
    SizeDescriptor(f"mipmap-{d}", px, "android/icons", "android")
    for d, px in zip(DENSITIES, _LAUNCHER_PX, strict=True)
)

ANDROID_STUDIO_ICON_SIZES: tuple[SizeDescriptor, ...] = tuple(
    SizeDescriptor("ic_launcher", px, f"mipmap-{d}", "android")
    for d, px in zip(DENSITIES, _LAUNCHER_PX, strict=True)
)

IOS_ICON_SIZES: tuple[SizeDescriptor, ...] = (
    SizeDescriptor("Icon-20@1x", 20, "ios/icons", "ios"),
    SizeDescriptor("Icon-20@2x", 40, "ios/icons", "ios"),
    SizeDescriptor("Icon-20@3x", 60, "ios/icons", "ios"),
    SizeDescriptor("Icon-29@1x", 29, "ios/icons", "ios"),
    SizeDescriptor("Icon-29@2x", 58, "ios/icons", "ios"),
    SizeDescriptor("Icon-29@3x", 87, "ios/icons", "ios"),
    SizeDescriptor("Icon-40@1x", 40, "ios/icons", "ios"),
    SizeDescriptor("Icon-40@2x", 80, "ios/icons", "ios"),
    SizeDescriptor("Icon-40@3x", 120, "ios/icons", "ios"),
    SizeDescriptor("Icon-60@2x", 120, "ios/icons", "ios"),
    SizeDescriptor("Icon-60@3x", 180, "ios/icons", "ios"),
    SizeDescriptor("Icon-76@1x", 76, "ios/icons", "ios"),
    SizeDescriptor("Icon-76@2x", 152, "ios/icons", "ios"),
    SizeDescriptor("Icon-83.5@2x", 167, "ios/icons", "ios"),
    SizeDescriptor("Icon-1024", 1024, "ios/icons", "ios"),
)

ANDROID_SPLASH_SIZES: tuple[BannerDescriptor, ...] = (
    BannerDescriptor("splash-port-mdpi", 320, 480, "android/splash", "android"),
    BannerDescriptor("splash-port-hdpi", 480, 800, "android/splash", "android"),
    BannerDescriptor("splash-port-xhdpi", 720, 1280, "android/splash", "android"),
    BannerDescriptor("splash-port-xxhdpi", 960, 1600, "android/splash", "android"),
    BannerDescriptor("splash-port-xxxhdpi", 1280, 1920, "android/splash", "android"),
    BannerDescriptor("splash-land-mdpi", 480, 320, "android/splash", "android"),
    BannerDescriptor("splash-land-hdpi", 800, 480, "android/splash", "android"),
    BannerDescriptor("splash-land-xhdpi", 1280, 720, "android/splash", "android"),
    BannerDescriptor("splash-land-xxhdpi", 1600, 960, "android/splash", "android"),
    BannerDescriptor("splash-land-xxxhdpi", 1920, 1280, "android/splash", "android"),
)

_STUDIO_SPLASH_PORTRAIT = (
    ("ldpi", 240, 320),
    ("mdpi", 320, 480),
    ("hdpi", 480, 800),
    ("xhdpi", 720, 1280),
    ("xxhdpi", 960, 1600),
    ("xxxhdpi", 1280, 1920),
)

ANDROID_STUDIO_SPLASH_SIZES: tuple[BannerDescriptor, ...] = tuple(
    BannerDescriptor("splash", w, h, f"drawable-port-{d}", "android")
    for d, w, h in _STUDIO_SPLASH_PORTRAIT
) + tuple(
    BannerDescriptor("splash", h, w, f"drawable-land-{d}", "android")
    for d, w, h in _STUDIO_SPLASH_PORTRAIT
)

IOS_SPLASH_SIZES: tuple[BannerDescriptor, ...] = (
    BannerDescriptor("Default@2x~iphone", 640, 1136, "ios/splash", "ios"),
    BannerDescriptor("Default-568h@2x~iphone", 640, 1136, "ios/splash", "ios"),
    BannerDescriptor("Default-667h@2x~iphone", 750, 1334, "ios/splash", "ios"),
    BannerDescriptor("Default-736h@3x~iphone", 1242, 2208, "ios/splash", "ios"),
    BannerDescriptor("Default-812h@3x~iphone", 1125, 2436, "ios/splash", "ios"),
    BannerDescriptor("Default-896h@2x~iphone", 828, 1792, "ios/splash", "ios"),
    BannerDescriptor("Default-896h@3x~iphone", 1242, 2688, "ios/splash", "ios"),
    BannerDescriptor("Default-1024h@2x~ipad", 1536, 2048, "ios/splash", "ios"),
    BannerDescriptor("Default-1366h@2x~ipad", 2048, 2732, "ios/splash", "ios"),
    BannerDescriptor("Default-Landscape-667h@2x", 1334, 750, "ios/splash", "ios"),
    BannerDescriptor("Default-Landscape-736h@3x", 2208, 1242, "ios/splash", "ios"),
    BannerDescriptor("Default-Landscape-1024h@2x", 2048, 1536, "ios/splash", "ios"),
)

MACOS_ICON_SIZES: tuple[SizeDescriptor, ...] = tuple(
    SizeDescriptor(f"icon_{pt}x{pt}{suffix}", pt * factor, _MACOS_ICONSET, "macOS")
    for pt in (16, 32, 128, 256, 512)
    for suffix, factor in (("", 1), ("@2x", 2))
)

WEB_ICON_SIZES: tuple[SizeDescriptor, ...] = (
    SizeDescriptor("favicon-16x16", 16, "web", "web"),
    SizeDescriptor("favicon-32x32", 32, "web", "web"),
    SizeDescriptor("favicon-48x48", 48, "web", "web"),
    SizeDescriptor("apple-touch-icon", 180, "web", "web"),
    SizeDescriptor("icon-192x192", 192, "web", "web"),
    SizeDescriptor("icon-512x512", 512, "web", "web"),
    SizeDescriptor("maskable-icon-192", 192, "web", "web"),
    SizeDescriptor("maskable-icon-512", 512, "web", "web"),
)

TVOS_ICON_SIZES: tuple[SizeDescriptor, ...] = (
    SizeDescriptor("App Icon - App Store 1x", 1280, _TVOS_BRAND_ASSETS, "tvOS"),
    SizeDescriptor("App Icon - Small 1x", 400, _TVOS_BRAND_ASSETS, "tvOS"),
    SizeDescriptor("App Icon - Small 2x", 800, _TVOS_BRAND_ASSETS, "tvOS"),
)

TVOS_TOP_SHELF_SIZES: tuple[BannerDescriptor, ...] = (
    BannerDescriptor("Top Shelf Image 1x", 1920, 720, _TVOS_BRAND_ASSETS, "tvOS"),
    BannerDescriptor("Top Shelf Image 2x", 3840, 1440, _TVOS_BRAND_ASSETS, "tvOS"),
    BannerDescriptor("Top Shelf Wide 1x", 2320, 720, _TVOS_BRAND_ASSETS, "tvOS"),
    BannerDescriptor("Top Shelf Wide 2x", 4640, 1440, _TVOS_BRAND_ASSETS, "tvOS"),
)

ANDROID_TV_BANNER_SIZES: tuple[BannerDescriptor, ...] = (
    BannerDescriptor("banner-xhdpi", 320, 180, "android-tv/drawable-xhdpi", "androidTV"),
    BannerDescriptor("banner-xxhdpi", 480, 270, "android-tv/drawable-xxhdpi", "androidTV"),
    BannerDescriptor(
        "banner-xxxhdpi", 640, 360, "android-tv/drawable-xxxhdpi", "androidTV"
    ),
)

PLAY_STORE_SIZES: tuple[BannerDescriptor, ...] = (
    BannerDescriptor("feature-graphic", 1024, 500, "play-store", "playStore"),
    BannerDescriptor("hi-res-icon", 512, 512, "play-store", "playStore"),
)

EXTENDED_SIZES: dict[str, tuple[SizeDescriptor, ...] | tuple[BannerDescriptor, ...]] = {
    "macOS": MACOS_ICON_SIZES,
    "web": WEB_ICON_SIZES,
    "tvOS": TVOS_ICON_SIZES,
    "tvOSTopShelf": TVOS_TOP_SHELF_SIZES,
    "androidTV": ANDROID_TV_BANNER_SIZES,
    "playStore": PLAY_STORE_SIZES,
}


def icon_sizes_for(
    platform: str, *, android_studio: bool = False
) -> tuple[SizeDescriptor, ...]:
    """
    Return the launcher icon rows for ``android`` or ``ios``.

    Raises KeyError for any other platform.
    """
    if platform == "android":
        return ANDROID_STUDIO_ICON_SIZES if android_studio else ANDROID_ICON_SIZES
    if platform == "ios":
        return IOS_ICON_SIZES
    raise KeyError(platform)


def splash_sizes_for(
    platform: str, *, android_studio: bool = False
) -> tuple[BannerDescriptor, ...]:
    """
    Return the splash screen rows for ``android`` or ``ios``.

    Raises KeyError for any other platform.
    """
    if platform == "android":
        return ANDROID_STUDIO_SPLASH_SIZES if android_studio else ANDROID_SPLASH_SIZES
    if platform == "ios":
        return IOS_SPLASH_SIZES
    raise KeyError(platform)


def extended_sizes_for(
    fmt: str,
) -> tuple[SizeDescriptor, ...] | tuple[BannerDescriptor, ...]:
    """Return the rows for an extended format (``macOS``, ``web``, ...)."""
    return EXTENDED_SIZES[fmt]
