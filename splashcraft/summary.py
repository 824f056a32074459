"""Run summary and per-framework install guidance."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .models import GeneratedAsset


@dataclass(frozen=True)
class FrameworkGuide:
    """Where to copy the exported assets for one app framework."""

    label: str
    url: str
    steps: tuple[str, ...]


FRAMEWORK_GUIDES: dict[str, FrameworkGuide] = {
    "capacitor": FrameworkGuide(
        "Capacitor",
        "https://capacitorjs.com/docs/guides/splash-screens-and-icons",
        (
            "Unzip assets to your project root",
            "Copy icons to android/app/src/main/res/",
            "Copy iOS icons to ios/App/App/Assets.xcassets/AppIcon.appiconset/",
            "Run npx cap sync to apply changes",
        ),
    ),
    "flutter": FrameworkGuide(
        "Flutter",
        "https://docs.flutter.dev/deployment/android#adding-a-launcher-icon",
        (
            "Copy Android icons to android/app/src/main/res/",
            "Copy iOS icons to ios/Runner/Assets.xcassets/AppIcon.appiconset/",
            "Use flutter_native_splash package for splash screens",
            "Run flutter pub get && flutter pub run flutter_native_splash:create",
        ),
    ),
    "react-native": FrameworkGuide(
        "React Native",
        "https://reactnative.dev/docs/images#static-image-resources",
        (
            "Copy Android icons to android/app/src/main/res/",
            "Copy iOS icons to ios/YourApp/Images.xcassets/AppIcon.appiconset/",
            "Use react-native-splash-screen for splash screens",
            "Link the native modules and rebuild your app",
        ),
    ),
    "native": FrameworkGuide(
        "Native Development",
        "https://developer.android.com/guide/topics/resources/providing-resources",
        (
            "Copy Android icons to app/src/main/res/ mipmap folders",
            "Copy iOS icons to Assets.xcassets/AppIcon.appiconset/",
            "Configure splash screens in your native project",
            "Rebuild and test on both platforms",
        ),
    ),
}

# First matching prefix wins
_CATEGORIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("android_icons", ("android/icons/", "android/res/mipmap-")),
    (
        "android_splash",
        ("android/splash/", "android/res/drawable-port-", "android/res/drawable-land-"),
    ),
    ("android_resources", ("android/res/",)),
    ("ios_icons", ("ios/icons/",)),
    ("ios_splash", ("ios/splash/",)),
    ("macos", ("macos/",)),
    ("web", ("web/",)),
    ("tvos", ("tvos/",)),
    ("android_tv", ("android-tv/",)),
    ("play_store", ("play-store/",)),
    ("custom", ("custom/",)),
)


def categorize(path: str) -> str:
    """Return the summary bucket an archive path belongs to."""
    for category, prefixes in _CATEGORIES:
        if path.startswith(prefixes):
            return category
    return "other"


def summarize_assets(assets: Iterable[GeneratedAsset]) -> dict[str, Any]:
    """Return totals and per-category counts for a finished run."""
    counts: dict[str, int] = {}
    total = 0
    size = 0
    for asset in assets:
        category = categorize(asset.path)
        counts[category] = counts.get(category, 0) + 1
        total += 1
        size += len(asset.content)
    return {"total": total, "bytes": size, "counts": counts}


def next_steps(framework: str) -> FrameworkGuide:
    """Return install guidance for ``framework``; raises KeyError if unknown."""
    return FRAMEWORK_GUIDES[framework]
