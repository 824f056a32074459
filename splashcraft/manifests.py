"""
Manifest emitter: XML resources and JSON catalogs that sit next to the PNGs.

Every function here is pure. Output depends only on the arguments, so two runs
with the same configuration produce byte-identical manifests.
"""

from __future__ import annotations

import json
import re
from typing import TYPE_CHECKING, Any

from .const import AUTHOR
from .sizes import IOS_ICON_SIZES, IOS_SPLASH_SIZES, MACOS_ICON_SIZES

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .models import BannerDescriptor, SizeDescriptor

_ICON_NAME = re.compile(r"Icon-(\d+(?:\.\d+)?)(?:@(\d)x)?")
_SCALE = re.compile(r"@(\d)x")

_IPAD_MIN_POINTS = 76
_MARKETING_POINTS = 1024

_XML_HEADER = '<?xml version="1.0" encoding="utf-8"?>'
_ANDROID_NS = 'xmlns:android="http://schemas.android.com/apk/res/android"'


def _info() -> dict[str, Any]:
    return {"author": AUTHOR, "version": 1}


def _dumps(document: dict[str, Any]) -> str:
    return json.dumps(document, indent=2)


def _scale(name: str) -> str:
    match = _SCALE.search(name)
    return f"{match.group(1)}x" if match else "1x"


def _points(value: float) -> str:
    return f"{value:g}x{value:g}"


# ---- Android ----


def adaptive_icon_xml(filename: str, *, include_monochrome: bool = False) -> str:
    """Return ``mipmap-anydpi-v26/<filename>.xml`` for an adaptive launcher icon."""
    lines = [
        _XML_HEADER,
        f"<adaptive-icon {_ANDROID_NS}>",
        '    <background android:drawable="@color/ic_launcher_background"/>',
        f'    <foreground android:drawable="@mipmap/{filename}_foreground"/>',
    ]
    if include_monochrome:
        lines.append(f'    <monochrome android:drawable="@mipmap/{filename}_monochrome"/>')
    lines.append("</adaptive-icon>")
    return "\n".join(lines) + "\n"


def colors_xml(icon_background: str, splash_background: str) -> str:
    """Return ``values/colors.xml`` with the launcher and splash colours."""
    return (
        f"{_XML_HEADER}\n"
        "<resources>\n"
        f'    <color name="ic_launcher_background">{icon_background}</color>\n'
        f'    <color name="splash_background">{splash_background}</color>\n'
        "</resources>\n"
    )


def launch_background_xml() -> str:
    """Return ``drawable-v24/launch_background.xml``; colours live in colors.xml."""
    return (
        f"{_XML_HEADER}\n"
        f"<layer-list {_ANDROID_NS}>\n"
        '    <item android:drawable="@color/splash_background"/>\n'
        "    <item>\n"
        "        <bitmap\n"
        '            android:gravity="center"\n'
        '            android:src="@drawable/splash_icon"/>\n'
        "    </item>\n"
        "</layer-list>\n"
    )


# ---- Apple ----


def ios_icon_entry(row: SizeDescriptor) -> dict[str, str]:
    """
    Return the ``AppIcon.appiconset`` entry for one iOS icon row.

    The nominal point size and scale come from the ``Icon-<pt>[@<n>x]`` name.
    Rows of 76 pt and up are iPad slots; the 1024 pt row is the marketing icon.
    """
    match = _ICON_NAME.match(row.name)
    if match is None:
        return {
            "filename": f"{row.name}.png",
            "idiom": "universal",
            "scale": "1x",
            "size": _points(row.size),
        }
    points = float(match.group(1))
    idiom = "iphone"
    if points >= _IPAD_MIN_POINTS or "ipad" in row.name:
        idiom = "ipad"
    if points == _MARKETING_POINTS:
        idiom = "ios-marketing"
    return {
        "filename": f"{row.name}.png",
        "idiom": idiom,
        "scale": f"{match.group(2) or 1}x",
        "size": _points(points),
    }


def ios_icon_contents_json(sizes: Iterable[SizeDescriptor] = IOS_ICON_SIZES) -> str:
    """Return ``AppIcon.appiconset/Contents.json`` for the iOS icon rows."""
    return _dumps({"images": [ios_icon_entry(row) for row in sizes], "info": _info()})


def ios_splash_contents_json(
    sizes: Iterable[BannerDescriptor] = IOS_SPLASH_SIZES,
) -> str:
    """Return ``LaunchImage.launchimage/Contents.json`` for the iOS splash rows."""
    images = [
        {
            "filename": f"{row.name}.png",
            "idiom": "ipad" if "ipad" in row.name else "iphone",
            "scale": _scale(row.name),
            "orientation": "landscape" if row.width > row.height else "portrait",
        }
        for row in sizes
    ]
    return _dumps({"images": images, "info": _info()})


def macos_contents_json(sizes: Iterable[SizeDescriptor] = MACOS_ICON_SIZES) -> str:
    """Return ``macos/AppIcon.appiconset/Contents.json``."""
    images = []
    for row in sizes:
        retina = "@2x" in row.name
        points = row.size // 2 if retina else row.size
        images.append(
            {
                "filename": f"{row.name}.png",
                "idiom": "mac",
                "scale": "2x" if retina else "1x",
                "size": _points(points),
            }
        )
    return _dumps({"images": images, "info": _info()})


# ---- Web ----


def _short_name(app_name: str) -> str:
    # Launchers truncate past roughly 12 characters
    return app_name if len(app_name) <= 12 else app_name[:12].rstrip()  # noqa: PLR2004


def web_manifest(app_name: str, theme_color: str) -> str:
    """Return ``web/site.webmanifest`` referencing the generated PWA icons."""
    icons = [
        {"src": "icon-192x192.png", "sizes": "192x192", "type": "image/png"},
        {"src": "icon-512x512.png", "sizes": "512x512", "type": "image/png"},
        {
            "src": "maskable-icon-192.png",
            "sizes": "192x192",
            "type": "image/png",
            "purpose": "maskable",
        },
        {
            "src": "maskable-icon-512.png",
            "sizes": "512x512",
            "type": "image/png",
            "purpose": "maskable",
        },
    ]
    return _dumps(
        {
            "name": app_name,
            "short_name": _short_name(app_name),
            "icons": icons,
            "theme_color": theme_color,
            "background_color": "#ffffff",
            "display": "standalone",
        }
    )
