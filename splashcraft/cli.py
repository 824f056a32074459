"""
Generate app icons and splash screens from a project file.

Usage:
  splashcraft project.json [-o assets.zip] [--framework flutter] [-v]

The project file is the designer's JSON document (``icon``, ``splash``,
``platforms``, ``androidStudio``, ``extended``). Image fields may hold a
``data:`` URL or a path relative to the project file.

Exit codes: 0 on success, 1 for an invalid project, 2 if generation failed.
"""
# ruff: noqa: T201

from __future__ import annotations

import argparse
import asyncio
import copy
import json
import logging
import sys
from pathlib import Path
from typing import Any

from .archive import default_archive_name, write_zip
from .const import FRAMEWORKS
from .coordinator import generate_assets
from .exceptions import InvalidProjectError, SplashcraftError
from .schema import request_from_dict
from .summary import next_steps, summarize_assets

_LOGGER = logging.getLogger(__name__)

# (section, key, ...) paths of fields that may reference image files
_IMAGE_FIELDS: tuple[tuple[str, ...], ...] = (
    ("icon", "backgroundImage"),
    ("icon", "adaptiveIcon", "foregroundImage"),
    ("icon", "adaptiveIcon", "backgroundImage"),
    ("splash", "logoImage"),
    ("splash", "backgroundImage"),
)


def _resolve_image(value: Any, base_dir: Path) -> Any:
    """Replace a relative file reference with the file's bytes."""
    if not isinstance(value, str) or not value or value.startswith("data:"):
        return value
    path = base_dir / value
    try:
        return path.read_bytes()
    except OSError as err:
        _LOGGER.warning("Could not read image %s: %s", path, err)
        return None


def resolve_image_paths(project: dict[str, Any], base_dir: Path) -> dict[str, Any]:
    """Inline every image file the project refers to; the input is not modified."""
    project = copy.deepcopy(project)
    for *parents, key in _IMAGE_FIELDS:
        node = project
        for name in parents:
            node = node.get(name) if isinstance(node, dict) else None
        if isinstance(node, dict) and key in node:
            node[key] = _resolve_image(node[key], base_dir)
    icon = project.get("icon")
    if isinstance(icon, dict) and icon.get("sourceType") == "image":
        icon["sourceValue"] = _resolve_image(icon.get("sourceValue"), base_dir)
    return project


def load_project(path: Path) -> dict[str, Any]:
    """Read a project document and inline its image files."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as err:
        msg = f"Could not read project {path}: {err}"
        raise InvalidProjectError(msg) from err
    if not isinstance(data, dict):
        msg = f"Project {path} must contain a JSON object"
        raise InvalidProjectError(msg)
    return resolve_image_paths(data, path.parent)


def _progress_printer(*, enabled: bool) -> Any:
    if not enabled:
        return None

    def _print(current: int, total: int) -> None:
        end = "\n" if current == total else ""
        print(f"\rGenerating assets {current}/{total}", end=end, file=sys.stderr)

    return _print


def main(argv: list[str] | None = None) -> int:
    """Generate an asset archive from a project file."""
    parser = argparse.ArgumentParser(
        prog="splashcraft",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("project", type=Path, help="Project JSON file")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Archive to write (default: app-assets-<date>.zip)",
    )
    parser.add_argument(
        "--framework",
        choices=FRAMEWORKS,
        default=None,
        help="Print install steps for this framework",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        request = request_from_dict(load_project(args.project))
    except InvalidProjectError as err:
        print(f"error: {err}", file=sys.stderr)
        return 1

    on_progress = _progress_printer(enabled=sys.stderr.isatty() and not args.verbose)
    try:
        assets = asyncio.run(generate_assets(request, on_progress=on_progress))
    except SplashcraftError as err:
        print(f"error: {err}", file=sys.stderr)
        return 2

    destination = args.output or Path(default_archive_name())
    try:
        write_zip(assets, destination)
    except OSError as err:
        print(f"error: could not write {destination}: {err}", file=sys.stderr)
        return 2

    summary = summarize_assets(assets)
    print(f"Wrote {summary['total']} assets ({summary['bytes']} bytes) to {destination}")
    for category, count in summary["counts"].items():
        print(f"  {category}: {count}")

    if args.framework:
        guide = next_steps(args.framework)
        print(f"\nNext steps for {guide.label} ({guide.url}):")
        for number, step in enumerate(guide.steps, start=1):
            print(f"  {number}. {step}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
