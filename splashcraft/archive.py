"""Zip archive sink for generated assets."""

from __future__ import annotations

import datetime as dt
import io
import logging
import zipfile
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .models import GeneratedAsset

_LOGGER = logging.getLogger(__name__)

COMPRESS_LEVEL = 6


def default_archive_name(day: dt.date | None = None) -> str:
    """Return ``app-assets-YYYY-MM-DD.zip`` for ``day`` (today by default)."""
    day = day or dt.datetime.now(tz=dt.UTC).date()
    return f"app-assets-{day.isoformat()}.zip"


def _write(assets: Iterable[GeneratedAsset], target: str | Path | io.BytesIO) -> int:
    count = 0
    with zipfile.ZipFile(
        target, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=COMPRESS_LEVEL
    ) as archive:
        for asset in assets:
            archive.writestr(asset.path, asset.content)
            count += 1
    return count


def zip_bytes(assets: Iterable[GeneratedAsset]) -> bytes:
    """Return an in-memory zip with one entry per asset, paths unchanged."""
    buf = io.BytesIO()
    _write(assets, buf)
    return buf.getvalue()


def write_zip(assets: Iterable[GeneratedAsset], destination: str | Path) -> Path:
    """Write ``assets`` to a zip file at ``destination`` and return its path."""
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    count = _write(assets, path)
    _LOGGER.info("Wrote %d assets to %s", count, path)
    return path
