"""
Asset fan-out coordinator.

Turns one generation request into an ordered list of GeneratedAsset:
- Plans every output up front so the progress total is fixed
- Sequences rendering through a single queue and a single worker
- Reports progress after every item, globally across the icon and splash phases
- Honours a cancel event between items
- Treats a PNG serialization failure as fatal for the whole run
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass, replace
from functools import partial
from typing import TYPE_CHECKING, Literal

from .exceptions import (
    AssetEncodeError,
    DuplicateAssetPathError,
    GenerationCancelledError,
)
from .imaging import ImageLoader, ensure_png_support
from .manifests import (
    adaptive_icon_xml,
    colors_xml,
    ios_icon_contents_json,
    ios_splash_contents_json,
    launch_background_xml,
    macos_contents_json,
    web_manifest,
)
from .models import GeneratedAsset
from .render import (
    render_banner_png,
    render_icon_png,
    render_monochrome_png,
    render_splash_png,
)
from .sizes import (
    ANDROID_STUDIO_ICON_SIZES,
    IOS_ICON_SIZES,
    IOS_SPLASH_SIZES,
    extended_sizes_for,
    icon_sizes_for,
    splash_sizes_for,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

    from .models import GenerationRequest, IconConfig

_LOGGER = logging.getLogger(__name__)

Phase = Literal["icons", "splash"]


@dataclass(frozen=True)
class PlannedAsset:
    """One output the run will produce, not yet rendered."""

    name: str
    path: str
    produce: Callable[[], Awaitable[bytes]]
    phase: Phase = "icons"


@dataclass
class _WorkItem:
    """A queued render job."""

    planned: PlannedAsset
    future: asyncio.Future
    cancel_event: asyncio.Event | None = None


async def _manifest(build: Callable[..., str], *args: object, **kwargs: object) -> bytes:
    return build(*args, **kwargs).encode("utf-8")


# ---- Planning ----


def _extended_enabled(request: GenerationRequest, fmt: str) -> bool:
    ext = request.extended
    toggles = {
        "macOS": ext.macos,
        "web": ext.web,
        "tvOS": ext.tvos,
        "androidTV": ext.android_tv,
        "playStore": ext.play_store,
    }
    return toggles[fmt] or request.has_platform(fmt)


def _plan_studio_variants(
    icon: IconConfig, request: GenerationRequest, loader: ImageLoader
) -> list[PlannedAsset]:
    opts = request.android_studio
    fn = icon.output_filename
    renders: list[tuple[str, Callable[[int], Callable[[], Awaitable[bytes]]]]] = []
    if opts.generate_round_icon:
        round_icon = icon.round_variant()
        renders.append(
            ("_round", lambda px: partial(render_icon_png, round_icon, px, loader=loader))
        )
    if opts.generate_foreground:
        foreground = icon.foreground_variant()
        renders.append(
            (
                "_foreground",
                lambda px: partial(render_icon_png, foreground, px, loader=loader),
            )
        )
    if opts.generate_monochrome:
        renders.append(
            (
                "_monochrome",
                lambda px: partial(render_monochrome_png, icon, px, loader=loader),
            )
        )

    plan = [
        PlannedAsset(
            f"{fn}{suffix}.png",
            f"android/res/{row.folder}/{fn}{suffix}.png",
            make(row.size),
        )
        for suffix, make in renders
        for row in ANDROID_STUDIO_ICON_SIZES
    ]
    if opts.generate_adaptive_xml:
        plan.append(
            PlannedAsset(
                f"{fn}.xml",
                f"android/res/mipmap-anydpi-v26/{fn}.xml",
                partial(
                    _manifest,
                    adaptive_icon_xml,
                    fn,
                    include_monochrome=opts.generate_monochrome,
                ),
            )
        )
    return plan


def _plan_extended(
    icon: IconConfig, request: GenerationRequest, loader: ImageLoader
) -> list[PlannedAsset]:
    ext = request.extended
    plan: list[PlannedAsset] = []

    def icon_row(name: str, path: str, px: int, config: IconConfig = icon) -> None:
        plan.append(
            PlannedAsset(name, path, partial(render_icon_png, config, px, loader=loader))
        )

    def banner_row(
        name: str, path: str, width: int, height: int, caption: str | None = None
    ) -> None:
        plan.append(
            PlannedAsset(
                name,
                path,
                partial(
                    render_banner_png,
                    icon,
                    width,
                    height,
                    caption=caption,
                    loader=loader,
                ),
            )
        )

    if _extended_enabled(request, "macOS"):
        mac_icon = replace(icon, shape="squircle")
        for row in extended_sizes_for("macOS"):
            icon_row(f"{row.name}.png", f"{row.folder}/{row.name}.png", row.size, mac_icon)
        plan.append(
            PlannedAsset(
                "Contents.json",
                "macos/AppIcon.appiconset/Contents.json",
                partial(_manifest, macos_contents_json),
            )
        )

    if _extended_enabled(request, "web"):
        for row in extended_sizes_for("web"):
            icon_row(f"{row.name}.png", f"{row.folder}/{row.name}.png", row.size)
        plan.append(
            PlannedAsset(
                "site.webmanifest",
                "web/site.webmanifest",
                partial(_manifest, web_manifest, ext.web_app_name, ext.web_theme_color),
            )
        )

    if _extended_enabled(request, "tvOS"):
        for row in extended_sizes_for("tvOS"):
            icon_row(f"{row.name}.png", f"{row.folder}/{row.name}.png", row.size)
        for row in extended_sizes_for("tvOSTopShelf"):
            banner_row(
                f"{row.name}.png", f"{row.folder}/{row.name}.png", row.width, row.height
            )

    if _extended_enabled(request, "androidTV"):
        for row in extended_sizes_for("androidTV"):
            banner_row("banner.png", f"{row.folder}/banner.png", row.width, row.height)

    if _extended_enabled(request, "playStore"):
        for row in extended_sizes_for("playStore"):
            path = f"{row.folder}/{row.name}.png"
            if row.is_square:
                icon_row(f"{row.name}.png", path, row.width)
            else:
                banner_row(
                    f"{row.name}.png",
                    path,
                    row.width,
                    row.height,
                    ext.play_store_app_name or None,
                )

    for custom in ext.enabled_custom_sizes:
        path = f"custom/{custom.name}.png"
        if custom.is_square:
            icon_row(f"{custom.name}.png", path, custom.width)
        else:
            banner_row(f"{custom.name}.png", path, custom.width, custom.height)

    return plan


def plan_icons(
    request: GenerationRequest, loader: ImageLoader | None = None
) -> list[PlannedAsset]:
    """Return the icon phase outputs in generation order."""
    loader = loader or ImageLoader()
    icon = request.icon
    fn = icon.output_filename
    studio = request.use_android_studio
    plan: list[PlannedAsset] = []

    if request.has_platform("android"):
        for row in icon_sizes_for("android", android_studio=studio):
            if studio:
                path = f"android/res/{row.folder}/{fn}.png"
            else:
                path = f"{row.folder}/{row.name}/{fn}.png"
            plan.append(
                PlannedAsset(
                    f"{fn}.png", path, partial(render_icon_png, icon, row.size, loader=loader)
                )
            )
    if request.has_platform("ios"):
        plan.extend(
            PlannedAsset(
                f"{row.name}.png",
                f"{row.folder}/{row.name}.png",
                partial(render_icon_png, icon, row.size, loader=loader),
            )
            for row in IOS_ICON_SIZES
        )

    if studio:
        plan.extend(_plan_studio_variants(icon, request, loader))

    plan.extend(_plan_extended(icon, request, loader))

    if request.has_platform("ios"):
        plan.append(
            PlannedAsset(
                "Contents.json",
                "ios/icons/AppIcon.appiconset/Contents.json",
                partial(_manifest, ios_icon_contents_json),
            )
        )
    return plan


def plan_splash_screens(
    request: GenerationRequest, loader: ImageLoader | None = None
) -> list[PlannedAsset]:
    """Return the splash phase outputs in generation order."""
    loader = loader or ImageLoader()
    splash = request.splash
    studio = request.use_android_studio
    plan: list[PlannedAsset] = []

    rows = []
    if request.has_platform("android"):
        rows.extend(splash_sizes_for("android", android_studio=studio))
    if request.has_platform("ios"):
        rows.extend(IOS_SPLASH_SIZES)
    for row in rows:
        if studio and row.platform == "android":
            path = f"android/res/{row.folder}/{row.name}.png"
        else:
            path = f"{row.folder}/{row.name}.png"
        plan.append(
            PlannedAsset(
                f"{row.name}.png",
                path,
                partial(render_splash_png, splash, row.width, row.height, loader=loader),
                phase="splash",
            )
        )

    if studio and request.android_studio.generate_splash_xml:
        plan.append(
            PlannedAsset(
                "launch_background.xml",
                "android/res/drawable-v24/launch_background.xml",
                partial(_manifest, launch_background_xml),
                phase="splash",
            )
        )
        plan.append(
            PlannedAsset(
                "colors.xml",
                "android/res/values/colors.xml",
                partial(
                    _manifest,
                    colors_xml,
                    request.icon.icon_background_color,
                    splash.background_color,
                ),
                phase="splash",
            )
        )

    if request.has_platform("ios"):
        plan.append(
            PlannedAsset(
                "Contents.json",
                "ios/splash/LaunchImage.launchimage/Contents.json",
                partial(_manifest, ios_splash_contents_json),
                phase="splash",
            )
        )
    return plan


def plan_assets(
    request: GenerationRequest, loader: ImageLoader | None = None
) -> list[PlannedAsset]:
    """Return every output of a run: the icon phase followed by the splash phase."""
    loader = loader or ImageLoader()
    plan = plan_icons(request, loader) + plan_splash_screens(request, loader)
    ensure_unique_paths(plan)
    return plan


def ensure_unique_paths(plan: Iterable[PlannedAsset]) -> None:
    """Raise DuplicateAssetPathError if two planned outputs share a path."""
    seen: set[str] = set()
    for item in plan:
        if item.path in seen:
            raise DuplicateAssetPathError(item.path)
        seen.add(item.path)


# ---- Coordinator ----


class AssetCoordinator:
    """Single-queue, single-worker asset generator."""

    def __init__(self) -> None:
        """Initialize an idle coordinator."""
        self._queue: asyncio.Queue[_WorkItem] = asyncio.Queue()
        self._worker: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        """Return True while the worker task is alive."""
        return self._worker is not None and not self._worker.done()

    async def start(self) -> None:
        """Start the single worker."""
        if self._worker is None or self._worker.done():
            self._worker = asyncio.create_task(
                self._run_worker(), name="splashcraft_worker"
            )

    async def stop(self) -> None:
        """Stop the worker and cancel pending items."""
        if self._worker is not None:
            self._worker.cancel()
            # Drain queue and cancel futures
            while not self._queue.empty():
                with contextlib.suppress(asyncio.QueueEmpty):
                    item = self._queue.get_nowait()
                    if not item.future.done():
                        item.future.set_exception(asyncio.CancelledError())
            with contextlib.suppress(asyncio.CancelledError):
                await self._worker
            self._worker = None

    async def _run_worker(self) -> None:
        """Worker: dequeue, check for cancellation, render, hand back the asset."""
        while True:
            item = await self._queue.get()
            try:
                if item.future.done():
                    continue
                if item.cancel_event is not None and item.cancel_event.is_set():
                    item.future.set_exception(GenerationCancelledError())
                    continue
                planned = item.planned
                content = await planned.produce()
                if not item.future.done():
                    item.future.set_result(
                        GeneratedAsset(name=planned.name, path=planned.path, content=content)
                    )
            except asyncio.CancelledError:
                if not item.future.done():
                    item.future.set_exception(asyncio.CancelledError())
                raise
            except (OSError, ValueError) as exc:
                if not item.future.done():
                    item.future.set_exception(AssetEncodeError(item.planned.path, str(exc)))
            except Exception as exc:  # noqa: BLE001 - surfaced through the future
                if not item.future.done():
                    item.future.set_exception(exc)
            finally:
                self._queue.task_done()

    async def _enqueue(
        self, planned: PlannedAsset, cancel_event: asyncio.Event | None
    ) -> _WorkItem:
        future = asyncio.get_running_loop().create_future()
        item = _WorkItem(planned=planned, future=future, cancel_event=cancel_event)
        await self._queue.put(item)
        return item

    async def generate(
        self,
        request: GenerationRequest,
        *,
        on_progress: Callable[[int, int], None] | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> list[GeneratedAsset]:
        """
        Produce every asset for ``request`` in generation order.

        ``on_progress(current, total)`` is called once per finished item. The
        request is snapshotted first, so edits made by the caller while the run
        is in flight have no effect on its output.
        """
        request = request.snapshot()
        ensure_png_support()
        plan = plan_assets(request, ImageLoader())
        total = len(plan)
        _LOGGER.info(
            "Generating %d assets for platforms: %s", total, ", ".join(request.platforms)
        )
        if cancel_event is not None and cancel_event.is_set():
            raise GenerationCancelledError

        await self.start()
        items = [await self._enqueue(planned, cancel_event) for planned in plan]
        assets: list[GeneratedAsset] = []
        phase: Phase | None = None
        try:
            for current, item in enumerate(items, start=1):
                if item.planned.phase != phase:
                    phase = item.planned.phase
                    _LOGGER.debug("Starting %s phase at item %d/%d", phase, current, total)
                asset = await item.future
                assets.append(asset)
                _LOGGER.debug("Generated %s (%d bytes)", asset.path, len(asset.content))
                self._notify_progress(on_progress, current, total)
        except GenerationCancelledError:
            _LOGGER.info("Generation cancelled after %d/%d assets", len(assets), total)
            self._abandon(items)
            raise
        except AssetEncodeError:
            _LOGGER.exception("Generation aborted")
            self._abandon(items)
            raise
        except BaseException:
            self._abandon(items)
            raise

        _LOGGER.info("Generated %d assets", len(assets))
        return assets

    @staticmethod
    def _abandon(items: Iterable[_WorkItem]) -> None:
        for item in items:
            if not item.future.done():
                item.future.cancel()

    @staticmethod
    def _notify_progress(
        callback: Callable[[int, int], None] | None, current: int, total: int
    ) -> None:
        if callback is None:
            return
        try:
            callback(current, total)
        except Exception:
            _LOGGER.exception("Progress callback failed")


async def generate_assets(
    request: GenerationRequest,
    *,
    on_progress: Callable[[int, int], None] | None = None,
    cancel_event: asyncio.Event | None = None,
) -> list[GeneratedAsset]:
    """Run one generation on a short-lived coordinator."""
    coordinator = AssetCoordinator()
    await coordinator.start()
    try:
        return await coordinator.generate(
            request, on_progress=on_progress, cancel_event=cancel_event
        )
    finally:
        await coordinator.stop()
