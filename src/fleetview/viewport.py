"""Viewport fitting.

After a generation is installed the view is framed around its graphics:
the union bounding box of every graphic, grown by a padding of
``max(span * padding_factor, min_padding)`` on each axis.  Fitting is
best-effort; any failure leaves the current view untouched.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

from fleetview._constants import FIT_MIN_PADDING, FIT_PADDING_FACTOR
from fleetview._nonfatal import best_effort, best_effort_async
from fleetview.models.graphics import Extent, Graphic, PointGeometry
from fleetview.render.generation import GenerationHandle, RenderGenerationManager
from fleetview.surface import MapSurface

_logger = logging.getLogger(__name__)


def graphic_extent(graphic: Graphic) -> Extent | None:
    """Bounding box of one graphic, or ``None`` when it cannot be derived.

    Points are zero-area boxes.  Other geometries contribute their own
    ``extent`` when they expose one.
    """
    geometry = graphic.geometry
    if isinstance(geometry, PointGeometry):
        return Extent.from_point(geometry.longitude, geometry.latitude)
    result = best_effort("geometry_extent", getattr, geometry, "extent", None)
    return result.value if isinstance(result.value, Extent) else None


def fit_extent(
    graphics: Iterable[Graphic],
    *,
    padding_factor: float = FIT_PADDING_FACTOR,
    min_padding: float = FIT_MIN_PADDING,
) -> Extent | None:
    """Padded extent framing *graphics*, or ``None`` if none qualify."""
    extents = [extent for extent in map(graphic_extent, graphics) if extent is not None]
    if not extents:
        return None
    return Extent.union(extents).padded(padding_factor, min_padding)


async def _attached(surface: MapSurface, layer: Any) -> None:
    await surface.when_attached(layer)


class ViewportFitter:
    """Frames the map around the current generation.

    Each fit runs as its own task and remembers the generation it was
    started for.  Scheduling a new fit cancels the previous one, and a fit
    that wakes up after its generation was superseded does nothing.
    """

    def __init__(
        self,
        manager: RenderGenerationManager,
        *,
        padding_factor: float = FIT_PADDING_FACTOR,
        min_padding: float = FIT_MIN_PADDING,
    ) -> None:
        self._manager = manager
        self._padding_factor = padding_factor
        self._min_padding = min_padding
        self._task: asyncio.Task[Extent | None] | None = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def fit(self, handle: GenerationHandle, surface: MapSurface) -> asyncio.Task[Extent | None] | None:
        """Start fitting *handle* in the background and return the task.

        Returns ``None`` when there is no running event loop.
        """
        self.cancel()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            _logger.debug("No running event loop; skipping fit for generation %d", handle.number)
            return None
        task = loop.create_task(self._run(handle, surface), name=f"fleetview-fit-{handle.number}")
        self._task = task
        return task

    def cancel(self) -> None:
        task = self._task
        if task is not None and not task.done():
            task.cancel()

    async def wait(self) -> Extent | None:
        """Wait for the pending fit, if any, and return the requested extent.

        A cancelled fit yields ``None``; cancelling the caller still raises.
        """
        task = self._task
        if task is None:
            return None
        await asyncio.wait({task})
        if task.cancelled():
            return None
        return task.result()

    def _is_stale(self, handle: GenerationHandle) -> bool:
        if self._manager.is_current(handle):
            return False
        _logger.debug("Discarding fit for superseded generation %d", handle.number)
        return True

    async def _run(self, handle: GenerationHandle, surface: MapSurface) -> Extent | None:
        if handle.layer is None or handle.is_empty:
            return None

        ready = await best_effort_async("when_attached", _attached(surface, handle.layer))
        if not ready.ok or self._is_stale(handle):
            return None

        computed = best_effort(
            "fit_extent",
            fit_extent,
            handle.graphics,
            padding_factor=self._padding_factor,
            min_padding=self._min_padding,
        )
        extent = computed.value
        if extent is None:
            return None

        if not best_effort("request_extent", surface.request_extent, extent).ok:
            return None
        _logger.debug("Framed generation %d at %s", handle.number, extent.as_tuple())
        return extent
