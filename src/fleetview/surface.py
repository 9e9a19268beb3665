"""Map surface interface and an in-memory implementation.

The rendering core never talks to a mapping toolkit directly; it drives a
:class:`MapSurface`.  Layers are opaque to the core: whatever
``create_layer`` returns is handed back to the other methods unchanged.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

from fleetview.exceptions import SurfaceError
from fleetview.models.graphics import Extent, Graphic

_logger = logging.getLogger(__name__)


class MapSurface(Protocol):
    """Operations the rendering core needs from the hosting map."""

    def create_layer(self) -> Any: ...

    def attach_layer(self, layer: Any) -> None: ...

    def detach_layer(self, layer: Any) -> None:
        """Remove *layer*; detaching an unknown or detached layer is a no-op."""
        ...

    def add_graphic(self, layer: Any, graphic: Graphic) -> None: ...

    def on_ready(self, callback: Callable[[], None]) -> None:
        """Run *callback* once the surface finished its initial setup."""
        ...

    async def when_attached(self, layer: Any) -> None:
        """Resolve once the graphics of *layer* are renderable."""
        ...

    def request_extent(self, extent: Extent) -> None: ...

    def request_center(self, longitude: float, latitude: float, zoom: int) -> None: ...

    def destroy(self) -> None:
        """Release all resources; calling it again is a no-op."""
        ...


# ------------------------------------------------------------------
# In-memory surface
# ------------------------------------------------------------------

_layer_ids = itertools.count(1)


@dataclass(eq=False)
class MemoryLayer:
    """Layer created by :class:`InMemoryMapSurface`."""

    layer_id: int = field(default_factory=lambda: next(_layer_ids))
    graphics: list[Graphic] = field(default_factory=list)
    attached: bool = False
    rendered: asyncio.Event = field(default_factory=asyncio.Event)


@dataclass(frozen=True, slots=True)
class CenterRequest:
    longitude: float
    latitude: float
    zoom: int


class InMemoryMapSurface:
    """A :class:`MapSurface` that records everything it is asked to do.

    Useful headless (scripts, server-side rendering of the layer contents)
    and in tests.  With ``auto_render=False`` layers are only reported as
    attached once :meth:`render_pending` is called, which lets callers
    interleave filter changes with in-flight viewport fits.  Operations named
    in :meth:`fail_on` raise :class:`SurfaceError`.
    """

    def __init__(self, *, ready: bool = True, auto_render: bool = True) -> None:
        self._ready = ready
        self._auto_render = auto_render
        self._destroyed = False
        self._ready_callbacks: list[Callable[[], None]] = []
        self._layers: list[MemoryLayer] = []
        self._failures: set[str] = set()
        self.extent_requests: list[Extent] = []
        self.center_requests: list[CenterRequest] = []

    # ------------------------------------------------------------------
    # Test/driver controls
    # ------------------------------------------------------------------

    def fail_on(self, *operations: str) -> None:
        self._failures.update(operations)

    def clear_failures(self) -> None:
        self._failures.clear()

    def mark_ready(self) -> None:
        """Finish initial setup and fire pending ready callbacks once."""
        if self._ready or self._destroyed:
            return
        self._ready = True
        callbacks, self._ready_callbacks = self._ready_callbacks, []
        for callback in callbacks:
            callback()

    def render_pending(self) -> None:
        """Report every attached layer as rendered."""
        for layer in self._layers:
            layer.rendered.set()

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    @property
    def attached_layers(self) -> tuple[MemoryLayer, ...]:
        return tuple(self._layers)

    @property
    def last_extent(self) -> Extent | None:
        return self.extent_requests[-1] if self.extent_requests else None

    # ------------------------------------------------------------------
    # MapSurface
    # ------------------------------------------------------------------

    def _check(self, operation: str, *, allow_destroyed: bool = False) -> None:
        if self._destroyed and not allow_destroyed:
            raise SurfaceError("surface destroyed", operation=operation)
        if operation in self._failures:
            raise SurfaceError(f"{operation} failed", operation=operation)

    def create_layer(self) -> MemoryLayer:
        self._check("create_layer")
        return MemoryLayer()

    def attach_layer(self, layer: MemoryLayer) -> None:
        self._check("attach_layer")
        if layer.attached:
            return
        layer.attached = True
        self._layers.append(layer)
        if self._auto_render:
            layer.rendered.set()
        _logger.debug("Attached layer %d", layer.layer_id)

    def detach_layer(self, layer: MemoryLayer) -> None:
        self._check("detach_layer", allow_destroyed=True)
        if layer not in self._layers:
            return
        self._layers.remove(layer)
        layer.attached = False
        # Wake anyone waiting so they observe the detach.
        layer.rendered.set()
        _logger.debug("Detached layer %d", layer.layer_id)

    def add_graphic(self, layer: MemoryLayer, graphic: Graphic) -> None:
        self._check("add_graphic")
        layer.graphics.append(graphic)

    def on_ready(self, callback: Callable[[], None]) -> None:
        if self._ready:
            callback()
            return
        self._ready_callbacks.append(callback)

    async def when_attached(self, layer: MemoryLayer) -> None:
        self._check("when_attached")
        await layer.rendered.wait()
        if self._destroyed or not layer.attached:
            raise SurfaceError(f"layer {layer.layer_id} is no longer attached", operation="when_attached")

    def request_extent(self, extent: Extent) -> None:
        self._check("request_extent")
        self.extent_requests.append(extent)

    def request_center(self, longitude: float, latitude: float, zoom: int) -> None:
        self._check("request_center")
        self.center_requests.append(CenterRequest(longitude, latitude, zoom))

    def destroy(self) -> None:
        if self._destroyed:
            return
        self._check("destroy")
        self._destroyed = True
        layers, self._layers = self._layers, []
        for layer in layers:
            layer.attached = False
            layer.rendered.set()
        self._ready_callbacks.clear()
        _logger.debug("Surface destroyed")
