"""Render generation management.

A *generation* is one layer of graphics attached to the map surface for one
:class:`VisibleSet`.  :class:`RenderGenerationManager` keeps at most one of
them attached: installing a new generation first detaches the previous
layer, then attaches a fresh empty layer and fills it.

Generation numbers only grow.  Asynchronous work tied to a generation (the
viewport fit) checks :meth:`RenderGenerationManager.is_current` before it
acts so results for a superseded generation are dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from fleetview._constants import MAX_ORPHANED_LAYERS
from fleetview._nonfatal import best_effort
from fleetview.models.graphics import Graphic
from fleetview.models.visible import VisibleSet
from fleetview.render.symbols import build_graphics
from fleetview.surface import MapSurface

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GenerationHandle:
    """An installed generation.

    ``layer`` is ``None`` when the surface refused to create one; such a
    handle still supersedes its predecessor but draws nothing.
    """

    number: int
    layer: Any
    graphics: tuple[Graphic, ...]
    visible: VisibleSet

    @property
    def is_empty(self) -> bool:
        return not self.graphics


class RenderGenerationManager:
    """Owns the single generation attached to a map surface."""

    def __init__(self, *, max_orphans: int = MAX_ORPHANED_LAYERS) -> None:
        self._current: GenerationHandle | None = None
        self._counter = 0
        self._max_orphans = max_orphans
        # Layers whose detach failed; retried on every retire.
        self._orphans: list[Any] = []

    @property
    def current(self) -> GenerationHandle | None:
        return self._current

    @property
    def generation(self) -> int:
        """Number of the most recent install (``0`` before the first)."""
        return self._counter

    def is_current(self, handle: GenerationHandle) -> bool:
        return self._current is not None and self._current.number == handle.number

    @property
    def orphaned_layers(self) -> int:
        return len(self._orphans)

    def _add_orphan(self, layer: Any) -> None:
        self._orphans.append(layer)
        if len(self._orphans) > self._max_orphans:
            self._orphans.pop(0)
            _logger.warning(
                "Map surface keeps refusing to detach layers; giving up on the oldest of %d",
                self._max_orphans + 1,
            )

    def _sweep_orphans(self, surface: MapSurface) -> None:
        remaining: list[Any] = []
        for layer in self._orphans:
            if not best_effort("detach_layer", surface.detach_layer, layer).ok:
                remaining.append(layer)
        self._orphans = remaining

    def retire(self, surface: MapSurface) -> None:
        """Detach the current generation, if any.  Safe to call repeatedly."""
        handle, self._current = self._current, None
        if handle is not None and handle.layer is not None:
            if best_effort("detach_layer", surface.detach_layer, handle.layer).ok:
                _logger.debug("Retired generation %d", handle.number)
            else:
                self._add_orphan(handle.layer)
        self._sweep_orphans(surface)

    def forget(self) -> None:
        """Drop every reference to surface layers without touching the surface."""
        self._current = None
        self._orphans = []

    def install(self, visible: VisibleSet, surface: MapSurface) -> GenerationHandle:
        """Replace the current generation with one drawing *visible*."""
        self.retire(surface)
        self._counter += 1
        number = self._counter

        created = best_effort("create_layer", surface.create_layer)
        if not created.ok:
            handle = GenerationHandle(number=number, layer=None, graphics=(), visible=visible)
            self._current = handle
            return handle

        layer = created.value
        # Attach while empty so the surface has a container to draw into.
        best_effort("attach_layer", surface.attach_layer, layer)

        added: list[Graphic] = []
        for graphic in build_graphics(visible):
            if best_effort("add_graphic", surface.add_graphic, layer, graphic).ok:
                added.append(graphic)

        handle = GenerationHandle(number=number, layer=layer, graphics=tuple(added), visible=visible)
        self._current = handle
        _logger.debug(
            "Installed generation %d: %d vehicles, %d routes, %d graphics",
            number,
            len(visible.vehicles_to_show),
            len(visible.routes_to_show),
            len(added),
        )
        return handle
