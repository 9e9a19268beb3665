"""Fleet map view: wires filter changes to the rendering pipeline."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from fleetview._constants import KNOWN_VEHICLE_TYPES
from fleetview._nonfatal import best_effort
from fleetview.catalog import Catalog, load_catalog
from fleetview.config import FleetViewConfig
from fleetview.models.filters import FilterState
from fleetview.models.graphics import Extent
from fleetview.models.visible import VisibleSet
from fleetview.render.generation import GenerationHandle, RenderGenerationManager
from fleetview.resolver import resolve
from fleetview.state.events import FilterChange
from fleetview.state.owner import FilterStateOwner
from fleetview.surface import MapSurface
from fleetview.viewport import ViewportFitter, fit_extent

_logger = logging.getLogger(__name__)


class FleetMapView:
    """Renders a catalog on a map surface according to the current filters.

    Usage::

        async with FleetMapView(surface, catalog, owner=owner) as view:
            owner.toggle_type("Trash")   # view re-renders and refits

    Filter states arriving before the surface reports ready are held and
    the most recent one is rendered once it does.
    """

    def __init__(
        self,
        surface: MapSurface,
        catalog: Catalog,
        *,
        config: FleetViewConfig | None = None,
        owner: FilterStateOwner | None = None,
    ) -> None:
        self._config = config if config is not None else FleetViewConfig()
        self._surface: MapSurface | None = surface
        self._catalog = catalog
        self._manager = RenderGenerationManager()
        self._fitter = ViewportFitter(
            self._manager,
            padding_factor=self._config.padding_factor,
            min_padding=self._config.min_padding,
        )
        self._ready = False
        self._closed = False
        self._pending: FilterState | None = None
        self._visible: VisibleSet | None = None
        self._unsubscribe = owner.subscribe(self._on_filter_change) if owner is not None else None
        if owner is not None:
            self._pending = owner.state
        surface.on_ready(self._on_surface_ready)

    @classmethod
    async def open(
        cls,
        surface: MapSurface,
        *,
        config: FleetViewConfig | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> FleetMapView:
        """Load the configured catalog and build a view with a default filter owner."""
        config = config if config is not None else FleetViewConfig.from_env()
        catalog = await load_catalog(config, session=session)
        owner = FilterStateOwner.for_types([*KNOWN_VEHICLE_TYPES, *catalog.vehicle_types])
        return cls(surface, catalog, config=config, owner=owner)

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> FleetMapView:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def is_ready(self) -> bool:
        return self._ready

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def visible(self) -> VisibleSet | None:
        """Visible set of the current generation."""
        return self._visible

    @property
    def generation(self) -> GenerationHandle | None:
        return self._manager.current

    @property
    def fitter(self) -> ViewportFitter:
        return self._fitter

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _on_surface_ready(self) -> None:
        if self._closed:
            return
        self._ready = True
        _logger.debug("Map surface ready")
        pending, self._pending = self._pending, None
        if pending is not None:
            self.apply(pending)

    def _on_filter_change(self, change: FilterChange) -> None:
        self.apply(change.state)

    def apply(self, filters: FilterState) -> GenerationHandle | None:
        """Resolve *filters*, install a new generation and schedule a fit.

        Returns ``None`` when the view is closed or the surface is not ready
        yet (the state is then rendered on readiness).
        """
        if self._closed or self._surface is None:
            return None
        if not self._ready:
            self._pending = filters
            return None

        visible = resolve(filters, self._catalog)
        handle = self._manager.install(visible, self._surface)
        self._visible = visible
        if self._config.fit_enabled:
            self._fitter.fit(handle, self._surface)
        return handle

    # ------------------------------------------------------------------
    # View actions
    # ------------------------------------------------------------------

    def recenter(self) -> bool:
        """Return to the configured center and zoom."""
        if self._surface is None:
            return False
        return best_effort(
            "request_center",
            self._surface.request_center,
            self._config.center_longitude,
            self._config.center_latitude,
            self._config.zoom,
        ).ok

    def zoom_to_fit(self) -> Extent | None:
        """Frame everything currently drawn, without waiting for a render."""
        handle = self._manager.current
        if self._surface is None or handle is None:
            return None
        computed = best_effort(
            "fit_extent",
            fit_extent,
            handle.graphics,
            padding_factor=self._config.padding_factor,
            min_padding=self._config.min_padding,
        )
        extent = computed.value
        if extent is None:
            return None
        if not best_effort("request_extent", self._surface.request_extent, extent).ok:
            return None
        return extent

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Detach the current generation and destroy the surface.  Idempotent."""
        if self._closed:
            return
        self._closed = True
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._fitter.cancel()
        surface, self._surface = self._surface, None
        if surface is not None:
            self._manager.retire(surface)
            best_effort("destroy", surface.destroy)
        self._manager.forget()
        self._pending = None
        self._visible = None
        _logger.debug("Fleet map view closed")

    async def aclose(self) -> None:
        """Close and wait for a cancelled fit to finish unwinding."""
        self.close()
        await self._fitter.wait()
