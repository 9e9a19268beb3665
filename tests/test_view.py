"""Tests for the FleetMapView pipeline: filters in, one generation out."""

from __future__ import annotations

import asyncio

import pytest

from fleetview.catalog import Catalog
from fleetview.config import FleetViewConfig
from fleetview.models.filters import FilterState
from fleetview.models.graphics import GraphicRole
from fleetview.state.owner import FilterStateOwner
from fleetview.surface import CenterRequest, InMemoryMapSurface
from fleetview.view import FleetMapView


def _catalog() -> Catalog:
    return Catalog.from_payload(
        [
            {"id": "v1", "name": "Truck 101", "type": "Trash", "lat": 20.0, "lng": 10.0},
            {"id": "v2", "name": "Recycler 201", "type": "Recycling", "lat": 0.0, "lng": 0.0},
        ],
        [
            {"id": "r1", "color": "#ef4444", "path": [{"lat": 1.0, "lng": 1.0}, {"lat": 2.0, "lng": 2.0}]},
        ],
    )


def _roles(view: FleetMapView) -> list[GraphicRole]:
    handle = view.generation
    assert handle is not None
    return [g.role for g in handle.graphics]


# ------------------------------------------------------------------
# Readiness
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_render_deferred_until_surface_ready() -> None:
    surface = InMemoryMapSurface(ready=False)
    owner = FilterStateOwner()
    view = FleetMapView(surface, _catalog(), owner=owner)

    assert view.apply(FilterState()) is None
    owner.toggle_show_labels()
    assert view.generation is None
    assert surface.attached_layers == ()

    surface.mark_ready()

    assert view.is_ready
    assert view.generation is not None
    assert view.generation.number == 1
    assert GraphicRole.LABEL not in _roles(view)
    await view.aclose()


@pytest.mark.asyncio
async def test_ready_surface_renders_owner_state_immediately() -> None:
    surface = InMemoryMapSurface()
    view = FleetMapView(surface, _catalog(), owner=FilterStateOwner())

    assert view.generation is not None
    assert view.visible is not None
    assert [v.id for v in view.visible.vehicles_to_show] == ["v1", "v2"]
    await view.aclose()


@pytest.mark.asyncio
async def test_without_owner_nothing_renders_until_apply() -> None:
    surface = InMemoryMapSurface()
    view = FleetMapView(surface, _catalog())

    assert view.generation is None
    handle = view.apply(FilterState(types={"Trash": True}, show_start_end=False))
    assert handle is not None
    assert [v.id for v in handle.visible.vehicles_to_show] == ["v1"]
    await view.aclose()


# ------------------------------------------------------------------
# Filter changes
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_owner_changes_rerender_with_single_layer() -> None:
    surface = InMemoryMapSurface()
    owner = FilterStateOwner()
    view = FleetMapView(surface, _catalog(), owner=owner)

    owner.toggle_type("Trash")
    owner.toggle_type("Recycling")
    owner.toggle_route_color("#ef4444")

    assert view.generation is not None
    assert view.generation.number == 4
    assert len(surface.attached_layers) == 1
    assert _roles(view) == [GraphicRole.ROUTE, GraphicRole.ROUTE_START, GraphicRole.ROUTE_END]
    await view.aclose()


@pytest.mark.asyncio
async def test_fit_frames_current_generation() -> None:
    surface = InMemoryMapSurface()
    view = FleetMapView(surface, _catalog())

    view.apply(FilterState(show_start_end=False))
    extent = await view.fitter.wait()

    assert extent is not None
    assert surface.extent_requests == [extent]
    assert extent.as_tuple() == pytest.approx((-0.5, -1.0, 10.5, 21.0))
    await view.aclose()


@pytest.mark.asyncio
async def test_newer_fit_supersedes_older() -> None:
    surface = InMemoryMapSurface(auto_render=False)
    view = FleetMapView(surface, _catalog())

    view.apply(FilterState(types={"Trash": True}, show_start_end=False))
    await asyncio.sleep(0)
    view.apply(FilterState(types={"Recycling": True}, show_start_end=False))
    surface.render_pending()
    extent = await view.fitter.wait()

    assert len(surface.extent_requests) == 1
    assert extent is not None
    assert extent.xmin == pytest.approx(-0.01)
    await view.aclose()


@pytest.mark.asyncio
async def test_fit_disabled_by_config() -> None:
    surface = InMemoryMapSurface()
    view = FleetMapView(surface, _catalog(), config=FleetViewConfig(fit_enabled=False))

    view.apply(FilterState())
    await asyncio.sleep(0)

    assert not view.fitter.pending
    assert surface.extent_requests == []
    await view.aclose()


@pytest.mark.asyncio
async def test_empty_selection_clears_map_without_fit() -> None:
    surface = InMemoryMapSurface()
    view = FleetMapView(surface, _catalog())

    view.apply(FilterState())
    await view.fitter.wait()
    view.apply(FilterState(types={"Trash": False, "Recycling": False}))
    await view.fitter.wait()

    assert view.generation is not None and view.generation.is_empty
    assert len(surface.extent_requests) == 1
    assert surface.attached_layers[0].graphics == []
    await view.aclose()


# ------------------------------------------------------------------
# View actions
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_recenter_uses_configured_center() -> None:
    surface = InMemoryMapSurface()
    view = FleetMapView(surface, _catalog())

    assert view.recenter() is True
    assert surface.center_requests == [CenterRequest(-95.416, 29.044, 12)]

    surface.fail_on("request_center")
    assert view.recenter() is False
    await view.aclose()


@pytest.mark.asyncio
async def test_zoom_to_fit() -> None:
    surface = InMemoryMapSurface()
    view = FleetMapView(surface, _catalog(), config=FleetViewConfig(fit_enabled=False))

    assert view.zoom_to_fit() is None
    view.apply(FilterState(show_start_end=False))
    extent = view.zoom_to_fit()

    assert extent is not None
    assert surface.extent_requests == [extent]
    await view.aclose()


# ------------------------------------------------------------------
# Teardown
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_close_is_idempotent_while_fit_pending() -> None:
    surface = InMemoryMapSurface(auto_render=False)
    view = FleetMapView(surface, _catalog())
    view.apply(FilterState())
    await asyncio.sleep(0)
    assert view.fitter.pending

    view.close()
    view.close()
    await view.aclose()

    assert view.is_closed
    assert surface.is_destroyed
    assert surface.attached_layers == ()
    assert surface.extent_requests == []
    assert view.generation is None


@pytest.mark.asyncio
async def test_no_render_after_close() -> None:
    surface = InMemoryMapSurface()
    owner = FilterStateOwner()
    view = FleetMapView(surface, _catalog(), owner=owner)
    await view.aclose()

    owner.toggle_show_labels()

    assert view.apply(FilterState()) is None
    assert view.generation is None
    assert view.recenter() is False
    assert view.zoom_to_fit() is None


@pytest.mark.asyncio
async def test_close_before_ready_never_renders() -> None:
    surface = InMemoryMapSurface(ready=False)
    view = FleetMapView(surface, _catalog(), owner=FilterStateOwner())
    view.close()

    surface.mark_ready()

    assert view.generation is None
    assert not view.is_ready


@pytest.mark.asyncio
async def test_destroy_failure_does_not_escape() -> None:
    surface = InMemoryMapSurface()
    surface.fail_on("destroy")
    view = FleetMapView(surface, _catalog(), owner=FilterStateOwner())

    await view.aclose()
    assert view.is_closed


@pytest.mark.asyncio
async def test_open_with_bundled_catalog() -> None:
    surface = InMemoryMapSurface()
    async with await FleetMapView.open(surface, config=FleetViewConfig()) as view:
        assert len(view.catalog.vehicles) == 6
        handle = view.generation
        assert handle is not None
        assert len(handle.graphics) == 21
        await view.fitter.wait()
        assert surface.last_extent is not None

    assert surface.is_destroyed
