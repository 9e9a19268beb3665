from __future__ import annotations

import asyncio
import contextlib
import json
from collections.abc import AsyncIterator
from pathlib import Path

import aiohttp
import pytest
from aiohttp import test_utils, web

from fleetview.catalog import (
    Catalog,
    fetch_catalog,
    load_bundled_catalog,
    load_catalog,
    load_catalog_dir,
)
from fleetview.config import FleetViewConfig
from fleetview.exceptions import CatalogError, CatalogLoadError

VEHICLES = [
    {"id": "v1", "name": "Truck 101", "type": "Trash", "lat": 29.04, "lng": -95.41, "online": True},
    {"id": 2, "name": "Recycler 201", "type": "Recycling", "lat": 29.03, "lng": -95.40},
    {"id": "v3", "name": "Truck 102", "type": "Trash", "lat": 29.05, "lng": -95.42, "online": True},
]
ROUTES = [
    {"id": 1, "color": "#22c55e", "path": [{"lat": 29.0, "lng": -95.4}]},
    {"id": 2, "color": "#ef4444", "path": []},
    {"id": 3, "color": "#22c55e", "path": []},
]


def _write_catalog(directory: Path, vehicles: object = VEHICLES, routes: object = ROUTES) -> None:
    (directory / "vehicles.json").write_text(json.dumps(vehicles), encoding="utf-8")
    (directory / "routes.json").write_text(json.dumps(routes), encoding="utf-8")


@contextlib.asynccontextmanager
async def _catalog_server(
    vehicles_status: int = 200,
    routes_gate: asyncio.Event | None = None,
) -> AsyncIterator[str]:
    async def vehicles(_: web.Request) -> web.Response:
        if vehicles_status != 200:
            return web.Response(status=vehicles_status, text="not here")
        return web.json_response(VEHICLES)

    async def routes(_: web.Request) -> web.Response:
        if routes_gate is not None:
            await routes_gate.wait()
        return web.json_response(ROUTES)

    app = web.Application()
    app.router.add_get("/data/vehicles.json", vehicles)
    app.router.add_get("/data/routes.json", routes)
    server = test_utils.TestServer(app)
    await server.start_server()
    try:
        yield str(server.make_url("/data/"))
    finally:
        await server.close()


# ------------------------------------------------------------------
# Catalog model
# ------------------------------------------------------------------


def test_from_payload_and_lookups() -> None:
    catalog = Catalog.from_payload(VEHICLES, ROUTES)

    assert [v.id for v in catalog.vehicles] == ["v1", 2, "v3"]
    assert catalog.vehicle_types == ("Trash", "Recycling")
    assert catalog.route_colors == ("#22c55e", "#ef4444")
    assert catalog.vehicle(2) is not None
    assert catalog.vehicle("2") is None
    assert [v.id for v in catalog.vehicles_by_ids(["v3", "v1", "nope"])] == ["v1", "v3"]
    assert catalog.online_count == 2


def test_invalid_payload_raises_catalog_error() -> None:
    with pytest.raises(CatalogError, match="vehicle"):
        Catalog.from_payload([{"id": "v1", "name": "no coordinates"}], [])
    with pytest.raises(CatalogError, match="route"):
        Catalog.from_payload([], {"not": "a list"})


def test_duplicate_vehicle_ids_rejected() -> None:
    with pytest.raises(CatalogError, match="Duplicate"):
        Catalog.from_payload([VEHICLES[0], VEHICLES[0]], [])


# ------------------------------------------------------------------
# File sources
# ------------------------------------------------------------------


def test_load_catalog_dir(tmp_path: Path) -> None:
    _write_catalog(tmp_path)
    catalog = load_catalog_dir(tmp_path)
    assert len(catalog.vehicles) == 3
    assert len(catalog.routes) == 3


def test_missing_file_raises_load_error(tmp_path: Path) -> None:
    (tmp_path / "vehicles.json").write_text("[]", encoding="utf-8")
    with pytest.raises(CatalogLoadError) as excinfo:
        load_catalog_dir(tmp_path)
    assert excinfo.value.source.endswith("routes.json")


def test_bad_json_raises_load_error(tmp_path: Path) -> None:
    _write_catalog(tmp_path)
    (tmp_path / "routes.json").write_text("{oops", encoding="utf-8")
    with pytest.raises(CatalogLoadError, match="Invalid JSON"):
        load_catalog_dir(tmp_path)


def test_bundled_catalog() -> None:
    catalog = load_bundled_catalog()
    assert len(catalog.vehicles) == 6
    assert catalog.vehicle_types == ("Trash", "Recycling", "Heavy Trash")
    assert [r.id for r in catalog.routes] == [1, 2, 3]
    assert catalog.vehicle("v6") is not None and catalog.vehicle("v6").last_seen is None


# ------------------------------------------------------------------
# HTTP source
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_fetch_catalog_over_http() -> None:
    async with _catalog_server() as base_url:
        catalog = await fetch_catalog(base_url)
    assert [v.id for v in catalog.vehicles] == ["v1", 2, "v3"]
    assert len(catalog.routes) == 3


@pytest.mark.asyncio
async def test_fetch_catalog_keeps_caller_session_open() -> None:
    async with _catalog_server() as base_url, aiohttp.ClientSession() as session:
        await fetch_catalog(base_url, session=session)
        assert not session.closed


@pytest.mark.asyncio
async def test_fetch_catalog_non_200() -> None:
    async with _catalog_server(vehicles_status=404) as base_url:
        with pytest.raises(CatalogLoadError) as excinfo:
            await fetch_catalog(base_url)
    assert excinfo.value.status_code == 404
    assert excinfo.value.source.endswith("vehicles.json")


@pytest.mark.asyncio
async def test_failed_request_cancels_sibling_before_raising() -> None:
    gate = asyncio.Event()
    async with _catalog_server(vehicles_status=503, routes_gate=gate) as base_url:
        try:
            with pytest.raises(CatalogLoadError) as excinfo:
                await fetch_catalog(base_url)
            in_flight = [
                task for task in asyncio.all_tasks() if getattr(task.get_coro(), "__name__", "") == "_get_json"
            ]
        finally:
            gate.set()

    assert in_flight == []
    assert excinfo.value.status_code == 503


@pytest.mark.asyncio
async def test_fetch_catalog_connection_error() -> None:
    async with _catalog_server() as base_url:
        pass
    with pytest.raises(CatalogLoadError) as excinfo:
        await fetch_catalog(base_url, timeout=2.0)
    assert excinfo.value.status_code is None


# ------------------------------------------------------------------
# Source selection
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_load_catalog_prefers_directory_over_bundled(tmp_path: Path) -> None:
    _write_catalog(tmp_path)
    catalog = await load_catalog(FleetViewConfig(catalog_dir=tmp_path))
    assert len(catalog.vehicles) == 3


@pytest.mark.asyncio
async def test_load_catalog_defaults_to_bundled() -> None:
    catalog = await load_catalog(FleetViewConfig())
    assert len(catalog.vehicles) == 6


@pytest.mark.asyncio
async def test_load_catalog_prefers_url(tmp_path: Path) -> None:
    _write_catalog(tmp_path, vehicles=[], routes=[])
    async with _catalog_server() as base_url:
        catalog = await load_catalog(FleetViewConfig(catalog_url=base_url, catalog_dir=tmp_path))
    assert len(catalog.vehicles) == 3
