"""Entity catalog: the static vehicles and routes known to the view.

The catalog is loaded once at startup and never mutated.  Three sources
are supported:

* the sample catalog bundled as package data,
* a directory holding ``vehicles.json`` and ``routes.json``,
* an HTTP endpoint serving the same two documents (fetched with aiohttp).
"""

from __future__ import annotations

import asyncio
import importlib.resources
import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import aiohttp
from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from fleetview.config import FleetViewConfig
from fleetview.exceptions import CatalogError, CatalogLoadError
from fleetview.models.route import Route
from fleetview.models.vehicle import Vehicle

_logger = logging.getLogger(__name__)

VEHICLES_DOCUMENT = "vehicles.json"
ROUTES_DOCUMENT = "routes.json"

_VEHICLE_LIST = TypeAdapter(list[Vehicle])
_ROUTE_LIST = TypeAdapter(list[Route])


class Catalog(BaseModel):
    """Immutable collections of every known vehicle and route."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    vehicles: tuple[Vehicle, ...] = ()
    routes: tuple[Route, ...] = ()

    @classmethod
    def from_payload(cls, vehicles: Any, routes: Any) -> Catalog:
        """Build a catalog from decoded JSON lists.

        Raises :class:`CatalogError` when either list does not validate.
        Duplicate vehicle ids are rejected because explicit selection is
        keyed by id.
        """
        try:
            parsed_vehicles = _VEHICLE_LIST.validate_python(vehicles)
        except ValidationError as exc:
            raise CatalogError(f"Invalid vehicle list: {exc}") from exc
        try:
            parsed_routes = _ROUTE_LIST.validate_python(routes)
        except ValidationError as exc:
            raise CatalogError(f"Invalid route list: {exc}") from exc

        seen: set[str | int] = set()
        for vehicle in parsed_vehicles:
            if vehicle.id in seen:
                raise CatalogError(f"Duplicate vehicle id: {vehicle.id!r}")
            seen.add(vehicle.id)

        return cls(vehicles=tuple(parsed_vehicles), routes=tuple(parsed_routes))

    @property
    def vehicle_types(self) -> tuple[str, ...]:
        """Distinct vehicle types in first-seen order."""
        return tuple(dict.fromkeys(v.type for v in self.vehicles))

    @property
    def route_colors(self) -> tuple[str, ...]:
        """Distinct route colors in first-seen order."""
        return tuple(dict.fromkeys(r.color for r in self.routes))

    def vehicle(self, vehicle_id: str | int) -> Vehicle | None:
        for vehicle in self.vehicles:
            if vehicle.id == vehicle_id:
                return vehicle
        return None

    def vehicles_by_ids(self, ids: Iterable[str | int]) -> tuple[Vehicle, ...]:
        """Catalog vehicles whose id is in *ids*, in catalog order; unknown ids are ignored."""
        wanted = set(ids)
        return tuple(v for v in self.vehicles if v.id in wanted)

    @property
    def online_count(self) -> int:
        return sum(1 for v in self.vehicles if v.online)


# ------------------------------------------------------------------
# Loaders
# ------------------------------------------------------------------


def _decode(text: str, source: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise CatalogLoadError(f"Invalid JSON in {source}: {text[:200]}", source=source) from exc


def load_bundled_catalog() -> Catalog:
    """Load the sample catalog shipped with the package."""
    _logger.debug("Loading catalog from package data")
    root = importlib.resources.files("fleetview").joinpath("data")
    documents: dict[str, Any] = {}
    for name in (VEHICLES_DOCUMENT, ROUTES_DOCUMENT):
        try:
            text = root.joinpath(name).read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise CatalogLoadError(f"{name} not found in package data", source=name) from exc
        documents[name] = _decode(text, name)
    return Catalog.from_payload(documents[VEHICLES_DOCUMENT], documents[ROUTES_DOCUMENT])


def load_catalog_dir(directory: Path) -> Catalog:
    """Load ``vehicles.json`` and ``routes.json`` from *directory*."""
    _logger.debug("Loading catalog from %s", directory)
    documents: dict[str, Any] = {}
    for name in (VEHICLES_DOCUMENT, ROUTES_DOCUMENT):
        path = directory / name
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise CatalogLoadError(f"Cannot read {path}: {exc}", source=str(path)) from exc
        documents[name] = _decode(text, str(path))
    return Catalog.from_payload(documents[VEHICLES_DOCUMENT], documents[ROUTES_DOCUMENT])


async def _get_json(http: aiohttp.ClientSession, url: str, timeout: float) -> Any:
    _logger.debug("GET %s", url)
    try:
        async with http.get(url, timeout=aiohttp.ClientTimeout(total=timeout)) as resp:
            text = await resp.text()
            if resp.status != 200:
                raise CatalogLoadError(
                    f"HTTP {resp.status} from {url}: {text[:200]}",
                    source=url,
                    status_code=resp.status,
                )
    except CatalogLoadError:
        raise
    except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
        raise CatalogLoadError(f"Request to {url} failed: {exc}", source=url) from exc
    return _decode(text, url)


async def fetch_catalog(
    base_url: str,
    *,
    session: aiohttp.ClientSession | None = None,
    timeout: float = 10.0,
) -> Catalog:
    """Fetch both catalog documents from *base_url* concurrently.

    A caller-supplied *session* is left open; otherwise a temporary one is
    created and closed.  When one request fails the other is cancelled
    before the session closes, and the first failure is raised.
    """
    base = base_url.rstrip("/")
    http = session if session is not None else aiohttp.ClientSession()
    try:
        async with asyncio.TaskGroup() as group:
            vehicles = group.create_task(_get_json(http, f"{base}/{VEHICLES_DOCUMENT}", timeout))
            routes = group.create_task(_get_json(http, f"{base}/{ROUTES_DOCUMENT}", timeout))
    except ExceptionGroup as errors:
        raise errors.exceptions[0]
    finally:
        if session is None:
            await http.close()
    return Catalog.from_payload(vehicles.result(), routes.result())


async def load_catalog(
    config: FleetViewConfig,
    *,
    session: aiohttp.ClientSession | None = None,
) -> Catalog:
    """Load the catalog from the source selected by *config*."""
    if config.catalog_url:
        catalog = await fetch_catalog(config.catalog_url, session=session, timeout=config.http_timeout)
    elif config.catalog_dir is not None:
        catalog = load_catalog_dir(config.catalog_dir)
    else:
        catalog = load_bundled_catalog()
    _logger.info("Catalog loaded: %d vehicles, %d routes", len(catalog.vehicles), len(catalog.routes))
    return catalog
