"""Visibility resolution.

Turns a :class:`FilterState` and the :class:`Catalog` into the
:class:`VisibleSet` to draw.  Pure: no I/O, no side effects, and the same
inputs always produce an equal result.

Precedence:

1. Explicit vehicle ids win over the type map.  With no explicit ids,
   vehicles of any enabled type are shown; with neither, none are.
2. Routes are shown only when ``show_start_end`` is on *and* something
   anchors them: a route color, an explicit vehicle, or an enabled type.
3. Route colors alone (no explicit ids, no enabled type) mean "routes only"
   and hide every vehicle.
4. Shown routes are those matching the selected colors, or every route
   when no color is selected.
"""

from __future__ import annotations

from fleetview.catalog import Catalog
from fleetview.models.filters import FilterState
from fleetview.models.route import Route
from fleetview.models.vehicle import Vehicle
from fleetview.models.visible import VisibleSet


def select_vehicles(filters: FilterState, catalog: Catalog) -> tuple[Vehicle, ...]:
    """Vehicles chosen by explicit ids or, failing that, by enabled type."""
    if filters.vehicles:
        return catalog.vehicles_by_ids(filters.vehicles)
    if filters.any_type_enabled:
        enabled = filters.enabled_types
        return tuple(v for v in catalog.vehicles if v.type in enabled)
    return ()


def routes_overlay_enabled(filters: FilterState) -> bool:
    anchored = bool(filters.route_colors) or bool(filters.vehicles) or filters.any_type_enabled
    return filters.show_start_end and anchored


def routes_only(filters: FilterState) -> bool:
    """Whether the selection is route colors with no vehicle or type anchor."""
    return bool(filters.route_colors) and not filters.vehicles and not filters.any_type_enabled


def select_routes(filters: FilterState, catalog: Catalog) -> tuple[Route, ...]:
    if filters.route_colors:
        return tuple(r for r in catalog.routes if r.color in filters.route_colors)
    return catalog.routes


def resolve(filters: FilterState, catalog: Catalog) -> VisibleSet:
    """Compute the entities visible under *filters*."""
    vehicles = select_vehicles(filters, catalog)
    show_routes = routes_overlay_enabled(filters)

    if routes_only(filters):
        vehicles = ()

    routes = select_routes(filters, catalog) if show_routes else ()

    return VisibleSet(
        vehicles_to_show=vehicles,
        routes_to_show=routes,
        show_routes=show_routes,
        show_labels=filters.show_labels,
    )
