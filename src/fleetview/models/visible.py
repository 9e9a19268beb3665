"""Resolved visibility for one filter state."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from fleetview.models.route import Route
from fleetview.models.vehicle import Vehicle


class VisibleSet(BaseModel):
    """Entities to draw for a given filter state.

    Always rebuilt from scratch by :func:`fleetview.resolver.resolve`;
    never patched in place.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    vehicles_to_show: tuple[Vehicle, ...] = ()
    routes_to_show: tuple[Route, ...] = ()
    show_routes: bool = False
    show_labels: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.vehicles_to_show and not (self.show_routes and self.routes_to_show)
