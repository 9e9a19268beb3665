"""Route model."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator

from fleetview.models._base import FleetBaseModel


class PathPoint(FleetBaseModel):
    """One vertex of a route path."""

    lat: float = Field(validation_alias=AliasChoices("lat", "latitude"))
    lng: float = Field(validation_alias=AliasChoices("lng", "lon", "longitude"))


class Route(FleetBaseModel):
    """A collection route.

    ``color`` is both the stroke color and the key the route-color filter
    selects on, so two routes sharing a color are selected together.
    """

    id: str | int
    color: str
    path: tuple[PathPoint, ...] = ()

    @field_validator("color", mode="before")
    @classmethod
    def _normalise_color(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @property
    def has_path(self) -> bool:
        return len(self.path) > 0

    @property
    def start(self) -> PathPoint | None:
        return self.path[0] if self.path else None

    @property
    def end(self) -> PathPoint | None:
        return self.path[-1] if self.path else None
