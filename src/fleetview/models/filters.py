"""Filter state model."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from typing import Any, ClassVar

from pydantic import Field, field_serializer, field_validator

from fleetview._constants import KNOWN_VEHICLE_TYPES
from fleetview.models._base import FleetBaseModel


def _default_types() -> dict[str, bool]:
    return {name: True for name in KNOWN_VEHICLE_TYPES}


class FilterState(FleetBaseModel):
    """User-selected filters driving what the map shows.

    Instances are immutable; every change produces a new value (see
    :class:`fleetview.state.owner.FilterStateOwner`).  ``selected_date`` and
    ``address_search`` are carried for collaborators (historical data,
    geocoding) and do not influence visibility.

    Parameters
    ----------
    types : dict[str, bool]
        Enabled flag per vehicle type.
    vehicles : frozenset
        Explicitly selected vehicle ids.
    show_start_end : bool
        Whether the route overlay (lines plus start/end markers) may be shown.
    show_labels : bool
        Whether vehicle name labels are drawn.
    selected_date : date or None
        Day selected for historical playback.
    route_colors : frozenset[str]
        Selected route color keys.
    address_search : str
        Free-text address query.
    """

    types: dict[str, bool] = Field(default_factory=_default_types)
    vehicles: frozenset[str | int] = frozenset()
    show_start_end: bool = True
    show_labels: bool = True
    selected_date: date | None = None
    route_colors: frozenset[str] = frozenset()
    address_search: str = ""

    drop_placeholder_strings: ClassVar[bool] = False

    @classmethod
    def default(cls, types: Iterable[str] | None = None) -> FilterState:
        """Initial state: every type enabled, nothing explicitly selected."""
        if types is None:
            return cls()
        return cls(types={name: True for name in types})

    @field_validator("selected_date", mode="before")
    @classmethod
    def _blank_date(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("route_colors", mode="before")
    @classmethod
    def _strip_colors(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple, set, frozenset)):
            return frozenset(str(color).strip() for color in value)
        return value

    @field_serializer("vehicles", "route_colors")
    def _serialize_sets(self, value: frozenset[Any]) -> list[Any]:
        return sorted(value, key=str)

    @property
    def any_type_enabled(self) -> bool:
        return any(self.types.values())

    @property
    def enabled_types(self) -> frozenset[str]:
        return frozenset(name for name, enabled in self.types.items() if enabled)
