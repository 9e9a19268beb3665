"""Vehicle model."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator

from fleetview._constants import NOT_AVAILABLE
from fleetview.models._base import FleetBaseModel


class Vehicle(FleetBaseModel):
    """A tracked vehicle from the fleet catalog.

    Parameters
    ----------
    id : str or int
        Unique vehicle identifier.
    name : str
        Display name, also used as the map label.
    type : str
        Vehicle type (e.g. ``"Trash"``).  The set of types is open.
    lat : float
        Latitude in degrees.
    lng : float
        Longitude in degrees.
    online : bool
        Whether the vehicle is currently reporting.
    last_seen : str or None
        Last report time as supplied by the data source.
    """

    id: str | int
    name: str = ""
    type: str = ""
    lat: float = Field(validation_alias=AliasChoices("lat", "latitude"))
    lng: float = Field(validation_alias=AliasChoices("lng", "lon", "longitude"))
    online: bool = False
    last_seen: str | None = Field(default=None, validation_alias=AliasChoices("lastSeen", "last_seen"))

    @field_validator("id", mode="before")
    @classmethod
    def _strip_id(cls, value: Any) -> Any:
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                raise ValueError("vehicle id must be non-empty")
            return stripped
        return value

    @property
    def popup_title(self) -> str:
        return self.name

    @property
    def popup_content(self) -> str:
        """Popup body shown when the vehicle marker is selected."""
        return f"Type: {self.type}\nID: {self.id}\nLast Seen: {self.last_seen or NOT_AVAILABLE}"
