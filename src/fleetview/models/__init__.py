"""Data models for fleet entities, filters and rendered graphics."""

from fleetview.models._base import FleetBaseModel
from fleetview.models.filters import FilterState
from fleetview.models.graphics import (
    Extent,
    Font,
    Graphic,
    GraphicRole,
    LineSymbol,
    MarkerSymbol,
    Outline,
    PointGeometry,
    PolylineGeometry,
    Popup,
    TextSymbol,
)
from fleetview.models.route import PathPoint, Route
from fleetview.models.vehicle import Vehicle
from fleetview.models.visible import VisibleSet

__all__ = [
    "Extent",
    "FilterState",
    "FleetBaseModel",
    "Font",
    "Graphic",
    "GraphicRole",
    "LineSymbol",
    "MarkerSymbol",
    "Outline",
    "PathPoint",
    "PointGeometry",
    "PolylineGeometry",
    "Popup",
    "Route",
    "TextSymbol",
    "Vehicle",
    "VisibleSet",
]
