"""Graphic primitives emitted to a map surface.

Geometries use map coordinates where ``x`` is longitude and ``y`` is
latitude.  Symbols describe how a surface should draw a geometry; the
surface decides how to translate them into its own rendering toolkit.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fleetview.exceptions import ExtentError

_FROZEN = ConfigDict(frozen=True, extra="forbid")


class Extent(BaseModel):
    """Axis-aligned bounding box in map coordinates."""

    model_config = _FROZEN

    xmin: float
    ymin: float
    xmax: float
    ymax: float

    @model_validator(mode="after")
    def _check_order(self) -> Extent:
        if self.xmin > self.xmax or self.ymin > self.ymax:
            raise ValueError(f"extent bounds out of order: {self.as_tuple()}")
        return self

    @classmethod
    def from_point(cls, x: float, y: float) -> Extent:
        return cls(xmin=x, ymin=y, xmax=x, ymax=y)

    @classmethod
    def union(cls, extents: Iterable[Extent]) -> Extent:
        """Smallest extent containing every extent in *extents*.

        Raises :class:`ExtentError` when *extents* is empty.
        """
        items = list(extents)
        if not items:
            raise ExtentError("cannot union an empty set of extents")
        return cls(
            xmin=min(e.xmin for e in items),
            ymin=min(e.ymin for e in items),
            xmax=max(e.xmax for e in items),
            ymax=max(e.ymax for e in items),
        )

    @property
    def width(self) -> float:
        return self.xmax - self.xmin

    @property
    def height(self) -> float:
        return self.ymax - self.ymin

    def padded(self, factor: float, minimum: float) -> Extent:
        """Grow each side by ``max(span * factor, minimum)`` on its axis."""
        pad_x = max(self.width * factor, minimum)
        pad_y = max(self.height * factor, minimum)
        return Extent(
            xmin=self.xmin - pad_x,
            ymin=self.ymin - pad_y,
            xmax=self.xmax + pad_x,
            ymax=self.ymax + pad_y,
        )

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.xmin, self.ymin, self.xmax, self.ymax)


# ------------------------------------------------------------------
# Geometry
# ------------------------------------------------------------------


class PointGeometry(BaseModel):
    model_config = _FROZEN

    type: Literal["point"] = "point"
    longitude: float
    latitude: float

    @property
    def extent(self) -> Extent:
        return Extent.from_point(self.longitude, self.latitude)


class PolylineGeometry(BaseModel):
    """One or more vertex paths, each vertex ``(longitude, latitude)``."""

    model_config = _FROZEN

    type: Literal["polyline"] = "polyline"
    paths: tuple[tuple[tuple[float, float], ...], ...]

    @property
    def vertices(self) -> list[tuple[float, float]]:
        return [vertex for path in self.paths for vertex in path]

    @property
    def extent(self) -> Extent | None:
        """Bounding box of all vertices, or ``None`` for an empty line."""
        vertices = self.vertices
        if not vertices:
            return None
        xs = [x for x, _ in vertices]
        ys = [y for _, y in vertices]
        return Extent(xmin=min(xs), ymin=min(ys), xmax=max(xs), ymax=max(ys))


Geometry = PointGeometry | PolylineGeometry


# ------------------------------------------------------------------
# Symbols
# ------------------------------------------------------------------


class Outline(BaseModel):
    model_config = _FROZEN

    color: str
    width: float


class MarkerSymbol(BaseModel):
    model_config = _FROZEN

    type: Literal["simple-marker"] = "simple-marker"
    color: str
    size: float
    outline: Outline
    style: str = "circle"


class Font(BaseModel):
    model_config = _FROZEN

    size: float
    family: str
    weight: str


class TextSymbol(BaseModel):
    model_config = _FROZEN

    type: Literal["text"] = "text"
    text: str
    color: str
    font: Font
    yoffset: float = 0


class LineSymbol(BaseModel):
    model_config = _FROZEN

    type: Literal["simple-line"] = "simple-line"
    color: str
    width: float


Symbol = MarkerSymbol | TextSymbol | LineSymbol


class Popup(BaseModel):
    model_config = _FROZEN

    title: str
    content: str


class GraphicRole(StrEnum):
    VEHICLE = "vehicle"
    LABEL = "label"
    ROUTE = "route"
    ROUTE_START = "route-start"
    ROUTE_END = "route-end"


class Graphic(BaseModel):
    """A geometry paired with the symbol it is drawn with."""

    model_config = _FROZEN

    role: GraphicRole
    geometry: Geometry = Field(discriminator="type")
    symbol: Symbol = Field(discriminator="type")
    attributes: dict[str, Any] = Field(default_factory=dict)
    popup: Popup | None = None
