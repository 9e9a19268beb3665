"""Graphics for vehicles and routes."""

from __future__ import annotations

from fleetview._constants import (
    END_MARKER_COLOR,
    ENDPOINT_MARKER_SIZE,
    ENDPOINT_OUTLINE_COLOR,
    ENDPOINT_OUTLINE_WIDTH,
    LABEL_COLOR,
    LABEL_FONT_FAMILY,
    LABEL_FONT_SIZE,
    LABEL_FONT_WEIGHT,
    LABEL_YOFFSET,
    ROUTE_LINE_WIDTH,
    START_MARKER_COLOR,
    UNKNOWN_TYPE_COLOR,
    VEHICLE_MARKER_SIZE,
    VEHICLE_OUTLINE_COLOR,
    VEHICLE_OUTLINE_WIDTH,
    VEHICLE_TYPE_COLORS,
)
from fleetview.models.graphics import (
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


def vehicle_color(vehicle_type: str) -> str:
    """Marker color for *vehicle_type*; unrecognised types get a neutral gray."""
    return VEHICLE_TYPE_COLORS.get(vehicle_type, UNKNOWN_TYPE_COLOR)


def vehicle_graphics(vehicle: Vehicle, *, show_label: bool) -> list[Graphic]:
    point = PointGeometry(longitude=vehicle.lng, latitude=vehicle.lat)
    graphics = [
        Graphic(
            role=GraphicRole.VEHICLE,
            geometry=point,
            symbol=MarkerSymbol(
                color=vehicle_color(vehicle.type),
                size=VEHICLE_MARKER_SIZE,
                outline=Outline(color=VEHICLE_OUTLINE_COLOR, width=VEHICLE_OUTLINE_WIDTH),
            ),
            attributes={"id": vehicle.id, "type": vehicle.type},
            popup=Popup(title=vehicle.popup_title, content=vehicle.popup_content),
        )
    ]
    if show_label:
        graphics.append(
            Graphic(
                role=GraphicRole.LABEL,
                geometry=point,
                symbol=TextSymbol(
                    text=vehicle.name,
                    color=LABEL_COLOR,
                    font=Font(size=LABEL_FONT_SIZE, family=LABEL_FONT_FAMILY, weight=LABEL_FONT_WEIGHT),
                    yoffset=LABEL_YOFFSET,
                ),
                attributes={"id": vehicle.id},
            )
        )
    return graphics


def _endpoint(route: Route, point: PathPoint, role: GraphicRole, color: str, tag: str) -> Graphic:
    return Graphic(
        role=role,
        geometry=PointGeometry(longitude=point.lng, latitude=point.lat),
        symbol=MarkerSymbol(
            color=color,
            size=ENDPOINT_MARKER_SIZE,
            outline=Outline(color=ENDPOINT_OUTLINE_COLOR, width=ENDPOINT_OUTLINE_WIDTH),
        ),
        attributes={"routeId": route.id, "point": tag},
    )


def route_graphics(route: Route) -> list[Graphic]:
    """Polyline plus start and end markers; nothing for an empty path."""
    if not route.has_path:
        return []
    line = Graphic(
        role=GraphicRole.ROUTE,
        geometry=PolylineGeometry(paths=(tuple((p.lng, p.lat) for p in route.path),)),
        symbol=LineSymbol(color=route.color, width=ROUTE_LINE_WIDTH),
        attributes={"id": route.id, "color": route.color},
    )
    return [
        line,
        _endpoint(route, route.path[0], GraphicRole.ROUTE_START, START_MARKER_COLOR, "start"),
        _endpoint(route, route.path[-1], GraphicRole.ROUTE_END, END_MARKER_COLOR, "end"),
    ]


def build_graphics(visible: VisibleSet) -> list[Graphic]:
    """Every graphic a generation draws for *visible*, vehicles first."""
    graphics: list[Graphic] = []
    for vehicle in visible.vehicles_to_show:
        graphics.extend(vehicle_graphics(vehicle, show_label=visible.show_labels))
    if visible.show_routes:
        for route in visible.routes_to_show:
            graphics.extend(route_graphics(route))
    return graphics
