"""Rendering: graphics construction and generation lifecycle."""

from fleetview.render.generation import GenerationHandle, RenderGenerationManager
from fleetview.render.symbols import build_graphics, route_graphics, vehicle_color, vehicle_graphics

__all__ = [
    "GenerationHandle",
    "RenderGenerationManager",
    "build_graphics",
    "route_graphics",
    "vehicle_color",
    "vehicle_graphics",
]
