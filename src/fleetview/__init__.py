"""fleetview - Filter-driven fleet map rendering."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("fleetview")
except PackageNotFoundError:
    __version__ = "0+local"
from fleetview.catalog import Catalog, fetch_catalog, load_bundled_catalog, load_catalog, load_catalog_dir
from fleetview.config import FleetViewConfig
from fleetview.exceptions import (
    CatalogError,
    CatalogLoadError,
    ExtentError,
    FleetViewConfigError,
    FleetViewError,
    SurfaceError,
)
from fleetview.models import (
    Extent,
    FilterState,
    Graphic,
    GraphicRole,
    PathPoint,
    Route,
    Vehicle,
    VisibleSet,
)
from fleetview.render import GenerationHandle, RenderGenerationManager
from fleetview.resolver import resolve
from fleetview.state import FilterChange, FilterStateOwner
from fleetview.surface import InMemoryMapSurface, MapSurface
from fleetview.view import FleetMapView
from fleetview.viewport import ViewportFitter, fit_extent

__all__ = [
    "__version__",
    "Catalog",
    "CatalogError",
    "CatalogLoadError",
    "Extent",
    "ExtentError",
    "FilterChange",
    "FilterState",
    "FilterStateOwner",
    "FleetMapView",
    "FleetViewConfig",
    "FleetViewConfigError",
    "FleetViewError",
    "GenerationHandle",
    "Graphic",
    "GraphicRole",
    "InMemoryMapSurface",
    "MapSurface",
    "PathPoint",
    "RenderGenerationManager",
    "Route",
    "SurfaceError",
    "Vehicle",
    "ViewportFitter",
    "VisibleSet",
    "fetch_catalog",
    "fit_extent",
    "load_bundled_catalog",
    "load_catalog",
    "load_catalog_dir",
    "resolve",
]
