"""Internal constants shared across the library."""

# ------------------------------------------------------------------
# Map defaults
# ------------------------------------------------------------------

DEFAULT_CENTER_LONGITUDE = -95.416
DEFAULT_CENTER_LATITUDE = 29.044
DEFAULT_ZOOM = 12

# Fractional padding added around a fitted extent, and its floor in map
# units so a single point never produces a zero-size request.
FIT_PADDING_FACTOR = 0.05
FIT_MIN_PADDING = 0.01

# ------------------------------------------------------------------
# Vehicle types
# ------------------------------------------------------------------

TYPE_TRASH = "Trash"
TYPE_RECYCLING = "Recycling"
TYPE_HEAVY_TRASH = "Heavy Trash"

KNOWN_VEHICLE_TYPES: tuple[str, ...] = (TYPE_TRASH, TYPE_RECYCLING, TYPE_HEAVY_TRASH)

# ------------------------------------------------------------------
# Symbology
# ------------------------------------------------------------------

VEHICLE_TYPE_COLORS: dict[str, str] = {
    TYPE_TRASH: "#ef4444",
    TYPE_RECYCLING: "#22c55e",
    TYPE_HEAVY_TRASH: "#3b82f6",
}
UNKNOWN_TYPE_COLOR = "#9ca3af"

VEHICLE_MARKER_SIZE = 14
VEHICLE_OUTLINE_COLOR = "white"
VEHICLE_OUTLINE_WIDTH = 1.5

LABEL_COLOR = "black"
LABEL_FONT_SIZE = 10
LABEL_FONT_FAMILY = "Arial"
LABEL_FONT_WEIGHT = "bold"
LABEL_YOFFSET = -18

ROUTE_LINE_WIDTH = 4

START_MARKER_COLOR = "limegreen"
END_MARKER_COLOR = "red"
ENDPOINT_MARKER_SIZE = 10
ENDPOINT_OUTLINE_COLOR = "#fff"
ENDPOINT_OUTLINE_WIDTH = 1

NOT_AVAILABLE = "N/A"

# ------------------------------------------------------------------
# Rendering
# ------------------------------------------------------------------

# Layers whose detach failed are retried; beyond this many the oldest is dropped.
MAX_ORPHANED_LAYERS = 16
