"""Custom exception hierarchy for fleetview."""

from __future__ import annotations


class FleetViewError(Exception):
    """Base exception for all fleetview errors."""


class FleetViewConfigError(FleetViewError):
    """Invalid or missing configuration."""


class CatalogError(FleetViewError):
    """Catalog payload could not be parsed into vehicles and routes."""


class CatalogLoadError(CatalogError):
    """Catalog source could not be read (file missing, network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        source: str = "",
        status_code: int | None = None,
    ) -> None:
        self.source = source
        self.status_code = status_code
        super().__init__(message)


class SurfaceError(FleetViewError):
    """A map surface operation failed.

    Surfaces raise this when they are mid-teardown, not yet initialised,
    or reject a request.  The rendering core never lets it escape: every
    surface call is wrapped by :func:`fleetview._nonfatal.best_effort`.
    """

    def __init__(self, message: str, *, operation: str = "") -> None:
        self.operation = operation
        super().__init__(message)


class ExtentError(FleetViewError):
    """A bounding extent could not be derived or is malformed."""
