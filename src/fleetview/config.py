"""Runtime configuration for fleetview."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from fleetview._constants import (
    DEFAULT_CENTER_LATITUDE,
    DEFAULT_CENTER_LONGITUDE,
    DEFAULT_ZOOM,
    FIT_MIN_PADDING,
    FIT_PADDING_FACTOR,
)
from fleetview.exceptions import FleetViewConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(env: Mapping[str, str], key: str, cast: type) -> Any:
    raw = env.get(key)
    if raw is None:
        return None
    try:
        return cast(raw)
    except ValueError as exc:
        raise FleetViewConfigError(f"{key} must be a {cast.__name__}, got {raw!r}") from exc


@dataclasses.dataclass(frozen=True)
class FleetViewConfig:
    """Map view configuration.

    Parameters
    ----------
    catalog_url : str or None
        Base URL serving ``vehicles.json`` and ``routes.json``.  Takes
        precedence over ``catalog_dir`` when both are set.
    catalog_dir : Path or None
        Directory holding ``vehicles.json`` and ``routes.json``.  When
        neither source is set the bundled sample catalog is used.
    center_longitude : float
        Longitude the view recenters on.
    center_latitude : float
        Latitude the view recenters on.
    zoom : int
        Zoom level used when recentering.
    padding_factor : float
        Fraction of the content span added on each side of a fitted extent.
    min_padding : float
        Minimum padding in map units, applied when the span is tiny or zero.
    fit_enabled : bool
        Whether the view frames new content automatically.
    http_timeout : float
        Seconds allowed for each catalog HTTP request.
    """

    catalog_url: str | None = None
    catalog_dir: Path | None = None
    center_longitude: float = DEFAULT_CENTER_LONGITUDE
    center_latitude: float = DEFAULT_CENTER_LATITUDE
    zoom: int = DEFAULT_ZOOM
    padding_factor: float = FIT_PADDING_FACTOR
    min_padding: float = FIT_MIN_PADDING
    fit_enabled: bool = True
    http_timeout: float = 10.0

    def __post_init__(self) -> None:
        if self.padding_factor < 0:
            raise FleetViewConfigError(f"padding_factor must be >= 0, got {self.padding_factor}")
        if self.min_padding <= 0:
            raise FleetViewConfigError(f"min_padding must be > 0, got {self.min_padding}")
        if self.http_timeout <= 0:
            raise FleetViewConfigError(f"http_timeout must be > 0, got {self.http_timeout}")
        if self.catalog_dir is not None and not isinstance(self.catalog_dir, Path):
            object.__setattr__(self, "catalog_dir", Path(self.catalog_dir))

    @classmethod
    def from_env(cls, **overrides: Any) -> FleetViewConfig:
        """Create configuration from ``FLEETVIEW_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        url = env.get("FLEETVIEW_CATALOG_URL")
        if url:
            config_kwargs["catalog_url"] = url.rstrip("/")

        directory = env.get("FLEETVIEW_CATALOG_DIR")
        if directory:
            config_kwargs["catalog_dir"] = Path(directory)

        _ENV_NUMERIC_MAP: dict[str, tuple[str, type]] = {
            "FLEETVIEW_CENTER_LONGITUDE": ("center_longitude", float),
            "FLEETVIEW_CENTER_LATITUDE": ("center_latitude", float),
            "FLEETVIEW_ZOOM": ("zoom", int),
            "FLEETVIEW_PADDING_FACTOR": ("padding_factor", float),
            "FLEETVIEW_MIN_PADDING": ("min_padding", float),
            "FLEETVIEW_HTTP_TIMEOUT": ("http_timeout", float),
        }
        for env_key, (field_name, cast) in _ENV_NUMERIC_MAP.items():
            if field_name in overrides:
                continue
            value = _env_number(env, env_key, cast)
            if value is not None:
                config_kwargs[field_name] = value

        if "fit_enabled" not in overrides:
            config_kwargs["fit_enabled"] = _env_bool(env.get("FLEETVIEW_FIT_ENABLED"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
