"""Base model shared by catalog and filter models.

Every fleetview data model inherits from :class:`FleetBaseModel` which
provides:

* ``alias_generator=to_camel`` so camelCase JSON keys (``lastSeen``,
  ``showStartEnd``) map automatically to snake_case fields, while
  snake_case names are still accepted.
* A ``model_validator(mode="before")`` that drops placeholder values
  (``None``, ``""``, ``"--"``, NaN) so the field default is used.  This
  is what makes payload shapes additive: a missing or blank field always
  falls back to its documented default.  Models carrying user input
  (:class:`~fleetview.models.filters.FilterState`) set
  ``drop_placeholder_strings = False`` so only ``None`` and NaN are dropped.
"""

from __future__ import annotations

import math
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

# Placeholder strings treated as "not provided".
_SENTINELS = frozenset({"", "--", "NaN", "nan"})


def clean_payload(values: dict[str, Any], *, drop_strings: bool = True) -> dict[str, Any]:
    """Return a copy of *values* without placeholder entries.

    With ``drop_strings=False`` only ``None`` and NaN are dropped; strings
    such as ``"--"`` are kept as given.
    """
    cleaned: dict[str, Any] = {}
    for key, value in values.items():
        if value is None:
            continue
        if drop_strings and isinstance(value, str) and value.strip() in _SENTINELS:
            continue
        if isinstance(value, float) and math.isnan(value):
            continue
        cleaned[key] = value
    return cleaned


class FleetBaseModel(BaseModel):
    """Frozen base for all fleetview value objects."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    # Models holding user input set this to False so their strings pass through.
    drop_placeholder_strings: ClassVar[bool] = True

    @model_validator(mode="before")
    @classmethod
    def _drop_placeholders(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return clean_payload(values, drop_strings=cls.drop_placeholder_strings)
