"""Filter change notifications."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from fleetview.models.filters import FilterState


class FilterChange(BaseModel):
    """A new filter state version, as delivered to subscribers."""

    model_config = ConfigDict(frozen=True)

    version: int = Field(..., ge=1, description="Monotonic version of the filter state")
    state: FilterState
    previous: FilterState
    changed: frozenset[str] = Field(default_factory=frozenset, description="Names of fields that differ")
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


def changed_fields(previous: FilterState, current: FilterState) -> frozenset[str]:
    return frozenset(
        name for name in type(current).model_fields if getattr(previous, name) != getattr(current, name)
    )
