"""Filter state ownership.

:class:`FilterStateOwner` is the only place a :class:`FilterState` is
"changed".  Each setter derives a new immutable value from the current one
and, if it differs, publishes a :class:`FilterChange` to subscribers in
subscription order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import date
from typing import Any

from fleetview.models.filters import FilterState
from fleetview.state.events import FilterChange, changed_fields

_logger = logging.getLogger(__name__)

Listener = Callable[[FilterChange], None]


def _toggled(members: frozenset[Any], item: Any) -> frozenset[Any]:
    return members - {item} if item in members else members | {item}


class FilterStateOwner:
    """Holds the current filter state and notifies subscribers of changes."""

    def __init__(self, initial: FilterState | None = None) -> None:
        self._state = initial if initial is not None else FilterState.default()
        self._version = 0
        self._listeners: list[Listener] = []

    @classmethod
    def for_types(cls, types: Iterable[str]) -> FilterStateOwner:
        """Owner whose initial state enables every type in *types*."""
        return cls(FilterState.default(types))

    @property
    def state(self) -> FilterState:
        return self._state

    @property
    def version(self) -> int:
        return self._version

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def replace(self, state: FilterState) -> FilterState:
        """Install *state* as the current version and notify if it changed."""
        previous = self._state
        if state == previous:
            return previous
        self._state = state
        self._version += 1
        change = FilterChange(
            version=self._version,
            state=state,
            previous=previous,
            changed=changed_fields(previous, state),
        )
        _logger.debug("Filter state v%d: changed %s", self._version, sorted(change.changed))
        for listener in list(self._listeners):
            listener(change)
        return state

    def update(self, **changes: Any) -> FilterState:
        """Derive a validated copy of the current state with *changes* applied."""
        data = self._state.model_dump()
        data.update(changes)
        return self.replace(FilterState.model_validate(data))

    # ------------------------------------------------------------------
    # Setters mirroring the filter widgets
    # ------------------------------------------------------------------

    def toggle_type(self, vehicle_type: str) -> FilterState:
        types = dict(self._state.types)
        types[vehicle_type] = not types.get(vehicle_type, False)
        return self.update(types=types)

    def toggle_vehicle(self, vehicle_id: str | int) -> FilterState:
        return self.update(vehicles=_toggled(self._state.vehicles, vehicle_id))

    def clear_vehicles(self) -> FilterState:
        return self.update(vehicles=frozenset())

    def toggle_route_color(self, color: str) -> FilterState:
        return self.update(route_colors=_toggled(self._state.route_colors, color.strip()))

    def toggle_show_start_end(self) -> FilterState:
        return self.update(show_start_end=not self._state.show_start_end)

    def toggle_show_labels(self) -> FilterState:
        return self.update(show_labels=not self._state.show_labels)

    def set_selected_date(self, selected: date | str | None) -> FilterState:
        return self.update(selected_date=selected or None)

    def set_address_search(self, query: str) -> FilterState:
        return self.update(address_search=query)
