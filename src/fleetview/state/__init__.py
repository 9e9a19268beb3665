"""Filter state ownership.

The owner is the single source of truth for the current filter state; every
other component only reads the immutable values it publishes.
"""

from fleetview.state.events import FilterChange
from fleetview.state.owner import FilterStateOwner

__all__ = ["FilterChange", "FilterStateOwner"]
