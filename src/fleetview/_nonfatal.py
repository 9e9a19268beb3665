"""Explicit policy for best-effort operations.

Map surface operations (detaching a stale layer, waiting for a layer to
render, framing the view) may fail while the surface is tearing down or not
yet initialised.  Such failures are never surfaced: the next filter change
rebuilds everything from scratch.  Instead of scattering ``try/except``
blocks, callers route those operations through :func:`best_effort` or
:func:`best_effort_async`, which record the outcome in a
:class:`NonFatalResult` and log the swallowed exception at DEBUG.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

_logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class NonFatalResult(Generic[T]):
    """Outcome of a best-effort operation."""

    operation: str
    value: T | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def best_effort(operation: str, fn: Callable[..., T], *args: Any, **kwargs: Any) -> NonFatalResult[T]:
    """Call *fn* and capture any :class:`Exception` instead of raising it."""
    try:
        value = fn(*args, **kwargs)
    except Exception as exc:
        _logger.debug("Non-fatal failure in %s", operation, exc_info=True)
        return NonFatalResult(operation=operation, error=exc)
    return NonFatalResult(operation=operation, value=value)


async def best_effort_async(operation: str, awaitable: Awaitable[T]) -> NonFatalResult[T]:
    """Await *awaitable*, capturing any :class:`Exception`.

    Cancellation is not swallowed; it propagates so tasks stop promptly.
    """
    try:
        value = await awaitable
    except asyncio.CancelledError:
        raise
    except Exception as exc:
        _logger.debug("Non-fatal failure in %s", operation, exc_info=True)
        return NonFatalResult(operation=operation, error=exc)
    return NonFatalResult(operation=operation, value=value)
