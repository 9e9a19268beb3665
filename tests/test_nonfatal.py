from __future__ import annotations

import asyncio
import logging

import pytest

from fleetview._nonfatal import best_effort, best_effort_async
from fleetview.exceptions import SurfaceError


def _boom() -> None:
    raise SurfaceError("not initialised", operation="attach_layer")


def test_best_effort_returns_value() -> None:
    result = best_effort("add", lambda a, b: a + b, 1, b=2)
    assert result.ok
    assert result.value == 3
    assert result.operation == "add"


def test_best_effort_captures_and_logs(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="fleetview._nonfatal"):
        result = best_effort("attach_layer", _boom)

    assert not result.ok
    assert result.value is None
    assert isinstance(result.error, SurfaceError)
    assert "Non-fatal failure in attach_layer" in caplog.text


@pytest.mark.asyncio
async def test_best_effort_async_captures() -> None:
    async def fails() -> None:
        raise SurfaceError("gone", operation="when_attached")

    async def succeeds() -> str:
        return "ok"

    failed = await best_effort_async("when_attached", fails())
    passed = await best_effort_async("when_attached", succeeds())

    assert isinstance(failed.error, SurfaceError)
    assert passed.ok and passed.value == "ok"


@pytest.mark.asyncio
async def test_best_effort_async_propagates_cancellation() -> None:
    started = asyncio.Event()

    async def waits() -> None:
        started.set()
        await asyncio.Event().wait()

    task = asyncio.create_task(best_effort_async("when_attached", waits()))
    await started.wait()
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
