"""Unit tests for TwoStepWrite state transitions and error propagation."""

import asyncio

import pytest

from doclibrary.application.services.two_step_write import TwoStepWrite, WriteState
from doclibrary.domain.exceptions import CompensationFailedException, RemoteException


class Recorder:
    """Records the order in which steps ran."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    async def first(self) -> str:
        self.calls.append("first")
        return "obj"

    async def second(self, applied: str) -> str:
        self.calls.append(f"second:{applied}")
        return "row"

    async def failing_second(self, applied: str) -> str:
        self.calls.append(f"second:{applied}")
        raise RemoteException("insert failed", status_code=500)

    async def compensate(self, applied: str) -> None:
        self.calls.append(f"compensate:{applied}")

    async def failing_compensate(self, applied: str) -> None:
        self.calls.append(f"compensate:{applied}")
        raise RemoteException("remove failed", status_code=503)


async def test_both_steps_succeed() -> None:
    rec = Recorder()
    write = TwoStepWrite("op", rec.first, rec.second, rec.compensate)
    assert write.state is WriteState.PENDING
    assert await write.run() == "row"
    assert write.state is WriteState.COMMITTED
    assert rec.calls == ["first", "second:obj"]


async def test_first_step_failure_skips_second() -> None:
    rec = Recorder()

    async def first() -> str:
        raise RemoteException("upload failed")

    write = TwoStepWrite("op", first, rec.second, rec.compensate)
    with pytest.raises(RemoteException, match="upload failed"):
        await write.run()
    assert write.state is WriteState.FAILED
    assert rec.calls == []


async def test_second_step_failure_is_compensated_and_reraised() -> None:
    """The caller sees the second step's error, not a compensation error."""
    rec = Recorder()
    write = TwoStepWrite("op", rec.first, rec.failing_second, rec.compensate)
    with pytest.raises(RemoteException, match="insert failed"):
        await write.run()
    assert write.state is WriteState.COMPENSATED
    assert rec.calls == ["first", "second:obj", "compensate:obj"]


async def test_failed_compensation_reports_both_errors() -> None:
    rec = Recorder()
    write = TwoStepWrite("op", rec.first, rec.failing_second, rec.failing_compensate)
    with pytest.raises(CompensationFailedException) as exc_info:
        await write.run()
    assert write.state is WriteState.COMPENSATION_FAILED
    err = exc_info.value
    assert err.details["original_error"] == "insert failed"
    assert err.details["compensation_error"] == "remove failed"
    assert isinstance(err.original, RemoteException)


async def test_missing_compensation_is_a_compensation_failure() -> None:
    rec = Recorder()
    write = TwoStepWrite("delete", rec.first, rec.failing_second, None)
    with pytest.raises(CompensationFailedException) as exc_info:
        await write.run()
    assert write.state is WriteState.COMPENSATION_FAILED
    assert "compensation_error" not in exc_info.value.details
    assert exc_info.value.details["operation"] == "delete"


async def test_run_twice_rejected() -> None:
    rec = Recorder()
    write = TwoStepWrite("op", rec.first, rec.second, rec.compensate)
    await write.run()
    with pytest.raises(RuntimeError, match="already ran"):
        await write.run()
    assert rec.calls == ["first", "second:obj"]


async def test_cancellation_during_second_step_compensates() -> None:
    """A task cancelled while the second step is in flight still undoes the first."""
    rec = Recorder()
    second_started = asyncio.Event()

    async def hanging_second(applied: str) -> str:
        rec.calls.append(f"second:{applied}")
        second_started.set()
        await asyncio.Event().wait()
        return "row"

    write = TwoStepWrite("op", rec.first, hanging_second, rec.compensate)
    task = asyncio.create_task(write.run())
    await second_started.wait()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert rec.calls == ["first", "second:obj", "compensate:obj"]
    assert write.state is WriteState.COMPENSATED


async def test_cancellation_without_compensation_is_recorded() -> None:
    rec = Recorder()
    second_started = asyncio.Event()

    async def hanging_second(applied: str) -> str:
        second_started.set()
        await asyncio.Event().wait()
        return "row"

    write = TwoStepWrite("delete", rec.first, hanging_second, None)
    task = asyncio.create_task(write.run())
    await second_started.wait()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert write.state is WriteState.COMPENSATION_FAILED
