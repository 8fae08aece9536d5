"""Two-step write with compensation (for pairs of remote writes that share no transaction).

The first step is applied, then the second. If the second step fails the
first is undone by its compensating action. The write moves through:

    pending -> committed
    pending -> compensating -> compensated | compensation_failed

A failed first step leaves nothing to undo and ends in ``failed``.
A write whose first step cannot be undone passes ``compensate=None`` and ends
in ``compensation_failed`` when the second step fails.

Cancellation during the second step (client disconnect, shutdown) also runs
the compensation before the cancellation propagates.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Generic, TypeVar

from doclibrary.domain.exceptions import CompensationFailedException

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class WriteState(str, Enum):
    PENDING = "pending"
    FAILED = "failed"
    COMMITTED = "committed"
    COMPENSATING = "compensating"
    COMPENSATED = "compensated"
    COMPENSATION_FAILED = "compensation_failed"


class TwoStepWrite(Generic[T, R]):
    """One attempt at a two-step write. Not reusable: run() may be called once."""

    def __init__(
        self,
        operation: str,
        first: Callable[[], Awaitable[T]],
        second: Callable[[T], Awaitable[R]],
        compensate: Callable[[T], Awaitable[None]] | None,
    ) -> None:
        self.operation = operation
        self._first = first
        self._second = second
        self._compensate = compensate
        self.state = WriteState.PENDING

    async def run(self) -> R:
        """Apply both steps; return the second step's result.

        Raises:
            The first step's error unchanged if it fails.
            The second step's error unchanged if compensation succeeds.
            CompensationFailedException if compensation is impossible or fails.
        """
        if self.state is not WriteState.PENDING:
            raise RuntimeError(f"{self.operation} already ran (state={self.state.value})")
        try:
            applied = await self._first()
        except Exception:
            self.state = WriteState.FAILED
            raise

        try:
            result = await self._second(applied)
        except Exception as original:
            self.state = WriteState.COMPENSATING
            logger.error(
                "%s: second step failed, compensating: %s", self.operation, original
            )
            await self._run_compensation(applied, original)
            raise
        except asyncio.CancelledError:
            self.state = WriteState.COMPENSATING
            logger.warning("%s: cancelled after first step, compensating", self.operation)
            await self._compensate_after_cancel(applied)
            raise
        self.state = WriteState.COMMITTED
        return result

    async def _run_compensation(self, applied: T, original: Exception) -> None:
        if self._compensate is None:
            self.state = WriteState.COMPENSATION_FAILED
            logger.error(
                "%s: first step cannot be undone; state left inconsistent (%r)",
                self.operation,
                applied,
            )
            raise CompensationFailedException(self.operation, original) from original
        try:
            await self._compensate(applied)
        except Exception as compensation_error:
            self.state = WriteState.COMPENSATION_FAILED
            logger.exception(
                "%s: compensation failed after error %s", self.operation, original
            )
            raise CompensationFailedException(
                self.operation, original, compensation_error
            ) from original
        self.state = WriteState.COMPENSATED
        logger.info("%s: compensated", self.operation)

    async def _compensate_after_cancel(self, applied: T) -> None:
        """Undo the first step; the cancellation itself is re-raised by the caller."""
        if self._compensate is None:
            self.state = WriteState.COMPENSATION_FAILED
            logger.error(
                "%s: cancelled; first step cannot be undone (%r)", self.operation, applied
            )
            return
        try:
            await asyncio.shield(self._compensate(applied))
        except Exception:
            self.state = WriteState.COMPENSATION_FAILED
            logger.exception("%s: compensation failed after cancellation", self.operation)
            return
        self.state = WriteState.COMPENSATED
        logger.info("%s: compensated after cancellation", self.operation)
