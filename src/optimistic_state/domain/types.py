"""Value types shared by the reconciler and its adapters.

A ``Batch`` is an immutable snapshot. Appending a submission produces a new
``Batch`` object, so a watcher that captured an older snapshot can detect that
it has been superseded with a plain identity check. A reset produces an empty
batch with the next generation number.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import StrEnum


class SettlementStatus(StrEnum):
    """How an operation finished."""

    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(slots=True, frozen=True, eq=False)
class Submission[S, R]:
    """One call to ``submit``: the speculative state and its pending operation."""

    state: S
    operation: asyncio.Future[R]
    position: int


@dataclass(slots=True, frozen=True, eq=False)
class Batch[S, R]:
    """Submissions accumulated since the last terminal decision."""

    generation: int
    submissions: tuple[Submission[S, R], ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.submissions)

    @property
    def last(self) -> Submission[S, R] | None:
        return self.submissions[-1] if self.submissions else None

    def append(self, state: S, operation: asyncio.Future[R]) -> Batch[S, R]:
        submission = Submission(state=state, operation=operation, position=len(self.submissions))
        return Batch(generation=self.generation, submissions=(*self.submissions, submission))

    def successor(self) -> Batch[S, R]:
        return Batch(generation=self.generation + 1)


@dataclass(slots=True, frozen=True)
class Settlement[R]:
    """Outcome of a settled operation."""

    status: SettlementStatus
    value: R | None = None
    reason: BaseException | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is SettlementStatus.SUCCESS

    @classmethod
    def of(cls, future: asyncio.Future[R]) -> Settlement[R]:
        """Read the outcome of a finished future without re-raising its error."""

        if not future.done():
            raise ValueError("Cannot read the settlement of a pending operation")
        if future.cancelled():
            return cls(status=SettlementStatus.FAILURE, reason=asyncio.CancelledError())
        error = future.exception()
        if error is not None:
            return cls(status=SettlementStatus.FAILURE, reason=error)
        return cls(status=SettlementStatus.SUCCESS, value=future.result())


__all__ = ["Batch", "Settlement", "SettlementStatus", "Submission"]
