"""Batch reconciliation of optimistic state against asynchronous confirmations.

Every ``submit`` publishes its state immediately and starts an operation that
confirms it. Submissions accumulate in the live batch until one of two watchers
reaches a terminal decision:

- the fast path fires when an operation succeeds while its submission is still
  the newest one in the live batch; the newest confirmed submission wins without
  waiting for older operations.
- the slow path waits for every operation of a batch snapshot to settle. If the
  newest one failed it reports the failure and rolls back to the newest earlier
  success in submission order, or to the resolved state when nothing succeeded.

Either decision replaces the live batch with an empty one. Watchers compare the
snapshot they captured against the live batch by identity and do nothing once
it has been replaced. Operations are never cancelled; their late results are
ignored instead.
"""

from __future__ import annotations

import asyncio
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from .types import Batch, Settlement

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .ports import ErrorPublisher, ResultPublisher, Routine, StatePublisher
    from .types import Submission

log = getLogger(__name__)


def _noop(_value: object, /) -> None:
    return None


class BatchReconciler[S, R]:
    """Apply speculative states now, settle them once their operations finish.

    The reconciler must be driven from a single asyncio event loop. ``submit`` is
    synchronous; all reconciliation runs inside callbacks scheduled by the loop.
    """

    def __init__(
        self,
        initial_state: S,
        routine: Routine[S, R],
        *,
        handle_state: StatePublisher[S],
        handle_result: ResultPublisher[R] = _noop,
        handle_error: ErrorPublisher = _noop,
    ) -> None:
        self._resolved_state = initial_state
        self._routine = routine
        self._handle_state = handle_state
        self._handle_result = handle_result
        self._handle_error = handle_error
        self._batch: Batch[S, R] = Batch(generation=0)
        self._watchers: set[asyncio.Task[None]] = set()

    @property
    def resolved_state(self) -> S:
        """Last state confirmed by a completed batch."""

        return self._resolved_state

    @property
    def pending(self) -> int:
        """Number of submissions in the live batch."""

        return len(self._batch)

    @property
    def generation(self) -> int:
        return self._batch.generation

    def submit(self, state: S, *args: object, **kwargs: object) -> None:
        """Publish ``state`` optimistically and start confirming it.

        Extra arguments are forwarded to the routine. Must be called while an
        event loop is running.
        """

        loop = asyncio.get_running_loop()
        self._handle_state(state)

        operation = self._start(loop, state, args, kwargs)
        batch = self._batch.append(state, operation)
        self._batch = batch
        submission = batch.submissions[-1]
        log.debug(
            "Submitted position %d in batch %d", submission.position, batch.generation
        )

        operation.add_done_callback(partial(self._on_operation_done, submission))
        watcher = loop.create_task(self._reconcile_when_settled(batch))
        self._watchers.add(watcher)
        watcher.add_done_callback(self._on_watcher_done)

    async def settled(self) -> None:
        """Wait until every watcher registered so far has finished."""

        while self._watchers:
            await asyncio.wait(set(self._watchers))

    def _start(
        self,
        loop: asyncio.AbstractEventLoop,
        state: S,
        args: tuple[object, ...],
        kwargs: dict[str, object],
    ) -> asyncio.Future[R]:
        # A routine that cannot even start counts as a failed operation.
        try:
            return asyncio.ensure_future(self._routine(state, *args, **kwargs), loop=loop)
        except Exception as exc:  # noqa: BLE001
            failed: asyncio.Future[R] = loop.create_future()
            failed.set_exception(exc)
            return failed

    def _on_operation_done(
        self, submission: Submission[S, R], operation: asyncio.Future[R]
    ) -> None:
        # Failures are left to the settlement scan.
        if operation.cancelled() or operation.exception() is not None:
            return
        if self._batch.last is not submission:
            log.debug(
                "Ignoring superseded success at position %d", submission.position
            )
            return
        try:
            self._resolve(submission.state, operation.result())
        finally:
            self._reset()

    async def _reconcile_when_settled(self, batch: Batch[S, R]) -> None:
        await asyncio.wait([submission.operation for submission in batch.submissions])
        if self._batch is not batch:
            return
        try:
            self._reconcile(batch)
        finally:
            self._reset()

    def _reconcile(self, batch: Batch[S, R]) -> None:
        settlements = [Settlement.of(submission.operation) for submission in batch.submissions]
        last = settlements[-1]
        if last.succeeded:
            self._resolve(batch.submissions[-1].state, last.value)
            return

        self._handle_error(last.reason)
        self._roll_back(batch.submissions, settlements)

    def _roll_back(
        self, submissions: Sequence[Submission[S, R]], settlements: Sequence[Settlement[R]]
    ) -> None:
        for index in range(len(settlements) - 1, -1, -1):
            settlement = settlements[index]
            if settlement.succeeded:
                submission = submissions[index]
                log.info(
                    "Rolling back to position %d of %d", submission.position, len(submissions)
                )
                self._handle_state(submission.state)
                self._resolve(submission.state, settlement.value)
                return

        log.info("All %d submissions failed; restoring resolved state", len(submissions))
        self._handle_state(self._resolved_state)

    def _resolve(self, state: S, value: R | None) -> None:
        self._resolved_state = state
        self._handle_result(value)  # type: ignore[arg-type]

    def _reset(self) -> None:
        log.debug("Closing batch %d with %d submissions", self._batch.generation, len(self._batch))
        self._batch = self._batch.successor()

    def _on_watcher_done(self, watcher: asyncio.Task[None]) -> None:
        self._watchers.discard(watcher)
        if watcher.cancelled():
            return
        error = watcher.exception()
        if error is not None:
            log.error("Settlement reconciliation failed", exc_info=error)


__all__ = ["BatchReconciler"]
