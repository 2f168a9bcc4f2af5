"""Observable store that mirrors a reconciler's published values."""

from __future__ import annotations

from dataclasses import dataclass, replace
from logging import getLogger
from typing import TYPE_CHECKING

from optimistic_state.domain.reconciler import BatchReconciler

if TYPE_CHECKING:
    from collections.abc import Callable

    from optimistic_state.domain.ports import Routine

log = getLogger(__name__)


@dataclass(slots=True, frozen=True)
class StoreSnapshot[S, R]:
    state: S
    result: R | None = None
    error: BaseException | None = None
    in_flight: bool = False


type StoreListener[S, R] = Callable[[StoreSnapshot[S, R]], None]


class OptimisticStore[S, R]:
    """Current state, last result, last error and an in-flight flag.

    A new submission clears the previous error but keeps the last result until a
    newer one is confirmed. ``in_flight`` stays set until a batch publishes a
    result or an error.
    """

    def __init__(self, initial_state: S, routine: Routine[S, R]) -> None:
        self._snapshot: StoreSnapshot[S, R] = StoreSnapshot(state=initial_state)
        self._listeners: list[StoreListener[S, R]] = []
        self._reconciler: BatchReconciler[S, R] = BatchReconciler(
            initial_state,
            routine,
            handle_state=self._set_state,
            handle_result=self._set_result,
            handle_error=self._set_error,
        )

    @property
    def snapshot(self) -> StoreSnapshot[S, R]:
        return self._snapshot

    @property
    def state(self) -> S:
        return self._snapshot.state

    @property
    def result(self) -> R | None:
        return self._snapshot.result

    @property
    def error(self) -> BaseException | None:
        return self._snapshot.error

    @property
    def in_flight(self) -> bool:
        return self._snapshot.in_flight

    @property
    def reconciler(self) -> BatchReconciler[S, R]:
        return self._reconciler

    def submit(self, state: S, *args: object, **kwargs: object) -> None:
        self._update(error=None, in_flight=True)
        self._reconciler.submit(state, *args, **kwargs)

    async def settled(self) -> StoreSnapshot[S, R]:
        await self._reconciler.settled()
        return self._snapshot

    def subscribe(self, listener: StoreListener[S, R]) -> Callable[[], None]:
        """Register ``listener`` for every change; returns a function that removes it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: S) -> None:
        self._update(state=state)

    def _set_result(self, result: R) -> None:
        self._update(result=result, in_flight=False)

    def _set_error(self, error: BaseException) -> None:
        log.debug("Confirmation failed: %r", error)
        self._update(error=error, in_flight=False)

    def _update(self, **changes: object) -> None:
        self._snapshot = replace(self._snapshot, **changes)  # type: ignore[arg-type]
        for listener in tuple(self._listeners):
            listener(self._snapshot)


__all__ = ["OptimisticStore", "StoreListener", "StoreSnapshot"]
