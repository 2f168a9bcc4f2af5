"""Callable ports for publishing reconciled values and starting operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Awaitable


@runtime_checkable
class StatePublisher[S](Protocol):
    """Receives every optimistic state and every rollback state."""

    def __call__(self, state: S, /) -> None:
        ...


@runtime_checkable
class ResultPublisher[R](Protocol):
    """Receives the confirmed value when a batch ends in success."""

    def __call__(self, result: R, /) -> None:
        ...


@runtime_checkable
class ErrorPublisher(Protocol):
    """Receives the failure reason when a batch's last submission fails."""

    def __call__(self, error: BaseException, /) -> None:
        ...


class Routine[S, R](Protocol):
    """Starts the confirmation work for one speculative state."""

    def __call__(self, state: S, /, *args: object, **kwargs: object) -> Awaitable[R]:
        ...


__all__ = ["ErrorPublisher", "ResultPublisher", "Routine", "StatePublisher"]
