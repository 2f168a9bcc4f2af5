"""Ports the reconciler talks to."""

from __future__ import annotations

from .publishing import ErrorPublisher, ResultPublisher, Routine, StatePublisher

__all__ = ["ErrorPublisher", "ResultPublisher", "Routine", "StatePublisher"]
