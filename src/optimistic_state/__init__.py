"""Optimistic state updates reconciled against asynchronous confirmations."""

from __future__ import annotations

from importlib import metadata

from .domain.reconciler import BatchReconciler
from .domain.types import Batch, Settlement, SettlementStatus, Submission

try:
    __version__ = metadata.version("optimistic-state")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0+local"

__all__ = [
    "Batch",
    "BatchReconciler",
    "Settlement",
    "SettlementStatus",
    "Submission",
]
