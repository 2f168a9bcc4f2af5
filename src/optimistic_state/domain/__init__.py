"""Domain core: batch reconciliation of optimistic state."""

from __future__ import annotations

from .reconciler import BatchReconciler
from .types import Batch, Settlement, SettlementStatus, Submission

__all__ = ["Batch", "BatchReconciler", "Settlement", "SettlementStatus", "Submission"]
