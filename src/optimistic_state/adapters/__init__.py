from __future__ import annotations

from .remote import ConfirmationResponse, RemoteConfirmation, RemoteConfirmationError
from .simulation import (
    Outcome,
    Scenario,
    ScenarioAction,
    SimulatedOperationError,
    load_scenario,
    simulated_routine,
)
from .store import OptimisticStore, StoreSnapshot

__all__ = [
    "ConfirmationResponse",
    "OptimisticStore",
    "Outcome",
    "RemoteConfirmation",
    "RemoteConfirmationError",
    "Scenario",
    "ScenarioAction",
    "SimulatedOperationError",
    "StoreSnapshot",
    "load_scenario",
    "simulated_routine",
]
