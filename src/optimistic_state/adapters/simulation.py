"""Scripted operations that settle after a fixed delay.

Scenarios describe a sequence of submissions and how each confirmation ends,
which makes reconciliation behaviour reproducible from a JSON file.
"""

from __future__ import annotations

import asyncio
import json
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

if TYPE_CHECKING:
    from pathlib import Path


class Outcome(StrEnum):
    SUCCESS = "success"
    ERROR = "error"


class SimulatedOperationError(RuntimeError):
    """Raised by a scripted operation that is meant to fail."""

    def __init__(self, reason: object) -> None:
        super().__init__(str(reason))
        self.reason = reason

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SimulatedOperationError):
            return NotImplemented
        return self.reason == other.reason

    def __hash__(self) -> int:
        return hash(repr(self.reason))


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


class ScenarioAction(ScenarioModel):
    state: Any
    outcome: Outcome = Field(alias="type")
    delay: float = Field(ge=0)
    result: Any = None
    error: Any = None

    @model_validator(mode="after")
    def _require_reason(self) -> ScenarioAction:
        if self.outcome is Outcome.ERROR and self.error is None:
            raise ValueError("error actions need an 'error' reason")
        return self


class Scenario(ScenarioModel):
    initial_state: Any = None
    actions: tuple[ScenarioAction, ...] = Field(min_length=1)


def load_scenario(path: Path) -> Scenario:
    with path.open() as handle:
        return Scenario.model_validate(json.load(handle))


async def simulated_routine(_state: object, action: ScenarioAction) -> Any:
    """Settle the way ``action`` describes after its delay."""

    await asyncio.sleep(action.delay)
    if action.outcome is Outcome.ERROR:
        raise SimulatedOperationError(action.error)
    return action.result


__all__ = [
    "Outcome",
    "Scenario",
    "ScenarioAction",
    "SimulatedOperationError",
    "load_scenario",
    "simulated_routine",
]
