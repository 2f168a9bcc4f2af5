"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any

from optimistic_state.adapters.remote import RemoteConfirmation
from optimistic_state.adapters.simulation import simulated_routine
from optimistic_state.adapters.store import OptimisticStore, StoreSnapshot

if TYPE_CHECKING:
    from collections.abc import Sequence

    from optimistic_state.adapters.simulation import Scenario
    from optimistic_state.config import RemoteConfig

log = getLogger(__name__)


async def replay_scenario(
    scenario: Scenario, *, initial_state: Any = None
) -> StoreSnapshot[Any, Any]:
    """Submit every scenario action back to back and wait for the outcome."""

    start = scenario.initial_state if initial_state is None else initial_state
    store: OptimisticStore[Any, Any] = OptimisticStore(start, simulated_routine)
    for action in scenario.actions:
        store.submit(action.state, action)
    log.info("Replaying %d actions; optimistic state=%r", len(scenario.actions), store.state)
    snapshot = await store.settled()
    _log_snapshot(snapshot)
    return snapshot


async def push_states(
    states: Sequence[Any],
    *,
    initial_state: Any = None,
    config: RemoteConfig | None = None,
    routine: RemoteConfirmation | None = None,
) -> StoreSnapshot[Any, Any]:
    """Submit ``states`` to the remote endpoint back to back and wait for the outcome."""

    effective_routine = routine or (
        RemoteConfirmation(config=config) if config is not None else RemoteConfirmation()
    )
    store: OptimisticStore[Any, Any] = OptimisticStore(initial_state, effective_routine)
    try:
        for state in states:
            store.submit(state)
        log.info(
            "Pushed %d states to %s", len(states), effective_routine.config.endpoint
        )
        snapshot = await store.settled()
    finally:
        await effective_routine.aclose()
    _log_snapshot(snapshot)
    return snapshot


def _log_snapshot(snapshot: StoreSnapshot[Any, Any]) -> None:
    log.info(
        "Settled: state=%r, result=%r, error=%r",
        snapshot.state,
        snapshot.result,
        snapshot.error,
    )
