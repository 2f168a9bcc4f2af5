from __future__ import annotations

import asyncio
from typing import Any

from optimistic_state.adapters.simulation import (
    ScenarioAction,
    SimulatedOperationError,
    simulated_routine,
)
from tests.support.operations import Recorder

# Delays are scaled down from the documented scenarios (300ms -> 0.075s).
SCALE = 0.25 / 1000


def _success(state: int, delay_ms: int) -> ScenarioAction:
    return ScenarioAction(
        state=state, type="success", delay=delay_ms * SCALE, result=f"Result for {state}"
    )


def _error(state: int, delay_ms: int) -> ScenarioAction:
    return ScenarioAction(
        state=state, type="error", delay=delay_ms * SCALE, error=f"error for {state}"
    )


def _submit_all(recorder: Recorder, initial_state: Any, actions: list[ScenarioAction]) -> Any:
    reconciler = recorder.reconciler(initial_state, simulated_routine)
    for action in actions:
        reconciler.submit(action.state, action)
    return reconciler


def test_single_success() -> None:
    async def scenario() -> None:
        recorder = Recorder()
        reconciler = _submit_all(recorder, 0, [_success(1, 300)])

        assert recorder.states == [1]
        assert recorder.results == []

        await reconciler.settled()

        assert recorder.states == [1]
        assert recorder.results == ["Result for 1"]

    asyncio.run(scenario())


def test_single_failure_rolls_back() -> None:
    async def scenario() -> None:
        recorder = Recorder()
        reconciler = _submit_all(recorder, 0, [_error(1, 300)])

        assert recorder.states[-1] == 1

        await reconciler.settled()

        assert recorder.states[-1] == 0
        assert recorder.errors == [SimulatedOperationError("error for 1")]

    asyncio.run(scenario())


def test_last_success_ignores_slower_failure() -> None:
    async def scenario() -> None:
        recorder = Recorder()
        reconciler = _submit_all(
            recorder, 0, [_success(1, 300), _error(2, 800), _success(3, 500)]
        )

        assert recorder.states[-1] == 3

        await asyncio.sleep(650 * SCALE)
        assert recorder.states[-1] == 3
        assert recorder.results == ["Result for 3"]
        assert recorder.errors == []

        await reconciler.settled()

        assert recorder.states == [1, 2, 3]
        assert recorder.results == ["Result for 3"]
        assert recorder.errors == []

    asyncio.run(scenario())


def test_failing_last_rolls_back_to_latest_submitted_success() -> None:
    async def scenario() -> None:
        recorder = Recorder()
        reconciler = _submit_all(
            recorder,
            0,
            [_success(1, 300), _error(2, 400), _success(3, 400), _error(4, 800), _error(5, 500)],
        )

        assert recorder.states[-1] == 5

        await reconciler.settled()

        assert recorder.states[-1] == 3
        assert recorder.results == ["Result for 3"]
        assert recorder.errors == [SimulatedOperationError("error for 5")]

    asyncio.run(scenario())


def test_all_failures_restore_initial_state() -> None:
    async def scenario() -> None:
        recorder = Recorder()
        reconciler = _submit_all(
            recorder, 999, [_error(1, 200), _error(2, 500), _error(3, 300)]
        )

        assert recorder.states[-1] == 3

        await reconciler.settled()

        assert recorder.states[-1] == 999
        assert recorder.results == []
        assert recorder.errors == [SimulatedOperationError("error for 3")]

    asyncio.run(scenario())
