from __future__ import annotations

from pathlib import Path

import pytest

from optimistic_state.adapters.simulation import Scenario, load_scenario


@pytest.fixture(scope="session")
def data_dir() -> Path:
    return Path(__file__).resolve().parent / "data"


@pytest.fixture(scope="session")
def rollback_scenario(data_dir: Path) -> Scenario:
    return load_scenario(data_dir / "rollback_scenario.json")
