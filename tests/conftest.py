"""Shared fixtures for the BonsaiGotchi test suite."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from bonsaigotchi.pet.bonsai import Bonsai
from bonsaigotchi.simulation.config import SimulationConfig
from bonsaigotchi.simulation.engine import SimulationEngine
from bonsaigotchi.world.environment import Environment


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def default_config() -> SimulationConfig:
    """Default simulation config (no YAML file needed)."""
    return SimulationConfig()


@pytest.fixture
def pet() -> Bonsai:
    """A freshly created pet with default stats."""
    return Bonsai(name="Test")


@pytest.fixture
def calm_environment() -> Environment:
    """Spring, mid-day, with weather that never changes on its own."""
    return Environment(hour=12, weather_change_chance=0.0)


@pytest.fixture
def engine(
    default_config: SimulationConfig,
    pet: Bonsai,
    calm_environment: Environment,
) -> SimulationEngine:
    """An engine around the ``pet`` and ``calm_environment`` fixtures."""
    return SimulationEngine(
        config=default_config,
        game=(pet, calm_environment),
    )
