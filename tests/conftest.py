from __future__ import annotations

import pytest

from confetti_burst.config.schema import BurstConfig
from confetti_burst.engine.clock import VirtualClock


@pytest.fixture
def clock():
    return VirtualClock()


@pytest.fixture
def default_config():
    return BurstConfig.from_options()


@pytest.fixture
def repeating_config():
    return BurstConfig.from_options(particle_count=5, repetitions=2, repetition_interval_sec=0.5)
