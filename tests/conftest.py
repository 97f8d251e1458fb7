"""Shared test fixtures for gamerelay."""

import random

import pytest

from gamerelay.core.seed import SeedManager
from gamerelay.session.engine import Engine
from gamerelay.session.registry import SessionRegistry
from gamerelay.variants import build_variants
from helpers import ManualScheduler, RecordingBroadcaster


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def registry():
    return SessionRegistry(build_variants(), SeedManager(42))


@pytest.fixture
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def engine(registry, broadcaster, scheduler):
    return Engine(registry, broadcaster, scheduler=scheduler, reveal_delay_s=1.0)
