"""Shared test fixtures."""

import random
import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from creepcore import EngineSettings, LocalWorld, TaskRegistry

ROOM = "W1N1"


@pytest.fixture
def settings() -> EngineSettings:
    """Default settings, isolated from any .env file."""
    return EngineSettings(_env_file=None)


@pytest.fixture
def world() -> LocalWorld:
    """Local world with one empty room."""
    w = LocalWorld()
    w.add_room(ROOM)
    return w


@pytest.fixture
def registry() -> TaskRegistry:
    return TaskRegistry()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(200)
