"""Shared fixtures for the duel simulation tests."""

import pytest

from systems.combat_system import Encounter


@pytest.fixture
def encounter():
    return Encounter(seed=42)
