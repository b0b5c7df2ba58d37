"""
Shared pytest fixtures for wheel tests.

Spins use a fixed random source so every outcome is reproducible.
Persistent rosters live under pytest's tmp_path.
"""

import pytest

from roster import RosterStore
from session import WheelSession
from wheel import Entrant


class FixedRandomSource:
    """Returns the queued samples in order, repeating the last one."""

    def __init__(self, *samples):
        self.samples = list(samples) or [0.0]
        self.calls = 0

    def sample(self):
        value = self.samples[min(self.calls, len(self.samples) - 1)]
        self.calls += 1
        return value


@pytest.fixture
def fixed_random():
    return FixedRandomSource(0.0)


@pytest.fixture
def roster():
    """In-memory roster with no file behind it."""
    return RosterStore()


@pytest.fixture
def roster_path(tmp_path):
    return str(tmp_path / "coffee-wheel-names.json")


@pytest.fixture
def two_entrants():
    return [Entrant("a", "A", 0), Entrant("b", "B", 0)]


@pytest.fixture
def session(roster, fixed_random):
    roster.add("A")
    roster.add("B")
    return WheelSession(roster, fixed_random)
