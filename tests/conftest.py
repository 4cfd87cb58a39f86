"""
Pytest configuration and fixtures for dfa_discovery tests.

Provides seeded and scripted random sources for mutation and search tests.
"""

import numpy as np
import pytest


class ScriptedRNG:
    """
    Random source that replays a fixed script of draws.

    integers(n) returns the next scripted integer (which must be < n) and
    random() returns the next scripted float.
    """

    def __init__(self, ints=(), floats=()):
        self.ints = list(ints)
        self.floats = list(floats)

    def integers(self, n):
        value = self.ints.pop(0)
        assert 0 <= value < n, f"scripted draw {value} out of range for integers({n})"
        return value

    def random(self):
        return self.floats.pop(0)

    def exhausted(self):
        return not self.ints and not self.floats


@pytest.fixture
def rng():
    """Deterministic numpy Generator seeded with 12345."""
    return np.random.default_rng(12345)


@pytest.fixture
def scripted():
    """Factory for ScriptedRNG instances."""
    return ScriptedRNG
