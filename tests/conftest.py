"""Pytest configuration and shared fixtures for commgraph tests."""

import pytest

from commgraph.rng import SeededRandom


@pytest.fixture
def seeded_rng():
    """Deterministic random source for reproducible builds."""
    return SeededRandom(1234)


@pytest.fixture
def sample_config():
    """Sample configuration dictionary for testing."""
    return {
        "layered": {"inside": 3, "outside": 1, "layers": 2},
        "cube": {"width": 3, "height": 3, "depth": 3, "timesteps": 2},
        "random": {"edges": 20, "seed": 7},
        "output": {"directory": "fixtures", "format": "lines"},
    }
