"""Shared fixtures for the partial interference study tests."""

import copy

import numpy as np
import pandas as pd
import pytest

from partial_interference.utils import load_config
from partial_interference.simulator import SimulationGenerator


@pytest.fixture(scope="session")
def base_config():
    """Bundled study configuration (n=100, 3 psi + 2 phi groups)."""
    return load_config()


@pytest.fixture
def config(base_config):
    """Mutable copy of the bundled configuration."""
    return copy.deepcopy(base_config)


@pytest.fixture
def generator(config):
    return SimulationGenerator(config=config)


@pytest.fixture
def toy_data():
    """
    Two groups of four units with hand-computable estimates.

    group 0 (phi): A = [1, 1, 0, 0], Y = [3, 5, 1, 1]
    group 1 (psi): A = [1, 0, 0, 0], Y = [2, 0, 0, 0]
    """
    return pd.DataFrame({
        'group_id': [0, 0, 0, 0, 1, 1, 1, 1],
        'unit_id': np.arange(8),
        'strategy': ['phi'] * 4 + ['psi'] * 4,
        'treatment': [1, 1, 0, 0, 1, 0, 0, 0],
        'outcome': [3.0, 5.0, 1.0, 1.0, 2.0, 0.0, 0.0, 0.0],
    })
