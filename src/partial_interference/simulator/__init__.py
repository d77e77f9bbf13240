"""Simulation module for partial interference randomization regimes.

Generates grouped datasets under a finite-population or a Bernoulli
randomization regime with a linear within-group interference outcome model.
"""

from .generator import SimulationGenerator
from .core.data_structures import SimulationData, GroupStructure, ModelParameters

__all__ = ['SimulationGenerator', 'SimulationData', 'GroupStructure', 'ModelParameters']
