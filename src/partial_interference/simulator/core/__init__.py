"""Core infrastructure for simulation generation."""

from .base_regime import BaseRegime
from .data_structures import SimulationData, GroupStructure, ModelParameters

__all__ = ['BaseRegime', 'SimulationData', 'GroupStructure', 'ModelParameters']
