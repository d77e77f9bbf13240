"""Components for simulation generation."""

from .strategies import StrategyAssigner
from .treatment import TreatmentAssigner
from .interference import InterferenceCalculator
from .outcomes import OutcomeGenerator

__all__ = [
    'StrategyAssigner',
    'TreatmentAssigner',
    'InterferenceCalculator',
    'OutcomeGenerator'
]
