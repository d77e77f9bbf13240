"""Monte Carlo experiment driver."""

from .runner import ExperimentRunner

__all__ = ['ExperimentRunner']
