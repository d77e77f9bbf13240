"""Randomization regime implementations."""

from .regime_finite import FiniteRegime
from .regime_bernoulli import BernoulliRegime

__all__ = ['FiniteRegime', 'BernoulliRegime']
