"""Causal effect estimators."""

from .base_learner import BaseLearner
from .outcome_model import LinearOutcomeLearner
from .naive import fit_outcome_model, plug_in_estimate, ipw_estimate, aipw_estimate
from .group_effects import group_arm_means, population_effects, check_decomposition
from .bank import EstimatorBank, NAIVE_ESTIMATORS, POPULATION_ESTIMATORS

__all__ = [
    'BaseLearner',
    'LinearOutcomeLearner',
    'fit_outcome_model',
    'plug_in_estimate',
    'ipw_estimate',
    'aipw_estimate',
    'group_arm_means',
    'population_effects',
    'check_decomposition',
    'EstimatorBank',
    'NAIVE_ESTIMATORS',
    'POPULATION_ESTIMATORS',
]
