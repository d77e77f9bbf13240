"""Estimator bank: every estimator of the study on one dataset."""

from typing import Callable, Dict, Optional, Union

import pandas as pd

from .base_learner import BaseLearner
from .outcome_model import LinearOutcomeLearner
from .naive import fit_outcome_model, plug_in_estimate, ipw_estimate, aipw_estimate
from .group_effects import (
    group_arm_means,
    population_effects,
    check_decomposition,
    group_direct_effects
)
from ..simulator.core.data_structures import SimulationData


NAIVE_ESTIMATORS = ('pe', 'ipw', 'aipw')
POPULATION_ESTIMATORS = ('indirect', 'total', 'overall')


class EstimatorBank:
    """
    Computes naive and interference-aware estimates from one dataset.

    Parameters
    ----------
    focal : str
        Strategy whose direct effect enters the decomposition (phi).
    reference : str
        Strategy the focal one is contrasted against (psi).
    tolerance : float, default=0.01
        Allowed gap in ``indirect + direct(focal) == total``.
    learner_factory : callable, optional
        Returns a fresh BaseLearner for the outcome regression.
    """

    def __init__(
        self,
        focal: str,
        reference: str,
        tolerance: float = 0.01,
        learner_factory: Optional[Callable[[], BaseLearner]] = None
    ):
        if focal == reference:
            raise ValueError("focal and reference strategies must differ")
        self.focal = focal
        self.reference = reference
        self.tolerance = tolerance
        self.learner_factory = learner_factory or LinearOutcomeLearner

    @classmethod
    def from_config(cls, config: Dict) -> 'EstimatorBank':
        return cls(
            focal=config['contrast']['focal'],
            reference=config['contrast']['reference'],
            tolerance=config.get('experiment', {}).get('tolerance', 0.01)
        )

    def estimate(self, data: Union[SimulationData, pd.DataFrame]) -> Dict[str, float]:
        """
        Compute all estimates.

        Parameters
        ----------
        data : SimulationData or pd.DataFrame
            Assembled dataset with 'group_id', 'strategy', 'treatment' and
            'outcome'.

        Returns
        -------
        Dict[str, float]
            'pe', 'ipw', 'aipw', 'direct_<label>' per strategy, 'indirect',
            'total', 'overall' and 'group_direct_<id>' per group.

        Raises
        ------
        DecompositionError
            If the population effects do not decompose.
        """
        df = data.data if isinstance(data, SimulationData) else data

        fitted = fit_outcome_model(df, self.learner_factory())
        estimates = {
            'pe': plug_in_estimate(df, fitted),
            'ipw': ipw_estimate(df),
            'aipw': aipw_estimate(df, fitted),
        }

        groups = group_arm_means(df)
        effects = population_effects(groups, self.focal, self.reference)
        check_decomposition(effects, self.focal, self.tolerance)

        estimates.update(effects)
        estimates.update(group_direct_effects(groups, groups.index))
        return estimates
