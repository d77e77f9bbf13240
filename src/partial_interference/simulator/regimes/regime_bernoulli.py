"""Bernoulli regime: independent unit-level treatment draws."""

import numpy as np
import pandas as pd

from typing import Dict, Tuple

from ..core.base_regime import BaseRegime
from ...evaluation.truth import regime_truth


class BernoulliRegime(BaseRegime):
    """Bernoulli randomization.

    - Strategies permuted across groups
    - Each unit treated independently with its strategy's probability
    - Potential outcomes are expectations over the Binomial treated count of
      the group; only the untreated outcome receives a noise draw
    """

    def get_name(self) -> str:
        return "bernoulli"

    def _generate_potential_outcomes(
        self,
        df: pd.DataFrame,
        gamma: float,
        rng: np.random.Generator
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Expected outcomes given the group's treatment probability.

        The realized 'neighbors_treated' column is kept in the data but does
        not enter the outcomes here.
        """
        # TODO: untreated outcomes carry noise while treated ones do not;
        # revisit together with the Bernoulli estimands if this is changed.
        return self.outcome_gen.expected(
            probabilities=df['propensity_score'].values,
            n_trials=self.structure.n_per_group,
            gamma=gamma,
            rng=rng
        )

    def compute_true_effects(self, gamma: float) -> Dict[str, float]:
        return regime_truth(self.config, self.get_name(), gamma)
