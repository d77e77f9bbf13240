"""Finite-population regime: fixed treated quota per group."""

import numpy as np
import pandas as pd

from typing import Dict, Tuple

from ..core.base_regime import BaseRegime
from ...evaluation.truth import regime_truth


class FiniteRegime(BaseRegime):
    """Finite-population randomization.

    - Strategies permuted across groups
    - Exactly ``n_treated`` treated units per group, placed at random
    - Both potential outcomes share one noise draw
    """

    def get_name(self) -> str:
        return "finite"

    def _generate_potential_outcomes(
        self,
        df: pd.DataFrame,
        gamma: float,
        rng: np.random.Generator
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Outcomes from the realized number of treated neighbours."""
        return self.outcome_gen.realized(df['neighbors_treated'].values, gamma, rng)

    def compute_true_effects(self, gamma: float) -> Dict[str, float]:
        return regime_truth(self.config, self.get_name(), gamma)
