"""Treatment assignment under finite-population and Bernoulli randomization."""

import numpy as np
import pandas as pd

from typing import Dict


class TreatmentAssigner:
    """Assigns unit treatments within each group according to its strategy.

    Two modes are supported:

    - ``finite``: each group receives exactly ``n_treated`` treated units of
      its strategy, placed by a uniform random permutation (sampling without
      replacement).
    - ``bernoulli``: each unit is treated independently with the strategy's
      ``probability``.
    """

    MODES = ('finite', 'bernoulli')

    def __init__(self, strategies: Dict[str, Dict], mode: str):
        """Initialize treatment assigner.

        Args:
            strategies: Strategy configuration from YAML (label -> parameters)
            mode: Either 'finite' or 'bernoulli'
        """
        if mode not in self.MODES:
            raise ValueError(f"Unknown treatment mode: {mode}. Choose from {list(self.MODES)}")

        self.strategies = strategies
        self.mode = mode

    def assign(
        self,
        df: pd.DataFrame,
        n_per_group: int,
        rng: np.random.Generator
    ) -> pd.DataFrame:
        """Assign treatments group by group.

        Args:
            df: DataFrame with 'group_id' and 'strategy', sorted by group
            n_per_group: Number of units in every group
            rng: Random generator of the current replicate

        Returns:
            pd.DataFrame: DataFrame with added 'treatment' and 'propensity_score' columns
        """
        group_strategy = df.groupby('group_id', sort=True)['strategy'].first()

        treatments = []
        propensities = []
        for group_id, label in group_strategy.items():
            vector, propensity = self._draw_group(label, n_per_group, rng)
            treatments.append(vector)
            propensities.append(np.full(n_per_group, propensity))

        treatments = np.concatenate(treatments)
        if len(treatments) != len(df):
            raise ValueError(
                f"Treatment vector length {len(treatments)} does not match "
                f"{len(df)} units"
            )

        df['treatment'] = treatments
        df['propensity_score'] = np.concatenate(propensities)

        return df

    def _draw_group(
        self,
        label: str,
        n_per_group: int,
        rng: np.random.Generator
    ):
        """Draw one group's treatment vector and its design probability."""
        spec = self.strategies[label]

        if self.mode == 'finite':
            n_treated = spec['n_treated']
            base = np.concatenate([
                np.ones(n_treated, dtype=int),
                np.zeros(n_per_group - n_treated, dtype=int)
            ])
            return rng.permutation(base), n_treated / n_per_group

        p = spec['probability']
        return rng.binomial(1, p, size=n_per_group).astype(int), p
