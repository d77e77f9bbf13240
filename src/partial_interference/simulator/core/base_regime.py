"""Abstract base class for the randomization regimes."""

import numpy as np
import pandas as pd

from abc import ABC, abstractmethod
from typing import Dict, Tuple

from .data_structures import SimulationData, GroupStructure, ModelParameters

from ..components.strategies import StrategyAssigner
from ..components.treatment import TreatmentAssigner
from ..components.interference import InterferenceCalculator
from ..components.outcomes import OutcomeGenerator


class BaseRegime(ABC):
    """Abstract base class for randomization regimes.

    A regime fixes how treatments are drawn within groups and how potential
    outcomes are derived from them. Every replicate runs the same pipeline:
    unit indices, group strategies, treatments, interference exposure,
    potential outcomes, observed outcome.
    """

    def __init__(self, config: Dict):
        """Initialize regime with configuration."""
        self.config = config
        self.structure = GroupStructure(**config['structure'])
        self.params = ModelParameters.from_config(config)

        self.strategy_assigner = StrategyAssigner(self.structure)
        self.treatment_assigner = TreatmentAssigner(config['strategies'], mode=self.get_name())
        self.interference_calc = InterferenceCalculator()
        self.outcome_gen = OutcomeGenerator(self.params)

    @abstractmethod
    def get_name(self) -> str:
        pass

    @abstractmethod
    def _generate_potential_outcomes(
        self,
        df: pd.DataFrame,
        gamma: float,
        rng: np.random.Generator
    ) -> Tuple[np.ndarray, np.ndarray]:
        pass

    @abstractmethod
    def compute_true_effects(self, gamma: float) -> Dict[str, float]:
        pass

    def generate(self, gamma: float, seed=None) -> SimulationData:
        """Main generation pipeline.

        Args:
            gamma: Interference strength
            seed: Seed (int or sequence of ints) for this replicate's generator

        Returns:
            Generated simulation data with metadata
        """
        rng = np.random.default_rng(seed)

        df = self._generate_indices()
        df = self.strategy_assigner.assign(df, rng)
        df = self.treatment_assigner.assign(df, self.structure.n_per_group, rng)
        df = self.interference_calc.compute_interference_features(df)

        y_untreated, y_treated = self._generate_potential_outcomes(df, gamma, rng)
        df = self._assemble(df, y_untreated, y_treated)

        self._validate_data(df)

        return SimulationData(
            data=df,
            metadata=self._get_metadata(),
            regime=self.get_name(),
            gamma=gamma,
            seed=seed
        )

    def _generate_indices(self) -> pd.DataFrame:
        n = self.structure.n_per_group
        n_groups = self.structure.n_groups
        return pd.DataFrame({
            'group_id': np.repeat(np.arange(n_groups), n),
            'unit_id': np.arange(n_groups * n)
        })

    def _assemble(
        self,
        df: pd.DataFrame,
        y_untreated: np.ndarray,
        y_treated: np.ndarray
    ) -> pd.DataFrame:
        """Attach potential outcomes and derive the observed outcome."""
        if len(y_untreated) != len(df) or len(y_treated) != len(df):
            raise ValueError(
                f"Potential outcome lengths ({len(y_untreated)}, {len(y_treated)}) "
                f"do not match {len(df)} units"
            )

        a = df['treatment'].values
        df['y_untreated'] = y_untreated
        df['y_treated'] = y_treated
        df['outcome'] = a * y_treated + (1 - a) * y_untreated
        return df

    def _validate_data(self, df: pd.DataFrame):
        if df.isnull().any().any():
            raise ValueError("Generated data contains NaN values")
        if not df['treatment'].isin([0, 1]).all():
            raise ValueError("Treatments must be binary")
        sizes = df.groupby('group_id').size()
        if (sizes != self.structure.n_per_group).any():
            raise ValueError(f"Group sizes differ from n_per_group: {sizes.to_dict()}")

    def _get_metadata(self) -> Dict:
        return {
            'regime': self.get_name(),
            'structure': {
                'n_groups': self.structure.n_groups,
                'n_per_group': self.structure.n_per_group,
                'total_units': self.structure.total_units,
                'strategy_counts': self.structure.strategy_counts()
            },
            'params': {
                'beta0': self.params.beta0,
                'beta1': self.params.beta1,
                'beta2': self.params.beta2,
                'sigma2': self.params.sigma2
            }
        }
