"""Data structures for simulation outputs."""

import pandas as pd

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass
class GroupStructure:
    """Container for the fixed group layout of the study."""
    n_per_group: int
    group_strategies: List[str]

    @property
    def n_groups(self) -> int:
        return len(self.group_strategies)

    @property
    def total_units(self) -> int:
        """Total number of units across all groups."""
        return self.n_groups * self.n_per_group

    def strategy_counts(self) -> Dict[str, int]:
        """Number of groups carrying each strategy label."""
        counts: Dict[str, int] = {}
        for label in self.group_strategies:
            counts[label] = counts.get(label, 0) + 1
        return counts


@dataclass
class ModelParameters:
    """Fixed parameters of the linear interference outcome model."""
    beta0: float
    beta1: float
    beta2: float
    sigma2: float

    @classmethod
    def from_config(cls, config: Dict) -> 'ModelParameters':
        coefs = config['outcome_model']['coefficients']
        return cls(
            beta0=float(coefs['intercept']),
            beta1=float(coefs['treatment']),
            beta2=float(coefs['interference']),
            sigma2=float(config['outcome_model']['noise']['variance'])
        )

    @property
    def noise_std(self) -> float:
        return self.sigma2 ** 0.5


@dataclass
class SimulationData:
    """Container for one simulated dataset and its metadata."""
    data: pd.DataFrame
    metadata: Dict
    regime: str
    gamma: float
    seed: Optional[object] = None

    def __post_init__(self):
        """Validate data structure."""
        required_columns = [
            'group_id', 'unit_id', 'strategy', 'treatment',
            'y_untreated', 'y_treated', 'outcome'
        ]

        missing = set(required_columns) - set(self.data.columns)
        if missing:
            raise ValueError(f"Data missing required columns: {missing}")

    def summary(self) -> Dict:
        """Generate summary statistics of the dataset."""
        return {
            'n_observations': len(self.data),
            'n_groups': self.data['group_id'].nunique(),
            'treated_by_group': self.data.groupby('group_id')['treatment'].sum().to_dict(),
            'strategy_by_group': self.data.groupby('group_id')['strategy'].first().to_dict(),
            'treatment_rate': self.data['treatment'].mean(),
            'outcome_mean': self.data['outcome'].mean(),
            'outcome_std': self.data['outcome'].std(),
        }

    def save(self, filepath: str):
        """Save data to CSV file."""
        self.data.to_csv(filepath, index=False)
        print(f"Saved {len(self.data)} observations to {filepath}")
