"""Group-level strategy assignment."""

import numpy as np
import pandas as pd

from typing import Dict

from ..core.data_structures import GroupStructure


class StrategyAssigner:
    """Permutes the configured strategy labels across groups."""

    def __init__(self, structure: GroupStructure):
        """
        Initialize strategy assigner.

        Args:
            structure: Group layout holding one strategy label per group
        """
        self.structure = structure

    def draw(self, rng: np.random.Generator) -> Dict[int, str]:
        """Draw a strategy label per group (sampling without replacement).

        Args:
            rng: Random generator of the current replicate

        Returns:
            dict: Mapping from group id to strategy label
        """
        labels = rng.permutation(np.asarray(self.structure.group_strategies, dtype=object))
        return {group_id: str(label) for group_id, label in enumerate(labels)}

    def assign(self, df: pd.DataFrame, rng: np.random.Generator) -> pd.DataFrame:
        """Add a 'strategy' column shared by all units of a group.

        Args:
            df: DataFrame with 'group_id'
            rng: Random generator of the current replicate

        Returns:
            pd.DataFrame: DataFrame with added 'strategy' column
        """
        group_labels = self.draw(rng)
        df['strategy'] = df['group_id'].map(group_labels)
        return df
