"""Within-group interference exposure."""

import pandas as pd

from ..core.utils import neighbor_sum


class InterferenceCalculator:
    """Computes each unit's exposure to the treatments of its group.

    Interference is partial: only units in the same group interact, and a
    unit's exposure is the number of *other* treated units in its group.
    The group treatment vector is fully drawn before this runs, so exposure
    is a pure function of (own treatment, group vector).
    """

    def compute_interference_features(self, df: pd.DataFrame) -> pd.DataFrame:
        """Compute interference features from the drawn treatments.

        Args:
            df: DataFrame with 'group_id' and 'treatment'

        Returns:
            pd.DataFrame: DataFrame with added 'neighbors_treated' column
        """
        if 'treatment' not in df.columns:
            raise RuntimeError("Treatments not assigned. Run the TreatmentAssigner first.")

        df['neighbors_treated'] = neighbor_sum(df, 'treatment').astype(int)

        return df
