"""Utility functions for simulation."""

import numpy as np
import pandas as pd

from scipy import stats


def neighbor_sum(
    df: pd.DataFrame,
    value_col: str,
    group_col: str = 'group_id'
) -> pd.Series:
    """Sum of a column over the *other* members of each row's group.

    Args:
        df: Data with the group column and value column
        value_col: Column to sum
        group_col: Column identifying groups

    Returns:
        Group sums excluding the row itself, aligned with df
    """
    group_sum = df.groupby(group_col)[value_col].transform('sum')
    return group_sum - df[value_col]


def binomial_expectation(
    values: np.ndarray,
    n_trials: int,
    p: np.ndarray
) -> np.ndarray:
    """Expected value of ``values[K]`` with K ~ Binomial(n_trials, p).

    Args:
        values: Outcome for each count k = 0..n_trials, shape (n_trials + 1,)
        n_trials: Number of Bernoulli trials
        p: Success probability per row, shape (m,)

    Returns:
        np.ndarray: Weighted sum ``sum_k pmf(k; n_trials, p) * values[k]`` per row
    """
    values = np.asarray(values, dtype=float)
    if values.shape != (n_trials + 1,):
        raise ValueError(
            f"Expected {n_trials + 1} values for support 0..{n_trials}, got {values.shape}"
        )

    k = np.arange(n_trials + 1)
    p = np.atleast_1d(np.asarray(p, dtype=float))
    weights = stats.binom.pmf(k[np.newaxis, :], n_trials, p[:, np.newaxis])

    return weights @ values


def hajek_mean(values: np.ndarray, weights: np.ndarray) -> float:
    """Ratio mean ``sum(w * y) / sum(w)``; NaN when the weights sum to zero."""
    total = np.sum(weights)
    if total == 0:
        return np.nan
    return float(np.sum(weights * values) / total)
