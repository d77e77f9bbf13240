"""Metrics comparing Monte Carlo estimates with analytical truth."""

from typing import Dict, List, Optional
import numpy as np
import pandas as pd


ID_COLUMNS = ('regime', 'gamma', 'replicate')


class MetricsCalculator:
    """
    Calculate evaluation metrics for a sample of estimates of one estimand.

    Metrics include:
    - Mean: Monte Carlo mean of the estimates
    - Bias: Mean estimation error
    - SD: Monte Carlo standard deviation
    - RMSE: Root Mean Squared Error
    - MAE: Mean Absolute Error
    """

    @staticmethod
    def bias(truth: float, estimates: np.ndarray) -> float:
        return float(np.mean(estimates - truth))

    @staticmethod
    def sd(estimates: np.ndarray) -> float:
        """Sample standard deviation; 0 for a single replicate."""
        if len(estimates) < 2:
            return 0.0
        return float(np.std(estimates, ddof=1))

    @staticmethod
    def rmse(truth: float, estimates: np.ndarray) -> float:
        return float(np.sqrt(np.mean((estimates - truth) ** 2)))

    @staticmethod
    def mae(truth: float, estimates: np.ndarray) -> float:
        return float(np.mean(np.abs(estimates - truth)))

    @staticmethod
    def compute_all_metrics(truth: float, estimates: np.ndarray) -> Dict[str, float]:
        """
        Compute all metrics at once.

        Parameters
        ----------
        truth : float
            True value of the estimand.
        estimates : np.ndarray
            Estimates across replicates.

        Returns
        -------
        Dict[str, float]
            Dictionary containing all metrics.
        """
        estimates = np.asarray(estimates, dtype=float)
        return {
            'mean': float(np.mean(estimates)),
            'bias': MetricsCalculator.bias(truth, estimates),
            'sd': MetricsCalculator.sd(estimates),
            'rmse': MetricsCalculator.rmse(truth, estimates),
            'mae': MetricsCalculator.mae(truth, estimates),
        }


def target_for(estimator: str) -> str:
    """Truth column an estimator is judged against.

    The naive estimators and the group-level direct effects target the
    direct effect; every other estimator targets the column of its own name.
    """
    if estimator in ('pe', 'ipw', 'aipw') or estimator.startswith('group_direct_'):
        return 'direct'
    return estimator


def summarize_results(
    results: pd.DataFrame,
    truth: pd.DataFrame,
    estimators: Optional[List[str]] = None
) -> pd.DataFrame:
    """
    Summarise estimator distributions per (regime, gamma) against truth.

    Parameters
    ----------
    results : pd.DataFrame
        Results table from ExperimentRunner.
    truth : pd.DataFrame
        Truth table(s) with 'regime', 'gamma' and one column per estimand.
    estimators : List[str], optional
        Estimator columns to summarise. If None, all estimator columns.

    Returns
    -------
    pd.DataFrame
        One row per (regime, gamma, estimator) with 'target', 'truth',
        'n_reps' and the metrics of ``MetricsCalculator``.
    """
    if estimators is None:
        estimators = [c for c in results.columns if c not in ID_COLUMNS]

    truth_lookup = truth.set_index(['regime', 'gamma'])
    calculator = MetricsCalculator()

    rows = []
    for (regime, gamma), block in results.groupby(['regime', 'gamma'], sort=False):
        if (regime, gamma) not in truth_lookup.index:
            raise KeyError(f"No truth for regime={regime}, gamma={gamma}")
        truth_row = truth_lookup.loc[(regime, gamma)]

        for estimator in estimators:
            target = target_for(estimator)
            if target not in truth_row.index:
                continue
            true_value = float(truth_row[target])
            row = {
                'regime': regime,
                'gamma': gamma,
                'estimator': estimator,
                'target': target,
                'truth': true_value,
                'n_reps': len(block),
            }
            row.update(calculator.compute_all_metrics(true_value, block[estimator].values))
            rows.append(row)

    return pd.DataFrame(rows)


def print_summary(summary: pd.DataFrame, estimators: Optional[List[str]] = None) -> None:
    """
    Print formatted summary of metrics.

    Parameters
    ----------
    summary : pd.DataFrame
        Output of ``summarize_results``.
    estimators : List[str], optional
        Restrict the printout to these estimators.
    """
    if estimators is not None:
        summary = summary[summary['estimator'].isin(estimators)]

    print("\n" + "="*72)
    print("ESTIMATOR PERFORMANCE AGAINST ANALYTICAL TRUTH")
    print("="*72)

    for (regime, gamma), block in summary.groupby(['regime', 'gamma'], sort=False):
        print(f"\n{regime} regime, gamma = {gamma:g}:")
        print("-" * 72)
        print(f"  {'ESTIMATOR':14s} {'TRUTH':>10s} {'MEAN':>10s} {'BIAS':>10s} {'SD':>10s} {'RMSE':>10s}")
        for _, row in block.iterrows():
            print(
                f"  {row['estimator']:14s} {row['truth']:10.4f} {row['mean']:10.4f} "
                f"{row['bias']:10.4f} {row['sd']:10.4f} {row['rmse']:10.4f}"
            )

    print("\n" + "="*72)
