"""Estimators that ignore interference.

Plug-in outcome regression (PE), inverse probability weighting (IPW) and
augmented IPW (AIPW), all computed on the pooled dataset as if units did not
interact. Under interference their common estimand is the pooled
treated-minus-untreated contrast, not the direct effect.
"""

from typing import Optional, Tuple

import numpy as np
import pandas as pd

from .base_learner import BaseLearner
from .outcome_model import LinearOutcomeLearner


def _pooled_arrays(df: pd.DataFrame) -> Tuple[np.ndarray, np.ndarray, float]:
    a = df['treatment'].values.astype(float)
    y = df['outcome'].values.astype(float)
    p_hat = a.mean()
    if p_hat <= 0.0 or p_hat >= 1.0:
        raise ValueError(
            f"Pooled treatment rate is {p_hat:.3f}; need both treated and untreated units"
        )
    return a, y, p_hat


def fit_outcome_model(
    df: pd.DataFrame,
    learner: Optional[BaseLearner] = None
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Fit ``outcome ~ treatment`` and predict under each arm.

    Returns
    -------
    m_hat, m1_hat, m0_hat : np.ndarray
        Fitted values, predictions with treatment set to 1 and to 0.
    """
    learner = learner or LinearOutcomeLearner()
    return learner.predict_arms(df['treatment'].values, df['outcome'].values)


def plug_in_estimate(
    df: pd.DataFrame,
    fitted: Optional[Tuple[np.ndarray, np.ndarray, np.ndarray]] = None
) -> float:
    """``mean(m1_hat) - mean(m0_hat)`` from the pooled outcome regression."""
    _, m1_hat, m0_hat = fitted if fitted is not None else fit_outcome_model(df)
    return float(np.mean(m1_hat) - np.mean(m0_hat))


def ipw_estimate(df: pd.DataFrame) -> float:
    """``mean(Y A / p) - mean(Y (1 - A) / (1 - p))`` with p the pooled treatment rate."""
    a, y, p_hat = _pooled_arrays(df)
    return float(np.mean(y * a / p_hat) - np.mean(y * (1 - a) / (1 - p_hat)))


def aipw_estimate(
    df: pd.DataFrame,
    fitted: Optional[Tuple[np.ndarray, np.ndarray, np.ndarray]] = None
) -> float:
    """Doubly robust combination of the outcome regression and IPW."""
    a, y, p_hat = _pooled_arrays(df)
    m_hat, m1_hat, m0_hat = fitted if fitted is not None else fit_outcome_model(df)

    weights = a / p_hat - (1 - a) / (1 - p_hat)
    return float(np.mean(weights * (y - m_hat) + m1_hat - m0_hat))
