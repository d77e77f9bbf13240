"""Closed-form population estimands under the linear interference model.

All functions are stateless functions of the interference strength ``gamma``
and the fixed parameters, kept apart from the simulation path so that the
empirical output can be checked against them directly.

Model: ``Y(a) = beta0 + a * beta1 + gamma * beta2 * S + eps``, S the number of
treated other units in the group.

Finite regime: a group under strategy s has exactly ``K_s`` treated units.
Bernoulli regime: units are treated independently with probability ``p_s``
and outcomes are expectations over a Binomial(n, p_s) treated count.
"""

from typing import Dict, Iterable, Sequence

import numpy as np
import pandas as pd


# ---------------------------------------------------------------------------
# Finite regime
# ---------------------------------------------------------------------------

def finite_direct_effect(gamma: float, beta1: float, beta2: float) -> float:
    """``beta1 - gamma * beta2``: a treated unit has one fewer treated neighbour."""
    return beta1 - gamma * beta2


def finite_indirect_effect(
    gamma: float,
    beta2: float,
    k_focal: int,
    k_reference: int
) -> float:
    return gamma * beta2 * (k_focal - k_reference)


def finite_total_effect(
    gamma: float,
    beta1: float,
    beta2: float,
    k_focal: int,
    k_reference: int
) -> float:
    return (finite_direct_effect(gamma, beta1, beta2)
            + finite_indirect_effect(gamma, beta2, k_focal, k_reference))


def finite_overall_effect(
    gamma: float,
    beta1: float,
    beta2: float,
    n: int,
    k_focal: int,
    k_reference: int
) -> float:
    """Difference in group mean outcome between the two strategies.

    A group with K treated units has mean outcome
    ``beta0 + K/n * beta1 + gamma * beta2 * K * (n - 1) / n``.
    """
    return (k_focal - k_reference) / n * (beta1 + gamma * beta2 * (n - 1))


def finite_naive_contrast(
    gamma: float,
    beta1: float,
    beta2: float,
    n: int,
    group_quotas: Sequence[int]
) -> float:
    """Pooled treated-minus-untreated mean, the estimand of PE / IPW / AIPW.

    Pooling ignores group structure, so treated units from heavily treated
    groups carry their neighbours' spillover into the contrast.
    """
    k = np.asarray(group_quotas, dtype=float)
    treated_exposure = np.sum(k * (k - 1)) / np.sum(k)
    untreated_exposure = np.sum(k * (n - k)) / np.sum(n - k)
    return beta1 + gamma * beta2 * (treated_exposure - untreated_exposure)


# ---------------------------------------------------------------------------
# Bernoulli regime
# ---------------------------------------------------------------------------

def bernoulli_direct_effect(gamma: float, beta1: float) -> float:
    """``beta1`` for every gamma: both potential outcomes share the same exposure."""
    return beta1


def bernoulli_indirect_effect(
    gamma: float,
    beta2: float,
    n: int,
    p_focal: float,
    p_reference: float
) -> float:
    return gamma * n * beta2 * (p_focal - p_reference)


def bernoulli_total_effect(
    gamma: float,
    beta1: float,
    beta2: float,
    n: int,
    p_focal: float,
    p_reference: float
) -> float:
    return (bernoulli_direct_effect(gamma, beta1)
            + bernoulli_indirect_effect(gamma, beta2, n, p_focal, p_reference))


def bernoulli_overall_effect(
    gamma: float,
    beta1: float,
    beta2: float,
    n: int,
    p_focal: float,
    p_reference: float
) -> float:
    return (p_focal - p_reference) * (beta1 + gamma * n * beta2)


def bernoulli_naive_contrast(
    gamma: float,
    beta1: float,
    beta2: float,
    n: int,
    group_probabilities: Sequence[float]
) -> float:
    """Large-sample pooled treated-minus-untreated mean."""
    p = np.asarray(group_probabilities, dtype=float)
    treated_exposure = np.sum(p * p) / np.sum(p)
    untreated_exposure = np.sum(p * (1 - p)) / np.sum(1 - p)
    return beta1 + gamma * n * beta2 * (treated_exposure - untreated_exposure)


# ---------------------------------------------------------------------------
# Config-driven views
# ---------------------------------------------------------------------------

def regime_truth(config: Dict, regime: str, gamma: float) -> Dict[str, float]:
    """All true estimands of one regime at one gamma.

    Keys match the estimator columns of the results table: ``direct`` (shared
    by every strategy), ``direct_<label>`` for the focal and reference
    strategies, ``indirect``, ``total``, ``overall`` and ``naive``.
    """
    group_strategies = config['structure']['group_strategies']
    n = config['structure']['n_per_group']
    strategies = config['strategies']
    focal = config['contrast']['focal']
    reference = config['contrast']['reference']
    coefs = config['outcome_model']['coefficients']
    b1, b2 = float(coefs['treatment']), float(coefs['interference'])

    if regime == 'finite':
        k_f = strategies[focal]['n_treated']
        k_r = strategies[reference]['n_treated']
        quotas = [strategies[s]['n_treated'] for s in group_strategies]
        direct = finite_direct_effect(gamma, b1, b2)
        truth = {
            'indirect': finite_indirect_effect(gamma, b2, k_f, k_r),
            'total': finite_total_effect(gamma, b1, b2, k_f, k_r),
            'overall': finite_overall_effect(gamma, b1, b2, n, k_f, k_r),
            'naive': finite_naive_contrast(gamma, b1, b2, n, quotas),
        }
    elif regime == 'bernoulli':
        p_f = strategies[focal]['probability']
        p_r = strategies[reference]['probability']
        probs = [strategies[s]['probability'] for s in group_strategies]
        direct = bernoulli_direct_effect(gamma, b1)
        truth = {
            'indirect': bernoulli_indirect_effect(gamma, b2, n, p_f, p_r),
            'total': bernoulli_total_effect(gamma, b1, b2, n, p_f, p_r),
            'overall': bernoulli_overall_effect(gamma, b1, b2, n, p_f, p_r),
            'naive': bernoulli_naive_contrast(gamma, b1, b2, n, probs),
        }
    else:
        raise ValueError(f"Unknown regime: {regime}")

    truth['direct'] = direct
    truth[f'direct_{focal}'] = direct
    truth[f'direct_{reference}'] = direct
    return truth


def truth_table(config: Dict, regime: str, gammas: Iterable[float]) -> pd.DataFrame:
    """One row of true estimands per gamma, in grid order."""
    rows = []
    for gamma in gammas:
        row = {'regime': regime, 'gamma': float(gamma)}
        row.update(regime_truth(config, regime, float(gamma)))
        rows.append(row)
    return pd.DataFrame(rows)
