"""Potential outcomes under the linear interference model."""

import numpy as np

from typing import Tuple

from ..core.data_structures import ModelParameters
from ..core.utils import binomial_expectation


class OutcomeGenerator:
    """Generates potential outcomes ``Y(0)`` and ``Y(1)`` for every unit.

    The model is ``Y(a) = beta0 + a * beta1 + gamma * beta2 * S + eps`` with
    S the number of treated *other* units in the group.
    """

    def __init__(self, params: ModelParameters):
        self.params = params

    def realized(
        self,
        neighbors_treated: np.ndarray,
        gamma: float,
        rng: np.random.Generator
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Potential outcomes given the realized neighbour treatments.

        Both potential outcomes of a unit share a single noise draw.

        Args:
            neighbors_treated: Treated count among the other units of each group
            gamma: Interference strength
            rng: Random generator of the current replicate

        Returns:
            (y_untreated, y_treated)
        """
        p = self.params
        noise = rng.normal(0.0, p.noise_std, size=len(neighbors_treated))

        y_untreated = p.beta0 + gamma * p.beta2 * np.asarray(neighbors_treated) + noise
        y_treated = y_untreated + p.beta1

        return y_untreated, y_treated

    def expected(
        self,
        probabilities: np.ndarray,
        n_trials: int,
        gamma: float,
        rng: np.random.Generator
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Potential outcomes averaged over the Binomial treated count.

        Noise is added to the untreated outcome only; the treated outcome is
        its noiseless expectation.

        Args:
            probabilities: Strategy treatment probability of each unit's group
            n_trials: Number of trials of the Binomial treated count
            gamma: Interference strength
            rng: Random generator of the current replicate

        Returns:
            (y_untreated, y_treated)
        """
        p = self.params
        k = np.arange(n_trials + 1)
        levels, index = np.unique(np.asarray(probabilities, dtype=float), return_inverse=True)
        spillover = binomial_expectation(gamma * p.beta2 * k, n_trials, levels)[index]

        noise = rng.normal(0.0, p.noise_std, size=len(probabilities))
        y_untreated = p.beta0 + spillover + noise
        y_treated = p.beta0 + p.beta1 + spillover

        return y_untreated, y_treated
