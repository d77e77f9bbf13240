"""Tests for the closed-form estimands."""

import numpy as np
import pytest

from partial_interference.evaluation import regime_truth, truth_table
from partial_interference.evaluation.truth import (
    bernoulli_indirect_effect,
    bernoulli_naive_contrast,
    finite_direct_effect,
    finite_indirect_effect,
    finite_naive_contrast,
    finite_overall_effect,
)


GRID = [0.0, 2.5, 5.0, 7.5, 10.0]


class TestFiniteTruth:

    def test_reference_scenario(self, config):
        truth = regime_truth(config, 'finite', 10.0)
        assert truth['direct'] == pytest.approx(-4.0)
        assert truth['direct_phi'] == truth['direct_psi'] == truth['direct']
        assert truth['indirect'] == pytest.approx(-20.0)
        assert truth['total'] == pytest.approx(-24.0)

    def test_overall_matches_group_means(self):
        n, b1, b2, gamma = 100, -5.0, -0.1, 10.0

        def group_mean(k):
            return 10.0 + k / n * b1 + gamma * b2 * k * (n - 1) / n

        expected = group_mean(50) - group_mean(30)
        assert finite_overall_effect(gamma, b1, b2, n, 50, 30) == pytest.approx(expected)

    def test_naive_contrast_by_enumeration(self):
        n, b1, b2, gamma = 100, -5.0, -0.1, 10.0
        quotas = [30, 30, 30, 50, 50]
        treated, untreated = [], []
        for k in quotas:
            treated += [b1 + gamma * b2 * (k - 1)] * k
            untreated += [gamma * b2 * k] * (n - k)
        expected = np.mean(treated) - np.mean(untreated)
        assert finite_naive_contrast(gamma, b1, b2, n, quotas) == pytest.approx(expected)

    def test_zero_gamma(self):
        assert finite_direct_effect(0.0, -5.0, -0.1) == -5.0
        assert finite_indirect_effect(0.0, -0.1, 50, 30) == 0.0
        assert finite_naive_contrast(0.0, -5.0, -0.1, 100, [30, 50]) == -5.0


class TestBernoulliTruth:

    def test_reference_scenario(self, config):
        truth = regime_truth(config, 'bernoulli', 10.0)
        assert truth['direct'] == -5.0
        assert truth['indirect'] == pytest.approx(10.0 * 100 * -0.1 * (0.5 - 0.3))
        assert truth['total'] == pytest.approx(truth['direct'] + truth['indirect'])
        assert truth['overall'] == pytest.approx(0.2 * (-5.0 + 10.0 * 100 * -0.1))

    def test_direct_effect_free_of_gamma(self, config):
        assert {regime_truth(config, 'bernoulli', g)['direct'] for g in GRID} == {-5.0}

    def test_equal_probabilities_remove_naive_bias(self):
        assert bernoulli_naive_contrast(10.0, -5.0, -0.1, 100, [0.4, 0.4]) == pytest.approx(-5.0)
        assert bernoulli_indirect_effect(10.0, -0.1, 100, 0.4, 0.4) == 0.0


class TestTruthTable:

    @pytest.mark.parametrize("regime", ["finite", "bernoulli"])
    def test_grid_order_and_decomposition(self, config, regime):
        table = truth_table(config, regime, GRID)
        assert list(table['gamma']) == GRID
        assert (table['regime'] == regime).all()
        np.testing.assert_allclose(table['indirect'] + table['direct_phi'], table['total'])

    @pytest.mark.parametrize("regime", ["finite", "bernoulli"])
    def test_naive_gap_grows_with_gamma(self, config, regime):
        table = truth_table(config, regime, GRID)
        gap = np.abs(table['naive'] - table['direct']).values
        assert gap[0] == pytest.approx(0.0)
        assert np.all(np.diff(gap) > 0)

    def test_unknown_regime(self, config):
        with pytest.raises(ValueError):
            regime_truth(config, 'cluster', 1.0)
