"""Monte Carlo tests of the experiment driver against analytical truth."""

import numpy as np
import pandas as pd
import pytest

from partial_interference.estimators import EstimatorBank
from partial_interference.evaluation import summarize_results, truth_table
from partial_interference.exceptions import DecompositionError
from partial_interference.experiment import ExperimentRunner
from partial_interference.scripts.run_study import main


GRID = [0.0, 5.0, 10.0]


@pytest.fixture(scope="module")
def finite_results(base_config):
    from partial_interference.simulator import SimulationGenerator
    runner = ExperimentRunner(SimulationGenerator(config=base_config), seed=123)
    return runner.run('finite', gammas=GRID, n_reps=100)


@pytest.fixture(scope="module")
def bernoulli_results(base_config):
    from partial_interference.simulator import SimulationGenerator
    runner = ExperimentRunner(SimulationGenerator(config=base_config), seed=321)
    return runner.run('bernoulli', gammas=GRID, n_reps=100)


def _means(results):
    return results.drop(columns=['regime', 'replicate']).groupby('gamma').mean()


class TestResultsTable:

    def test_one_row_per_gamma_and_replicate_in_grid_order(self, finite_results):
        assert len(finite_results) == len(GRID) * 100
        assert list(finite_results['gamma'].unique()) == GRID
        assert list(finite_results['replicate'].iloc[:3]) == [0, 1, 2]
        for column in ('pe', 'ipw', 'aipw', 'direct_phi', 'direct_psi',
                       'indirect', 'total', 'overall', 'group_direct_0'):
            assert column in finite_results.columns

    def test_decomposition_per_replicate(self, finite_results, bernoulli_results):
        for results in (finite_results, bernoulli_results):
            gap = results['indirect'] + results['direct_phi'] - results['total']
            assert gap.abs().max() < 0.01

    def test_reproducible(self, generator):
        first = ExperimentRunner(generator, seed=9).run('finite', gammas=[2.0], n_reps=3)
        second = ExperimentRunner(generator, seed=9).run('finite', gammas=[2.0], n_reps=3)
        pd.testing.assert_frame_equal(first, second)

    def test_run_all_concatenates_regimes(self, generator):
        results = ExperimentRunner(generator).run_all(gammas=[1.0], n_reps=2)
        assert list(results['regime']) == ['finite', 'finite', 'bernoulli', 'bernoulli']

    def test_decomposition_violation_aborts_run(self, generator):
        bank = EstimatorBank('phi', 'psi', tolerance=-1.0)
        with pytest.raises(DecompositionError):
            ExperimentRunner(generator, bank=bank).run('finite', gammas=[1.0], n_reps=5)

    def test_invalid_grid(self, generator):
        with pytest.raises(ValueError):
            ExperimentRunner(generator).run('finite', gammas=[], n_reps=1)
        with pytest.raises(ValueError):
            ExperimentRunner(generator).run('finite', gammas=[1.0], n_reps=0)


class TestFiniteRegimeProperties:

    @pytest.mark.parametrize("strategy", ["phi", "psi"])
    def test_direct_effect_converges(self, finite_results, strategy):
        means = _means(finite_results)
        for gamma in GRID:
            assert means.loc[gamma, f'direct_{strategy}'] == pytest.approx(-5.0 + 0.1 * gamma, abs=0.05)

    def test_group_direct_effects_converge(self, finite_results):
        means = _means(finite_results)
        group_cols = [c for c in means.columns if c.startswith('group_direct_')]
        assert len(group_cols) == 5
        for gamma in GRID:
            np.testing.assert_allclose(means.loc[gamma, group_cols], -5.0 + 0.1 * gamma, atol=0.05)

    def test_indirect_effect_converges(self, finite_results):
        means = _means(finite_results)
        for gamma in GRID:
            assert means.loc[gamma, 'indirect'] == pytest.approx(gamma * -0.1 * (50 - 30), abs=0.05)

    def test_reference_scenario(self, finite_results):
        means = _means(finite_results)
        assert abs(means.loc[10.0, 'direct_phi'] - -4.0) < 0.5
        assert abs(means.loc[10.0, 'indirect'] - -20.0) < 2.0

    def test_zero_gamma_has_no_interference(self, finite_results):
        means = _means(finite_results)
        assert means.loc[0.0, 'indirect'] == pytest.approx(0.0, abs=0.05)
        for estimator in ('pe', 'ipw', 'aipw'):
            assert means.loc[0.0, estimator] == pytest.approx(-5.0, abs=0.05)

    def test_naive_bias_grows_with_gamma(self, finite_results):
        means = _means(finite_results)
        true_direct = -5.0 + 0.1 * means.index.values
        for estimator in ('pe', 'ipw', 'aipw'):
            gap = np.abs(means[estimator].values - true_direct)
            assert np.all(np.diff(gap) >= 0)


class TestBernoulliRegimeProperties:

    def test_direct_effect_is_beta1(self, bernoulli_results):
        means = _means(bernoulli_results)
        for gamma in GRID:
            assert means.loc[gamma, 'direct_phi'] == pytest.approx(-5.0, abs=0.05)
            assert means.loc[gamma, 'direct_psi'] == pytest.approx(-5.0, abs=0.05)

    def test_indirect_effect_converges(self, bernoulli_results):
        means = _means(bernoulli_results)
        for gamma in GRID:
            expected = gamma * 100 * -0.1 * (0.5 - 0.3)
            assert means.loc[gamma, 'indirect'] == pytest.approx(expected, abs=0.05)

    def test_zero_gamma_has_no_interference(self, bernoulli_results):
        means = _means(bernoulli_results)
        assert means.loc[0.0, 'indirect'] == pytest.approx(0.0, abs=0.05)
        assert means.loc[0.0, 'pe'] == pytest.approx(-5.0, abs=0.05)

    def test_naive_bias_grows_with_gamma(self, bernoulli_results):
        means = _means(bernoulli_results)
        gap = np.abs(means['pe'].values - -5.0)
        assert np.all(np.diff(gap) >= 0)


class TestSummary:

    def test_summary_against_truth(self, base_config, finite_results):
        truth = truth_table(base_config, 'finite', GRID)
        summary = summarize_results(finite_results, truth)

        row = summary[(summary['gamma'] == 10.0) & (summary['estimator'] == 'indirect')].iloc[0]
        assert row['truth'] == pytest.approx(-20.0)
        assert abs(row['bias']) < 0.05
        assert row['n_reps'] == 100

        naive = summary[(summary['gamma'] == 10.0) & (summary['estimator'] == 'pe')].iloc[0]
        assert naive['target'] == 'direct'
        assert naive['bias'] == pytest.approx(
            truth.set_index('gamma').loc[10.0, 'naive'] - -4.0, abs=0.1
        )

    def test_missing_truth(self, base_config, finite_results):
        truth = truth_table(base_config, 'finite', [0.0])
        with pytest.raises(KeyError):
            summarize_results(finite_results, truth)


class TestCommandLine:

    def test_writes_tables(self, tmp_path, capsys):
        main(['--output-dir', str(tmp_path), '--n-reps', '2', '--regime', 'finite'])

        results = pd.read_csv(tmp_path / 'results.csv')
        assert len(results) == 5 * 2
        assert (tmp_path / 'truth.csv').exists()
        assert (tmp_path / 'summary.csv').exists()
        assert "STUDY COMPLETE" in capsys.readouterr().out
