"""Tests for configuration loading and validation."""

import pytest
import yaml

from partial_interference.exceptions import ConfigurationError
from partial_interference.simulator import SimulationGenerator
from partial_interference.utils import load_config, save_config, validate_config


class TestLoadConfig:

    def test_bundled_config_is_valid(self, config):
        assert validate_config(config) is config
        assert config['structure']['n_per_group'] == 100
        assert sorted(config['structure']['group_strategies']) == ['phi', 'phi', 'psi', 'psi', 'psi']
        assert config['strategies']['phi'] == {'n_treated': 50, 'probability': 0.5}
        assert config['strategies']['psi'] == {'n_treated': 30, 'probability': 0.3}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yml")

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "bad.yml"
        path.write_text("structure: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            load_config(path)

    def test_save_and_reload(self, config, tmp_path):
        path = tmp_path / "nested" / "study.yml"
        save_config(config, path)
        assert load_config(path) == config


class TestValidateConfig:

    def test_non_positive_group_size(self, config):
        config['structure']['n_per_group'] = 0
        with pytest.raises(ConfigurationError, match="n_per_group"):
            validate_config(config)

    def test_no_groups(self, config):
        config['structure']['group_strategies'] = []
        with pytest.raises(ConfigurationError, match="at least one group"):
            validate_config(config)

    def test_probability_out_of_range(self, config):
        config['strategies']['phi']['probability'] = 1.5
        with pytest.raises(ConfigurationError, match="probability"):
            validate_config(config)

    def test_quota_exceeds_group_size(self, config):
        config['strategies']['psi']['n_treated'] = 101
        with pytest.raises(ConfigurationError, match="n_treated"):
            validate_config(config)

    def test_group_strategy_without_parameters(self, config):
        config['structure']['group_strategies'].append('omega')
        with pytest.raises(ConfigurationError, match="omega"):
            validate_config(config)

    def test_focal_equals_reference(self, config):
        config['contrast']['reference'] = 'phi'
        with pytest.raises(ConfigurationError, match="must differ"):
            validate_config(config)

    def test_negative_noise_variance(self, config):
        config['outcome_model']['noise']['variance'] = -0.1
        with pytest.raises(ConfigurationError, match="variance"):
            validate_config(config)

    def test_empty_gamma_grid(self, config):
        config['experiment']['gammas'] = []
        with pytest.raises(ConfigurationError, match="gammas"):
            validate_config(config)

    def test_unknown_regime(self, config):
        config['experiment']['regimes'] = ['finite', 'cluster']
        with pytest.raises(ConfigurationError, match="cluster"):
            validate_config(config)

    def test_regime_parameters_missing(self, config):
        del config['strategies']['psi']['probability']
        with pytest.raises(ConfigurationError, match="bernoulli"):
            validate_config(config)

    def test_generator_rejects_before_simulating(self, config):
        config['strategies']['phi']['probability'] = -0.2
        with pytest.raises(ConfigurationError):
            SimulationGenerator(config=config)

    def test_configuration_error_is_value_error(self, config):
        config['structure']['n_per_group'] = -5
        with pytest.raises(ValueError):
            validate_config(config)

    @pytest.mark.parametrize("quota", [0, 100])
    def test_quota_empties_an_arm(self, config, quota):
        config['strategies']['phi']['n_treated'] = quota
        with pytest.raises(ConfigurationError, match="empty"):
            SimulationGenerator(config=config)

    @pytest.mark.parametrize("p", [0.0, 1.0])
    def test_probability_empties_an_arm(self, config, p):
        config['strategies']['psi']['probability'] = p
        with pytest.raises(ConfigurationError, match="empty"):
            SimulationGenerator(config=config)

    def test_boundary_values_allowed_on_unassigned_strategy(self, config):
        config['strategies']['omega'] = {'n_treated': 0, 'probability': 1.0}
        assert validate_config(config) is config

    @pytest.mark.parametrize("path, value", [
        (('outcome_model', 'noise', 'variance'), 'abc'),
        (('outcome_model', 'coefficients', 'treatment'), 'five'),
        (('experiment', 'n_reps'), True),
        (('experiment', 'n_reps'), 2.5),
        (('experiment', 'gammas'), [0.0, 'high']),
        (('experiment', 'gammas'), 5.0),
        (('strategies', 'phi', 'probability'), '0.5'),
        (('strategies', 'psi', 'n_treated'), 30.0),
    ])
    def test_mistyped_values(self, config, path, value):
        node = config
        for key in path[:-1]:
            node = node[key]
        node[path[-1]] = value
        with pytest.raises(ConfigurationError):
            validate_config(config)

    @pytest.mark.parametrize("section", ['strategies', 'contrast', 'structure', 'outcome_model'])
    def test_section_not_a_mapping(self, config, section):
        config[section] = ['phi', 'psi']
        with pytest.raises(ConfigurationError, match=section):
            validate_config(config)

    def test_strategy_not_a_mapping(self, config):
        config['strategies']['phi'] = 0.5
        with pytest.raises(ConfigurationError, match="phi"):
            validate_config(config)
