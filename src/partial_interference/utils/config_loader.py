"""Configuration loader utility for YAML files."""

from pathlib import Path
from typing import Any, Dict, Union
import yaml

from ..exceptions import ConfigurationError


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / 'config' / 'simulation.yml'

REGIMES = ('finite', 'bernoulli')


def load_config(config_path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Parameters
    ----------
    config_path : str or Path
        Path to the YAML configuration file. Defaults to the bundled
        ``config/simulation.yml``.

    Returns
    -------
    Dict[str, Any]
        Dictionary containing configuration parameters.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist.
    yaml.YAMLError
        If the YAML file is malformed.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r') as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error parsing YAML file {config_path}: {e}")

    return config


def save_config(config: Dict[str, Any], config_path: Union[str, Path]) -> None:
    """
    Save configuration to YAML file.

    Parameters
    ----------
    config : Dict[str, Any]
        Dictionary containing configuration parameters.
    config_path : str or Path
        Path where to save the YAML configuration file.
    """
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Check a study configuration before any simulation runs.

    Quotas and probabilities of strategies assigned to groups must leave both
    treatment arms non-empty: ``0 < n_treated < n_per_group`` and
    ``0 < probability < 1``.

    Parameters
    ----------
    config : Dict[str, Any]
        Configuration as returned by ``load_config``.

    Returns
    -------
    Dict[str, Any]
        The same configuration, for chaining.

    Raises
    ------
    ConfigurationError
        On the first constraint that does not hold.
    """
    if not isinstance(config, dict):
        raise ConfigurationError(f"Configuration must be a mapping, got {type(config).__name__}")

    for section in ('structure', 'strategies', 'contrast', 'outcome_model'):
        if section not in config:
            raise ConfigurationError(f"Missing configuration section: '{section}'")
        if not isinstance(config[section], dict):
            raise ConfigurationError(f"Section '{section}' must be a mapping")

    structure = config['structure']
    n = structure.get('n_per_group')
    if not _is_integer(n) or n <= 0:
        raise ConfigurationError(f"n_per_group must be a positive integer, got {n!r}")

    group_strategies = structure.get('group_strategies') or []
    if not isinstance(group_strategies, list):
        raise ConfigurationError("group_strategies must be a list of strategy labels")
    if len(group_strategies) == 0:
        raise ConfigurationError("group_strategies must list at least one group")
    if not all(isinstance(label, str) for label in group_strategies):
        raise ConfigurationError(f"group_strategies must be strategy names, got {group_strategies!r}")

    strategies = config['strategies']
    unknown = sorted(set(group_strategies) - set(strategies))
    if unknown:
        raise ConfigurationError(
            f"Group strategies without regime parameters: {unknown}"
        )

    for label, spec in strategies.items():
        if not isinstance(spec, dict):
            raise ConfigurationError(f"Strategy '{label}' must be a mapping")
        if 'n_treated' not in spec and 'probability' not in spec:
            raise ConfigurationError(
                f"Strategy '{label}' needs 'n_treated' or 'probability'"
            )
        assigned = label in group_strategies
        if 'n_treated' in spec:
            quota = spec['n_treated']
            if not _is_integer(quota) or not 0 <= quota <= n:
                raise ConfigurationError(
                    f"Strategy '{label}': n_treated must be an integer in [0, {n}], got {quota!r}"
                )
            if assigned and quota in (0, n):
                raise ConfigurationError(
                    f"Strategy '{label}': n_treated={quota} leaves a treatment arm empty "
                    f"in every group; use 0 < n_treated < {n}"
                )
        if 'probability' in spec:
            p = spec['probability']
            if not _is_number(p) or not 0.0 <= p <= 1.0:
                raise ConfigurationError(
                    f"Strategy '{label}': probability must lie in [0, 1], got {p!r}"
                )
            if assigned and p in (0.0, 1.0):
                raise ConfigurationError(
                    f"Strategy '{label}': probability={p} leaves a treatment arm empty "
                    f"in every group; use 0 < probability < 1"
                )

    contrast = config['contrast']
    focal, reference = contrast.get('focal'), contrast.get('reference')
    if focal == reference:
        raise ConfigurationError("contrast.focal and contrast.reference must differ")
    for role, label in (('focal', focal), ('reference', reference)):
        if label not in group_strategies:
            raise ConfigurationError(
                f"contrast.{role} strategy '{label}' is not assigned to any group"
            )

    outcome_model = config['outcome_model']
    coefficients = outcome_model.get('coefficients', {})
    if not isinstance(coefficients, dict):
        raise ConfigurationError("outcome_model.coefficients must be a mapping")
    for name in ('intercept', 'treatment', 'interference'):
        if name not in coefficients:
            raise ConfigurationError(f"Missing outcome coefficient: '{name}'")
        if not _is_number(coefficients[name]):
            raise ConfigurationError(
                f"Outcome coefficient '{name}' must be numeric, got {coefficients[name]!r}"
            )
    noise = outcome_model.get('noise', {})
    variance = noise.get('variance') if isinstance(noise, dict) else None
    if not _is_number(variance) or variance < 0:
        raise ConfigurationError(f"Noise variance must be non-negative, got {variance!r}")

    experiment = config.get('experiment', {})
    if not isinstance(experiment, dict):
        raise ConfigurationError("Section 'experiment' must be a mapping")
    if 'gammas' in experiment:
        gammas = experiment['gammas']
        if not isinstance(gammas, list) or len(gammas) == 0:
            raise ConfigurationError("experiment.gammas must be a non-empty list")
        bad = [g for g in gammas if not _is_number(g)]
        if bad:
            raise ConfigurationError(f"experiment.gammas must be numeric, got {bad!r}")
    n_reps = experiment.get('n_reps', 1)
    if not _is_integer(n_reps) or n_reps < 1:
        raise ConfigurationError(f"experiment.n_reps must be at least 1, got {n_reps!r}")
    regimes = experiment.get('regimes', [])
    if not isinstance(regimes, list):
        raise ConfigurationError("experiment.regimes must be a list")
    for regime in regimes:
        if regime not in REGIMES:
            raise ConfigurationError(
                f"Unknown regime '{regime}'. Choose from {list(REGIMES)}"
            )
        key = 'n_treated' if regime == 'finite' else 'probability'
        missing = sorted(label for label in set(group_strategies) if key not in strategies[label])
        if missing:
            raise ConfigurationError(
                f"Regime '{regime}' needs '{key}' for strategies {missing}"
            )

    return config
