"""Main interface for simulation generation."""

from pathlib import Path
from typing import Dict, List, Optional, Union

from .core.data_structures import SimulationData
from .regimes import FiniteRegime, BernoulliRegime
from ..utils.config_loader import load_config, validate_config, DEFAULT_CONFIG_PATH


class SimulationGenerator:
    """High-level interface for generating simulated datasets."""

    def __init__(
        self,
        config_path: Union[str, Path] = DEFAULT_CONFIG_PATH,
        config: Optional[Dict] = None
    ):
        """Initialize simulation generator.

        Args:
            config_path: Path to YAML configuration file
            config: Configuration dictionary; takes precedence over config_path
        """
        if config is None:
            config = load_config(config_path)
        self.config = validate_config(config)

        self.regimes: Dict[str, Union[FiniteRegime, BernoulliRegime]] = {}
        for name, cls in (('finite', FiniteRegime), ('bernoulli', BernoulliRegime)):
            if self._supports(name):
                self.regimes[name] = cls(self.config)

    def _supports(self, regime: str) -> bool:
        key = 'n_treated' if regime == 'finite' else 'probability'
        strategies = self.config['strategies']
        return all(
            key in strategies[label]
            for label in self.config['structure']['group_strategies']
        )

    def get_regime(self, regime: str) -> Union[FiniteRegime, BernoulliRegime]:
        if regime not in self.regimes:
            raise ValueError(f"Unknown regime: {regime}. Choose from {list(self.regimes.keys())}")
        return self.regimes[regime]

    def generate(
        self,
        regime: str,
        gamma: float,
        n_reps: int = 1,
        seed: Optional[int] = None,
        output_dir: Optional[str] = None
    ) -> Union[SimulationData, List[SimulationData]]:
        """Generate data from the specified regime.

        Args:
            regime: Name of regime ('finite', 'bernoulli')
            gamma: Interference strength
            n_reps: Number of replications to generate
            seed: Base random seed
            output_dir: Directory to save CSV files

        Returns:
            SimulationData or List[SimulationData]:
                Single dataset if n_reps=1, otherwise list of datasets
        """
        dgp = self.get_regime(regime)

        if seed is None:
            seed = self.config.get('random_seed', 42)

        datasets = []
        for rep in range(n_reps):
            data = dgp.generate(gamma=gamma, seed=[seed, rep])

            if output_dir is not None:
                output_path = Path(output_dir)
                output_path.mkdir(parents=True, exist_ok=True)

                filename = f"{regime}_gamma{gamma:g}_rep{rep+1:03d}.csv"
                data.save(str(output_path / filename))

            datasets.append(data)

        if n_reps == 1:
            return datasets[0]
        else:
            return datasets

    def get_config_summary(self) -> Dict:
        """Get summary of configuration parameters."""
        return {
            'structure': self.config['structure'],
            'strategies': self.config['strategies'],
            'contrast': self.config['contrast'],
            'coefficients': self.config['outcome_model']['coefficients'],
            'noise_variance': self.config['outcome_model']['noise']['variance'],
            'regimes': list(self.regimes.keys())
        }
