"""Script for running the partial interference Monte Carlo study.

Usage:
    python -m partial_interference.scripts.run_study --output-dir results
"""

import argparse
from pathlib import Path

import pandas as pd

from partial_interference.simulator import SimulationGenerator
from partial_interference.experiment import ExperimentRunner
from partial_interference.evaluation import truth_table, summarize_results, print_summary
from partial_interference.utils import DEFAULT_CONFIG_PATH


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument('--config', default=str(DEFAULT_CONFIG_PATH),
                        help="Path to the YAML study configuration")
    parser.add_argument('--output-dir', default='./results',
                        help="Directory for results, truth and summary CSV files")
    parser.add_argument('--regime', choices=['finite', 'bernoulli'], action='append',
                        help="Regime to run (repeatable); defaults to the configured regimes")
    parser.add_argument('--n-reps', type=int, default=None,
                        help="Replicates per gamma; overrides experiment.n_reps")
    parser.add_argument('--seed', type=int, default=None,
                        help="Study seed; overrides random_seed")
    return parser.parse_args(argv)


def main(argv=None):
    """Run the study and write its tables."""
    args = parse_args(argv)

    print("Initializing simulation generator...")
    gen = SimulationGenerator(config_path=args.config)

    print("\nConfiguration Summary:")
    print("="*60)
    for key, value in gen.get_config_summary().items():
        print(f"{key}: {value}")
    print("="*60)

    runner = ExperimentRunner(gen, seed=args.seed, verbose=True)
    regimes = args.regime or gen.config.get('experiment', {}).get('regimes', list(gen.regimes))
    gammas = gen.config.get('experiment', {}).get('gammas', [0.0])

    results = runner.run_all(regimes=regimes, n_reps=args.n_reps)
    truth = pd.concat(
        [truth_table(gen.config, regime, gammas) for regime in regimes],
        ignore_index=True
    )
    summary = summarize_results(results, truth)

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    for name, table in (('results', results), ('truth', truth), ('summary', summary)):
        filepath = output_dir / f"{name}.csv"
        table.to_csv(filepath, index=False)
        print(f"Saved {len(table)} rows to {filepath}")

    print_summary(summary, estimators=['pe', 'ipw', 'aipw', f"direct_{gen.config['contrast']['focal']}",
                                       'indirect', 'total', 'overall'])

    print("\n" + "="*60)
    print("STUDY COMPLETE")
    print("="*60)
    print(f"All files saved to: {output_dir.absolute()}")


if __name__ == "__main__":
    main()
