"""Monte Carlo study of causal estimators under partial interference.

Units live in fixed groups; a unit's outcome depends on its own treatment
and on the number of treated units in its group. Treatments are drawn under
a finite-population or a Bernoulli randomization regime, naive and
interference-aware estimators are computed per replicate, and the results
are compared against closed-form analytical truth.
"""

from .simulator import SimulationGenerator, SimulationData
from .estimators import EstimatorBank
from .experiment import ExperimentRunner
from .evaluation import truth_table, summarize_results
from .exceptions import InterferenceStudyError, ConfigurationError, DecompositionError

__all__ = [
    'SimulationGenerator',
    'SimulationData',
    'EstimatorBank',
    'ExperimentRunner',
    'truth_table',
    'summarize_results',
    'InterferenceStudyError',
    'ConfigurationError',
    'DecompositionError',
]
__version__ = '1.0.0'
