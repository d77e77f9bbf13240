"""Exception hierarchy for the partial interference study."""


class InterferenceStudyError(Exception):
    """Base class for all errors raised by this package."""
    pass


class ConfigurationError(InterferenceStudyError, ValueError):
    """Invalid study configuration.

    Raised by ``validate_config`` before any simulation starts, e.g. for a
    non-positive group size, a probability outside [0, 1], a treated quota
    larger than the group or a group strategy without regime parameters.
    """
    pass


class DecompositionError(InterferenceStudyError, RuntimeError):
    """The effect decomposition ``indirect + direct = total`` did not hold.

    This signals a bug in the estimators or in data assembly, not a data
    anomaly, so it aborts the experiment instead of being recorded.
    """
    pass
