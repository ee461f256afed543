"""Error taxonomy for the variation testbed.

- ConfigurationError: invalid run or operator parameters
- ZeroFitnessError: selection weights cannot be normalized
- RetryLimitExceededError: a rejection-sampling loop gave up
"""


class SGAVariationError(Exception):
    """Base class for all errors raised by sga_variation."""


class ConfigurationError(SGAVariationError, ValueError):
    """Raised when a run or operator parameter is invalid."""


class ZeroFitnessError(SGAVariationError, ArithmeticError):
    """Raised when the total selection weight of a population is not positive.

    Relative fitness is ``weight / sum(weights)``; a zero, negative or
    non-finite total would silently produce NaN or negative probabilities.
    """


class RetryLimitExceededError(SGAVariationError, RuntimeError):
    """Raised when a bounded rejection-sampling loop exhausts its retries."""
