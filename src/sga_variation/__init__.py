"""sga-variation: Simple Genetic Algorithm Variation Testbed.

A numpy implementation of a simple genetic algorithm for comparing crossover
operators on benchmark functions, with binary (optionally gray-coded) and
continuous chromosome representations.

Example (binary representation):
    >>> from sga_variation import BinaryCrossover, BinaryPopulation, Function1
    >>> pop = BinaryPopulation(Function1(), BinaryCrossover.DUAL_POINT, pop_size=10, rng=42)
    >>> pop.select()
    >>> pop.reproduce()
    >>> len(pop)
    10

Example (multi-trial experiment):
    >>> from sga_variation import GAConfig, Function2, run_experiment
    >>> result = run_experiment(Function2(), "blend", GAConfig(n_trials=2), seed=0, representation="continuous")
    >>> len(result)
    2
"""

from sga_variation.config import GAConfig
from sga_variation.encoding import binary_to_gray, decode, decode_variable, gray_to_binary
from sga_variation.exceptions import (
    ConfigurationError,
    RetryLimitExceededError,
    SGAVariationError,
    ZeroFitnessError,
)
from sga_variation.experiment import make_population, run_experiment, run_trial
from sga_variation.functions import Function1, Function2, Function3, FunctionRegistry
from sga_variation.individual import BinaryIndividual, ContinuousIndividual, Individual
from sga_variation.population import BinaryPopulation, ContinuousPopulation, Population
from sga_variation.protocols import CrossoverOperator, FitnessFunction
from sga_variation.registry import BinaryCrossover, ContinuousCrossover, CrossoverRegistry, resolve_crossover
from sga_variation.results import ExperimentResult, IndividualSnapshot, TrialResult
from sga_variation.selection import relative_fitness, roulette_wheel

__all__ = [
    # Driver
    "run_experiment",
    "run_trial",
    "make_population",
    "GAConfig",
    # Populations and individuals
    "Population",
    "BinaryPopulation",
    "ContinuousPopulation",
    "Individual",
    "BinaryIndividual",
    "ContinuousIndividual",
    # Operators
    "BinaryCrossover",
    "ContinuousCrossover",
    "CrossoverRegistry",
    "resolve_crossover",
    "relative_fitness",
    "roulette_wheel",
    # Encoding
    "decode",
    "decode_variable",
    "binary_to_gray",
    "gray_to_binary",
    # Functions
    "Function1",
    "Function2",
    "Function3",
    "FunctionRegistry",
    # Protocols
    "FitnessFunction",
    "CrossoverOperator",
    # Result types
    "IndividualSnapshot",
    "TrialResult",
    "ExperimentResult",
    # Errors
    "SGAVariationError",
    "ConfigurationError",
    "ZeroFitnessError",
    "RetryLimitExceededError",
]
