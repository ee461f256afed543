"""Shared test fixtures for sga-variation tests.

This module provides common fixtures used across test modules:
- rng: Seeded random number generator
- Benchmark function instances
- Small deterministic fitness functions with short chromosomes
- Individual factories for both representations
"""

from dataclasses import dataclass

import numpy as np
import pytest

from sga_variation import BinaryIndividual, ContinuousIndividual, Function1, Function2, Function3


@dataclass(frozen=True)
class OnesCount:
    """Maximize the sum of the decoded variables; 2 variables of 4 bits on [0, 16)."""

    is_maximize: bool = True
    num_vars: int = 2
    genes_per_var: int = 4
    lower_bound: float = 0.0
    upper_bound: float = 16.0
    optimal_value: float = 30.0

    def evaluate(self, phenotype: np.ndarray) -> float:
        return float(np.sum(phenotype))

    def transferral(self, raw_fitness: float) -> float:
        return raw_fitness


@dataclass(frozen=True)
class Flat:
    """Maximize a constant zero; every population has zero total weight."""

    is_maximize: bool = True
    num_vars: int = 1
    genes_per_var: int = 4
    lower_bound: float = 0.0
    upper_bound: float = 1.0
    optimal_value: float = 0.0

    def evaluate(self, phenotype: np.ndarray) -> float:
        return 0.0

    def transferral(self, raw_fitness: float) -> float:
        return raw_fitness


@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random number generator for deterministic tests."""
    return np.random.default_rng(42)


@pytest.fixture
def function1() -> Function1:
    return Function1()


@pytest.fixture
def function2() -> Function2:
    return Function2()


@pytest.fixture
def function3() -> Function3:
    return Function3()


@pytest.fixture
def ones_count() -> OnesCount:
    """Small maximization problem with an 8-bit chromosome."""
    return OnesCount()


@pytest.fixture
def flat_function() -> Flat:
    """Problem whose objective is zero everywhere."""
    return Flat()


@pytest.fixture
def binary_parents(ones_count, rng) -> tuple[BinaryIndividual, BinaryIndividual]:
    """Two random 8-bit individuals."""
    return BinaryIndividual.random(ones_count, rng), BinaryIndividual.random(ones_count, rng)


@pytest.fixture
def continuous_parents(function2) -> tuple[ContinuousIndividual, ContinuousIndividual]:
    """Two interior 5-variable sphere individuals."""
    a = ContinuousIndividual([1.0, -2.0, 0.5, 3.0, -1.0], function2)
    b = ContinuousIndividual([-1.5, 0.0, 2.0, 1.0, 0.5], function2)
    return a, b
