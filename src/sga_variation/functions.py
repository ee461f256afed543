"""Benchmark objective functions for the variation testbed.

Three single-objective problems with known optima, each declaring its own
search space and encoding length:

- Function1: multimodal 1-D maximization, x * sin(10 pi x) + 2 on [-1, 2]
- Function2: 5-D sphere minimization on [-5, 5]
- Function3: 2-D Ackley minimization on [-20, 30]

Maximum decoding error for a gene of length L is (upper - lower) / 2**L, e.g.
0.00073242 for Function1 at 12 bits, 0.00061035 for Function2 at 14 bits and
0.00076293 for Function3 at 16 bits.
"""

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Function1:
    """Maximize f(x) = x * sin(10 * pi * x) + 2 for -1 <= x < 2.

    Example:
        >>> fn = Function1()
        >>> round(fn.evaluate(np.array([1.85])), 2)
        3.85
    """

    is_maximize: bool = True
    num_vars: int = 1
    genes_per_var: int = 12
    lower_bound: float = -1.0
    upper_bound: float = 2.0
    optimal_value: float = 3.85

    def evaluate(self, phenotype: np.ndarray) -> float:
        x = float(phenotype[0])
        return x * np.sin(10.0 * np.pi * x) + 2.0

    def transferral(self, raw_fitness: float) -> float:
        return raw_fitness

    def __str__(self) -> str:
        return (
            "  Name: Function1\n"
            "  Fitness Formula: max f(x) = x * sin(10 * pi * x) + 2.0\n"
            f"  Optimal Solution: {self.optimal_value}"
        )


@dataclass(frozen=True)
class Function2:
    """Minimize the sphere function f(x) = sum(x_i^2) for -5 <= x_i < 5.

    The transferral constant ``num_vars * upper_bound**2`` is the largest
    objective reachable inside the search space, so transferred weights are
    non-negative everywhere.
    """

    is_maximize: bool = False
    num_vars: int = 5
    genes_per_var: int = 14
    lower_bound: float = -5.0
    upper_bound: float = 5.0
    optimal_value: float = 0.0

    def evaluate(self, phenotype: np.ndarray) -> float:
        return float(np.sum(np.asarray(phenotype, dtype=np.float64) ** 2))

    def transferral(self, raw_fitness: float) -> float:
        c = self.num_vars * self.upper_bound**2
        return c - raw_fitness

    def __str__(self) -> str:
        return (
            "  Name: Function2\n"
            "  Fitness Formula: min f(x) = sum(xi^2)\n"
            f"  Optimal Solution: {self.optimal_value}"
        )


@dataclass(frozen=True)
class Function3:
    """Minimize the Ackley function for -20 <= x_i < 30.

    f(x) = -20 exp(-0.2 sqrt(mean(x_i^2))) - exp(mean(cos(2 pi x_i))) + 20 + e

    The transferral constant 25 exceeds every objective value reachable in the
    search space, though it is not the function's global maximum.
    """

    is_maximize: bool = False
    num_vars: int = 2
    genes_per_var: int = 16
    lower_bound: float = -20.0
    upper_bound: float = 30.0
    optimal_value: float = 0.0

    def evaluate(self, phenotype: np.ndarray) -> float:
        x = np.asarray(phenotype, dtype=np.float64)
        first_term = -20.0 * np.exp(-0.2 * np.sqrt(np.sum(x**2) / self.num_vars))
        second_term = np.exp(np.sum(np.cos(2.0 * np.pi * x)) / self.num_vars)
        return float(first_term - second_term + 20.0 + np.e)

    def transferral(self, raw_fitness: float) -> float:
        return 25.0 - raw_fitness

    def __str__(self) -> str:
        return (
            "  Name: Function3\n"
            "  Fitness Formula: min f(x) = -20 * exp(-0.2 * sqrt(1/n * sum(xi^2))) -\n"
            "                              exp(1/n * sum(cos(2 * pi * xi))) + 20 + e\n"
            f"  Optimal Solution: {self.optimal_value}"
        )


class FunctionRegistry:
    """Registry of benchmark functions addressable by name.

    Class Attributes:
        _registry: Dictionary mapping function names to zero-argument factories.

    Example:
        ```python
        fn = FunctionRegistry.get("function2")
        FunctionRegistry.list()  # ["function1", "function2", "function3"]
        ```
    """

    _registry: dict[str, Callable[[], object]] = {}

    @classmethod
    def register(cls, name: str, factory: Callable[[], object]) -> None:
        """Register a function factory under ``name``, overwriting any existing entry."""
        cls._registry[name] = factory

    @classmethod
    def get(cls, name: str):
        """Instantiate the function registered under ``name``.

        Raises:
            KeyError: If the name is not registered. The message lists the
                available names.
        """
        if name not in cls._registry:
            available = ", ".join(sorted(cls._registry.keys())) or "none"
            raise KeyError(f"Fitness function '{name}' not found. Available functions: {available}")
        return cls._registry[name]()

    @classmethod
    def list(cls) -> list[str]:
        """Return the sorted list of registered function names."""
        return sorted(cls._registry.keys())


FunctionRegistry.register("function1", Function1)
FunctionRegistry.register("function2", Function2)
FunctionRegistry.register("function3", Function3)
