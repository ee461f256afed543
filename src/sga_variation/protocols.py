"""Protocol definitions for the pluggable parts of the testbed.

The population engine is written against two interfaces so that objective
functions and crossover strategies can be swapped without touching it:

1. **FitnessFunction**: maps a decoded real-valued vector to a scalar and
   declares the search space (dimensionality, bit length, shared bounds) and
   the optimization direction. Minimization problems also provide a
   transferral function that turns raw fitness into a positive weight.

2. **CrossoverOperator**: takes two (or three) parent individuals and a
   random generator and returns exactly two children. Operators never modify
   their parents.

Example usage:
    ```python
    from dataclasses import dataclass

    @dataclass(frozen=True)
    class Sphere:
        is_maximize: bool = False
        num_vars: int = 2
        genes_per_var: int = 10
        lower_bound: float = -1.0
        upper_bound: float = 1.0
        optimal_value: float = 0.0

        def evaluate(self, phenotype):
            return float(np.sum(phenotype**2))

        def transferral(self, raw_fitness):
            return 2.0 - raw_fitness

    assert isinstance(Sphere(), FitnessFunction)
    ```
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from sga_variation.individual import Individual


@runtime_checkable
class FitnessFunction(Protocol):
    """Protocol for objective functions consumed by the population engine.

    Attributes:
        is_maximize: True if higher objective values are better.
        num_vars: Number of real-valued decision variables.
        genes_per_var: Bits used to encode each variable (binary encoding only).
        lower_bound: Lower search bound, shared by every variable.
        upper_bound: Upper search bound, shared by every variable.
        optimal_value: Known optimum, used for reporting only.
    """

    is_maximize: bool
    num_vars: int
    genes_per_var: int
    lower_bound: float
    upper_bound: float
    optimal_value: float

    def evaluate(self, phenotype: np.ndarray) -> float:
        """Return the objective value of a decoded variable vector.

        Args:
            phenotype: Real-valued decision variables, shape (num_vars,).

        Returns:
            Scalar objective value.
        """
        ...

    def transferral(self, raw_fitness: float) -> float:
        """Convert a raw minimization objective into a positive selection weight.

        Only meaningful when ``is_maximize`` is False. The transform must be
        monotonically decreasing so that better (lower) objectives receive
        larger weights.

        Args:
            raw_fitness: Objective value returned by ``evaluate``.

        Returns:
            Selection weight on a maximization scale.
        """
        ...


@runtime_checkable
class CrossoverOperator(Protocol):
    """Protocol for crossover operators.

    An operator is called with a sequence of parents and a random generator.
    Two-parent operators read ``parents[0]`` and ``parents[1]``; the
    three-parent operator additionally reads ``parents[2]``, which the
    population picks from the mating pool.

    Returns:
        A tuple of exactly two child individuals of the same kind and
        chromosome length as the parents.
    """

    def __call__(
        self,
        parents: Sequence[Individual],
        rng: np.random.Generator,
    ) -> tuple[Individual, Individual]:
        """Recombine parents into two children.

        Args:
            parents: Parent individuals (two, or three for three-parent crossover).
            rng: NumPy random number generator shared by the whole trial.

        Returns:
            Tuple (child_a, child_b).
        """
        ...
