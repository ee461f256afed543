"""Populations for the binary and continuous representations.

A population owns a fixed-size list of individuals and a mating pool of the
same size. One generation is two calls:

1. ``select()`` fills the mating pool with clones of members drawn by
   roulette wheel, proportional to relative fitness.
2. ``reproduce()`` pairs adjacent mating-pool slots (0 and 1, 2 and 3, ...),
   applies the configured crossover and then mutation to both children,
   replaces the members with the children, empties the mating pool and
   recomputes relative fitness.

- BinaryPopulation: BinaryIndividual members, bit-flip mutation
- ContinuousPopulation: ContinuousIndividual members, uniform mutation

Every random draw goes through the generator given at construction, so a
population built from a seeded generator evolves deterministically.
"""

import logging
from collections.abc import Iterator
from enum import Enum

import numpy as np

from sga_variation.exceptions import ConfigurationError
from sga_variation.individual import BinaryIndividual, ContinuousIndividual, Individual
from sga_variation.protocols import FitnessFunction
from sga_variation.registry import BinaryCrossover, ContinuousCrossover, CrossoverRegistry, resolve_crossover
from sga_variation.selection import relative_fitness, roulette_wheel
from sga_variation.variation.binary import bit_flip_mutation
from sga_variation.variation.continuous import DEFAULT_MAX_RETRIES, uniform_mutation

logger = logging.getLogger(__name__)


class Population:
    """Behavior shared by both representations.

    Attributes:
        function: Fitness function every member is evaluated against.
        crossover_kind: Resolved crossover operator kind.
        members: Current generation, length ``pop_size``.
        mating_pool: Parent buffer of length ``pop_size``; all ``None``
            outside of a select/reproduce cycle.
        crossover_prob: Probability that a mating pair is recombined.
        mutation_prob: Per-gene mutation probability.
        generation: Number of completed ``reproduce()`` calls.
        rng: Random number generator shared by selection, crossover and mutation.
    """

    _representation: type[Enum]

    def __init__(
        self,
        function: FitnessFunction,
        crossover,
        pop_size: int,
        rng: np.random.Generator | int | None,
        crossover_prob: float,
        mutation_prob: float,
    ) -> None:
        if pop_size < 2:
            raise ConfigurationError(f"pop_size must be at least 2, got {pop_size}")
        if pop_size % 2 != 0:
            raise ConfigurationError(f"pop_size must be even for pairwise mating, got {pop_size}")
        if not 0.0 <= crossover_prob <= 1.0:
            raise ConfigurationError(f"crossover_prob must be in [0, 1], got {crossover_prob}")
        if not 0.0 <= mutation_prob <= 1.0:
            raise ConfigurationError(f"mutation_prob must be in [0, 1], got {mutation_prob}")

        self.function = function
        self.crossover_kind = resolve_crossover(crossover, self._representation)
        if self.crossover_kind.n_parents == 3 and pop_size < 4:
            raise ConfigurationError(
                f"{self.crossover_kind.name} needs a third parent outside each mating pair; "
                f"pop_size must be at least 4, got {pop_size}"
            )

        self.crossover_prob = crossover_prob
        self.mutation_prob = mutation_prob
        self.rng = np.random.default_rng(rng)
        self._crossover = CrossoverRegistry.get(self.crossover_kind, **self._operator_kwargs())

        self.members: list[Individual] = [self._random_individual() for _ in range(pop_size)]
        self.mating_pool: list[Individual | None] = [None] * pop_size
        self.generation = 0
        self._update_relative_fitness()

    # -- representation hooks ------------------------------------------------

    def _operator_kwargs(self) -> dict:
        return {"crossover_prob": self.crossover_prob}

    def _random_individual(self) -> Individual:
        raise NotImplementedError

    def _mutate(self, individual: Individual) -> None:
        raise NotImplementedError

    # -- fitness ---------------------------------------------------------------

    def _update_relative_fitness(self) -> None:
        """Recompute every member's relative fitness from its selection weight.

        Raises:
            ZeroFitnessError: If the total weight is not positive.
        """
        rel = relative_fitness(self.weights)
        for member, value in zip(self.members, rel, strict=True):
            member.relative_fitness = float(value)

    @property
    def weights(self) -> np.ndarray:
        """Selection weights: objective values when maximizing, transferral values otherwise."""
        return np.array([m.weight for m in self.members], dtype=np.float64)

    @property
    def relative_fitness(self) -> np.ndarray:
        return np.array([m.relative_fitness for m in self.members], dtype=np.float64)

    @property
    def objective_values(self) -> np.ndarray:
        return np.array([m.objective_value for m in self.members], dtype=np.float64)

    def best(self) -> Individual:
        """Member with the best objective value (first one on ties)."""
        values = self.objective_values
        idx = np.argmax(values) if self.function.is_maximize else np.argmin(values)
        return self.members[int(idx)]

    def worst(self) -> Individual:
        """Member with the worst objective value (first one on ties)."""
        values = self.objective_values
        idx = np.argmin(values) if self.function.is_maximize else np.argmax(values)
        return self.members[int(idx)]

    # -- generation cycle ----------------------------------------------------

    def select(self) -> None:
        """Fill the mating pool by roulette wheel selection with replacement.

        Each slot receives a clone of the selected member, so later crossover
        and mutation never touch the current generation.
        """
        indices = roulette_wheel(self.relative_fitness, len(self.mating_pool), self.rng)
        self.mating_pool = [self.members[i].copy() for i in indices]

    def _third_parent_index(self, i: int) -> int:
        """Draw a mating-pool index uniformly among slots other than ``i`` and ``i + 1``."""
        j = int(self.rng.integers(0, len(self.mating_pool) - 2))
        if j >= i:
            j += 2
        return j

    def reproduce(self) -> None:
        """Replace the members with mutated offspring of the mating pool.

        Raises:
            RuntimeError: If the mating pool has not been filled by ``select()``.
            ZeroFitnessError: If the new generation's total weight is not positive.
            RetryLimitExceededError: If a bounded continuous crossover gives up.
        """
        if any(parent is None for parent in self.mating_pool):
            raise RuntimeError("mating pool is empty; call select() before reproduce()")

        pool = self.mating_pool
        offspring: list[Individual] = []
        for i in range(0, len(pool), 2):
            parents = [pool[i], pool[i + 1]]
            if self.crossover_kind.n_parents == 3:
                parents.append(pool[self._third_parent_index(i)])

            child_a, child_b = self._crossover(parents, self.rng)
            self._mutate(child_a)
            self._mutate(child_b)
            offspring.extend([child_a, child_b])

        self.members = offspring
        self.mating_pool = [None] * len(offspring)
        self._update_relative_fitness()
        self.generation += 1

        if logger.isEnabledFor(logging.DEBUG):
            values = self.objective_values
            logger.debug(
                "generation %d: best=%.6f mean=%.6f worst=%.6f",
                self.generation,
                self.best().objective_value,
                float(values.mean()),
                self.worst().objective_value,
            )

    # -- container protocol --------------------------------------------------

    def __len__(self) -> int:
        return len(self.members)

    def __getitem__(self, idx: int) -> Individual:
        return self.members[idx]

    def __iter__(self) -> Iterator[Individual]:
        return iter(self.members)


class BinaryPopulation(Population):
    """Population of binary (optionally gray-coded) individuals.

    Args:
        function: Fitness function; its ``genes_per_var`` sets the bit length.
        crossover: Operator kind, integer id or name (see ``BinaryCrossover``).
            Unknown values fall back to single-point crossover.
        pop_size: Even number of individuals (at least 4 for three-parent crossover).
        is_gray: Decode chromosomes as gray code.
        rng: Generator, seed, or None for fresh entropy.
        crossover_prob: Probability that a mating pair is recombined.
        mutation_prob: Per-bit flip probability.

    Raises:
        ConfigurationError: On invalid sizes or probabilities.
        ZeroFitnessError: If the initial population has no positive total weight.

    Example:
        >>> from sga_variation.functions import Function1
        >>> pop = BinaryPopulation(Function1(), BinaryCrossover.RING, pop_size=10, rng=42)
        >>> for _ in range(5):
        ...     pop.select()
        ...     pop.reproduce()
        >>> len(pop), pop.generation
        (10, 5)
    """

    _representation = BinaryCrossover

    def __init__(
        self,
        function: FitnessFunction,
        crossover=BinaryCrossover.SINGLE_POINT,
        pop_size: int = 20,
        is_gray: bool = False,
        *,
        rng: np.random.Generator | int | None = None,
        crossover_prob: float = 0.8,
        mutation_prob: float = 0.01,
    ) -> None:
        self.is_gray = is_gray
        super().__init__(function, crossover, pop_size, rng, crossover_prob, mutation_prob)

    def _random_individual(self) -> BinaryIndividual:
        return BinaryIndividual.random(self.function, self.rng, self.is_gray)

    def _mutate(self, individual: BinaryIndividual) -> None:
        bit_flip_mutation(individual, self.mutation_prob, self.rng)


class ContinuousPopulation(Population):
    """Population of real-valued individuals.

    Args:
        function: Fitness function; ``genes_per_var`` is ignored.
        crossover: Operator kind, integer id or name (see ``ContinuousCrossover``).
            Unknown values fall back to whole arithmetic crossover.
        pop_size: Even number of individuals.
        rng: Generator, seed, or None for fresh entropy.
        crossover_prob: Probability that a mating pair is recombined.
        mutation_prob: Per-gene mutation probability.
        max_retries: Cap on rejection-sampling loops (heuristic and blend crossover).
    """

    _representation = ContinuousCrossover

    def __init__(
        self,
        function: FitnessFunction,
        crossover=ContinuousCrossover.WHOLE_ARITHMETIC,
        pop_size: int = 20,
        *,
        rng: np.random.Generator | int | None = None,
        crossover_prob: float = 0.8,
        mutation_prob: float = 0.01,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ) -> None:
        if max_retries <= 0:
            raise ConfigurationError(f"max_retries must be positive, got {max_retries}")
        self.max_retries = max_retries
        super().__init__(function, crossover, pop_size, rng, crossover_prob, mutation_prob)

    def _operator_kwargs(self) -> dict:
        return {"crossover_prob": self.crossover_prob, "max_retries": self.max_retries}

    def _random_individual(self) -> ContinuousIndividual:
        return ContinuousIndividual.random(self.function, self.rng)

    def _mutate(self, individual: ContinuousIndividual) -> None:
        uniform_mutation(individual, self.mutation_prob, self.rng)
