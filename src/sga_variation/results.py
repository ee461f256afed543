"""Result types for trials and multi-trial experiments.

This module provides immutable records of what a run observed:

- IndividualSnapshot: frozen copy of one individual's state
- TrialResult: best/worst individuals and objective totals for one trial
- ExperimentResult: aggregate over independent trials, with a text report

All classes are frozen dataclasses. Arrays are copied on construction so a
result never aliases a live population.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

import numpy as np

from sga_variation.individual import BinaryIndividual, Individual
from sga_variation.protocols import FitnessFunction


@dataclass(frozen=True)
class IndividualSnapshot:
    """Frozen copy of an individual.

    Attributes:
        chromosome: Genetic material (bool for binary, float for continuous).
        phenotype: Decoded variable values, shape (num_vars,).
        objective_value: Raw objective value.
        transferral_value: Selection-oriented fitness value.
        relative_fitness: Normalized selection weight at the time of the snapshot.
        genotype: 0/1 string for binary individuals, None otherwise.
    """

    chromosome: np.ndarray
    phenotype: np.ndarray
    objective_value: float
    transferral_value: float
    relative_fitness: float
    genotype: str | None = None

    def __post_init__(self) -> None:
        """Validate and copy arrays for immutability.

        Raises:
            TypeError: If chromosome or phenotype are not numpy arrays.
            ValueError: If either array is not 1D.
        """
        for name in ("chromosome", "phenotype"):
            value = getattr(self, name)
            if not isinstance(value, np.ndarray):
                raise TypeError(f"{name} must be a numpy array, got {type(value).__name__}")
            if value.ndim != 1:
                raise ValueError(f"{name} must be 1D, got shape {value.shape}")
            object.__setattr__(self, name, value.copy())

    @classmethod
    def from_individual(cls, individual: Individual) -> "IndividualSnapshot":
        return cls(
            chromosome=individual.chromosome,
            phenotype=individual.phenotype,
            objective_value=individual.objective_value,
            transferral_value=individual.transferral_value,
            relative_fitness=individual.relative_fitness,
            genotype=individual.genotype if isinstance(individual, BinaryIndividual) else None,
        )

    def describe(self, is_maximize: bool) -> str:
        """Multi-line description; the transferral value is shown for minimization only."""
        lines = [
            f"  Objective Value: {self.objective_value}",
            "  Real Values: [" + ", ".join(str(v) for v in self.phenotype) + "]",
            f"  Relative Fitness: {self.relative_fitness}",
        ]
        if self.genotype is not None:
            lines.append(f"  Genotype: {self.genotype}")
        if not is_maximize:
            lines.append(f"  Fitness Transferral: {self.transferral_value}")
        return "\n".join(lines)


def is_better(a: float, b: float, is_maximize: bool) -> bool:
    """True if objective value ``a`` is strictly better than ``b``."""
    return a > b if is_maximize else a < b


@dataclass(frozen=True)
class TrialResult:
    """Outcome of one trial.

    Attributes:
        best: Best individual observed over all recorded generations.
        worst: Worst individual observed over all recorded generations.
        objective_sum: Sum of objective values of every recorded member.
        evaluations: Number of member objective values in ``objective_sum``.
        generations: Number of generations completed.

    Example:
        >>> snap = IndividualSnapshot(np.array([0.5]), np.array([0.5]), 2.0, 2.0, 0.1)
        >>> trial = TrialResult(best=snap, worst=snap, objective_sum=40.0, evaluations=20, generations=1)
        >>> trial.mean_objective
        2.0
    """

    best: IndividualSnapshot
    worst: IndividualSnapshot
    objective_sum: float
    evaluations: int
    generations: int

    def __post_init__(self) -> None:
        if self.evaluations < 0:
            raise ValueError(f"evaluations must be non-negative, got {self.evaluations}")
        if self.generations < 0:
            raise ValueError(f"generations must be non-negative, got {self.generations}")

    @property
    def mean_objective(self) -> float:
        """Mean recorded objective value, NaN if nothing was recorded."""
        if self.evaluations == 0:
            return float("nan")
        return self.objective_sum / self.evaluations


@dataclass(frozen=True)
class ExperimentResult:
    """Aggregate of independent trials of one function/operator combination.

    Attributes:
        function: The fitness function the trials optimized.
        crossover: The crossover operator kind used.
        trials: Per-trial results in trial order.
    """

    function: FitnessFunction
    crossover: Enum
    trials: tuple[TrialResult, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.trials, tuple):
            object.__setattr__(self, "trials", tuple(self.trials))
        if len(self.trials) == 0:
            raise ValueError("an experiment needs at least one trial")

    def __len__(self) -> int:
        return len(self.trials)

    @property
    def best(self) -> IndividualSnapshot:
        """Best individual over all trials (earliest trial on ties)."""
        return _extreme([t.best for t in self.trials], self.function.is_maximize)

    @property
    def worst(self) -> IndividualSnapshot:
        """Worst individual over all trials (earliest trial on ties)."""
        return _extreme([t.worst for t in self.trials], not self.function.is_maximize)

    @property
    def evaluations(self) -> int:
        return sum(t.evaluations for t in self.trials)

    @property
    def mean_objective(self) -> float:
        """Mean objective over every recorded member of every trial."""
        if self.evaluations == 0:
            return float("nan")
        return sum(t.objective_sum for t in self.trials) / self.evaluations

    @property
    def mean_transferral(self) -> float | None:
        """Transferral of the mean objective for minimization problems, None otherwise."""
        if self.function.is_maximize:
            return None
        return float(self.function.transferral(self.mean_objective))

    def report(self) -> str:
        """Format the experiment summary as printed by the command line."""
        is_max = self.function.is_maximize
        sections = [
            f"Function: {type(self.function).__name__}",
            f"Crossover: {self.crossover.name}",
            f"Trials: {len(self.trials)}",
            f"Optimal Solution: {self.function.optimal_value}",
            "",
            "Best Individual:",
            self.best.describe(is_max),
            "",
            "Worst Individual:",
            self.worst.describe(is_max),
            "",
            "Mean Individual:",
            f"  Objective Value: {self.mean_objective}",
        ]
        if not is_max:
            sections.append(f"  Fitness Transferral: {self.mean_transferral}")
        return "\n".join(sections)


def _extreme(snapshots: Sequence[IndividualSnapshot], maximize: bool) -> IndividualSnapshot:
    chosen = snapshots[0]
    for snap in snapshots[1:]:
        if is_better(snap.objective_value, chosen.objective_value, maximize):
            chosen = snap
    return chosen
