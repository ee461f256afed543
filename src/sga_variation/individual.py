"""Individuals for binary and continuous representations.

This module provides the candidate-solution types evolved by a population:

- BinaryIndividual: a flat bit-string chromosome decoded into real variables
- ContinuousIndividual: a real-valued chromosome used directly as phenotype

Both keep their phenotype, objective value and transferral value consistent
with the chromosome: every change to the genetic material goes through
``set_gene`` or ``set_chromosome``, which recompute all three together.
Chromosome and phenotype accessors return copies, so callers can never alias
an individual's internal state.
"""

import numpy as np

from sga_variation.encoding import decode, genotype_string
from sga_variation.protocols import FitnessFunction


class Individual:
    """State and behavior shared by both representations.

    Attributes:
        function: The fitness function this individual is evaluated against.
        relative_fitness: Selection weight normalized over the owning
            population. Set by the population only; 0.0 until then.
    """

    def __init__(self, chromosome: np.ndarray, function: FitnessFunction) -> None:
        self.function = function
        self._chromosome = chromosome
        self._phenotype = np.empty(0, dtype=np.float64)
        self._objective_value = 0.0
        self._transferral_value = 0.0
        self.relative_fitness = 0.0
        self.update_values()

    def _decode(self) -> np.ndarray:
        raise NotImplementedError

    def _coerce(self, chromosome) -> np.ndarray:
        raise NotImplementedError

    def update_values(self) -> None:
        """Recompute phenotype, objective value and transferral value from the chromosome."""
        self._phenotype = self._decode()
        self._objective_value = float(self.function.evaluate(self._phenotype.copy()))
        if self.function.is_maximize:
            self._transferral_value = self._objective_value
        else:
            self._transferral_value = float(self.function.transferral(self._objective_value))

    @property
    def chromosome(self) -> np.ndarray:
        """Copy of the chromosome."""
        return self._chromosome.copy()

    @property
    def phenotype(self) -> np.ndarray:
        """Copy of the decoded real-valued variables, shape (num_vars,)."""
        return self._phenotype.copy()

    @property
    def objective_value(self) -> float:
        return self._objective_value

    @property
    def transferral_value(self) -> float:
        return self._transferral_value

    @property
    def weight(self) -> float:
        """Selection weight: objective value for maximization, transferral value otherwise."""
        return self._objective_value if self.function.is_maximize else self._transferral_value

    @property
    def num_genes(self) -> int:
        return len(self._chromosome)

    def __len__(self) -> int:
        return len(self._chromosome)

    def get_gene(self, locus: int):
        """Return the gene at ``locus``."""
        return self._chromosome[locus].item()

    def set_gene(self, locus: int, gene) -> None:
        """Replace the gene at ``locus`` and recompute all derived values."""
        self._chromosome[locus] = gene
        self.update_values()

    def set_chromosome(self, chromosome) -> None:
        """Replace the whole chromosome and recompute all derived values.

        Raises:
            ValueError: If the new chromosome length differs from the current one.
        """
        new = self._coerce(chromosome)
        if new.shape != self._chromosome.shape:
            raise ValueError(f"chromosome must have length {len(self._chromosome)}, got {len(new)}")
        self._chromosome = new
        self.update_values()

    def with_chromosome(self, chromosome):
        """Create a new individual of the same kind and settings with another chromosome."""
        raise NotImplementedError

    def copy(self):
        """Return a deep clone with freshly computed values and zero relative fitness."""
        return self.with_chromosome(self._chromosome)


class BinaryIndividual(Individual):
    """Individual with a binary (optionally gray-coded) chromosome.

    The chromosome is a flat boolean array of length
    ``num_vars * genes_per_var``; variable ``v`` occupies loci
    ``[v * genes_per_var, (v + 1) * genes_per_var)``, least significant bit
    first.

    Attributes:
        is_gray: Decode each variable as reflected-binary gray code.

    Example:
        >>> from sga_variation.functions import Function1
        >>> bits = [1, 1, 0, 1, 0, 1, 1, 0, 0, 1, 0, 1]
        >>> ind = BinaryIndividual(bits, Function1())
        >>> ind.genotype
        '101001101011'
        >>> round(float(ind.phenotype[0]), 6)
        0.953369
    """

    def __init__(self, chromosome, function: FitnessFunction, is_gray: bool = False) -> None:
        self.is_gray = is_gray
        expected = function.num_vars * function.genes_per_var
        bits = np.array(chromosome, dtype=bool).ravel()
        if len(bits) != expected:
            raise ValueError(f"chromosome must have length {expected}, got {len(bits)}")
        super().__init__(bits, function)

    @classmethod
    def random(cls, function: FitnessFunction, rng: np.random.Generator, is_gray: bool = False) -> "BinaryIndividual":
        """Create an individual whose bits are independent fair coin flips."""
        n_genes = function.num_vars * function.genes_per_var
        return cls(rng.random(n_genes) < 0.5, function, is_gray)

    def _decode(self) -> np.ndarray:
        return decode(
            self._chromosome,
            self.function.num_vars,
            self.function.lower_bound,
            self.function.upper_bound,
            gray=self.is_gray,
        )

    def _coerce(self, chromosome) -> np.ndarray:
        return np.array(chromosome, dtype=bool).ravel()

    def with_chromosome(self, chromosome) -> "BinaryIndividual":
        return BinaryIndividual(chromosome, self.function, self.is_gray)

    def get_gene(self, locus: int) -> bool:
        return bool(self._chromosome[locus])

    def set_gene(self, locus: int, gene: bool) -> None:
        super().set_gene(locus, bool(gene))

    def flip(self, loci: np.ndarray) -> None:
        """Invert the bits at ``loci`` (indices or boolean mask) and recompute once."""
        bits = self._chromosome.copy()
        bits[loci] = ~bits[loci]
        self.set_chromosome(bits)

    @property
    def genotype(self) -> str:
        """Chromosome as a 0/1 string, most significant bit first per variable."""
        return genotype_string(self._chromosome, self.function.genes_per_var)

    def __repr__(self) -> str:
        return f"BinaryIndividual(genotype='{self.genotype}', objective_value={self._objective_value!r})"

    def __str__(self) -> str:
        lines = [
            f"  Objective Value: {self._objective_value}",
            "  Real Values: [" + ", ".join(str(v) for v in self._phenotype) + "]",
            f"  Relative Fitness: {self.relative_fitness}",
            f"  Genotype: {self.genotype}",
        ]
        if not self.function.is_maximize:
            lines.append(f"  Fitness Transferral: {self._transferral_value}")
        return "\n".join(lines)


class ContinuousIndividual(Individual):
    """Individual whose chromosome is its real-valued phenotype.

    Example:
        >>> from sga_variation.functions import Function2
        >>> ind = ContinuousIndividual([1.0, 0.0, 0.0, 0.0, 2.0], Function2())
        >>> ind.objective_value
        5.0
        >>> ind.transferral_value
        120.0
    """

    def __init__(self, chromosome, function: FitnessFunction) -> None:
        genes = np.array(chromosome, dtype=np.float64).ravel()
        if len(genes) != function.num_vars:
            raise ValueError(f"chromosome must have length {function.num_vars}, got {len(genes)}")
        super().__init__(genes, function)

    @classmethod
    def random(cls, function: FitnessFunction, rng: np.random.Generator) -> "ContinuousIndividual":
        """Create an individual with every gene uniform in [lower_bound, upper_bound)."""
        lower, upper = function.lower_bound, function.upper_bound
        return cls(rng.random(function.num_vars) * (upper - lower) + lower, function)

    def _decode(self) -> np.ndarray:
        return self._chromosome.copy()

    def _coerce(self, chromosome) -> np.ndarray:
        return np.array(chromosome, dtype=np.float64).ravel()

    def with_chromosome(self, chromosome) -> "ContinuousIndividual":
        return ContinuousIndividual(chromosome, self.function)

    def get_gene(self, locus: int) -> float:
        return float(self._chromosome[locus])

    def in_bounds(self) -> bool:
        """True if every gene lies within the function's search bounds."""
        return bool(
            np.all(self._chromosome >= self.function.lower_bound) and np.all(self._chromosome <= self.function.upper_bound)
        )

    def __repr__(self) -> str:
        return f"ContinuousIndividual(chromosome={self._chromosome.tolist()!r}, objective_value={self._objective_value!r})"

    def __str__(self) -> str:
        lines = [
            f"  Objective Value: {self._objective_value}",
            "  Real Values: [" + ", ".join(str(v) for v in self._chromosome) + "]",
            f"  Relative Fitness: {self.relative_fitness}",
        ]
        if not self.function.is_maximize:
            lines.append(f"  Fitness Transferral: {self._transferral_value}")
        return "\n".join(lines)
