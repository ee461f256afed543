"""Variation operators for binary chromosomes.

Chromosome-level functions (pure, operate on boolean arrays and return new
arrays):
- reduced_surrogate_bounds: narrow cut-point range to where parents differ
- single_point, dual_point, ring, uniform, shuffle, three_parent

Operator factories (wrap a chromosome-level function into a
CrossoverOperator over BinaryIndividual parents, gated by crossover_prob):
- single_point_crossover, dual_point_crossover, ring_crossover,
  uniform_crossover, shuffle_crossover, three_parent_crossover

Mutation:
- bit_flip_mutation

Every operator works on copies of the parents' chromosomes. When the
crossover_prob gate fails, the children are clones of the parents.
"""

from collections.abc import Callable, Sequence

import numpy as np

from sga_variation.exceptions import ConfigurationError
from sga_variation.individual import BinaryIndividual

ChromosomePair = tuple[np.ndarray, np.ndarray]


# =============================================================================
# Chromosome-level operators
# =============================================================================


def reduced_surrogate_bounds(
    a: np.ndarray,
    b: np.ndarray,
    order: np.ndarray | None = None,
) -> tuple[int, int]:
    """Compute cut-point bounds restricted to the span where two chromosomes differ.

    Scanning positions in ``order`` (identity by default), ``lower`` is the
    first position in ``[1, n-1)`` whose bits differ and ``upper`` is the
    largest ``i`` in ``(lower, n-1]`` such that position ``i-1`` differs.
    When no differing position exists in the scanned window (in particular
    for identical parents), the full range ``(0, n-1)`` is returned.

    Args:
        a: First chromosome, boolean array of shape (n,).
        b: Second chromosome, same shape.
        order: Optional permutation of ``range(n)``; position ``k`` of the scan
            reads locus ``order[k]``.

    Returns:
        Tuple ``(lower, upper)`` with ``lower < upper`` whenever ``n >= 2``.

    Examples:
        >>> a = np.array([0, 0, 1, 1, 0, 0], dtype=bool)
        >>> b = np.array([0, 0, 0, 1, 1, 0], dtype=bool)
        >>> reduced_surrogate_bounds(a, b)
        (2, 5)
        >>> reduced_surrogate_bounds(a, a)
        (0, 5)
    """
    n = len(a)
    differs = np.asarray(a, dtype=bool) != np.asarray(b, dtype=bool)
    if order is not None:
        differs = differs[np.asarray(order)]

    lower, upper = 1, n - 1
    for i in range(lower, upper):
        if differs[i]:
            lower = i
            break
    else:
        return 0, max(n - 1, 0)

    for i in range(upper, lower, -1):
        if differs[i - 1]:
            upper = i
            break

    return lower, upper


def _draw_cut(lower: int, upper: int, n: int, rng: np.random.Generator) -> int:
    """Draw one cut point uniformly in [lower, upper], widening to [0, n-1] if empty."""
    if upper < lower:
        lower, upper = 0, max(n - 1, 0)
    return int(rng.integers(lower, upper + 1))


def single_point(
    a: np.ndarray,
    b: np.ndarray,
    rng: np.random.Generator,
    reduced_surrogate: bool = False,
) -> ChromosomePair:
    """Single-point crossover: swap every bit after a random cut point.

    The cut ``c`` is drawn uniformly in ``[1, n-1]`` (or the reduced-surrogate
    range) and bits at positions ``j > c`` are exchanged.

    Args:
        a: First parent chromosome.
        b: Second parent chromosome.
        rng: Random number generator.
        reduced_surrogate: Restrict the cut range to where the parents differ.

    Returns:
        Tuple of two new child chromosomes.
    """
    n = len(a)
    lower, upper = reduced_surrogate_bounds(a, b) if reduced_surrogate else (1, n - 1)
    cut = _draw_cut(lower, upper, n, rng)

    child_a, child_b = a.copy(), b.copy()
    swap = np.arange(n) > cut
    child_a[swap] = b[swap]
    child_b[swap] = a[swap]
    return child_a, child_b


def dual_point(
    a: np.ndarray,
    b: np.ndarray,
    rng: np.random.Generator,
    reduced_surrogate: bool = False,
) -> ChromosomePair:
    """Dual-point crossover: swap the bits between two distinct cut points.

    Two distinct cuts are drawn in ``[1, n-1]`` (or the reduced-surrogate
    range), ordered so ``c1 < c2``, and bits at ``c1 <= j < c2`` are exchanged.
    The second cut is drawn from the candidates remaining after the first, so
    no rejection loop is needed. A range with fewer than two candidates widens
    to ``[0, n-1]``.

    Args:
        a: First parent chromosome.
        b: Second parent chromosome.
        rng: Random number generator.
        reduced_surrogate: Restrict the cut range to where the parents differ.

    Returns:
        Tuple of two new child chromosomes.
    """
    n = len(a)
    lower, upper = reduced_surrogate_bounds(a, b) if reduced_surrogate else (1, n - 1)
    if upper - lower < 1:
        lower, upper = 0, n - 1
    if upper - lower < 1:
        # Single-gene chromosome: nothing to swap between two cuts
        return a.copy(), b.copy()

    cut1 = int(rng.integers(lower, upper + 1))
    cut2 = int(rng.integers(lower, upper))
    if cut2 >= cut1:
        cut2 += 1
    cut1, cut2 = min(cut1, cut2), max(cut1, cut2)

    child_a, child_b = a.copy(), b.copy()
    child_a[cut1:cut2] = b[cut1:cut2]
    child_b[cut1:cut2] = a[cut1:cut2]
    return child_a, child_b


def ring(a: np.ndarray, b: np.ndarray, rng: np.random.Generator) -> ChromosomePair:
    """Ring crossover: read both children off the ring formed by ``a`` followed by ``b``.

    A cut point ``c`` is drawn in ``[1, n-1]``. Child A reads ``n`` bits
    forward from ``c``; child B reads ``n`` bits backward from ``c``. Both
    wrap around the ring of length ``2n``.

    Examples:
        >>> a = np.array([1, 1, 1, 1], dtype=bool)
        >>> b = np.array([0, 0, 0, 0], dtype=bool)
        >>> class FixedCut:
        ...     def integers(self, low, high):
        ...         return 2
        >>> [c.astype(int).tolist() for c in ring(a, b, FixedCut())]
        [[1, 1, 0, 0], [1, 1, 1, 0]]
    """
    n = len(a)
    ring_bits = np.concatenate([a, b])
    size = len(ring_bits)
    cut = _draw_cut(1, n - 1, n, rng)

    steps = np.arange(n)
    child_a = ring_bits[(cut + steps) % size]
    child_b = ring_bits[(cut - steps) % size]
    return child_a, child_b


def uniform(a: np.ndarray, b: np.ndarray, rng: np.random.Generator) -> ChromosomePair:
    """Uniform crossover: swap each bit independently with probability 0.5."""
    swap = rng.random(len(a)) < 0.5
    child_a, child_b = a.copy(), b.copy()
    child_a[swap] = b[swap]
    child_b[swap] = a[swap]
    return child_a, child_b


def shuffle(
    a: np.ndarray,
    b: np.ndarray,
    rng: np.random.Generator,
    reduced_surrogate: bool = False,
) -> ChromosomePair:
    """Shuffle crossover: single-point crossover along a random permutation of loci.

    A permutation of ``range(n)`` is drawn first, then a cut ``c``; the loci at
    permuted positions ``k > c`` are exchanged. With ``reduced_surrogate`` the
    cut range is computed by scanning the parents through the permutation.

    Args:
        a: First parent chromosome.
        b: Second parent chromosome.
        rng: Random number generator.
        reduced_surrogate: Restrict the cut range to where the permuted parents differ.

    Returns:
        Tuple of two new child chromosomes.
    """
    n = len(a)
    order = rng.permutation(n)
    lower, upper = reduced_surrogate_bounds(a, b, order) if reduced_surrogate else (1, n - 1)
    cut = _draw_cut(lower, upper, n, rng)

    loci = order[cut + 1 :]
    child_a, child_b = a.copy(), b.copy()
    child_a[loci] = b[loci]
    child_b[loci] = a[loci]
    return child_a, child_b


def three_parent(a: np.ndarray, b: np.ndarray, c: np.ndarray) -> ChromosomePair:
    """Three-parent crossover.

    Per locus, child A takes A's bit where A and B agree and C's bit
    otherwise; child B takes C's bit where C and B agree and A's bit
    otherwise. Deterministic: consumes no random draws.

    Examples:
        >>> a = np.array([1, 1, 0, 0], dtype=bool)
        >>> b = np.array([1, 0, 1, 0], dtype=bool)
        >>> c = np.array([0, 0, 1, 1], dtype=bool)
        >>> [x.astype(int).tolist() for x in three_parent(a, b, c)]
        [[1, 0, 1, 0], [1, 0, 1, 0]]
    """
    child_a = np.where(a == b, a, c)
    child_b = np.where(c == b, c, a)
    return child_a, child_b


# =============================================================================
# Operator factories
# =============================================================================


def _check_prob(name: str, prob: float) -> None:
    if not 0.0 <= prob <= 1.0:
        raise ConfigurationError(f"{name} must be in [0, 1], got {prob}")


def _gated(
    crossover_prob: float,
    n_parents: int,
    recombine: Callable[..., ChromosomePair],
) -> Callable[[Sequence[BinaryIndividual], np.random.Generator], tuple[BinaryIndividual, BinaryIndividual]]:
    """Wrap a chromosome-level function into a probability-gated individual operator."""
    _check_prob("crossover_prob", crossover_prob)

    def crossover(
        parents: Sequence[BinaryIndividual],
        rng: np.random.Generator,
    ) -> tuple[BinaryIndividual, BinaryIndividual]:
        if len(parents) < n_parents:
            raise ValueError(f"crossover requires {n_parents} parents, got {len(parents)}")
        chromosomes = [p.chromosome for p in parents[:n_parents]]
        if any(len(c) != len(chromosomes[0]) for c in chromosomes):
            raise ValueError(f"parent chromosomes differ in length: {[len(c) for c in chromosomes]}")

        if rng.random() < crossover_prob:
            child_a, child_b = recombine(*chromosomes, rng)
        else:
            child_a, child_b = chromosomes[0], chromosomes[1]

        return parents[0].with_chromosome(child_a), parents[1].with_chromosome(child_b)

    return crossover


def single_point_crossover(crossover_prob: float = 0.8, reduced_surrogate: bool = False):
    """Create a single-point crossover operator.

    Args:
        crossover_prob: Probability of recombining; otherwise parents are cloned.
        reduced_surrogate: Restrict cut points to where the parents differ.

    Returns:
        A CrossoverOperator over two BinaryIndividual parents.

    Example:
        >>> crossover = single_point_crossover(crossover_prob=1.0)
        >>> child_a, child_b = crossover([parent_a, parent_b], rng)
    """
    return _gated(crossover_prob, 2, lambda a, b, rng: single_point(a, b, rng, reduced_surrogate))


def dual_point_crossover(crossover_prob: float = 0.8, reduced_surrogate: bool = False):
    """Create a dual-point crossover operator (see ``dual_point``)."""
    return _gated(crossover_prob, 2, lambda a, b, rng: dual_point(a, b, rng, reduced_surrogate))


def ring_crossover(crossover_prob: float = 0.8):
    """Create a ring crossover operator (see ``ring``)."""
    return _gated(crossover_prob, 2, ring)


def uniform_crossover(crossover_prob: float = 0.8):
    """Create a uniform crossover operator (see ``uniform``)."""
    return _gated(crossover_prob, 2, uniform)


def shuffle_crossover(crossover_prob: float = 0.8, reduced_surrogate: bool = False):
    """Create a shuffle crossover operator (see ``shuffle``)."""
    return _gated(crossover_prob, 2, lambda a, b, rng: shuffle(a, b, rng, reduced_surrogate))


def three_parent_crossover(crossover_prob: float = 0.8):
    """Create a three-parent crossover operator.

    The operator reads ``parents[0]`` and ``parents[1]`` as the mating pair
    (A and B) and ``parents[2]`` as the third parent C. When the gate fails
    the children are clones of A and B.
    """
    return _gated(crossover_prob, 3, lambda a, b, c, rng: three_parent(a, b, c))


# =============================================================================
# Mutation
# =============================================================================


def bit_flip_mutation(
    individual: BinaryIndividual,
    mutation_prob: float,
    rng: np.random.Generator,
) -> None:
    """Flip each bit of ``individual`` in place with probability ``mutation_prob``.

    One uniform draw is consumed per locus, in locus order. The individual
    re-decodes once after all flips.

    Args:
        individual: Individual to mutate.
        mutation_prob: Per-bit flip probability.
        rng: Random number generator.
    """
    flips = rng.random(individual.num_genes) < mutation_prob
    if np.any(flips):
        individual.flip(flips)
