"""Fitness-proportionate (roulette wheel) selection.

This module provides the two pure functions behind a population's
``select()`` step:
- relative_fitness: normalize selection weights so they sum to 1
- roulette_wheel: sample indices with replacement, proportional to weight
"""

import numpy as np

from sga_variation.exceptions import ZeroFitnessError


def relative_fitness(weights: np.ndarray) -> np.ndarray:
    """Normalize selection weights to relative fitness values.

    For weights w_i the relative fitness is ``w_i / sum(w)``. For
    maximization problems the weights are raw objective values; for
    minimization problems they are transferral values.

    Args:
        weights: Selection weights, shape (n,).

    Returns:
        Array of shape (n,) summing to 1 (within floating point tolerance).

    Raises:
        ZeroFitnessError: If the weights are empty, any weight is negative,
            or their total is zero or not finite.

    Example:
        >>> relative_fitness(np.array([1.0, 3.0]))
        array([0.25, 0.75])
    """
    weights = np.asarray(weights, dtype=np.float64)
    if weights.size == 0:
        raise ZeroFitnessError("cannot compute relative fitness of an empty population")

    total = weights.sum()
    if not np.isfinite(total) or total <= 0.0:
        raise ZeroFitnessError(
            f"total selection weight must be positive and finite, got {total}; "
            "check the fitness function's transferral for minimization problems"
        )
    if np.any(weights < 0.0):
        negative = np.flatnonzero(weights < 0.0)
        raise ZeroFitnessError(
            f"selection weights must be non-negative, got {weights[negative[0]]} at index {negative[0]}; "
            "check the fitness function's transferral for minimization problems"
        )
    return weights / total


def roulette_wheel(
    rel_fitness: np.ndarray,
    n_select: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """Select indices with replacement using roulette wheel sampling.

    Each individual owns the half-open slice ``[low, low + rel_fitness[i])`` of
    the unit interval, slices laid out contiguously in index order. For each
    of the ``n_select`` slots one ``u ~ U[0, 1)`` is drawn and the owner of
    the slice containing ``u`` is selected. Individuals with zero relative
    fitness are never selected. If accumulated rounding leaves ``u`` beyond
    the last slice, the last individual with a positive share is selected.

    Args:
        rel_fitness: Relative fitness values, shape (n,), summing to ~1.
        n_select: Number of independent draws.
        rng: Random number generator for reproducibility.

    Returns:
        Array of selected indices with shape (n_select,) and dtype np.intp.

    Raises:
        ValueError: If rel_fitness is empty or n_select is negative.

    Example:
        >>> rng = np.random.default_rng(0)
        >>> roulette_wheel(np.array([0.0, 1.0, 0.0]), 4, rng)
        array([1, 1, 1, 1])
    """
    rel_fitness = np.asarray(rel_fitness, dtype=np.float64)
    n = rel_fitness.shape[0]
    if n == 0:
        raise ValueError("roulette wheel selection requires at least one individual")
    if n_select < 0:
        raise ValueError(f"n_select must be non-negative, got {n_select}")

    slice_high = np.cumsum(rel_fitness)
    positive = np.flatnonzero(rel_fitness > 0.0)
    fallback = int(positive[-1]) if positive.size else n - 1
    selected = np.empty(n_select, dtype=np.intp)

    for i in range(n_select):
        u = rng.random()
        # First slice whose upper edge lies strictly above u
        idx = int(np.searchsorted(slice_high, u, side="right"))
        selected[i] = idx if idx < n else fallback

    return selected
