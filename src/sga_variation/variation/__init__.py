"""Crossover and mutation operators for both chromosome representations.

This package provides:
- binary: bit-string crossover catalog and bit-flip mutation
- continuous: real-vector crossover catalog and uniform mutation
"""

from sga_variation.variation.binary import (
    bit_flip_mutation,
    dual_point_crossover,
    reduced_surrogate_bounds,
    ring_crossover,
    shuffle_crossover,
    single_point_crossover,
    three_parent_crossover,
    uniform_crossover,
)
from sga_variation.variation.continuous import (
    arithmetic_crossover,
    blend_crossover,
    heuristic_crossover,
    linear_crossover,
    uniform_mutation,
)

__all__ = [
    # Binary
    "single_point_crossover",
    "dual_point_crossover",
    "ring_crossover",
    "uniform_crossover",
    "shuffle_crossover",
    "three_parent_crossover",
    "reduced_surrogate_bounds",
    "bit_flip_mutation",
    # Continuous
    "arithmetic_crossover",
    "linear_crossover",
    "heuristic_crossover",
    "blend_crossover",
    "uniform_mutation",
]
