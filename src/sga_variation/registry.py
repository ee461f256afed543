"""Crossover catalog: operator kinds, factory registry and id resolution.

Each representation has its own enum of operator kinds whose values are the
stable integer ids used by drivers and the command line:

    BinaryCrossover                        ContinuousCrossover
    1 SINGLE_POINT                         1 WHOLE_ARITHMETIC
    2 DUAL_POINT                           2 LOCAL_ARITHMETIC
    3 SINGLE_POINT_REDUCED_SURROGATE       3 LINEAR
    4 DUAL_POINT_REDUCED_SURROGATE         4 HEURISTIC
    5 RING                                 5 BLEND
    6 UNIFORM
    7 SHUFFLE
    8 SHUFFLE_REDUCED_SURROGATE
    9 THREE_PARENT

``CrossoverRegistry`` maps each kind to a factory that builds a configured
CrossoverOperator, and ``resolve_crossover`` turns an enum member, integer
id or name into a kind, falling back to the representation's default (with
a logged warning) when the value is not recognized.

Basic usage:
    ```python
    from sga_variation.registry import BinaryCrossover, CrossoverRegistry, resolve_crossover

    kind = resolve_crossover("ring", BinaryCrossover)
    crossover = CrossoverRegistry.get(kind, crossover_prob=0.9)
    child_a, child_b = crossover([parent_a, parent_b], rng)
    ```
"""

import logging
from collections.abc import Callable
from enum import Enum

from sga_variation.protocols import CrossoverOperator
from sga_variation.variation.binary import (
    dual_point_crossover,
    ring_crossover,
    shuffle_crossover,
    single_point_crossover,
    three_parent_crossover,
    uniform_crossover,
)
from sga_variation.variation.continuous import (
    DEFAULT_MAX_RETRIES,
    arithmetic_crossover,
    blend_crossover,
    heuristic_crossover,
    linear_crossover,
)

logger = logging.getLogger(__name__)


class BinaryCrossover(Enum):
    """Crossover operators for binary chromosomes."""

    SINGLE_POINT = 1
    DUAL_POINT = 2
    SINGLE_POINT_REDUCED_SURROGATE = 3
    DUAL_POINT_REDUCED_SURROGATE = 4
    RING = 5
    UNIFORM = 6
    SHUFFLE = 7
    SHUFFLE_REDUCED_SURROGATE = 8
    THREE_PARENT = 9

    @property
    def n_parents(self) -> int:
        """Number of parents the operator consumes."""
        return 3 if self is BinaryCrossover.THREE_PARENT else 2

    @classmethod
    def default(cls) -> "BinaryCrossover":
        return cls.SINGLE_POINT


class ContinuousCrossover(Enum):
    """Crossover operators for real-valued chromosomes."""

    WHOLE_ARITHMETIC = 1
    LOCAL_ARITHMETIC = 2
    LINEAR = 3
    HEURISTIC = 4
    BLEND = 5

    @property
    def n_parents(self) -> int:
        return 2

    @classmethod
    def default(cls) -> "ContinuousCrossover":
        return cls.WHOLE_ARITHMETIC


CrossoverKind = BinaryCrossover | ContinuousCrossover

# Abbreviations accepted wherever an operator name is
_ALIASES: dict[str, CrossoverKind] = {
    "spc": BinaryCrossover.SINGLE_POINT,
    "dpc": BinaryCrossover.DUAL_POINT,
    "spcrs": BinaryCrossover.SINGLE_POINT_REDUCED_SURROGATE,
    "dpcrs": BinaryCrossover.DUAL_POINT_REDUCED_SURROGATE,
    "rc": BinaryCrossover.RING,
    "uc": BinaryCrossover.UNIFORM,
    "sc": BinaryCrossover.SHUFFLE,
    "scrs": BinaryCrossover.SHUFFLE_REDUCED_SURROGATE,
    "tpc": BinaryCrossover.THREE_PARENT,
    "wac": ContinuousCrossover.WHOLE_ARITHMETIC,
    "lac": ContinuousCrossover.LOCAL_ARITHMETIC,
    "lc": ContinuousCrossover.LINEAR,
    "hc": ContinuousCrossover.HEURISTIC,
    "bc": ContinuousCrossover.BLEND,
}


class CrossoverRegistry:
    """Registry of crossover operator factories keyed by operator kind.

    Binary factories accept ``crossover_prob``; continuous factories accept
    ``crossover_prob`` and ``max_retries``.

    Class Attributes:
        _registry: Dictionary mapping operator kinds to factory functions.

    Example:
        ```python
        CrossoverRegistry.register(BinaryCrossover.UNIFORM, lambda crossover_prob=0.8: my_uniform(crossover_prob))
        crossover = CrossoverRegistry.get(BinaryCrossover.UNIFORM, crossover_prob=0.6)
        CrossoverRegistry.list(BinaryCrossover)  # [BinaryCrossover.SINGLE_POINT, ...]
        ```
    """

    _registry: dict[CrossoverKind, Callable[..., CrossoverOperator]] = {}

    @classmethod
    def register(cls, kind: CrossoverKind, factory: Callable[..., CrossoverOperator]) -> None:
        """Register a factory for ``kind``. Will overwrite if already registered."""
        cls._registry[kind] = factory

    @classmethod
    def get(cls, kind: CrossoverKind, **kwargs) -> CrossoverOperator:
        """Build a configured operator for ``kind``.

        Args:
            kind: Operator kind.
            **kwargs: Configuration passed to the factory.

        Returns:
            A CrossoverOperator.

        Raises:
            KeyError: If no factory is registered for ``kind``. The message
                lists the registered kinds.
        """
        if kind not in cls._registry:
            available = ", ".join(k.name.lower() for k in cls._registry) or "none"
            raise KeyError(f"Crossover operator '{kind}' not found. Available operators: {available}")
        return cls._registry[kind](**kwargs)

    @classmethod
    def list(cls, representation: type[Enum] | None = None) -> list[CrossoverKind]:
        """Return registered kinds ordered by id, optionally for one representation."""
        kinds = [k for k in cls._registry if representation is None or isinstance(k, representation)]
        return sorted(kinds, key=lambda k: (type(k).__name__, k.value))


def resolve_crossover(value, representation: type[Enum]) -> CrossoverKind:
    """Resolve an operator kind from an enum member, integer id or name.

    Names are matched case-insensitively against enum member names (with
    ``-`` or spaces treated as ``_``) and the short aliases (``spc``,
    ``tpc``, ``wac``, ...). Unrecognized values fall back to
    ``representation.default()`` and log a warning.

    Args:
        value: Enum member, integer id or name.
        representation: ``BinaryCrossover`` or ``ContinuousCrossover``.

    Returns:
        A member of ``representation``.

    Examples:
        >>> resolve_crossover(5, BinaryCrossover)
        <BinaryCrossover.RING: 5>
        >>> resolve_crossover("blend", ContinuousCrossover)
        <ContinuousCrossover.BLEND: 5>
        >>> resolve_crossover(42, BinaryCrossover)
        <BinaryCrossover.SINGLE_POINT: 1>
    """
    if isinstance(value, representation):
        return value

    if isinstance(value, str):
        key = value.strip().lower().replace("-", "_").replace(" ", "_")
        alias = _ALIASES.get(key)
        if isinstance(alias, representation):
            return alias
        if key.upper() in representation.__members__:
            return representation[key.upper()]
        if key.isdigit():
            value = int(key)

    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return representation(value)
        except ValueError:
            pass

    fallback = representation.default()
    logger.warning(
        "Invalid %s id %r. Using %s.",
        representation.__name__,
        value,
        fallback.name,
    )
    return fallback


# Register built-in binary operators
CrossoverRegistry.register(BinaryCrossover.SINGLE_POINT, lambda crossover_prob=0.8: single_point_crossover(crossover_prob))
CrossoverRegistry.register(BinaryCrossover.DUAL_POINT, lambda crossover_prob=0.8: dual_point_crossover(crossover_prob))
CrossoverRegistry.register(
    BinaryCrossover.SINGLE_POINT_REDUCED_SURROGATE,
    lambda crossover_prob=0.8: single_point_crossover(crossover_prob, reduced_surrogate=True),
)
CrossoverRegistry.register(
    BinaryCrossover.DUAL_POINT_REDUCED_SURROGATE,
    lambda crossover_prob=0.8: dual_point_crossover(crossover_prob, reduced_surrogate=True),
)
CrossoverRegistry.register(BinaryCrossover.RING, lambda crossover_prob=0.8: ring_crossover(crossover_prob))
CrossoverRegistry.register(BinaryCrossover.UNIFORM, lambda crossover_prob=0.8: uniform_crossover(crossover_prob))
CrossoverRegistry.register(BinaryCrossover.SHUFFLE, lambda crossover_prob=0.8: shuffle_crossover(crossover_prob))
CrossoverRegistry.register(
    BinaryCrossover.SHUFFLE_REDUCED_SURROGATE,
    lambda crossover_prob=0.8: shuffle_crossover(crossover_prob, reduced_surrogate=True),
)
CrossoverRegistry.register(BinaryCrossover.THREE_PARENT, lambda crossover_prob=0.8: three_parent_crossover(crossover_prob))

# Register built-in continuous operators
CrossoverRegistry.register(
    ContinuousCrossover.WHOLE_ARITHMETIC,
    lambda crossover_prob=0.8, max_retries=DEFAULT_MAX_RETRIES: arithmetic_crossover(crossover_prob, local=False),
)
CrossoverRegistry.register(
    ContinuousCrossover.LOCAL_ARITHMETIC,
    lambda crossover_prob=0.8, max_retries=DEFAULT_MAX_RETRIES: arithmetic_crossover(crossover_prob, local=True),
)
CrossoverRegistry.register(
    ContinuousCrossover.LINEAR,
    lambda crossover_prob=0.8, max_retries=DEFAULT_MAX_RETRIES: linear_crossover(crossover_prob),
)
CrossoverRegistry.register(
    ContinuousCrossover.HEURISTIC,
    lambda crossover_prob=0.8, max_retries=DEFAULT_MAX_RETRIES: heuristic_crossover(crossover_prob, max_retries),
)
CrossoverRegistry.register(
    ContinuousCrossover.BLEND,
    lambda crossover_prob=0.8, max_retries=DEFAULT_MAX_RETRIES: blend_crossover(crossover_prob, max_retries=max_retries),
)
