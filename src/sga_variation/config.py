"""Run configuration for the variation testbed."""

from dataclasses import dataclass, replace

from sga_variation.exceptions import ConfigurationError


@dataclass(frozen=True)
class GAConfig:
    """Immutable set of parameters shared by every trial of an experiment.

    Attributes:
        pop_size: Number of individuals per generation. Must be even so the
            mating pool can be paired.
        max_generations: Number of select/reproduce cycles per trial.
        crossover_prob: Probability that a crossover operator recombines its
            parents instead of passing them through unchanged.
        mutation_prob: Per-gene mutation probability.
        n_trials: Number of independent trials run by an experiment.
        is_gray: Decode binary chromosomes as reflected-binary gray code.
        max_retries: Cap on rejection-sampling loops in continuous crossover.

    Example:
        >>> config = GAConfig(pop_size=40, crossover_prob=0.9)
        >>> config.replace(n_trials=5).n_trials
        5
    """

    pop_size: int = 20
    max_generations: int = 20
    crossover_prob: float = 0.8
    mutation_prob: float = 0.01
    n_trials: int = 30
    is_gray: bool = False
    max_retries: int = 1000

    def __post_init__(self) -> None:
        """Validate parameter ranges.

        Raises:
            ConfigurationError: If any parameter is out of range.
        """
        if self.pop_size < 2:
            raise ConfigurationError(f"pop_size must be at least 2, got {self.pop_size}")
        if self.pop_size % 2 != 0:
            raise ConfigurationError(f"pop_size must be even for pairwise mating, got {self.pop_size}")
        if self.max_generations < 0:
            raise ConfigurationError(f"max_generations must be non-negative, got {self.max_generations}")
        if not 0.0 <= self.crossover_prob <= 1.0:
            raise ConfigurationError(f"crossover_prob must be in [0, 1], got {self.crossover_prob}")
        if not 0.0 <= self.mutation_prob <= 1.0:
            raise ConfigurationError(f"mutation_prob must be in [0, 1], got {self.mutation_prob}")
        if self.n_trials <= 0:
            raise ConfigurationError(f"n_trials must be positive, got {self.n_trials}")
        if self.max_retries <= 0:
            raise ConfigurationError(f"max_retries must be positive, got {self.max_retries}")

    def replace(self, **changes) -> "GAConfig":
        """Return a copy of this configuration with the given fields changed."""
        return replace(self, **changes)
