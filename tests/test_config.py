"""Tests for GAConfig and the error hierarchy."""

import pytest

from sga_variation import ConfigurationError, GAConfig, RetryLimitExceededError, SGAVariationError, ZeroFitnessError


class TestGAConfig:
    """Tests for GAConfig."""

    def test_defaults(self) -> None:
        """Defaults match the standard run configuration."""
        config = GAConfig()
        assert config.pop_size == 20
        assert config.max_generations == 20
        assert config.crossover_prob == 0.8
        assert config.mutation_prob == 0.01
        assert config.n_trials == 30
        assert config.is_gray is False
        assert config.max_retries == 1000

    def test_is_frozen(self) -> None:
        """GAConfig cannot be mutated."""
        config = GAConfig()
        with pytest.raises(AttributeError):
            config.pop_size = 10  # type: ignore[misc]

    def test_replace_returns_modified_copy(self) -> None:
        """replace() returns a new config with the given fields changed."""
        config = GAConfig()
        changed = config.replace(n_trials=3, is_gray=True)
        assert changed.n_trials == 3
        assert changed.is_gray is True
        assert config.n_trials == 30

    def test_replace_validates(self) -> None:
        """replace() validates the new values."""
        with pytest.raises(ConfigurationError, match="pop_size must be even"):
            GAConfig().replace(pop_size=5)

    @pytest.mark.parametrize(
        "kwargs,message",
        [
            ({"pop_size": 0}, "pop_size must be at least 2"),
            ({"pop_size": 9}, "pop_size must be even for pairwise mating, got 9"),
            ({"max_generations": -1}, "max_generations must be non-negative"),
            ({"crossover_prob": 1.2}, "crossover_prob must be in"),
            ({"mutation_prob": -0.1}, "mutation_prob must be in"),
            ({"n_trials": 0}, "n_trials must be positive"),
            ({"max_retries": 0}, "max_retries must be positive"),
        ],
    )
    def test_invalid_values_raise(self, kwargs, message) -> None:
        """Invalid values raise ConfigurationError."""
        with pytest.raises(ConfigurationError, match=message):
            GAConfig(**kwargs)

    def test_zero_generations_allowed(self) -> None:
        """Zero generations is a valid configuration."""
        assert GAConfig(max_generations=0).max_generations == 0


class TestExceptions:
    """Tests for the error hierarchy."""

    def test_configuration_error_is_value_error(self) -> None:
        """ConfigurationError is a ValueError."""
        assert issubclass(ConfigurationError, ValueError)
        assert issubclass(ConfigurationError, SGAVariationError)

    def test_zero_fitness_error_is_arithmetic_error(self) -> None:
        """ZeroFitnessError is an ArithmeticError."""
        assert issubclass(ZeroFitnessError, ArithmeticError)
        assert issubclass(ZeroFitnessError, SGAVariationError)

    def test_retry_limit_error_is_runtime_error(self) -> None:
        """RetryLimitExceededError is a RuntimeError."""
        assert issubclass(RetryLimitExceededError, RuntimeError)
        assert issubclass(RetryLimitExceededError, SGAVariationError)
