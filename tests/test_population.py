"""Tests for BinaryPopulation and ContinuousPopulation."""

import logging

import numpy as np
import pytest

from sga_variation import (
    BinaryCrossover,
    BinaryIndividual,
    BinaryPopulation,
    ConfigurationError,
    ContinuousCrossover,
    ContinuousIndividual,
    ContinuousPopulation,
    RetryLimitExceededError,
    ZeroFitnessError,
)


def run_generations(pop, n: int) -> None:
    for _ in range(n):
        pop.select()
        pop.reproduce()


# =============================================================================
# Construction
# =============================================================================


class TestBinaryPopulationInit:
    """Tests for BinaryPopulation construction."""

    def test_members_and_empty_mating_pool(self, function1) -> None:
        """A new population has pop_size members and an empty pool."""
        pop = BinaryPopulation(function1, pop_size=10, rng=0)
        assert len(pop) == 10
        assert all(isinstance(m, BinaryIndividual) for m in pop)
        assert pop.mating_pool == [None] * 10
        assert pop.generation == 0

    def test_default_settings(self, function1) -> None:
        """Defaults match the standard run configuration."""
        pop = BinaryPopulation(function1, rng=0)
        assert len(pop) == 20
        assert pop.crossover_kind is BinaryCrossover.SINGLE_POINT
        assert pop.crossover_prob == 0.8
        assert pop.mutation_prob == 0.01
        assert pop.is_gray is False

    def test_relative_fitness_sums_to_one(self, function3) -> None:
        """Relative fitness sums to one after construction."""
        pop = BinaryPopulation(function3, rng=1)
        assert pop.relative_fitness.sum() == pytest.approx(1.0)

    def test_relative_fitness_proportional_to_weight(self, function1) -> None:
        """Relative fitness is proportional to selection weight."""
        pop = BinaryPopulation(function1, rng=1)
        np.testing.assert_allclose(pop.relative_fitness, pop.weights / pop.weights.sum())

    def test_gray_members(self, function1) -> None:
        """Members of a gray population carry the gray flag."""
        pop = BinaryPopulation(function1, pop_size=4, is_gray=True, rng=0)
        assert all(m.is_gray for m in pop)

    def test_crossover_by_name_and_id(self, function1) -> None:
        """Operators can be given by name or integer id."""
        assert BinaryPopulation(function1, "ring", rng=0).crossover_kind is BinaryCrossover.RING
        assert BinaryPopulation(function1, 7, rng=0).crossover_kind is BinaryCrossover.SHUFFLE

    def test_unknown_crossover_falls_back(self, function1, caplog) -> None:
        """Unknown operators fall back to single point."""
        with caplog.at_level(logging.WARNING):
            pop = BinaryPopulation(function1, 99, rng=0)
        assert pop.crossover_kind is BinaryCrossover.SINGLE_POINT
        assert "Using SINGLE_POINT" in caplog.text

    def test_odd_pop_size_raises(self, function1) -> None:
        """An odd pop_size raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="pop_size must be even"):
            BinaryPopulation(function1, pop_size=7, rng=0)

    def test_pop_size_below_two_raises(self, function1) -> None:
        """pop_size below two raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="pop_size must be at least 2"):
            BinaryPopulation(function1, pop_size=0, rng=0)

    def test_three_parent_needs_four_members(self, function1) -> None:
        """Three-parent crossover requires at least four members."""
        with pytest.raises(ConfigurationError, match="pop_size must be at least 4, got 2"):
            BinaryPopulation(function1, BinaryCrossover.THREE_PARENT, pop_size=2, rng=0)

    def test_invalid_mutation_prob_raises(self, function1) -> None:
        """Out-of-range mutation probability raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="mutation_prob"):
            BinaryPopulation(function1, rng=0, mutation_prob=2.0)

    def test_zero_total_weight_raises(self, flat_function) -> None:
        """A population with no positive weight raises ZeroFitnessError."""
        with pytest.raises(ZeroFitnessError):
            BinaryPopulation(flat_function, pop_size=4, rng=0)

    def test_same_seed_same_members(self, function2) -> None:
        """The same seed gives the same members."""
        a = BinaryPopulation(function2, rng=5)
        b = BinaryPopulation(function2, rng=np.random.default_rng(5))
        for x, y in zip(a, b, strict=True):
            np.testing.assert_array_equal(x.chromosome, y.chromosome)


class TestContinuousPopulationInit:
    """Tests for ContinuousPopulation construction."""

    def test_members_within_bounds(self, function3) -> None:
        """Members are drawn inside the bounds."""
        pop = ContinuousPopulation(function3, rng=0)
        assert all(isinstance(m, ContinuousIndividual) and m.in_bounds() for m in pop)

    def test_default_crossover(self, function2) -> None:
        """The default operator is whole arithmetic."""
        assert ContinuousPopulation(function2, rng=0).crossover_kind is ContinuousCrossover.WHOLE_ARITHMETIC

    def test_unknown_crossover_falls_back(self, function2) -> None:
        """Unknown operators fall back to whole arithmetic."""
        pop = ContinuousPopulation(function2, "single_point", rng=0)
        assert pop.crossover_kind is ContinuousCrossover.WHOLE_ARITHMETIC

    def test_invalid_max_retries_raises(self, function2) -> None:
        """Non-positive max_retries raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="max_retries must be positive"):
            ContinuousPopulation(function2, rng=0, max_retries=0)


# =============================================================================
# Generation cycle
# =============================================================================


class TestSelect:
    """Tests for select()."""

    def test_fills_mating_pool_with_clones(self, function1) -> None:
        """select() fills the pool with copies, not the members themselves."""
        pop = BinaryPopulation(function1, pop_size=10, rng=0)
        pop.select()

        assert all(p is not None for p in pop.mating_pool)
        member_ids = {id(m) for m in pop.members}
        assert all(id(p) not in member_ids for p in pop.mating_pool)

    def test_mating_pool_drawn_from_members(self, function1) -> None:
        """Every pool entry matches some member."""
        pop = BinaryPopulation(function1, pop_size=10, rng=0)
        pop.select()
        genotypes = {m.genotype for m in pop.members}
        assert all(p.genotype in genotypes for p in pop.mating_pool)


class TestReproduce:
    """Tests for reproduce()."""

    def test_without_select_raises(self, function1) -> None:
        """reproduce() before select() raises RuntimeError."""
        pop = BinaryPopulation(function1, pop_size=4, rng=0)
        with pytest.raises(RuntimeError, match="call select\\(\\) before reproduce\\(\\)"):
            pop.reproduce()

    def test_replaces_members_and_clears_pool(self, function1) -> None:
        """reproduce() installs offspring and empties the pool."""
        pop = BinaryPopulation(function1, pop_size=10, rng=0)
        old = list(pop.members)
        pop.select()
        pop.reproduce()

        assert len(pop) == 10
        assert all(m not in old for m in pop.members)
        assert pop.mating_pool == [None] * 10
        assert pop.generation == 1
        assert pop.relative_fitness.sum() == pytest.approx(1.0)

    def test_no_crossover_no_mutation_copies_mating_pool(self, function2) -> None:
        """Without variation the offspring equal the mating pool."""
        pop = BinaryPopulation(function2, pop_size=6, rng=0, crossover_prob=0.0, mutation_prob=0.0)
        pop.select()
        pool = [p.genotype for p in pop.mating_pool]
        pop.reproduce()
        assert [m.genotype for m in pop.members] == pool

    @pytest.mark.parametrize("kind", list(BinaryCrossover))
    def test_every_binary_operator_runs(self, kind, function3) -> None:
        """Every binary operator completes several generations."""
        pop = BinaryPopulation(function3, kind, pop_size=8, rng=3)
        run_generations(pop, 5)
        assert len(pop) == 8
        assert all(len(m) == 32 for m in pop)

    @pytest.mark.parametrize("kind", [k for k in ContinuousCrossover if k is not ContinuousCrossover.HEURISTIC])
    def test_every_continuous_operator_runs(self, kind, function3) -> None:
        """Every continuous operator except heuristic completes several generations."""
        pop = ContinuousPopulation(function3, kind, pop_size=8, rng=3)
        run_generations(pop, 5)
        assert len(pop) == 8
        assert all(m.in_bounds() for m in pop)

    def test_heuristic_completes_generations_from_central_cluster(self, function2) -> None:
        """Heuristic crossover keeps a tight central cluster in bounds for several generations."""
        pop = ContinuousPopulation(function2, ContinuousCrossover.HEURISTIC, pop_size=8, rng=3, mutation_prob=0.0)
        # Each generation grows the cluster radius by at most 3.4x; 1e-3 * 3.4**5 < 5
        cluster = np.random.default_rng(0).uniform(-1e-3, 1e-3, size=(8, 5))
        pop.members = [ContinuousIndividual(x, function2) for x in cluster]
        pop._update_relative_fitness()

        run_generations(pop, 5)

        assert pop.generation == 5
        assert all(m.in_bounds() for m in pop)

    def test_heuristic_raises_for_better_parent_near_bound(self, function2) -> None:
        """A pair whose extrapolation always leaves the box aborts reproduce()."""
        pop = ContinuousPopulation(
            function2, ContinuousCrossover.HEURISTIC, pop_size=2, rng=0, crossover_prob=1.0, max_retries=50
        )
        better = ContinuousIndividual([4.5, 0.0, 0.0, 0.0, 0.0], function2)
        worse = ContinuousIndividual([0.0, 4.9, 0.0, 0.0, 0.0], function2)
        pop.mating_pool = [worse, better]

        with pytest.raises(RetryLimitExceededError, match="within 50 retries"):
            pop.reproduce()

    def test_deterministic_for_seed(self, function1) -> None:
        """The same seed gives the same generations."""
        a = BinaryPopulation(function1, BinaryCrossover.UNIFORM, rng=11)
        b = BinaryPopulation(function1, BinaryCrossover.UNIFORM, rng=11)
        run_generations(a, 10)
        run_generations(b, 10)
        assert [m.genotype for m in a] == [m.genotype for m in b]

    def test_evolution_improves_function1(self, function1) -> None:
        """Mean fitness on Function1 rises over 30 generations."""
        pop = BinaryPopulation(function1, pop_size=40, rng=2)
        initial_mean = pop.objective_values.mean()
        run_generations(pop, 30)
        assert pop.objective_values.mean() > initial_mean


class TestThirdParent:
    """Tests for third-parent choice."""

    def test_never_picks_mating_pair(self, function1) -> None:
        """The third parent is never one of the pair."""
        pop = BinaryPopulation(function1, BinaryCrossover.THREE_PARENT, pop_size=6, rng=0)
        pop.select()
        for i in range(0, 6, 2):
            for _ in range(100):
                assert pop._third_parent_index(i) not in (i, i + 1)

    def test_covers_every_other_slot(self, function1) -> None:
        """Every other slot can be drawn as third parent."""
        pop = BinaryPopulation(function1, BinaryCrossover.THREE_PARENT, pop_size=6, rng=0)
        seen = {pop._third_parent_index(2) for _ in range(300)}
        assert seen == {0, 1, 4, 5}

    def test_minimal_population(self, function1) -> None:
        """With four members the third parent comes from the other pair."""
        pop = BinaryPopulation(function1, BinaryCrossover.THREE_PARENT, pop_size=4, rng=0)
        run_generations(pop, 3)
        assert len(pop) == 4


class TestBestWorst:
    """Tests for best() and worst()."""

    def test_maximization(self, function1) -> None:
        """best() and worst() follow the objective when maximizing."""
        pop = BinaryPopulation(function1, rng=0)
        values = pop.objective_values
        assert pop.best().objective_value == values.max()
        assert pop.worst().objective_value == values.min()

    def test_minimization(self, function2) -> None:
        """best() and worst() follow the objective when minimizing."""
        pop = ContinuousPopulation(function2, rng=0)
        values = pop.objective_values
        assert pop.best().objective_value == values.min()
        assert pop.worst().objective_value == values.max()
