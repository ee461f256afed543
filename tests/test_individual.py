"""Tests for BinaryIndividual and ContinuousIndividual."""

import numpy as np
import pytest

from sga_variation import BinaryIndividual, ContinuousIndividual

CONCRETE_BITS = [1, 1, 0, 1, 0, 1, 1, 0, 0, 1, 0, 1]


class TestBinaryIndividual:
    """Tests for the binary representation."""

    def test_concrete_scenario(self, function1) -> None:
        """Known chromosome decodes, evaluates and renders as expected."""
        ind = BinaryIndividual(CONCRETE_BITS, function1)

        assert ind.phenotype[0] == pytest.approx(0.953369, abs=8e-4)
        assert ind.objective_value == pytest.approx(1.051966, abs=8e-4)
        assert ind.genotype == "101001101011"

    def test_maximization_transferral_equals_objective(self, function1) -> None:
        """For maximization the transferral is the objective."""
        ind = BinaryIndividual(CONCRETE_BITS, function1)
        assert ind.transferral_value == ind.objective_value
        assert ind.weight == ind.objective_value

    def test_minimization_weight_is_transferral(self, function3, rng) -> None:
        """For minimization the selection weight is the transferral."""
        ind = BinaryIndividual.random(function3, rng)
        assert ind.transferral_value == pytest.approx(25.0 - ind.objective_value)
        assert ind.weight == ind.transferral_value

    def test_wrong_length_raises(self, function1) -> None:
        """A chromosome of the wrong length raises ValueError."""
        with pytest.raises(ValueError, match="chromosome must have length 12, got 3"):
            BinaryIndividual([1, 0, 1], function1)

    def test_random_has_full_length(self, function2, rng) -> None:
        """Random individuals have the full bit length."""
        ind = BinaryIndividual.random(function2, rng)
        assert len(ind) == 5 * 14
        assert ind.chromosome.dtype == bool

    def test_gray_flag_changes_decoding(self, function1) -> None:
        """The gray flag changes the decoded phenotype."""
        plain = BinaryIndividual(CONCRETE_BITS, function1)
        gray = BinaryIndividual(CONCRETE_BITS, function1, is_gray=True)
        assert gray.phenotype[0] != plain.phenotype[0]

    def test_set_gene_recomputes_values(self, function1) -> None:
        """Setting a gene re-evaluates the individual."""
        ind = BinaryIndividual(np.zeros(12, dtype=bool), function1)
        assert ind.phenotype[0] == -1.0

        ind.set_gene(11, True)

        assert ind.phenotype[0] == pytest.approx(0.5)
        assert ind.objective_value == pytest.approx(0.5 * np.sin(5 * np.pi) + 2.0)

    def test_flip_inverts_selected_bits(self, function1) -> None:
        """flip() inverts the given positions."""
        ind = BinaryIndividual(np.zeros(12, dtype=bool), function1)
        ind.flip(np.array([0, 2]))
        assert ind.chromosome[:4].tolist() == [True, False, True, False]
        assert ind.phenotype[0] == pytest.approx(5 / 4096 * 3 - 1)

    def test_chromosome_property_is_a_copy(self, function1) -> None:
        """Editing the returned chromosome leaves the individual unchanged."""
        ind = BinaryIndividual(CONCRETE_BITS, function1)
        bits = ind.chromosome
        bits[:] = False
        assert ind.genotype == "101001101011"

    def test_set_chromosome_length_change_raises(self, function1) -> None:
        """Replacing the chromosome with a new length raises ValueError."""
        ind = BinaryIndividual(CONCRETE_BITS, function1)
        with pytest.raises(ValueError, match="chromosome must have length 12"):
            ind.set_chromosome([1, 0])

    def test_str_shows_transferral_only_for_minimization(self, function1, function3, rng) -> None:
        """Transferral is printed only for minimization problems."""
        assert "Fitness Transferral" not in str(BinaryIndividual(CONCRETE_BITS, function1))
        assert "Fitness Transferral" in str(BinaryIndividual.random(function3, rng))


class TestCopy:
    """Tests for cloning."""

    def test_copy_reproduces_values(self, function3, rng) -> None:
        """Cloning and re-evaluating reproduces identical values."""
        ind = BinaryIndividual.random(function3, rng)
        clone = ind.copy()
        clone.update_values()

        np.testing.assert_array_equal(clone.chromosome, ind.chromosome)
        np.testing.assert_array_equal(clone.phenotype, ind.phenotype)
        assert clone.objective_value == ind.objective_value
        assert clone.transferral_value == ind.transferral_value

    def test_copy_is_independent(self, function1) -> None:
        """Changes to a copy do not reach the original."""
        ind = BinaryIndividual(CONCRETE_BITS, function1)
        clone = ind.copy()
        clone.set_gene(0, False)
        assert ind.get_gene(0) is True

    def test_copy_resets_relative_fitness(self, function1) -> None:
        """A copy starts with zero relative fitness."""
        ind = BinaryIndividual(CONCRETE_BITS, function1)
        ind.relative_fitness = 0.4
        assert ind.copy().relative_fitness == 0.0

    def test_copy_keeps_gray_flag(self, function1) -> None:
        """A copy keeps the gray flag."""
        ind = BinaryIndividual(CONCRETE_BITS, function1, is_gray=True)
        assert ind.copy().is_gray is True

    def test_continuous_copy_reproduces_values(self, continuous_parents) -> None:
        """Continuous copies carry the same values."""
        ind, _ = continuous_parents
        clone = ind.copy()
        np.testing.assert_array_equal(clone.chromosome, ind.chromosome)
        assert clone.objective_value == ind.objective_value


class TestContinuousIndividual:
    """Tests for the continuous representation."""

    def test_chromosome_is_phenotype(self, continuous_parents) -> None:
        """The phenotype equals the chromosome."""
        ind, _ = continuous_parents
        np.testing.assert_array_equal(ind.phenotype, ind.chromosome)

    def test_sphere_values(self, function2) -> None:
        """Objective and transferral match the sphere function."""
        ind = ContinuousIndividual([1.0, 0.0, 0.0, 0.0, 2.0], function2)
        assert ind.objective_value == 5.0
        assert ind.transferral_value == 120.0

    def test_random_within_bounds(self, function3, rng) -> None:
        """Random individuals lie within the bounds."""
        for _ in range(50):
            assert ContinuousIndividual.random(function3, rng).in_bounds()

    def test_wrong_length_raises(self, function2) -> None:
        """A chromosome of the wrong length raises ValueError."""
        with pytest.raises(ValueError, match="chromosome must have length 5, got 2"):
            ContinuousIndividual([0.0, 1.0], function2)

    def test_set_gene_recomputes_values(self, function2) -> None:
        """Setting a gene re-evaluates the individual."""
        ind = ContinuousIndividual(np.zeros(5), function2)
        ind.set_gene(2, 3.0)
        assert ind.get_gene(2) == 3.0
        assert ind.objective_value == 9.0

    def test_in_bounds_detects_violation(self, function2) -> None:
        """in_bounds() is False once a gene leaves the box."""
        assert not ContinuousIndividual([0.0, 0.0, 6.0, 0.0, 0.0], function2).in_bounds()
