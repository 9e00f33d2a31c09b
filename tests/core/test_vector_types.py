"""
Unit tests for the real, complex and binary vector algebras.

Tests validate:
1. Elemental vector shape and sparsity per vector type
2. Rotation (permutation) invertibility
3. Normalization, including the zero-vector case
4. Binary majority voting and order independence
"""

import pytest
import torch

from semvec.config.options import VectorType
from semvec.core.vector_types import (
    BinaryAlgebra,
    ComplexAlgebra,
    RealAlgebra,
    algebra_for,
)
from semvec.errors import ConfigurationError


ALL_TYPES = [VectorType.REAL, VectorType.COMPLEX, VectorType.BINARY]


class TestAlgebraSelection:
    """Test selecting an algebra for a run."""

    def test_algebra_for_each_type(self):
        assert isinstance(algebra_for(VectorType.REAL, 8), RealAlgebra)
        assert isinstance(algebra_for(VectorType.COMPLEX, 8), ComplexAlgebra)
        assert isinstance(algebra_for(VectorType.BINARY, 8), BinaryAlgebra)

    def test_algebra_for_string_value(self):
        assert isinstance(algebra_for("binary", 8), BinaryAlgebra)

    def test_unknown_type_rejected(self):
        with pytest.raises(ConfigurationError):
            algebra_for("quaternion", 8)

    def test_non_positive_dimension_rejected(self):
        with pytest.raises(ConfigurationError):
            algebra_for(VectorType.REAL, 0)


class TestElementalVectors:
    """Elemental vectors have the configured dimension and sparsity."""

    @pytest.mark.parametrize("vector_type", [VectorType.REAL, VectorType.COMPLEX])
    def test_dimension_and_seed_length(self, vector_type):
        algebra = algebra_for(vector_type, 100)
        vector = algebra.elemental(seed=7, seed_length=10)

        assert vector.shape == (100,)
        assert int(torch.count_nonzero(vector)) == 10

    def test_real_entries_are_plus_minus_one(self):
        vector = algebra_for(VectorType.REAL, 100).elemental(seed=3, seed_length=20)
        values = set(vector[vector != 0].tolist())
        assert values <= {-1.0, 1.0}

    def test_dtypes(self):
        assert algebra_for(VectorType.REAL, 8).elemental(1, 2).dtype == torch.float32
        assert algebra_for(VectorType.COMPLEX, 8).elemental(1, 2).dtype == torch.complex64
        assert algebra_for(VectorType.BINARY, 8).elemental(1, 2).dtype == torch.bool

    @pytest.mark.parametrize("vector_type", ALL_TYPES)
    def test_same_seed_same_vector(self, vector_type):
        algebra = algebra_for(vector_type, 64)
        assert torch.equal(algebra.elemental(11, 4), algebra.elemental(11, 4))

    @pytest.mark.parametrize("seed_length", [1, 4, 16])
    def test_binary_sets_half_the_bits(self, binary_algebra, seed_length):
        vector = binary_algebra.elemental(seed=5, seed_length=seed_length)
        assert vector.shape == (16,)
        assert int(torch.count_nonzero(vector)) == 8

    def test_seed_length_above_dimension_rejected(self, real_algebra):
        with pytest.raises(ConfigurationError):
            real_algebra.elemental(seed=1, seed_length=17)


class TestRotation:
    """Rotation is a cyclic shift and can be undone."""

    def test_rotate_shifts_components(self):
        algebra = algebra_for(VectorType.REAL, 4)
        vector = torch.tensor([1.0, 2.0, 3.0, 4.0])

        assert torch.equal(algebra.rotate(vector, 1), torch.tensor([4.0, 1.0, 2.0, 3.0]))
        assert torch.equal(algebra.rotate(vector, -1), torch.tensor([2.0, 3.0, 4.0, 1.0]))

    @pytest.mark.parametrize("vector_type", ALL_TYPES)
    def test_rotate_is_invertible(self, vector_type):
        algebra = algebra_for(vector_type, 16)
        vector = algebra.elemental(seed=21, seed_length=5)

        for shift in range(-20, 21):
            restored = algebra.rotate(algebra.rotate(vector, shift), -shift)
            assert torch.equal(restored, vector)

    def test_rotate_returns_plain_tensor(self, real_algebra):
        rotated = real_algebra.rotate(real_algebra.elemental(1, 3), 2)
        assert type(rotated) is torch.Tensor


class TestNormalization:
    """Normalization rescales to unit length and leaves zero vectors alone."""

    def test_real_unit_length(self, real_algebra):
        vector = real_algebra.weighted(real_algebra.elemental(2, 6), 3.5)
        normalized = real_algebra.normalize(vector)
        assert torch.linalg.vector_norm(normalized).item() == pytest.approx(1.0, abs=1e-6)

    def test_complex_unit_length(self):
        algebra = algebra_for(VectorType.COMPLEX, 16)
        vector = algebra.elemental(2, 6) * (2.0 + 1.0j)
        normalized = algebra.normalize(vector)
        assert torch.linalg.vector_norm(normalized).item() == pytest.approx(1.0, abs=1e-6)

    @pytest.mark.parametrize("vector_type", [VectorType.REAL, VectorType.COMPLEX])
    def test_zero_vector_unchanged(self, vector_type):
        algebra = algebra_for(vector_type, 8)
        zero = algebra.zeros()
        assert torch.equal(algebra.normalize(zero), zero)


class TestBinaryVoting:
    """Binary vectors accumulate as vote tallies and normalize by majority."""

    def test_majority_vote(self):
        algebra = algebra_for(VectorType.BINARY, 4)
        tally = algebra.zeros()
        for bits in ([1, 1, 0, 0], [1, 0, 1, 0], [1, 0, 0, 0]):
            algebra.add(tally, algebra.weighted(torch.tensor(bits, dtype=torch.bool), 1.0))

        assert algebra.normalize(tally).tolist() == [True, False, False, False]

    def test_zero_tally_normalizes_to_zero_bits(self, binary_algebra):
        bits = binary_algebra.normalize(binary_algebra.zeros())
        assert bits.dtype == torch.bool
        assert not bool(bits.any())

    def test_tally_is_order_independent(self, binary_algebra):
        vectors = [binary_algebra.elemental(seed, 8) for seed in range(5)]
        weights = [0.3, 0.7, 0.1, 1.9, 0.45]

        forward = binary_algebra.zeros()
        for vector, weight in zip(vectors, weights):
            binary_algebra.add(forward, binary_algebra.weighted(vector, weight))
        backward = binary_algebra.zeros()
        for vector, weight in reversed(list(zip(vectors, weights))):
            binary_algebra.add(backward, binary_algebra.weighted(vector, weight))

        assert torch.equal(forward, backward)

    def test_as_seed_of_tally(self, binary_algebra):
        tally = torch.tensor([3, -1, -4, 2] * 4, dtype=torch.int64)
        seed = binary_algebra.as_seed(tally)
        assert seed[:4].tolist() == [True, False, False, True]

    def test_ties_follow_a_fixed_pattern(self):
        algebra = algebra_for(VectorType.BINARY, 1000)
        tally = torch.zeros(1000, dtype=torch.int64)
        tally[0] = 5
        tally[1] = -5

        bits = algebra.normalize(tally)

        assert bits[0] and not bits[1]
        assert 400 < int(torch.count_nonzero(bits)) < 600
        assert torch.equal(bits, algebra.normalize(tally.clone()))

    def test_summed_elementals_keep_their_bits(self):
        algebra = algebra_for(VectorType.BINARY, 1000)
        tally = algebra.zeros()
        for seed in range(3):
            algebra.add(tally, algebra.weighted(algebra.elemental(seed, 10), 1.0))

        bits = algebra.normalize(tally)

        assert 350 < int(torch.count_nonzero(bits)) < 650
        for seed in range(3):
            assert algebra.similarity(bits, algebra.elemental(seed, 10)) > 0.3

    def test_bind_is_xor(self):
        algebra = algebra_for(VectorType.BINARY, 4)
        a = torch.tensor([True, True, False, False])
        b = torch.tensor([True, False, True, False])
        assert algebra.bind(a, b).tolist() == [False, True, True, False]


class TestSimilarity:
    """Similarity and distance per vector type."""

    @pytest.mark.parametrize("vector_type", ALL_TYPES)
    def test_self_similarity(self, vector_type):
        algebra = algebra_for(vector_type, 64)
        vector = algebra.elemental(9, 8)
        assert algebra.similarity(vector, vector) == pytest.approx(1.0, abs=1e-6)
        assert algebra.distance(vector, vector) == pytest.approx(0.0, abs=1e-6)

    def test_binary_complement(self, binary_algebra):
        vector = binary_algebra.elemental(4, 8)
        assert binary_algebra.similarity(vector, ~vector) == pytest.approx(-1.0)

    def test_similarity_with_zero_vector(self, real_algebra):
        vector = real_algebra.elemental(4, 3)
        assert real_algebra.similarity(vector, real_algebra.zeros()) == 0.0


class TestValidation:
    """Vectors outside the algebra are rejected."""

    def test_wrong_dimension(self, real_algebra):
        with pytest.raises(ValueError):
            real_algebra.validate_vector(torch.zeros(15))

    def test_wrong_dtype(self, real_algebra):
        with pytest.raises(ValueError):
            real_algebra.validate_vector(torch.zeros(16, dtype=torch.int32))

    def test_binary_accepts_bits_and_tallies(self, binary_algebra):
        binary_algebra.validate_vector(torch.zeros(16, dtype=torch.bool))
        binary_algebra.validate_vector(torch.zeros(16, dtype=torch.int64))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
