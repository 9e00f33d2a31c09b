"""
Tests for the window encoders.

Tests validate:
1. Each encoding's contribution for known offsets
2. Decay functions
3. Proximity position vectors
4. Encoder selection
"""

import pytest
import torch

from semvec.config.options import DecayFunction, EncodingMethod, VectorType
from semvec.core.vector_types import algebra_for
from semvec.errors import ConfigurationError
from semvec.positional.encoders import (
    BasicEncoder,
    DirectionalEncoder,
    PermutationEncoder,
    PermutationPlusBasicEncoder,
    ProximityEncoder,
    create_encoder,
    decay_for,
    encoder_from_settings,
)
from semvec.positional.window import WindowPolicy


@pytest.fixture
def algebra():
    return algebra_for(VectorType.REAL, 8)


@pytest.fixture
def vector():
    return torch.tensor([1.0, 0.0, -1.0, 0.0, 0.0, 0.0, 0.0, 0.0])


class TestDecay:

    def test_linear(self):
        decay = decay_for(DecayFunction.LINEAR, 4)
        assert [decay(d) for d in range(1, 5)] == [1.0, 0.75, 0.5, 0.25]

    def test_inverse(self):
        decay = decay_for(DecayFunction.INVERSE, 4)
        assert decay(1) == 1.0
        assert decay(4) == pytest.approx(0.25)

    def test_flat(self):
        decay = decay_for("flat", 4)
        assert decay(1) == decay(4) == 1.0


class TestContributions:

    def test_basic_ignores_offset(self, algebra, vector):
        encoder = BasicEncoder(algebra)
        assert torch.equal(encoder.contribution(-3, vector, 0.5), vector * 0.5)
        assert torch.equal(encoder.contribution(2, vector, 0.5), vector * 0.5)

    def test_permutation_left_neighbour(self, algebra, vector):
        encoder = PermutationEncoder(algebra)
        assert torch.equal(encoder.contribution(-1, vector, 1.0), torch.roll(vector, 1))

    def test_permutation_right_neighbour(self, algebra, vector):
        encoder = PermutationEncoder(algebra)
        assert torch.equal(encoder.contribution(2, vector, 2.0), torch.roll(vector, -2) * 2.0)

    def test_permutation_keeps_offsets_apart(self, algebra, vector):
        encoder = PermutationEncoder(algebra)
        assert not torch.equal(
            encoder.contribution(-1, vector, 1.0), encoder.contribution(1, vector, 1.0)
        )

    def test_permutation_plus_basic(self, algebra, vector):
        encoder = PermutationPlusBasicEncoder(algebra)
        expected = vector + torch.roll(vector, 1)
        assert torch.equal(encoder.contribution(-1, vector, 1.0), expected)

    def test_permutation_plus_basic_leaves_input(self, algebra, vector):
        original = vector.clone()
        PermutationPlusBasicEncoder(algebra).contribution(1, vector, 1.0)
        assert torch.equal(vector, original)

    def test_directional(self, algebra, vector):
        encoder = DirectionalEncoder(algebra, decay_for(DecayFunction.LINEAR, 4))

        left = encoder.contribution(-2, vector, 1.0)
        right = encoder.contribution(3, vector, 2.0)

        assert torch.equal(left, torch.roll(vector, 1) * 0.75)
        assert torch.equal(right, torch.roll(vector, -1) * 1.0)

    def test_binary_contribution_is_a_tally(self):
        algebra = algebra_for(VectorType.BINARY, 8)
        vector = algebra.elemental(3, 2)
        contribution = PermutationEncoder(algebra).contribution(1, vector, 1.0)
        assert contribution.dtype == torch.int64


class TestProximity:

    def test_position_vectors_vary_smoothly(self):
        algebra = algebra_for(VectorType.REAL, 1000)
        encoder = ProximityEncoder(algebra, WindowPolicy(radius=5))

        near = algebra.similarity(encoder.position_vector(-5), encoder.position_vector(-4))
        far = algebra.similarity(encoder.position_vector(-5), encoder.position_vector(5))

        assert near > far
        assert near > 0.9

    def test_contribution_binds_position(self, algebra, vector):
        encoder = ProximityEncoder(algebra, WindowPolicy(radius=2))
        expected = vector * encoder.position_vector(1) * 3.0
        assert torch.allclose(encoder.contribution(1, vector, 3.0), expected)

    def test_deterministic(self, algebra):
        first = ProximityEncoder(algebra, WindowPolicy(radius=2), random_seed=4)
        second = ProximityEncoder(algebra, WindowPolicy(radius=2), random_seed=4)
        assert torch.equal(first.position_vector(-2), second.position_vector(-2))

    def test_binary_positions(self):
        algebra = algebra_for(VectorType.BINARY, 64)
        encoder = ProximityEncoder(algebra, WindowPolicy(radius=2))
        assert encoder.position_vector(1).dtype == torch.bool


class TestSelection:

    @pytest.mark.parametrize("method, expected", [
        (EncodingMethod.BASIC, BasicEncoder),
        (EncodingMethod.DIRECTIONAL, DirectionalEncoder),
        (EncodingMethod.PERMUTATION, PermutationEncoder),
        (EncodingMethod.PERMUTATION_PLUS_BASIC, PermutationPlusBasicEncoder),
        (EncodingMethod.PROXIMITY, ProximityEncoder),
    ])
    def test_create_encoder(self, algebra, method, expected):
        assert isinstance(create_encoder(method, algebra, WindowPolicy(2)), expected)

    def test_embeddings_rejected(self, algebra):
        with pytest.raises(ConfigurationError):
            create_encoder(EncodingMethod.EMBEDDINGS, algebra, WindowPolicy(2))

    def test_unknown_method_rejected(self, algebra):
        with pytest.raises(ConfigurationError):
            create_encoder("wordsalad", algebra, WindowPolicy(2))

    def test_from_settings(self, make_settings, algebra):
        encoder = encoder_from_settings(make_settings(encoding_method="permutation"), algebra)
        assert isinstance(encoder, PermutationEncoder)
