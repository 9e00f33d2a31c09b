"""
Vector algebras: the real, complex and binary vector types.

A VectorAlgebra is an immutable configuration object bound to one
dimension and one vector type. It is selected once per run and every
component that creates, combines or compares vectors goes through it, so
no code below this layer branches on the vector type.

Binary vectors live in two spaces. Elemental and finished vectors are bool
tensors (one bit per component). Binary elemental vectors are dense, with
half of their bits set, so set and unset bits vote in equal numbers. While
a semantic vector is being accumulated it is an int64 vote tally: each
contribution votes +q for its set bits and -q for its unset bits, with q
the weight in fixed point. Normalization takes the majority; tied bits
come from a fixed random pattern, and only an empty tally gives zero bits.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import ClassVar, Dict, Type

import torch

from semvec.config.constants import BINARY_TIE_BREAK_SEED, BINARY_VOTE_SCALE
from semvec.config.options import VectorType
from semvec.core.operations import Operations
from semvec.errors import ConfigurationError


@dataclass(frozen=True)
class VectorAlgebra:
    """
    Base class for vector-type specific arithmetic.

    Attributes:
        dimension: Number of components in every vector of the run

    Example:
        >>> algebra = algebra_for(VectorType.REAL, dimension=8)
        >>> e = algebra.elemental(seed=42, seed_length=2)
        >>> int(torch.count_nonzero(e))
        2
    """

    dimension: int

    vector_type: ClassVar[VectorType]
    dtype: ClassVar[torch.dtype]
    accumulator_dtype: ClassVar[torch.dtype]

    def __post_init__(self) -> None:
        if self.dimension <= 0:
            raise ConfigurationError(f"Dimension must be > 0, got {self.dimension}")

    def zeros(self) -> torch.Tensor:
        """Empty accumulator vector."""
        return torch.zeros(self.dimension, dtype=self.accumulator_dtype)

    def elemental(self, seed: int, seed_length: int) -> torch.Tensor:
        """
        Sparse random vector with exactly seed_length non-zero entries.

        Positions come from a seeded permutation of all components, signs from
        the same generator. Same seed always produces the same vector.

        Args:
            seed: Integer seed for the torch generator
            seed_length: Number of non-zero entries (binary always sets half)

        Returns:
            Elemental vector of shape (dimension,)

        Raises:
            ConfigurationError: If seed_length is not in [1, dimension]
        """
        if seed_length <= 0 or seed_length > self.dimension:
            raise ConfigurationError(
                f"seed_length must be in [1, {self.dimension}], got {seed_length}"
            )
        count = self._nonzero_count(seed_length)
        gen = torch.Generator().manual_seed(seed)
        positions = torch.randperm(self.dimension, generator=gen)[:count]
        signs = torch.randint(0, 2, (count,), generator=gen) * 2 - 1
        return self._sparse(positions, signs)

    def dense_random(self, seed: int) -> torch.Tensor:
        """Dense random vector with every component set (±1 or a random bit)."""
        gen = torch.Generator().manual_seed(seed)
        signs = torch.randint(0, 2, (self.dimension,), generator=gen) * 2 - 1
        return signs.to(self.dtype)

    def weighted(self, vector: torch.Tensor, weight: float) -> torch.Tensor:
        """Scale a vector into accumulator space."""
        return vector * weight

    def add(self, target: torch.Tensor, other: torch.Tensor) -> torch.Tensor:
        """Add other into target in place and return target."""
        return target.add_(other)

    def rotate(self, vector: torch.Tensor, shift: int) -> torch.Tensor:
        """Cyclic shift of every component by shift positions."""
        return Operations.permute(vector, shift)

    def bind(self, a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
        return Operations.bind(a, b)

    def interpolate(self, a: torch.Tensor, b: torch.Tensor, fraction: float) -> torch.Tensor:
        """Vector lying `fraction` of the way from a to b."""
        return a * (1.0 - fraction) + b * fraction

    def normalize(self, vector: torch.Tensor) -> torch.Tensor:
        """
        Rescale to unit length.

        A zero vector is returned unchanged.
        """
        norm = torch.linalg.vector_norm(vector)
        if norm > 0:
            return vector / norm
        return vector

    def similarity(self, a: torch.Tensor, b: torch.Tensor) -> float:
        """Cosine similarity in [-1, 1]. 0.0 if either vector is zero."""
        norm = torch.linalg.vector_norm(a) * torch.linalg.vector_norm(b)
        if norm == 0:
            return 0.0
        return float(torch.dot(a, b) / norm)

    def distance(self, a: torch.Tensor, b: torch.Tensor) -> float:
        return 1.0 - self.similarity(a, b)

    def as_seed(self, vector: torch.Tensor) -> torch.Tensor:
        """Convert an accumulated vector into one usable as an elemental vector."""
        return vector

    def is_zero(self, vector: torch.Tensor) -> bool:
        return int(torch.count_nonzero(vector)) == 0

    def validate_vector(self, vector: torch.Tensor) -> None:
        """
        Validate that a vector belongs to this algebra.

        Raises:
            ValueError: If vector has wrong shape or dtype.
        """
        if vector.dim() != 1:
            raise ValueError(f"Vector must be 1D, got shape {tuple(vector.shape)}")
        if vector.shape[0] != self.dimension:
            raise ValueError(
                f"Vector has {vector.shape[0]} dimensions, "
                f"expected {self.dimension}"
            )
        if vector.dtype not in (self.dtype, self.accumulator_dtype):
            raise ValueError(
                f"Vector has dtype {vector.dtype}, "
                f"expected {self.dtype} for {self.vector_type.value} vectors"
            )

    def _nonzero_count(self, seed_length: int) -> int:
        return seed_length

    def _sparse(self, positions: torch.Tensor, signs: torch.Tensor) -> torch.Tensor:
        vector = torch.zeros(self.dimension, dtype=self.dtype)
        vector[positions] = signs.to(self.dtype)
        return vector

    def __repr__(self) -> str:
        return f"{type(self).__name__}(dimension={self.dimension})"


@dataclass(frozen=True, repr=False)
class RealAlgebra(VectorAlgebra):
    """Real float32 vectors."""

    vector_type: ClassVar[VectorType] = VectorType.REAL
    dtype: ClassVar[torch.dtype] = torch.float32
    accumulator_dtype: ClassVar[torch.dtype] = torch.float32


@dataclass(frozen=True, repr=False)
class ComplexAlgebra(VectorAlgebra):
    """
    Complex vectors (complex64).

    Elemental entries are ±1+0j. Similarity uses the real part of the
    Hermitian inner product.
    """

    vector_type: ClassVar[VectorType] = VectorType.COMPLEX
    dtype: ClassVar[torch.dtype] = torch.complex64
    accumulator_dtype: ClassVar[torch.dtype] = torch.complex64

    def similarity(self, a: torch.Tensor, b: torch.Tensor) -> float:
        norm = torch.linalg.vector_norm(a) * torch.linalg.vector_norm(b)
        if norm == 0:
            return 0.0
        return float(torch.vdot(a, b).real / norm)


@dataclass(frozen=True, repr=False)
class BinaryAlgebra(VectorAlgebra):
    """
    Binary vectors: bool bits, accumulated as int64 vote tallies.

    Weights are converted to fixed point (multiples of 1/BINARY_VOTE_SCALE),
    so tallies are exact integer sums and never depend on the order in
    which contributions arrive.

    Elemental vectors set dimension // 2 bits whatever the seed length.
    """

    vector_type: ClassVar[VectorType] = VectorType.BINARY
    dtype: ClassVar[torch.dtype] = torch.bool
    accumulator_dtype: ClassVar[torch.dtype] = torch.int64

    def weighted(self, vector: torch.Tensor, weight: float) -> torch.Tensor:
        votes = self.as_seed(vector).to(torch.int64) * 2 - 1
        return votes * int(round(weight * BINARY_VOTE_SCALE))

    def bind(self, a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
        return torch.logical_xor(a, b)

    def interpolate(self, a: torch.Tensor, b: torch.Tensor, fraction: float) -> torch.Tensor:
        """Take the first `fraction` of the bits from b and the rest from a."""
        cut = int(round(fraction * self.dimension))
        result = a.clone()
        result[:cut] = b[:cut]
        return result

    def normalize(self, vector: torch.Tensor) -> torch.Tensor:
        """Majority vote: a bit is set iff its tally is positive, ties follow a fixed pattern."""
        return self.as_seed(vector)

    def similarity(self, a: torch.Tensor, b: torch.Tensor) -> float:
        """Bit overlap 1 - 2 * hamming / dimension, in [-1, 1]."""
        hamming = int(torch.count_nonzero(self.as_seed(a) ^ self.as_seed(b)))
        return 1.0 - 2.0 * hamming / self.dimension

    def as_seed(self, vector: torch.Tensor) -> torch.Tensor:
        if vector.dtype == torch.bool:
            return vector
        bits = vector > 0
        ties = vector == 0
        if bool(ties.all()):
            return bits
        return bits | (ties & _tie_breaker(self.dimension))

    def dense_random(self, seed: int) -> torch.Tensor:
        gen = torch.Generator().manual_seed(seed)
        return torch.randint(0, 2, (self.dimension,), generator=gen) > 0

    def _nonzero_count(self, seed_length: int) -> int:
        return max(1, self.dimension // 2)

    def _sparse(self, positions: torch.Tensor, signs: torch.Tensor) -> torch.Tensor:
        vector = torch.zeros(self.dimension, dtype=torch.bool)
        vector[positions] = True
        return vector


@lru_cache(maxsize=None)
def _tie_breaker(dimension: int) -> torch.Tensor:
    """Fixed dense bit pattern deciding tied votes. Never modified."""
    gen = torch.Generator().manual_seed(BINARY_TIE_BREAK_SEED)
    return torch.randint(0, 2, (dimension,), generator=gen) > 0


_ALGEBRAS: Dict[VectorType, Type[VectorAlgebra]] = {
    VectorType.REAL: RealAlgebra,
    VectorType.COMPLEX: ComplexAlgebra,
    VectorType.BINARY: BinaryAlgebra,
}


def algebra_for(vector_type: VectorType, dimension: int) -> VectorAlgebra:
    """
    Select the algebra for a run.

    Args:
        vector_type: VectorType (or its string value)
        dimension: Vector dimensionality

    Returns:
        VectorAlgebra instance

    Raises:
        ConfigurationError: If the vector type is not recognised
    """
    try:
        vector_type = VectorType(vector_type)
    except ValueError as e:
        raise ConfigurationError(f"Unrecognized vector type: {vector_type!r}") from e
    return _ALGEBRAS[vector_type](dimension=dimension)
