"""
ElementalVectorFactory: deterministic sparse seed vectors for terms.

Maps terms to reproducible sparse random vectors using hash-seeded random
generation. The same term and run configuration always give the same
vector; different terms give nearly orthogonal ones.

A factory can be handed a VectorStore of previously trained vectors. Terms
found there are served from it unchanged, which is how retraining and
bootstrapping from earlier runs work.
"""

import hashlib
from typing import Dict, Optional

import torch

from semvec.config.options import VectorType
from semvec.core.vector_store import VectorStore
from semvec.core.vector_types import VectorAlgebra, algebra_for
from semvec.errors import ConfigurationError


def hash_to_seed(term: str, random_seed: int = 0) -> int:
    """
    Convert a term to a deterministic generator seed.

    Uses SHA-256 of "{random_seed}:{term}", truncated to 32 bits.

    Args:
        term: Input string
        random_seed: Run-level seed mixed into the hash

    Returns:
        Integer seed in range [0, 2^32-1]
    """
    hash_bytes = hashlib.sha256(f"{random_seed}:{term}".encode("utf-8")).hexdigest()
    return int(hash_bytes[:8], 16)


def generate_elemental_vector(
    term: str,
    dimension: int,
    seed_length: int,
    vector_type: VectorType,
    random_seed: int = 0,
) -> torch.Tensor:
    """
    Generate the elemental vector of a term without a factory or cache.

    Args:
        term: Term text
        dimension: Vector dimensionality
        seed_length: Number of non-zero entries (binary vectors set half their bits)
        vector_type: VectorType of the run
        random_seed: Run-level seed mixed into the term hash

    Returns:
        Elemental vector of shape (dimension,)

    Raises:
        ConfigurationError: If seed_length exceeds dimension
    """
    algebra = algebra_for(vector_type, dimension)
    return algebra.elemental(hash_to_seed(term, random_seed), seed_length)


class ElementalVectorFactory:
    """
    Deterministic elemental vector generation for one run.

    The cache belongs to the factory (and so to one run); nothing is shared
    between runs unless a cache is passed in explicitly. Generation is
    idempotent, so concurrent readers may fill the cache without locking.

    Attributes:
        _algebra: VectorAlgebra of the run
        _seed_length: Non-zero entries per generated vector
        _initial: Optional store of supplied vectors, consulted first
        _cache: Memoization cache for generated vectors

    Example:
        >>> factory = ElementalVectorFactory(algebra_for(VectorType.REAL, 200), 10)
        >>> v1 = factory.generate("apple")
        >>> v2 = factory.generate("apple")
        >>> torch.equal(v1, v2)
        True
    """

    def __init__(
        self,
        algebra: VectorAlgebra,
        seed_length: int,
        initial_vectors: Optional[VectorStore] = None,
        random_seed: int = 0,
        cache: Optional[Dict[str, torch.Tensor]] = None,
    ):
        """
        Initialize the factory.

        Args:
            algebra: VectorAlgebra defining dimension and vector type
            seed_length: Non-zero entries per elemental vector
            initial_vectors: Supplied vectors used instead of generated ones
            random_seed: Run-level seed mixed into each term hash
            cache: Cache to fill (a fresh one by default)

        Raises:
            ConfigurationError: If seed_length is out of range or the
                supplied store does not match the algebra
        """
        if seed_length <= 0 or seed_length > algebra.dimension:
            raise ConfigurationError(
                f"seed_length {seed_length} must be in [1, {algebra.dimension}]"
            )
        if initial_vectors is not None:
            if initial_vectors.dimension != algebra.dimension:
                raise ConfigurationError(
                    f"Initial vectors have dimension {initial_vectors.dimension}, "
                    f"run uses {algebra.dimension}"
                )
            if initial_vectors.vector_type != algebra.vector_type:
                raise ConfigurationError(
                    f"Initial vectors are {initial_vectors.vector_type.value}, "
                    f"run uses {algebra.vector_type.value}"
                )
        self._algebra = algebra
        self._seed_length = seed_length
        self._initial = initial_vectors
        self._random_seed = random_seed
        self._cache: Dict[str, torch.Tensor] = {} if cache is None else cache

    @property
    def algebra(self) -> VectorAlgebra:
        return self._algebra

    @property
    def seed_length(self) -> int:
        return self._seed_length

    def generate(self, term: str) -> torch.Tensor:
        """
        Elemental vector for a term.

        Supplied initial vectors win unless they are zero; otherwise:
        hash(term) -> seed -> sparse random vector, cached.
        Returned tensors must not be modified by callers.

        Args:
            term: Term text

        Returns:
            Vector of shape (dimension,)
        """
        vector = self._cache.get(term)
        if vector is not None:
            return vector
        supplied = self._initial.get(term) if self._initial is not None else None
        if supplied is not None and not self._algebra.is_zero(supplied):
            vector = self._algebra.as_seed(supplied)
        else:
            vector = self._algebra.elemental(
                hash_to_seed(term, self._random_seed), self._seed_length
            )
        return self._cache.setdefault(term, vector)

    def is_supplied(self, term: str) -> bool:
        """True if the term's vector comes from the supplied initial store."""
        if self._initial is None:
            return False
        supplied = self._initial.get(term)
        return supplied is not None and not self._algebra.is_zero(supplied)

    def clear_cache(self) -> None:
        self._cache.clear()

    def cache_size(self) -> int:
        return len(self._cache)

    def __repr__(self) -> str:
        return (
            f"ElementalVectorFactory(dimension={self._algebra.dimension}, "
            f"seed_length={self._seed_length}, cached={self.cache_size()})"
        )
