"""
VectorStore: ordered mapping from term (or document) keys to vectors.

Keys keep their insertion order so iteration and serialization are
deterministic. A store is created empty, populated by accumulation,
optionally normalized, then frozen when a training cycle completes.
"""

from typing import Dict, Iterator, List, Optional, Tuple

import torch

from semvec.config.options import VectorType
from semvec.core.vector_types import VectorAlgebra


class VectorStore:
    """
    In-memory vector store for one run.

    All vectors share the store's algebra (dimension and vector type).
    Not safe for concurrent writers to the same key: parallel accumulation
    gives each worker its own store and merges them afterwards.

    Attributes:
        _algebra: VectorAlgebra shared by every stored vector
        _vectors: Insertion-ordered key -> vector mapping
        _frozen: True once the store may no longer change

    Example:
        >>> store = VectorStore(algebra_for(VectorType.REAL, 4))
        >>> store.add("apple", torch.tensor([1.0, 0.0, 0.0, 0.0]))
        >>> store.add("apple", torch.tensor([0.0, 1.0, 0.0, 0.0]))
        >>> store.get("apple")
        tensor([1., 1., 0., 0.])
    """

    def __init__(self, algebra: VectorAlgebra):
        self._algebra = algebra
        self._vectors: Dict[str, torch.Tensor] = {}
        self._frozen = False

    @property
    def algebra(self) -> VectorAlgebra:
        return self._algebra

    @property
    def dimension(self) -> int:
        return self._algebra.dimension

    @property
    def vector_type(self) -> VectorType:
        return self._algebra.vector_type

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, key: str) -> Optional[torch.Tensor]:
        """Vector stored under key, or None."""
        return self._vectors.get(key)

    def put(self, key: str, vector: torch.Tensor) -> None:
        """
        Set the vector for key, replacing any existing one.

        Raises:
            ValueError: If the vector does not belong to the store's algebra
            RuntimeError: If the store is frozen
        """
        self._check_mutable()
        self._algebra.validate_vector(vector)
        self._vectors[key] = vector

    def add(self, key: str, vector: torch.Tensor) -> None:
        """
        Accumulate vector into the entry for key.

        The first contribution creates the entry from a copy, so callers'
        tensors are never aliased by the store.

        Raises:
            ValueError: If the vector does not belong to the store's algebra
            RuntimeError: If the store is frozen
        """
        self._check_mutable()
        existing = self._vectors.get(key)
        if existing is None:
            self._algebra.validate_vector(vector)
            self._vectors[key] = vector.clone()
        else:
            self._algebra.add(existing, vector)

    def merge(self, other: "VectorStore") -> None:
        """Add every entry of other into this store, in other's order."""
        for key, vector in other.items():
            self.add(key, vector)

    def items(self) -> Iterator[Tuple[str, torch.Tensor]]:
        """
        Lazily yield (key, vector) pairs in insertion order.

        Each call starts a fresh pass over the store.
        """
        for key in list(self._vectors):
            yield key, self._vectors[key]

    def keys(self) -> List[str]:
        return list(self._vectors)

    def normalize_all(self) -> None:
        """
        Normalize every vector in place (store level).

        Zero vectors are left unchanged. Binary tallies become bit vectors.

        Raises:
            RuntimeError: If the store is frozen
        """
        self._check_mutable()
        for key, vector in self._vectors.items():
            self._vectors[key] = self._algebra.normalize(vector)

    def freeze(self) -> "VectorStore":
        """Forbid further changes. Returns self for chaining."""
        self._frozen = True
        return self

    def copy(self) -> "VectorStore":
        """Unfrozen deep copy."""
        clone = VectorStore(self._algebra)
        for key, vector in self._vectors.items():
            clone._vectors[key] = vector.clone()
        return clone

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RuntimeError("VectorStore is frozen and cannot be modified")

    def __contains__(self, key: object) -> bool:
        return key in self._vectors

    def __len__(self) -> int:
        return len(self._vectors)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._vectors))

    def __repr__(self) -> str:
        return (
            f"VectorStore(vectors={len(self)}, dimension={self.dimension}, "
            f"type={self.vector_type.value}, frozen={self._frozen})"
        )
