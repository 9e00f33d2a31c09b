"""Core vector primitives."""

from semvec.core.elemental import (
    ElementalVectorFactory,
    generate_elemental_vector,
    hash_to_seed,
)
from semvec.core.operations import Operations
from semvec.core.vector_store import VectorStore
from semvec.core.vector_types import (
    BinaryAlgebra,
    ComplexAlgebra,
    RealAlgebra,
    VectorAlgebra,
    algebra_for,
)

__all__ = [
    "VectorAlgebra",
    "RealAlgebra",
    "ComplexAlgebra",
    "BinaryAlgebra",
    "algebra_for",
    "Operations",
    "VectorStore",
    "ElementalVectorFactory",
    "generate_elemental_vector",
    "hash_to_seed",
]
