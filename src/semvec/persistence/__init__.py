"""Persistence layer for vector stores."""

from semvec.persistence.serialization import (
    VectorStoreSerializer,
    load_vector_store,
    write_term_vectors,
)

__all__ = [
    "VectorStoreSerializer",
    "load_vector_store",
    "write_term_vectors",
]
