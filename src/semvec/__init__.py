"""
semvec: Random Indexing semantic vectors from term co-occurrence.

Builds distributional term vectors by sliding a context window over a
positional text index and summing sparse random (elemental) vectors of
neighbouring terms.

The package includes:
- Elemental vector generation and real/complex/binary vector algebras
- Basic, directional (HAL), permutation, permutation+basic and proximity
  window encodings
- Retraining cycles that reuse learned vectors as new seeds
- An in-memory positional index, term weighting and term filtering
- Vector store persistence, LSA and a command line interface
"""

__version__ = "0.1.0"

from semvec.config.options import DecayFunction, EncodingMethod, TermWeight, VectorType
from semvec.config.settings import Settings, load_settings
from semvec.container import SemvecContainer
from semvec.core.elemental import ElementalVectorFactory, generate_elemental_vector
from semvec.core.vector_store import VectorStore
from semvec.core.vector_types import VectorAlgebra, algebra_for
from semvec.errors import ConfigurationError, IndexAccessError, RecoverableTermWarning
from semvec.indexing.memory_index import InMemoryTextIndex
from semvec.indexing.term_filter import TermFilter
from semvec.lsa import LSABuilder, LSAResult
from semvec.persistence.serialization import (
    VectorStoreSerializer,
    load_vector_store,
    write_term_vectors,
)
from semvec.positional.accumulator import AccumulationStats, TermCooccurrenceAccumulator
from semvec.positional.encoders import WindowEncoder, create_encoder
from semvec.positional.training import CycleSnapshot, IndexingResult, TrainingCycleController
from semvec.positional.window import WindowPolicy
from semvec.protocols.text_index import Posting, TermPositions, TextIndex

__all__ = [
    # Configuration
    "Settings",
    "load_settings",
    "VectorType",
    "EncodingMethod",
    "DecayFunction",
    "TermWeight",
    # Errors
    "ConfigurationError",
    "IndexAccessError",
    "RecoverableTermWarning",
    # Core
    "VectorAlgebra",
    "algebra_for",
    "VectorStore",
    "ElementalVectorFactory",
    "generate_elemental_vector",
    # Text index
    "TextIndex",
    "Posting",
    "TermPositions",
    "InMemoryTextIndex",
    "TermFilter",
    # Positional indexing
    "WindowPolicy",
    "WindowEncoder",
    "create_encoder",
    "TermCooccurrenceAccumulator",
    "AccumulationStats",
    "TrainingCycleController",
    "CycleSnapshot",
    "IndexingResult",
    "SemvecContainer",
    # Output
    "VectorStoreSerializer",
    "load_vector_store",
    "write_term_vectors",
    "LSABuilder",
    "LSAResult",
]
