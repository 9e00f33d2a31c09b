"""
Enumerated run options.

Values are the lowercase strings accepted on the command line and in
SEMVEC_* environment variables.
"""

from enum import Enum


class VectorType(Enum):
    """Numeric representation shared by every vector in a run."""
    REAL = "real"
    COMPLEX = "complex"
    BINARY = "binary"


class EncodingMethod(Enum):
    """How a neighbour's position relative to the focus term is encoded."""
    BASIC = "basic"
    DIRECTIONAL = "directional"
    PERMUTATION = "permutation"
    PERMUTATION_PLUS_BASIC = "permutationplusbasic"
    PROXIMITY = "proximity"
    EMBEDDINGS = "embeddings"


class DecayFunction(Enum):
    """Distance decay used by directional encoding."""
    LINEAR = "linear"
    INVERSE = "inverse"
    FLAT = "flat"


class TermWeight(Enum):
    """Global/local term weighting scheme."""
    NONE = "none"
    IDF = "idf"
    LOGENTROPY = "logentropy"
    SQRT = "sqrt"
