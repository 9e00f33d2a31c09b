"""
Random Indexing and run constants.

Defaults follow common Random Indexing practice: a few hundred dimensions
with a handful of non-zero entries per elemental vector.
"""

# Vector Space Configuration
DEFAULT_DIMENSION = 200
"""Default vector dimensionality for term vectors."""

DEFAULT_SEED_LENGTH = 10
"""Number of non-zero entries in each real or complex elemental vector."""

DEFAULT_VECTOR_TYPE = "real"
"""Vector type used when none is configured (real, complex or binary)."""

DEFAULT_RANDOM_SEED = 0
"""Mixed into the per-term hash so separate runs can draw separate seeds."""

# Sliding Window
DEFAULT_WINDOW_RADIUS = 5
"""Maximum token distance between a focus term and a counted neighbour."""

DEFAULT_TRUNCATED_LEFT_RADIUS = 0
"""Left window radius override. 0 leaves the left side at the full radius."""

DEFAULT_ENCODING_METHOD = "basic"
"""Positional encoding used when none is configured."""

DEFAULT_DECAY_FUNCTION = "linear"
"""Distance decay applied by directional encoding (HAL-style linear ramp)."""

# Training
DEFAULT_TRAINING_CYCLES = 1
"""Number of accumulation passes. Values above 1 enable retraining."""

# Term Filter
DEFAULT_MIN_FREQUENCY = 0
"""Terms with a lower collection frequency are ignored."""

DEFAULT_MAX_FREQUENCY = 2147483647
"""Terms with a higher collection frequency are ignored."""

DEFAULT_MAX_NONALPHABET_CHARS = -1
"""Maximum non-alphabetic characters in an accepted term. -1 disables the check."""

DEFAULT_CONTENTS_FIELD = "contents"
"""Field indexed when no contents fields are configured."""

DEFAULT_TERM_WEIGHT = "none"
"""Term weighting scheme (none, idf, logentropy, sqrt)."""

# Binary vectors
BINARY_VOTE_SCALE = 65536
"""Fixed-point scale for binary vote tallies. Weights are rounded to
multiples of 1/BINARY_VOTE_SCALE so that tallies add as integers and the
result never depends on accumulation order."""

BINARY_TIE_BREAK_SEED = 2029
"""Generator seed of the fixed bit pattern that decides tied binary votes."""

# Proximity encoding
PROXIMITY_START_KEY = "__PROXIMITY_START__"
"""Hash key of the left endpoint vector for proximity position vectors."""

PROXIMITY_END_KEY = "__PROXIMITY_END__"
"""Hash key of the right endpoint vector for proximity position vectors."""

# Output
DEFAULT_OUTPUT_DIR = "."
"""Directory receiving written vector stores."""

OUTPUT_FILE_NAMES = {
    "basic": "termtermvectors",
    "directional": "drxntermvectors",
    "permutation": "permtermvectors",
    "permutationplusbasic": "permplustermvectors",
    "proximity": "proximityvectors",
}
"""Default vector store name for each encoding method."""

LSA_TERM_VECTORS_NAME = "termvectors"
"""Store name for LSA term vectors."""

LSA_DOC_VECTORS_NAME = "docvectors"
"""Store name for LSA document vectors."""
