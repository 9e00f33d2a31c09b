"""
Run settings using Pydantic.

This module provides the run configuration with environment variable support.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from semvec.config.constants import (
    DEFAULT_CONTENTS_FIELD,
    DEFAULT_DECAY_FUNCTION,
    DEFAULT_DIMENSION,
    DEFAULT_ENCODING_METHOD,
    DEFAULT_MAX_FREQUENCY,
    DEFAULT_MAX_NONALPHABET_CHARS,
    DEFAULT_MIN_FREQUENCY,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_RANDOM_SEED,
    DEFAULT_SEED_LENGTH,
    DEFAULT_TERM_WEIGHT,
    DEFAULT_TRAINING_CYCLES,
    DEFAULT_TRUNCATED_LEFT_RADIUS,
    DEFAULT_VECTOR_TYPE,
    DEFAULT_WINDOW_RADIUS,
)
from semvec.config.options import (
    DecayFunction,
    EncodingMethod,
    TermWeight,
    VectorType,
)
from semvec.errors import ConfigurationError


class Settings(BaseSettings):
    """
    Run settings with environment variable support.

    Settings can be overridden via environment variables prefixed with SEMVEC_
    For example: SEMVEC_DIMENSION=512

    Instances are frozen: one Settings object describes one run.
    """

    model_config = SettingsConfigDict(
        env_prefix="SEMVEC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Allow other env vars without error
        frozen=True,
    )

    # Vector Space
    dimension: int = Field(
        default=DEFAULT_DIMENSION,
        description="Number of components in every vector",
        gt=0,
    )

    seed_length: int = Field(
        default=DEFAULT_SEED_LENGTH,
        description="Non-zero entries per real or complex elemental vector",
        gt=0,
    )

    vector_type: VectorType = Field(
        default=VectorType(DEFAULT_VECTOR_TYPE),
        description="Vector type (real, complex, binary)",
    )

    random_seed: int = Field(
        default=DEFAULT_RANDOM_SEED,
        description="Seed mixed into every elemental vector hash",
    )

    # Sliding Window
    window_radius: int = Field(
        default=DEFAULT_WINDOW_RADIUS,
        description="Maximum distance between focus and neighbour",
        ge=0,
    )

    truncated_left_radius: int = Field(
        default=DEFAULT_TRUNCATED_LEFT_RADIUS,
        description="Reduced left radius (0 keeps the full radius)",
        ge=0,
    )

    encoding_method: EncodingMethod = Field(
        default=EncodingMethod(DEFAULT_ENCODING_METHOD),
        description="Positional encoding method",
    )

    decay_function: DecayFunction = Field(
        default=DecayFunction(DEFAULT_DECAY_FUNCTION),
        description="Distance decay for directional encoding",
    )

    # Training
    training_cycles: int = Field(
        default=DEFAULT_TRAINING_CYCLES,
        description="Number of accumulation passes",
        ge=1,
    )

    normalize: bool = Field(
        default=True,
        description="Normalize term vectors after the final cycle",
    )

    workers: int = Field(
        default=1,
        description="Threads used to accumulate documents",
        ge=1,
    )

    # Term Filter
    min_frequency: int = Field(
        default=DEFAULT_MIN_FREQUENCY,
        description="Minimum collection frequency of indexed terms",
        ge=0,
    )

    max_frequency: int = Field(
        default=DEFAULT_MAX_FREQUENCY,
        description="Maximum collection frequency of indexed terms",
        ge=0,
    )

    max_nonalphabet_chars: int = Field(
        default=DEFAULT_MAX_NONALPHABET_CHARS,
        description="Maximum non-alphabetic characters per term (-1: no limit)",
        ge=-1,
    )

    filter_out_numbers: bool = Field(
        default=False,
        description="Ignore terms that parse as numbers",
    )

    stopwords: List[str] = Field(
        default_factory=list,
        description="Terms that are never indexed",
    )

    contents_fields: List[str] = Field(
        default_factory=lambda: [DEFAULT_CONTENTS_FIELD],
        description="Index fields whose positions are scanned",
        min_length=1,
    )

    term_weight: TermWeight = Field(
        default=TermWeight(DEFAULT_TERM_WEIGHT),
        description="Term weighting scheme",
    )

    # Persistence
    initial_term_vectors: Optional[Path] = Field(
        default=None,
        description="Saved vector store used as initial elemental vectors",
    )

    output_dir: Path = Field(
        default=Path(DEFAULT_OUTPUT_DIR),
        description="Directory receiving written vector stores",
    )

    # Runtime
    debug: bool = Field(
        default=False,
        description="Enable debug logging",
    )

    @model_validator(mode="after")
    def _check_combinations(self) -> "Settings":
        if self.seed_length > self.dimension:
            raise ValueError(
                f"seed_length {self.seed_length} exceeds dimension {self.dimension}"
            )
        if self.truncated_left_radius > self.window_radius:
            raise ValueError(
                f"truncated_left_radius {self.truncated_left_radius} exceeds "
                f"window_radius {self.window_radius}"
            )
        if self.min_frequency > self.max_frequency:
            raise ValueError(
                f"min_frequency {self.min_frequency} exceeds "
                f"max_frequency {self.max_frequency}"
            )
        return self

    def describe(self) -> str:
        """One-line summary of the settings that shape term vectors."""
        summary = (
            f"Seedlength: {self.seed_length}, "
            f"Vector length: {self.dimension}, "
            f"Vector type: {self.vector_type.value}, "
            f"Encoding: {self.encoding_method.value}, "
            f"Minimum term frequency: {self.min_frequency}, "
            f"Maximum term frequency: {self.max_frequency}, "
            f"Number non-alphabet characters: {self.max_nonalphabet_chars}, "
            f"Window radius: {self.window_radius}, "
            f"Fields to index: {self.contents_fields}"
        )
        if self.truncated_left_radius > 0:
            summary += f", Truncated left radius: {self.truncated_left_radius}"
        return summary


def load_settings(**overrides) -> Settings:
    """
    Build Settings from defaults, environment and explicit overrides.

    Args:
        **overrides: Field values taking precedence over the environment.

    Returns:
        Validated Settings

    Raises:
        ConfigurationError: If any value or combination of values is invalid.

    Example:
        >>> settings = load_settings(dimension=512, encoding_method="permutation")
        >>> settings.encoding_method
        <EncodingMethod.PERMUTATION: 'permutation'>
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e
