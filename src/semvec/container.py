"""
Dependency Injection Container for semantic vector runs.

Turns one Settings object into the components of a run and makes sure
they all share the same vector algebra (dimension and vector type).
"""

import logging
from typing import Optional

from semvec.config.settings import Settings
from semvec.core.elemental import ElementalVectorFactory
from semvec.core.vector_store import VectorStore
from semvec.core.vector_types import VectorAlgebra, algebra_for
from semvec.errors import ConfigurationError
from semvec.indexing.term_filter import TermFilter
from semvec.persistence.serialization import load_vector_store
from semvec.positional.accumulator import TermCooccurrenceAccumulator
from semvec.positional.encoders import WindowEncoder, encoder_from_settings
from semvec.positional.training import IndexingResult, TrainingCycleController
from semvec.positional.window import WindowPolicy
from semvec.protocols.text_index import TextIndex

logger = logging.getLogger(__name__)


class SemvecContainer:
    """
    Dependency injection container for one run.

    Owns the run's algebra, window and encoder, which are chosen once from
    the settings, and provides factories for the per-cycle components.
    Configuration errors surface here, before any accumulation starts.

    Attributes:
        _settings: Run settings
        _algebra: Shared VectorAlgebra
        _window: Shared WindowPolicy
        _encoder: Shared encoding policy

    Example:
        >>> container = SemvecContainer(load_settings(dimension=512))
        >>> result = container.build_term_vectors(index)
        >>> result.term_vectors.dimension
        512
    """

    def __init__(self, settings: Settings):
        """
        Raises:
            ConfigurationError: If the settings describe an unsupported run
        """
        self._settings = settings
        self._algebra = algebra_for(settings.vector_type, settings.dimension)
        self._window = WindowPolicy.from_settings(settings)
        self._encoder = encoder_from_settings(settings, self._algebra)

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def algebra(self) -> VectorAlgebra:
        return self._algebra

    @property
    def window(self) -> WindowPolicy:
        return self._window

    @property
    def encoder(self) -> WindowEncoder:
        return self._encoder

    def create_elemental_factory(
        self, seed_vectors: Optional[VectorStore] = None
    ) -> ElementalVectorFactory:
        """New factory (and cache) seeded from an optional store."""
        return ElementalVectorFactory(
            self._algebra,
            self._settings.seed_length,
            initial_vectors=seed_vectors,
            random_seed=self._settings.random_seed,
        )

    def create_term_filter(self, index: TextIndex) -> TermFilter:
        return TermFilter.from_settings(index, self._settings)

    def create_accumulator(
        self,
        index: TextIndex,
        seed_vectors: Optional[VectorStore] = None,
        term_filter: Optional[TermFilter] = None,
    ) -> TermCooccurrenceAccumulator:
        return TermCooccurrenceAccumulator(
            index,
            self.create_elemental_factory(seed_vectors),
            self._encoder,
            self._window,
            term_filter or self.create_term_filter(index),
            workers=self._settings.workers,
        )

    def load_initial_vectors(self) -> Optional[VectorStore]:
        """
        Initial term vectors named in the settings, if any.

        Raises:
            ConfigurationError: If the named store cannot be read
        """
        location = self._settings.initial_term_vectors
        if location is None:
            return None
        try:
            store = load_vector_store(location)
        except (OSError, ValueError) as e:
            raise ConfigurationError(
                f"Could not read from vector store {location}: {e}"
            ) from e
        logger.info(f"Using trained index vectors from vector store {location}")
        return store

    def create_training_controller(
        self,
        index: TextIndex,
        initial_vectors: Optional[VectorStore] = None,
        keep_history: bool = False,
    ) -> TrainingCycleController:
        term_filter = self.create_term_filter(index)
        return TrainingCycleController(
            lambda seeds: self.create_accumulator(index, seeds, term_filter),
            training_cycles=self._settings.training_cycles,
            normalize=self._settings.normalize,
            encoding_method=self._settings.encoding_method,
            initial_vectors=initial_vectors,
            keep_history=keep_history,
        )

    def build_term_vectors(
        self,
        index: TextIndex,
        initial_vectors: Optional[VectorStore] = None,
        keep_history: bool = False,
    ) -> IndexingResult:
        """
        Full run: all training cycles, then normalization.

        Args:
            index: Text index to read
            initial_vectors: Supplied seeds for cycle 1 (defaults to the
                store named by settings.initial_term_vectors)
            keep_history: Keep every cycle snapshot in the result
        """
        if initial_vectors is None:
            initial_vectors = self.load_initial_vectors()
        logger.info(f"Building positional index, {self._settings.describe()}")
        controller = self.create_training_controller(index, initial_vectors, keep_history)
        return controller.run()

    def __repr__(self) -> str:
        return (
            f"SemvecContainer({self._algebra!r}, window={self._window}, "
            f"encoder={type(self._encoder).__name__})"
        )
