"""
TrainingCycleController: repeated accumulation with learned seed vectors.

Cycle 1 uses generated elemental vectors (or a supplied initial store).
Each later cycle re-runs the accumulator from scratch against the index,
with the previous cycle's finished, unnormalized term vectors as its
elemental vectors. Cycles are strictly sequential, and every cycle's output
is a frozen snapshot, so cycle N's output is exactly cycle N+1's input.

After the last cycle a normalized copy (unless normalization is disabled)
is handed to writers inside an IndexingResult.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from semvec.config.options import EncodingMethod, VectorType
from semvec.core.vector_store import VectorStore
from semvec.errors import ConfigurationError
from semvec.positional.accumulator import AccumulationStats, TermCooccurrenceAccumulator

logger = logging.getLogger(__name__)

AccumulatorFactory = Callable[[Optional[VectorStore]], TermCooccurrenceAccumulator]
"""Builds a fresh accumulator whose elemental vectors are seeded from a store."""


@dataclass(frozen=True)
class CycleSnapshot:
    """
    Output of one completed training cycle.

    Attributes:
        cycle: 1-based cycle number
        term_vectors: Frozen, unnormalized term vectors
        stats: Accumulation counters of the cycle
    """
    cycle: int
    term_vectors: VectorStore
    stats: AccumulationStats


@dataclass
class IndexingResult:
    """
    Finished term vectors and what is needed to interpret them.

    Attributes:
        term_vectors: Frozen term vectors (normalized unless disabled)
        dimension: Vector dimensionality
        vector_type: VectorType of the vectors
        encoding_method: Encoding used to build them
        normalized: Whether term_vectors were normalized
        cycles: Retained cycle snapshots (all with keep_history, else the last)
    """
    term_vectors: VectorStore
    dimension: int
    vector_type: VectorType
    encoding_method: EncodingMethod
    normalized: bool
    cycles: List[CycleSnapshot] = field(default_factory=list)

    @property
    def final_cycle(self) -> CycleSnapshot:
        return self.cycles[-1]


class TrainingCycleController:
    """
    Runs N >= 1 accumulation cycles with a full barrier between them.

    Attributes:
        training_cycles: Number of cycles
        normalize: Normalize the final vectors
        encoding_method: Encoding method of the run
        keep_history: Retain every cycle snapshot in the result

    Example:
        >>> controller = TrainingCycleController(build_accumulator, training_cycles=2)
        >>> result = controller.run()
        >>> [s.cycle for s in result.cycles]
        [2]
    """

    def __init__(
        self,
        accumulator_factory: AccumulatorFactory,
        training_cycles: int = 1,
        normalize: bool = True,
        encoding_method: EncodingMethod = EncodingMethod.BASIC,
        initial_vectors: Optional[VectorStore] = None,
        keep_history: bool = False,
    ):
        """
        Args:
            accumulator_factory: Builds an accumulator seeded from a store
                (None for generated elemental vectors)
            training_cycles: Number of cycles (>= 1)
            normalize: Normalize term vectors after the final cycle
            encoding_method: Encoding method of the run
            initial_vectors: Supplied seed vectors for cycle 1
            keep_history: Keep every cycle snapshot

        Raises:
            ConfigurationError: If training_cycles < 1 or the encoding method
                manages its own training (embeddings)
        """
        if training_cycles < 1:
            raise ConfigurationError(f"training_cycles must be >= 1, got {training_cycles}")
        encoding_method = EncodingMethod(encoding_method)
        if encoding_method is EncodingMethod.EMBEDDINGS:
            raise ConfigurationError(
                "The embeddings encoding manages its own training and is not supported"
            )
        self._build_accumulator = accumulator_factory
        self.training_cycles = training_cycles
        self.normalize = normalize
        self.encoding_method = encoding_method
        self._initial_vectors = initial_vectors
        self.keep_history = keep_history

    def run(self) -> IndexingResult:
        """
        Run every cycle and return the finished term vectors.

        Any exception raised during a cycle propagates unchanged; nothing
        from the failed cycle is returned.
        """
        history: List[CycleSnapshot] = []
        snapshot = self.run_cycle(1, self._initial_vectors)
        history.append(snapshot)

        for cycle in range(2, self.training_cycles + 1):
            logger.info("Retraining with learned term vectors ...")
            previous = snapshot
            snapshot = self.run_cycle(cycle, previous.term_vectors)
            self._log_drift(previous, snapshot)
            history.append(snapshot)

        final = snapshot.term_vectors.copy()
        if self.normalize:
            final.normalize_all()
        final.freeze()

        return IndexingResult(
            term_vectors=final,
            dimension=final.dimension,
            vector_type=final.vector_type,
            encoding_method=self.encoding_method,
            normalized=self.normalize,
            cycles=history if self.keep_history else [snapshot],
        )

    def run_cycle(self, cycle: int, seed_vectors: Optional[VectorStore]) -> CycleSnapshot:
        """Run one complete accumulation pass and freeze its output."""
        source = "generated elemental vectors" if seed_vectors is None else (
            f"{len(seed_vectors)} seed vectors"
        )
        logger.info(f"Training cycle {cycle}/{self.training_cycles} using {source}")
        accumulator = self._build_accumulator(seed_vectors)
        store = accumulator.accumulate()
        return CycleSnapshot(cycle, store.freeze(), accumulator.stats)

    @staticmethod
    def _log_drift(previous: CycleSnapshot, current: CycleSnapshot) -> None:
        algebra = current.term_vectors.algebra
        shared = [key for key in current.term_vectors if key in previous.term_vectors]
        if not shared:
            return
        total = sum(
            algebra.similarity(previous.term_vectors.get(key), current.term_vectors.get(key))
            for key in shared
        )
        logger.info(
            f"Cycle {current.cycle}: mean similarity to cycle {previous.cycle} "
            f"over {len(shared)} terms is {total / len(shared):.4f}"
        )
