"""
TermCooccurrenceAccumulator: sliding-window Random Indexing over a text index.

For every document, every contents field and every focus occurrence of an
accepted term, each accepted neighbour inside the window contributes its
encoded, weighted elemental vector to the focus term's semantic vector.

Rejected terms keep their positions, so they leave gaps in the window,
but they neither receive a vector nor contribute to anyone else's.
"""

import logging
import warnings
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from semvec.core.elemental import ElementalVectorFactory
from semvec.core.vector_store import VectorStore
from semvec.errors import IndexAccessError, RecoverableTermWarning
from semvec.indexing.term_filter import TermFilter
from semvec.positional.encoders import WindowEncoder
from semvec.positional.window import WindowPolicy
from semvec.protocols.text_index import TermPositions, TextIndex

logger = logging.getLogger(__name__)


@dataclass
class AccumulationStats:
    """
    Counters for one accumulation pass.

    Attributes:
        documents: Documents processed
        contributions: Neighbour contributions added
        skipped_postings: Malformed postings skipped with a warning
        filtered_terms: Distinct (field, term) pairs rejected by the filter
    """
    documents: int = 0
    contributions: int = 0
    skipped_postings: int = 0
    filtered_terms: int = 0

    def merge(self, other: "AccumulationStats") -> None:
        self.documents += other.documents
        self.contributions += other.contributions
        self.skipped_postings += other.skipped_postings


def _is_position(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


class TermCooccurrenceAccumulator:
    """
    Builds semantic term vectors from positional co-occurrence.

    Attributes:
        _index: Read-only text index
        _factory: Elemental vectors of neighbour terms
        _encoder: Encoding policy of the run
        _window: Sliding window policy
        _filter: Term filter
        _workers: Threads used to process documents

    Example:
        >>> accumulator = TermCooccurrenceAccumulator(
        ...     index, factory, BasicEncoder(algebra), WindowPolicy(2), term_filter
        ... )
        >>> store = accumulator.accumulate()
        >>> store.get("b") is not None
        True
    """

    def __init__(
        self,
        index: TextIndex,
        factory: ElementalVectorFactory,
        encoder: WindowEncoder,
        window: WindowPolicy,
        term_filter: TermFilter,
        workers: int = 1,
    ):
        self._index = index
        self._factory = factory
        self._encoder = encoder
        self._window = window
        self._filter = term_filter
        self._workers = max(1, workers)
        self.stats = AccumulationStats()

    @property
    def algebra(self):
        return self._factory.algebra

    def accumulate(self) -> VectorStore:
        """
        Run one full pass over the index.

        Returns:
            VectorStore of semantic term vectors (unnormalized), keyed in
            order of each term's first contribution

        Raises:
            IndexAccessError: If the index cannot be read. No partial store
                is returned.
        """
        try:
            doc_ids = list(self._index.doc_ids())
            if self._workers == 1 or len(doc_ids) < 2:
                store, stats = self._accumulate_documents(doc_ids)
            else:
                store, stats = self._accumulate_parallel(doc_ids)
        except OSError as e:
            raise IndexAccessError(f"Could not read text index: {e}") from e

        stats.filtered_terms = self._filter.rejected_count
        self.stats = stats
        logger.info(
            f"Accumulated {len(store)} term vectors from {stats.documents} documents "
            f"({stats.contributions} contributions, "
            f"{stats.skipped_postings} skipped postings, "
            f"{stats.filtered_terms} filtered terms)"
        )
        return store

    def _accumulate_parallel(
        self, doc_ids: Sequence[str]
    ) -> Tuple[VectorStore, AccumulationStats]:
        workers = min(self._workers, len(doc_ids))
        size = -(-len(doc_ids) // workers)
        chunks = [doc_ids[i:i + size] for i in range(0, len(doc_ids), size)]
        logger.debug(f"Accumulating {len(doc_ids)} documents in {len(chunks)} chunks")

        with ThreadPoolExecutor(max_workers=workers) as pool:
            partials = list(pool.map(self._accumulate_documents, chunks))

        # Merging in chunk order reproduces the serial insertion order.
        store = VectorStore(self.algebra)
        stats = AccumulationStats()
        for partial_store, partial_stats in partials:
            store.merge(partial_store)
            stats.merge(partial_stats)
        return store, stats

    def _accumulate_documents(
        self, doc_ids: Sequence[str]
    ) -> Tuple[VectorStore, AccumulationStats]:
        store = VectorStore(self.algebra)
        stats = AccumulationStats()
        for doc_id in doc_ids:
            for field in self._filter.contents_fields:
                self._process_field(doc_id, field, store, stats)
            stats.documents += 1
        return store, stats

    def _process_field(
        self, doc_id: str, field: str, store: VectorStore, stats: AccumulationStats
    ) -> None:
        terms_at = self._positions_of(doc_id, field, stats)
        weights: Dict[str, float] = {}

        for focus in sorted(terms_at):
            focus_term = terms_at[focus]
            for offset, neighbour in self._window.neighbours(focus, terms_at):
                weight = weights.get(neighbour)
                if weight is None:
                    weight = self._index.global_weight(field, neighbour)
                    weights[neighbour] = weight
                contribution = self._encoder.contribution(
                    offset, self._factory.generate(neighbour), weight
                )
                store.add(focus_term, contribution)
                stats.contributions += 1

    def _positions_of(
        self, doc_id: str, field: str, stats: AccumulationStats
    ) -> Dict[int, str]:
        """position -> term for the accepted terms of one document field."""
        terms_at: Dict[int, str] = {}
        for entry in self._index.term_positions(doc_id, field):
            problem = self._posting_problem(entry)
            if problem is not None:
                stats.skipped_postings += 1
                message = f"Skipping posting in {doc_id}:{field}: {problem}"
                logger.warning(message)
                warnings.warn(message, RecoverableTermWarning, stacklevel=2)
                continue
            if not self._filter.accepts(field, entry.term):
                continue
            for position in entry.positions:
                terms_at[position] = entry.term
        return terms_at

    @staticmethod
    def _posting_problem(entry: TermPositions) -> Optional[str]:
        if not isinstance(entry.term, str) or not entry.term:
            return f"invalid term {entry.term!r}"
        positions: List[object] = list(entry.positions)
        if not all(_is_position(p) for p in positions):
            return f"invalid positions for {entry.term!r}: {positions}"
        if entry.frequency != len(positions):
            return (
                f"frequency {entry.frequency} of {entry.term!r} does not match "
                f"{len(positions)} positions"
            )
        return None
