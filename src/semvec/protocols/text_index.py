"""
TextIndex Protocol: read-only interface to a positional text index.

Defines the contract a text index must satisfy to feed term co-occurrence
accumulation and LSA. The index is treated as read-only and may be shared
by parallel readers.
"""

from dataclasses import dataclass
from typing import Iterator, Protocol, Sequence, Tuple, runtime_checkable


@dataclass(frozen=True)
class Posting:
    """
    Occurrences of one term in one document.

    Attributes:
        doc_id: Document key
        positions: Token positions of the term in the field
        frequency: Number of occurrences (len(positions) when well formed)
    """
    doc_id: str
    positions: Tuple[int, ...]
    frequency: int


@dataclass(frozen=True)
class TermPositions:
    """
    Occurrences of one term within a given document and field.

    Attributes:
        term: Term text
        positions: Token positions of the term
        frequency: Number of occurrences (len(positions) when well formed)
    """
    term: str
    positions: Tuple[int, ...]
    frequency: int


@runtime_checkable
class TextIndex(Protocol):
    """
    Abstract protocol for the text index collaborator.

    Implementations must:
    1. Enumerate documents, fields and the terms of a field
    2. Provide postings with positions for a term
    3. Provide per-document positional term vectors
    4. Provide frequency statistics and term weights

    Errors reading the underlying storage should surface as OSError or
    semvec.errors.IndexAccessError.
    """

    def num_docs(self) -> int:
        """Total number of documents."""
        ...

    def doc_ids(self) -> Iterator[str]:
        """Document keys in index order."""
        ...

    def fields(self) -> Sequence[str]:
        """Names of the indexed fields."""
        ...

    def terms(self, field: str) -> Iterator[str]:
        """Distinct terms of a field, in sorted order."""
        ...

    def postings(self, field: str, term: str) -> Iterator[Posting]:
        """(document, positions, frequency) for every document containing term."""
        ...

    def term_positions(self, doc_id: str, field: str) -> Iterator[TermPositions]:
        """Positional term vector of one document field."""
        ...

    def doc_frequency(self, field: str, term: str) -> int:
        """Number of documents containing term."""
        ...

    def collection_frequency(self, field: str, term: str) -> int:
        """Total occurrences of term across all documents."""
        ...

    def global_weight(self, field: str, term: str) -> float:
        """Global (collection level) weight of a term."""
        ...

    def local_weight(self, frequency: int) -> float:
        """Local (in-document) weight for a term frequency."""
        ...
