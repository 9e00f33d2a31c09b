"""
InMemoryTextIndex: a small positional index satisfying the TextIndex protocol.

Documents are tokenized once at construction. The index keeps, per field,
an inverted list of postings with positions and, per document field, the
positional term vector the accumulator scans.
"""

import logging
import re
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Sequence, Tuple, Union

from semvec.config.constants import DEFAULT_CONTENTS_FIELD
from semvec.config.options import TermWeight
from semvec.errors import IndexAccessError
from semvec.indexing import weighting
from semvec.protocols.text_index import Posting, TermPositions

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"\w+")


def tokenize(text: str) -> List[str]:
    """Lowercase word tokens."""
    return TOKEN_PATTERN.findall(text.lower())


class InMemoryTextIndex:
    """
    Positional text index held in memory.

    Attributes:
        _doc_ids: Document keys in insertion order
        _fields: Field names in order of first appearance
        _term_vectors: (doc_id, field) -> term -> positions
        _postings: field -> term -> postings
        _term_weight: Weighting scheme used by global/local weights

    Example:
        >>> index = InMemoryTextIndex.from_texts(["a b c", "a b c"])
        >>> index.num_docs()
        2
        >>> index.collection_frequency("contents", "b")
        2
    """

    def __init__(
        self,
        documents: Mapping[str, Mapping[str, str]],
        term_weight: TermWeight = TermWeight.NONE,
        tokenizer: Callable[[str], List[str]] = tokenize,
    ):
        """
        Build the index.

        Args:
            documents: doc_id -> {field: text}
            term_weight: Weighting scheme for global/local weights
            tokenizer: Splits field text into terms
        """
        self._term_weight = TermWeight(term_weight)
        self._doc_ids: List[str] = []
        self._fields: List[str] = []
        self._term_vectors: Dict[Tuple[str, str], Dict[str, List[int]]] = {}
        self._postings: Dict[str, Dict[str, List[Posting]]] = {}
        self._global_weights: Dict[Tuple[str, str], float] = {}

        for doc_id, fields in documents.items():
            self._doc_ids.append(doc_id)
            for field, text in fields.items():
                if field not in self._fields:
                    self._fields.append(field)
                    self._postings[field] = {}
                positions: Dict[str, List[int]] = {}
                for position, term in enumerate(tokenizer(text)):
                    positions.setdefault(term, []).append(position)
                self._term_vectors[(doc_id, field)] = positions
                for term, term_positions in positions.items():
                    self._postings[field].setdefault(term, []).append(
                        Posting(doc_id, tuple(term_positions), len(term_positions))
                    )

        logger.debug(
            f"Indexed {len(self._doc_ids)} documents, fields {self._fields}"
        )

    @classmethod
    def from_texts(
        cls,
        texts: Union[Sequence[str], Mapping[str, str]],
        field: str = DEFAULT_CONTENTS_FIELD,
        term_weight: TermWeight = TermWeight.NONE,
    ) -> "InMemoryTextIndex":
        """
        Index plain strings into a single field.

        Args:
            texts: Sequence of texts (doc ids "0", "1", ...) or doc_id -> text
            field: Field name receiving the text
            term_weight: Weighting scheme

        Returns:
            InMemoryTextIndex
        """
        if isinstance(texts, Mapping):
            items: Iterable[Tuple[str, str]] = texts.items()
        else:
            items = ((str(i), text) for i, text in enumerate(texts))
        return cls({doc_id: {field: text} for doc_id, text in items}, term_weight)

    @classmethod
    def from_directory(
        cls,
        directory: Union[str, Path],
        field: str = DEFAULT_CONTENTS_FIELD,
        term_weight: TermWeight = TermWeight.NONE,
        pattern: str = "**/*",
    ) -> "InMemoryTextIndex":
        """
        Index every regular file below a directory as one document.

        Document ids are paths relative to the directory.

        Raises:
            IndexAccessError: If the directory is missing or a file cannot be read
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise IndexAccessError(f"Index directory not found: {directory}")

        texts: Dict[str, str] = {}
        try:
            for path in sorted(directory.glob(pattern)):
                if path.is_file():
                    texts[path.relative_to(directory).as_posix()] = path.read_text(
                        encoding="utf-8"
                    )
        except (OSError, UnicodeDecodeError) as e:
            raise IndexAccessError(f"Could not read index directory {directory}: {e}") from e

        logger.info(f"Read {len(texts)} documents from {directory}")
        return cls.from_texts(texts, field=field, term_weight=term_weight)

    @property
    def term_weight(self) -> TermWeight:
        return self._term_weight

    def num_docs(self) -> int:
        return len(self._doc_ids)

    def doc_ids(self) -> Iterator[str]:
        return iter(list(self._doc_ids))

    def fields(self) -> Sequence[str]:
        return tuple(self._fields)

    def terms(self, field: str) -> Iterator[str]:
        return iter(sorted(self._postings.get(field, {})))

    def postings(self, field: str, term: str) -> Iterator[Posting]:
        return iter(list(self._postings.get(field, {}).get(term, [])))

    def term_positions(self, doc_id: str, field: str) -> Iterator[TermPositions]:
        positions = self._term_vectors.get((doc_id, field), {})
        for term, term_positions in positions.items():
            yield TermPositions(term, tuple(term_positions), len(term_positions))

    def doc_frequency(self, field: str, term: str) -> int:
        return len(self._postings.get(field, {}).get(term, []))

    def collection_frequency(self, field: str, term: str) -> int:
        return sum(p.frequency for p in self._postings.get(field, {}).get(term, []))

    def global_weight(self, field: str, term: str) -> float:
        key = (field, term)
        weight = self._global_weights.get(key)
        if weight is None:
            postings = self._postings.get(field, {}).get(term, [])
            weight = weighting.global_weight(
                self._term_weight,
                self.num_docs(),
                len(postings),
                (p.frequency for p in postings),
            )
            self._global_weights[key] = weight
        return weight

    def local_weight(self, frequency: int) -> float:
        return weighting.local_weight(self._term_weight, frequency)

    def __repr__(self) -> str:
        return f"InMemoryTextIndex(docs={self.num_docs()}, fields={self._fields})"
