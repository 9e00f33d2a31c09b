"""
TermFilter: decides which index terms take part in a run.

A rejected term gets no vector and never contributes to another term's
window. Decisions are cached per (field, term) because the accumulator asks
once per occurrence.
"""

import logging
from typing import Collection, Dict, Iterable, Optional, Tuple

from semvec.config.constants import DEFAULT_MAX_FREQUENCY
from semvec.config.settings import Settings
from semvec.protocols.text_index import TextIndex

logger = logging.getLogger(__name__)


def count_nonalphabet_chars(term: str) -> int:
    return sum(1 for ch in term if not ch.isalpha())


def is_number(term: str) -> bool:
    try:
        float(term)
    except ValueError:
        return False
    return True


class TermFilter:
    """
    Frequency, character and field based term filter.

    Attributes:
        contents_fields: Fields whose terms may be indexed
        min_frequency: Minimum collection frequency
        max_frequency: Maximum collection frequency
        max_nonalphabet_chars: Non-alphabetic character limit (-1: no limit)
        filter_out_numbers: Reject terms that parse as numbers
        stopwords: Terms that are always rejected

    Example:
        >>> term_filter = TermFilter(index, ["contents"], min_frequency=2)
        >>> term_filter.accepts("contents", "rare")
        False
    """

    def __init__(
        self,
        index: TextIndex,
        contents_fields: Iterable[str],
        min_frequency: int = 0,
        max_frequency: int = DEFAULT_MAX_FREQUENCY,
        max_nonalphabet_chars: int = -1,
        filter_out_numbers: bool = False,
        stopwords: Collection[str] = (),
    ):
        self._index = index
        self.contents_fields = tuple(contents_fields)
        self.min_frequency = min_frequency
        self.max_frequency = max_frequency
        self.max_nonalphabet_chars = max_nonalphabet_chars
        self.filter_out_numbers = filter_out_numbers
        self.stopwords = frozenset(stopwords)
        self._decisions: Dict[Tuple[str, str], bool] = {}

    @classmethod
    def from_settings(cls, index: TextIndex, settings: Settings) -> "TermFilter":
        return cls(
            index,
            settings.contents_fields,
            min_frequency=settings.min_frequency,
            max_frequency=settings.max_frequency,
            max_nonalphabet_chars=settings.max_nonalphabet_chars,
            filter_out_numbers=settings.filter_out_numbers,
            stopwords=settings.stopwords,
        )

    def accepts(self, field: str, term: str) -> bool:
        """True if the term in this field takes part in the run."""
        key = (field, term)
        decision = self._decisions.get(key)
        if decision is None:
            reason = self.rejection_reason(field, term)
            if reason is not None:
                logger.debug(f"Filtered term {field}:{term!r}: {reason}")
            decision = reason is None
            self._decisions[key] = decision
        return decision

    def rejection_reason(self, field: str, term: str) -> Optional[str]:
        """Why a term is rejected, or None if it is accepted."""
        if field not in self.contents_fields:
            return "field not indexed"
        if term in self.stopwords:
            return "stopword"
        if self.filter_out_numbers and is_number(term):
            return "number"
        if 0 <= self.max_nonalphabet_chars < count_nonalphabet_chars(term):
            return "too many non-alphabetic characters"
        frequency = self._index.collection_frequency(field, term)
        if frequency < self.min_frequency:
            return f"frequency {frequency} below {self.min_frequency}"
        if frequency > self.max_frequency:
            return f"frequency {frequency} above {self.max_frequency}"
        return None

    @property
    def rejected_count(self) -> int:
        """Number of distinct (field, term) pairs rejected so far."""
        return sum(1 for accepted in self._decisions.values() if not accepted)
