"""Text index implementation, term weighting and term filtering."""

from semvec.indexing.memory_index import InMemoryTextIndex, tokenize
from semvec.indexing.term_filter import TermFilter

__all__ = ["InMemoryTextIndex", "TermFilter", "tokenize"]
