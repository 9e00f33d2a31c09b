"""Collaborator protocols."""

from semvec.protocols.text_index import Posting, TermPositions, TextIndex

__all__ = ["TextIndex", "Posting", "TermPositions"]
