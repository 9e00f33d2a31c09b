"""
LSA: term and document vectors from a truncated SVD.

Builds a documents x terms matrix of weighted frequencies from the text
index and factorizes it with torch.linalg.svd. Term vectors are the
columns of V^T, document vectors the rows of U, both truncated to the
configured dimension and normalized.
"""

import logging
from dataclasses import dataclass
from typing import List, Tuple

import torch

from semvec.config.options import VectorType
from semvec.config.settings import Settings
from semvec.core.vector_store import VectorStore
from semvec.core.vector_types import algebra_for
from semvec.errors import ConfigurationError, IndexAccessError
from semvec.indexing.term_filter import TermFilter
from semvec.protocols.text_index import TextIndex

logger = logging.getLogger(__name__)


@dataclass
class LSAResult:
    """
    Attributes:
        term_vectors: Normalized term vectors, terms in index order
        doc_vectors: Normalized document vectors, documents in index order
        singular_values: Leading singular values, largest first
    """
    term_vectors: VectorStore
    doc_vectors: VectorStore
    singular_values: torch.Tensor


class LSABuilder:
    """
    Latent Semantic Analysis over one contents field.

    Example:
        >>> builder = LSABuilder(index, load_settings(dimension=2))
        >>> result = builder.build()
        >>> result.term_vectors.dimension
        2
    """

    def __init__(self, index: TextIndex, settings: Settings):
        """
        Check up front that the configuration is usable.

        Raises:
            ConfigurationError: If more than one contents field is configured
        """
        if len(settings.contents_fields) != 1:
            raise ConfigurationError(
                "LSA only supports one contents field, got "
                f"{list(settings.contents_fields)}"
            )
        if settings.vector_type is not VectorType.REAL:
            logger.warning(
                f"LSA is only supported for real vectors ... "
                f"using 'real' instead of '{settings.vector_type.value}'"
            )
        self._index = index
        self._settings = settings
        self._field = settings.contents_fields[0]
        self._filter = TermFilter.from_settings(index, settings)

    def term_document_matrix(self) -> Tuple[torch.Tensor, List[str], List[str]]:
        """
        Weighted documents x terms matrix.

        Entry (d, t) is global_weight(t) * local_weight(tf of t in d).

        Returns:
            (matrix, terms, doc_ids)
        """
        try:
            doc_ids = list(self._index.doc_ids())
            row = {doc_id: i for i, doc_id in enumerate(doc_ids)}
            terms = [
                term for term in self._index.terms(self._field)
                if self._filter.accepts(self._field, term)
            ]
            matrix = torch.zeros((len(doc_ids), len(terms)), dtype=torch.float32)
            for column, term in enumerate(terms):
                global_weight = self._index.global_weight(self._field, term)
                for posting in self._index.postings(self._field, term):
                    matrix[row[posting.doc_id], column] = (
                        global_weight * self._index.local_weight(posting.frequency)
                    )
        except OSError as e:
            raise IndexAccessError(f"Could not read text index: {e}") from e

        logger.info(f"There are {len(terms)} terms (and {len(doc_ids)} docs).")
        return matrix, terms, doc_ids

    def build(self) -> LSAResult:
        """Factorize the term-document matrix and return normalized vectors."""
        matrix, terms, doc_ids = self.term_document_matrix()
        dimension = self._settings.dimension
        rank = min(matrix.shape)
        if dimension > rank:
            logger.warning(
                "Dimension for SVD cannot be greater than the number of documents "
                f"or terms ... setting dimension to {rank}"
            )
            dimension = rank
        if dimension == 0:
            raise ConfigurationError("LSA needs at least one document and one term")

        logger.info("Starting SVD ...")
        u, s, vh = torch.linalg.svd(matrix, full_matrices=False)

        algebra = algebra_for(VectorType.REAL, dimension)
        term_vectors = VectorStore(algebra)
        for column, term in enumerate(terms):
            term_vectors.put(term, algebra.normalize(vh[:dimension, column].clone()))
        doc_vectors = VectorStore(algebra)
        for i, doc_id in enumerate(doc_ids):
            doc_vectors.put(doc_id, algebra.normalize(u[i, :dimension].clone()))

        logger.info(
            f"Built {len(term_vectors)} term vectors and {len(doc_vectors)} "
            f"document vectors of dimension {dimension}"
        )
        return LSAResult(term_vectors.freeze(), doc_vectors.freeze(), s[:dimension].clone())
