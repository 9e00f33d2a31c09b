"""
Term weighting schemes.

Global weights describe a term across the collection, local weights a
term's frequency inside one document:

    none        global 1                      local tf
    idf         global log10(N / df)          local tf
    logentropy  global 1 + sum(p log p)/log N local log2(1 + tf)
    sqrt        global 1                      local sqrt(tf)

where p = tf_d / cf over the documents d containing the term.
"""

import math
from typing import Iterable

from semvec.config.options import TermWeight


def global_weight(
    scheme: TermWeight,
    num_docs: int,
    doc_frequency: int,
    doc_term_frequencies: Iterable[int] = (),
) -> float:
    """
    Global weight of a term.

    Args:
        scheme: Weighting scheme
        num_docs: Number of documents in the collection
        doc_frequency: Number of documents containing the term
        doc_term_frequencies: Term frequency in each of those documents
            (only read by logentropy)

    Returns:
        Non-negative weight (0.0 for a term in no documents under idf)
    """
    if scheme is TermWeight.IDF:
        if doc_frequency <= 0 or num_docs <= 0:
            return 0.0
        return math.log10(num_docs / doc_frequency)
    if scheme is TermWeight.LOGENTROPY:
        return _entropy_weight(num_docs, list(doc_term_frequencies))
    return 1.0


def local_weight(scheme: TermWeight, frequency: int) -> float:
    """Local weight of a term occurring `frequency` times in a document."""
    if scheme is TermWeight.LOGENTROPY:
        return math.log2(1 + frequency)
    if scheme is TermWeight.SQRT:
        return math.sqrt(frequency)
    return float(frequency)


def _entropy_weight(num_docs: int, frequencies: list) -> float:
    collection_frequency = sum(frequencies)
    if num_docs <= 1 or collection_frequency == 0:
        return 1.0
    entropy = 0.0
    for tf in frequencies:
        if tf > 0:
            p = tf / collection_frequency
            entropy += p * math.log(p)
    return 1.0 + entropy / math.log(num_docs)
