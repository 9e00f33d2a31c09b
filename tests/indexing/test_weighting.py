"""
Tests for the term weighting schemes.
"""

import math

import pytest

from semvec.config.options import TermWeight
from semvec.indexing.weighting import global_weight, local_weight


class TestGlobalWeight:

    def test_none(self):
        assert global_weight(TermWeight.NONE, 10, 3) == 1.0

    def test_idf(self):
        assert global_weight(TermWeight.IDF, 100, 10) == pytest.approx(1.0)
        assert global_weight(TermWeight.IDF, 10, 10) == 0.0

    def test_idf_unknown_term(self):
        assert global_weight(TermWeight.IDF, 10, 0) == 0.0

    def test_logentropy_even_spread(self):
        # spread evenly over every document: no information
        weight = global_weight(TermWeight.LOGENTROPY, 4, 4, [1, 1, 1, 1])
        assert weight == pytest.approx(0.0, abs=1e-9)

    def test_logentropy_single_document(self):
        assert global_weight(TermWeight.LOGENTROPY, 4, 1, [5]) == pytest.approx(1.0)

    def test_logentropy_partial(self):
        expected = 1.0 + 2 * (0.5 * math.log(0.5)) / math.log(4)
        assert global_weight(TermWeight.LOGENTROPY, 4, 2, [2, 2]) == pytest.approx(expected)

    def test_sqrt_global_is_one(self):
        assert global_weight(TermWeight.SQRT, 4, 2) == 1.0


class TestLocalWeight:

    def test_none(self):
        assert local_weight(TermWeight.NONE, 3) == 3.0

    def test_logentropy(self):
        assert local_weight(TermWeight.LOGENTROPY, 3) == pytest.approx(2.0)

    def test_sqrt(self):
        assert local_weight(TermWeight.SQRT, 9) == pytest.approx(3.0)
