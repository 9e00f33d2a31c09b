"""
Shared fixtures for semvec tests.

Provides small corpora and settings builders used across test packages.
"""

import pytest

from semvec.config.options import VectorType
from semvec.config.settings import load_settings
from semvec.container import SemvecContainer
from semvec.core.vector_types import algebra_for
from semvec.indexing.memory_index import InMemoryTextIndex


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep SEMVEC_* variables from the developer's shell out of tests."""
    import os

    for name in list(os.environ):
        if name.upper().startswith("SEMVEC_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def abc_index():
    """Two documents, each containing the terms 'a b c'."""
    return InMemoryTextIndex.from_texts(["a b c", "a b c"])


@pytest.fixture
def rare_index():
    """'rare' occurs once, every other term twice."""
    return InMemoryTextIndex.from_texts(["a rare b c", "a b c"])


@pytest.fixture
def corpus_index():
    """A slightly larger corpus for parallel and retraining tests."""
    return InMemoryTextIndex.from_texts([
        "the cat sat on the mat",
        "the dog sat on the log",
        "a cat and a dog played",
        "the mat and the log were wet",
        "dogs and cats sat together",
    ])


@pytest.fixture
def make_settings():
    """Settings builder with small defaults (dimension 4, seed length 2, radius 1)."""
    def _make(**overrides):
        values = {"dimension": 4, "seed_length": 2, "window_radius": 1}
        values.update(overrides)
        return load_settings(**values)
    return _make


@pytest.fixture
def make_container(make_settings):
    """SemvecContainer builder on top of make_settings."""
    def _make(**overrides):
        return SemvecContainer(make_settings(**overrides))
    return _make


@pytest.fixture
def real_algebra():
    return algebra_for(VectorType.REAL, 16)


@pytest.fixture
def binary_algebra():
    return algebra_for(VectorType.BINARY, 16)
