"""
Unit tests for VectorStore.
"""

import pytest
import torch

from semvec.config.options import VectorType
from semvec.core.vector_store import VectorStore
from semvec.core.vector_types import algebra_for


@pytest.fixture
def store():
    return VectorStore(algebra_for(VectorType.REAL, 4))


class TestSetAndAdd:
    """put() sets, add() accumulates."""

    def test_get_missing(self, store):
        assert store.get("missing") is None
        assert "missing" not in store

    def test_add_accumulates(self, store):
        store.add("apple", torch.tensor([1.0, 0.0, 0.0, 0.0]))
        store.add("apple", torch.tensor([0.0, 2.0, 0.0, 0.0]))
        assert torch.equal(store.get("apple"), torch.tensor([1.0, 2.0, 0.0, 0.0]))

    def test_add_copies_first_contribution(self, store):
        contribution = torch.tensor([1.0, 0.0, 0.0, 0.0])
        store.add("apple", contribution)
        store.add("apple", torch.tensor([1.0, 0.0, 0.0, 0.0]))
        assert contribution.tolist() == [1.0, 0.0, 0.0, 0.0]

    def test_put_replaces(self, store):
        store.add("apple", torch.ones(4))
        store.put("apple", torch.zeros(4))
        assert torch.equal(store.get("apple"), torch.zeros(4))

    def test_put_validates_dimension(self, store):
        with pytest.raises(ValueError):
            store.put("apple", torch.ones(5))

    def test_add_validates_dimension(self, store):
        with pytest.raises(ValueError):
            store.add("apple", torch.ones(3))


class TestIteration:
    """Iteration follows insertion order and can be restarted."""

    def test_insertion_order(self, store):
        for key in ["zebra", "apple", "mango"]:
            store.add(key, torch.ones(4))
        store.add("zebra", torch.ones(4))

        assert store.keys() == ["zebra", "apple", "mango"]
        assert [key for key, _ in store.items()] == ["zebra", "apple", "mango"]
        assert list(store) == ["zebra", "apple", "mango"]

    def test_items_restartable(self, store):
        store.add("a", torch.ones(4))
        store.add("b", torch.ones(4))
        first = [key for key, _ in store.items()]
        second = [key for key, _ in store.items()]
        assert first == second == ["a", "b"]

    def test_len(self, store):
        store.add("a", torch.ones(4))
        store.add("b", torch.ones(4))
        assert len(store) == 2


class TestNormalizeAll:
    """normalize_all() rescales to unit length and leaves zero vectors alone."""

    def test_unit_length(self, store):
        store.add("a", torch.tensor([3.0, 4.0, 0.0, 0.0]))
        store.add("b", torch.tensor([1.0, 1.0, 1.0, 1.0]))
        store.normalize_all()

        for _, vector in store.items():
            assert torch.linalg.vector_norm(vector).item() == pytest.approx(1.0, abs=1e-6)
        assert torch.allclose(store.get("a"), torch.tensor([0.6, 0.8, 0.0, 0.0]))

    def test_zero_vector_unchanged(self, store):
        store.add("zero", torch.zeros(4))
        store.normalize_all()
        assert torch.equal(store.get("zero"), torch.zeros(4))

    def test_binary_tallies_become_bits(self):
        store = VectorStore(algebra_for(VectorType.BINARY, 4))
        store.add("a", torch.tensor([2, -2, 1, -1], dtype=torch.int64))
        store.normalize_all()
        assert store.get("a").tolist() == [True, False, True, False]


class TestFreezeCopyMerge:
    """Frozen stores reject changes; copies and merges behave."""

    def test_frozen_rejects_changes(self, store):
        store.add("a", torch.ones(4))
        store.freeze()

        assert store.frozen
        with pytest.raises(RuntimeError):
            store.add("a", torch.ones(4))
        with pytest.raises(RuntimeError):
            store.put("b", torch.ones(4))
        with pytest.raises(RuntimeError):
            store.normalize_all()

    def test_copy_is_independent(self, store):
        store.add("a", torch.ones(4))
        store.freeze()

        clone = store.copy()
        clone.add("a", torch.ones(4))

        assert not clone.frozen
        assert torch.equal(store.get("a"), torch.ones(4))
        assert torch.equal(clone.get("a"), torch.full((4,), 2.0))

    def test_merge_adds_in_order(self, store):
        other = VectorStore(store.algebra)
        store.add("a", torch.ones(4))
        other.add("b", torch.ones(4))
        other.add("a", torch.ones(4))

        store.merge(other)

        assert store.keys() == ["a", "b"]
        assert torch.equal(store.get("a"), torch.full((4,), 2.0))

    def test_metadata(self, store):
        assert store.dimension == 4
        assert store.vector_type is VectorType.REAL


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
