from decimal import Decimal

import pytest

from eshop.domain.models.product import ProductVector
from eshop.domain.services.vector_index import InMemoryVectorIndex


def _vec(pid, vector, name="item"):
    return ProductVector(id=pid, name=f"{name}-{pid}", price=Decimal("1.00"), vector=vector)


def test_empty_index_returns_nothing():
    assert InMemoryVectorIndex().top_k([1.0, 0.0], k=3) == []


def test_top_k_orders_by_cosine_similarity():
    index = InMemoryVectorIndex()
    index.upsert(_vec(1, [1.0, 0.0]))
    index.upsert(_vec(2, [0.0, 1.0]))
    index.upsert(_vec(3, [1.0, 1.0]))

    hits = index.top_k([2.0, 0.1], k=2)

    assert [h.record.id for h in hits] == [1, 3]
    assert hits[0].score == pytest.approx(0.99875, abs=1e-4)
    assert hits[1].score == pytest.approx(0.7415, abs=1e-3)


def test_upsert_replaces_entry_with_same_id():
    index = InMemoryVectorIndex()
    index.upsert(_vec(1, [1.0, 0.0], name="old"))
    index.upsert(_vec(1, [0.0, 1.0], name="new"))

    assert len(index) == 1
    assert index.get(1).name == "new-1"
    assert index.top_k([0.0, 1.0], k=1)[0].score == pytest.approx(1.0)


def test_zero_vector_scores_zero():
    index = InMemoryVectorIndex()
    index.upsert(_vec(1, [0.0, 0.0]))

    assert index.top_k([1.0, 0.0], k=1)[0].score == 0.0


def test_dimension_mismatch_raises():
    index = InMemoryVectorIndex()
    index.upsert(_vec(1, [1.0, 0.0, 0.0]))

    with pytest.raises(ValueError):
        index.top_k([1.0, 0.0], k=1)
