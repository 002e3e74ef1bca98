# eshop/domain/services/vector_index.py

from __future__ import annotations
from typing import Dict, List, Sequence

import numpy as np

from eshop.domain.models.product import ProductVector, ScoredProductVector


class InMemoryVectorIndex:
    """
    Process-local vector store keyed by product id.

    Usage:
        index = InMemoryVectorIndex()
        index.upsert(product_vector)
        hits = index.top_k(query_vector, k=3)   # cosine similarity, best first
    """

    def __init__(self):
        self._records: Dict[int, ProductVector] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, product_id: int) -> bool:
        return product_id in self._records

    def get(self, product_id: int) -> ProductVector | None:
        return self._records.get(product_id)

    def upsert(self, record: ProductVector) -> None:
        self._records[record.id] = record

    def top_k(self, query: Sequence[float], k: int) -> List[ScoredProductVector]:
        if not self._records or k <= 0:
            return []

        records = list(self._records.values())
        matrix = np.asarray([r.vector for r in records], dtype=np.float32)
        q = np.asarray(query, dtype=np.float32)
        if matrix.shape[1] != q.shape[0]:
            raise ValueError(f"Query dimension {q.shape[0]} does not match index dimension {matrix.shape[1]}")

        norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(q)
        dots = matrix @ q
        # zero vectors score 0 instead of NaN
        scores = np.divide(dots, norms, out=np.zeros_like(dots), where=norms > 0)

        order = np.argsort(-scores, kind="stable")[:k]
        return [ScoredProductVector(record=records[i], score=float(scores[i])) for i in order]
