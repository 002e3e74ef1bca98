# eshop/domain/services/index_builder_svc.py

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence
import asyncio
import logging
import time

from eshop.domain.models.product import Product, ProductVector
from eshop.domain.services.vector_index import InMemoryVectorIndex

logger = logging.getLogger(__name__)


class IndexState(str, Enum):
    EMPTY = "empty"
    BUILDING = "building"
    READY = "ready"


@dataclass
class RebuildStats:
    indexed: int = 0
    failed: List[int] = field(default_factory=list)
    processing_time_ms: float = 0.0


class VectorIndexBuilder:
    """
    Embeds every product once and upserts it into an index.
    A failed embedding is logged and skipped; there is no retry and no rollback.
    """

    def __init__(self, embedder):
        self.embedder = embedder

    async def rebuild(self, products: Sequence[Product], index: InMemoryVectorIndex) -> RebuildStats:
        start_ts = time.perf_counter()
        stats = RebuildStats()
        logger.info(f"[index] filling {len(products)} products")

        for product in products:
            try:
                vec = await self.embedder.embed_product(product)
                index.upsert(ProductVector(
                    id=product.id,
                    name=product.name,
                    description=product.description,
                    price=product.price,
                    image_url=product.image_url,
                    vector=vec,
                ))
                stats.indexed += 1
                logger.debug(f"[index] added product_id={product.id} name={product.name}")
            except Exception as e:
                stats.failed.append(product.id)
                logger.error(f"[index] error adding product_id={product.id} to memory: {e}")

        stats.processing_time_ms = (time.perf_counter() - start_ts) * 1000.0
        logger.info(
            f"[index] done indexed={stats.indexed} failed={len(stats.failed)} "
            f"time_ms={stats.processing_time_ms:.1f}"
        )
        return stats


class SearchIndex:
    """
    Owns the live vector index and its lifecycle: EMPTY -> BUILDING -> READY.
    Only the first build is visible as BUILDING; later rebuilds stay READY.

    Builds are single-flight: one asyncio.Lock serializes them, and callers of
    ensure_ready() that queued behind a build return once it is READY.
    A rebuild fills a fresh index and swaps it in at the end, so searches keep
    reading the previous (complete) index meanwhile.
    """

    def __init__(self, builder: VectorIndexBuilder):
        self.builder = builder
        self.index = InMemoryVectorIndex()
        self.state = IndexState.EMPTY
        self._lock = asyncio.Lock()

    @property
    def size(self) -> int:
        return len(self.index)

    async def ensure_ready(self, product_repo) -> None:
        if self.state is IndexState.READY:
            return
        async with self._lock:
            if self.state is IndexState.READY:
                return
            logger.info("[index] not initialized, building before search")
            await self._build(product_repo)

    async def rebuild(self, product_repo) -> RebuildStats:
        async with self._lock:
            return await self._build(product_repo)

    async def _build(self, product_repo) -> RebuildStats:
        previous = self.state
        # a READY index keeps serving until the fresh one is swapped in
        if previous is not IndexState.READY:
            self.state = IndexState.BUILDING
        try:
            products = await product_repo.list_all()
            fresh = InMemoryVectorIndex()
            stats = await self.builder.rebuild(products, fresh)
        except Exception:
            self.state = previous if previous is IndexState.READY else IndexState.EMPTY
            raise
        self.index = fresh
        self.state = IndexState.READY
        return stats
