# eshop/domain/services/embedding_svc.py

from __future__ import annotations
from typing import List, Optional
import logging
import time

from openai import AsyncOpenAI, OpenAIError

from eshop.domain.errors import ProviderError
from eshop.domain.models.product import Product
from eshop.domain.repositories.vector_cache_repo import VectorCacheRepo
from eshop.domain.services.constants import PRODUCT_TEXT_TEMPLATE

logger = logging.getLogger(__name__)


def product_text(product: Product) -> str:
    """Text representation embedded for a catalog product."""
    return PRODUCT_TEXT_TEMPLATE.format(
        name=product.name,
        price=product.price,
        description=product.description or "",
    )


class EmbeddingProvider:
    """
    Thin wrapper over the OpenAI embeddings endpoint (text -> float vector).
    Any SDK failure or empty payload is raised as ProviderError.
    """

    def __init__(self, client: AsyncOpenAI, model: str, timeout_s: int = 30):
        self.client = client
        self.model = model
        self.timeout_s = timeout_s

    async def embed(self, text: str) -> List[float]:
        t0 = time.perf_counter()
        try:
            resp = await self.client.embeddings.create(model=self.model, input=text, timeout=self.timeout_s)
        except OpenAIError as e:
            raise ProviderError(f"embedding request failed: {e}") from e
        if not resp.data:
            raise ProviderError("embedding response contained no data")
        logger.debug(f"Embedding model={self.model} chars={len(text)} duration={time.perf_counter() - t0:.3f}s")
        return list(resp.data[0].embedding)


class CachedEmbeddingProvider:
    """
    Decorates an EmbeddingProvider with the Redis vector cache.
    Cache failures are logged and bypassed; they never fail an embedding.
    """

    def __init__(self, provider: EmbeddingProvider, cache: Optional[VectorCacheRepo], ttl: int):
        self.provider = provider
        self.cache = cache
        self.ttl = ttl

    @property
    def model(self) -> str:
        return self.provider.model

    async def embed(self, text: str) -> List[float]:
        return await self.provider.embed(text)

    async def embed_product(self, product: Product) -> List[float]:
        text = product_text(product)
        if self.cache is None:
            return await self.provider.embed(text)

        cache_key = self.cache.key(product.id, self.model, text)
        try:
            if vec := await self.cache.get(cache_key):
                logger.debug(f"Embedding cache hit for product_id={product.id}")
                return vec
        except Exception as e:
            logger.warning(f"Embedding cache read failed for product_id={product.id}: {e}")

        vec = await self.provider.embed(text)

        try:
            await self.cache.set(cache_key, vec, ttl=self.ttl)
        except Exception as e:
            logger.warning(f"Embedding cache write failed for product_id={product.id}: {e}")
        return vec
