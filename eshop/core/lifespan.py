# eshop/core/lifespan.py
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from openai import AsyncOpenAI

from eshop.core.config import Settings, get_settings
from eshop.db import mongo, redis as r
from eshop.domain.repositories.payment_repo import PaymentRepo
from eshop.domain.repositories.product_repo import ProductRepo
from eshop.domain.repositories.vector_cache_repo import VectorCacheRepo
from eshop.domain.services.catalog_seed import seed_catalog
from eshop.domain.services.chat_svc import ChatProvider
from eshop.domain.services.embedding_svc import CachedEmbeddingProvider, EmbeddingProvider
from eshop.domain.services.index_builder_svc import SearchIndex, VectorIndexBuilder
from eshop.domain.services.search_svc import SemanticSearchService

logger = logging.getLogger(__name__)


def build_search_components(settings: Settings, client: AsyncOpenAI, redis_client=None):
    """Wire the process-scoped search collaborators (index, embedder, chat)."""
    cache = VectorCacheRepo(redis_client, prefix=settings.vector_cache_prefix) if redis_client else None
    embedder = CachedEmbeddingProvider(
        EmbeddingProvider(client, settings.OPENAI_EMBEDDING_MODEL, timeout_s=settings.openai_timeout_s),
        cache,
        ttl=settings.vector_cache_ttl,
    )
    chat = ChatProvider(client, settings.OPENAI_CHAT_MODEL, timeout_s=settings.openai_timeout_s)
    index = SearchIndex(VectorIndexBuilder(embedder))
    return index, SemanticSearchService(index, embedder, chat)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # --- Startup ---
    await mongo.connect()
    await r.connect()  # optional, disables the embedding cache when absent

    # the SDK refuses to build without a key; calls then fail as ProviderError
    client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY or "not-set", base_url=settings.OPENAI_BASE_URL)
    logger.info(
        f"AI resources: chat model={settings.OPENAI_CHAT_MODEL} "
        f"embeddings model={settings.OPENAI_EMBEDDING_MODEL}"
    )
    index, search_service = build_search_components(settings, client, r.get_redis())
    app.state.search_index = index
    app.state.search_service = search_service

    product_repo = ProductRepo(mongo.get_db())
    try:
        await product_repo.ensure_indexes()
        await PaymentRepo(mongo.get_db()).ensure_indexes()
        if settings.SEED_CATALOG:
            await seed_catalog(product_repo)
    except Exception as e:
        logger.error(f"Database bootstrap failed: {e}")

    if settings.BUILD_INDEX_ON_STARTUP:
        logger.info("Start fill products in vector index")
        try:
            await index.rebuild(product_repo)
            logger.info(f"Done fill products in vector index size={index.size}")
        except Exception as e:
            # first search will retry the build
            logger.error(f"Vector index build at startup failed: {e}")

    yield

    # --- Shutdown ---
    await r.disconnect()
    await client.close()
    await mongo.disconnect()
