# eshop/domain/services/search_svc.py

from __future__ import annotations
from typing import List
import logging
import time

from eshop.domain.models.product import Product, SearchResult
from eshop.domain.services.constants import SEARCH_TOP_K, MIN_SEARCH_SCORE
from eshop.domain.services.index_builder_svc import SearchIndex
from eshop.domain.services.prompts import no_answer, search_messages, keyword_summary

logger = logging.getLogger(__name__)


class SemanticSearchService:
    """
    Retrieval-augmented product search:
      1) make sure the vector index is built (lazy, single-flight)
      2) embed the query
      3) take the top-K nearest products and keep those scoring above the threshold
      4) join each hit back to the products collection (deleted products are skipped)
      5) let the chat model phrase the answer

    Never raises: any failure turns into "An error occurred: <message>" and the
    products collected so far.
    """

    def __init__(self, index: SearchIndex, embedder, chat):
        self.index = index
        self.embedder = embedder
        self.chat = chat

    async def search(self, query: str, product_repo) -> SearchResult:
        t0 = time.perf_counter()
        products: List[Product] = []
        response_text = no_answer(query)

        try:
            await self.index.ensure_ready(product_repo)

            query_vec = await self.embedder.embed(query)
            hits = self.index.index.top_k(query_vec, k=SEARCH_TOP_K)
            logger.debug(f"Vector search hits={[(h.record.id, round(h.score, 3)) for h in hits]}")

            for hit in hits:
                if hit.score <= MIN_SEARCH_SCORE:
                    continue
                product = await product_repo.get_by_id(hit.record.id)
                if product is None:
                    logger.debug(f"Indexed product_id={hit.record.id} no longer exists, skipping")
                    continue
                products.append(product)

            if products:
                messages = search_messages(query, products)
                logger.debug(f"Chat messages: {messages}")
                response_text = await self.chat.complete(messages)
            else:
                logger.info(f"No product above score {MIN_SEARCH_SCORE} for query='{query}'")
        except Exception as e:
            logger.error(f"Error during search query='{query}': {e}")
            response_text = f"An error occurred: {e}"

        logger.info(
            f"Semantic search query='{query}' products={len(products)} "
            f"elapsed={time.perf_counter() - t0:.3f}s"
        )
        return SearchResult(response_text=response_text, products=products)


async def keyword_search(query: str, product_repo) -> SearchResult:
    """Plain name-substring search against the catalog, no models involved."""
    products = await product_repo.search_by_name(query)
    return SearchResult(response_text=keyword_summary(query, len(products)), products=products)
