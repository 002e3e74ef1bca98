# eshop/api/v1/routers/search.py
from fastapi import APIRouter, Depends
import time
import logging

from eshop.api.deps import product_repo_dep, search_service_dep
from eshop.api.v1.schemas.products import SearchResponseOut
from eshop.domain.repositories.product_repo import ProductRepo
from eshop.domain.services.search_svc import SemanticSearchService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["search"])


@router.get("/aisearch/{text}", response_model=SearchResponseOut)
async def semantic_search(
    text: str,
    repo: ProductRepo = Depends(product_repo_dep),
    svc: SemanticSearchService = Depends(search_service_dep),
):
    """
    Vector search over the catalog + chat-model answer.
    Always 200: provider failures come back as "An error occurred: ..." text.
    """
    logger.info(f"Request: semantic_search text='{text}'")
    start_time = time.perf_counter()

    res = await svc.search(text, repo)

    logger.info(
        "Response: semantic_search text='%s', count=%s, elapsed_time=%.4fs",
        text, len(res.products), time.perf_counter() - start_time,
    )
    return SearchResponseOut.from_result(res)
