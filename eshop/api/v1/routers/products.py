# eshop/api/v1/routers/products.py

from fastapi import APIRouter, Depends, HTTPException, Response
from typing import List, Optional
import time

from eshop.api.deps import product_repo_dep, search_index_dep, vector_cache_dep
from eshop.api.v1.schemas.products import ProductIn, ProductOut, ReindexOut, SearchResponseOut
from eshop.domain.repositories.product_repo import ProductRepo
from eshop.domain.repositories.vector_cache_repo import VectorCacheRepo
from eshop.domain.services.index_builder_svc import SearchIndex
from eshop.domain.services.search_svc import keyword_search

import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])

# Catalog edits below are not pushed into the vector index; call /reindex.


@router.get("", response_model=List[ProductOut])
async def list_products(repo: ProductRepo = Depends(product_repo_dep)):
    products = await repo.list_all()
    return [ProductOut.from_product(p) for p in products]


@router.get("/search/{text}", response_model=SearchResponseOut)
async def search_products_by_keyword(text: str, repo: ProductRepo = Depends(product_repo_dep)):
    """Substring match on product names."""
    logger.info(f"Request: keyword_search text='{text}'")
    res = await keyword_search(text, repo)
    logger.info(f"Response: keyword_search text='{text}' count={len(res.products)}")
    return SearchResponseOut.from_result(res)


@router.post("/reindex", response_model=ReindexOut, summary="Rebuild the in-memory vector index from the catalog")
async def reindex_products(
    repo: ProductRepo = Depends(product_repo_dep),
    index: SearchIndex = Depends(search_index_dep),
):
    logger.info("[reindex] start")
    stats = await index.rebuild(repo)
    logger.info(f"[reindex] done indexed={stats.indexed} failed={len(stats.failed)} size={index.size}")
    return ReindexOut(
        indexed=stats.indexed,
        failed=stats.failed,
        state=index.state.value,
        processing_time_ms=stats.processing_time_ms,
    )


@router.get("/{product_id}", response_model=ProductOut)
async def get_product(product_id: int, repo: ProductRepo = Depends(product_repo_dep)):
    product = await repo.get_by_id(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return ProductOut.from_product(product)


@router.post("", response_model=ProductOut, status_code=201)
async def create_product(body: ProductIn, repo: ProductRepo = Depends(product_repo_dep)):
    start = time.perf_counter()
    product = await repo.create(
        name=body.name,
        description=body.description,
        price=body.price,
        image_url=body.image_url,
    )
    logger.info(f"Created product id={product.id} name={product.name} elapsed={time.perf_counter() - start:.4f}s")
    return ProductOut.from_product(product)


@router.put("/{product_id}", response_model=ProductOut)
async def update_product(product_id: int, body: ProductIn, repo: ProductRepo = Depends(product_repo_dep)):
    product = await repo.update(
        product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        image_url=body.image_url,
    )
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    logger.info(f"Updated product id={product_id}")
    return ProductOut.from_product(product)


@router.delete("/{product_id}", status_code=204)
async def delete_product(
    product_id: int,
    repo: ProductRepo = Depends(product_repo_dep),
    cache: Optional[VectorCacheRepo] = Depends(vector_cache_dep),
):
    if not await repo.delete(product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    if cache is not None:
        try:
            dropped = await cache.invalidate(product_id)
            logger.debug(f"Dropped {dropped} cached vectors for product id={product_id}")
        except Exception as e:
            logger.warning(f"Vector cache invalidation failed for product id={product_id}: {e}")
    logger.info(f"Deleted product id={product_id}")
    return Response(status_code=204)
