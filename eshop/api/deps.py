# eshop/api/deps.py
from typing import Optional

from fastapi import Depends, Request
from eshop.core.config import get_settings
from eshop.db.mongo import get_db
from eshop.db.redis import get_redis
from eshop.domain.repositories.payment_repo import PaymentRepo
from eshop.domain.repositories.product_repo import ProductRepo
from eshop.domain.repositories.vector_cache_repo import VectorCacheRepo
from eshop.domain.services.index_builder_svc import SearchIndex
from eshop.domain.services.payment_svc import PaymentService
from eshop.domain.services.search_svc import SemanticSearchService

# Dependency for injecting the MongoDB database into endpoints/services
async def mongo_db(db = Depends(get_db)):
    return db

# Dependency for injecting the Redis client (None when not configured)
def redis_dep():
    return get_redis()

def vector_cache_dep(redis = Depends(redis_dep)) -> Optional[VectorCacheRepo]:
    if redis is None:
        return None
    return VectorCacheRepo(redis, prefix=get_settings().vector_cache_prefix)

def product_repo_dep(db = Depends(mongo_db)) -> ProductRepo:
    return ProductRepo(db)

def payment_service_dep(db = Depends(mongo_db)) -> PaymentService:
    return PaymentService(PaymentRepo(db))

# Process-scoped collaborators are created in the lifespan and live on app.state
def search_index_dep(request: Request) -> SearchIndex:
    return request.app.state.search_index

def search_service_dep(request: Request) -> SemanticSearchService:
    return request.app.state.search_service
