# eshop/domain/repositories/vector_cache_repo.py
from __future__ import annotations
from typing import Optional, Sequence
from redis.asyncio import Redis
import json, hashlib

def _stable_hash(*parts: str) -> str:
    """
    Short, stable hash over the embedding model and input text.
    A changed description or model yields a new key, so stale vectors are never served.
    """
    h = hashlib.sha1()
    for p in parts:
        h.update(p.encode("utf-8"))
        h.update(b"\x00")
    return h.hexdigest()[:12]

class VectorCacheRepo:
    """
    Adapter for storing and retrieving product embeddings in Redis.
    No business logic here, just cache access (get/set/invalidate).
    """
    def __init__(self, redis: Redis, prefix: str = "vec"):
        self.redis = redis
        self.prefix = prefix

    def key(self, product_id: int, model: str, text: str) -> str:
        return f"{self.prefix}:{product_id}:{_stable_hash(model, text)}"

    async def get(self, key: str) -> Optional[list[float]]:
        if raw := await self.redis.get(key):
            return json.loads(raw)
        return None

    async def set(self, key: str, vector: Sequence[float], ttl: int) -> None:
        await self.redis.set(key, json.dumps(list(vector), separators=(",", ":")), ex=ttl)

    async def invalidate(self, product_id: int) -> int:
        """Drop every cached vector for a product, whatever model/text produced it."""
        keys = [k async for k in self.redis.scan_iter(match=f"{self.prefix}:{product_id}:*")]
        if not keys:
            return 0
        return await self.redis.delete(*keys)
