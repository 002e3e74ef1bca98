# eshop/api/v1/routers/health.py
import time
import subprocess
from fastapi import APIRouter, Depends
from eshop.api.deps import search_index_dep
from eshop.core.config import get_settings
from eshop.db import mongo
from eshop.db.redis import get_redis
from eshop.domain.services.index_builder_svc import SearchIndex

router = APIRouter(tags=["health"])
START_TIME = time.time()

# checks that decide the overall status; the vector index is informative only
GATING_CHECKS = ("mongodb", "redis", "openai_api_key_set")


def _git_sha() -> str:
    try:
        out = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL)
        return out.decode().strip()
    except Exception:
        return "unknown"


async def _mongo_check() -> str:
    try:
        await mongo.get_db().command("ping")
        return "ok"
    except Exception as e:
        return f"error: {e}"


async def _redis_check() -> str:
    # Redis only backs the embedding cache, so "not configured" is healthy
    r = get_redis()
    if r is None:
        return "skipped"
    try:
        await r.ping()
        return "ok"
    except Exception as e:
        return f"error: {e}"


@router.get("/health")
async def health(index: SearchIndex = Depends(search_index_dep)):
    """Liveness plus dependency status. Never fails itself; inspect `status`."""
    settings = get_settings()
    checks: dict[str, object] = {
        "app_name": settings.APP_NAME,
        "env": settings.APP_ENV,
        "debug": settings.DEBUG,
        "version": settings.GIT_SHA if settings.GIT_SHA != "unknown" else _git_sha(),
        "uptime_seconds": int(time.time() - START_TIME),
        "mongodb": await _mongo_check(),
        "redis": await _redis_check(),
        "openai_api_key_set": bool(settings.OPENAI_API_KEY),
        # an EMPTY index is built on the first search
        "vector_index": {"state": index.state.value, "size": index.size},
    }

    healthy = all(checks[k] in ("ok", "skipped", True) for k in GATING_CHECKS)
    return {"status": "ok" if healthy else "error", "checks": checks, "timestamp": int(time.time())}
