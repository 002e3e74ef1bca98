from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from eshop.core.config import get_settings
from eshop.core.lifespan import lifespan
from eshop.api.v1.routers.health import router as health_router
from eshop.api.v1.routers.payments import router as payments_router
from eshop.api.v1.routers.products import router as products_router
from eshop.api.v1.routers.search import router as search_router
from eshop.core.logging import configure_logging
from eshop.domain.errors import StorageError

from fastapi.middleware.cors import CORSMiddleware
import logging

settings = get_settings()
configure_logging(level=logging.DEBUG if settings.DEBUG else logging.INFO)

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# ------- CORS -------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,         # ALLOWED_ORIGINS csv
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=86400,
)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    # internal detail stays in the logs
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# ------- Routes -------
app.include_router(health_router)
app.include_router(products_router)          # catalog CRUD, keyword search, reindex
app.include_router(search_router)            # semantic search
app.include_router(payments_router)          # payments log
