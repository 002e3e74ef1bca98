from functools import lru_cache
from typing import List, Literal, Optional
import os
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["development", "production"]

ENV_FILES = {
    "development": ".env.development",
    "production": ".env.production",
}


class Settings(BaseSettings):
    # Every field has a local-dev default so the app and the tests import
    # without any environment; production values come from .env.production.

    # Core
    APP_ENV: EnvName = "development"
    APP_NAME: str = "eShopLite"
    DEBUG: bool = False
    GIT_SHA: str = "unknown"
    ALLOWED_ORIGINS: str = ""                  # CSV, empty = http://localhost:3000

    # Mongo (products + payments)
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB: str = "eshop"

    # Redis, only used as embedding cache; empty disables it
    REDIS_URL: str = ""
    vector_cache_ttl: int = 7 * 24 * 3600      # a vector only changes with text or model
    vector_cache_prefix: str = "vec"

    # OpenAI-compatible provider
    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: Optional[str] = None
    OPENAI_EMBEDDING_MODEL: str = "text-embedding-3-small"
    OPENAI_CHAT_MODEL: str = "gpt-4o-mini"
    openai_timeout_s: int = 30

    # Startup
    SEED_CATALOG: bool = True
    BUILD_INDEX_ON_STARTUP: bool = True

    model_config = SettingsConfigDict(env_file=None, case_sensitive=True, extra="ignore")

    @property
    def cors_origins(self) -> List[str]:
        origins = [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]
        return origins or ["http://localhost:3000"]


@lru_cache
def get_settings() -> Settings:
    """
    Load settings once per process.
    APP_ENV is read from the real environment first since it picks the .env file.
    """
    app_env = os.getenv("APP_ENV", "development")
    return Settings(
        _env_file=ENV_FILES.get(app_env, ENV_FILES["production"]),
        _env_file_encoding="utf-8",
    )
