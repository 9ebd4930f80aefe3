# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - SUPABASE_URL
      - SUPABASE_KEY (anon key)
      - DATABASE_URL (Supabase Postgres connection string)
      - JWT_SECRET (signing secret for admin session tokens)

    Optional:
      - SUPABASE_SERVICE_ROLE_KEY (used by the storage client)
    """

    PROJECT_NAME: str = "Storefront Admin API"
    API_V1_STR: str = "/api/v1"

    # Supabase / DB config
    SUPABASE_URL: str
    SUPABASE_KEY: str
    DATABASE_URL: str

    # Service role key bypasses RLS (backend only)
    SUPABASE_SERVICE_ROLE_KEY: str | None = None

    # Admin session tokens
    JWT_SECRET: str
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 12 * 60

    # Storage buckets
    PRODUCTS_BUCKET: str = "products"
    BANNER_BUCKET: str = "banner"
    MAX_IMAGE_BYTES: int = 5 * 1024 * 1024  # 5MB per image

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Seconds a cached list is served before it is fetched again.
    # 0 keeps nothing and only merges identical in-flight fetches.
    QUERY_CACHE_TTL_SECONDS: float = 0

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
