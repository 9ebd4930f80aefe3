# app/core/supabase_client.py
from functools import lru_cache
from supabase import create_client, Client

from app.core.config import get_settings

settings = get_settings()


@lru_cache
def storage_client() -> Client:
    """
    Supabase client for the `products` and `banner` buckets.

    Signs with SUPABASE_SERVICE_ROLE_KEY when it is set (bypasses bucket
    policies), otherwise with the anon key. Backend only; the service key
    must never reach the dashboard.
    """
    key = settings.SUPABASE_SERVICE_ROLE_KEY or settings.SUPABASE_KEY
    return create_client(settings.SUPABASE_URL, key)
