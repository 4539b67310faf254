from functools import lru_cache

from app.core.config import settings
from app.store.base import DataStore
from app.store.sqlite_store import SQLiteStore


@lru_cache(maxsize=1)
def get_store() -> DataStore:
    if settings.data_store == "supabase":
        from app.store.supabase_store import SupabaseStore

        return SupabaseStore(settings.supabase_url or "", settings.supabase_key or "")
    return SQLiteStore(settings.sqlite_db_path)
