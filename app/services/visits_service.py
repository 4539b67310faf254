from app.store.base import DataStore

VISITS_TABLE = "api_visits"
VISITS_ROW_ID = 1


def record_visit(store: DataStore) -> int:
    return store.increment(VISITS_TABLE, VISITS_ROW_ID, "count")
