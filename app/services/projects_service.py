from __future__ import annotations

import json
import logging
from typing import Any

from app.store.base import DataStore

logger = logging.getLogger(__name__)

PROJECTS_TABLE = "projects"


def _parse_int(raw: str | None) -> int | None:
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def list_projects(
    store: DataStore,
    *,
    limit: str | None = None,
    offset: str | None = None,
    featured: str | None = None,
) -> dict[str, Any]:
    """Newest projects first; unusable ``limit``/``offset`` values are ignored."""
    limit_num = _parse_int(limit)
    if limit_num is not None and limit_num <= 0:
        limit_num = None
    offset_num = _parse_int(offset)
    if offset_num is not None and offset_num < 0:
        offset_num = None

    filters = {"featured": True} if (featured or "").strip().lower() == "true" else None
    rows = store.select(
        PROJECTS_TABLE,
        filters=filters,
        order_by="created_at",
        descending=True,
        limit=limit_num,
        offset=offset_num,
    )
    logger.info(
        json.dumps(
            {
                "event": "projects_listed",
                "limit": limit_num,
                "offset": offset_num,
                "featured": filters is not None,
                "count": len(rows),
            }
        )
    )
    return {"success": True, "count": len(rows), "data": rows}
