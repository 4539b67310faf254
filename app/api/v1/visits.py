import json
import logging

from fastapi import APIRouter, Depends, Request

from app.core.errors import UpstreamError
from app.core.rate_limit import rate_limit
from app.services.visits_service import record_visit
from app.store.base import DataStore
from app.store.factory import get_store

logger = logging.getLogger(__name__)

router = APIRouter()


@router.api_route("/visits", methods=["GET", "POST"])
@rate_limit()
def visits(request: Request, store: DataStore = Depends(get_store)):
    _ = request
    try:
        return {"visits": record_visit(store)}
    except UpstreamError as exc:
        raise UpstreamError("Failed to get visits", details=exc.details or exc.message) from exc
    except Exception as exc:
        logger.exception(json.dumps({"event": "visits_failed", "error_type": type(exc).__name__}))
        raise UpstreamError("Failed to get visits") from exc
