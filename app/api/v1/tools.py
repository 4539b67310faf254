from typing import Any

from fastapi import APIRouter, Body, Query, Request

from app.core.config import settings
from app.core.rate_limit import rate_limit
from app.services.tools_service import run_tool

router = APIRouter()


@router.post("/tools", summary="Run a text or time utility selected by 'action'")
@rate_limit(settings.tools_rate_limit)
async def tools_dispatch(
    request: Request,
    payload: dict[str, Any] | None = Body(default=None),
    action: str | None = Query(default=None),
):
    _ = request
    result = run_tool(payload, action=action)
    return result.model_dump(by_alias=True)


@router.post("/tools/{action}", summary="Run a single text or time utility")
@rate_limit(settings.tools_rate_limit)
async def tools_single(
    request: Request,
    action: str,
    payload: dict[str, Any] | None = Body(default=None),
):
    _ = request
    body = dict(payload or {})
    body.pop("action", None)
    result = run_tool(body, action=action)
    return result.model_dump(by_alias=True)
