from __future__ import annotations

import json
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import PortfolioAPIError

logger = logging.getLogger(__name__)


def _validation_details(exc: RequestValidationError) -> list[dict[str, str]]:
    details = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        details.append({"field": loc, "message": str(err.get("msg", "Invalid value"))})
    return details


async def portfolio_error_handler(request: Request, exc: PortfolioAPIError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.warning(
            json.dumps(
                {
                    "event": "request_failed",
                    "path": request.url.path,
                    "error_type": type(exc).__name__,
                    "status": exc.status_code,
                    "error": exc.message,
                }
            )
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    _ = request
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    _ = request
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request", "details": _validation_details(exc)},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        json.dumps({"event": "unhandled_error", "path": request.url.path, "error_type": type(exc).__name__})
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PortfolioAPIError, portfolio_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
