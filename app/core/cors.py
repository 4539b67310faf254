from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings


def cors_allowed_origins() -> list[str]:
    return list(settings.cors_allowed_origins)


def cors_allow_origin_regex() -> str | None:
    regex = (settings.cors_allow_origin_regex or "").strip()
    return regex or None


def install_cors(app: FastAPI) -> bool:
    """Attach CORS headers unless no origins are configured (the host handles CORS then)."""
    origins = cors_allowed_origins()
    regex = cors_allow_origin_regex()
    if not origins and not regex:
        return False
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_origin_regex=regex,
        allow_credentials=settings.cors_allow_credentials and "*" not in origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    return True
