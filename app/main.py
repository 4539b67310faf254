import logging

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler
import sentry_sdk

from app.api.v1.health import router as health_router
from app.api.v1.tools import router as tools_router
from app.api.v1.chat import router as chat_router
from app.api.v1.contact import router as contact_router
from app.api.v1.projects import router as projects_router
from app.api.v1.visits import router as visits_router
from app.api.v1.profile import router as profile_router
from app.core.cors import install_cors
from app.core.error_handlers import register_error_handlers
from app.core.rate_limit import limiter
from app.core.config import settings

logging.basicConfig(level=settings.log_level, format="%(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

app = FastAPI(title="Portfolio API", version="0.1.0")

install_cors(app)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)
register_error_handlers(app)

app.include_router(health_router, prefix="/v1", tags=["Health"])
app.include_router(tools_router, prefix="/v1", tags=["Tools"])
app.include_router(chat_router, prefix="/v1", tags=["Assistant"])
app.include_router(contact_router, prefix="/v1", tags=["Contact"])
app.include_router(projects_router, prefix="/v1", tags=["Projects"])
app.include_router(visits_router, prefix="/v1", tags=["Visits"])
app.include_router(profile_router, prefix="/v1", tags=["Profile"])
