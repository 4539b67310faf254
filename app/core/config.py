from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    return tuple(item for item in values if item)


@dataclass(frozen=True)
class Settings:
    rate_limit: str
    rate_limit_enabled: bool
    tools_rate_limit: str
    log_level: str
    sentry_dsn: str | None
    log_message_max_chars: int
    cors_allowed_origins: tuple[str, ...]
    cors_allow_origin_regex: str | None
    cors_allow_credentials: bool
    data_store: str
    sqlite_db_path: str
    supabase_url: str | None
    supabase_key: str | None
    chat_history_max: int
    smtp_host: str | None
    smtp_port: int
    smtp_user: str | None
    smtp_password: str | None
    smtp_from: str | None
    smtp_use_tls: bool
    smtp_fallback_ssl: bool
    contact_notify_email: str | None


settings = Settings(
    rate_limit=_get_env("RATE_LIMIT", "60/minute") or "60/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    tools_rate_limit=_get_env("TOOLS_RATE_LIMIT", "30/minute") or "30/minute",
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    log_message_max_chars=_get_env_int("LOG_MESSAGE_MAX_CHARS", 800),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
            "https://sudharsansrinivasan.com",
            "https://www.sudharsansrinivasan.com",
        ],
    ),
    cors_allow_origin_regex=_get_env("CORS_ALLOW_ORIGIN_REGEX", r"^https:\/\/[a-z0-9-]+-.*\.vercel\.app$"),
    cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", False),
    data_store=(_get_env("DATA_STORE", "sqlite") or "sqlite").strip().lower(),
    sqlite_db_path=_get_env("SQLITE_DB_PATH", "data/portfolio.db") or "data/portfolio.db",
    supabase_url=_get_env("SUPABASE_URL"),
    supabase_key=_get_env("SUPABASE_KEY"),
    chat_history_max=_get_env_int("CHAT_HISTORY_MAX", 12),
    smtp_host=_get_env("SMTP_HOST"),
    smtp_port=_get_env_int("SMTP_PORT", 587),
    smtp_user=_get_env("SMTP_USER"),
    smtp_password=_get_env("SMTP_PASSWORD"),
    smtp_from=_get_env("SMTP_FROM"),
    smtp_use_tls=_get_env_bool("SMTP_USE_TLS", True),
    smtp_fallback_ssl=_get_env_bool("SMTP_FALLBACK_SSL", True),
    contact_notify_email=_get_env("CONTACT_NOTIFY_EMAIL"),
)

if settings.data_store not in {"sqlite", "supabase"}:
    raise RuntimeError("DATA_STORE must be either 'sqlite' or 'supabase'.")

if settings.data_store == "supabase" and not (settings.supabase_url and settings.supabase_key):
    raise RuntimeError("DATA_STORE=supabase requires SUPABASE_URL and SUPABASE_KEY to be set.")
