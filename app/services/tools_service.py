from __future__ import annotations

import hashlib
import json
import logging
import re
from datetime import datetime, timezone as dt_timezone
from typing import Any, Callable, Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ValidationError as PydanticValidationError

from app.core.errors import InvalidActionError, ValidationError
from app.schemas.tools import (
    CharCountResponse,
    HashResponse,
    TextToolRequest,
    TimezoneRequest,
    TimezoneResponse,
    ToolAction,
    ToolResponse,
    WordCountResponse,
)

logger = logging.getLogger("app.tools")

WHITESPACE_RE = re.compile(r"\s+")
TIME_FORMAT = "%I:%M %p"


def _require_text(text: Any) -> str:
    if not isinstance(text, str):
        raise ValidationError("Text must be a string")
    return text


def charcount(text: str) -> CharCountResponse:
    """Count characters as Unicode code points."""
    return CharCountResponse(characters=len(_require_text(text)))


def wordcount(text: str) -> WordCountResponse:
    trimmed = _require_text(text).strip()
    if not trimmed:
        return WordCountResponse(words=0)
    return WordCountResponse(words=len([token for token in WHITESPACE_RE.split(trimmed) if token]))


def sha256_hash(text: str) -> HashResponse:
    digest = hashlib.sha256(_require_text(text).encode("utf-8")).hexdigest()
    return HashResponse(hash=digest)


def to_24_hour(hour: int, ampm: str) -> int:
    if ampm == "PM" and hour < 12:
        return hour + 12
    if ampm == "AM" and hour == 12:
        return 0
    return hour


def _zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise ValidationError("Invalid input", details=f"Unknown timezone '{name}'.") from exc


def convert_timezone(
    from_timezone: str,
    to_timezone: str,
    hour: int,
    minute: int,
    ampm: str,
    *,
    now: datetime | None = None,
) -> TimezoneResponse:
    """Convert a 12-hour wall-clock time between two IANA zones.

    The time is anchored to today's date as observed in ``from_timezone``.
    Wall times inside a DST gap are moved forward by round-tripping through UTC.
    """
    source = _zone(from_timezone)
    target = _zone(to_timezone)
    hour24 = to_24_hour(hour, ampm)

    today = (now or datetime.now(dt_timezone.utc)).astimezone(source)
    try:
        local = datetime(today.year, today.month, today.day, hour24, minute, tzinfo=source)
    except ValueError as exc:
        raise ValidationError("Invalid input") from exc

    local = local.astimezone(dt_timezone.utc).astimezone(source)
    converted = local.astimezone(target)

    return TimezoneResponse(
        original_time=local.strftime(TIME_FORMAT),
        original_timezone=from_timezone,
        converted_time=converted.strftime(TIME_FORMAT),
        converted_timezone=to_timezone,
    )


def _run_charcount(request: TextToolRequest) -> ToolResponse:
    return charcount(request.text)


def _run_wordcount(request: TextToolRequest) -> ToolResponse:
    return wordcount(request.text)


def _run_hash(request: TextToolRequest) -> ToolResponse:
    return sha256_hash(request.text)


def _run_timezone(request: TimezoneRequest) -> ToolResponse:
    return convert_timezone(
        request.from_timezone,
        request.to_timezone,
        request.hour,
        request.minute,
        request.ampm,
    )


_HANDLERS: dict[ToolAction, tuple[type[BaseModel], Callable[[Any], ToolResponse]]] = {
    ToolAction.CHARCOUNT: (TextToolRequest, _run_charcount),
    ToolAction.WORDCOUNT: (TextToolRequest, _run_wordcount),
    ToolAction.HASH: (TextToolRequest, _run_hash),
    ToolAction.TIMEZONE: (TimezoneRequest, _run_timezone),
}

_missing = set(ToolAction) - set(_HANDLERS)
if _missing:
    raise RuntimeError(f"No tool handler registered for: {sorted(a.value for a in _missing)}")


def resolve_action(value: Any) -> ToolAction:
    allowed = ", ".join(f"'{action.value}'" for action in ToolAction)
    if not isinstance(value, str):
        raise InvalidActionError(f"Invalid action. Use {allowed}.")
    try:
        return ToolAction(value.strip().lower())
    except ValueError as exc:
        raise InvalidActionError(f"Invalid action. Use {allowed}.") from exc


def _field_errors(exc: PydanticValidationError) -> list[dict[str, str]]:
    return [
        {"field": ".".join(str(part) for part in err.get("loc", ())), "message": str(err.get("msg", ""))}
        for err in exc.errors()
    ]


def _validation_message(action: ToolAction, exc: PydanticValidationError) -> str:
    missing = any(err.get("type") == "missing" for err in exc.errors())
    if action is ToolAction.TIMEZONE:
        return "Missing required fields" if missing else "Invalid input"
    return "Text must be a string"


def run_tool(payload: Mapping[str, Any] | None, action: Any = None) -> ToolResponse:
    """Validate ``payload`` for the requested action and compute its result.

    ``action`` is taken from the payload first and from the argument second,
    so a query-string action acts as a fallback.
    """
    data = dict(payload or {})
    resolved = resolve_action(data.pop("action", None) or action)
    request_model, handler = _HANDLERS[resolved]

    try:
        request = request_model.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(_validation_message(resolved, exc), details=_field_errors(exc)) from exc

    result = handler(request)
    text = data.get("text")
    logger.info(
        json.dumps(
            {
                "event": "tool_run",
                "action": resolved.value,
                "text_len": len(text) if isinstance(text, str) else None,
            }
        )
    )
    return result
