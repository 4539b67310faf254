from __future__ import annotations

import json
import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Any, Iterator

from app.core.config import settings

logger = logging.getLogger(__name__)

SMTP_TIMEOUT_S = 15


@dataclass(frozen=True)
class SmtpRoute:
    host: str
    port: int
    starttls: bool

    @property
    def mode(self) -> str:
        return "STARTTLS" if self.starttls else "SSL"


def _smtp_ready() -> bool:
    return bool(settings.smtp_host and settings.contact_notify_email)


def _smtp_password() -> str | None:
    # Gmail app passwords are often pasted with a space every 4 chars.
    return settings.smtp_password.replace(" ", "") if settings.smtp_password else None


def _routes() -> Iterator[SmtpRoute]:
    """Configured route first, then the opposite TLS mode on its usual port."""
    host = settings.smtp_host or ""
    yield SmtpRoute(host, settings.smtp_port, settings.smtp_use_tls)
    if settings.smtp_fallback_ssl:
        yield SmtpRoute(host, 465 if settings.smtp_use_tls else 587, not settings.smtp_use_tls)


def _deliver(route: SmtpRoute, msg: EmailMessage, context: ssl.SSLContext) -> None:
    if route.starttls:
        server: smtplib.SMTP = smtplib.SMTP(route.host, route.port, timeout=SMTP_TIMEOUT_S)
    else:
        server = smtplib.SMTP_SSL(route.host, route.port, context=context, timeout=SMTP_TIMEOUT_S)
    with server:
        if route.starttls:
            server.starttls(context=context)
        password = _smtp_password()
        if settings.smtp_user and password:
            server.login(settings.smtp_user, password)
        server.send_message(msg)


def build_contact_message(payload: dict[str, Any]) -> EmailMessage:
    recipient = settings.contact_notify_email or ""
    sender = settings.smtp_from or settings.smtp_user or recipient

    msg = EmailMessage()
    msg["Subject"] = f"New message from {payload.get('name') or 'Unknown'}"
    msg["From"] = f"Portfolio Contact Form <{sender}>"
    msg["To"] = recipient
    if payload.get("email"):
        msg["Reply-To"] = str(payload["email"])
    msg.set_content(
        "\n".join(
            [
                f"Name: {payload.get('name')}",
                f"Email: {payload.get('email')}",
                "Message:",
                str(payload.get("message") or ""),
                "",
                f"IP: {payload.get('ip') or 'unknown'}",
                f"User-Agent: {payload.get('user_agent') or 'Unknown'}",
            ]
        )
    )
    return msg


def send_contact_notice(payload: dict[str, Any]) -> bool:
    """Email the contact submission to the site owner; False when it was not delivered."""
    if not _smtp_ready():
        logger.info(json.dumps({"event": "contact_email_skipped", "reason": "smtp_not_configured"}))
        return False

    try:
        msg = build_contact_message(payload)
        context = ssl.create_default_context()
    except Exception as exc:  # noqa: BLE001 - keep contact flow alive
        logger.warning(
            json.dumps(
                {
                    "event": "contact_email_failed",
                    "stage": "build",
                    "error": str(exc)[: settings.log_message_max_chars],
                }
            )
        )
        return False

    for attempt, route in enumerate(_routes()):
        try:
            _deliver(route, msg, context)
        except Exception as exc:  # noqa: BLE001 - keep contact flow alive
            logger.warning(
                json.dumps(
                    {
                        "event": "contact_email_failed",
                        "host": route.host,
                        "port": route.port,
                        "mode": route.mode,
                        "fallback": attempt > 0,
                        "error": str(exc)[: settings.log_message_max_chars],
                    }
                )
            )
            continue
        logger.info(json.dumps({"event": "contact_email_sent", "mode": route.mode, "fallback": attempt > 0}))
        return True
    return False
