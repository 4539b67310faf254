from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from app.integrations.email import send_contact_notice
from app.schemas.contact import ContactRequest, ContactResponse
from app.store.base import DataStore

logger = logging.getLogger(__name__)

CONTACTS_TABLE = "contacts"


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def submit_contact(
    store: DataStore,
    payload: ContactRequest,
    *,
    ip: str | None = None,
    user_agent: str | None = None,
) -> ContactResponse:
    row = payload.model_dump()
    row["created_at"] = _utc_now()
    stored = store.insert(CONTACTS_TABLE, row)
    logger.info(json.dumps({"event": "contact_stored", "id": stored.get("id"), "message_len": len(payload.message)}))

    email_sent = send_contact_notice({**payload.model_dump(), "ip": ip, "user_agent": user_agent})
    if not email_sent:
        logger.warning(json.dumps({"event": "contact_email_not_sent", "id": stored.get("id")}))
    return ContactResponse(message="Message sent successfully!", email_sent=email_sent)
