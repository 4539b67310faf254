from fastapi import APIRouter, Depends, Request

from app.core.rate_limit import client_ip, rate_limit
from app.schemas.contact import ContactRequest, ContactResponse
from app.services.contact_service import submit_contact
from app.store.base import DataStore
from app.store.factory import get_store

router = APIRouter()


@router.post("/contact", response_model=ContactResponse)
@rate_limit("5/minute")
def contact(request: Request, payload: ContactRequest, store: DataStore = Depends(get_store)):
    return submit_contact(
        store,
        payload,
        ip=client_ip(request),
        user_agent=request.headers.get("user-agent") or "Unknown",
    )
