from fastapi import APIRouter

from app.schemas.profile import ProfileRecord
from app.services.profile_service import load_profile
from app.services.quote_service import random_quote

router = APIRouter()


@router.get("/profile", response_model=ProfileRecord)
async def profile():
    return load_profile()


@router.get("/quote")
async def quote():
    return random_quote()
