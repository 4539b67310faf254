from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter()


class HealthStatus(BaseModel):
    status: str = "healthy"


@router.get(
    "/health",
    response_model=HealthStatus,
    summary="Health Check",
    description="Liveness probe for the portfolio API; does not touch the data store.",
)
async def health_check():
    return HealthStatus()
