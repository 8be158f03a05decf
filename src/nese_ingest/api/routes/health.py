from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    version: str
    vision_provider: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    from nese_ingest import __version__
    from nese_ingest.config import settings
    return HealthResponse(status="ok", version=__version__, vision_provider=settings.vision_provider)
