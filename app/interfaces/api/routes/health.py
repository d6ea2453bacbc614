from fastapi import APIRouter, Depends

from app.config import Settings, get_settings
from app.interfaces.api.schemas import HealthResponse
from app.utils import now_in_app_timezone

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        message="Notification service is running",
        timestamp=now_in_app_timezone().isoformat(),
        environment=settings.app_env,
        vercel=settings.vercel,
    )
