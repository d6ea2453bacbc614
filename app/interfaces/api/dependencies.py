"""FastAPI dependency utilities."""

from fastapi import Depends

from app.config import Settings, get_settings
from app.infrastructure.push import FirebasePushClient, PushDeliveryClient


def get_push_client(settings: Settings = Depends(get_settings)) -> PushDeliveryClient:
    """Return a push client bound to the process-wide Firebase app."""

    return FirebasePushClient(android_channel_id=settings.push_android_channel_id)
