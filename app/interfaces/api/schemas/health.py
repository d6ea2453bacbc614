"""Schema of the liveness probe."""

from .base import ApiModel


class HealthResponse(ApiModel):
    success: bool = True
    message: str
    timestamp: str
    environment: str
    vercel: bool


__all__ = ["HealthResponse"]
