"""Schemas for the transactional email endpoint."""

from __future__ import annotations

from typing import Any

from pydantic import EmailStr, Field

from .base import ApiModel


class VerificationEmailRequest(ApiModel):
    email: EmailStr | None = None


class VerificationEmailResponse(ApiModel):
    success: bool = True
    message: str
    info: dict[str, Any] = Field(default_factory=dict)


__all__ = ["VerificationEmailRequest", "VerificationEmailResponse"]
