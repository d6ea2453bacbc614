"""Shared building blocks for the request and response schemas."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


def _identifier_to_text(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


Identifier = Annotated[str | None, BeforeValidator(_identifier_to_text)]


class ApiModel(BaseModel):
    """Schema exchanged with camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(ApiModel):
    success: bool = True
    message: str


__all__ = ["ApiModel", "Identifier", "MessageResponse"]
