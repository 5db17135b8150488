"""
Back Office Ledger - Common Schemas

Shared base model, datetime normalization and the success envelope.
JSON payloads use camelCase; snake_case field names are also accepted on input.
"""

from datetime import datetime
from typing import Annotated, Any, Dict, List, Optional

from fastapi.encoders import jsonable_encoder
from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def to_local_naive(value: datetime) -> datetime:
    # Timestamps are stored as naive server-local time
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


LocalDatetime = Annotated[datetime, AfterValidator(to_local_naive)]


class CamelModel(BaseModel):
    """Base schema with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    """Simple message payload."""
    message: str


def success_response(data: Any, warnings: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    """Wrap a payload in the {"success": true, "data": ...} envelope."""
    content: Dict[str, Any] = {"success": True, "data": jsonable_encoder(data, by_alias=True)}
    if warnings:
        content["warnings"] = jsonable_encoder(warnings, by_alias=True)
    return content
