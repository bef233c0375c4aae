"""
Common Pydantic schemas used across the API.
"""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


class CamelSchema(BaseSchema):
    """Schema whose wire names are camelCase (`toolType`, `limitType`, ...)."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class IDSchema(BaseSchema):
    """Schema with UUID ID."""

    id: UUID


class TimestampSchema(BaseSchema):
    """Schema with timestamps."""

    created_at: datetime
    updated_at: datetime


class MessageResponse(BaseSchema):
    """Simple message response."""

    message: str
    success: bool = True
