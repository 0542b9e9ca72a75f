"""
API Request and Response Schemas

JSON bodies use camelCase keys on the wire; Python attributes stay snake_case.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateLinkRequest(CamelModel):
    """Request model for the JSON registration endpoint."""
    long_url: str = Field(..., description="The long URL to shorten")


class LinkResponse(CamelModel):
    """A persisted link."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    short_code: str = Field(..., description="The generated short code")
    long_url: str = Field(..., description="The original long URL")
    created_at: Optional[datetime] = None


class HealthResponse(BaseModel):
    status: str = Field(..., description="pass, warn or fail")


class ErrorResponse(BaseModel):
    """Body of every error response; `status` mirrors the HTTP status code."""
    message: str
    status: int
    details: Optional[str] = None
