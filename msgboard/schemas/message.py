"""
Pydantic schemas for request/response validation.
"""
from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from msgboard.models.message import CONTENT_MAX_LENGTH


class CreateMessageRequest(BaseModel):
    """Request schema for POST /api/messages."""

    content: str = Field(
        ...,
        min_length=1,
        max_length=CONTENT_MAX_LENGTH,
        description="Message text"
    )
    author: str = Field(
        ...,
        description="Author name"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "content": "Hello from the message board",
                "author": "admin"
            }
        }
    }


class UpdateMessageRequest(BaseModel):
    """Request schema for PUT /api/messages/{id}."""
    # Only presence is checked here, the service applies no rules on update
    content: str


class MessageResponse(BaseModel):
    """Schema for a single message in responses."""
    id: int
    content: str
    author: str
    created_date: datetime
    updated_date: Optional[datetime] = None
    active: bool

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageListResponse(BaseModel):
    """Envelope for endpoints returning several messages."""
    status: str = Field(default="success")
    data: List[MessageResponse]
    count: int
    timestamp: Optional[str] = None
    author: Optional[str] = None


class MessageDataResponse(BaseModel):
    """Envelope for endpoints returning one message."""
    status: str = Field(default="success")
    message: Optional[str] = None
    data: MessageResponse
    created_at: Optional[str] = Field(default=None, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)


class StatusResponse(BaseModel):
    """Envelope for endpoints with no payload."""
    status: str = Field(default="success")
    message: str


class StatsResponse(BaseModel):
    """Response schema for GET /api/messages/stats."""
    total_messages: int
    active_messages: int
    inactive_messages: int
    recent_messages: int
    timestamp: str

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class HealthResponse(BaseModel):
    """Response schema for health endpoints."""
    status: str
    checks: Optional[dict] = None


class ErrorResponse(BaseModel):
    """Standard error response schema."""
    status: str = Field(default="error")
    message: str
    timestamp: str
