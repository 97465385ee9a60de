"""
Message endpoint handlers.

Handlers only shape requests and responses; routing lives in
``msgboard.api.routes``.
"""
from typing import Annotated, List, Optional

from fastapi import Depends, Query

from msgboard.api.dependencies import get_message_service
from msgboard.core.clock import format_timestamp
from msgboard.core.logging import get_logger
from msgboard.models.message import Message
from msgboard.schemas.message import (
    CreateMessageRequest,
    MessageDataResponse,
    MessageListResponse,
    MessageResponse,
    StatusResponse,
    UpdateMessageRequest,
)
from msgboard.services.message_service import MessageService

logger = get_logger(__name__)

Service = Annotated[MessageService, Depends(get_message_service)]

# About a century
MAX_RECENT_DAYS = 36500


def to_response(message: Message) -> MessageResponse:
    return MessageResponse(
        id=message.id,
        content=message.content,
        author=message.author,
        created_date=message.created_date,
        updated_date=message.updated_date,
        active=message.active,
    )


def _to_list(messages: List[Message], **extra) -> MessageListResponse:
    data = [to_response(msg) for msg in messages]
    return MessageListResponse(data=data, count=len(data), **extra)


def list_messages(service: Service) -> MessageListResponse:
    """Get all messages."""
    logger.info("GET /api/messages - Fetching all messages")
    return _to_list(service.get_all_messages(), timestamp=format_timestamp())


def get_message(message_id: int, service: Service) -> MessageDataResponse:
    """Get message by ID."""
    logger.info(f"GET /api/messages/{message_id}")
    return MessageDataResponse(data=to_response(service.get_message_by_id(message_id)))


def create_message(request: CreateMessageRequest, service: Service) -> MessageDataResponse:
    """Create new message."""
    logger.info(f"POST /api/messages - Creating message from author: {request.author}")
    message = service.create_message(request.content, request.author)
    return MessageDataResponse(
        message="Message created successfully",
        data=to_response(message),
        created_at=format_timestamp(),
    )


def update_message(message_id: int, request: UpdateMessageRequest, service: Service) -> MessageDataResponse:
    """Update message content."""
    logger.info(f"PUT /api/messages/{message_id}")
    message = service.update_message(message_id, request.content)
    return MessageDataResponse(message="Message updated successfully", data=to_response(message))


def delete_message(message_id: int, service: Service) -> StatusResponse:
    """Delete message."""
    logger.info(f"DELETE /api/messages/{message_id}")
    service.delete_message(message_id)
    return StatusResponse(message="Message deleted successfully")


def search_messages(
    service: Service,
    keyword: Annotated[Optional[str], Query(description="Case-insensitive content search; blank returns all")] = None,
) -> MessageListResponse:
    """Search messages by keyword."""
    logger.info(f"GET /api/messages/search?keyword={keyword}")
    return _to_list(service.search_messages(keyword))


def recent_messages(
    service: Service,
    days: Annotated[int, Query(ge=0, le=MAX_RECENT_DAYS, description="Look-back window in days")] = 7,
) -> MessageListResponse:
    """Get active messages created within the last ``days`` days."""
    logger.info(f"GET /api/messages/recent?days={days}")
    return _to_list(service.get_recent_messages(days), timestamp=format_timestamp())


def messages_by_author(author: str, service: Service) -> MessageListResponse:
    """Get messages by author."""
    logger.info(f"GET /api/messages/author/{author}")
    return _to_list(service.get_messages_by_author(author), author=author)
