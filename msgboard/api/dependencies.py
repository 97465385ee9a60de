"""
FastAPI dependencies wiring the service layer.
"""
from msgboard.core.database import get_session_factory
from msgboard.repositories.message_store import MessageStore
from msgboard.services.message_service import MessageService


def get_message_service() -> MessageService:
    """Dependency providing a Message Service bound to the application database."""
    return MessageService(MessageStore(get_session_factory()))
