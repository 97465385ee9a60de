"""Message Service: business rules for the message lifecycle."""
from datetime import datetime, timedelta
from typing import List, Optional

from msgboard.core.clock import Clock, utc_now
from msgboard.core.exceptions import InvalidArgumentError, NotFoundError
from msgboard.core.logging import get_logger
from msgboard.models.message import CONTENT_MAX_LENGTH, MAX_MESSAGE_ID, Message
from msgboard.repositories.message_store import MessageStore

logger = get_logger(__name__)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class MessageService:
    """
    Single point of truth for creating, reading, updating, deleting,
    searching and summarizing messages.

    The service keeps no state besides its store and clock, so it can be
    called concurrently from request handlers and the statistics reporter.
    Store errors propagate unchanged.
    """

    def __init__(self, store: MessageStore, clock: Clock = utc_now):
        self.store = store
        self._clock = clock

    def create_message(self, content: Optional[str], author: Optional[str]) -> Message:
        """Create and persist a new active message."""
        if _is_blank(content) or _is_blank(author):
            raise InvalidArgumentError("Content and author cannot be empty")
        if len(content) > CONTENT_MAX_LENGTH:
            raise InvalidArgumentError(
                f"Content must be between 1 and {CONTENT_MAX_LENGTH} characters",
                field="content",
            )

        message = Message(
            content=content,
            author=author,
            created_date=self._clock(),
            updated_date=None,
            active=True,
        )
        message = self.store.insert(message)
        logger.info(
            "Message created",
            extra={"extra_data": {"message_id": message.id, "author": author}},
        )
        return message

    def get_all_messages(self) -> List[Message]:
        return self.store.find_all()

    def get_message_by_id(self, message_id: int) -> Message:
        # Ids outside the key range cannot exist and would not bind as SQLite INTEGER
        if not 1 <= message_id <= MAX_MESSAGE_ID:
            raise NotFoundError("Message", message_id)
        message = self.store.find_by_id(message_id)
        if message is None:
            raise NotFoundError("Message", message_id)
        return message

    def update_message(self, message_id: int, content: str) -> Message:
        """
        Replace the content of an existing message and stamp ``updated_date``.

        Unlike ``create_message`` the new content is not validated.
        """
        message = self.get_message_by_id(message_id)
        message.content = content
        message.updated_date = self._clock()
        message = self.store.update(message)
        logger.info("Message updated", extra={"extra_data": {"message_id": message_id}})
        return message

    def delete_message(self, message_id: int) -> None:
        message = self.get_message_by_id(message_id)
        self.store.delete(message)
        logger.info("Message deleted", extra={"extra_data": {"message_id": message_id}})

    def get_messages_by_author(self, author: str) -> List[Message]:
        return self.store.find_by_author(author)

    def get_recent_messages(self, days_ago: int) -> List[Message]:
        """Active messages created within the last ``days_ago`` days."""
        try:
            cutoff = self._clock() - timedelta(days=days_ago)
        except OverflowError:
            # Window reaches past the earliest representable date
            cutoff = datetime.min
        return self.store.find_created_after_and_active(cutoff)

    def get_active_message_count(self) -> int:
        return self.store.count_active()

    def search_messages(self, keyword: Optional[str]) -> List[Message]:
        """
        Case-insensitive substring search on message content.

        A missing or blank keyword returns every message rather than none.
        """
        if _is_blank(keyword):
            return self.get_all_messages()
        return self.store.find_by_content_containing_ignore_case(keyword.strip())
