"""
SQLAlchemy-backed store for Message records.
"""
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, sessionmaker

from msgboard.core.database import connection_guard
from msgboard.core.logging import get_logger
from msgboard.models.message import Message

logger = get_logger(__name__)


class MessageStore:
    """
    Generic create/read/update/delete/query store for messages.

    Every call runs in its own session and commits on its own, so a single
    store instance can be shared by request handlers and the background
    reporter. On a single-connection (in-memory) engine each call holds the
    engine lock for its whole session. The store performs no validation.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self._engine = session_factory.kw["bind"]

    @contextmanager
    def _session(self) -> Iterator[Session]:
        with connection_guard(self._engine), self._session_factory() as db:
            yield db

    def insert(self, message: Message) -> Message:
        """Persist a new message; the database assigns its id."""
        with self._session() as db:
            db.add(message)
            db.commit()
            db.refresh(message)
        return message

    def find_by_id(self, message_id: int) -> Optional[Message]:
        with self._session() as db:
            return db.get(Message, message_id)

    def find_all(self) -> List[Message]:
        with self._session() as db:
            return db.query(Message).order_by(Message.id.asc()).all()

    def find_by_author(self, author: str) -> List[Message]:
        with self._session() as db:
            return (
                db.query(Message)
                .filter(Message.author == author)
                .order_by(Message.id.asc())
                .all()
            )

    def find_by_content_containing_ignore_case(self, keyword: str) -> List[Message]:
        """Case-insensitive substring match; LIKE wildcards in keyword match literally."""
        with self._session() as db:
            return (
                db.query(Message)
                .filter(Message.content.icontains(keyword, autoescape=True))
                .order_by(Message.id.asc())
                .all()
            )

    def find_created_after_and_active(self, timestamp: datetime) -> List[Message]:
        """Active messages created strictly after ``timestamp``."""
        with self._session() as db:
            return (
                db.query(Message)
                .filter(Message.created_date > timestamp, Message.active.is_(True))
                .order_by(Message.id.asc())
                .all()
            )

    def find_active(self) -> List[Message]:
        with self._session() as db:
            return (
                db.query(Message)
                .filter(Message.active.is_(True))
                .order_by(Message.id.asc())
                .all()
            )

    def find_by_created_date_between(self, start: datetime, end: datetime) -> List[Message]:
        """Messages created within [start, end]."""
        with self._session() as db:
            return (
                db.query(Message)
                .filter(Message.created_date.between(start, end))
                .order_by(Message.id.asc())
                .all()
            )

    def count_active(self) -> int:
        with self._session() as db:
            return (
                db.query(func.count(Message.id))
                .filter(Message.active.is_(True))
                .scalar()
                or 0
            )

    def update(self, message: Message) -> Message:
        """Write back a message previously loaded from this store."""
        with self._session() as db:
            message = db.merge(message)
            db.commit()
            db.refresh(message)
        return message

    def delete(self, message: Message) -> None:
        with self._session() as db:
            db.query(Message).filter(Message.id == message.id).delete(synchronize_session=False)
            db.commit()

    def delete_by_author(self, author: str) -> int:
        """Remove every message by ``author``. Returns the number of rows removed."""
        with self._session() as db:
            removed = (
                db.query(Message)
                .filter(Message.author == author)
                .delete(synchronize_session=False)
            )
            db.commit()
        logger.info(
            "Messages deleted by author",
            extra={"extra_data": {"author": author, "removed": removed}},
        )
        return removed
