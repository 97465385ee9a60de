"""
Message database model.
"""
from sqlalchemy import Boolean, Column, DateTime, Integer, String

from msgboard.core.clock import utc_now
from msgboard.core.database import Base

CONTENT_MAX_LENGTH = 500
# Largest value a SQLite INTEGER primary key can hold
MAX_MESSAGE_ID = 2**63 - 1


class Message(Base):
    """A message posted to the board."""
    
    __tablename__ = "messages"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    
    content = Column(String(CONTENT_MAX_LENGTH), nullable=False)
    author = Column(String(255), nullable=False, index=True)
    
    created_date = Column(DateTime, nullable=False, default=utc_now, index=True)
    updated_date = Column(DateTime, nullable=True)
    
    # Filtering/statistics flag only, deletes are hard deletes
    active = Column("is_active", Boolean, nullable=False, default=True)
    
    def __repr__(self) -> str:
        return f"<Message(id={self.id}, author={self.author}, active={self.active})>"
