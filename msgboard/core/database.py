"""
Database connection and session management.
"""
import threading
from contextlib import nullcontext
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from msgboard.core.clock import utc_now
from msgboard.core.config import get_settings
from msgboard.core.logging import get_logger

logger = get_logger(__name__)

# Create base class for models
Base = declarative_base()

# Engine and session factory (initialized lazily)
_engine = None
_SessionLocal = None

# StaticPool engines share one DBAPI connection; access to it is serialized per engine
_engine_locks = {}
_engine_locks_guard = threading.Lock()

SAMPLE_MESSAGES = [
    ("Welcome to the Message Service!", "admin"),
    ("This message board runs on FastAPI and SQLAlchemy", "system"),
    ("Statistics are reported in the background every minute", "admin"),
    ("Using SQLite in-memory database for easy testing", "system"),
    ("Messages can be searched, filtered by author and updated", "developer"),
]


def get_engine():
    """Get or create the database engine."""
    global _engine
    if _engine is None:
        settings = get_settings()
        
        engine_kwargs = {"echo": settings.debug}
        if settings.database_url.startswith("sqlite"):
            # The reporter thread and request handlers share the same database
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            
            if settings.is_in_memory_database:
                # One shared connection, otherwise every connection gets an empty database
                engine_kwargs["poolclass"] = StaticPool
            else:
                db_path = settings.database_url.replace("sqlite:///", "")
                if db_path.startswith("./"):
                    db_path = db_path[2:]
                db_dir = Path(db_path).parent
                if db_dir and not db_dir.exists():
                    db_dir.mkdir(parents=True, exist_ok=True)
                    logger.info(f"Created database directory: {db_dir}")
        else:
            engine_kwargs["pool_pre_ping"] = True
        
        _engine = create_engine(settings.database_url, **engine_kwargs)
        
        logger.info("Database engine created", extra={"extra_data": {"database_url": settings.database_url}})
    
    return _engine


def get_engine_lock(engine) -> Optional[threading.RLock]:
    """Lock guarding the single shared connection of a StaticPool engine, else None."""
    if not isinstance(engine.pool, StaticPool):
        return None
    with _engine_locks_guard:
        lock = _engine_locks.get(engine)
        if lock is None:
            lock = _engine_locks[engine] = threading.RLock()
    return lock


def connection_guard(engine):
    """Context manager holding the engine lock, or doing nothing for pooled engines."""
    return get_engine_lock(engine) or nullcontext()


def create_session_factory(engine) -> sessionmaker:
    """Build a session factory whose objects stay readable after commit."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


def get_session_factory() -> sessionmaker:
    """Get or create the session factory."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = create_session_factory(get_engine())
    return _SessionLocal


def init_db(engine=None) -> None:
    """Initialize database tables."""
    from msgboard.models import message  # noqa: F401 - Import to register models
    
    Base.metadata.create_all(bind=engine or get_engine())
    logger.info("Database tables created")


def seed_sample_messages(session_factory=None) -> int:
    """Insert the sample messages when the table is empty. Returns rows inserted."""
    from msgboard.models.message import Message
    
    session_factory = session_factory or get_session_factory()
    with connection_guard(session_factory.kw["bind"]), session_factory() as db:
        if db.query(Message.id).first() is not None:
            logger.info("Messages table already populated, skipping sample data")
            return 0
        
        now = utc_now()
        db.add_all([
            Message(content=content, author=author, created_date=now, active=True)
            for content, author in SAMPLE_MESSAGES
        ])
        db.commit()
    
    logger.info("Sample messages inserted", extra={"extra_data": {"count": len(SAMPLE_MESSAGES)}})
    return len(SAMPLE_MESSAGES)


def check_db_connection() -> bool:
    """Check if database is reachable."""
    try:
        engine = get_engine()
        with connection_guard(engine), engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection check failed: {e}")
        return False
