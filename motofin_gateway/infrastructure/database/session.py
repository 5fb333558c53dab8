"""Engine and session factories shared by quotation persistence and the document store"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from motofin_gateway.config import settings
from motofin_gateway.infrastructure.database.repositories import DocumentStore

# Counter transactions hold a connection only for one read-modify-write
engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_recycle=settings.db_pool_recycle_seconds,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Session for one request's quotation reads and writes, closed when the response is sent"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_document_store() -> DocumentStore:
    """
    Store for counter and rate book documents. It opens its own session per
    transaction attempt, independent of the request session.
    """
    return DocumentStore(
        SessionLocal,
        max_retries=settings.sequencer_max_retries,
        backoff_base=settings.sequencer_backoff_base,
    )
