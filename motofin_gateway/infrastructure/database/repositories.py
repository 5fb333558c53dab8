"""Data access layer for documents and quotations"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from motofin_gateway.domain.exceptions import TransactionConflict
from motofin_gateway.infrastructure.database.models import Document, Quotation
from motofin_gateway.infrastructure.observability.metrics import sequencer_conflict_counter

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class DocumentStore:
    """
    Keyed JSON documents with merge writes and optimistic transactions.

    Every transaction attempt runs in its own session so a retry re-reads
    the committed state.
    """

    def __init__(self, session_factory: sessionmaker, max_retries: int = 5, backoff_base: float = 0.05):
        self.session_factory = session_factory
        self.max_retries = max_retries
        self.backoff_base = backoff_base

    def read(self, key: str) -> Optional[Record]:
        session: Session = self.session_factory()
        try:
            doc = session.query(Document).filter(Document.key == key).first()
            return dict(doc.data) if doc is not None else None
        finally:
            session.close()

    def merge_write(self, key: str, partial: Record) -> Record:
        """Merge fields into a document, creating it when absent"""
        return self.run_transaction(key, lambda current: partial)

    def run_transaction(self, key: str, fn: Callable[[Optional[Record]], Record]) -> Record:
        """
        Read-modify-write `key` atomically.

        Retry strategy:
        - Stale version (another writer committed first) or racing insert
          rolls back and re-runs `fn` against the fresh record
        - Backoff: base, 2*base, 4*base, ...
        - Database errors are not retried

        Raises:
            TransactionConflict: retries exhausted or database unavailable
        """
        attempt = 0
        while True:
            session: Session = self.session_factory()
            try:
                doc = session.query(Document).filter(Document.key == key).first()
                current = dict(doc.data) if doc is not None else None

                merged = dict(current or {})
                merged.update(fn(current))

                if doc is None:
                    session.add(Document(key=key, data=merged))
                else:
                    doc.data = merged
                session.commit()
                return merged

            except (StaleDataError, IntegrityError) as e:
                session.rollback()
                attempt += 1
                sequencer_conflict_counter.inc()
                logger.warning(
                    "Document write conflict",
                    extra={"document_key": key, "attempt": attempt},
                )

                if attempt >= self.max_retries:
                    raise TransactionConflict(
                        f"Gave up on {key} after {attempt} conflicting attempts"
                    ) from e

                time.sleep(self.backoff_base * (2 ** (attempt - 1)))

            except OperationalError as e:
                session.rollback()
                raise TransactionConflict(f"Document store unavailable: {e}") from e

            finally:
                session.close()


class QuotationRepository:
    """Repository for issued quotations"""

    def __init__(self, db: Session):
        self.db = db

    def create_quotation(self, **fields: Any) -> Quotation:
        """Persist an issued quotation"""
        db_quotation = Quotation(**fields)
        self.db.add(db_quotation)
        self.db.flush()
        return db_quotation

    def get_quotation(self, quote_id: str) -> Optional[Quotation]:
        return self.db.query(Quotation).filter(Quotation.quote_id == quote_id).first()

    def get_quotations_by_phone(self, phone: str, limit: int = 10) -> List[Quotation]:
        """Fetch recent quotations for a lead"""
        return (
            self.db.query(Quotation)
            .filter(Quotation.phone == phone)
            .order_by(Quotation.created_at.desc(), Quotation.quote_id.desc())
            .limit(limit)
            .all()
        )
