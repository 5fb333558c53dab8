"""Pytest fixtures for testing"""

import threading
import time
import pytest
from typing import Any, Callable, Dict, Generator, Optional
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from motofin_gateway.api.main import create_app
from motofin_gateway.api.dependencies import get_current_year, get_notifier
from motofin_gateway.domain.catalog import CATEGORIES_OFFICIAL, SYNONYMS
from motofin_gateway.domain.classification import CategoryClassifier
from motofin_gateway.domain.exceptions import TransactionConflict
from motofin_gateway.domain.models import FinancialPolicy, LendingEntity
from motofin_gateway.infrastructure.clients.notifier import QuoteNotifier
from motofin_gateway.infrastructure.database.models import Base
from motofin_gateway.infrastructure.database.repositories import DocumentStore
from motofin_gateway.infrastructure.database.session import get_db, get_document_store


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_YEAR = 2026


class InMemoryDocumentStore:
    """
    Optimistic document store double.

    Reads a versioned snapshot, runs `fn` outside the lock, then commits only
    if nobody else committed in between; otherwise retries. `contention_delay`
    widens the window between read and commit so concurrent callers collide.
    """

    def __init__(self, max_retries: int = 1000, contention_delay: float = 0.0):
        self.max_retries = max_retries
        self.contention_delay = contention_delay
        self.conflicts = 0
        self._docs: Dict[str, tuple] = {}
        self._lock = threading.Lock()

    def read(self, key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            entry = self._docs.get(key)
            return dict(entry[1]) if entry else None

    def seed(self, key: str, data: Dict[str, Any]) -> None:
        with self._lock:
            version = self._docs.get(key, (0, None))[0]
            self._docs[key] = (version + 1, dict(data))

    def run_transaction(self, key: str, fn: Callable[[Optional[Dict[str, Any]]], Dict[str, Any]]) -> Dict[str, Any]:
        for _ in range(self.max_retries):
            with self._lock:
                version, data = self._docs.get(key, (0, None))
                snapshot = dict(data) if data is not None else None

            partial = fn(snapshot)
            if self.contention_delay:
                time.sleep(self.contention_delay)

            with self._lock:
                if self._docs.get(key, (0, None))[0] != version:
                    self.conflicts += 1
                    continue
                merged = dict(snapshot or {})
                merged.update(partial)
                self._docs[key] = (version + 1, merged)
                return dict(merged)

        raise TransactionConflict(f"{key}: retry budget exhausted")


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def document_store(db: Session) -> DocumentStore:
    """SQL document store on the test database, no backoff"""
    return DocumentStore(TestingSessionLocal, max_retries=5, backoff_base=0)


@pytest.fixture
def memory_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def client(db: Session, document_store: DocumentStore) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_document_store] = lambda: document_store
    app.dependency_overrides[get_notifier] = lambda: QuoteNotifier(webhook_url="")
    app.dependency_overrides[get_current_year] = lambda: TEST_YEAR
    return TestClient(app)


@pytest.fixture
def classifier() -> CategoryClassifier:
    return CategoryClassifier(CATEGORIES_OFFICIAL, SYNONYMS, threshold=0.6)


@pytest.fixture
def policy() -> FinancialPolicy:
    """Default lender profile used across the financial tests"""
    return FinancialPolicy(
        interest_rate=0.0187,
        fng_rate=0.2066,
        insurance_rate=0.001126,
        default_term_months=48,
    )


@pytest.fixture
def lenders() -> list[LendingEntity]:
    return [
        LendingEntity(id="bank-a", name="Bank A", monthly_interest_rate=2.3),
        LendingEntity(id="bank-b", name="Bank B", monthly_interest_rate=1.8),
    ]


@pytest.fixture
def memory_store_factory() -> type[InMemoryDocumentStore]:
    return InMemoryDocumentStore
