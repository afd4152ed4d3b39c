"""
Shared test fixtures.

Sets up an isolated SQLite database for the key-value store so
tests never touch the real one. Tables are created before and
dropped after every test, so each test starts from a fresh seed.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from retail_ledger.main import app
from retail_ledger.models.base import Base, get_db
from retail_ledger.api.dependencies import get_advisory_service, get_store
from retail_ledger.services.advisory_service import AdvisoryService
from retail_ledger.services.storage import KeyValueStorage
from retail_ledger.services.store import SnapshotStore


TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    """
    Create all tables before each test, drop them after.

    autouse=True means every test gets this automatically.
    """
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct storage checks."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def storage():
    return KeyValueStorage(TestSessionLocal)


@pytest.fixture
def store(storage):
    """A store on the seed fixtures, backed by the test database."""
    store = SnapshotStore(storage)
    store.load()
    return store


@pytest.fixture
def client(db_session, store):
    """
    Provide a test client wired to the test store.

    The lifespan hook is not run; the store and an advisory
    service without an API key are injected as overrides.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    advisory = AdvisoryService(api_key="", model="test-model", base_url="http://advisory.test")

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_advisory_service] = lambda: advisory
    yield TestClient(app)
    app.dependency_overrides.clear()
    advisory.close()
