"""
Application-wide collaborators for the API.

The store is built once at startup and shared by every request;
endpoints reach it through get_store() so tests can swap it out
with app.dependency_overrides.
"""

from fastapi import Depends, Request
from sqlalchemy.orm import sessionmaker

from retail_ledger.config import Settings, get_settings
from retail_ledger.fixtures import DEMO_ACCOUNTS
from retail_ledger.services.advisory_service import AdvisoryService
from retail_ledger.services.auth_service import (
    AuthService,
    IdentityProvider,
    StaticIdentityProvider,
)
from retail_ledger.services.ledger_service import LedgerPolicy
from retail_ledger.services.storage import KeyValueStorage
from retail_ledger.services.store import SnapshotStore
from retail_ledger.services.transaction_service import TransactionService


def build_store(settings: Settings, session_factory: sessionmaker) -> SnapshotStore:
    """Create the store and restore the last saved snapshot."""
    store = SnapshotStore(
        KeyValueStorage(session_factory),
        policy=LedgerPolicy(allow_negative_stock=settings.ALLOW_NEGATIVE_STOCK),
        login_log_limit=settings.LOGIN_LOG_LIMIT,
        state_key=settings.STATE_KEY,
        session_key=settings.SESSION_KEY,
    )
    store.load()
    return store


def build_advisory_service(settings: Settings) -> AdvisoryService:
    return AdvisoryService(
        api_key=settings.GEMINI_API_KEY,
        model=settings.ADVISORY_MODEL,
        base_url=settings.ADVISORY_BASE_URL,
        timeout=settings.ADVISORY_TIMEOUT,
    )


def get_store(request: Request) -> SnapshotStore:
    return request.app.state.store


def get_advisory_service(request: Request) -> AdvisoryService:
    return request.app.state.advisory


def get_identity_provider() -> IdentityProvider:
    return StaticIdentityProvider.from_tuples(DEMO_ACCOUNTS)


def get_transaction_service(
    store: SnapshotStore = Depends(get_store),
) -> TransactionService:
    settings = get_settings()
    return TransactionService(
        store,
        credit_days=settings.CREDIT_DAYS,
        walk_in_party_id=settings.WALK_IN_PARTY_ID,
    )


def get_auth_service(
    store: SnapshotStore = Depends(get_store),
    provider: IdentityProvider = Depends(get_identity_provider),
) -> AuthService:
    return AuthService(store, provider)
