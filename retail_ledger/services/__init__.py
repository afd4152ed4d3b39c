"""Business logic services."""

from retail_ledger.services.storage import KeyValueStorage
from retail_ledger.services.store import SnapshotStore
from retail_ledger.services.transaction_service import TransactionService
from retail_ledger.services.auth_service import AuthService, StaticIdentityProvider
from retail_ledger.services.advisory_service import AdvisoryService

__all__ = [
    "KeyValueStorage",
    "SnapshotStore",
    "TransactionService",
    "AuthService",
    "StaticIdentityProvider",
    "AdvisoryService",
]
