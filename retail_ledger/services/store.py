"""
Snapshot store — owns the single current Snapshot.

Every change goes through one of the entry points here. Each
one computes a whole new Snapshot, swaps it in, and saves it,
so a reader only ever sees a complete before- or after-state.
"""

import json
import logging
import threading

from pydantic import ValidationError

from retail_ledger.fixtures import seed_snapshot
from retail_ledger.models.enums import LoginStatus
from retail_ledger.schemas.expense import Expense
from retail_ledger.schemas.inventory import Product
from retail_ledger.schemas.session import LoginEvent, SessionUser
from retail_ledger.schemas.snapshot import Snapshot
from retail_ledger.schemas.transaction import Transaction
from retail_ledger.services import ledger_service
from retail_ledger.services.ledger_service import LedgerPolicy
from retail_ledger.services.storage import KeyValueStorage

logger = logging.getLogger(__name__)


DEFAULT_STATE_KEY = "retail_ledger_state"
DEFAULT_SESSION_KEY = "retail_ledger_is_logged_in"


class SnapshotStore:

    def __init__(
        self,
        storage: KeyValueStorage,
        policy: LedgerPolicy = LedgerPolicy(),
        login_log_limit: int = ledger_service.DEFAULT_LOGIN_LOG_LIMIT,
        state_key: str = DEFAULT_STATE_KEY,
        session_key: str = DEFAULT_SESSION_KEY,
    ):
        self.storage = storage
        self.policy = policy
        self.login_log_limit = login_log_limit
        self.state_key = state_key
        self.session_key = session_key
        self._snapshot = seed_snapshot()
        self._session_active = False
        # Serializes mutations; request handlers run on a thread pool
        self.lock = threading.RLock()

    # --- Read access ---

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def is_session_active(self) -> bool:
        return self._session_active

    # --- Load / save ---

    def load(self) -> Snapshot:
        """
        Restore the last saved snapshot and session flag.

        A saved snapshot that is not valid JSON, or does not match
        the schema, is discarded: the failure is logged and the
        store starts over from the seed fixtures.
        """
        raw = self.storage.get(self.state_key)
        if raw is None:
            logger.info("No saved snapshot; seeding a fresh book")
            self._snapshot = seed_snapshot()
        else:
            try:
                self._snapshot = Snapshot.model_validate(json.loads(raw))
            except (json.JSONDecodeError, ValidationError) as e:
                logger.warning("Saved snapshot could not be restored, reseeding: %s", e)
                self._snapshot = seed_snapshot()

        self._session_active = self.storage.get(self.session_key) == "true"
        return self._snapshot

    def save(
        self,
        snapshot: Snapshot | None = None,
        session_active: bool | None = None,
    ) -> None:
        """Write a snapshot and session flag; defaults to the current ones."""
        snapshot = self._snapshot if snapshot is None else snapshot
        if session_active is None:
            session_active = self._session_active

        self.storage.set(self.state_key, snapshot.model_dump_json(by_alias=True))
        self.storage.set(self.session_key, "true" if session_active else "false")

    def _replace(
        self, snapshot: Snapshot, session_active: bool | None = None
    ) -> Snapshot:
        # Persist first; a failed write leaves the current state in place
        if session_active is None:
            session_active = self._session_active
        self.save(snapshot, session_active)
        self._snapshot = snapshot
        self._session_active = session_active
        return snapshot

    def reset(self) -> Snapshot:
        """Throw away all history and start from the seed fixtures."""
        with self.lock:
            logger.warning("Resetting book to seed fixtures")
            return self._replace(seed_snapshot(), session_active=False)

    # --- Mutations ---

    def apply_transaction(self, transaction: Transaction) -> Snapshot:
        """Apply stock and balance effects and record the transaction."""
        with self.lock:
            snapshot = self._replace(ledger_service.apply_transaction(
                self._snapshot, transaction, self.policy
            ))
            logger.info(
                "Applied %s %s total=%s party=%s",
                transaction.type.value, transaction.id,
                transaction.total, transaction.party_id,
            )
            return snapshot

    def apply_expense(self, expense: Expense) -> Snapshot:
        with self.lock:
            snapshot = self._replace(
                ledger_service.apply_expense(self._snapshot, expense)
            )
            logger.info("Recorded expense %s amount=%s", expense.id, expense.amount)
            return snapshot

    def update_product(self, product: Product) -> Snapshot:
        """
        Replace a product by id (manual inventory edit).

        This bypasses the ledger: no transaction is recorded and
        no balance moves.
        """
        with self.lock:
            if self._snapshot.find_product(product.id) is None:
                raise ValueError(f"Product {product.id} not found")

            products = [
                product if p.id == product.id else p
                for p in self._snapshot.products
            ]
            snapshot = self._replace(
                self._snapshot.model_copy(update={"products": products})
            )
            logger.info("Updated product %s", product.id)
            return snapshot

    def record_login(
        self, event: LoginEvent, user: SessionUser | None = None
    ) -> Snapshot:
        """
        Append to the login log. A successful login also makes
        `user` the current user and marks the session active.
        """
        with self.lock:
            snapshot = ledger_service.append_login_event(
                self._snapshot, event, self.login_log_limit
            )
            if event.status == LoginStatus.SUCCESS and user is not None:
                snapshot = snapshot.model_copy(update={"current_user": user})
                return self._replace(snapshot, session_active=True)
            return self._replace(snapshot)

    def logout(self) -> None:
        with self.lock:
            self._replace(self._snapshot, session_active=False)
