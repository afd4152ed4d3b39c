"""
Tests for the SnapshotStore and its key-value storage.

Tests cover:
- Seeding when nothing is saved
- Save and reload through the database
- Recovery from a corrupt or mismatched saved snapshot
- Session flag and login log handling
- Manual product edits
- Failed writes leave the in-memory state untouched
"""

import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from retail_ledger.fixtures import INITIAL_PARTIES, INITIAL_PRODUCTS
from retail_ledger.models.enums import LoginStatus, TransactionType, UserRole
from retail_ledger.schemas.session import LoginEvent, SessionUser
from retail_ledger.schemas.transaction import Transaction, TransactionItem
from retail_ledger.services.ledger_service import LedgerPolicy
from retail_ledger.services.store import SnapshotStore


NOW = datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc)


def sample_sale(tx_id="TX-1", quantity=2, party_id="c2", paid="0"):
    total = Decimal("2250") * quantity
    return Transaction(
        id=tx_id,
        date=NOW,
        type=TransactionType.SALE_RETAIL,
        items=[TransactionItem(
            product_id="1", name="Premium Coffee Beans (1kg)",
            quantity=quantity, price=Decimal("2250"), total=total,
        )],
        sub_total=total,
        total=total,
        paid_amount=Decimal(paid),
        balance=total - Decimal(paid),
        party_id=party_id,
    )


def login_event(status=LoginStatus.SUCCESS, n=1):
    return LoginEvent(
        id=f"LOG-{n}",
        user_name="System Admin",
        role=UserRole.ADMIN if status == LoginStatus.SUCCESS else None,
        timestamp=NOW,
        status=status,
    )


ADMIN = SessionUser(id="u1", name="System Admin", role=UserRole.ADMIN)


# --- Storage Tests ---

class TestKeyValueStorage:

    def test_missing_key(self, storage):
        assert storage.get("nothing-here") is None

    def test_set_then_get(self, storage):
        storage.set("k", "v1")
        storage.set("k", "v2")

        assert storage.get("k") == "v2"

    def test_delete(self, storage):
        storage.set("k", "v")
        storage.delete("k")

        assert storage.get("k") is None


# --- Load / Save Tests ---

class TestLoad:

    def test_first_load_seeds_fixtures(self, storage):
        store = SnapshotStore(storage)
        snapshot = store.load()

        assert snapshot.products == INITIAL_PRODUCTS
        assert snapshot.parties == INITIAL_PARTIES
        assert snapshot.transactions == []
        assert snapshot.expenses == []
        assert snapshot.login_logs == []
        assert store.is_session_active is False

    def test_mutation_survives_reload(self, storage):
        store = SnapshotStore(storage)
        store.load()
        store.apply_transaction(sample_sale())

        reloaded = SnapshotStore(storage)
        snapshot = reloaded.load()

        assert snapshot.find_product("1").stock == 43
        assert snapshot.find_party("c2").balance == Decimal("49500")
        assert snapshot.transactions[0].id == "TX-1"

    def test_saved_snapshot_uses_camel_case(self, store, storage):
        store.apply_transaction(sample_sale())

        saved = json.loads(storage.get(store.state_key))

        assert "loginLogs" in saved
        assert "costPrice" in saved["products"][0]
        assert saved["transactions"][0]["partyId"] == "c2"
        assert saved["transactions"][0]["type"] == "SALE_RETAIL"

    def test_corrupt_json_reseeds(self, storage):
        storage.set("retail_ledger_state", "{not json")

        snapshot = SnapshotStore(storage).load()

        assert snapshot.products == INITIAL_PRODUCTS

    def test_schema_mismatch_reseeds(self, storage):
        storage.set("retail_ledger_state", json.dumps({"products": "nope"}))

        snapshot = SnapshotStore(storage).load()

        assert snapshot.parties == INITIAL_PARTIES

    def test_unknown_fields_ignored(self, storage):
        storage.set("retail_ledger_state", json.dumps({
            "products": [], "parties": [], "futureField": 1,
        }))

        snapshot = SnapshotStore(storage).load()

        assert snapshot.products == []
        assert not hasattr(snapshot, "futureField")

    def test_reset(self, store):
        store.apply_transaction(sample_sale())
        store.reset()

        assert store.snapshot.transactions == []
        assert store.snapshot.find_product("1").stock == 45


# --- Mutation Tests ---

class TestMutations:

    def test_strict_policy_leaves_state_unchanged(self, storage):
        store = SnapshotStore(storage, policy=LedgerPolicy(allow_negative_stock=False))
        store.load()
        before = store.snapshot

        with pytest.raises(ValueError, match="Insufficient stock"):
            store.apply_transaction(sample_sale(quantity=46))

        assert store.snapshot is before

    def test_update_product(self, store):
        product = store.snapshot.find_product("2").model_copy(update={"stock": 5})

        store.update_product(product)

        assert store.snapshot.find_product("2").stock == 5
        assert store.snapshot.transactions == []

    def test_update_unknown_product(self, store):
        product = store.snapshot.find_product("2").model_copy(update={"id": "999"})

        with pytest.raises(ValueError, match="Product 999 not found"):
            store.update_product(product)


# --- Session Tests ---

class TestSession:

    def test_successful_login_activates_session(self, store, storage):
        store.record_login(login_event(), user=ADMIN)

        assert store.is_session_active is True
        assert store.snapshot.current_user == ADMIN
        assert storage.get(store.session_key) == "true"

    def test_failed_login_only_logged(self, store):
        store.record_login(login_event(LoginStatus.FAILED))

        assert store.is_session_active is False
        assert store.snapshot.login_logs[0].status == LoginStatus.FAILED
        assert store.snapshot.current_user.id == ""

    def test_session_flag_survives_reload(self, store, storage):
        store.record_login(login_event(), user=ADMIN)

        reloaded = SnapshotStore(storage)
        reloaded.load()

        assert reloaded.is_session_active is True
        assert reloaded.snapshot.current_user == ADMIN

    def test_logout(self, store, storage):
        store.record_login(login_event(), user=ADMIN)
        store.logout()

        assert store.is_session_active is False
        assert storage.get(store.session_key) == "false"

    def test_login_log_limit(self, storage):
        store = SnapshotStore(storage, login_log_limit=2)
        store.load()
        for n in range(3):
            store.record_login(login_event(n=n), user=ADMIN)

        assert [e.id for e in store.snapshot.login_logs] == ["LOG-2", "LOG-1"]


# --- Write Failure Tests ---

class FailingStorage:
    """Reads from a real storage but refuses every write."""

    def __init__(self, storage):
        self.storage = storage

    def get(self, key):
        return self.storage.get(key)

    def set(self, key, value):
        raise RuntimeError("disk full")

    def delete(self, key):
        raise RuntimeError("disk full")


class TestWriteFailure:

    def _store(self, storage):
        store = SnapshotStore(FailingStorage(storage))
        store.load()
        return store

    def test_failed_transaction_write_keeps_old_state(self, storage):
        store = self._store(storage)
        before = store.snapshot

        with pytest.raises(RuntimeError, match="disk full"):
            store.apply_transaction(sample_sale(quantity=5))

        assert store.snapshot is before
        assert store.snapshot.find_product("1").stock == 45
        assert store.snapshot.transactions == []

    def test_failed_login_write_keeps_session_inactive(self, storage):
        store = self._store(storage)

        with pytest.raises(RuntimeError):
            store.record_login(login_event(), user=ADMIN)

        assert store.is_session_active is False
        assert store.snapshot.login_logs == []
        assert store.snapshot.current_user.id == ""

    def test_failed_reset_keeps_history(self, storage):
        SnapshotStore(storage).apply_transaction(sample_sale())
        store = self._store(storage)

        with pytest.raises(RuntimeError):
            store.reset()

        assert [t.id for t in store.snapshot.transactions] == ["TX-1"]

    def test_failed_logout_keeps_session(self, store, storage):
        store.record_login(login_event(), user=ADMIN)
        store.storage = FailingStorage(storage)

        with pytest.raises(RuntimeError):
            store.logout()

        assert store.is_session_active is True


class TestSavedMoney:

    def test_money_saved_as_json_numbers(self, store, storage):
        store.apply_transaction(sample_sale(paid="1000.50"))

        saved = json.loads(storage.get(store.state_key))

        assert saved["parties"][1]["balance"] == 48499.5
        assert saved["products"][0]["costPrice"] == 1500
        assert saved["transactions"][0]["total"] == 4500

    def test_numbers_load_back_as_decimal(self, store, storage):
        store.apply_transaction(sample_sale(paid="1000.50"))

        snapshot = SnapshotStore(storage).load()

        assert snapshot.find_party("c2").balance == Decimal("48499.5")
        assert isinstance(snapshot.transactions[0].total, Decimal)
