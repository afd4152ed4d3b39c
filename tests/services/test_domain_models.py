"""
Tests for the domain record helpers and snapshot parsing.
"""

from decimal import Decimal

from retail_ledger.fixtures import INITIAL_PRODUCTS, seed_snapshot
from retail_ledger.models.enums import ExpenseCategory, TransactionType
from retail_ledger.schemas.expense import Expense
from retail_ledger.schemas.snapshot import Snapshot


class TestProduct:

    def test_price_for_each_kind(self):
        coffee = INITIAL_PRODUCTS[0]

        assert coffee.price_for(TransactionType.SALE_RETAIL) == Decimal("2250")
        assert coffee.price_for(TransactionType.SALE_WHOLESALE) == Decimal("1800")
        assert coffee.price_for(TransactionType.PURCHASE) == Decimal("1500")

    def test_margin_percent(self):
        coffee = INITIAL_PRODUCTS[0]

        assert coffee.margin_percent == Decimal("750") / Decimal("2250") * 100

    def test_margin_of_free_product_is_zero(self):
        freebie = INITIAL_PRODUCTS[0].model_copy(update={"retail_price": Decimal("0")})

        assert freebie.margin_percent == 0

    def test_low_stock_at_threshold(self):
        bread = INITIAL_PRODUCTS[4]

        assert bread.is_low_stock is False
        assert bread.model_copy(update={"stock": bread.min_stock}).is_low_stock is True


class TestParty:

    def test_balance_direction(self):
        snapshot = seed_snapshot()

        assert snapshot.find_party("c2").is_receivable is True
        assert snapshot.find_party("s1").is_payable is True
        assert snapshot.find_party("c1").is_receivable is False


class TestSnapshotParsing:

    def test_missing_collections_default_empty(self):
        snapshot = Snapshot.model_validate({})

        assert snapshot.products == []
        assert snapshot.login_logs == []
        assert snapshot.current_user.id == ""

    def test_camel_case_round_trip(self):
        snapshot = seed_snapshot()

        restored = Snapshot.model_validate_json(snapshot.model_dump_json(by_alias=True))

        assert restored == snapshot

    def test_unknown_expense_category_filed_as_others(self):
        expense = Expense.model_validate({
            "id": "EXP-1",
            "date": "2026-03-01T10:00:00Z",
            "category": "Travel",
            "amount": "25",
        })

        assert expense.category == ExpenseCategory.OTHERS
