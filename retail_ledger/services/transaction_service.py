"""
Transaction service — sales, purchases, returns and expenses.

Each operation:
1. Validates the request against the current snapshot
   (non-empty cart, known products, known invoice)
2. Derives the money fields (subtotal, total, paid, balance, due date)
3. Hands the finished record to the SnapshotStore, which applies it

The ledger engine trusts these derived fields and does no
validation of its own, so every check lives here.
"""

from datetime import datetime, timedelta
from decimal import Decimal

from retail_ledger.models.enums import PartyType, TransactionType
from retail_ledger.schemas.expense import Expense, ExpenseCreate
from retail_ledger.schemas.snapshot import Snapshot
from retail_ledger.schemas.transaction import (
    CartLine,
    PurchaseRequest,
    ReturnRequest,
    SaleRequest,
    Transaction,
    TransactionItem,
)
from retail_ledger.services.store import SnapshotStore
from retail_ledger.time_utils import stamped_id, utcnow


DEFAULT_CREDIT_DAYS = 30
DEFAULT_WALK_IN_PARTY_ID = "c1"

ZERO = Decimal("0")


def find_invoice(snapshot: Snapshot, invoice_id: str) -> Transaction | None:
    """Return the sale with this id, or None. Non-sale records never match."""
    tx = snapshot.find_transaction(invoice_id)
    if tx is None or not tx.type.is_sale:
        return None
    return tx


class TransactionService:

    def __init__(
        self,
        store: SnapshotStore,
        credit_days: int = DEFAULT_CREDIT_DAYS,
        walk_in_party_id: str = DEFAULT_WALK_IN_PARTY_ID,
    ):
        self.store = store
        self.credit_days = credit_days
        self.walk_in_party_id = walk_in_party_id

    # --- Helpers ---

    def _new_id(self, prefix: str, now: datetime) -> str:
        """Time-derived id, unique among transactions and expenses."""
        snapshot = self.store.snapshot
        taken = {t.id for t in snapshot.transactions}
        taken.update(e.id for e in snapshot.expenses)
        return stamped_id(prefix, now, taken)

    def _build_items(
        self, lines: list[CartLine], transaction_type: TransactionType
    ) -> list[TransactionItem]:
        """
        Turn cart lines into priced items.

        Name and price are copied from the product as it is now.
        Repeated lines for one product are merged into one item.
        """
        if not lines:
            raise ValueError("Cart is empty")

        snapshot = self.store.snapshot
        items: dict[str, TransactionItem] = {}
        for line in lines:
            product = snapshot.find_product(line.product_id)
            if product is None:
                raise ValueError(f"Product {line.product_id} not found")

            price = (
                line.price if line.price is not None
                else product.price_for(transaction_type)
            )
            existing = items.get(product.id)
            quantity = line.quantity + (existing.quantity if existing else 0)
            if existing:
                price = existing.price

            items[product.id] = TransactionItem(
                product_id=product.id,
                name=product.name,
                quantity=quantity,
                price=price,
                total=price * quantity,
            )
        return list(items.values())

    def _validate_party(self, party_id: str, party_type: PartyType) -> None:
        party = self.store.snapshot.find_party(party_id)
        if party is None:
            raise ValueError(f"Party {party_id} not found")
        if party.type != party_type:
            raise ValueError(
                f"Party {party_id} is a {party.type.value}, "
                f"expected {party_type.value}"
            )

    def _default_supplier_id(self) -> str:
        supplier = next(
            (p for p in self.store.snapshot.parties
             if p.type == PartyType.SUPPLIER),
            None,
        )
        if supplier is None:
            raise ValueError("No supplier on record")
        return supplier.id

    # --- Builders ---

    def build_sale(self, request: SaleRequest, now: datetime | None = None) -> Transaction:
        """
        Build a retail or wholesale sale.

        total   = max(0, subtotal - discount)
        paid    = request.paid_amount, or the full total when omitted
        balance = max(0, total - paid)

        An unpaid balance gets a due date `credit_days` out.
        """
        now = now or utcnow()
        party_id = request.party_id or self.walk_in_party_id
        self._validate_party(party_id, PartyType.CUSTOMER)

        items = self._build_items(request.items, request.type)
        sub_total = sum((i.total for i in items), ZERO)
        total = max(ZERO, sub_total - request.discount)
        paid_amount = total if request.paid_amount is None else request.paid_amount
        balance = max(ZERO, total - paid_amount)

        return Transaction(
            id=self._new_id("TX", now),
            date=now,
            type=request.type,
            items=items,
            sub_total=sub_total,
            discount=request.discount,
            total=total,
            paid_amount=paid_amount,
            balance=balance,
            party_id=party_id,
            due_date=now + timedelta(days=self.credit_days) if balance > 0 else None,
        )

    def build_purchase(
        self, request: PurchaseRequest, now: datetime | None = None
    ) -> Transaction:
        """
        Build a stock purchase from a supplier.

        Lines are priced at cost unless a price is given. The
        residual is not floored: paying a supplier more than the
        total leaves a negative balance, which moves the supplier's
        running balance the other way.
        """
        now = now or utcnow()
        party_id = request.party_id or self._default_supplier_id()
        self._validate_party(party_id, PartyType.SUPPLIER)

        items = self._build_items(request.items, TransactionType.PURCHASE)
        total = sum((i.total for i in items), ZERO)

        return Transaction(
            id=self._new_id("PUR", now),
            date=now,
            type=TransactionType.PURCHASE,
            items=items,
            sub_total=total,
            discount=ZERO,
            total=total,
            paid_amount=request.paid_amount,
            balance=total - request.paid_amount,
            party_id=party_id,
        )

    def build_return(
        self, request: ReturnRequest, now: datetime | None = None
    ) -> Transaction:
        """
        Build a return against an earlier sale.

        The selected lines are copied whole from the invoice,
        at the price they were sold for, and refunded in full.
        """
        now = now or utcnow()
        invoice = find_invoice(self.store.snapshot, request.invoice_id)
        if invoice is None:
            raise ValueError(f"Invoice {request.invoice_id} not found")

        selected = set(request.product_ids)
        items = [i for i in invoice.items if i.product_id in selected]
        if not items:
            raise ValueError("No items selected for return")

        total = sum((i.total for i in items), ZERO)

        return Transaction(
            id=self._new_id("RET", now),
            date=now,
            type=TransactionType.RETURN,
            items=[i.model_copy() for i in items],
            sub_total=total,
            discount=ZERO,
            total=total,
            paid_amount=total,
            balance=ZERO,
            party_id=invoice.party_id,
            notes=f"Return from invoice {invoice.id}",
        )

    def build_expense(
        self, request: ExpenseCreate, now: datetime | None = None
    ) -> Expense:
        now = now or utcnow()
        return Expense(
            id=self._new_id("EXP", now),
            date=now,
            category=request.category,
            description=request.description,
            amount=request.amount,
        )

    # --- Operations ---
    # Build and apply under the store lock so ids and stock
    # checks see the snapshot the record is applied to.

    def sell(self, request: SaleRequest) -> Transaction:
        with self.store.lock:
            txn = self.build_sale(request)
            self.store.apply_transaction(txn)
        return txn

    def purchase(self, request: PurchaseRequest) -> Transaction:
        with self.store.lock:
            txn = self.build_purchase(request)
            self.store.apply_transaction(txn)
        return txn

    def process_return(self, request: ReturnRequest) -> Transaction:
        with self.store.lock:
            txn = self.build_return(request)
            self.store.apply_transaction(txn)
        return txn

    def record_expense(self, request: ExpenseCreate) -> Expense:
        with self.store.lock:
            expense = self.build_expense(request)
            self.store.apply_expense(expense)
        return expense

    def get_transaction(self, transaction_id: str) -> Transaction:
        """Get a transaction by ID."""
        txn = self.store.snapshot.find_transaction(transaction_id)
        if txn is None:
            raise ValueError(f"Transaction {transaction_id} not found")
        return txn
