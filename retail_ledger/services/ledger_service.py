"""
Ledger service — the core of the bookkeeping system.

Applying a transaction does three things at once:
1. Moves stock for every line item
2. Moves the balance of the referenced party
3. Prepends the transaction to the history

The functions here are pure. They take a Snapshot and return a
new one; the input is never modified. No other module changes
stock or party balances.

Sign conventions:

    Transaction type   Stock per item    Party balance
    SALE_*             -quantity         +transaction.balance
    PURCHASE           +quantity         -transaction.balance
    RETURN             +quantity         -transaction.total
"""

from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal

from retail_ledger.models.enums import TransactionType
from retail_ledger.schemas.expense import Expense
from retail_ledger.schemas.session import LoginEvent
from retail_ledger.schemas.snapshot import Snapshot
from retail_ledger.schemas.transaction import Transaction


DEFAULT_LOGIN_LOG_LIMIT = 50


@dataclass(frozen=True)
class LedgerPolicy:
    """
    Business rules the engine is allowed to enforce.

    allow_negative_stock=True keeps the permissive behavior:
    a sale may take a product below zero (a back-order).
    With False, such a sale is rejected and nothing changes.
    """
    allow_negative_stock: bool = True


def stock_delta(transaction_type: TransactionType, quantity: int) -> int:
    """Signed stock change for one line of the given transaction kind."""
    if transaction_type.is_sale:
        return -quantity
    return quantity


def balance_delta(transaction: Transaction) -> Decimal:
    """
    Signed change to the referenced party's balance.

    A sale adds the unpaid residual to what the customer owes.
    A purchase subtracts the unpaid residual (the business now
    owes the supplier more). A return reverses the full value.
    """
    if transaction.type.is_sale:
        return transaction.balance
    if transaction.type == TransactionType.PURCHASE:
        return -transaction.balance
    return -transaction.total


def _stock_changes(transaction: Transaction) -> dict[str, int]:
    changes: dict[str, int] = defaultdict(int)
    for item in transaction.items:
        changes[item.product_id] += stock_delta(transaction.type, item.quantity)
    return changes


def apply_transaction(
    snapshot: Snapshot,
    transaction: Transaction,
    policy: LedgerPolicy = LedgerPolicy(),
) -> Snapshot:
    """
    Return the snapshot that results from applying one transaction.

    Products not referenced by any item are carried over as-is.
    Items for products that are not in the snapshot are skipped.
    A party id that matches nothing leaves every balance alone;
    stock still moves.

    Raises ValueError only when the policy forbids negative stock
    and the transaction would cause it.
    """
    changes = _stock_changes(transaction)

    if not policy.allow_negative_stock:
        for product in snapshot.products:
            delta = changes.get(product.id, 0)
            if delta < 0 and product.stock + delta < 0:
                raise ValueError(
                    f"Insufficient stock for {product.sku}: "
                    f"available={product.stock}, requested={-delta}"
                )

    products = [
        p.model_copy(update={"stock": p.stock + changes[p.id]})
        if p.id in changes else p
        for p in snapshot.products
    ]

    delta = balance_delta(transaction)
    parties = [
        p.model_copy(update={"balance": p.balance + delta})
        if transaction.party_id is not None and p.id == transaction.party_id
        else p
        for p in snapshot.parties
    ]

    return snapshot.model_copy(update={
        "products": products,
        "parties": parties,
        "transactions": [transaction, *snapshot.transactions],
    })


def apply_expense(snapshot: Snapshot, expense: Expense) -> Snapshot:
    """Prepend an expense. Stock and balances are untouched."""
    return snapshot.model_copy(update={
        "expenses": [expense, *snapshot.expenses],
    })


def append_login_event(
    snapshot: Snapshot,
    event: LoginEvent,
    limit: int = DEFAULT_LOGIN_LOG_LIMIT,
) -> Snapshot:
    """Prepend a login event, keeping only the most recent `limit` entries."""
    return snapshot.model_copy(update={
        "login_logs": [event, *snapshot.login_logs][:limit],
    })


def replay_party_balance(
    transactions: list[Transaction],
    party_id: str,
    opening: Decimal = Decimal("0"),
) -> Decimal:
    """
    Recompute a party balance from scratch.

    The running balance on Party is maintained incrementally;
    this is the full replay it must always agree with.
    """
    return opening + sum(
        (balance_delta(t) for t in transactions if t.party_id == party_id),
        Decimal("0"),
    )
