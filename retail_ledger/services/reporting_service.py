"""
Reporting service — read-only projections over a snapshot.

Nothing is cached; every figure is recomputed from the snapshot
it is given. Every function returns zero or an empty list for
an empty book.
"""

from datetime import date, timedelta
from decimal import Decimal

from retail_ledger.models.enums import PartyType, TransactionType
from retail_ledger.schemas.inventory import Product
from retail_ledger.schemas.reports import (
    DailySales,
    DashboardMetrics,
    PartyStatement,
    ProfitAndLoss,
)
from retail_ledger.schemas.snapshot import Snapshot
from retail_ledger.schemas.transaction import Transaction
from retail_ledger.time_utils import utc_date


ZERO = Decimal("0")


def _sales(snapshot: Snapshot) -> list[Transaction]:
    return [t for t in snapshot.transactions if t.type.is_sale]


def todays_revenue(snapshot: Snapshot, today: date) -> Decimal:
    """Total of sales dated `today` (UTC calendar day)."""
    return sum(
        (t.total for t in _sales(snapshot) if utc_date(t.date) == today),
        ZERO,
    )


def receivables(snapshot: Snapshot) -> Decimal:
    """What customers owe: positive customer balances only."""
    return sum(
        (max(ZERO, p.balance) for p in snapshot.parties
         if p.type == PartyType.CUSTOMER),
        ZERO,
    )


def payables(snapshot: Snapshot) -> Decimal:
    """What the business owes suppliers, as a positive figure."""
    return sum(
        (max(ZERO, -p.balance) for p in snapshot.parties
         if p.type == PartyType.SUPPLIER),
        ZERO,
    )


def total_expenses(snapshot: Snapshot) -> Decimal:
    return sum((e.amount for e in snapshot.expenses), ZERO)


def net_cash_position(snapshot: Snapshot) -> Decimal:
    """
    Cash in minus cash out.

    Cash in: amounts paid on every transaction that is neither
    a purchase nor a return. Cash out: all expenses plus
    amounts paid on purchases.
    """
    cash_in = sum(
        (t.paid_amount for t in snapshot.transactions
         if t.type not in (TransactionType.PURCHASE, TransactionType.RETURN)),
        ZERO,
    )
    purchases_paid = sum(
        (t.paid_amount for t in snapshot.transactions
         if t.type == TransactionType.PURCHASE),
        ZERO,
    )
    return cash_in - (total_expenses(snapshot) + purchases_paid)


def inventory_valuation(snapshot: Snapshot, basis: str = "cost") -> Decimal:
    """Stock on hand valued at cost price, or at retail price with basis="retail"."""
    if basis not in ("cost", "retail"):
        raise ValueError(f"Unknown valuation basis '{basis}'")
    return sum(
        (
            (p.cost_price if basis == "cost" else p.retail_price) * p.stock
            for p in snapshot.products
        ),
        ZERO,
    )


def sales_revenue(snapshot: Snapshot) -> Decimal:
    return sum((t.total for t in _sales(snapshot)), ZERO)


def cost_of_goods_sold(snapshot: Snapshot) -> Decimal:
    """
    Cost of every item sold, at today's cost prices.

    Items whose product no longer exists cost nothing.
    """
    costs = {p.id: p.cost_price for p in snapshot.products}
    return sum(
        (
            costs.get(item.product_id, ZERO) * item.quantity
            for t in _sales(snapshot)
            for item in t.items
        ),
        ZERO,
    )


def gross_profit(snapshot: Snapshot) -> Decimal:
    return sales_revenue(snapshot) - cost_of_goods_sold(snapshot)


def net_profit(snapshot: Snapshot) -> Decimal:
    return gross_profit(snapshot) - total_expenses(snapshot)


def party_statement(snapshot: Snapshot, party_id: str) -> list[Transaction]:
    """A party's transactions, most recent first (store order)."""
    return [t for t in snapshot.transactions if t.party_id == party_id]


def low_stock_products(snapshot: Snapshot) -> list[Product]:
    return [p for p in snapshot.products if p.is_low_stock]


def daily_sales(snapshot: Snapshot, today: date, days: int = 7) -> list[DailySales]:
    """Sales total per day for the last `days` days, oldest first."""
    totals = {today - timedelta(days=offset): ZERO for offset in range(days)}
    for t in _sales(snapshot):
        day = utc_date(t.date)
        if day in totals:
            totals[day] += t.total
    return [DailySales(day=day, sales=totals[day]) for day in sorted(totals)]


# --- Bundled views ---

def dashboard(snapshot: Snapshot, today: date) -> DashboardMetrics:
    return DashboardMetrics(
        todays_revenue=todays_revenue(snapshot, today),
        receivables=receivables(snapshot),
        payables=payables(snapshot),
        net_cash_position=net_cash_position(snapshot),
        inventory_value=inventory_valuation(snapshot),
        low_stock=low_stock_products(snapshot),
        daily_sales=daily_sales(snapshot, today),
        recent_transactions=snapshot.transactions[:5],
    )


def profit_and_loss(snapshot: Snapshot) -> ProfitAndLoss:
    sales = sales_revenue(snapshot)
    cogs = cost_of_goods_sold(snapshot)
    expenses = total_expenses(snapshot)
    return ProfitAndLoss(
        sales=sales,
        cost_of_goods=cogs,
        gross_profit=sales - cogs,
        total_expenses=expenses,
        net_profit=sales - cogs - expenses,
        inventory_cost_value=inventory_valuation(snapshot, "cost"),
        inventory_retail_value=inventory_valuation(snapshot, "retail"),
        expenses=list(snapshot.expenses),
    )


def statement_for(snapshot: Snapshot, party_id: str) -> PartyStatement:
    party = snapshot.find_party(party_id)
    if party is None:
        raise ValueError(f"Party {party_id} not found")
    return PartyStatement(
        party=party,
        transactions=party_statement(snapshot, party_id),
    )
