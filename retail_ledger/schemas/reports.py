"""
Pydantic schemas for report responses.
"""

from datetime import date

from retail_ledger.schemas.common import DomainModel, Money
from retail_ledger.schemas.expense import Expense
from retail_ledger.schemas.inventory import Product
from retail_ledger.schemas.party import Party
from retail_ledger.schemas.transaction import Transaction


class DailySales(DomainModel):
    day: date
    sales: Money


class DashboardMetrics(DomainModel):
    todays_revenue: Money
    receivables: Money
    payables: Money
    net_cash_position: Money
    inventory_value: Money
    low_stock: list[Product]
    daily_sales: list[DailySales]
    recent_transactions: list[Transaction]


class ProfitAndLoss(DomainModel):
    sales: Money
    cost_of_goods: Money
    gross_profit: Money
    total_expenses: Money
    net_profit: Money
    inventory_cost_value: Money
    inventory_retail_value: Money
    expenses: list[Expense]


class PartyStatement(DomainModel):
    party: Party
    transactions: list[Transaction]


class InvoiceDocument(DomainModel):
    """Everything a printed invoice shows."""
    transaction: Transaction
    billed_to: str
    phone: str
    status: str


class InsightsResponse(DomainModel):
    insights: str
