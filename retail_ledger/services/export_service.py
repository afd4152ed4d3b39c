"""
Export service — printable documents and the P&L spreadsheet.

Pure formatting over the reporting projections; nothing new
is computed here.
"""

import csv
import io
from datetime import date, datetime
from decimal import Decimal

from retail_ledger.schemas.reports import InvoiceDocument
from retail_ledger.schemas.snapshot import Snapshot
from retail_ledger.services import reporting_service


REPORT_TITLE = "Store Management - Profit & Loss Statement"
COLUMN_HEADERS = ["Description", "Category", "Amount (PKR)"]
WALK_IN_NAME = "Walk-in Customer"


def _amount(value: Decimal) -> str:
    return f"{value:.2f}"


def _negative(value: Decimal) -> str:
    return f"-{value:.2f}"


def profit_and_loss_rows(snapshot: Snapshot, generated_at: datetime) -> list[list[str]]:
    """
    The fixed P&L layout, row by row.

    Title, generation stamp, column headers, then the REVENUE
    block, the OPERATIONAL EXPENSES block (one row per expense)
    and the final NET PROFIT / LOSS row. Costs are shown negative.
    """
    pnl = reporting_service.profit_and_loss(snapshot)
    blank = ["", "", ""]

    rows = [
        [REPORT_TITLE],
        [f"Report Generated: {generated_at:%Y-%m-%d %H:%M:%S}", ""],
        COLUMN_HEADERS,
        ["REVENUE", "", ""],
        ["Net Sales Revenue", "Income", _amount(pnl.sales)],
        ["Cost of Goods Sold (COGS)", "Expense", _negative(pnl.cost_of_goods)],
        ["GROSS PROFIT", "Subtotal", _amount(pnl.gross_profit)],
        blank,
        ["OPERATIONAL EXPENSES", "", ""],
    ]
    for expense in snapshot.expenses:
        rows.append([
            expense.description or expense.category.value,
            expense.category.value,
            _negative(expense.amount),
        ])
    rows += [
        ["TOTAL EXPENSES", "Total", _negative(pnl.total_expenses)],
        blank,
        ["NET PROFIT / LOSS", "Final", _amount(pnl.net_profit)],
    ]
    return rows


def profit_and_loss_csv(snapshot: Snapshot, generated_at: datetime) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(profit_and_loss_rows(snapshot, generated_at))
    return buffer.getvalue()


def profit_and_loss_filename(today: date) -> str:
    return f"PNL_Statement_{today.isoformat()}.csv"


def invoice_document(snapshot: Snapshot, transaction_id: str) -> InvoiceDocument:
    """Data for a printed invoice. Sales without a known party bill the walk-in customer."""
    txn = snapshot.find_transaction(transaction_id)
    if txn is None:
        raise ValueError(f"Transaction {transaction_id} not found")

    party = snapshot.find_party(txn.party_id)
    return InvoiceDocument(
        transaction=txn,
        billed_to=party.name if party else WALK_IN_NAME,
        phone=(party.phone if party and party.phone else "N/A"),
        status="Paid" if txn.is_paid else "Unpaid/Credit",
    )
