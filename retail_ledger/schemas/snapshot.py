"""
The aggregate state schema.

A Snapshot is the whole book: who is signed in, the product list,
the parties and every history. It is what the store saves and
loads, and what every report is computed from.
"""

from pydantic import Field

from retail_ledger.schemas.common import DomainModel
from retail_ledger.schemas.expense import Expense
from retail_ledger.schemas.inventory import Product
from retail_ledger.schemas.party import Party
from retail_ledger.schemas.session import LoginEvent, SessionUser
from retail_ledger.schemas.transaction import Transaction


class Snapshot(DomainModel):
    current_user: SessionUser = Field(default_factory=SessionUser)
    products: list[Product] = Field(default_factory=list)
    parties: list[Party] = Field(default_factory=list)
    # Histories are most-recent-first
    transactions: list[Transaction] = Field(default_factory=list)
    expenses: list[Expense] = Field(default_factory=list)
    login_logs: list[LoginEvent] = Field(default_factory=list)

    def find_product(self, product_id: str) -> Product | None:
        return next((p for p in self.products if p.id == product_id), None)

    def find_party(self, party_id: str | None) -> Party | None:
        if party_id is None:
            return None
        return next((p for p in self.parties if p.id == party_id), None)

    def find_transaction(self, transaction_id: str) -> Transaction | None:
        return next(
            (t for t in self.transactions if t.id == transaction_id), None
        )
