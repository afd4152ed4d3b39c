"""
Pydantic schemas for customers and suppliers.
"""

from decimal import Decimal

from pydantic import Field

from retail_ledger.models.enums import PartyType, PartySubType
from retail_ledger.schemas.common import DomainModel, Money


class Party(DomainModel):
    """
    A customer or supplier with a running balance.

    Positive balance is a receivable (the party owes the business),
    negative is a payable (the business owes the party). The balance
    is only ever changed by applying transactions.
    """
    id: str = Field(min_length=1)
    name: str
    phone: str = ""
    type: PartyType
    sub_type: PartySubType = PartySubType.RETAIL
    balance: Money = Decimal("0")

    @property
    def is_receivable(self) -> bool:
        return self.balance > 0

    @property
    def is_payable(self) -> bool:
        return self.balance < 0
