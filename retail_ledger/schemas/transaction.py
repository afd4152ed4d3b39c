"""
Pydantic schemas for transactions.

Transaction is the immutable record the ledger engine applies.
The *Request schemas are what a till, a purchase screen or a
returns desk submits; TransactionService turns them into
fully derived Transaction records.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import Field, field_validator

from retail_ledger.models.enums import TransactionType
from retail_ledger.schemas.common import DomainModel, Money


# --- Records ---

class TransactionItem(DomainModel):
    """A line captured at transaction time; name and price do not follow later edits."""
    product_id: str
    name: str
    quantity: int = Field(gt=0)
    price: Money = Field(ge=0)
    total: Money


class Transaction(DomainModel):
    id: str = Field(min_length=1)
    date: datetime
    type: TransactionType
    items: list[TransactionItem] = Field(default_factory=list)
    sub_total: Money = Decimal("0")
    discount: Money = Field(default=Decimal("0"), ge=0)
    total: Money = Decimal("0")
    paid_amount: Money = Decimal("0")
    # Sales floor this at zero; purchases may carry a negative
    # residual when a supplier is overpaid.
    balance: Money = Decimal("0")
    party_id: str | None = None
    due_date: datetime | None = None
    notes: str | None = None

    @property
    def is_paid(self) -> bool:
        return self.balance == 0


# --- Request Schemas ---

class CartLine(DomainModel):
    """One product in a cart. Price defaults to the product's price for the sale kind."""
    product_id: str = Field(min_length=1)
    quantity: int = Field(default=1, gt=0)
    price: Money | None = Field(default=None, ge=0)


class SaleRequest(DomainModel):
    type: TransactionType = TransactionType.SALE_RETAIL
    items: list[CartLine] = Field(default_factory=list)
    discount: Money = Field(default=Decimal("0"), ge=0)
    # None means the customer pays the full total
    paid_amount: Money | None = Field(default=None, ge=0)
    party_id: str | None = None

    @field_validator("type")
    @classmethod
    def must_be_sale(cls, v: TransactionType) -> TransactionType:
        if not v.is_sale:
            raise ValueError("sale type must be SALE_RETAIL or SALE_WHOLESALE")
        return v


class PurchaseRequest(DomainModel):
    items: list[CartLine] = Field(default_factory=list)
    paid_amount: Money = Field(default=Decimal("0"), ge=0)
    party_id: str | None = None


class ReturnRequest(DomainModel):
    """Return some lines of an earlier sale invoice for a full refund."""
    invoice_id: str = Field(min_length=1)
    product_ids: list[str] = Field(default_factory=list)
