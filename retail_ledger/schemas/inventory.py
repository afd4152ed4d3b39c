"""
Pydantic schemas for products.
"""

from decimal import Decimal

from pydantic import Field

from retail_ledger.models.enums import TransactionType
from retail_ledger.schemas.common import DomainModel, Money


class Product(DomainModel):
    id: str = Field(min_length=1)
    sku: str = Field(min_length=1)
    name: str
    category: str = ""
    cost_price: Money = Field(ge=0)
    retail_price: Money = Field(ge=0)
    wholesale_price: Money = Field(ge=0)
    # Stock may go negative when the ledger policy allows it
    stock: int = 0
    min_stock: int = 0

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.min_stock

    @property
    def margin_percent(self) -> Decimal:
        """Retail margin over cost, as a percentage of the retail price."""
        if self.retail_price <= 0:
            return Decimal("0")
        return (self.retail_price - self.cost_price) / self.retail_price * 100

    def price_for(self, transaction_type: TransactionType) -> Decimal:
        """Default unit price for a cart line of the given kind."""
        if transaction_type == TransactionType.SALE_WHOLESALE:
            return self.wholesale_price
        if transaction_type == TransactionType.PURCHASE:
            return self.cost_price
        return self.retail_price
