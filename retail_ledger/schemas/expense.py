"""
Pydantic schemas for expenses.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import Field, field_validator

from retail_ledger.models.enums import ExpenseCategory
from retail_ledger.schemas.common import DomainModel, Money


def known_category(value):
    """Map a label to ExpenseCategory; labels outside the fixed set become Others."""
    if isinstance(value, ExpenseCategory):
        return value
    try:
        return ExpenseCategory(value)
    except ValueError:
        return ExpenseCategory.OTHERS


class Expense(DomainModel):
    id: str = Field(min_length=1)
    date: datetime
    category: ExpenseCategory = ExpenseCategory.OTHERS
    description: str = ""
    amount: Money = Field(ge=0)

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, v):
        return known_category(v)


class ExpenseCreate(DomainModel):
    category: ExpenseCategory = ExpenseCategory.RENT
    description: str = Field(default="", max_length=255)
    amount: Money = Field(gt=0)

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, v):
        return known_category(v)
