"""
Shared enumerations for the domain model.

String-valued enums serialize to the same literals the
stored snapshot uses, so a saved snapshot reads back as-is.
"""

import enum


class TransactionType(str, enum.Enum):
    """The four kinds of stock-moving transactions."""
    SALE_RETAIL = "SALE_RETAIL"
    SALE_WHOLESALE = "SALE_WHOLESALE"
    PURCHASE = "PURCHASE"
    RETURN = "RETURN"

    @property
    def is_sale(self) -> bool:
        return self in (TransactionType.SALE_RETAIL, TransactionType.SALE_WHOLESALE)


class PartyType(str, enum.Enum):
    CUSTOMER = "CUSTOMER"
    SUPPLIER = "SUPPLIER"


class PartySubType(str, enum.Enum):
    RETAIL = "RETAIL"
    WHOLESALE = "WHOLESALE"


class UserRole(str, enum.Enum):
    ADMIN = "ADMIN"
    CASHIER = "CASHIER"
    SALESMAN = "SALESMAN"


class LoginStatus(str, enum.Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class ExpenseCategory(str, enum.Enum):
    """Fixed expense labels; anything else is filed under Others."""
    RENT = "Rent"
    ELECTRICITY = "Electricity"
    SALARIES = "Salaries"
    MAINTENANCE = "Maintenance"
    MARKETING = "Marketing"
    OTHERS = "Others"
