"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from retail_ledger.models.base import Base
from retail_ledger.models.enums import (
    TransactionType,
    PartyType,
    PartySubType,
    UserRole,
    LoginStatus,
    ExpenseCategory,
)
from retail_ledger.models.kv_entry import KeyValueEntry

__all__ = [
    "Base",
    "TransactionType",
    "PartyType",
    "PartySubType",
    "UserRole",
    "LoginStatus",
    "ExpenseCategory",
    "KeyValueEntry",
]
