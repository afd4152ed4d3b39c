"""
Expense API endpoints.
"""

from fastapi import APIRouter, Depends

from retail_ledger.api.dependencies import get_store, get_transaction_service
from retail_ledger.schemas.expense import Expense, ExpenseCreate
from retail_ledger.services.store import SnapshotStore
from retail_ledger.services.transaction_service import TransactionService

router = APIRouter(prefix="/expenses", tags=["Expenses"])


@router.post("", response_model=Expense, status_code=201)
def record_expense(
    request: ExpenseCreate,
    service: TransactionService = Depends(get_transaction_service),
):
    """Record an expense. Zero or negative amounts fail validation (422)."""
    return service.record_expense(request)


@router.get("", response_model=list[Expense])
def list_expenses(store: SnapshotStore = Depends(get_store)):
    """Expenses, newest first."""
    return store.snapshot.expenses
