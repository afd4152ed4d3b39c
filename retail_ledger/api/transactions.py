"""
Transaction API endpoints.

Sales, purchases and returns all end up in the same ledger
engine; these endpoints differ only in how the record is built.
"""

from fastapi import APIRouter, Depends, HTTPException

from retail_ledger.api.dependencies import get_store, get_transaction_service
from retail_ledger.schemas.reports import InvoiceDocument
from retail_ledger.schemas.transaction import (
    PurchaseRequest,
    ReturnRequest,
    SaleRequest,
    Transaction,
)
from retail_ledger.services import export_service
from retail_ledger.services.store import SnapshotStore
from retail_ledger.services.transaction_service import TransactionService

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.post("/sale", response_model=Transaction, status_code=201)
def sell(
    request: SaleRequest,
    service: TransactionService = Depends(get_transaction_service),
):
    """Check out a cart as a retail or wholesale sale."""
    try:
        return service.sell(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/purchase", response_model=Transaction, status_code=201)
def purchase(
    request: PurchaseRequest,
    service: TransactionService = Depends(get_transaction_service),
):
    """Receive stock from a supplier."""
    try:
        return service.purchase(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/return", response_model=Transaction, status_code=201)
def process_return(
    request: ReturnRequest,
    service: TransactionService = Depends(get_transaction_service),
):
    """Return lines from an earlier sale invoice."""
    try:
        return service.process_return(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=list[Transaction])
def list_transactions(
    limit: int | None = None,
    store: SnapshotStore = Depends(get_store),
):
    """Transaction history, newest first."""
    transactions = store.snapshot.transactions
    if limit is not None:
        transactions = transactions[:max(0, limit)]
    return transactions


@router.get("/{transaction_id}", response_model=Transaction)
def get_transaction(
    transaction_id: str,
    service: TransactionService = Depends(get_transaction_service),
):
    """Get transaction details."""
    try:
        return service.get_transaction(transaction_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{transaction_id}/invoice", response_model=InvoiceDocument)
def get_invoice(
    transaction_id: str,
    store: SnapshotStore = Depends(get_store),
):
    """Printable invoice data for a transaction."""
    try:
        return export_service.invoice_document(store.snapshot, transaction_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
