"""
Party (customer and supplier) API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException

from retail_ledger.api.dependencies import get_store
from retail_ledger.models.enums import PartyType
from retail_ledger.schemas.party import Party
from retail_ledger.schemas.reports import PartyStatement
from retail_ledger.services import reporting_service
from retail_ledger.services.store import SnapshotStore

router = APIRouter(prefix="/parties", tags=["Ledger"])


@router.get("", response_model=list[Party])
def list_parties(
    type: PartyType | None = None,
    store: SnapshotStore = Depends(get_store),
):
    """List parties with their running balances."""
    parties = store.snapshot.parties
    if type is not None:
        parties = [p for p in parties if p.type == type]
    return parties


@router.get("/{party_id}", response_model=Party)
def get_party(
    party_id: str,
    store: SnapshotStore = Depends(get_store),
):
    party = store.snapshot.find_party(party_id)
    if party is None:
        raise HTTPException(status_code=404, detail=f"Party {party_id} not found")
    return party


@router.get("/{party_id}/statement", response_model=PartyStatement)
def get_statement(
    party_id: str,
    store: SnapshotStore = Depends(get_store),
):
    """The party's current balance and every transaction on its account, newest first."""
    try:
        return reporting_service.statement_for(store.snapshot, party_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
