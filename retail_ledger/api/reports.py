"""
Report API endpoints.

Every figure is recomputed from the current snapshot on each
request.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from retail_ledger.api.dependencies import get_advisory_service, get_store
from retail_ledger.schemas.reports import (
    DashboardMetrics,
    InsightsResponse,
    ProfitAndLoss,
)
from retail_ledger.services import export_service, reporting_service
from retail_ledger.services.advisory_service import AdvisoryService
from retail_ledger.services.store import SnapshotStore
from retail_ledger.time_utils import utcnow

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/dashboard", response_model=DashboardMetrics)
def get_dashboard(store: SnapshotStore = Depends(get_store)):
    """Today's revenue, receivables, cash position, stock value and the 7-day chart."""
    return reporting_service.dashboard(store.snapshot, utcnow().date())


@router.get("/profit-loss", response_model=ProfitAndLoss)
def get_profit_and_loss(store: SnapshotStore = Depends(get_store)):
    return reporting_service.profit_and_loss(store.snapshot)


@router.get("/profit-loss.csv")
def export_profit_and_loss(store: SnapshotStore = Depends(get_store)):
    """The P&L statement as a downloadable CSV file."""
    now = utcnow()
    content = export_service.profit_and_loss_csv(store.snapshot, now)
    filename = export_service.profit_and_loss_filename(now.date())
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/insights", response_model=InsightsResponse)
def get_insights(
    store: SnapshotStore = Depends(get_store),
    advisory: AdvisoryService = Depends(get_advisory_service),
):
    """Advice from the text model, or a fixed fallback message if it is unavailable."""
    return InsightsResponse(insights=advisory.get_insights(store.snapshot))
