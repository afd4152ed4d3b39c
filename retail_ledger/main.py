"""
Retail Ledger — FastAPI Application.

This is the entry point for the application.
All routers are registered here. The snapshot store and the
advisory client are created once, at startup.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from retail_ledger.config import get_settings
from retail_ledger.models.base import Base, SessionLocal, engine
from retail_ledger.api.dependencies import build_advisory_service, build_store
from retail_ledger.api.health import router as health_router
from retail_ledger.api.auth import router as auth_router
from retail_ledger.api.products import router as products_router
from retail_ledger.api.parties import router as parties_router
from retail_ledger.api.transactions import router as transactions_router
from retail_ledger.api.expenses import router as expenses_router
from retail_ledger.api.reports import router as reports_router

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # The kv_entries table is also managed by Alembic; creating it
    # here lets a fresh SQLite file work without a migration step.
    Base.metadata.create_all(bind=engine)
    app.state.store = build_store(settings, SessionLocal)
    app.state.advisory = build_advisory_service(settings)
    logger.info("%s %s started (%s)", settings.APP_NAME,
                settings.APP_VERSION, settings.ENVIRONMENT)
    yield
    app.state.advisory.close()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Point-of-sale and bookkeeping for a retail/wholesale store",
    lifespan=lifespan,
)

# Register routers
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(products_router)
app.include_router(parties_router)
app.include_router(transactions_router)
app.include_router(expenses_router)
app.include_router(reports_router)
