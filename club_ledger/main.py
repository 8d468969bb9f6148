"""
Club Ledger FastAPI application.

This is the entry point for the application.
All routers are registered here.
"""

from fastapi import FastAPI

from club_ledger.config import get_settings
from club_ledger.logging import setup_logging
from club_ledger.api.health import router as health_router
from club_ledger.api.accounts import router as accounts_router
from club_ledger.api.ledger import router as ledger_router
from club_ledger.api.transactions import router as transactions_router

settings = get_settings()

setup_logging(level=settings.LOG_LEVEL, format_type=settings.LOG_FORMAT)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Account balances and ledger history for the club's finances",
)

# Register routers
app.include_router(health_router)
app.include_router(accounts_router)
app.include_router(ledger_router)
app.include_router(transactions_router)
