"""
Banking Ledger: FastAPI application.

This is the entry point for the application.
All routers are registered here.
"""

from fastapi import FastAPI

from banking_ledger.config import get_settings
from banking_ledger.logging_config import setup_logging
from banking_ledger.api.health import router as health_router
from banking_ledger.api.accounts import router as accounts_router

settings = get_settings()
setup_logging(settings.LOG_LEVEL)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Accounts, deposits, withdrawals and atomic transfers",
    debug=settings.DEBUG,
)

# Register routers
app.include_router(health_router)
app.include_router(accounts_router)
