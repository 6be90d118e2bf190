"""Liveness and database reachability for load balancers."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from banking_ledger.config import get_settings
from banking_ledger.models.base import get_db
from banking_ledger.schemas.health import HealthResponse
from banking_ledger.services.account_store import SqlAlchemyAccountStore

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
def health_check(db: Session = Depends(get_db)):
    """An unreachable database degrades the service instead of failing the call."""
    database_ok = SqlAlchemyAccountStore(db).ping()
    return HealthResponse(
        status="healthy" if database_ok else "degraded",
        service="banking-ledger",
        version=get_settings().APP_VERSION,
        database="healthy" if database_ok else "unhealthy",
    )
