"""Health check endpoint with database connectivity and code server configuration status."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from codefix.core.config import settings
from codefix.core.database import check_db_connected, get_db
from codefix.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(db: Session = Depends(get_db)) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"
    code_server = "configured" if settings.CODE_SERVER_BASE_URL else "not_configured"

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database=db_status,
        code_server=code_server,
    )
