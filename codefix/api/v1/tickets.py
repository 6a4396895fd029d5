"""Tickets endpoint: export grouped issues as code server tickets and link them back to the issues."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException
from sqlalchemy.orm import Session

from codefix.clients.code_server import (
    TicketCreationClient,
    TicketingApiError,
    TicketingNotConfiguredError,
)
from codefix.core.config import get_settings
from codefix.core.database import get_db
from codefix.schemas.tickets import ExportIssuesRequest, TicketRef
from codefix.services.export_validation import ExportValidationError
from codefix.services.issue_store import IssueStore
from codefix.services.ticket_export import IssueNotFoundError, export_tickets

logger = logging.getLogger(__name__)
router = APIRouter()


def get_issue_store(db: Annotated[Session, Depends(get_db)]) -> IssueStore:
    """Dependency: issue lookup/persistence bound to the request's DB session."""
    return IssueStore(db)


def get_ticket_client() -> TicketCreationClient:
    """Dependency: code server client from settings. 503 when CODE_SERVER_BASE_URL is unset."""
    try:
        return TicketCreationClient.from_settings(get_settings())
    except TicketingNotConfiguredError as e:
        raise HTTPException(status_code=503, detail=e.message) from e


def _log_failure(reason: str) -> None:
    logger.error(
        "Ticket export failed",
        extra={
            "export_status": "failure",
            "reason": reason[:500],
        },
    )


@router.post("/export", response_model=list[TicketRef])
def post_tickets_export(
    body: ExportIssuesRequest,
    issue_store: Annotated[IssueStore, Depends(get_issue_store)],
    ticket_client: Annotated[TicketCreationClient, Depends(get_ticket_client)],
    authorization: Annotated[str | None, Header()] = None,
) -> list[TicketRef]:
    """
    Export issue occurrences as tickets, one ticket per issueHash.

    The Authorization header is forwarded unchanged to the code server.
    Returns the created tickets in first-occurrence order of their hash.
    Validation fails the whole batch (400); a group without a persisted
    issue aborts the export (404); code server errors map to 400/502.
    """
    try:
        refs = export_tickets(body, authorization, issue_store, ticket_client)
    except ExportValidationError as e:
        logger.info(
            "Ticket export rejected",
            extra={"export_status": "invalid", "error_count": len(e.errors)},
        )
        raise HTTPException(status_code=e.status_code, detail=e.to_detail()) from e
    except IssueNotFoundError as e:
        _log_failure(e.message)
        raise HTTPException(status_code=404, detail=e.message) from e
    except TicketingApiError as e:
        _log_failure(e.message or str(e))
        status = 502 if (e.status_code or 500) >= 500 else 400
        raise HTTPException(status_code=status, detail=e.message) from e

    logger.info(
        "Ticket export completed",
        extra={"export_status": "success", "ticket_count": len(refs)},
    )
    return refs
