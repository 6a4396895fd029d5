"""Pydantic request/response schemas."""

from codefix.schemas.health import HealthResponse
from codefix.schemas.tickets import (
    ExportIssuesRequest,
    FieldViolation,
    IssueToExport,
    TicketBase,
    TicketRef,
)

__all__ = [
    "ExportIssuesRequest",
    "FieldViolation",
    "HealthResponse",
    "IssueToExport",
    "TicketBase",
    "TicketRef",
]
