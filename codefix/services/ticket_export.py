"""Export issues as code server tickets: validate, group by hash, create one ticket per group, stamp the issue."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from codefix.schemas.tickets import ExportIssuesRequest, IssueToExport, TicketRef
from codefix.services.export_validation import validate_export_request
from codefix.services.issue_grouping import group_issues_by_hash
from codefix.services.ticket_builder import build_ticket

if TYPE_CHECKING:
    from codefix.clients.code_server import TicketCreationClient
    from codefix.models import Issue
    from codefix.services.issue_store import IssueStore

logger = logging.getLogger(__name__)


class IssueNotFoundError(Exception):
    """Raised when a group's first occurrence has no matching persisted Issue."""

    def __init__(self, repository: str, issue_hash: str) -> None:
        self.repository = repository
        self.issue_hash = issue_hash
        self.message = f"Issue not found for repository {repository!r} and hash {issue_hash!r}."
        super().__init__(self.message)


def _get_issue(issue_store: IssueStore, first: IssueToExport) -> Issue:
    issue = issue_store.find_issue(first.repository, first.insight_type, first.issue_hash)
    if issue is None:
        raise IssueNotFoundError(first.repository, first.issue_hash)
    return issue


def _export_group(
    issues: list[IssueToExport],
    ticketing_system_id: int,
    auth_token: str | None,
    exported_at: datetime,
    issue_store: IssueStore,
    ticket_client: TicketCreationClient,
) -> TicketRef:
    """Create the ticket for one group and record it on the group's Issue."""
    first = issues[0]
    issue = _get_issue(issue_store, first)
    ticket = build_ticket(ticketing_system_id, issue.insight_type.name, issues)

    ticket_id = ticket_client.create_ticket(
        ticket.ticketing_system_id, ticket.title, ticket.description, auth_token
    )
    ticket_url = ticket_client.resolve_ticket_url(ticket_id, auth_token)

    issue.cs_ticket_export_date = exported_at
    issue.cs_ticket_id = ticket_id
    issue.cs_ticket_url = ticket_url
    issue_store.save_issue(issue)
    return TicketRef(id=ticket_id, url=ticket_url)


def export_tickets(
    request: ExportIssuesRequest | None,
    auth_token: str | None,
    issue_store: IssueStore,
    ticket_client: TicketCreationClient,
) -> list[TicketRef]:
    """
    Export a batch of issue occurrences as tickets, one per issue hash.

    Groups are processed sequentially in first-occurrence order. All issues
    stamped by one call share the same export timestamp.

    Raises ExportValidationError before any external call if a field is
    missing, IssueNotFoundError if a group has no persisted Issue, and lets
    ticketing/persistence errors propagate. Tickets created for earlier groups
    are not rolled back.
    """
    issues = validate_export_request(request)
    groups = group_issues_by_hash(issues)
    exported_at = datetime.now(UTC)
    ticketing_system_id = request.ticketing_system_id

    ticket_refs: list[TicketRef] = []
    for issue_hash, group in groups.items():
        ticket_ref = _export_group(
            group,
            ticketing_system_id,
            auth_token,
            exported_at,
            issue_store,
            ticket_client,
        )
        logger.info(
            "Exported issue group",
            extra={
                "issue_hash": issue_hash,
                "occurrence_count": len(group),
                "ticket_id": ticket_ref.id,
            },
        )
        ticket_refs.append(ticket_ref)
    return ticket_refs
