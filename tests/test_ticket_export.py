"""Unit tests for codefix.services.ticket_export: per-group create-and-stamp workflow."""

import unittest
from datetime import datetime
from unittest.mock import MagicMock

from codefix.clients.code_server import TicketingApiError
from codefix.models import InsightType, Issue
from codefix.schemas.tickets import ExportIssuesRequest, IssueToExport, TicketRef
from codefix.services.export_validation import ExportValidationError
from codefix.services.ticket_export import IssueNotFoundError, export_tickets

REPOSITORY = "https://scm.example.com/acme/shop?branch=main"


def _issue(**kwargs: object) -> IssueToExport:
    """Build a fully populated IssueToExport for tests."""
    defaults = {
        "insight_type": "SQLI",
        "repository": REPOSITORY,
        "revision": "3f2c1a9",
        "revision_date": "2026-10-01",
        "external_insight_id": "INS-42",
        "prioritization": "High",
        "issue_hash": "hash-1",
        "repository_url": "https://github.com/acme/shop",
        "file": "src/a.py",
        "git_hub_block": "<block>",
        "start_line": 12,
        "end_line": 14,
    }
    defaults.update(kwargs)
    return IssueToExport(**defaults)


def _persisted(issue_hash: str = "hash-1", name: str = "SQL Injection") -> Issue:
    return Issue(issue_hash=issue_hash, insight_type=InsightType(code="SQLI", name=name))


def _ticket_client(ticket_ids: list[str]) -> MagicMock:
    client = MagicMock()
    client.create_ticket.side_effect = list(ticket_ids)
    client.resolve_ticket_url.side_effect = lambda ticket_id, token: f"https://tickets/{ticket_id}"
    return client


class TestExportSingleGroup(unittest.TestCase):
    """Two occurrences with the same hash become one ticket."""

    def setUp(self) -> None:
        self.persisted = _persisted()
        self.store = MagicMock()
        self.store.find_issue.return_value = self.persisted
        self.client = _ticket_client(["101"])
        self.request = ExportIssuesRequest(
            ticketing_system_id=5,
            issues=[
                _issue(file="src/a.py", git_hub_block="<block a>"),
                _issue(file="src/b.py", start_line=40, end_line=41, git_hub_block="<block b>"),
            ],
        )

    def test_one_ticket_ref(self) -> None:
        refs = export_tickets(self.request, "Bearer abc", self.store, self.client)
        self.assertEqual(refs, [TicketRef(id="101", url="https://tickets/101")])

    def test_one_lookup_on_first_issue(self) -> None:
        export_tickets(self.request, "Bearer abc", self.store, self.client)
        self.store.find_issue.assert_called_once_with(REPOSITORY, "SQLI", "hash-1")

    def test_one_create_call_with_both_locations(self) -> None:
        export_tickets(self.request, "Bearer abc", self.store, self.client)
        self.client.create_ticket.assert_called_once()
        ticketing_system_id, title, description, token = self.client.create_ticket.call_args[0]
        self.assertEqual(ticketing_system_id, 5)
        self.assertEqual(title, "CodeFix - SQL Injection  - src/a.py line 12")
        self.assertEqual(token, "Bearer abc")
        self.assertEqual(description.count("\tfile: "), 2)
        self.assertLess(description.index("src/a.py"), description.index("src/b.py"))
        self.client.resolve_ticket_url.assert_called_once_with("101", "Bearer abc")

    def test_stamps_and_saves_issue(self) -> None:
        export_tickets(self.request, "Bearer abc", self.store, self.client)
        self.assertEqual(self.persisted.cs_ticket_id, "101")
        self.assertEqual(self.persisted.cs_ticket_url, "https://tickets/101")
        self.assertIsInstance(self.persisted.cs_ticket_export_date, datetime)
        self.assertIsNotNone(self.persisted.cs_ticket_export_date.tzinfo)
        self.store.save_issue.assert_called_once_with(self.persisted)


class TestExportMultipleGroups(unittest.TestCase):
    """Groups are exported in first-occurrence order and share one export timestamp."""

    def test_groups_in_order_with_shared_timestamp(self) -> None:
        persisted = {h: _persisted(h) for h in ("h1", "h2", "h3")}
        store = MagicMock()
        store.find_issue.side_effect = lambda repo, code, h: persisted[h]
        client = _ticket_client(["1", "2", "3"])
        request = ExportIssuesRequest(
            ticketing_system_id=5,
            issues=[
                _issue(issue_hash="h2"),
                _issue(issue_hash="h1"),
                _issue(issue_hash="h2", file="src/c.py"),
                _issue(issue_hash="h3"),
            ],
        )

        refs = export_tickets(request, "tok", store, client)

        self.assertEqual([r.id for r in refs], ["1", "2", "3"])
        self.assertEqual(
            [c[0][2] for c in store.find_issue.call_args_list],
            ["h2", "h1", "h3"],
        )
        self.assertEqual(persisted["h2"].cs_ticket_id, "1")
        self.assertEqual(persisted["h1"].cs_ticket_id, "2")
        self.assertEqual(persisted["h3"].cs_ticket_id, "3")
        dates = {p.cs_ticket_export_date for p in persisted.values()}
        self.assertEqual(len(dates), 1)
        self.assertEqual(store.save_issue.call_count, 3)


class TestExportFailures(unittest.TestCase):
    """Validation, not-found and client failures abort the export."""

    def test_validation_error_before_any_call(self) -> None:
        store = MagicMock()
        client = MagicMock()
        with self.assertRaises(ExportValidationError):
            export_tickets(ExportIssuesRequest(ticketing_system_id=5, issues=[]), "tok", store, client)
        store.find_issue.assert_not_called()
        client.create_ticket.assert_not_called()

    def test_issue_not_found_creates_no_ticket(self) -> None:
        store = MagicMock()
        store.find_issue.return_value = None
        client = MagicMock()
        request = ExportIssuesRequest(ticketing_system_id=5, issues=[_issue()])

        with self.assertRaises(IssueNotFoundError) as ctx:
            export_tickets(request, "tok", store, client)

        self.assertEqual(ctx.exception.repository, REPOSITORY)
        self.assertEqual(ctx.exception.issue_hash, "hash-1")
        self.assertIn("hash-1", ctx.exception.message)
        client.create_ticket.assert_not_called()
        store.save_issue.assert_not_called()

    def test_not_found_in_later_group_keeps_earlier_ticket(self) -> None:
        first = _persisted("h1")
        store = MagicMock()
        store.find_issue.side_effect = [first, None]
        client = _ticket_client(["1"])
        request = ExportIssuesRequest(
            ticketing_system_id=5,
            issues=[_issue(issue_hash="h1"), _issue(issue_hash="h2")],
        )

        with self.assertRaises(IssueNotFoundError):
            export_tickets(request, "tok", store, client)

        self.assertEqual(client.create_ticket.call_count, 1)
        self.assertEqual(first.cs_ticket_id, "1")

    def test_client_error_propagates_without_saving(self) -> None:
        persisted = _persisted()
        store = MagicMock()
        store.find_issue.return_value = persisted
        client = MagicMock()
        client.create_ticket.side_effect = TicketingApiError("boom", 500)
        request = ExportIssuesRequest(ticketing_system_id=5, issues=[_issue()])

        with self.assertRaises(TicketingApiError):
            export_tickets(request, "tok", store, client)

        client.resolve_ticket_url.assert_not_called()
        store.save_issue.assert_not_called()
        self.assertIsNone(persisted.cs_ticket_id)

    def test_url_resolution_error_propagates(self) -> None:
        persisted = _persisted()
        store = MagicMock()
        store.find_issue.return_value = persisted
        client = MagicMock()
        client.create_ticket.return_value = "77"
        client.resolve_ticket_url.side_effect = TicketingApiError("not found", 404)
        request = ExportIssuesRequest(ticketing_system_id=5, issues=[_issue()])

        with self.assertRaises(TicketingApiError):
            export_tickets(request, "tok", store, client)

        store.save_issue.assert_not_called()


if __name__ == "__main__":
    unittest.main()
