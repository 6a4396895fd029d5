"""
CLI entrypoint for exporting issues from a JSON request file, e.g.:

  python -m codefix.export_cli request.json --auth-token "Bearer <token>"

The file holds the same body as POST /api/v1/tickets/export.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from codefix.clients.code_server import (
    TicketCreationClient,
    TicketingApiError,
    TicketingNotConfiguredError,
)
from codefix.core.config import get_settings
from codefix.core.database import SessionLocal
from codefix.schemas.tickets import ExportIssuesRequest
from codefix.services.export_validation import ExportValidationError
from codefix.services.issue_store import IssueStore
from codefix.services.ticket_export import IssueNotFoundError, export_tickets

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export issues as code server tickets.")
    parser.add_argument("request_file", type=Path, help="JSON export request file")
    parser.add_argument(
        "--auth-token",
        default=None,
        help="Authorization value forwarded to the code server",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run one export; print created ticket refs as JSON. Returns a process exit code."""
    args = _parse_args(argv)
    try:
        request = ExportIssuesRequest.model_validate_json(args.request_file.read_text("utf-8"))
    except (OSError, ValidationError) as e:
        logger.error("Cannot read export request %s: %s", args.request_file, e)
        return 1

    settings = get_settings()
    try:
        ticket_client = TicketCreationClient.from_settings(settings)
    except TicketingNotConfiguredError as e:
        logger.error("%s", e.message)
        return 1

    db = SessionLocal()
    try:
        refs = export_tickets(request, args.auth_token, IssueStore(db), ticket_client)
    except ExportValidationError as e:
        for violation in e.errors:
            logger.error("%s: %s", violation.field, violation.message)
        logger.error("%s", e.message)
        return 1
    except (IssueNotFoundError, TicketingApiError) as e:
        logger.error("Ticket export failed: %s", e.message)
        return 1
    finally:
        db.close()

    print(json.dumps([ref.model_dump() for ref in refs], indent=2))
    logger.info("Ticket export completed: ticket_count=%s", len(refs))
    return 0


if __name__ == "__main__":
    sys.exit(main())
