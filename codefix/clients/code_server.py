"""HTTP client for the code server ticket API: create a ticket, then resolve its public URL."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from codefix.core.config import Settings

logger = logging.getLogger(__name__)

TICKETS_PATH = "/api/tickets"


class TicketingNotConfiguredError(Exception):
    """Raised when ticket export is invoked but CODE_SERVER_BASE_URL is missing."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TicketingApiError(Exception):
    """Raised when the code server is unreachable or answers with an error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _error_detail(resp: httpx.Response) -> str:
    try:
        body = resp.json()
        if isinstance(body, dict):
            detail = body.get("message") or body.get("error") or json.dumps(body)
        else:
            detail = json.dumps(body)
        return str(detail)[:500]
    except ValueError:
        return resp.text[:500] if resp.text else "Unknown error"


def _raise_for_status(resp: httpx.Response) -> None:
    if resp.status_code == 401:
        raise TicketingApiError(
            "Code server authentication failed (invalid or expired authorization).", 401
        )
    if resp.status_code == 404:
        raise TicketingApiError("Code server ticketing system or ticket not found.", 404)
    if resp.status_code >= 400:
        raise TicketingApiError(
            f"Code server returned {resp.status_code}: {_error_detail(resp)}",
            resp.status_code,
        )


class TicketCreationClient:
    """
    Thin client over the code server ticket endpoints.

    The caller's Authorization value is forwarded verbatim on every request;
    this client never inspects or stores it.
    """

    def __init__(self, base_url: str, timeout: float = 30.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> TicketCreationClient:
        """Build a client from CODE_SERVER_* settings; raises TicketingNotConfiguredError if unset."""
        base_url = (settings.CODE_SERVER_BASE_URL or "").strip()
        if not base_url:
            raise TicketingNotConfiguredError(
                "Code server is not configured; set CODE_SERVER_BASE_URL."
            )
        return cls(base_url, timeout=settings.CODE_SERVER_REQUEST_TIMEOUT_SEC)

    def _headers(self, auth_token: str | None) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if auth_token:
            headers["Authorization"] = auth_token
        return headers

    def _send(
        self,
        method: str,
        path: str,
        auth_token: str | None,
        payload: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            with httpx.Client(timeout=self.timeout) as client:
                resp = client.request(
                    method, url, json=payload, headers=self._headers(auth_token)
                )
        except httpx.TimeoutException as e:
            raise TicketingApiError("Code server request timed out.") from e
        except httpx.HTTPError as e:
            raise TicketingApiError(f"Code server is unreachable: {e}") from e
        _raise_for_status(resp)
        try:
            data = resp.json()
        except ValueError as e:
            raise TicketingApiError("Code server returned a non-JSON response.") from e
        if not isinstance(data, dict):
            raise TicketingApiError("Code server returned an unexpected response body.")
        return data

    def create_ticket(
        self,
        ticketing_system_id: int,
        title: str,
        description: str,
        auth_token: str | None,
    ) -> str:
        """Create a ticket in the given ticketing system. Returns the new ticket id."""
        payload = {
            "ticketingSystemId": ticketing_system_id,
            "title": title,
            "description": description,
        }
        data = self._send("POST", TICKETS_PATH, auth_token, payload)
        ticket_id = data.get("ticketId")
        if ticket_id is None or str(ticket_id) == "":
            raise TicketingApiError("Code server response missing ticketId.")
        logger.debug("Created code server ticket", extra={"ticket_id": str(ticket_id)})
        return str(ticket_id)

    def resolve_ticket_url(self, ticket_id: str, auth_token: str | None) -> str:
        """Public URL of a created ticket."""
        data = self._send("GET", f"{TICKETS_PATH}/{ticket_id}/url", auth_token)
        url = data.get("url")
        if not url:
            raise TicketingApiError(f"Code server response missing url for ticket {ticket_id}.")
        return url
