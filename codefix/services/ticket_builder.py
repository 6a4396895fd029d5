"""Build the code server ticket (title + plain-text description) for one issue group.

The description layout is consumed by downstream tooling; keep it byte-for-byte stable.
"""

from urllib.parse import urlsplit

from codefix.schemas.tickets import IssueToExport, TicketBase

LF = "\n"
BRANCH_PARAM = "branch"


def extract_repository(url: str) -> str:
    """Repository reference without its query string (everything before the first '?')."""
    pos = url.find("?")
    if pos == -1:
        return url
    return url[:pos]


def extract_branch(url: str) -> str | None:
    """
    First raw value of the 'branch' query parameter, or None when absent.

    Values are returned as written in the URL: no percent-decoding and no
    '+' to space conversion. '?branch' without '=' has no value (None);
    '?branch=' has an empty one.
    """
    for pair in urlsplit(url).query.split("&"):
        name, sep, value = pair.partition("=")
        if name == BRANCH_PARAM:
            return value if sep else None
    return None


def build_ticket_title(insight_type_name: str, first: IssueToExport) -> str:
    """Title: 'CodeFix - <type>  - <file> line <start>' (double space before the second dash)."""
    return f"CodeFix - {insight_type_name}  - {first.file} line {first.start_line}"


def build_ticket_description(insight_type_name: str, issues: list[IssueToExport]) -> str:
    """
    Plain-text ticket body for a group of occurrences of the same issue.

    Header fields come from the first occurrence; every occurrence
    contributes one location block, in input order.
    A missing branch renders as an empty value after "Affected branch: "
    rather than the text "null".
    """
    first = issues[0]
    parts = [
        f"Insight Type: {insight_type_name}{LF}",
        f"External reference ID: {first.external_insight_id}{LF}",
        f"Priority: {first.prioritization}{LF}",
        f"Locations: {LF}",
    ]
    for issue in issues:
        parts.append(f"\tfile: {issue.file}{LF}")
        parts.append(f"\tstart line: {issue.start_line}{LF}")
        parts.append(f"\tend line: {issue.end_line}{LF}")
        parts.append(f"{issue.git_hub_block}{LF}")
        parts.append(LF)
    branch = extract_branch(first.repository) or ""
    parts.append(f"Repository url: {extract_repository(first.repository)}{LF}")
    parts.append(f"Affected branch: {branch}{LF}")
    parts.append(f"Affected revision: {first.revision}{LF}{LF}")
    return "".join(parts)


def build_ticket(
    ticketing_system_id: int,
    insight_type_name: str,
    issues: list[IssueToExport],
) -> TicketBase:
    """Title and description for one issue group, addressed to a ticketing system."""
    return TicketBase(
        ticketing_system_id=ticketing_system_id,
        title=build_ticket_title(insight_type_name, issues[0]),
        description=build_ticket_description(insight_type_name, issues),
    )
