"""Validate export requests: every issue must carry every field, all-or-nothing across the batch."""

from codefix.schemas.tickets import ExportIssuesRequest, FieldViolation, IssueToExport

FIELD_IS_REQUIRED = "field is required"
REQUIRED_PARAMETERS_MESSAGE = "Required parameters must be provided"
BAD_REQUEST = 400

# (wire name, attribute) in reporting order.
REQUIRED_STRING_FIELDS: tuple[tuple[str, str], ...] = (
    ("insightType", "insight_type"),
    ("repository", "repository"),
    ("revision", "revision"),
    ("revisionDate", "revision_date"),
    ("externalInsightId", "external_insight_id"),
    ("prioritization", "prioritization"),
    ("issueHash", "issue_hash"),
    ("repositoryUrl", "repository_url"),
    ("file", "file"),
    ("gitHubBlock", "git_hub_block"),
)
REQUIRED_INT_FIELDS: tuple[tuple[str, str], ...] = (
    ("startLine", "start_line"),
    ("endLine", "end_line"),
)


class ExportValidationError(Exception):
    """Raised when an export request is missing required parameters."""

    def __init__(
        self,
        message: str,
        errors: list[FieldViolation],
        status_code: int = BAD_REQUEST,
    ) -> None:
        self.message = message
        self.errors = errors
        self.status_code = status_code
        super().__init__(message)

    def to_detail(self) -> dict[str, object]:
        """Response body detail: top-level message plus field violations."""
        return {
            "message": self.message,
            "errors": [e.model_dump() for e in self.errors],
        }


def normalize_issues(issues: list[IssueToExport] | None) -> list[IssueToExport]:
    """
    Return a new, never-empty list of issues to validate.

    A missing or empty list becomes a single all-empty placeholder so that an
    empty batch is reported as missing fields rather than passing silently.
    """
    if not issues:
        return [IssueToExport()]
    return list(issues)


def _is_null_or_empty(value: str | None) -> bool:
    return value is None or value == ""


def collect_violations(
    ticketing_system_id: int | None,
    issues: list[IssueToExport],
) -> list[FieldViolation]:
    """Return every missing field across the request, in request order."""
    violations: list[FieldViolation] = []
    if ticketing_system_id is None:
        violations.append(FieldViolation(field="ticketingSystemId", message=FIELD_IS_REQUIRED))
    for issue in issues:
        for field, attr in REQUIRED_STRING_FIELDS:
            if _is_null_or_empty(getattr(issue, attr)):
                violations.append(FieldViolation(field=field, message=FIELD_IS_REQUIRED))
        for field, attr in REQUIRED_INT_FIELDS:
            if getattr(issue, attr) is None:
                violations.append(FieldViolation(field=field, message=FIELD_IS_REQUIRED))
    return violations


def validate_export_request(request: ExportIssuesRequest | None) -> list[IssueToExport]:
    """
    Validate the whole request before anything is exported.

    Returns the validated issues. Raises ExportValidationError listing every
    violation when any required field is missing; the request is not modified.
    """
    to_validate = request if request is not None else ExportIssuesRequest()
    issues = normalize_issues(to_validate.issues)
    violations = collect_violations(to_validate.ticketing_system_id, issues)
    if violations:
        raise ExportValidationError(REQUIRED_PARAMETERS_MESSAGE, violations)
    return issues
