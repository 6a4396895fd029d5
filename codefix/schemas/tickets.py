"""Pydantic schemas for exporting grouped issues as code server tickets."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Wire format is camelCase (ticketingSystemId, gitHubBlock, ...); Python side is snake_case.
CAMEL_CASE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IssueToExport(BaseModel):
    """
    One reported occurrence of an issue at a file location.

    Every field is optional here so that missing values are reported by the
    export validator as field violations instead of a generic 422.
    """

    model_config = CAMEL_CASE_CONFIG

    insight_type: str | None = Field(default=None, description="Insight type code (e.g. SQLI).")
    repository: str | None = Field(
        default=None,
        description="Repository reference URL; may carry ?branch=<name>.",
    )
    revision: str | None = Field(default=None, description="Analysed revision (commit SHA).")
    revision_date: str | None = Field(default=None, description="Date of the analysed revision.")
    external_insight_id: str | None = Field(
        default=None,
        description="Identifier of the insight in the reporting system.",
    )
    prioritization: str | None = Field(default=None, description="Priority of the issue.")
    issue_hash: str | None = Field(
        default=None,
        description="Deduplication key; occurrences sharing it become one ticket.",
    )
    repository_url: str | None = Field(default=None, description="Browsable repository URL.")
    file: str | None = Field(default=None, description="Path of the affected file.")
    git_hub_block: str | None = Field(
        default=None,
        description="Pre-rendered code excerpt for the location.",
    )
    start_line: int | None = Field(default=None, description="First affected line.")
    end_line: int | None = Field(default=None, description="Last affected line.")


class ExportIssuesRequest(BaseModel):
    """Request body for POST /api/v1/tickets/export."""

    model_config = CAMEL_CASE_CONFIG

    ticketing_system_id: int | None = Field(
        default=None,
        description="Code server id of the target ticketing system.",
    )
    issues: list[IssueToExport] | None = Field(
        default=None,
        description="Issue occurrences to export; grouped by issueHash into tickets.",
    )


class FieldViolation(BaseModel):
    """One field-level validation failure."""

    field: str
    message: str


class TicketBase(BaseModel):
    """Ticket built for one issue group, ready to be submitted."""

    ticketing_system_id: int
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)


class TicketRef(BaseModel):
    """Created ticket: code server ticket id and its public URL."""

    id: str = Field(..., description="Ticket id returned by the code server.")
    url: str = Field(..., description="Public URL of the ticket.")
