"""Lookup and persistence of Issue rows used by the ticket export."""

from sqlalchemy.orm import Session

from codefix.models import InsightType, Issue, Repository


class IssueStore:
    """Reads issues by their export identity and saves ticket stamps back."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_issue(
        self,
        repository_url: str,
        insight_type_code: str,
        issue_hash: str,
    ) -> Issue | None:
        """Issue for (repository reference URL, insight type code, issue hash), or None."""
        return (
            self.session.query(Issue)
            .join(Issue.repository)
            .join(Issue.insight_type)
            .filter(
                Repository.df_scm_url == repository_url,
                InsightType.code == insight_type_code,
                Issue.issue_hash == issue_hash,
            )
            .first()
        )

    def save_issue(self, issue: Issue) -> Issue:
        """Persist changes to an existing issue and commit; returns the refreshed row."""
        self.session.add(issue)
        self.session.commit()
        self.session.refresh(issue)
        return issue
