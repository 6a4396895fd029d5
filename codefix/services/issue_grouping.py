"""Group issue occurrences by deduplication hash; one group becomes one ticket."""

from collections import OrderedDict

from codefix.schemas.tickets import IssueToExport


def group_issues_by_hash(
    issues: list[IssueToExport],
) -> OrderedDict[str, list[IssueToExport]]:
    """
    Partition issues by issue_hash.

    Groups are ordered by first occurrence of each hash; members keep input
    order. Identical occurrences are kept, not merged.
    """
    groups: OrderedDict[str, list[IssueToExport]] = OrderedDict()
    for issue in issues:
        groups.setdefault(issue.issue_hash, []).append(issue)
    return groups
