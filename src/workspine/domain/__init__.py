"""Canonical, tool-agnostic domain layer."""

from workspine.domain.crossdomain import Account
from workspine.domain.ticket import (
    Board,
    BoardIssue,
    Issue,
    IssueAssignee,
    IssuePriority,
    IssueStatus,
    IssueType,
    map_enum,
)

__all__ = [
    "Account",
    "Board",
    "BoardIssue",
    "Issue",
    "IssueAssignee",
    "IssuePriority",
    "IssueStatus",
    "IssueType",
    "map_enum",
]
