"""Canonical ticket-domain tables: boards, issues and their link records.

``Issue`` and ``Board`` are keyed by a generated domain ID.  ``BoardIssue``
and ``IssueAssignee`` are link records whose identity is the pair of IDs
they connect.
"""

from __future__ import annotations

import datetime
from enum import Enum

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from workspine.core.orm.base import RawDataOrigin, WorkspineBase


class IssueType(str, Enum):
    """Canonical issue types."""

    REQUIREMENT = "REQUIREMENT"
    BUG = "BUG"
    INCIDENT = "INCIDENT"
    EPIC = "EPIC"
    TASK = "TASK"
    SUBTASK = "SUBTASK"
    OTHER = "OTHER"


class IssueStatus(str, Enum):
    """Canonical issue statuses."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    OTHER = "OTHER"


class IssuePriority(str, Enum):
    """Canonical priorities; ``UNKNOWN`` for anything a tool reports that is not mapped."""

    HIGHEST = "Highest"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    LOWEST = "Lowest"
    UNKNOWN = "Unknown"


class Board(RawDataOrigin, WorkspineBase):
    """A board/project: the canonical top-level entity of a ticket scope."""

    __tablename__ = "boards"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str | None] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text)
    url: Mapped[str | None] = mapped_column(String(255))
    type: Mapped[str | None] = mapped_column(String(255))
    created_date: Mapped[datetime.datetime | None] = mapped_column(DateTime)

    def scope_id(self) -> str:
        return self.id

    def scope_name(self) -> str | None:
        return self.name

    def table_name(self) -> str:
        return self.__tablename__


class Issue(RawDataOrigin, WorkspineBase):
    __tablename__ = "issues"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    url: Mapped[str | None] = mapped_column(String(255))
    issue_key: Mapped[str | None] = mapped_column(String(255))
    title: Mapped[str | None] = mapped_column(Text)
    description: Mapped[str | None] = mapped_column(Text)
    type: Mapped[str | None] = mapped_column(String(100))
    original_type: Mapped[str | None] = mapped_column(String(100))
    status: Mapped[str | None] = mapped_column(String(100))
    original_status: Mapped[str | None] = mapped_column(String(100))
    priority: Mapped[str | None] = mapped_column(String(255))
    story_point: Mapped[float | None] = mapped_column()
    resolution_date: Mapped[datetime.datetime | None] = mapped_column(DateTime)
    created_date: Mapped[datetime.datetime | None] = mapped_column(DateTime)
    updated_date: Mapped[datetime.datetime | None] = mapped_column(DateTime)
    lead_time_minutes: Mapped[int | None] = mapped_column(Integer)
    parent_issue_id: Mapped[str | None] = mapped_column(String(255))
    epic_key: Mapped[str | None] = mapped_column(String(255))
    creator_id: Mapped[str | None] = mapped_column(String(255))
    creator_name: Mapped[str | None] = mapped_column(String(255))
    assignee_id: Mapped[str | None] = mapped_column(String(255))
    assignee_name: Mapped[str | None] = mapped_column(String(255))
    original_project: Mapped[str | None] = mapped_column(String(255))


class BoardIssue(RawDataOrigin, WorkspineBase):
    __tablename__ = "board_issues"

    board_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    issue_id: Mapped[str] = mapped_column(String(255), primary_key=True)


class IssueAssignee(RawDataOrigin, WorkspineBase):
    __tablename__ = "issue_assignees"

    issue_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    assignee_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    assignee_name: Mapped[str | None] = mapped_column(String(255))


def map_enum(value: str | None, mapping: dict[str, Enum], default: Enum) -> str:
    """Map a tool value to a canonical enum value; unmapped values fall back to *default*."""
    if value is None:
        return default.value
    return mapping.get(value, default).value
