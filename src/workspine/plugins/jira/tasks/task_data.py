"""Task options and shared mappings of the jira convertors."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from sqlalchemy import select

from workspine.core.errors import BadInputError
from workspine.domain.ticket import IssuePriority, IssueStatus, IssueType, map_enum
from workspine.framework.subtasks import SubtaskContext
from workspine.plugins.jira.models import JiraBoard, JiraScopeConfig

RAW_BOARD_TABLE = "_tool_jira_boards"
RAW_ISSUE_TABLE = "_tool_jira_issues"
RAW_ACCOUNT_TABLE = "_tool_jira_accounts"

STATUS_CATEGORY = {
    "new": IssueStatus.TODO,
    "indeterminate": IssueStatus.IN_PROGRESS,
    "done": IssueStatus.DONE,
}

DEFAULT_TYPE_MAPPINGS = {
    "Bug": IssueType.BUG,
    "Epic": IssueType.EPIC,
    "Story": IssueType.REQUIREMENT,
    "Task": IssueType.TASK,
    "Sub-task": IssueType.SUBTASK,
    "Subtask": IssueType.SUBTASK,
    "Incident": IssueType.INCIDENT,
}

PRIORITY = {p.value: p for p in IssuePriority if p is not IssuePriority.UNKNOWN}


class JiraOptions(BaseModel):
    """Options of a planned jira task."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    connection_id: int = Field(alias="connectionId", gt=0)
    board_id: int = Field(alias="scopeId", gt=0)
    time_after: datetime | None = Field(default=None, alias="timeAfter")

    @classmethod
    def parse(cls, options: dict[str, Any]) -> JiraOptions:
        try:
            return cls.model_validate(options)
        except ValidationError as e:
            raise BadInputError("invalid jira task options", cause=e).with_context(plugin="jira") from e


def get_status(status_key: str | None) -> str:
    return map_enum(status_key, STATUS_CATEGORY, IssueStatus.OTHER)


def get_type(type_name: str | None, overrides: dict[str, str] | None) -> str:
    """Canonical type for a jira issue type; scope-config mappings win over the defaults."""
    if not type_name:
        return IssueType.OTHER.value
    if overrides and type_name in overrides:
        try:
            return IssueType(overrides[type_name]).value
        except ValueError:
            return IssueType.OTHER.value
    return map_enum(type_name, DEFAULT_TYPE_MAPPINGS, IssueType.OTHER)


def get_priority(name: str | None) -> str:
    return PRIORITY.get((name or "").strip(), IssuePriority.UNKNOWN).value


def load_board(ctx: SubtaskContext) -> JiraBoard:
    options: JiraOptions = ctx.data
    return ctx.dal.first(
        select(JiraBoard).where(
            JiraBoard.connection_id == options.connection_id,
            JiraBoard.board_id == options.board_id,
        ),
        not_found=f"fail to find board {options.board_id}",
    )


def load_scope_config(ctx: SubtaskContext, board: JiraBoard) -> JiraScopeConfig | None:
    if board.scope_config_id is None:
        return None
    return ctx.dal.first(
        select(JiraScopeConfig).where(JiraScopeConfig.id == board.scope_config_id),
        not_found=f"scope config not found for board {board.board_id}",
    )
