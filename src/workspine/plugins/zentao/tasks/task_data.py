"""Task options and shared mappings of the zentao convertors."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from sqlalchemy import select

from workspine.core.errors import BadInputError
from workspine.domain.ticket import IssuePriority, IssueStatus, map_enum
from workspine.framework.subtasks import SubtaskContext
from workspine.plugins.zentao.models import ZentaoProject, ZentaoScopeConfig

RAW_PROJECT_TABLE = "_tool_zentao_projects"
RAW_EXECUTION_TABLE = "_tool_zentao_executions"
RAW_STORY_TABLE = "_tool_zentao_stories"
RAW_TASK_TABLE = "_tool_zentao_tasks"
RAW_ACCOUNT_TABLE = "_tool_zentao_accounts"

TASK_STATUS = {
    "wait": IssueStatus.TODO,
    "doing": IssueStatus.IN_PROGRESS,
    "pause": IssueStatus.IN_PROGRESS,
    "done": IssueStatus.DONE,
    "cancel": IssueStatus.DONE,
    "closed": IssueStatus.DONE,
}

STORY_STATUS = {
    "draft": IssueStatus.TODO,
    "reviewing": IssueStatus.TODO,
    "active": IssueStatus.IN_PROGRESS,
    "changing": IssueStatus.IN_PROGRESS,
    "closed": IssueStatus.DONE,
}

PRIORITY = {
    1: IssuePriority.HIGHEST,
    2: IssuePriority.HIGH,
    3: IssuePriority.MEDIUM,
    4: IssuePriority.LOW,
}


class ZentaoOptions(BaseModel):
    """Options of a planned zentao task."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    connection_id: int = Field(alias="connectionId", gt=0)
    project_id: int = Field(alias="scopeId", gt=0)
    time_after: datetime | None = Field(default=None, alias="timeAfter")

    @classmethod
    def parse(cls, options: dict[str, Any]) -> ZentaoOptions:
        try:
            return cls.model_validate(options)
        except ValidationError as e:
            raise BadInputError("invalid zentao task options", cause=e).with_context(plugin="zentao") from e


def get_priority(pri: int | None) -> str:
    return PRIORITY.get(pri, IssuePriority.UNKNOWN).value


def get_status(value: str | None, defaults: dict[str, IssueStatus], overrides: dict[str, str] | None) -> str:
    """Canonical status for a zentao status; scope-config overrides win, unknown maps to OTHER."""
    if value is not None and overrides and value in overrides:
        try:
            return IssueStatus(overrides[value]).value
        except ValueError:
            return IssueStatus.OTHER.value
    return map_enum(value, defaults, IssueStatus.OTHER)


def load_project(ctx: SubtaskContext) -> ZentaoProject:
    options: ZentaoOptions = ctx.data
    return ctx.dal.first(
        select(ZentaoProject).where(
            ZentaoProject.connection_id == options.connection_id,
            ZentaoProject.id == options.project_id,
        ),
        not_found=f"fail to find project {options.project_id}",
    )


def load_scope_config(ctx: SubtaskContext, project: ZentaoProject) -> ZentaoScopeConfig | None:
    """Scope config of *project*, or None when the project has none."""
    if project.scope_config_id is None:
        return None
    return ctx.dal.first(
        select(ZentaoScopeConfig).where(ZentaoScopeConfig.id == project.scope_config_id),
        not_found=f"scope config not found for project {project.id}",
    )
