"""
Pipeline planning for jira boards.

Each selected board becomes one ``jira`` task in the stage at the board's
index.  The board's scope config decides which subtasks run, and boards
whose config enables tickets are reported back as canonical ``Board`` scopes.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from workspine.core.dal import Dal
from workspine.framework.plan import BlueprintScope, PipelinePlan, Scope, SyncPolicy
from workspine.framework.planner import PlanBuilder
from workspine.framework.scope_config import ScopeConfigResolver
from workspine.framework.subtasks import SubtaskMeta
from workspine.plugins.jira.models import JiraBoard, JiraScopeConfig

PLAN_BUILDER = PlanBuilder(
    "jira",
    ScopeConfigResolver(JiraBoard, JiraScopeConfig, "board_id"),
    scope_kind="board",
)


def make_pipeline_plan(
    subtask_metas: Sequence[SubtaskMeta],
    connection_id: int,
    scopes: Sequence[BlueprintScope | dict[str, Any]],
    sync_policy: SyncPolicy | dict[str, Any] | None,
    dal: Dal,
    plan: PipelinePlan | None = None,
) -> tuple[PipelinePlan, list[Scope]]:
    """
    Plan the conversion of *scopes* (jira board ids) of one connection.

    Raises:
        BadInputError: Malformed request
        NotFoundError: A board or its scope config is missing
        StorageError: A lookup failed
    """
    return PLAN_BUILDER.build_plan(dal, subtask_metas, scopes, connection_id, sync_policy, plan)
