"""Pipeline planning for zentao projects."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from workspine.core.dal import Dal
from workspine.framework.plan import BlueprintScope, PipelinePlan, Scope, SyncPolicy
from workspine.framework.planner import PlanBuilder
from workspine.framework.scope_config import ScopeConfigResolver
from workspine.framework.subtasks import SubtaskMeta
from workspine.plugins.zentao.models import ZentaoProject, ZentaoScopeConfig

PLAN_BUILDER = PlanBuilder(
    "zentao",
    ScopeConfigResolver(ZentaoProject, ZentaoScopeConfig, "id"),
    scope_kind="project",
)


def make_pipeline_plan(
    subtask_metas: Sequence[SubtaskMeta],
    connection_id: int,
    scopes: Sequence[BlueprintScope | dict[str, Any]],
    sync_policy: SyncPolicy | dict[str, Any] | None,
    dal: Dal,
    plan: PipelinePlan | None = None,
) -> tuple[PipelinePlan, list[Scope]]:
    return PLAN_BUILDER.build_plan(dal, subtask_metas, scopes, connection_id, sync_policy, plan)
