"""Zentao plugin: projects, executions, stories, tasks and accounts."""

from __future__ import annotations

from typing import Any

from workspine.framework.planner import PlanBuilder
from workspine.framework.plugin import Plugin
from workspine.framework.registry import register_plugin
from workspine.framework.subtasks import SubtaskMeta
from workspine.plugins.zentao.blueprint import PLAN_BUILDER
from workspine.plugins.zentao.tasks import SUBTASK_METAS, ZentaoOptions


@register_plugin("zentao")
class ZentaoPlugin(Plugin):
    """Converts zentao tool tables into the ticket and cross domains."""

    description = "To collect and enrich data from Zentao"

    def subtask_metas(self) -> list[SubtaskMeta]:
        return list(SUBTASK_METAS)

    def plan_builder(self) -> PlanBuilder:
        return PLAN_BUILDER

    def prepare_task_data(self, options: dict[str, Any]) -> ZentaoOptions:
        return ZentaoOptions.parse(options)
