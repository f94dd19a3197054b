"""Jira plugin: boards, issues and accounts."""

from __future__ import annotations

from typing import Any

from workspine.framework.planner import PlanBuilder
from workspine.framework.plugin import Plugin
from workspine.framework.registry import register_plugin
from workspine.framework.subtasks import SubtaskMeta
from workspine.plugins.jira.blueprint import PLAN_BUILDER
from workspine.plugins.jira.tasks import SUBTASK_METAS, JiraOptions


@register_plugin("jira")
class JiraPlugin(Plugin):
    """Converts jira tool tables into the ticket and cross domains."""

    description = "To collect and enrich data from JIRA"

    def subtask_metas(self) -> list[SubtaskMeta]:
        return list(SUBTASK_METAS)

    def plan_builder(self) -> PlanBuilder:
        return PLAN_BUILDER

    def prepare_task_data(self, options: dict[str, Any]) -> JiraOptions:
        return JiraOptions.parse(options)
