"""
Workspine framework - plugin-independent conversion and planning machinery.

Usage:
    from workspine.framework import get_plugin, session_scope

    with session_scope(engine) as dal:
        plan, scopes = get_plugin("jira").make_pipeline_plan(
            dal, connection_id=1, scopes=[{"id": "12"}], sync_policy={"timeAfter": "2024-01-01T00:00:00Z"}
        )
"""

from workspine.core.dal import Dal, session_scope
from workspine.framework.converter import ConversionResult, ConversionStatus, DataConverter
from workspine.framework.domain_types import (
    DOMAIN_TYPE_CODE,
    DOMAIN_TYPE_CROSS,
    DOMAIN_TYPE_TICKET,
    DOMAIN_TYPES,
)
from workspine.framework.plan import (
    BlueprintScope,
    PipelinePlan,
    PipelineStage,
    PipelineTask,
    PlanRequest,
    Scope,
    SyncPolicy,
    plan_to_dict,
)
from workspine.framework.planner import PlanBuilder
from workspine.framework.plugin import Plugin
from workspine.framework.registry import get_plugin, list_plugins, register_plugin
from workspine.framework.runner import TaskResult, TaskRunner
from workspine.framework.scope_config import ScopeConfigModel, ScopeConfigResolver, ScopeModel
from workspine.framework.subtasks import SubtaskContext, SubtaskMeta, make_pipeline_plan_subtasks

__all__ = [
    "Dal",
    "session_scope",
    "ConversionResult",
    "ConversionStatus",
    "DataConverter",
    "DOMAIN_TYPE_CODE",
    "DOMAIN_TYPE_CROSS",
    "DOMAIN_TYPE_TICKET",
    "DOMAIN_TYPES",
    "BlueprintScope",
    "PipelinePlan",
    "PipelineStage",
    "PipelineTask",
    "PlanRequest",
    "Scope",
    "SyncPolicy",
    "plan_to_dict",
    "PlanBuilder",
    "Plugin",
    "get_plugin",
    "list_plugins",
    "register_plugin",
    "TaskResult",
    "TaskRunner",
    "ScopeConfigModel",
    "ScopeConfigResolver",
    "ScopeModel",
    "SubtaskContext",
    "SubtaskMeta",
    "make_pipeline_plan_subtasks",
]
