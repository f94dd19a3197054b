"""Base plugin interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from workspine.core.dal import Dal
from workspine.core.errors import PluginNotFoundError
from workspine.framework.plan import BlueprintScope, PipelinePlan, Scope, SyncPolicy
from workspine.framework.planner import PlanBuilder
from workspine.framework.subtasks import SubtaskMeta


class Plugin(ABC):
    """Base class for all tool plugins."""

    name: str = ""
    description: str = ""

    @abstractmethod
    def subtask_metas(self) -> list[SubtaskMeta]:
        """The plugin's subtask catalog in execution order."""
        ...

    @abstractmethod
    def plan_builder(self) -> PlanBuilder:
        """Planner bound to the plugin's scope and scope-config tables."""
        ...

    def prepare_task_data(self, options: dict[str, Any]) -> Any:
        """Parse planned task options into plugin task data. Override in subclasses."""
        return options

    def get_subtask(self, name: str) -> SubtaskMeta:
        for meta in self.subtask_metas():
            if meta.name == name:
                return meta
        raise PluginNotFoundError(name, f"Subtask '{name}' not found in plugin '{self.name}'")

    def make_pipeline_plan(
        self,
        dal: Dal,
        connection_id: int,
        scopes: Sequence[BlueprintScope | dict[str, Any]],
        sync_policy: SyncPolicy | dict[str, Any] | None = None,
        plan: PipelinePlan | None = None,
    ) -> tuple[PipelinePlan, list[Scope]]:
        return self.plan_builder().build_plan(
            dal, self.subtask_metas(), scopes, connection_id, sync_policy, plan
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
