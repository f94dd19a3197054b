"""
Pipeline planner - turns selected scopes into an executable plan.

This is the plugin-independent half of every blueprint:
1. Validate the request (connection id, non-empty scope list)
2. Per scope, resolve its scope config
3. Select the subtasks whose declared domain types are enabled
4. Append one task per scope to the stage at the scope's index
5. Load each scope's tool record and emit the canonical scope entity

Design Principles:
- Read-only: only scope and scope-config tables are queried
- No shared state: a builder holds configuration only, so concurrent
  ``build_plan`` calls for different blueprints are independent
- Fail-fast: any scope failing aborts the whole call, no partial plan
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import select

from workspine.core.dal import Dal
from workspine.core.didgen import DomainIdGenerator
from workspine.core.errors import WorkspineError
from workspine.core.logging import get_logger
from workspine.core.timestamps import to_rfc3339
from workspine.domain.ticket import Board
from workspine.framework.domain_types import DOMAIN_TYPE_TICKET
from workspine.framework.plan import (
    BlueprintScope,
    PipelinePlan,
    PipelineTask,
    PlanRequest,
    Scope,
    SyncPolicy,
)
from workspine.framework.scope_config import ScopeConfigResolver
from workspine.framework.subtasks import SubtaskMeta, make_pipeline_plan_subtasks

logger = get_logger(__name__)


class PlanBuilder:
    """
    Builds pipeline plans for one plugin.

    Args:
        plugin: Plugin name written into every planned task
        resolver: Scope-config resolver of the plugin's scope table
        scope_kind: Human name of a scope used in errors (``"board"``)
        scope_id_generator: Domain ID generator of the scope's tool model

    Example:
        builder = PlanBuilder("jira", ScopeConfigResolver(JiraBoard, JiraScopeConfig, "board_id"),
                              scope_kind="board")
        plan, scopes = builder.build_plan(dal, subtask_metas, [{"id": "12"}], 1, SyncPolicy())
    """

    def __init__(
        self,
        plugin: str,
        resolver: ScopeConfigResolver,
        scope_kind: str = "scope",
        scope_id_generator: DomainIdGenerator | None = None,
    ) -> None:
        self.plugin = plugin
        self.resolver = resolver
        self.scope_kind = scope_kind
        self.scope_id_generator = scope_id_generator or DomainIdGenerator(resolver.scope_model)

    def build_plan(
        self,
        dal: Dal,
        subtask_metas: Sequence[SubtaskMeta],
        scopes: Sequence[BlueprintScope | dict[str, Any]],
        connection_id: int,
        sync_policy: SyncPolicy | dict[str, Any] | None = None,
        plan: PipelinePlan | None = None,
    ) -> tuple[PipelinePlan, list[Scope]]:
        """
        Build the plan and the canonical scope list for *scopes*.

        Args:
            dal: Storage handle (read-only use)
            subtask_metas: The plugin's full subtask catalog, in registration order
            scopes: Selected scopes; stage *i* of the plan belongs to scope *i*
            connection_id: Connection owning the scopes
            sync_policy: Optional incremental-sync lower bound
            plan: Existing stages (e.g. from other plugins) to append tasks to

        Returns:
            ``(plan, scopes)``

        Raises:
            BadInputError: Malformed request, before any storage access
            NotFoundError: A scope, its config or its tool record is missing
            StorageError: A lookup failed
        """
        request = PlanRequest.parse(connection_id, scopes, sync_policy)
        logger.debug(
            "planner.start",
            plugin=self.plugin,
            connection_id=request.connection_id,
            scope_count=len(request.scopes),
        )
        result_plan = self.make_data_source_pipeline_plan(
            dal, subtask_metas, plan, request.scopes, request.connection_id, request.sync_policy
        )
        result_scopes = self.make_scopes(dal, request.scopes, request.connection_id)
        logger.info(
            "planner.completed",
            plugin=self.plugin,
            connection_id=request.connection_id,
            stages=len(result_plan),
            scopes=len(result_scopes),
        )
        return result_plan, result_scopes

    def make_data_source_pipeline_plan(
        self,
        dal: Dal,
        subtask_metas: Sequence[SubtaskMeta],
        plan: PipelinePlan | None,
        scopes: Sequence[BlueprintScope],
        connection_id: int,
        sync_policy: SyncPolicy,
    ) -> PipelinePlan:
        """Append one task per scope to the stage at the scope's index."""
        result: PipelinePlan = [list(stage) for stage in plan] if plan else []
        while len(result) < len(scopes):
            result.append([])

        for i, scope in enumerate(scopes):
            options: dict[str, Any] = {
                "scopeId": scope.id,
                "connectionId": connection_id,
            }
            if sync_policy.time_after is not None:
                options["timeAfter"] = to_rfc3339(sync_policy.time_after)

            try:
                config = self.resolver.resolve(dal, connection_id, scope.id)
                subtasks = make_pipeline_plan_subtasks(subtask_metas, config.entity_set())
            except WorkspineError as e:
                raise e.with_context(plugin=self.plugin, connection_id=connection_id, scope_id=scope.id)

            result[i].append(PipelineTask(plugin=self.plugin, subtasks=subtasks, options=options))
            logger.debug(
                "planner.task_planned",
                plugin=self.plugin,
                stage=i,
                scope_id=scope.id,
                subtasks=subtasks,
            )
        return result

    def make_scopes(
        self,
        dal: Dal,
        scopes: Sequence[BlueprintScope],
        connection_id: int,
    ) -> list[Scope]:
        """Canonical scope entities for the scopes whose config enables tickets."""
        s = self.resolver.scope_model
        column = getattr(s, self.resolver.scope_id_column)
        result: list[Scope] = []
        for scope in scopes:
            stmt = select(s).where(
                s.connection_id == connection_id,
                column == self.resolver.scope_id_value(scope.id),
            )
            try:
                record = dal.first(stmt, not_found=f"fail to find {self.scope_kind} {scope.id}")
                config = self.resolver.resolve(dal, connection_id, scope.id)
            except WorkspineError as e:
                raise e.with_context(plugin=self.plugin, connection_id=connection_id, scope_id=scope.id)

            if DOMAIN_TYPE_TICKET in config.entity_set():
                result.append(self.to_domain_scope(record))
        return result

    def to_domain_scope(self, record: Any) -> Scope:
        """Canonical ``Board`` for a tool scope row."""
        return Board(
            id=self.scope_id_generator.generate(
                record.connection_id, getattr(record, self.resolver.scope_id_column)
            ),
            name=record.name,
        )


__all__ = ["PlanBuilder"]
