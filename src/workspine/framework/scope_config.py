"""Scope tables, scope-config tables and the resolver joining them.

Every plugin stores its user-selected scopes (boards, projects) in a
``_tool_<plugin>_<scopes>`` table that references at most one row of its
``_tool_<plugin>_scope_configs`` table.  The resolver follows that
reference for one ``(connection_id, scope_id)``.

Tags:
    workspine, framework, scope-config, resolver
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, Integer, String, inspect, select
from sqlalchemy.orm import Mapped, mapped_column

from workspine.core.dal import Dal
from workspine.core.errors import NotFoundError, StorageError
from workspine.core.logging import get_logger

logger = get_logger(__name__)


class ScopeConfigModel:
    """Columns shared by every ``_tool_*_scope_configs`` table."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    connection_id: Mapped[int | None] = mapped_column(Integer)
    name: Mapped[str | None] = mapped_column(String(255))
    entities: Mapped[list] = mapped_column(JSON, default=list)

    def entity_set(self) -> frozenset[str]:
        """Enabled canonical entity kinds."""
        return frozenset(self.entities or ())


class ScopeModel:
    """Columns shared by every tool scope table (besides its own scope id column)."""

    name: Mapped[str | None] = mapped_column(String(255))
    scope_config_id: Mapped[int | None] = mapped_column(Integer)


class ScopeConfigResolver:
    """
    Look up the scope config of one scope.

    Args:
        scope_model: Tool scope table (e.g. ``JiraBoard``)
        config_model: Tool scope-config table (e.g. ``JiraScopeConfig``)
        scope_id_column: Name of the scope id attribute on *scope_model*
            (e.g. ``"board_id"``)

    Example:
        resolver = ScopeConfigResolver(JiraBoard, JiraScopeConfig, "board_id")
        config = resolver.resolve(dal, connection_id=1, scope_id="12")
        config.entity_set()   # frozenset({"TICKET"})
    """

    def __init__(self, scope_model: type, config_model: type, scope_id_column: str) -> None:
        self.scope_model = scope_model
        self.config_model = config_model
        self.scope_id_column = scope_id_column

    def scope_id_value(self, scope_id: str) -> Any:
        """Coerce a planner-facing string scope id to the column's Python type."""
        column = inspect(self.scope_model).columns[self.scope_id_column]
        if column.type.python_type is int:
            try:
                return int(scope_id)
            except ValueError:
                return scope_id
        return scope_id

    def resolve(self, dal: Dal, connection_id: int, scope_id: str) -> Any:
        """
        Return the scope config row of ``(connection_id, scope_id)``.

        Raises:
            NotFoundError: No scope row matches, or its config reference is
                unset or dangling
            StorageError: The lookup query failed
        """
        c = self.config_model
        s = self.scope_model
        stmt = (
            select(c)
            .join(s, s.scope_config_id == c.id)
            .where(
                s.connection_id == connection_id,
                getattr(s, self.scope_id_column) == self.scope_id_value(scope_id),
            )
        )
        try:
            config = dal.first(stmt, not_found=f"scope config not found for scope {scope_id}")
        except (NotFoundError, StorageError) as e:
            raise e.with_context(connection_id=connection_id, scope_id=scope_id)

        logger.debug(
            "scope_config.resolved",
            connection_id=connection_id,
            scope_id=scope_id,
            scope_config_id=config.id,
            entities=sorted(config.entity_set()),
        )
        return config


__all__ = ["ScopeConfigModel", "ScopeModel", "ScopeConfigResolver"]
