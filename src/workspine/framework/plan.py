"""
Pipeline plan models.

Inputs (``BlueprintScope``, ``SyncPolicy``, ``PlanRequest``) are pydantic
models so malformed requests are rejected before any storage access.
Outputs (``PipelineTask``, stages, plans) are plain dataclasses handed to
an external scheduler.

    PipelinePlan  = list[PipelineStage]      one stage per requested scope
    PipelineStage = list[PipelineTask]       tasks of all plugins for that scope
    PipelineTask  = plugin + subtasks + options
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from workspine.core.errors import BadInputError


class BlueprintScope(BaseModel):
    """One user-selected scope of a blueprint."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class SyncPolicy(BaseModel):
    """Incremental-sync hint forwarded to extraction; not interpreted here."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    time_after: datetime | None = Field(default=None, alias="timeAfter")


class PlanRequest(BaseModel):
    """Validated planner input."""

    connection_id: int = Field(gt=0)
    scopes: list[BlueprintScope] = Field(min_length=1)
    sync_policy: SyncPolicy = Field(default_factory=SyncPolicy)

    @classmethod
    def parse(
        cls,
        connection_id: Any,
        scopes: Any,
        sync_policy: SyncPolicy | dict[str, Any] | None = None,
    ) -> PlanRequest:
        """Validate raw planner arguments; raise ``BadInputError`` on any problem."""
        try:
            return cls(
                connection_id=connection_id,
                scopes=scopes,
                sync_policy=sync_policy if sync_policy is not None else SyncPolicy(),
            )
        except ValidationError as e:
            invalid = {
                ".".join(str(part) for part in err["loc"]): err["msg"] for err in e.errors()
            }
            raise BadInputError(
                "invalid pipeline plan request", invalid_params=invalid, cause=e
            ).with_context(connection_id=connection_id if isinstance(connection_id, int) else None) from e


@dataclass
class PipelineTask:
    """One executable task: a plugin and the subtasks it must run."""

    plugin: str
    subtasks: list[str] = field(default_factory=list)
    options: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "plugin": self.plugin,
            "subtasks": list(self.subtasks),
            "options": dict(self.options),
        }


PipelineStage = list[PipelineTask]
PipelinePlan = list[PipelineStage]


def plan_to_dict(plan: PipelinePlan) -> list[list[dict[str, Any]]]:
    """Serialize a plan for hand-off to a scheduler."""
    return [[task.to_dict() for task in stage] for stage in plan]


class Scope(Protocol):
    """A canonical top-level record linked to a planned scope."""

    def scope_id(self) -> str: ...

    def scope_name(self) -> str | None: ...

    def table_name(self) -> str: ...


__all__ = [
    "BlueprintScope",
    "SyncPolicy",
    "PlanRequest",
    "PipelineTask",
    "PipelineStage",
    "PipelinePlan",
    "Scope",
    "plan_to_dict",
]
