"""Subtask metadata, execution context and plan-time subtask selection.

Manifesto:
    A plugin exposes an ordered catalog of subtasks.  Each subtask declares
    the canonical entity kinds it writes, so the planner can decide which
    subtasks a scope needs purely from its scope config, without knowing
    anything about the tool.

Tags:
    workspine, framework, subtasks, planning
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from workspine.core.dal import Dal
from workspine.core.errors import BadInputError
from workspine.framework.domain_types import DOMAIN_TYPES


@dataclass
class SubtaskContext:
    """Everything a subtask entry point needs for one run.

    Attributes:
        dal: Storage handle owned by this task run
        plugin: Plugin name
        subtask: Name of the subtask being executed
        options: Raw task options as planned (``connectionId``, ``scopeId`` ...)
        data: Plugin-specific parsed task data
        stop_event: Set by the caller to request prompt cancellation
    """

    dal: Dal
    plugin: str
    subtask: str
    options: dict[str, Any]
    data: Any = None
    stop_event: threading.Event | None = None


SubtaskEntryPoint = Callable[[SubtaskContext], Any]


@dataclass(frozen=True)
class SubtaskMeta:
    """Registration record of one subtask in a plugin's catalog."""

    name: str
    entry_point: SubtaskEntryPoint
    description: str = ""
    domain_types: tuple[str, ...] = field(default_factory=tuple)


def make_pipeline_plan_subtasks(subtask_metas: Iterable[SubtaskMeta], entities: Iterable[str]) -> list[str]:
    """
    Names of the subtasks a scope with *entities* enabled must run.

    A subtask is selected iff its declared domain types intersect *entities*.
    Catalog order is preserved.  An empty *entities* selects nothing.

    Raises:
        BadInputError: If *entities* names an unknown domain type
    """
    wanted = set(entities)
    unknown = sorted(wanted.difference(DOMAIN_TYPES))
    if unknown:
        raise BadInputError(
            f"unknown domain types in scope config: {', '.join(unknown)}",
            invalid_params={"entities": ", ".join(unknown)},
        )
    return [meta.name for meta in subtask_metas if wanted.intersection(meta.domain_types)]
