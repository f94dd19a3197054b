"""Sequential task runner.

Manifesto:
    Scheduling, retries and concurrency belong to the external scheduler.
    This runner is the seam it calls: execute the subtasks of one planned
    task, in order, on a storage handle owned by that task alone.

Tags:
    workspine, framework, runner, lifecycle
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sqlalchemy.engine import Engine

from workspine.core.dal import session_scope
from workspine.core.errors import WorkspineError, wrap_error
from workspine.core.logging import LogContext, get_logger
from workspine.core.timestamps import utc_now
from workspine.framework.plan import PipelineTask
from workspine.framework.registry import get_plugin
from workspine.framework.subtasks import SubtaskContext

log = get_logger(__name__)


@dataclass
class TaskResult:
    """Result of one task run."""

    plugin: str
    started_at: datetime
    completed_at: datetime | None = None
    completed_subtasks: list[str] = field(default_factory=list)
    results: dict[str, Any] = field(default_factory=dict)
    error: WorkspineError | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


class TaskRunner:
    """
    Runs planned tasks synchronously in the current thread.

    Each ``run()`` opens its own session, so tasks handed to different
    threads never share a cursor.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def run(self, task: PipelineTask, stop_event: threading.Event | None = None) -> TaskResult:
        """
        Run every subtask of *task* in order, stopping at the first failure.

        Returns:
            TaskResult; ``error`` holds the failure when one occurred
        """
        result = TaskResult(plugin=task.plugin, started_at=utc_now())

        with LogContext(
            plugin=task.plugin,
            connection_id=task.options.get("connectionId"),
            scope_id=task.options.get("scopeId"),
        ):
            try:
                plugin = get_plugin(task.plugin)
                data = plugin.prepare_task_data(task.options)
            except WorkspineError as e:
                result.error = e.with_context(plugin=task.plugin)
                result.completed_at = utc_now()
                log.error("runner.rejected", **result.error.to_dict())
                return result

            for name in task.subtasks:
                log.debug("runner.subtask_start", subtask=name)
                try:
                    meta = plugin.get_subtask(name)
                    with session_scope(self.engine) as dal:
                        ctx = SubtaskContext(
                            dal=dal,
                            plugin=task.plugin,
                            subtask=name,
                            options=task.options,
                            data=data,
                            stop_event=stop_event,
                        )
                        result.results[name] = meta.entry_point(ctx)
                except Exception as e:
                    result.error = wrap_error(
                        e,
                        f"subtask {name} failed",
                        wrapper=WorkspineError,
                        plugin=task.plugin,
                        subtask=name,
                        connection_id=task.options.get("connectionId"),
                        scope_id=task.options.get("scopeId"),
                    )
                    log.error("runner.stopped", failed_at=name, **result.error.to_dict())
                    break
                result.completed_subtasks.append(name)

        result.completed_at = utc_now()
        log.info(
            "runner.completed",
            plugin=task.plugin,
            subtasks=len(result.completed_subtasks),
            succeeded=result.succeeded,
        )
        return result
