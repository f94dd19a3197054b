"""Convert zentao tasks into issues, assignee links and board links."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import select

from workspine.core.didgen import DomainIdGenerator
from workspine.core.settings import get_settings
from workspine.core.timestamps import lead_time_minutes
from workspine.domain.ticket import BoardIssue, Issue, IssueAssignee, IssueType
from workspine.framework.converter import ConversionResult, DataConverter
from workspine.framework.domain_types import DOMAIN_TYPE_TICKET
from workspine.framework.subtasks import SubtaskContext, SubtaskMeta
from workspine.plugins.zentao.models import ZentaoExecution, ZentaoStory, ZentaoTask
from workspine.plugins.zentao.tasks.task_data import (
    RAW_TASK_TABLE,
    TASK_STATUS,
    ZentaoOptions,
    get_priority,
    get_status,
    load_project,
    load_scope_config,
)


@dataclass
class TaskTransform:
    """ZentaoTask -> Issue + IssueAssignee (when assigned) + BoardIssue."""

    connection_id: int
    original_project: str | None = None
    status_mappings: dict[str, str] | None = None
    task_id_gen: DomainIdGenerator = field(default_factory=lambda: DomainIdGenerator(ZentaoTask))
    story_id_gen: DomainIdGenerator = field(default_factory=lambda: DomainIdGenerator(ZentaoStory))
    board_id_gen: DomainIdGenerator = field(default_factory=lambda: DomainIdGenerator(ZentaoExecution))

    def __call__(self, task: ZentaoTask) -> list[Any]:
        issue = Issue(
            id=self.task_id_gen.generate(task.connection_id, task.id),
            issue_key=str(task.id),
            title=task.name,
            description=task.description,
            type=IssueType.TASK.value,
            original_type=f"{task.type or ''}.{task.mode or ''}",
            original_status=task.status,
            status=get_status(task.status, TASK_STATUS, self.status_mappings),
            resolution_date=task.closed_date,
            created_date=task.opened_date,
            updated_date=task.last_edited_date,
            priority=get_priority(task.pri),
            creator_id=str(task.opened_by_id) if task.opened_by_id else None,
            creator_name=task.opened_by_name,
            assignee_id=str(task.assigned_to_id) if task.assigned_to_id else None,
            assignee_name=task.assigned_to_name,
            url=task.url,
            original_project=self.original_project,
            lead_time_minutes=lead_time_minutes(task.opened_date, task.closed_date),
        )
        if task.parent:
            issue.parent_issue_id = self.story_id_gen.generate(self.connection_id, task.parent)

        results: list[Any] = [issue]
        if issue.assignee_id:
            results.append(
                IssueAssignee(
                    issue_id=issue.id,
                    assignee_id=issue.assignee_id,
                    assignee_name=issue.assignee_name,
                )
            )
        if task.execution:
            results.append(
                BoardIssue(
                    board_id=self.board_id_gen.generate(self.connection_id, task.execution),
                    issue_id=issue.id,
                )
            )
        return results


def convert_task(ctx: SubtaskContext) -> ConversionResult:
    options: ZentaoOptions = ctx.data
    project = load_project(ctx)
    scope_config = load_scope_config(ctx, project)
    settings = get_settings()

    converter = DataConverter(
        ctx.dal,
        select(ZentaoTask)
        .where(
            ZentaoTask.project == options.project_id,
            ZentaoTask.connection_id == options.connection_id,
        )
        .order_by(ZentaoTask.id),
        TaskTransform(
            connection_id=options.connection_id,
            original_project=project.name,
            status_mappings=scope_config.task_status_mappings if scope_config else None,
        ),
        raw_table=RAW_TASK_TABLE,
        raw_params={"ConnectionId": options.connection_id, "ProjectId": options.project_id},
        batch_size=settings.converter_batch_size,
        page_size=settings.cursor_page_size,
        stop_event=ctx.stop_event,
        name=ctx.subtask,
    )
    return converter.execute()


CONVERT_TASK_META = SubtaskMeta(
    name="convertTask",
    entry_point=convert_task,
    description="convert Zentao task",
    domain_types=(DOMAIN_TYPE_TICKET,),
)
