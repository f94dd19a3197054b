"""Convert zentao stories into requirement issues."""

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
from workspine.plugins.zentao.models import ZentaoProject, ZentaoStory
from workspine.plugins.zentao.tasks.task_data import (
    RAW_STORY_TABLE,
    STORY_STATUS,
    ZentaoOptions,
    get_priority,
    get_status,
    load_project,
    load_scope_config,
)


@dataclass
class StoryTransform:
    """ZentaoStory -> Issue + IssueAssignee (when assigned) + BoardIssue to the project board."""

    connection_id: int
    project_id: int
    original_project: str | None = None
    status_mappings: dict[str, str] | None = None
    story_id_gen: DomainIdGenerator = field(default_factory=lambda: DomainIdGenerator(ZentaoStory))
    board_id_gen: DomainIdGenerator = field(default_factory=lambda: DomainIdGenerator(ZentaoProject))

    def __call__(self, story: ZentaoStory) -> list[Any]:
        issue = Issue(
            id=self.story_id_gen.generate(story.connection_id, story.id),
            issue_key=str(story.id),
            title=story.title,
            description=story.description,
            type=IssueType.REQUIREMENT.value,
            original_type=story.type,
            original_status=story.status,
            status=get_status(story.status, STORY_STATUS, self.status_mappings),
            story_point=story.estimate,
            resolution_date=story.closed_date,
            created_date=story.opened_date,
            updated_date=story.last_edited_date,
            priority=get_priority(story.pri),
            creator_id=str(story.opened_by_id) if story.opened_by_id else None,
            creator_name=story.opened_by_name,
            assignee_id=str(story.assigned_to_id) if story.assigned_to_id else None,
            assignee_name=story.assigned_to_name,
            url=story.url,
            original_project=self.original_project,
            lead_time_minutes=lead_time_minutes(story.opened_date, story.closed_date),
        )
        results: list[Any] = [issue]
        if issue.assignee_id:
            results.append(
                IssueAssignee(
                    issue_id=issue.id,
                    assignee_id=issue.assignee_id,
                    assignee_name=issue.assignee_name,
                )
            )
        results.append(
            BoardIssue(
                board_id=self.board_id_gen.generate(self.connection_id, self.project_id),
                issue_id=issue.id,
            )
        )
        return results


def convert_story(ctx: SubtaskContext) -> ConversionResult:
    options: ZentaoOptions = ctx.data
    project = load_project(ctx)
    scope_config = load_scope_config(ctx, project)
    settings = get_settings()

    converter = DataConverter(
        ctx.dal,
        select(ZentaoStory)
        .where(
            ZentaoStory.project == options.project_id,
            ZentaoStory.connection_id == options.connection_id,
        )
        .order_by(ZentaoStory.id),
        StoryTransform(
            connection_id=options.connection_id,
            project_id=options.project_id,
            original_project=project.name,
            status_mappings=scope_config.story_status_mappings if scope_config else None,
        ),
        raw_table=RAW_STORY_TABLE,
        raw_params={"ConnectionId": options.connection_id, "ProjectId": options.project_id},
        batch_size=settings.converter_batch_size,
        page_size=settings.cursor_page_size,
        stop_event=ctx.stop_event,
        name=ctx.subtask,
    )
    return converter.execute()


CONVERT_STORY_META = SubtaskMeta(
    name="convertStory",
    entry_point=convert_story,
    description="convert Zentao story",
    domain_types=(DOMAIN_TYPE_TICKET,),
)
