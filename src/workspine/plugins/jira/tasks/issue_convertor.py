"""Convert jira issues of one board into issues, assignee links and board links."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import select

from workspine.core.didgen import DomainIdGenerator
from workspine.core.settings import get_settings
from workspine.core.timestamps import lead_time_minutes
from workspine.domain.ticket import BoardIssue, Issue, IssueAssignee, IssueStatus
from workspine.framework.converter import ConversionResult, DataConverter
from workspine.framework.domain_types import DOMAIN_TYPE_TICKET
from workspine.framework.subtasks import SubtaskContext, SubtaskMeta
from workspine.plugins.jira.models import JiraAccount, JiraBoard, JiraBoardIssue, JiraIssue
from workspine.plugins.jira.tasks.task_data import (
    RAW_ISSUE_TABLE,
    JiraOptions,
    get_priority,
    get_status,
    get_type,
    load_board,
    load_scope_config,
)


@dataclass
class IssueTransform:
    """JiraIssue -> Issue + IssueAssignee (when assigned) + BoardIssue."""

    connection_id: int
    board_id: int
    type_mappings: dict[str, str] | None = None
    issue_id_gen: DomainIdGenerator = field(default_factory=lambda: DomainIdGenerator(JiraIssue))
    account_id_gen: DomainIdGenerator = field(default_factory=lambda: DomainIdGenerator(JiraAccount))
    board_id_gen: DomainIdGenerator = field(default_factory=lambda: DomainIdGenerator(JiraBoard))

    def __call__(self, jira_issue: JiraIssue) -> list[Any]:
        issue = Issue(
            id=self.issue_id_gen.generate(jira_issue.connection_id, jira_issue.issue_id),
            url=jira_issue.url,
            issue_key=jira_issue.issue_key,
            title=jira_issue.summary,
            description=jira_issue.description,
            type=get_type(jira_issue.type, self.type_mappings),
            original_type=jira_issue.type,
            status=get_status(jira_issue.status_key),
            original_status=jira_issue.status_name,
            priority=get_priority(jira_issue.priority_name),
            story_point=jira_issue.story_point,
            epic_key=jira_issue.epic_key,
            resolution_date=jira_issue.resolution_date,
            created_date=jira_issue.created,
            updated_date=jira_issue.updated,
            creator_name=jira_issue.creator_display_name,
            assignee_name=jira_issue.assignee_display_name,
            original_project=jira_issue.project_name,
        )
        if issue.status == IssueStatus.DONE.value:
            issue.lead_time_minutes = lead_time_minutes(jira_issue.created, jira_issue.resolution_date)
        if jira_issue.parent_id:
            issue.parent_issue_id = self.issue_id_gen.generate(self.connection_id, jira_issue.parent_id)
        if jira_issue.creator_account_id:
            issue.creator_id = self.account_id_gen.generate(self.connection_id, jira_issue.creator_account_id)
        if jira_issue.assignee_account_id:
            issue.assignee_id = self.account_id_gen.generate(self.connection_id, jira_issue.assignee_account_id)

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
                board_id=self.board_id_gen.generate(self.connection_id, self.board_id),
                issue_id=issue.id,
            )
        )
        return results


def convert_issues(ctx: SubtaskContext) -> ConversionResult:
    options: JiraOptions = ctx.data
    board = load_board(ctx)
    scope_config = load_scope_config(ctx, board)
    settings = get_settings()

    stmt = (
        select(JiraIssue)
        .join(
            JiraBoardIssue,
            (JiraBoardIssue.issue_id == JiraIssue.issue_id)
            & (JiraBoardIssue.connection_id == JiraIssue.connection_id),
        )
        .where(
            JiraBoardIssue.connection_id == options.connection_id,
            JiraBoardIssue.board_id == options.board_id,
        )
        .order_by(JiraIssue.issue_id)
    )
    converter = DataConverter(
        ctx.dal,
        stmt,
        IssueTransform(
            connection_id=options.connection_id,
            board_id=options.board_id,
            type_mappings=scope_config.type_mappings if scope_config else None,
        ),
        raw_table=RAW_ISSUE_TABLE,
        raw_params={"ConnectionId": options.connection_id, "BoardId": options.board_id},
        batch_size=settings.converter_batch_size,
        page_size=settings.cursor_page_size,
        stop_event=ctx.stop_event,
        name=ctx.subtask,
    )
    return converter.execute()


CONVERT_ISSUES_META = SubtaskMeta(
    name="convertIssues",
    entry_point=convert_issues,
    description="convert Jira issues",
    domain_types=(DOMAIN_TYPE_TICKET,),
)
