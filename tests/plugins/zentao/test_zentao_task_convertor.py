"""Tests for the zentao task convertor."""

from datetime import datetime, timedelta

import pytest
from sqlalchemy import select

from workspine.core.didgen import DomainIdGenerator
from workspine.domain.ticket import BoardIssue, Issue, IssueAssignee
from workspine.framework.subtasks import SubtaskContext
from workspine.plugins.zentao.models import ZentaoExecution, ZentaoStory, ZentaoTask
from workspine.plugins.zentao.tasks import ZentaoOptions
from workspine.plugins.zentao.tasks.task_convertor import TaskTransform, convert_task

T0 = datetime(2024, 5, 6, 9, 0)


def make_task(**fields) -> ZentaoTask:
    values = dict(
        connection_id=7,
        id=42,
        project=1,
        execution=3,
        parent=10,
        name="Wire up login",
        type="devel",
        mode="single",
        status="done",
        pri=2,
        opened_by_id=5,
        opened_by_name="pm",
        assigned_to_id=99,
        assigned_to_name="dev",
        opened_date=T0,
        closed_date=T0 + timedelta(minutes=90),
        url="https://zentao/task-view-42.html",
    )
    values.update(fields)
    return ZentaoTask(**values)


class TestTaskTransform:
    def test_end_to_end_example(self):
        issue, assignee, board_issue = TaskTransform(connection_id=7, original_project="Apollo")(make_task())

        assert issue.id == DomainIdGenerator(ZentaoTask).generate(7, 42)
        assert issue.id == "zentao:ZentaoTask:7:42"
        assert issue.lead_time_minutes == 90
        assert assignee.assignee_id == "99"
        assert assignee.issue_id == issue.id
        assert board_issue.issue_id == issue.id
        assert board_issue.board_id == DomainIdGenerator(ZentaoExecution).generate(7, 3)

    def test_issue_fields(self):
        issue = TaskTransform(connection_id=7, original_project="Apollo")(make_task())[0]

        assert issue.issue_key == "42"
        assert issue.type == "TASK"
        assert issue.original_type == "devel.single"
        assert issue.status == "DONE"
        assert issue.original_status == "done"
        assert issue.priority == "High"
        assert issue.parent_issue_id == DomainIdGenerator(ZentaoStory).generate(7, 10)
        assert issue.creator_id == "5"
        assert issue.original_project == "Apollo"
        assert issue.resolution_date == T0 + timedelta(minutes=90)

    def test_open_task_has_no_lead_time(self):
        issue = TaskTransform(connection_id=7)(make_task(status="doing", closed_date=None))[0]
        assert issue.lead_time_minutes is None
        assert issue.status == "IN_PROGRESS"

    def test_unassigned_task_has_no_assignee_link(self):
        entities = TaskTransform(connection_id=7)(make_task(assigned_to_id=None, execution=None, parent=0))
        assert [type(e) for e in entities] == [Issue]
        assert entities[0].parent_issue_id is None

    @pytest.mark.parametrize(
        ("status", "expected"),
        [("wait", "TODO"), ("pause", "IN_PROGRESS"), ("cancel", "DONE"), ("archived", "OTHER"), (None, "OTHER")],
    )
    def test_status_mapping(self, status, expected):
        assert TaskTransform(connection_id=7)(make_task(status=status))[0].status == expected

    def test_scope_config_status_override(self):
        transform = TaskTransform(connection_id=7, status_mappings={"pause": "TODO", "wait": "bogus"})
        assert transform(make_task(status="pause"))[0].status == "TODO"
        assert transform(make_task(status="wait"))[0].status == "OTHER"

    @pytest.mark.parametrize(("pri", "expected"), [(1, "Highest"), (4, "Low"), (0, "Unknown"), (None, "Unknown")])
    def test_priority_mapping(self, pri, expected):
        assert TaskTransform(connection_id=7)(make_task(pri=pri))[0].priority == expected


class TestConvertTask:
    def run(self, dal):
        ctx = SubtaskContext(
            dal=dal,
            plugin="zentao",
            subtask="convertTask",
            options={"connectionId": 7, "scopeId": 1},
            data=ZentaoOptions.parse({"connectionId": 7, "scopeId": 1}),
        )
        return convert_task(ctx)

    def test_persists_fan_out(self, dal, add, seed_zentao_project):
        seed_zentao_project(dal, project_id=1, name="Apollo")
        add(make_task(), make_task(id=43, assigned_to_id=None), make_task(id=44, project=2))

        result = self.run(dal)

        assert result.rows_read == 2
        issues = dal.all(select(Issue).order_by(Issue.id))
        assert [i.id for i in issues] == ["zentao:ZentaoTask:7:42", "zentao:ZentaoTask:7:43"]
        assert all(i.original_project == "Apollo" for i in issues)
        assert len(dal.all(select(IssueAssignee))) == 1
        assert len(dal.all(select(BoardIssue))) == 2
        assert issues[0].raw_data_table == "_tool_zentao_tasks"

    def test_scope_config_mappings_applied(self, dal, add, seed_zentao_project):
        seed_zentao_project(dal, project_id=1, task_status_mappings={"done": "IN_PROGRESS"})
        add(make_task())
        self.run(dal)
        assert dal.first(select(Issue)).status == "IN_PROGRESS"

    def test_reassigned_task_replaces_links(self, dal, add, seed_zentao_project):
        seed_zentao_project(dal, project_id=1)
        add(make_task())
        self.run(dal)

        task = dal.first(select(ZentaoTask).where(ZentaoTask.id == 42))
        task.assigned_to_id = 100
        task.execution = 4
        dal.commit()
        self.run(dal)

        assert [a.assignee_id for a in dal.all(select(IssueAssignee))] == ["100"]
        board_issues = dal.all(select(BoardIssue))
        assert [b.board_id for b in board_issues] == [DomainIdGenerator(ZentaoExecution).generate(7, 4)]
        assert len(dal.all(select(Issue))) == 1
