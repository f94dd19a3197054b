"""Tests for the zentao project, execution, story and account convertors."""

from datetime import datetime, timedelta

from sqlalchemy import select

from workspine.domain.crossdomain import Account
from workspine.domain.ticket import Board, BoardIssue, Issue
from workspine.framework.subtasks import SubtaskContext
from workspine.plugins.zentao.models import ZentaoAccount, ZentaoExecution, ZentaoProject, ZentaoStory
from workspine.plugins.zentao.tasks import ZentaoOptions
from workspine.plugins.zentao.tasks.account_convertor import convert_account
from workspine.plugins.zentao.tasks.execution_convertor import convert_executions
from workspine.plugins.zentao.tasks.project_convertor import convert_projects
from workspine.plugins.zentao.tasks.story_convertor import StoryTransform, convert_story
from workspine.plugins.zentao.tasks.task_data import load_scope_config

T0 = datetime(2024, 5, 6, 9, 0)


def context(dal, subtask: str) -> SubtaskContext:
    options = {"connectionId": 7, "scopeId": 1}
    return SubtaskContext(
        dal=dal,
        plugin="zentao",
        subtask=subtask,
        options=options,
        data=ZentaoOptions.parse(options),
    )


class TestStoryTransform:
    def test_requirement_with_board_link(self):
        story = ZentaoStory(
            connection_id=7,
            id=10,
            project=1,
            title="Login",
            type="story",
            status="active",
            pri=3,
            estimate=5.0,
            assigned_to_id=99,
            opened_date=T0,
            closed_date=T0 + timedelta(hours=2),
        )
        issue, assignee, board_issue = StoryTransform(connection_id=7, project_id=1)(story)

        assert issue.id == "zentao:ZentaoStory:7:10"
        assert issue.type == "REQUIREMENT"
        assert issue.status == "IN_PROGRESS"
        assert issue.priority == "Medium"
        assert issue.story_point == 5.0
        assert issue.lead_time_minutes == 120
        assert assignee.assignee_id == "99"
        assert board_issue.board_id == "zentao:ZentaoProject:7:1"

    def test_unassigned_story(self):
        story = ZentaoStory(connection_id=7, id=11, project=1, status="draft")
        entities = StoryTransform(connection_id=7, project_id=1)(story)
        assert [type(e).__name__ for e in entities] == ["Issue", "BoardIssue"]
        assert entities[0].status == "TODO"


class TestConvertors:
    def test_convert_projects(self, dal, seed_zentao_project):
        seed_zentao_project(dal, project_id=1, name="Apollo")
        result = convert_projects(context(dal, "convertProjects"))

        assert result.rows_read == 1
        board = dal.first(select(Board))
        assert (board.id, board.name) == ("zentao:ZentaoProject:7:1", "Apollo")

    def test_convert_executions(self, dal, add):
        add(
            ZentaoExecution(connection_id=7, id=3, project=1, name="Sprint 1", type="sprint"),
            ZentaoExecution(connection_id=7, id=4, project=2, name="Other project"),
        )
        convert_executions(context(dal, "convertExecutions"))
        boards = dal.all(select(Board))
        assert [(b.id, b.name) for b in boards] == [("zentao:ZentaoExecution:7:3", "Sprint 1")]

    def test_convert_story(self, dal, add, seed_zentao_project):
        seed_zentao_project(dal, project_id=1, name="Apollo")
        add(ZentaoStory(connection_id=7, id=10, project=1, status="closed"))

        convert_story(context(dal, "convertStory"))

        issue = dal.first(select(Issue))
        assert issue.status == "DONE"
        assert issue.original_project == "Apollo"
        assert dal.first(select(BoardIssue)).board_id == "zentao:ZentaoProject:7:1"

    def test_convert_account(self, dal, add):
        add(
            ZentaoAccount(connection_id=7, id=5, account="dev", realname="Dev One", email="dev@example.com"),
            ZentaoAccount(connection_id=7, id=6, account="gone", deleted=1),
            ZentaoAccount(connection_id=8, id=5, account="elsewhere"),
        )
        result = convert_account(context(dal, "convertAccount"))

        assert result.rows_read == 2
        accounts = {a.id: a for a in dal.all(select(Account))}
        assert accounts["zentao:ZentaoAccount:7:5"].full_name == "Dev One"
        assert accounts["zentao:ZentaoAccount:7:6"].status == 1


class TestLoadScopeConfig:
    def test_uses_given_project(self, dal, seed_zentao_project):
        seeded = seed_zentao_project(dal, project_id=1, entities=["TICKET"])
        # not persisted: the lookup must not re-read the project row
        detached = ZentaoProject(connection_id=7, id=999, name="x", scope_config_id=seeded.scope_config_id)

        config = load_scope_config(context(dal, "convertTask"), detached)

        assert config.id == seeded.scope_config_id
        assert config.entities == ["TICKET"]

    def test_project_without_config(self, dal):
        project = ZentaoProject(connection_id=7, id=1, name="x", scope_config_id=None)
        assert load_scope_config(context(dal, "convertTask"), project) is None
