"""Tests for the sequential TaskRunner."""

from datetime import datetime, timedelta

from sqlalchemy import func, select

from workspine.core.errors import BadInputError, NotFoundError, PluginNotFoundError
from workspine.domain.crossdomain import Account
from workspine.domain.ticket import Board, Issue
from workspine.framework.plan import PipelineTask
from workspine.framework.runner import TaskRunner
from workspine.plugins.zentao.models import ZentaoAccount, ZentaoTask


def count(dal, model) -> int:
    return dal.session.scalar(select(func.count()).select_from(model))


OPTIONS = {"connectionId": 7, "scopeId": "42"}


class TestTaskRunner:
    def test_runs_subtasks_in_order(self, engine, dal, add, seed_zentao_project):
        seed_zentao_project(dal, project_id=42)
        opened = datetime(2024, 1, 1, 9, 0)
        add(
            ZentaoTask(connection_id=7, id=1, project=42, execution=3, status="wait", opened_date=opened),
            ZentaoTask(connection_id=7, id=2, project=42, status="done", opened_date=opened,
                       closed_date=opened + timedelta(hours=1)),
            ZentaoAccount(connection_id=7, id=5, account="dev"),
        )

        task = PipelineTask("zentao", ["convertProjects", "convertTask", "convertAccount"], OPTIONS)
        result = TaskRunner(engine).run(task)

        assert result.succeeded
        assert result.completed_subtasks == ["convertProjects", "convertTask", "convertAccount"]
        assert result.results["convertTask"].rows_read == 2
        assert count(dal, Board) == 1
        assert count(dal, Issue) == 2
        assert count(dal, Account) == 1

    def test_stops_at_first_failure(self, engine, dal, seed_zentao_project):
        seed_zentao_project(dal, project_id=42)
        task = PipelineTask("zentao", ["convertProjects", "noSuchSubtask", "convertAccount"], OPTIONS)

        result = TaskRunner(engine).run(task)

        assert not result.succeeded
        assert result.completed_subtasks == ["convertProjects"]
        assert isinstance(result.error, PluginNotFoundError)
        assert result.error.context.subtask == "noSuchSubtask"
        assert count(dal, Board) == 1

    def test_missing_project_reported(self, engine):
        result = TaskRunner(engine).run(PipelineTask("zentao", ["convertTask"], OPTIONS))
        assert isinstance(result.error, NotFoundError)
        assert result.error.context.plugin == "zentao"
        assert result.error.context.connection_id == 7

    def test_invalid_options_rejected(self, engine):
        result = TaskRunner(engine).run(PipelineTask("zentao", ["convertTask"], {"scopeId": "42"}))
        assert isinstance(result.error, BadInputError)
        assert result.completed_subtasks == []

    def test_unknown_plugin(self, engine):
        result = TaskRunner(engine).run(PipelineTask("gitlab", ["convertRepo"], OPTIONS))
        assert isinstance(result.error, PluginNotFoundError)
