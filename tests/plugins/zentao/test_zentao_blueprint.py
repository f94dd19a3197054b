"""Tests for zentao pipeline planning."""

import pytest

from workspine.core.errors import NotFoundError
from workspine.plugins.zentao import make_pipeline_plan
from workspine.plugins.zentao.tasks import SUBTASK_METAS


def test_ticket_and_cross(dal, seed_zentao_project):
    seed_zentao_project(dal, project_id=42, entities=["TICKET", "CROSS"])
    plan, scopes = make_pipeline_plan(SUBTASK_METAS, 7, [{"id": "42"}], None, dal)

    assert plan[0][0].subtasks == [
        "convertProjects",
        "convertExecutions",
        "convertStory",
        "convertTask",
        "convertAccount",
    ]
    assert plan[0][0].options == {"scopeId": "42", "connectionId": 7}
    assert [s.scope_id() for s in scopes] == ["zentao:ZentaoProject:7:42"]


def test_cross_only_emits_no_scope(dal, seed_zentao_project):
    seed_zentao_project(dal, project_id=42, entities=["CROSS"])
    plan, scopes = make_pipeline_plan(SUBTASK_METAS, 7, [{"id": "42"}], None, dal)

    assert plan[0][0].subtasks == ["convertAccount"]
    assert scopes == []


def test_missing_project(dal):
    with pytest.raises(NotFoundError):
        make_pipeline_plan(SUBTASK_METAS, 7, [{"id": "42"}], None, dal)
