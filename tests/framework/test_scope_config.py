"""Tests for the scope-config resolver."""

import pytest

from workspine.core.errors import NotFoundError
from workspine.framework.scope_config import ScopeConfigResolver
from workspine.plugins.jira.models import JiraBoard, JiraScopeConfig
from workspine.plugins.zentao.models import ZentaoProject, ZentaoScopeConfig


@pytest.fixture
def jira_resolver():
    return ScopeConfigResolver(JiraBoard, JiraScopeConfig, "board_id")


class TestResolve:
    def test_returns_config_of_scope(self, dal, seed_jira_board, jira_resolver):
        seed_jira_board(dal, board_id=12, entities=["TICKET"])
        config = jira_resolver.resolve(dal, 1, "12")
        assert config.entity_set() == frozenset({"TICKET"})

    def test_picks_the_right_scope(self, dal, seed_jira_board, jira_resolver):
        seed_jira_board(dal, board_id=12, entities=["TICKET"])
        seed_jira_board(dal, board_id=13, entities=["CROSS"])
        assert jira_resolver.resolve(dal, 1, "13").entity_set() == frozenset({"CROSS"})

    def test_scope_of_other_connection_not_visible(self, dal, seed_jira_board, jira_resolver):
        seed_jira_board(dal, connection_id=2, board_id=12)
        with pytest.raises(NotFoundError):
            jira_resolver.resolve(dal, 1, "12")

    def test_missing_scope(self, dal, jira_resolver):
        with pytest.raises(NotFoundError) as exc_info:
            jira_resolver.resolve(dal, 1, "99")
        assert exc_info.value.context.connection_id == 1
        assert exc_info.value.context.scope_id == "99"

    def test_scope_without_config(self, dal, seed_jira_board, jira_resolver):
        seed_jira_board(dal, board_id=12, with_config=False)
        with pytest.raises(NotFoundError, match="scope config not found"):
            jira_resolver.resolve(dal, 1, "12")

    def test_dangling_config_reference(self, dal, add, jira_resolver):
        add(JiraBoard(connection_id=1, board_id=12, scope_config_id=404))
        with pytest.raises(NotFoundError):
            jira_resolver.resolve(dal, 1, "12")

    def test_shared_config(self, dal, add):
        config = ZentaoScopeConfig(connection_id=7, name="shared", entities=["TICKET"])
        add(config)
        add(
            ZentaoProject(connection_id=7, id=1, scope_config_id=config.id),
            ZentaoProject(connection_id=7, id=2, scope_config_id=config.id),
        )
        resolver = ScopeConfigResolver(ZentaoProject, ZentaoScopeConfig, "id")
        assert resolver.resolve(dal, 7, "1").id == resolver.resolve(dal, 7, "2").id


class TestScopeIdValue:
    def test_int_column(self, jira_resolver):
        assert jira_resolver.scope_id_value("12") == 12

    def test_non_numeric_left_alone(self, jira_resolver):
        assert jira_resolver.scope_id_value("abc") == "abc"
