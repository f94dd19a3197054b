"""
Shared pytest fixtures for workspine tests.

This module provides:
- A file-backed SQLite engine with every tool and domain table created
- A ``Dal`` bound to that engine
- Settings cache isolation
- Seed helpers for zentao and jira tool rows

Usage:
    def test_something(dal, seed_zentao_project):
        seed_zentao_project(dal, entities=["TICKET"])
"""

import sys
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

# Ensure workspine package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy.engine import Engine

from workspine.core.dal import Dal, session_scope
from workspine.core.orm import WorkspineBase, create_workspine_engine
from workspine.core.settings import get_settings
from workspine.domain import crossdomain, ticket  # noqa: F401  (register domain tables)
from workspine.plugins.jira.models import JiraBoard, JiraScopeConfig
from workspine.plugins.zentao.models import ZentaoProject, ZentaoScopeConfig


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest.fixture
def engine(tmp_path: Path) -> Generator[Engine, None, None]:
    """SQLite engine on a temp file with all tables created."""
    eng = create_workspine_engine(f"sqlite:///{tmp_path / 'workspine.db'}")
    WorkspineBase.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def dal(engine: Engine) -> Generator[Dal, None, None]:
    """Dal on a fresh session, closed after the test."""
    with session_scope(engine) as d:
        yield d


@pytest.fixture(autouse=True)
def clean_settings_cache() -> Generator[None, None, None]:
    """Settings are cached per process; reset them around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Seed Helpers
# =============================================================================


def add_rows(dal: Dal, *rows: Any) -> None:
    dal.session.add_all(rows)
    dal.commit()


@pytest.fixture
def add(dal: Dal) -> Callable[..., None]:
    """Insert tool rows through the test's ``Dal`` and commit."""

    def _add(*rows: Any) -> None:
        add_rows(dal, *rows)

    return _add


@pytest.fixture
def seed_zentao_project() -> Callable[..., ZentaoProject]:
    """
    Insert a zentao project and (optionally) its scope config.

        seed_zentao_project(dal, project_id=42, entities=["TICKET"])
    """

    def _seed(
        dal: Dal,
        *,
        connection_id: int = 7,
        project_id: int = 42,
        name: str = "Apollo",
        entities: list[str] | None = None,
        with_config: bool = True,
        **config_fields: Any,
    ) -> ZentaoProject:
        config_id = None
        if with_config:
            config = ZentaoScopeConfig(
                connection_id=connection_id,
                name=f"config-{project_id}",
                entities=entities if entities is not None else ["TICKET", "CROSS"],
                **config_fields,
            )
            add_rows(dal, config)
            config_id = config.id
        project = ZentaoProject(
            connection_id=connection_id,
            id=project_id,
            name=name,
            scope_config_id=config_id,
        )
        add_rows(dal, project)
        return project

    return _seed


@pytest.fixture
def seed_jira_board() -> Callable[..., JiraBoard]:
    """
    Insert a jira board and (optionally) its scope config.

        seed_jira_board(dal, board_id=12, entities=["TICKET"])
    """

    def _seed(
        dal: Dal,
        *,
        connection_id: int = 1,
        board_id: int = 12,
        name: str = "Platform",
        entities: list[str] | None = None,
        with_config: bool = True,
        **config_fields: Any,
    ) -> JiraBoard:
        config_id = None
        if with_config:
            config = JiraScopeConfig(
                connection_id=connection_id,
                name=f"config-{board_id}",
                entities=entities if entities is not None else ["TICKET", "CROSS"],
                **config_fields,
            )
            add_rows(dal, config)
            config_id = config.id
        board = JiraBoard(
            connection_id=connection_id,
            board_id=board_id,
            name=name,
            scope_config_id=config_id,
        )
        add_rows(dal, board)
        return board

    return _seed
