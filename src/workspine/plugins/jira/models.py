"""Jira tool tables, as populated by the (external) extraction stage."""

from __future__ import annotations

import datetime

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from workspine.core.orm.base import ToolModel, WorkspineBase
from workspine.framework.scope_config import ScopeConfigModel, ScopeModel


class JiraScopeConfig(ScopeConfigModel, WorkspineBase):
    __tablename__ = "_tool_jira_scope_configs"

    # jira issue type name -> canonical issue type
    type_mappings: Mapped[dict | None] = mapped_column(JSON)


class JiraBoard(ToolModel, ScopeModel, WorkspineBase):
    """Scope table: one row per selected jira board."""

    __tablename__ = "_tool_jira_boards"

    board_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    project_id: Mapped[int | None] = mapped_column(Integer)
    url: Mapped[str | None] = mapped_column("self", String(255))
    type: Mapped[str | None] = mapped_column(String(100))


class JiraIssue(ToolModel, WorkspineBase):
    __tablename__ = "_tool_jira_issues"

    issue_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    project_id: Mapped[int | None] = mapped_column(Integer)
    project_name: Mapped[str | None] = mapped_column(String(255))
    url: Mapped[str | None] = mapped_column("self", String(255))
    issue_key: Mapped[str | None] = mapped_column(String(255))
    summary: Mapped[str | None] = mapped_column(Text)
    description: Mapped[str | None] = mapped_column(Text)
    type: Mapped[str | None] = mapped_column(String(255))
    status_name: Mapped[str | None] = mapped_column(String(255))
    # status category key: new, indeterminate or done
    status_key: Mapped[str | None] = mapped_column(String(255))
    story_point: Mapped[float | None] = mapped_column()
    priority_name: Mapped[str | None] = mapped_column(String(255))
    parent_id: Mapped[int | None] = mapped_column(Integer)
    epic_key: Mapped[str | None] = mapped_column(String(255))
    creator_account_id: Mapped[str | None] = mapped_column(String(255))
    creator_display_name: Mapped[str | None] = mapped_column(String(255))
    assignee_account_id: Mapped[str | None] = mapped_column(String(255))
    assignee_display_name: Mapped[str | None] = mapped_column(String(255))
    resolution_date: Mapped[datetime.datetime | None] = mapped_column(DateTime)
    created: Mapped[datetime.datetime | None] = mapped_column(DateTime)
    updated: Mapped[datetime.datetime | None] = mapped_column(DateTime)


class JiraBoardIssue(ToolModel, WorkspineBase):
    __tablename__ = "_tool_jira_board_issues"

    board_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    issue_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)


class JiraAccount(ToolModel, WorkspineBase):
    __tablename__ = "_tool_jira_accounts"

    account_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    account_type: Mapped[str | None] = mapped_column(String(255))
    name: Mapped[str | None] = mapped_column(String(255))
    email: Mapped[str | None] = mapped_column(String(255))
    avatar_url: Mapped[str | None] = mapped_column(String(255))
    timezone: Mapped[str | None] = mapped_column(String(255))
