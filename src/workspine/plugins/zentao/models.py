"""Zentao tool tables, as populated by the (external) extraction stage."""

from __future__ import annotations

import datetime

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from workspine.core.orm.base import ToolModel, WorkspineBase
from workspine.framework.scope_config import ScopeConfigModel, ScopeModel


class ZentaoScopeConfig(ScopeConfigModel, WorkspineBase):
    __tablename__ = "_tool_zentao_scope_configs"

    # tool status -> canonical status, overriding the built-in defaults
    story_status_mappings: Mapped[dict | None] = mapped_column(JSON)
    task_status_mappings: Mapped[dict | None] = mapped_column(JSON)


class ZentaoProject(ToolModel, ScopeModel, WorkspineBase):
    """Scope table: one row per selected zentao project."""

    __tablename__ = "_tool_zentao_projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    code: Mapped[str | None] = mapped_column(String(255))
    type: Mapped[str | None] = mapped_column(String(50))
    status: Mapped[str | None] = mapped_column(String(50))
    description: Mapped[str | None] = mapped_column(Text)
    url: Mapped[str | None] = mapped_column(String(255))
    opened_date: Mapped[datetime.datetime | None] = mapped_column(DateTime)


class ZentaoExecution(ToolModel, WorkspineBase):
    __tablename__ = "_tool_zentao_executions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    project: Mapped[int] = mapped_column(Integer, index=True)
    name: Mapped[str | None] = mapped_column(String(255))
    type: Mapped[str | None] = mapped_column(String(50))
    status: Mapped[str | None] = mapped_column(String(50))
    description: Mapped[str | None] = mapped_column(Text)
    url: Mapped[str | None] = mapped_column(String(255))
    opened_date: Mapped[datetime.datetime | None] = mapped_column(DateTime)


class ZentaoStory(ToolModel, WorkspineBase):
    __tablename__ = "_tool_zentao_stories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    project: Mapped[int] = mapped_column(Integer, index=True)
    product: Mapped[int | None] = mapped_column(Integer)
    title: Mapped[str | None] = mapped_column(Text)
    description: Mapped[str | None] = mapped_column(Text)
    type: Mapped[str | None] = mapped_column(String(50))
    category: Mapped[str | None] = mapped_column(String(50))
    status: Mapped[str | None] = mapped_column(String(50))
    stage: Mapped[str | None] = mapped_column(String(50))
    pri: Mapped[int | None] = mapped_column(Integer)
    estimate: Mapped[float | None] = mapped_column()
    opened_by_id: Mapped[int | None] = mapped_column(Integer)
    opened_by_name: Mapped[str | None] = mapped_column(String(255))
    assigned_to_id: Mapped[int | None] = mapped_column(Integer)
    assigned_to_name: Mapped[str | None] = mapped_column(String(255))
    opened_date: Mapped[datetime.datetime | None] = mapped_column(DateTime)
    closed_date: Mapped[datetime.datetime | None] = mapped_column(DateTime)
    last_edited_date: Mapped[datetime.datetime | None] = mapped_column(DateTime)
    url: Mapped[str | None] = mapped_column(String(255))


class ZentaoTask(ToolModel, WorkspineBase):
    __tablename__ = "_tool_zentao_tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    project: Mapped[int] = mapped_column(Integer, index=True)
    execution: Mapped[int | None] = mapped_column(Integer)
    story: Mapped[int | None] = mapped_column(Integer)
    # parent story of the task
    parent: Mapped[int | None] = mapped_column(Integer)
    name: Mapped[str | None] = mapped_column(Text)
    description: Mapped[str | None] = mapped_column(Text)
    type: Mapped[str | None] = mapped_column(String(50))
    mode: Mapped[str | None] = mapped_column(String(50))
    status: Mapped[str | None] = mapped_column(String(50))
    pri: Mapped[int | None] = mapped_column(Integer)
    estimate: Mapped[float | None] = mapped_column()
    opened_by_id: Mapped[int | None] = mapped_column(Integer)
    opened_by_name: Mapped[str | None] = mapped_column(String(255))
    assigned_to_id: Mapped[int | None] = mapped_column(Integer)
    assigned_to_name: Mapped[str | None] = mapped_column(String(255))
    opened_date: Mapped[datetime.datetime | None] = mapped_column(DateTime)
    closed_date: Mapped[datetime.datetime | None] = mapped_column(DateTime)
    last_edited_date: Mapped[datetime.datetime | None] = mapped_column(DateTime)
    url: Mapped[str | None] = mapped_column(String(255))


class ZentaoAccount(ToolModel, WorkspineBase):
    __tablename__ = "_tool_zentao_accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    account: Mapped[str | None] = mapped_column(String(255))
    realname: Mapped[str | None] = mapped_column(String(255))
    email: Mapped[str | None] = mapped_column(String(255))
    avatar: Mapped[str | None] = mapped_column(String(255))
    deleted: Mapped[bool] = mapped_column(Integer, default=0)
