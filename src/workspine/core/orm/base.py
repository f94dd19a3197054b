"""Declarative base and mixins for all workspine ORM models.

Uses SQLAlchemy 2.0 ``DeclarativeBase`` with a ``type_annotation_map``
that maps Python built-in types to portable SA column types.

Mixins
------
* **RawDataOrigin**: provenance columns stamped on every domain entity by
  the data converter (which tool table and which request params the row was
  derived from).
* **ToolModel**: ``connection_id`` column shared by every tool table.
"""

from __future__ import annotations

import datetime

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class WorkspineBase(DeclarativeBase):
    """Shared declarative base for every workspine table.

    * ``str``   → ``Text``
    * ``int``   → ``Integer``
    * ``bool``  → ``Integer``  (SQLite has no native BOOLEAN)
    * ``datetime.datetime`` → ``DateTime``
    * ``dict``  → ``JSON``
    * ``list``  → ``JSON``
    """

    type_annotation_map = {
        str: Text,
        int: Integer,
        bool: Integer,
        datetime.datetime: DateTime,
        dict: JSON,
        list: JSON,
    }


class RawDataOrigin:
    """Provenance of a converted domain row."""

    raw_data_table: Mapped[str | None] = mapped_column(String(255), nullable=True)
    raw_data_params: Mapped[str | None] = mapped_column(String(255), nullable=True)
    raw_data_id: Mapped[str | None] = mapped_column(String(255), nullable=True)


class ToolModel:
    """Columns shared by every ``_tool_*`` table."""

    connection_id: Mapped[int] = mapped_column(Integer, primary_key=True)
