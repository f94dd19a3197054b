"""SQLAlchemy 2.0 ORM layer for workspine.

Modules
-------
base        WorkspineBase (declarative base) + RawDataOrigin / ToolModel mixins
session     Engine factory, WorkspineSession
"""

from workspine.core.orm.base import RawDataOrigin, ToolModel, WorkspineBase
from workspine.core.orm.session import (
    WorkspineSession,
    create_workspine_engine,
)

__all__ = [
    "WorkspineBase",
    "RawDataOrigin",
    "ToolModel",
    "create_workspine_engine",
    "WorkspineSession",
]
