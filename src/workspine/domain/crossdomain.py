"""Canonical cross-domain tables shared by every tool."""

from __future__ import annotations

import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from workspine.core.orm.base import RawDataOrigin, WorkspineBase


class Account(RawDataOrigin, WorkspineBase):
    """A person as known to one tool connection."""

    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    user_name: Mapped[str | None] = mapped_column(String(255))
    full_name: Mapped[str | None] = mapped_column(String(255))
    email: Mapped[str | None] = mapped_column(String(255))
    avatar_url: Mapped[str | None] = mapped_column(String(255))
    status: Mapped[int | None] = mapped_column()
    created_date: Mapped[datetime.datetime | None] = mapped_column(DateTime)
