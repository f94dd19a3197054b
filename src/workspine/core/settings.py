"""Centralized settings for workspine.

All fields can be set through ``WORKSPINE_*`` environment variables
(e.g. ``WORKSPINE_DATABASE_URL=postgresql://...``) or a ``.env`` file.

Tags:
    workspine, configuration, settings, pydantic
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WorkspineSettings(BaseSettings):
    """Workspine configuration.

    Fields
    ──────
    database_url          : SQLAlchemy URL of the store holding tool and domain tables
    log_level             : Structlog log level
    log_format            : ``json`` or ``console``
    converter_batch_size  : Domain entities buffered before an upsert flush
    cursor_page_size      : Rows fetched per page by streamed cursors
    """

    model_config = SettingsConfigDict(
        env_prefix="WORKSPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Storage ──────────────────────────────────────────────────
    database_url: str = Field(default="sqlite:///data/workspine.db")

    # ── Observability ────────────────────────────────────────────
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "console"] = "console"

    # ── Conversion ───────────────────────────────────────────────
    converter_batch_size: int = Field(default=500, gt=0)
    cursor_page_size: int = Field(default=1000, gt=0)


@lru_cache(maxsize=1)
def get_settings() -> WorkspineSettings:
    """Return the process-wide settings (cached; call ``cache_clear()`` in tests)."""
    return WorkspineSettings()
