"""Workspine Core -- tool-agnostic primitives shared by the framework and plugins.

Architecture::

    didgen.py          Deterministic domain ID generation
    errors.py          Structured error hierarchy (WorkspineError, NotFoundError ...)
    logging.py         structlog configuration and context binding
    settings.py        pydantic-settings configuration (WORKSPINE_*)
    timestamps.py      UTC helpers, RFC3339 formatting, lead time
    orm/               SQLAlchemy 2.0 declarative base, mixins and sessions
    dal.py             Per-run data-access handle (first / cursor / upsert)
"""

from workspine.core.dal import Dal, session_scope
from workspine.core.didgen import DomainIdGenerator
from workspine.core.errors import (
    BadInputError,
    ConversionCancelledError,
    ErrorCategory,
    ErrorContext,
    NotFoundError,
    PluginNotFoundError,
    StorageError,
    TransformError,
    WorkspineError,
    wrap_error,
)
from workspine.core.logging import LogContext, configure_logging, configure_logging_from_settings, get_logger
from workspine.core.settings import WorkspineSettings, get_settings

__all__ = [
    "Dal",
    "session_scope",
    "DomainIdGenerator",
    "BadInputError",
    "ConversionCancelledError",
    "ErrorCategory",
    "ErrorContext",
    "NotFoundError",
    "PluginNotFoundError",
    "StorageError",
    "TransformError",
    "WorkspineError",
    "wrap_error",
    "LogContext",
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "WorkspineSettings",
    "get_settings",
]
