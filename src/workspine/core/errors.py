"""
Structured error types for workspine.

Every failure raised by the conversion and planning core is a
``WorkspineError``.  Errors carry a category, a retry hint and an
``ErrorContext`` naming the plugin, connection, scope and row involved so
that an external scheduler can log, route or retry them without parsing
messages.

Manifesto:
    - **Typed taxonomy:** NotFound, BadInput, Transform and Storage are
      distinct classes, not message conventions
    - **Context travels with the error:** ``with_context()`` adds the
      connection / scope / row as the error propagates upward
    - **No hidden retries:** ``retryable`` is a hint for the caller only
    - **Chaining:** the underlying exception is kept as ``cause``

Architecture:
    ::

        WorkspineError (category, retryable, context, cause)
        ├── NotFoundError            missing scope / config / record
        ├── BadInputError            malformed planning request
        ├── TransformError           a row failed semantic conversion
        ├── StorageError             read/write failure on any table
        ├── ConversionCancelledError converter asked to stop
        └── PluginNotFoundError      unknown plugin or subtask name

Examples:
    >>> err = NotFoundError("scope not found").with_context(connection_id=7, scope_id="42")
    >>> err.context.scope_id
    '42'
    >>> err.to_dict()["category"]
    'NOT_FOUND'

Tags:
    error-handling, exception-hierarchy, error-context, workspine
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    NOT_FOUND = "NOT_FOUND"
    VALIDATION = "VALIDATION"
    TRANSFORM = "TRANSFORM"
    STORAGE = "STORAGE"
    CANCELLED = "CANCELLED"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        plugin: Tool plugin name (``"jira"``, ``"zentao"``)
        subtask: Subtask being executed
        connection_id: Credentialed connection the work belongs to
        scope_id: Scope (board/project) being planned or converted
        raw_table: Raw/tool table the failing row came from
        row_id: Tool-local identity of the failing row
        metadata: Additional key-value pairs
    """

    plugin: str | None = None
    subtask: str | None = None
    connection_id: int | None = None
    scope_id: str | None = None
    raw_table: str | None = None
    row_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["plugin", "subtask", "connection_id", "scope_id", "raw_table", "row_id"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class WorkspineError(Exception):
    """
    Base exception for all workspine errors.

    Subclasses set ``default_category`` and ``default_retryable``; callers
    may override either per instance.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> WorkspineError:
        """
        Add context to this error (fluent API).

        Fields already set are kept, so the innermost (most precise) context
        wins when an error is re-wrapped on its way up.

        Usage:
            raise NotFoundError("no such board").with_context(
                connection_id=1, scope_id="12"
            )
        """
        for key, value in kwargs.items():
            if value is None:
                continue
            if hasattr(self.context, key) and key != "metadata":
                if getattr(self.context, key) is None:
                    setattr(self.context, key, value)
            else:
                self.context.metadata.setdefault(key, value)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __str__(self) -> str:
        context_dict = self.context.to_dict()
        if not context_dict:
            return self.message
        details = ", ".join(f"{k}={v}" for k, v in context_dict.items())
        return f"{self.message} ({details})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


class NotFoundError(WorkspineError):
    """A scope, scope config or top-level record does not exist."""

    default_category = ErrorCategory.NOT_FOUND


class BadInputError(WorkspineError):
    """Malformed request parameters, rejected before any storage access."""

    default_category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        invalid_params: dict[str, str] | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.invalid_params = invalid_params or {}

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.invalid_params:
            result["invalid_params"] = self.invalid_params
        return result


class TransformError(WorkspineError):
    """A raw row failed semantic conversion into domain entities."""

    default_category = ErrorCategory.TRANSFORM


class StorageError(WorkspineError):
    """Read or write failure against raw, scope or domain tables."""

    default_category = ErrorCategory.STORAGE
    default_retryable = True


class ConversionCancelledError(WorkspineError):
    """The converter was asked to stop before the cursor was exhausted."""

    default_category = ErrorCategory.CANCELLED


class PluginNotFoundError(WorkspineError):
    """Unknown plugin or subtask name."""

    default_category = ErrorCategory.CONFIG

    def __init__(self, name: str, message: str | None = None):
        self.name = name
        super().__init__(message or f"Plugin not found: {name}")


def wrap_error(
    error: Exception,
    message: str,
    wrapper: type[WorkspineError] = StorageError,
    **context: Any,
) -> WorkspineError:
    """
    Wrap *error* with operation context.

    ``WorkspineError`` instances keep their own type and message and only
    gain context; anything else is wrapped in *wrapper* with *error* as cause.
    """
    if isinstance(error, WorkspineError):
        return error.with_context(**context)
    return wrapper(f"{message}: {error}", cause=error).with_context(**context)


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "WorkspineError",
    "NotFoundError",
    "BadInputError",
    "TransformError",
    "StorageError",
    "ConversionCancelledError",
    "PluginNotFoundError",
    "wrap_error",
]
