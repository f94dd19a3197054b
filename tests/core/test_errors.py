"""Tests for workspine.core.errors module."""

import pytest

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


class TestErrorContext:
    def test_empty_context(self):
        ctx = ErrorContext()
        assert ctx.plugin is None
        assert ctx.metadata == {}
        assert ctx.to_dict() == {}

    def test_to_dict_skips_unset_fields(self):
        ctx = ErrorContext(plugin="jira", scope_id="12", metadata={"attempt": 2})
        assert ctx.to_dict() == {"plugin": "jira", "scope_id": "12", "attempt": 2}


class TestWorkspineError:
    def test_defaults(self):
        err = WorkspineError("boom")
        assert err.category == ErrorCategory.INTERNAL
        assert err.retryable is False
        assert str(err) == "boom"

    def test_with_context_is_fluent(self):
        err = NotFoundError("scope not found").with_context(connection_id=7, scope_id="42")
        assert isinstance(err, NotFoundError)
        assert err.context.connection_id == 7
        assert err.context.scope_id == "42"
        assert str(err) == "scope not found (connection_id=7, scope_id=42)"

    def test_with_context_keeps_inner_values(self):
        err = TransformError("bad row").with_context(raw_table="_tool_zentao_tasks")
        err.with_context(raw_table="other", plugin="zentao")
        assert err.context.raw_table == "_tool_zentao_tasks"
        assert err.context.plugin == "zentao"

    def test_unknown_keys_go_to_metadata(self):
        err = WorkspineError("x").with_context(board="b", skipped=None)
        assert err.context.metadata == {"board": "b"}

    def test_cause_is_chained(self):
        cause = ValueError("inner")
        err = StorageError("outer", cause=cause)
        assert err.__cause__ is cause
        assert err.to_dict()["cause"] == "inner"

    def test_to_dict(self):
        err = NotFoundError("missing").with_context(plugin="jira")
        assert err.to_dict() == {
            "error_type": "NotFoundError",
            "message": "missing",
            "category": "NOT_FOUND",
            "retryable": False,
            "context": {"plugin": "jira"},
        }


class TestSubclasses:
    @pytest.mark.parametrize(
        ("cls", "category", "retryable"),
        [
            (NotFoundError, ErrorCategory.NOT_FOUND, False),
            (BadInputError, ErrorCategory.VALIDATION, False),
            (TransformError, ErrorCategory.TRANSFORM, False),
            (StorageError, ErrorCategory.STORAGE, True),
            (ConversionCancelledError, ErrorCategory.CANCELLED, False),
        ],
    )
    def test_categories(self, cls, category, retryable):
        err = cls("x")
        assert isinstance(err, WorkspineError)
        assert err.category == category
        assert err.retryable is retryable

    def test_bad_input_params(self):
        err = BadInputError("invalid", invalid_params={"connection_id": "must be > 0"})
        assert err.to_dict()["invalid_params"] == {"connection_id": "must be > 0"}

    def test_plugin_not_found(self):
        err = PluginNotFoundError("gitlab")
        assert err.name == "gitlab"
        assert err.category == ErrorCategory.CONFIG
        assert "gitlab" in str(err)


class TestWrapError:
    def test_wraps_foreign_exception(self):
        err = wrap_error(RuntimeError("disk full"), "upsert failed", scope_id="1")
        assert isinstance(err, StorageError)
        assert err.message == "upsert failed: disk full"
        assert err.context.scope_id == "1"

    def test_custom_wrapper(self):
        err = wrap_error(KeyError("k"), "convert", wrapper=TransformError)
        assert isinstance(err, TransformError)

    def test_workspine_error_keeps_type(self):
        original = NotFoundError("missing")
        err = wrap_error(original, "ignored", plugin="zentao")
        assert err is original
        assert err.message == "missing"
        assert err.context.plugin == "zentao"
