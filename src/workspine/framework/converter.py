"""
Streaming conversion of tool rows into canonical domain entities.

Manifesto:
    Tool tables can be larger than memory.  The converter pulls one row at
    a time from a streamed cursor, hands it to a typed transform, and
    upserts the resulting domain entities in batches keyed by their
    primary key.  Re-running over unchanged rows converges to the same
    state; re-running over changed rows overwrites stale derived rows.

Architecture:
    ::

        Dal.cursor(select(ToolModel) ...)        one page in memory
              │ row
              ▼
        convert(row) → [Issue, IssueAssignee, BoardIssue, ...]
              │ row unit (never split)
              ▼
        buffer ──(≥ batch_size)──► Dal.upsert_all()   grouped per table
              │                first write per table: Dal.delete_by_origin()
              │
        end of cursor ─► flush ─► commit
        any error      ─► rollback, cursor closed, error raised

Guardrails:
    - Fail-fast: the first transform error aborts the conversion
    - The cursor is closed on success, error and cancellation
    - ``stop_event`` is checked between rows
    - Rows previously derived from the same ``(raw_table, raw_params)`` are
      deleted in the same transaction before a table is first written

Tags:
    converter, streaming, upsert, idempotency, workspine
"""

from __future__ import annotations

import json
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from sqlalchemy import Select, inspect
from sqlalchemy.exc import NoInspectionAvailable

from workspine.core.dal import Dal
from workspine.core.errors import (
    ConversionCancelledError,
    TransformError,
    WorkspineError,
    wrap_error,
)
from workspine.core.logging import get_logger
from workspine.core.orm.base import RawDataOrigin
from workspine.core.timestamps import utc_now

logger = get_logger(__name__)

DEFAULT_BATCH_SIZE = 500

Transform = Callable[[Any], Iterable[Any]]


class ConversionStatus(str, Enum):
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class ConversionResult:
    """Outcome of one ``DataConverter.execute()`` call."""

    status: ConversionStatus
    started_at: datetime
    completed_at: datetime | None = None
    rows_read: int = 0
    entities_written: int = 0
    batches: int = 0
    tables: dict[str, int] = field(default_factory=dict)

    @property
    def duration_seconds(self) -> float | None:
        if self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds()


def _row_identity(row: Any) -> str:
    """Primary-key values of a mapped tool row, for diagnostics."""
    try:
        identity = inspect(row).identity
    except NoInspectionAvailable:
        return repr(row)
    if identity is None:
        return repr(row)
    return ":".join(str(part) for part in identity)


class DataConverter:
    """
    Convert every row selected by *input* with *convert* and persist the output.

    Args:
        dal: Storage handle owned by this run
        input: Select statement over a tool table
        convert: Typed transform; returns the domain entities for one row
        raw_table: Tool table name recorded as provenance
        raw_params: Task parameters recorded as provenance (JSON-encoded)
        batch_size: Buffered entity count that triggers an upsert flush
        page_size: Rows fetched per cursor page
        stop_event: Checked before each row; when set the run is cancelled
        name: Converter name used in logs and errors
    """

    def __init__(
        self,
        dal: Dal,
        input: Select,
        convert: Transform,
        *,
        raw_table: str | None = None,
        raw_params: dict[str, Any] | None = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        page_size: int = 1000,
        stop_event: threading.Event | None = None,
        name: str = "converter",
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self.dal = dal
        self.input = input
        self.convert = convert
        self.raw_table = raw_table
        self.raw_params = json.dumps(raw_params, sort_keys=True, default=str) if raw_params else None
        self.batch_size = batch_size
        self.page_size = page_size
        self.stop_event = stop_event
        self.name = name
        self._buffer: list[Any] = []
        self._cleared: set[type] = set()

    def execute(self) -> ConversionResult:
        """Run the conversion to completion; raise on the first failure."""
        result = ConversionResult(status=ConversionStatus.COMPLETED, started_at=utc_now())
        self._buffer = []
        self._cleared = set()
        logger.debug("converter.start", converter=self.name, raw_table=self.raw_table)

        try:
            with self.dal.cursor(self.input, page_size=self.page_size) as rows:
                for row in rows:
                    if self.stop_event is not None and self.stop_event.is_set():
                        raise ConversionCancelledError(f"{self.name} cancelled").with_context(
                            raw_table=self.raw_table
                        )
                    result.rows_read += 1
                    self._buffer.extend(self._convert_row(row))
                    if len(self._buffer) >= self.batch_size:
                        self._flush(result)
            self._flush(result)
            self.dal.commit()
        except WorkspineError as e:
            self._abort(result, e)
            raise
        except Exception as e:
            self._abort(result, e)
            raise wrap_error(e, f"{self.name} failed", raw_table=self.raw_table) from e

        result.completed_at = utc_now()
        logger.info(
            "converter.completed",
            converter=self.name,
            rows_read=result.rows_read,
            entities_written=result.entities_written,
            batches=result.batches,
            duration_ms=round(result.duration_seconds * 1000, 2),
        )
        return result

    def _convert_row(self, row: Any) -> list[Any]:
        try:
            entities = list(self.convert(row) or ())
        except Exception as e:
            raise TransformError(f"{self.name} failed to convert row: {e}", cause=e).with_context(
                raw_table=self.raw_table, row_id=_row_identity(row)
            ) from e
        raw_id = _row_identity(row)
        for entity in entities:
            if isinstance(entity, RawDataOrigin):
                entity.raw_data_table = self.raw_table
                entity.raw_data_params = self.raw_params
                entity.raw_data_id = raw_id
        return entities

    def _flush(self, result: ConversionResult) -> None:
        if not self._buffer:
            return
        self._clear_stale(self._buffer)
        counts = self.dal.upsert_all(self._buffer)
        written = len(self._buffer)
        self._buffer = []
        result.batches += 1
        result.entities_written += written
        for table, count in counts.items():
            result.tables[table] = result.tables.get(table, 0) + count
        logger.debug("converter.batch_saved", converter=self.name, entities=written, tables=counts)

    def _clear_stale(self, entities: list[Any]) -> None:
        """Drop rows of this raw source from each domain table before its first write."""
        if self.raw_table is None:
            return
        for model in dict.fromkeys(type(e) for e in entities):
            if model in self._cleared or not issubclass(model, RawDataOrigin):
                continue
            self._cleared.add(model)
            deleted = self.dal.delete_by_origin(model, self.raw_table, self.raw_params)
            logger.debug("converter.cleared", converter=self.name, table=model.__tablename__, rows=deleted)

    def _abort(self, result: ConversionResult, error: Exception) -> None:
        self._buffer = []
        self.dal.rollback()
        result.completed_at = utc_now()
        result.status = (
            ConversionStatus.CANCELLED
            if isinstance(error, ConversionCancelledError)
            else ConversionStatus.FAILED
        )
        logger.error(
            "converter.aborted",
            converter=self.name,
            status=result.status.value,
            rows_read=result.rows_read,
            error=str(error),
            error_type=type(error).__name__,
        )


__all__ = [
    "ConversionResult",
    "ConversionStatus",
    "DataConverter",
    "DEFAULT_BATCH_SIZE",
    "Transform",
]
