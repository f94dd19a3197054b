"""Data-access handle passed explicitly to planners and convertors.

Manifesto:
    Planning and conversion never reach for a global database handle.  A
    ``Dal`` wraps one SQLAlchemy ``Session`` and lives for exactly one
    plan-build call or one conversion run, so concurrent invocations never
    share a cursor or a transaction.

Architecture::

    ┌────────────────────────────────────────────────────────────────┐
    │                              Dal                               │
    │                                                                │
    │   first(stmt)          → one ORM row, NotFoundError if none    │
    │   all(stmt)            → list of ORM rows                      │
    │   cursor(stmt)         → streamed iterator, closed on exit     │
    │   upsert_all(entities) → INSERT .. ON CONFLICT DO UPDATE       │
    │   delete_by_origin()   → drop rows derived from a raw source   │
    │   commit() / rollback()                                        │
    └────────────────────────────────────────────────────────────────┘

Every SQLAlchemy failure surfaces as :class:`~workspine.core.errors.StorageError`.

Tags:
    storage, dal, upsert, cursor, workspine
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import Select, delete, inspect
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from workspine.core.errors import NotFoundError, StorageError
from workspine.core.logging import get_logger
from workspine.core.orm.session import WorkspineSession

logger = get_logger(__name__)

_ON_CONFLICT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def entity_to_row(entity: Any) -> dict[str, Any]:
    """Column values of a mapped instance, keyed by column name."""
    mapper = inspect(type(entity))
    return {attr.columns[0].name: getattr(entity, attr.key) for attr in mapper.column_attrs}


class Dal:
    """Storage handle scoped to one plan-build or one conversion run."""

    def __init__(self, session: Session) -> None:
        self.session = session

    # -- reads ---------------------------------------------------------------

    def first(self, stmt: Select, not_found: str = "record not found") -> Any:
        """Return the first ORM row of *stmt* or raise ``NotFoundError``."""
        try:
            row = self.session.scalars(stmt.limit(1)).first()
        except SQLAlchemyError as e:
            raise StorageError(f"query failed: {not_found}", cause=e) from e
        if row is None:
            raise NotFoundError(not_found)
        return row

    def all(self, stmt: Select) -> list[Any]:
        """Return every ORM row of *stmt*."""
        try:
            return list(self.session.scalars(stmt).all())
        except SQLAlchemyError as e:
            raise StorageError("query failed", cause=e) from e

    @contextmanager
    def cursor(self, stmt: Select, page_size: int = 1000) -> Iterator[Iterator[Any]]:
        """Stream the ORM rows of *stmt* page by page.

        The underlying result is closed when the ``with`` block exits,
        whether by exhaustion, exception or early return.

        Usage:
            with dal.cursor(select(ZentaoTask)) as rows:
                for task in rows:
                    ...
        """
        try:
            result = self.session.execute(stmt, execution_options={"yield_per": page_size})
        except SQLAlchemyError as e:
            raise StorageError("failed to open cursor", cause=e) from e
        try:
            yield self._iterate(result.scalars())
        finally:
            result.close()
            logger.debug("dal.cursor_closed")

    @staticmethod
    def _iterate(rows: Iterable[Any]) -> Iterator[Any]:
        try:
            yield from rows
        except SQLAlchemyError as e:
            raise StorageError("failed to read next row", cause=e) from e

    # -- writes --------------------------------------------------------------

    def upsert_all(self, entities: Iterable[Any]) -> dict[str, int]:
        """Insert-or-replace *entities* keyed by their primary key.

        Entities are grouped per table; rows with the same key within one call
        collapse to the last one.  Returns written row counts per table.
        """
        grouped: dict[type, dict[tuple, dict[str, Any]]] = defaultdict(dict)
        for entity in entities:
            model = type(entity)
            row = entity_to_row(entity)
            key = tuple(row[c.name] for c in model.__table__.primary_key.columns)
            grouped[model][key] = row

        counts: dict[str, int] = {}
        try:
            for model, rows_by_key in grouped.items():
                rows = list(rows_by_key.values())
                self._upsert_rows(model, rows)
                counts[model.__tablename__] = len(rows)
        except SQLAlchemyError as e:
            raise StorageError("failed to upsert domain entities", cause=e) from e
        return counts

    def delete_by_origin(self, model: type, raw_table: str, raw_params: str | None) -> int:
        """Delete the rows of *model* previously derived from ``(raw_table, raw_params)``."""
        params = model.raw_data_params
        stmt = delete(model).where(
            model.raw_data_table == raw_table,
            params.is_(None) if raw_params is None else params == raw_params,
        )
        try:
            return self.session.execute(stmt).rowcount
        except SQLAlchemyError as e:
            raise StorageError(f"failed to clear {model.__tablename__}", cause=e) from e

    def _upsert_rows(self, model: type, rows: list[dict[str, Any]]) -> None:
        table = model.__table__
        insert = _ON_CONFLICT_DIALECTS.get(self.session.get_bind().dialect.name)
        if insert is None:
            for row in rows:
                self.session.merge(model(**{self._attr_key(model, k): v for k, v in row.items()}))
            self.session.flush()
            return

        pk_names = [c.name for c in table.primary_key.columns]
        stmt = insert(table).values(rows)
        updates = {name: stmt.excluded[name] for name in rows[0] if name not in pk_names}
        if updates:
            stmt = stmt.on_conflict_do_update(index_elements=pk_names, set_=updates)
        else:
            stmt = stmt.on_conflict_do_nothing(index_elements=pk_names)
        self.session.execute(stmt)

    @staticmethod
    def _attr_key(model: type, column_name: str) -> str:
        for attr in inspect(model).column_attrs:
            if attr.columns[0].name == column_name:
                return attr.key
        return column_name

    # -- transaction ---------------------------------------------------------

    def commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            raise StorageError("commit failed", cause=e) from e

    def rollback(self) -> None:
        self.session.rollback()


@contextmanager
def session_scope(engine: Engine) -> Iterator[Dal]:
    """Yield a ``Dal`` on a fresh session; roll back on error, always close."""
    session = WorkspineSession(bind=engine)
    dal = Dal(session)
    try:
        yield dal
    except BaseException:
        session.rollback()
        raise
    finally:
        session.close()


__all__ = ["Dal", "entity_to_row", "session_scope"]
