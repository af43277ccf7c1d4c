"""Generic table access for trivia content.

The promotion pipeline only depends on the narrow ``ContentStore`` protocol:
equality-filtered reads, single-row fetch, insert, update and delete keyed by
concrete table name. ``SqlContentStore`` implements it on a SQLAlchemy
session using the declarative metadata, so the same code path serves both the
staging and the production tables.
"""

import uuid
from dataclasses import dataclass
from typing import Any, Protocol

from pydantic import ValidationError
from sqlalchemy import MetaData, Table, delete, func, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from trivia.core.environment import TableNames
from trivia.core.logging import get_logger
from trivia.db.base import Base
from trivia.schemas.content import CategoryRecord, QuestionRecord

logger = get_logger(__name__)

Row = dict[str, Any]


class StoreError(Exception):
    """An underlying store operation failed; ``detail`` is the store's message."""

    def __init__(self, detail: str, table: str | None = None):
        self.detail = detail
        self.table = table
        super().__init__(detail)


class MalformedRowError(StoreError):
    """A stored row could not be parsed into its record type."""


class ContentStore(Protocol):
    """Tabular read/write interface keyed by table name."""

    def fetch_one(self, table: str, **filters: Any) -> Row | None: ...

    def fetch_all(
        self,
        table: str,
        *,
        order_by: str | None = None,
        descending: bool = False,
        **filters: Any,
    ) -> list[Row]: ...

    def count(self, table: str, **filters: Any) -> int: ...

    def insert(self, table: str, values: Row) -> Row: ...

    def update(self, table: str, values: Row, **filters: Any) -> int: ...

    def delete(self, table: str, **filters: Any) -> int: ...


class SqlContentStore:
    """``ContentStore`` backed by a SQLAlchemy session. Writes commit immediately."""

    def __init__(self, db: Session, metadata: MetaData | None = None):
        self.db = db
        self.metadata = metadata if metadata is not None else Base.metadata

    def _table(self, name: str) -> Table:
        table = self.metadata.tables.get(name)
        if table is None:
            raise StoreError(f"Unknown table '{name}'", table=name)
        return table

    def _where(self, table: Table, filters: dict[str, Any]) -> list:
        clauses = []
        for column, value in filters.items():
            if column not in table.c:
                raise StoreError(f"Unknown column '{column}' on '{table.name}'", table=table.name)
            col = table.c[column]
            clauses.append(col.is_(None) if value is None else col == value)
        return clauses

    def _fail(self, table: Table, operation: str, exc: SQLAlchemyError) -> StoreError:
        self.db.rollback()
        detail = str(getattr(exc, "orig", None) or exc)
        logger.warning(
            "content store operation failed",
            extra={
                "event": "store_error",
                "table": table.name,
                "operation": operation,
                "error": detail,
            },
        )
        return StoreError(detail, table=table.name)

    def fetch_one(self, table: str, **filters: Any) -> Row | None:
        t = self._table(table)
        stmt = select(t).where(*self._where(t, filters)).limit(1)
        try:
            row = self.db.execute(stmt).mappings().first()
        except SQLAlchemyError as e:
            raise self._fail(t, "fetch_one", e) from e
        return dict(row) if row is not None else None

    def fetch_all(
        self,
        table: str,
        *,
        order_by: str | None = None,
        descending: bool = False,
        **filters: Any,
    ) -> list[Row]:
        t = self._table(table)
        stmt = select(t).where(*self._where(t, filters))
        if order_by is not None:
            if order_by not in t.c:
                raise StoreError(f"Unknown column '{order_by}' on '{t.name}'", table=t.name)
            column = t.c[order_by]
            stmt = stmt.order_by(column.desc() if descending else column.asc())
        try:
            rows = self.db.execute(stmt).mappings().all()
        except SQLAlchemyError as e:
            raise self._fail(t, "fetch_all", e) from e
        return [dict(row) for row in rows]

    def count(self, table: str, **filters: Any) -> int:
        t = self._table(table)
        stmt = select(func.count()).select_from(t).where(*self._where(t, filters))
        try:
            return int(self.db.execute(stmt).scalar_one())
        except SQLAlchemyError as e:
            raise self._fail(t, "count", e) from e

    def insert(self, table: str, values: Row) -> Row:
        t = self._table(table)
        values = dict(values)
        values.setdefault("id", uuid.uuid4())
        try:
            self.db.execute(insert(t).values(**values))
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail(t, "insert", e) from e
        row = self.fetch_one(table, id=values["id"])
        if row is None:
            raise StoreError(f"Inserted row {values['id']} not readable", table=table)
        return row

    def update(self, table: str, values: Row, **filters: Any) -> int:
        t = self._table(table)
        stmt = update(t).where(*self._where(t, filters)).values(**values)
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail(t, "update", e) from e
        return result.rowcount

    def delete(self, table: str, **filters: Any) -> int:
        t = self._table(table)
        stmt = delete(t).where(*self._where(t, filters))
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail(t, "delete", e) from e
        return result.rowcount


# ============================================================================
# Cross-environment identity
# ============================================================================
#
# Ids are generated per table and mean nothing in another environment. A
# staging category is matched to production by exact name, a staging question
# by exact text. Renaming a staging category therefore orphans its questions
# from their production category until the names agree again.


@dataclass(frozen=True)
class CategoryKey:
    """Category identity across environments: the exact name."""

    name: str


@dataclass(frozen=True)
class QuestionKey:
    """Question identity across environments: the exact, case-sensitive text."""

    question_text: str


def find_category(store: ContentStore, tables: TableNames, key: CategoryKey) -> CategoryRecord | None:
    row = store.fetch_one(tables.categories, name=key.name)
    return CategoryRecord.model_validate(row) if row else None


def find_question(store: ContentStore, tables: TableNames, key: QuestionKey) -> Row | None:
    return store.fetch_one(tables.questions, question_text=key.question_text)


def question_record(row: Row, category_name: str | None, table: str | None = None) -> QuestionRecord:
    """Parse a stored question row; raises ``MalformedRowError`` if it does not fit the schema."""
    try:
        return QuestionRecord.model_validate({**row, "category_name": category_name})
    except ValidationError as e:
        fields = sorted({".".join(str(part) for part in err["loc"]) for err in e.errors()})
        raise MalformedRowError(
            f"Malformed question {row.get('id')}: invalid {', '.join(fields)}", table=table
        ) from e


def category_names(store: ContentStore, tables: TableNames) -> dict[uuid.UUID, str]:
    return {c["id"]: c["name"] for c in store.fetch_all(tables.categories)}


def get_question_with_category(
    store: ContentStore, tables: TableNames, question_id: uuid.UUID
) -> QuestionRecord | None:
    """Fetch a question and join in its category name (``None`` if the category is gone)."""
    row = store.fetch_one(tables.questions, id=question_id)
    if row is None:
        return None
    category = None
    if row.get("category_id") is not None:
        category = store.fetch_one(tables.categories, id=row["category_id"])
    return question_record(row, category["name"] if category else None, tables.questions)


def list_questions_with_category(
    store: ContentStore, tables: TableNames, **filters: Any
) -> list[QuestionRecord]:
    """List questions newest first, with category names joined in."""
    rows = store.fetch_all(tables.questions, order_by="created_at", descending=True, **filters)
    names = category_names(store, tables)
    return [question_record(row, names.get(row.get("category_id")), tables.questions) for row in rows]


def list_flagged_rows(store: ContentStore, tables: TableNames) -> list[Row]:
    """Raw flagged staging rows, newest first.

    Callers that must keep going past a malformed row parse each one
    themselves with ``question_record``.
    """
    return store.fetch_all(tables.questions, order_by="created_at", descending=True, ready_for_prod=True)


def list_flagged_questions(store: ContentStore, tables: TableNames) -> list[QuestionRecord]:
    """Staging questions a reviewer has marked ready for production."""
    return list_questions_with_category(store, tables, ready_for_prod=True)
