"""Single-item promotion from staging to production.

A promoted question is copied, never moved: a new production row is created
and the staging row stays behind with its ``ready_for_prod`` flag cleared.
Every failure is converted into a ``MigrationResult`` at this boundary, so
callers (the batch orchestrator, the admin API) never see an exception.
"""

from typing import Any
from uuid import UUID

from trivia.core.environment import PromotionTables, TableNames, resolve_promotion_tables
from trivia.core.logging import get_logger
from trivia.schemas.content import QuestionRecord
from trivia.schemas.promotion import MigrationErrorCode, MigrationResult
from trivia.services.content_store import (
    CategoryKey,
    ContentStore,
    QuestionKey,
    StoreError,
    find_category,
    find_question,
    get_question_with_category,
)
from trivia.services.promotion.auth import AuthProvider

logger = get_logger(__name__)


class MigrationError(Exception):
    """A promotion step failed; carries the stable error code."""

    def __init__(self, code: MigrationErrorCode, detail: str):
        self.code = code
        self.detail = detail
        super().__init__(detail)


def _require_auth(auth: AuthProvider) -> None:
    # No service identity at this layer: production writes need a real caller
    if not auth.is_authenticated():
        raise MigrationError(
            MigrationErrorCode.UNAUTHENTICATED,
            "Authentication required to write to production",
        )


def production_values(question: QuestionRecord, production_category_id: UUID) -> dict[str, Any]:
    """Fields carried from a staging question into its production copy."""
    return {
        "category_id": production_category_id,
        "difficulty": question.difficulty.value,
        "question_type": question.question_type.value,
        "question_text": question.question_text,
        "correct_answer": question.correct_answer,
        "option_a": question.option_a,
        "option_b": question.option_b,
        "option_c": question.option_c,
        "option_d": question.option_d,
        "bible_reference": question.bible_reference,
        "explanation": question.explanation or None,
        "teaching_notes": question.teaching_notes or None,
        "tags": question.tags or None,
        "is_active": question.is_active if question.is_active is not None else True,
    }


def _copy_question(
    store: ContentStore,
    question_id: UUID,
    auth: AuthProvider,
    tables: PromotionTables,
) -> UUID:
    """Run the promotion steps in order and return the new production id."""
    try:
        question = get_question_with_category(store, tables.source, question_id)
    except StoreError as e:
        raise MigrationError(
            MigrationErrorCode.STORE_ERROR, f"Failed to fetch question: {e.detail}"
        ) from e
    if question is None:
        raise MigrationError(MigrationErrorCode.NOT_FOUND, "Question not found in staging")

    if question.category_name is None:
        raise MigrationError(
            MigrationErrorCode.CATEGORY_NOT_MIGRATED, "Question category not found in staging"
        )

    try:
        category = find_category(store, tables.target, CategoryKey(question.category_name))
        if category is None:
            raise MigrationError(
                MigrationErrorCode.CATEGORY_NOT_MIGRATED,
                f'Category "{question.category_name}" not found in production. '
                "Please migrate the category first.",
            )

        existing = find_question(store, tables.target, QuestionKey(question.question_text))
    except StoreError as e:
        raise MigrationError(MigrationErrorCode.STORE_ERROR, e.detail) from e

    if existing is not None:
        logger.info(
            "question already in production",
            extra={
                "event": "migration_duplicate",
                "question_id": str(question_id),
                "production_id": str(existing["id"]),
            },
        )
        raise MigrationError(
            MigrationErrorCode.DUPLICATE_CONTENT,
            "Question with this text already exists in production",
        )

    _require_auth(auth)

    try:
        row = store.insert(tables.target.questions, production_values(question, category.id))
    except StoreError as e:
        raise MigrationError(
            MigrationErrorCode.STORE_ERROR, f"Failed to migrate question: {e.detail}"
        ) from e
    return row["id"]


def _clear_flag(store: ContentStore, source: TableNames, question_id: UUID) -> bool:
    """Best-effort unflag after a successful copy.

    A stale flag is tolerated: the next batch run hits the duplicate check and
    skips the item.
    """
    try:
        updated = store.update(source.questions, {"ready_for_prod": False}, id=question_id)
    except StoreError as e:
        logger.warning(
            "failed to clear ready_for_prod after migration",
            extra={"event": "migration_unflag_failed", "question_id": str(question_id), "error": e.detail},
        )
        return False
    if not updated:
        logger.warning(
            "staging question vanished before unflag",
            extra={"event": "migration_unflag_failed", "question_id": str(question_id)},
        )
        return False
    return True


def migrate_question(
    store: ContentStore,
    question_id: UUID,
    auth: AuthProvider,
    tables: PromotionTables | None = None,
) -> MigrationResult:
    """Copy one staging question into production."""
    tables = tables or resolve_promotion_tables()
    logger.info(
        "migrating question",
        extra={
            "event": "migration_started",
            "question_id": str(question_id),
            "source": tables.source.questions,
            "target": tables.target.questions,
        },
    )

    try:
        production_id = _copy_question(store, question_id, auth, tables)
    except MigrationError as e:
        logger.info(
            "question not migrated",
            extra={
                "event": "migration_failed",
                "question_id": str(question_id),
                "error_code": e.code.value,
                "reason": e.detail,
            },
        )
        return MigrationResult(success=False, message=e.detail, error_code=e.code)

    flag_cleared = _clear_flag(store, tables.source, question_id)
    logger.info(
        "question migrated",
        extra={
            "event": "migration_succeeded",
            "question_id": str(question_id),
            "production_id": str(production_id),
            "flag_cleared": flag_cleared,
        },
    )
    return MigrationResult(
        success=True,
        message="Question migrated successfully",
        items_migrated=1,
        written=True,
        flag_cleared=flag_cleared,
        production_id=production_id,
    )


def migrate_category(
    store: ContentStore,
    category_id: UUID,
    auth: AuthProvider,
    tables: PromotionTables | None = None,
) -> MigrationResult:
    """Copy a staging category into production unless one with that name exists."""
    tables = tables or resolve_promotion_tables()
    try:
        category = store.fetch_one(tables.source.categories, id=category_id)
        if category is None:
            raise MigrationError(MigrationErrorCode.NOT_FOUND, "Category not found in staging")

        existing = find_category(store, tables.target, CategoryKey(category["name"]))
        if existing is not None:
            return MigrationResult(
                success=True,
                message=f'Category "{category["name"]}" already exists in production',
                production_id=existing.id,
            )

        _require_auth(auth)
        row = store.insert(
            tables.target.categories,
            {
                "name": category["name"],
                "description": category["description"],
                "sort_order": category["sort_order"],
            },
        )
    except MigrationError as e:
        return MigrationResult(success=False, message=e.detail, error_code=e.code)
    except StoreError as e:
        return MigrationResult(
            success=False,
            message=f"Failed to migrate category: {e.detail}",
            error_code=MigrationErrorCode.STORE_ERROR,
        )

    logger.info(
        "category migrated",
        extra={
            "event": "category_migrated",
            "category_id": str(category_id),
            "production_id": str(row["id"]),
            "category_name": category["name"],
        },
    )
    return MigrationResult(
        success=True,
        message=f'Category "{category["name"]}" migrated successfully',
        items_migrated=1,
        written=True,
        production_id=row["id"],
    )


def _set_flag(
    store: ContentStore,
    question_id: UUID,
    flagged: bool,
    tables: PromotionTables | None,
) -> MigrationResult:
    tables = tables or resolve_promotion_tables()
    verb = "flag" if flagged else "unflag"
    try:
        updated = store.update(tables.source.questions, {"ready_for_prod": flagged}, id=question_id)
    except StoreError as e:
        return MigrationResult(
            success=False,
            message=f"Failed to {verb} question: {e.detail}",
            error_code=MigrationErrorCode.STORE_ERROR,
        )
    if not updated:
        return MigrationResult(
            success=False,
            message="Question not found in staging",
            error_code=MigrationErrorCode.NOT_FOUND,
        )
    message = "Question flagged for migration to production" if flagged else "Question unflagged"
    return MigrationResult(success=True, message=message)


def flag_question(
    store: ContentStore, question_id: UUID, tables: PromotionTables | None = None
) -> MigrationResult:
    """Mark a staging question as a promotion candidate."""
    return _set_flag(store, question_id, True, tables)


def unflag_question(
    store: ContentStore, question_id: UUID, tables: PromotionTables | None = None
) -> MigrationResult:
    """Remove a staging question from the promotion queue."""
    return _set_flag(store, question_id, False, tables)
