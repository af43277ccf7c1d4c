"""Batch promotion of every flagged staging question."""

from trivia.core.environment import resolve_promotion_tables
from trivia.core.logging import get_logger
from trivia.schemas.promotion import (
    BatchItemOutcome,
    BatchMigrationResult,
    MigrationErrorCode,
    MigrationResult,
)
from trivia.services.content_store import ContentStore, Row, StoreError, list_flagged_rows
from trivia.services.promotion.auth import AuthProvider
from trivia.services.promotion.migration import migrate_question

logger = get_logger(__name__)

TEXT_PREFIX_LENGTH = 30


def _outcome(row: Row, result: MigrationResult) -> BatchItemOutcome:
    return BatchItemOutcome(
        question_id=row["id"],
        question_text=row["question_text"] or "",
        message=result.message,
        error_code=result.error_code,
        flag_cleared=result.flag_cleared,
    )


def _failure_line(outcome: BatchItemOutcome) -> str:
    return f"{outcome.question_text[:TEXT_PREFIX_LENGTH]}...: {outcome.message}"


def batch_migrate(store: ContentStore, auth: AuthProvider) -> BatchMigrationResult:
    """Promote all flagged questions, one at a time, continuing past failures.

    Items are processed strictly in sequence. Duplicate detection is
    read-then-write, so running items concurrently could let two identical
    texts both reach production.
    """
    # Resolve once so the whole run targets the same tables
    tables = resolve_promotion_tables()

    try:
        rows = list_flagged_rows(store, tables.source)
    except StoreError as e:
        logger.error(
            "failed to fetch flagged questions",
            extra={"event": "batch_migration_fetch_failed", "error": e.detail},
        )
        return BatchMigrationResult(
            success=False,
            message=f"Failed to fetch flagged questions: {e.detail}",
            error=e.detail,
            error_code=MigrationErrorCode.STORE_ERROR,
        )

    if not rows:
        return BatchMigrationResult(success=True, message="No questions flagged for migration")

    logger.info(
        "batch migration started",
        extra={"event": "batch_migration_started", "flagged": len(rows)},
    )

    migrated: list[BatchItemOutcome] = []
    failures: list[BatchItemOutcome] = []
    for position, row in enumerate(rows, 1):
        result = migrate_question(store, row["id"], auth, tables)
        outcome = _outcome(row, result)
        if result.success:
            migrated.append(outcome)
        else:
            failures.append(outcome)
            logger.warning(
                "batch item failed",
                extra={
                    "event": "batch_migration_item_failed",
                    "position": position,
                    "total": len(rows),
                    "question_id": str(row["id"]),
                    "error_code": result.error_code.value if result.error_code else None,
                    "reason": result.message,
                },
            )

    result = BatchMigrationResult(
        success=not failures,
        message=f"Migrated {len(migrated)} question(s). {len(failures)} failed.",
        items_migrated=len(migrated),
        migrated=migrated,
        failures=failures,
        error="; ".join(_failure_line(f) for f in failures) if failures else None,
        error_code=MigrationErrorCode.PARTIAL_BATCH_FAILURE if failures else None,
    )
    logger.info(
        "batch migration complete",
        extra={
            "event": "batch_migration_complete",
            "migrated": len(migrated),
            "failed": len(failures),
        },
    )
    return result
