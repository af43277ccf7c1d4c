"""Read-only preview of what a batch promotion would do."""

from trivia.core.environment import resolve_promotion_tables
from trivia.core.logging import get_logger
from trivia.schemas.promotion import ErrorDetail, ReadinessSummary, ValidationReportItem
from trivia.services.content_store import (
    ContentStore,
    MalformedRowError,
    StoreError,
    category_names,
    list_flagged_rows,
    question_record,
)
from trivia.services.promotion.validation import validate_question

logger = get_logger(__name__)


def validate_all_flagged(store: ContentStore) -> list[ValidationReportItem]:
    """Validate every flagged staging question without writing anything.

    A row that cannot be parsed is reported as not ready instead of aborting
    the report.
    """
    tables = resolve_promotion_tables()
    rows = list_flagged_rows(store, tables.source)
    names = category_names(store, tables.source)

    report = []
    for row in rows:
        try:
            question = question_record(
                row, names.get(row.get("category_id")), tables.source.questions
            )
        except MalformedRowError as e:
            report.append(
                ValidationReportItem(
                    question_id=row["id"],
                    question_text=row["question_text"] or "",
                    is_ready=False,
                    errors=[f"Validation error: {e.detail}"],
                    warnings=[],
                )
            )
            continue

        validation = validate_question(store, question, tables.target)
        report.append(
            ValidationReportItem(
                question_id=question.id,
                question_text=question.question_text,
                is_ready=validation.is_ready,
                errors=validation.errors,
                warnings=validation.warnings,
            )
        )
    return report


def summarize_readiness(store: ContentStore) -> ReadinessSummary:
    """Count flagged questions by outcome.

    ``ready_to_migrate`` includes items with warnings; ``has_warnings_only``
    is the subset of those with at least one warning. If the flagged
    questions cannot be read, the counts stay at zero and ``error`` carries
    the store's message.
    """
    try:
        report = validate_all_flagged(store)
    except StoreError as e:
        logger.error(
            "failed to build readiness summary",
            extra={"event": "readiness_fetch_failed", "error": e.detail},
        )
        return ReadinessSummary(error=e.detail)

    summary = ReadinessSummary(total_flagged=len(report))

    for item in report:
        if item.is_ready:
            summary.ready_to_migrate += 1
            if item.warnings:
                summary.has_warnings_only += 1
        else:
            summary.has_errors += 1
            summary.error_details.append(
                ErrorDetail(
                    question_id=item.question_id,
                    question_text=item.question_text,
                    errors=item.errors,
                )
            )

    return summary
