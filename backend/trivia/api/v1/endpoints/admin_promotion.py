"""Admin endpoints for promoting staging content to production.

Promotion outcomes are returned as result objects with HTTP 200 even when
``success`` is false; the caller decides how to surface them.
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from trivia.core.dependencies import get_auth, get_store, require_auth
from trivia.core.environment import STAGING, resolve_tables
from trivia.schemas.content import QuestionRecord
from trivia.schemas.promotion import (
    BatchMigrationResult,
    MigrationResult,
    ReadinessSummary,
    ValidationReportItem,
    ValidationResult,
)
from trivia.services.content_store import SqlContentStore, list_flagged_questions
from trivia.services.promotion import (
    batch_migrate,
    flag_question,
    migrate_category,
    migrate_question,
    summarize_readiness,
    unflag_question,
    validate_all_flagged,
    validate_question_by_id,
)
from trivia.services.promotion.auth import BearerTokenAuth

router = APIRouter(prefix="/admin/promotion", tags=["Admin - Promotion"])


# ============================================================================
# Flagging
# ============================================================================


@router.post(
    "/questions/{question_id}/flag",
    response_model=MigrationResult,
    summary="Flag question",
    description="Mark a staging question as ready for production.",
)
async def flag(
    question_id: UUID,
    store: SqlContentStore = Depends(get_store),
    _auth: BearerTokenAuth = Depends(require_auth),
) -> MigrationResult:
    return flag_question(store, question_id)


@router.delete(
    "/questions/{question_id}/flag",
    response_model=MigrationResult,
    summary="Unflag question",
    description="Remove a staging question from the promotion queue.",
)
async def unflag(
    question_id: UUID,
    store: SqlContentStore = Depends(get_store),
    _auth: BearerTokenAuth = Depends(require_auth),
) -> MigrationResult:
    return unflag_question(store, question_id)


@router.get(
    "/questions/flagged",
    response_model=list[QuestionRecord],
    summary="List flagged questions",
)
async def flagged(store: SqlContentStore = Depends(get_store)) -> list[QuestionRecord]:
    """Staging questions awaiting promotion, newest first."""
    return list_flagged_questions(store, resolve_tables(STAGING))


# ============================================================================
# Validation & readiness (read-only)
# ============================================================================


@router.get(
    "/questions/{question_id}/validation",
    response_model=ValidationResult,
    summary="Validate question",
    description="Blocking errors and quality warnings for one staging question.",
)
async def validate(
    question_id: UUID, store: SqlContentStore = Depends(get_store)
) -> ValidationResult:
    return validate_question_by_id(store, question_id)


@router.get(
    "/summary",
    response_model=ReadinessSummary,
    summary="Readiness summary",
    description="Preview how a batch run would treat every flagged question.",
)
async def summary(store: SqlContentStore = Depends(get_store)) -> ReadinessSummary:
    return summarize_readiness(store)


@router.get(
    "/report",
    response_model=list[ValidationReportItem],
    summary="Validation report",
)
async def report(store: SqlContentStore = Depends(get_store)) -> list[ValidationReportItem]:
    """Per-question validation results for every flagged question."""
    return validate_all_flagged(store)


# ============================================================================
# Migration
# ============================================================================


@router.post(
    "/questions/{question_id}/migrate",
    response_model=MigrationResult,
    summary="Migrate question",
)
async def migrate_one(
    question_id: UUID,
    store: SqlContentStore = Depends(get_store),
    auth: BearerTokenAuth = Depends(get_auth),
) -> MigrationResult:
    """Copy one staging question into production."""
    return migrate_question(store, question_id, auth)


@router.post(
    "/categories/{category_id}/migrate",
    response_model=MigrationResult,
    summary="Migrate category",
)
async def migrate_one_category(
    category_id: UUID,
    store: SqlContentStore = Depends(get_store),
    auth: BearerTokenAuth = Depends(get_auth),
) -> MigrationResult:
    """Copy a staging category into production if its name is not there yet."""
    return migrate_category(store, category_id, auth)


@router.post(
    "/batch",
    response_model=BatchMigrationResult,
    summary="Migrate all flagged questions",
)
async def migrate_batch(
    store: SqlContentStore = Depends(get_store),
    auth: BearerTokenAuth = Depends(get_auth),
) -> BatchMigrationResult:
    return batch_migrate(store, auth)
