"""Admin endpoints for editing content and switching environments."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from trivia.core.dependencies import get_environment, get_store, require_auth
from trivia.core.environment import Environment, EnvironmentManager, resolve_tables
from trivia.models.content import Difficulty
from trivia.schemas.content import (
    CategoryRecord,
    EnvironmentCounts,
    QuestionRecord,
    StagingQuestionCreate,
    StagingQuestionUpdate,
)
from trivia.schemas.promotion import EnvironmentState, EnvironmentUpdate
from trivia.services import question_admin
from trivia.services.content_store import SqlContentStore
from trivia.services.promotion.auth import BearerTokenAuth

router = APIRouter(prefix="/admin", tags=["Admin - Content"])


def resolve_mode(
    environment: Environment | None = Query(
        None, description="Environment to operate on (defaults to the current one)"
    ),
    manager: EnvironmentManager = Depends(get_environment),
) -> Environment:
    """Snapshot the mode once per request."""
    return environment or manager.get()


def _state(mode: Environment) -> EnvironmentState:
    tables = resolve_tables(mode)
    return EnvironmentState(
        environment=mode,
        categories_table=tables.categories,
        questions_table=tables.questions,
    )


# ============================================================================
# Environment
# ============================================================================


@router.get("/environment", response_model=EnvironmentState, summary="Current environment")
async def get_current_environment(
    manager: EnvironmentManager = Depends(get_environment),
) -> EnvironmentState:
    return _state(manager.get())


@router.put("/environment", response_model=EnvironmentState, summary="Switch environment")
async def set_current_environment(
    body: EnvironmentUpdate,
    manager: EnvironmentManager = Depends(get_environment),
    _auth: BearerTokenAuth = Depends(require_auth),
) -> EnvironmentState:
    manager.set(body.environment)
    return _state(manager.get())


@router.get("/content/counts", response_model=list[EnvironmentCounts], summary="Compare environments")
async def counts(store: SqlContentStore = Depends(get_store)) -> list[EnvironmentCounts]:
    return question_admin.environment_counts(store)


# ============================================================================
# Categories & questions
# ============================================================================


@router.get("/content/categories", response_model=list[CategoryRecord], summary="List categories")
async def list_categories(
    mode: Environment = Depends(resolve_mode),
    store: SqlContentStore = Depends(get_store),
) -> list[CategoryRecord]:
    return question_admin.list_categories(store, mode)


@router.get("/content/questions", response_model=list[QuestionRecord], summary="List questions")
async def list_questions(
    category_id: UUID | None = Query(None, description="Filter by category ID"),
    difficulty: Difficulty | None = Query(None, description="Filter by difficulty"),
    is_active: bool | None = Query(None, description="Filter by active status"),
    mode: Environment = Depends(resolve_mode),
    store: SqlContentStore = Depends(get_store),
) -> list[QuestionRecord]:
    return question_admin.list_questions(
        store, mode, category_id=category_id, difficulty=difficulty, is_active=is_active
    )


@router.post(
    "/content/questions",
    response_model=QuestionRecord,
    status_code=status.HTTP_201_CREATED,
    summary="Create question",
)
async def create_question(
    body: StagingQuestionCreate,
    mode: Environment = Depends(resolve_mode),
    store: SqlContentStore = Depends(get_store),
    _auth: BearerTokenAuth = Depends(require_auth),
) -> QuestionRecord:
    """Create a question; its category is created by name if missing."""
    return question_admin.create_question(store, mode, body)


@router.get("/content/questions/{question_id}", response_model=QuestionRecord, summary="Get question")
async def get_question(
    question_id: UUID,
    mode: Environment = Depends(resolve_mode),
    store: SqlContentStore = Depends(get_store),
) -> QuestionRecord:
    return question_admin.get_question(store, mode, question_id)


@router.patch(
    "/content/questions/{question_id}", response_model=QuestionRecord, summary="Update question"
)
async def update_question(
    question_id: UUID,
    body: StagingQuestionUpdate,
    mode: Environment = Depends(resolve_mode),
    store: SqlContentStore = Depends(get_store),
    _auth: BearerTokenAuth = Depends(require_auth),
) -> QuestionRecord:
    return question_admin.update_question(store, mode, question_id, body)


@router.delete(
    "/content/questions/{question_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete question",
)
async def delete_question(
    question_id: UUID,
    mode: Environment = Depends(resolve_mode),
    store: SqlContentStore = Depends(get_store),
    _auth: BearerTokenAuth = Depends(require_auth),
) -> None:
    question_admin.delete_question(store, mode, question_id)


@router.post(
    "/content/questions/{question_id}/toggle-active",
    response_model=QuestionRecord,
    summary="Toggle active status",
)
async def toggle_active(
    question_id: UUID,
    mode: Environment = Depends(resolve_mode),
    store: SqlContentStore = Depends(get_store),
    _auth: BearerTokenAuth = Depends(require_auth),
) -> QuestionRecord:
    return question_admin.toggle_question_active(store, mode, question_id)
