"""Question administration within one content environment."""

from typing import Any
from uuid import UUID

from fastapi import status

from trivia.core.app_exceptions import AppError
from trivia.core.environment import Environment, resolve_tables
from trivia.models.content import Difficulty
from trivia.schemas.content import (
    CategoryRecord,
    EnvironmentCounts,
    QuestionRecord,
    StagingQuestionCreate,
    StagingQuestionUpdate,
)
from trivia.services.content_store import (
    CategoryKey,
    ContentStore,
    find_category,
    get_question_with_category,
    list_questions_with_category,
)


def _not_found(question_id: UUID) -> AppError:
    return AppError(
        status_code=status.HTTP_404_NOT_FOUND,
        code="QUESTION_NOT_FOUND",
        message="Question not found",
        details={"question_id": str(question_id)},
    )


def list_questions(
    store: ContentStore,
    mode: Environment,
    category_id: UUID | None = None,
    difficulty: Difficulty | None = None,
    is_active: bool | None = None,
) -> list[QuestionRecord]:
    """List questions in ``mode``, newest first, with optional equality filters."""
    filters: dict[str, Any] = {}
    if category_id is not None:
        filters["category_id"] = category_id
    if difficulty is not None:
        filters["difficulty"] = difficulty.value
    if is_active is not None:
        filters["is_active"] = is_active
    return list_questions_with_category(store, resolve_tables(mode), **filters)


def get_question(store: ContentStore, mode: Environment, question_id: UUID) -> QuestionRecord:
    question = get_question_with_category(store, resolve_tables(mode), question_id)
    if question is None:
        raise _not_found(question_id)
    return question


def create_question(
    store: ContentStore, mode: Environment, data: StagingQuestionCreate
) -> QuestionRecord:
    """Create a question, creating its category by name if it does not exist yet."""
    tables = resolve_tables(mode)

    category = find_category(store, tables, CategoryKey(data.category_name))
    if category is None:
        row = store.insert(
            tables.categories,
            {
                "name": data.category_name,
                "description": f"Questions about {data.category_name.lower()}",
                "sort_order": 0,
            },
        )
        category_id = row["id"]
    else:
        category_id = category.id

    values = data.model_dump(exclude={"category_name"}, mode="json")
    for optional in ("option_a", "option_b", "option_c", "option_d", "bible_reference",
                     "explanation", "teaching_notes", "tags"):
        values[optional] = values.get(optional) or None
    values.update(category_id=category_id, is_active=True)

    row = store.insert(tables.questions, values)
    return get_question(store, mode, row["id"])


def update_question(
    store: ContentStore,
    mode: Environment,
    question_id: UUID,
    data: StagingQuestionUpdate,
) -> QuestionRecord:
    """Apply the fields that were set on ``data``."""
    values = data.model_dump(exclude_unset=True, mode="json")
    if values:
        updated = store.update(resolve_tables(mode).questions, values, id=question_id)
        if not updated:
            raise _not_found(question_id)
    return get_question(store, mode, question_id)


def delete_question(store: ContentStore, mode: Environment, question_id: UUID) -> None:
    if not store.delete(resolve_tables(mode).questions, id=question_id):
        raise _not_found(question_id)


def toggle_question_active(
    store: ContentStore, mode: Environment, question_id: UUID
) -> QuestionRecord:
    question = get_question(store, mode, question_id)
    store.update(
        resolve_tables(mode).questions,
        {"is_active": not question.is_active},
        id=question_id,
    )
    return get_question(store, mode, question_id)


def list_categories(store: ContentStore, mode: Environment) -> list[CategoryRecord]:
    rows = store.fetch_all(resolve_tables(mode).categories, order_by="sort_order")
    return [CategoryRecord.model_validate(row) for row in rows]


def environment_counts(store: ContentStore) -> list[EnvironmentCounts]:
    """Question and category counts for each environment, for side-by-side comparison."""
    counts = []
    for mode in (Environment.PRODUCTION, Environment.DEVELOPMENT):
        tables = resolve_tables(mode)
        counts.append(
            EnvironmentCounts(
                environment=mode.value,
                question_count=store.count(tables.questions),
                category_count=store.count(tables.categories),
            )
        )
    return counts
