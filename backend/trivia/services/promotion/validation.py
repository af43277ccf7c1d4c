"""Production-readiness validation for staging questions.

Errors block promotion: they protect invariants the production dataset must
never break (no orphaned category, no duplicate text, no malformed
multiple-choice set). Warnings are editorial gaps that never block.
"""

from uuid import UUID

from trivia.core.environment import Environment, STAGING, TableNames, resolve_tables
from trivia.models.content import Difficulty, QuestionType
from trivia.schemas.content import QuestionRecord
from trivia.schemas.promotion import ValidationResult
from trivia.services.content_store import (
    CategoryKey,
    ContentStore,
    QuestionKey,
    StoreError,
    find_category,
    find_question,
    get_question_with_category,
)

MIN_OPTIONS = 2
SHORT_TEXT_LENGTH = 10
LONG_TEXT_LENGTH = 500


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def non_empty_options(question: QuestionRecord) -> list[str]:
    """Trimmed option texts that are present."""
    return [opt.strip() for opt in question.options if not _blank(opt)]


def check_content(question: QuestionRecord) -> list[str]:
    """Blocking errors that depend only on the question itself."""
    errors: list[str] = []

    if _blank(question.question_text):
        errors.append("Question text is empty")

    if _blank(question.correct_answer):
        errors.append("Correct answer is missing")

    if question.question_type == QuestionType.MULTIPLE_CHOICE:
        options = non_empty_options(question)
        if len(options) < MIN_OPTIONS:
            errors.append(f"Multiple choice questions require at least {MIN_OPTIONS} options")
        if not _blank(question.correct_answer) and question.correct_answer.strip() not in options:
            errors.append("Correct answer does not match any of the provided options")

    return errors


def collect_warnings(question: QuestionRecord) -> list[str]:
    """Quality gaps that should be addressed but never block promotion."""
    warnings: list[str] = []

    if _blank(question.explanation):
        warnings.append(
            "Missing explanation - users benefit from understanding why the answer is correct"
        )
    if _blank(question.bible_reference):
        warnings.append("Missing Bible reference - helps users learn Scripture locations")
    if question.difficulty == Difficulty.SCHOLAR and _blank(question.teaching_notes):
        warnings.append(
            "Scholar difficulty questions should include teaching notes for deeper learning"
        )
    if not question.tags:
        warnings.append("No tags - tagging helps with categorization and search")

    length = len(question.question_text or "")
    if length < SHORT_TEXT_LENGTH:
        warnings.append("Question text seems very short - ensure it provides clear context")
    if length > LONG_TEXT_LENGTH:
        warnings.append("Question text is quite long - consider breaking it down for clarity")

    return warnings


def validate_question(
    store: ContentStore,
    question: QuestionRecord,
    target: TableNames | None = None,
) -> ValidationResult:
    """Validate a staging question against the production dataset. Read-only."""
    target = target or resolve_tables(Environment.PRODUCTION)
    errors = check_content(question)

    try:
        if question.category_name is None:
            errors.append("Category not found in staging")
        elif find_category(store, target, CategoryKey(question.category_name)) is None:
            errors.append(
                f'Category "{question.category_name}" does not exist in production. '
                "Migrate category first."
            )

        if find_question(store, target, QuestionKey(question.question_text)) is not None:
            errors.append("Question with identical text already exists in production")
    except StoreError as e:
        errors.append(f"Validation error: {e.detail}")

    return ValidationResult(
        is_ready=not errors,
        errors=errors,
        warnings=collect_warnings(question),
    )


def validate_question_by_id(
    store: ContentStore,
    question_id: UUID,
    source: TableNames | None = None,
    target: TableNames | None = None,
) -> ValidationResult:
    """Fetch a staging question and validate it."""
    source = source or resolve_tables(STAGING)
    try:
        question = get_question_with_category(store, source, question_id)
    except StoreError as e:
        return ValidationResult(is_ready=False, errors=[f"Validation error: {e.detail}"])

    if question is None:
        return ValidationResult(is_ready=False, errors=["Question not found in staging"])

    return validate_question(store, question, target)
