"""Tests for question administration within one environment."""

import uuid

import pytest
from pydantic import ValidationError

from trivia.core.app_exceptions import AppError
from trivia.core.environment import Environment
from trivia.models.content import Difficulty, QuestionType
from trivia.schemas.content import StagingQuestionCreate, StagingQuestionUpdate
from trivia.services import question_admin
from tests.helpers.seed import create_category, create_question

DEV = Environment.DEVELOPMENT


def new_question(**overrides) -> StagingQuestionCreate:
    values = {
        "category_name": "Miracles",
        "difficulty": Difficulty.INTERMEDIATE,
        "question_type": QuestionType.MULTIPLE_CHOICE,
        "question_text": "What did Jesus turn water into at Cana?",
        "correct_answer": "Wine",
        "option_a": "Wine",
        "option_b": "Oil",
        "option_c": "",
        "bible_reference": "John 2:1-11",
    }
    values.update(overrides)
    return StagingQuestionCreate(**values)


def test_create_question_creates_category(store, staging, production):
    question = question_admin.create_question(store, DEV, new_question())

    assert question.category_name == "Miracles"
    assert question.is_active is True
    assert question.ready_for_prod is False
    assert question.option_c is None
    category = store.fetch_one(staging.categories, name="Miracles")
    assert category["description"] == "Questions about miracles"
    assert store.count(production.categories) == 0


def test_create_question_reuses_category(store, staging):
    category_id = create_category(store, staging, "Miracles")

    question = question_admin.create_question(store, DEV, new_question(category_name="  Miracles "))

    assert question.category_id == category_id
    assert store.count(staging.categories) == 1


def test_list_questions_filters(store, staging):
    characters = create_category(store, staging, "Characters")
    events = create_category(store, staging, "Events")
    create_question(store, staging, characters, "Who built the ark?")
    create_question(store, staging, events, "What happened at Jericho?", difficulty="expert")
    create_question(store, staging, events, "What happened at Babel?", is_active=False)

    assert len(question_admin.list_questions(store, DEV)) == 3
    assert len(question_admin.list_questions(store, DEV, category_id=events)) == 2
    assert len(question_admin.list_questions(store, DEV, difficulty=Difficulty.EXPERT)) == 1
    inactive = question_admin.list_questions(store, DEV, is_active=False)
    assert [q.question_text for q in inactive] == ["What happened at Babel?"]
    assert question_admin.list_questions(store, Environment.PRODUCTION) == []


def test_update_question(store, staging):
    question_id = create_question(store, staging, create_category(store, staging))

    updated = question_admin.update_question(
        store, DEV, question_id, StagingQuestionUpdate(explanation="Genesis 6-9")
    )

    assert updated.explanation == "Genesis 6-9"
    assert updated.correct_answer == "Noah"
    # Editing does not take a question out of the promotion queue
    assert updated.ready_for_prod is True


def test_update_missing_question(store):
    with pytest.raises(AppError) as exc_info:
        question_admin.update_question(
            store, DEV, uuid.uuid4(), StagingQuestionUpdate(explanation="x")
        )

    assert exc_info.value.status_code == 404
    assert exc_info.value.code == "QUESTION_NOT_FOUND"


def test_delete_question(store, staging):
    question_id = create_question(store, staging, None)

    question_admin.delete_question(store, DEV, question_id)

    with pytest.raises(AppError):
        question_admin.get_question(store, DEV, question_id)
    with pytest.raises(AppError):
        question_admin.delete_question(store, DEV, question_id)


def test_toggle_active(store, staging):
    question_id = create_question(store, staging, None)

    assert question_admin.toggle_question_active(store, DEV, question_id).is_active is False
    assert question_admin.toggle_question_active(store, DEV, question_id).is_active is True


def test_list_categories_sorted(store, staging):
    create_category(store, staging, "Locations", sort_order=3)
    create_category(store, staging, "Characters", sort_order=1)

    names = [c.name for c in question_admin.list_categories(store, DEV)]

    assert names == ["Characters", "Locations"]


def test_environment_counts(store, staging, production):
    create_question(store, staging, create_category(store, staging), "Who built the ark?")
    create_question(store, staging, None, "Who slew Goliath?")
    create_category(store, production, "Characters")

    counts = {c.environment: c for c in question_admin.environment_counts(store)}

    assert counts["production"].question_count == 0
    assert counts["production"].category_count == 1
    assert counts["development"].question_count == 2
    assert counts["development"].category_count == 1


@pytest.mark.parametrize("field", ["question_text", "correct_answer", "difficulty", "question_type"])
def test_update_rejects_null_for_required_columns(field):
    with pytest.raises(ValidationError, match="must not be null"):
        StagingQuestionUpdate(**{field: None})


def test_update_allows_clearing_optional_columns(store, staging):
    question_id = create_question(store, staging, None)

    updated = question_admin.update_question(
        store, DEV, question_id, StagingQuestionUpdate(explanation=None, tags=None)
    )

    assert updated.explanation is None
    assert updated.tags is None
