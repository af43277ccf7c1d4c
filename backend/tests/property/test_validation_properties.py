"""Property-based tests for promotion validation invariants."""

import uuid

from hypothesis import given, settings
from hypothesis import strategies as st

from trivia.models.content import Difficulty, QuestionType
from trivia.schemas.content import QuestionRecord
from trivia.services.promotion.validation import validate_question


class EmptyProductionStore:
    """Production with the question's category and nothing else."""

    def fetch_one(self, table, **filters):
        if table == "categories" and filters.get("name") == "Characters":
            return {"id": uuid.uuid4(), "name": "Characters", "sort_order": 0}
        return None


text = st.text(max_size=60)
blank = st.sampled_from([None, "", " ", "\t\n"])


@settings(max_examples=50, deadline=None)
@given(
    question_text=text,
    answer=blank,
    options=st.lists(st.one_of(st.none(), text), min_size=4, max_size=4),
    question_type=st.sampled_from(list(QuestionType)),
)
def test_missing_answer_always_blocks(question_text, answer, options, question_type) -> None:
    """
    Property: a question with no correct answer is never ready.

    Invariants:
    - "Correct answer is missing" is reported
    - the option-match error is never reported for a blank answer
    """
    question = QuestionRecord(
        id=uuid.uuid4(),
        category_name="Characters",
        difficulty=Difficulty.BEGINNER,
        question_type=question_type,
        question_text=question_text,
        correct_answer=answer,
        option_a=options[0],
        option_b=options[1],
        option_c=options[2],
        option_d=options[3],
    )

    result = validate_question(EmptyProductionStore(), question)

    assert result.is_ready is False
    assert "Correct answer is missing" in result.errors
    assert "Correct answer does not match any of the provided options" not in result.errors


@settings(max_examples=50, deadline=None)
@given(
    option=st.text(min_size=1, max_size=40).filter(lambda s: s.strip()),
    position=st.integers(min_value=0, max_value=3),
)
def test_single_option_multiple_choice_blocks(option, position) -> None:
    """Property: multiple choice with one non-empty option is never ready."""
    options = [None, "", "  ", None]
    options[position] = option

    question = QuestionRecord(
        id=uuid.uuid4(),
        category_name="Characters",
        difficulty=Difficulty.EXPERT,
        question_type=QuestionType.MULTIPLE_CHOICE,
        question_text="Which king built the first temple?",
        correct_answer=option,
        option_a=options[0],
        option_b=options[1],
        option_c=options[2],
        option_d=options[3],
    )

    result = validate_question(EmptyProductionStore(), question)

    assert result.is_ready is False
    assert result.errors == ["Multiple choice questions require at least 2 options"]


@settings(max_examples=50, deadline=None)
@given(warnings_only=st.booleans(), scholar=st.booleans())
def test_warnings_never_block(warnings_only, scholar) -> None:
    """Property: a well-formed question is ready however many warnings it carries."""
    question = QuestionRecord(
        id=uuid.uuid4(),
        category_name="Characters",
        difficulty=Difficulty.SCHOLAR if scholar else Difficulty.BEGINNER,
        question_type=QuestionType.TRUE_FALSE,
        question_text="Solomon built the first temple." if not warnings_only else "Temple?",
        correct_answer="True",
        explanation=None if warnings_only else "1 Kings 6",
        bible_reference=None if warnings_only else "1 Kings 6:1",
        tags=None if warnings_only else ["kings"],
    )

    result = validate_question(EmptyProductionStore(), question)

    assert result.is_ready is True
    assert bool(result.warnings) == (warnings_only or scholar)
