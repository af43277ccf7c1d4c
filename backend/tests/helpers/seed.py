"""Test seed helpers for creating content in either environment."""

from typing import Any
from uuid import UUID

from trivia.core.environment import Environment, TableNames
from trivia.services.content_store import ContentStore


def create_category(
    store: ContentStore,
    tables: TableNames,
    name: str = "Characters",
    description: str | None = None,
    sort_order: int = 1,
) -> UUID:
    """Insert a category and return its id."""
    row = store.insert(
        tables.categories,
        {
            "name": name,
            "description": description or f"Questions about {name.lower()}",
            "sort_order": sort_order,
        },
    )
    return row["id"]


def create_question(
    store: ContentStore,
    tables: TableNames,
    category_id: UUID | None,
    question_text: str = "Who built the ark?",
    flagged: bool = True,
    **overrides: Any,
) -> UUID:
    """
    Insert a well-formed multiple-choice question and return its id.

    Staging questions are flagged ready for production unless ``flagged`` is
    False. Any column can be overridden through keyword arguments.
    """
    values: dict[str, Any] = {
        "category_id": category_id,
        "difficulty": "beginner",
        "question_type": "multiple_choice",
        "question_text": question_text,
        "correct_answer": "Noah",
        "option_a": "Noah",
        "option_b": "Moses",
        "option_c": "Abraham",
        "option_d": "David",
        "bible_reference": "Genesis 6:14",
        "explanation": "God instructed Noah to build an ark to save his family and the animals.",
        "tags": ["old-testament", "flood"],
        "is_active": True,
    }
    if tables.mode == Environment.DEVELOPMENT:
        values["ready_for_prod"] = flagged
    values.update(overrides)
    return store.insert(tables.questions, values)["id"]
