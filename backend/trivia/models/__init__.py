"""Database models."""

from trivia.models.content import (
    Category,
    CategoryDev,
    Difficulty,
    Question,
    QuestionDev,
    QuestionType,
)

__all__ = [
    "Category",
    "CategoryDev",
    "Difficulty",
    "Question",
    "QuestionDev",
    "QuestionType",
]
