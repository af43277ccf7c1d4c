"""Trivia content models, one table per environment.

Staging (``*_dev``) and production tables share a schema but are distinct
tables with independently generated ids. Nothing links a staging row to its
production counterpart: categories correlate by name, questions by text.
"""

import uuid
from enum import Enum as PyEnum

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import declared_attr
from sqlalchemy.sql import func

from trivia.db.base import Base


class Difficulty(str, PyEnum):
    """Question difficulty tier."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    EXPERT = "expert"
    SCHOLAR = "scholar"


class QuestionType(str, PyEnum):
    """Answer format."""

    MULTIPLE_CHOICE = "multiple_choice"
    TRUE_FALSE = "true_false"
    FILL_BLANK = "fill_blank"


DIFFICULTY_VALUES = ", ".join(f"'{d.value}'" for d in Difficulty)
QUESTION_TYPE_VALUES = ", ".join(f"'{t.value}'" for t in QuestionType)


class CategoryColumns:
    """Columns shared by every category table."""

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    @declared_attr.directive
    def __table_args__(cls):
        # Name is the cross-environment identity, so it must be unique per table
        return (UniqueConstraint("name", name=f"uq_{cls.__tablename__}_name"),)


class QuestionColumns:
    """Columns shared by every question table."""

    __category_table__: str

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    difficulty = Column(String(20), nullable=False)
    question_type = Column(String(20), nullable=False)
    question_text = Column(Text, nullable=False)
    correct_answer = Column(Text, nullable=False)
    option_a = Column(Text, nullable=True)
    option_b = Column(Text, nullable=True)
    option_c = Column(Text, nullable=True)
    option_d = Column(Text, nullable=True)
    bible_reference = Column(Text, nullable=True)
    explanation = Column(Text, nullable=True)
    teaching_notes = Column(Text, nullable=True)
    tags = Column(JSON, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    times_answered = Column(Integer, nullable=False, default=0)
    times_correct = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    @declared_attr
    def category_id(cls):
        return Column(
            Uuid,
            ForeignKey(f"{cls.__category_table__}.id", ondelete="CASCADE"),
            nullable=True,
        )

    @declared_attr.directive
    def __table_args__(cls):
        return _question_table_args(cls.__tablename__)


def _question_table_args(table: str) -> tuple:
    return (
        CheckConstraint(f"difficulty IN ({DIFFICULTY_VALUES})", name=f"ck_{table}_difficulty"),
        CheckConstraint(
            f"question_type IN ({QUESTION_TYPE_VALUES})", name=f"ck_{table}_question_type"
        ),
        Index(f"ix_{table}_category_id", "category_id"),
        Index(f"ix_{table}_difficulty", "difficulty"),
        # Duplicate detection looks questions up by exact text
        Index(f"ix_{table}_question_text", "question_text"),
    )


class Category(CategoryColumns, Base):
    """Production category."""

    __tablename__ = "categories"


class CategoryDev(CategoryColumns, Base):
    """Staging category."""

    __tablename__ = "categories_dev"


class Question(QuestionColumns, Base):
    """Production question. Never updated in place by promotion."""

    __tablename__ = "questions"
    __category_table__ = "categories"


class QuestionDev(QuestionColumns, Base):
    """Staging question, the editable source of truth."""

    __tablename__ = "questions_dev"
    __category_table__ = "categories_dev"

    ready_for_prod = Column(Boolean, nullable=False, default=False)

    @declared_attr.directive
    def __table_args__(cls):
        return _question_table_args(cls.__tablename__) + (
            Index("ix_questions_dev_ready_for_prod", "ready_for_prod"),
        )
