"""Pydantic schemas for trivia content records."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from trivia.models.content import Difficulty, QuestionType

QUESTION_TEXT_MAX_LENGTH = 2000
ANSWER_MAX_LENGTH = 500


class CategoryRecord(BaseModel):
    """A category row from either environment."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None = None
    sort_order: int = 0
    created_at: datetime | None = None


class QuestionRecord(BaseModel):
    """A question row from either environment, with its category name joined in."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    category_id: UUID | None = None
    category_name: str | None = None
    difficulty: Difficulty
    question_type: QuestionType
    question_text: str = ""
    correct_answer: str | None = None
    option_a: str | None = None
    option_b: str | None = None
    option_c: str | None = None
    option_d: str | None = None
    bible_reference: str | None = None
    explanation: str | None = None
    teaching_notes: str | None = None
    tags: list[str] | None = None
    is_active: bool | None = True
    ready_for_prod: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def options(self) -> list[str | None]:
        return [self.option_a, self.option_b, self.option_c, self.option_d]


class StagingQuestionCreate(BaseModel):
    """Schema for creating a staging question."""

    category_name: str = Field(..., min_length=1, max_length=200)
    difficulty: Difficulty
    question_type: QuestionType
    question_text: str = Field(..., min_length=1, max_length=QUESTION_TEXT_MAX_LENGTH)
    correct_answer: str = Field(..., min_length=1, max_length=ANSWER_MAX_LENGTH)
    option_a: str | None = Field(None, max_length=ANSWER_MAX_LENGTH)
    option_b: str | None = Field(None, max_length=ANSWER_MAX_LENGTH)
    option_c: str | None = Field(None, max_length=ANSWER_MAX_LENGTH)
    option_d: str | None = Field(None, max_length=ANSWER_MAX_LENGTH)
    bible_reference: str | None = None
    explanation: str | None = None
    teaching_notes: str | None = None
    tags: list[str] | None = None

    @field_validator("category_name")
    @classmethod
    def strip_category_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("category_name must not be blank")
        return value


class StagingQuestionUpdate(BaseModel):
    """Schema for updating a staging question (all fields optional)."""

    difficulty: Difficulty | None = None
    question_type: QuestionType | None = None
    question_text: str | None = Field(None, min_length=1, max_length=QUESTION_TEXT_MAX_LENGTH)
    correct_answer: str | None = Field(None, min_length=1, max_length=ANSWER_MAX_LENGTH)
    option_a: str | None = Field(None, max_length=ANSWER_MAX_LENGTH)
    option_b: str | None = Field(None, max_length=ANSWER_MAX_LENGTH)
    option_c: str | None = Field(None, max_length=ANSWER_MAX_LENGTH)
    option_d: str | None = Field(None, max_length=ANSWER_MAX_LENGTH)
    bible_reference: str | None = None
    explanation: str | None = None
    teaching_notes: str | None = None
    tags: list[str] | None = None

    @field_validator("difficulty", "question_type", "question_text", "correct_answer")
    @classmethod
    def reject_null(cls, value):
        # Omit the field to leave it unchanged; these columns are NOT NULL
        if value is None:
            raise ValueError("must not be null")
        return value


class EnvironmentCounts(BaseModel):
    """Row counts for one environment."""

    environment: str
    question_count: int
    category_count: int
