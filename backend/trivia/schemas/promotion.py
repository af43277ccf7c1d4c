"""Pydantic schemas for the staging-to-production promotion pipeline."""

from enum import Enum as PyEnum
from uuid import UUID

from pydantic import BaseModel, Field

from trivia.core.environment import Environment


class MigrationErrorCode(str, PyEnum):
    """Stable failure codes for promotion results."""

    NOT_FOUND = "NOT_FOUND"
    CATEGORY_NOT_MIGRATED = "CATEGORY_NOT_MIGRATED"
    DUPLICATE_CONTENT = "DUPLICATE_CONTENT"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    STORE_ERROR = "STORE_ERROR"
    PARTIAL_BATCH_FAILURE = "PARTIAL_BATCH_FAILURE"


class ValidationResult(BaseModel):
    """Outcome of validating one staging question for promotion."""

    is_ready: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class MigrationResult(BaseModel):
    """Outcome of promoting a single item.

    ``written`` and ``flag_cleared`` separate "fully done" from "copied to
    production but the staging flag is still set".
    """

    success: bool
    message: str
    items_migrated: int = 0
    error_code: MigrationErrorCode | None = None
    written: bool = False
    flag_cleared: bool = False
    production_id: UUID | None = None


class BatchItemOutcome(BaseModel):
    """Per-item record kept by the batch orchestrator."""

    question_id: UUID
    question_text: str
    message: str
    error_code: MigrationErrorCode | None = None
    flag_cleared: bool = False


class BatchMigrationResult(BaseModel):
    """Aggregate outcome of a batch run."""

    success: bool
    message: str
    items_migrated: int = 0
    migrated: list[BatchItemOutcome] = Field(default_factory=list)
    failures: list[BatchItemOutcome] = Field(default_factory=list)
    error: str | None = None
    error_code: MigrationErrorCode | None = None


class ErrorDetail(BaseModel):
    """A flagged question that would be skipped by a batch run."""

    question_id: UUID
    question_text: str
    errors: list[str]


class ReadinessSummary(BaseModel):
    """Counts previewing what a batch run would do."""

    total_flagged: int = 0
    ready_to_migrate: int = 0
    has_warnings_only: int = 0
    has_errors: int = 0
    error_details: list[ErrorDetail] = Field(default_factory=list)
    error: str | None = None


class ValidationReportItem(BaseModel):
    """Full validation outcome for one flagged question."""

    question_id: UUID
    question_text: str
    is_ready: bool
    errors: list[str]
    warnings: list[str]


class EnvironmentState(BaseModel):
    """Current content environment."""

    environment: Environment
    categories_table: str
    questions_table: str


class EnvironmentUpdate(BaseModel):
    """Request body for switching environments."""

    environment: Environment
