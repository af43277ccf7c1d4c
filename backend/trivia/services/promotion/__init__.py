"""Staging-to-production content promotion."""

from trivia.services.promotion.auth import AuthProvider, BearerTokenAuth, StaticAuth
from trivia.services.promotion.batch import batch_migrate
from trivia.services.promotion.migration import (
    flag_question,
    migrate_category,
    migrate_question,
    unflag_question,
)
from trivia.services.promotion.readiness import summarize_readiness, validate_all_flagged
from trivia.services.promotion.validation import validate_question, validate_question_by_id

__all__ = [
    "AuthProvider",
    "BearerTokenAuth",
    "StaticAuth",
    "batch_migrate",
    "flag_question",
    "migrate_category",
    "migrate_question",
    "summarize_readiness",
    "unflag_question",
    "validate_all_flagged",
    "validate_question",
    "validate_question_by_id",
]
