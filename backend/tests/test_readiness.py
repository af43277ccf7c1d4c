"""Tests for the read-only readiness summary and validation report."""

from trivia.services.content_store import SqlContentStore, StoreError
from trivia.services.promotion import summarize_readiness, validate_all_flagged
from tests.helpers.seed import create_category, create_question


def test_empty_summary(store):
    summary = summarize_readiness(store)

    assert summary.total_flagged == 0
    assert summary.ready_to_migrate == 0
    assert summary.error_details == []


def test_summary_counts(store, staging, production):
    create_category(store, production, "Characters")
    category_id = create_category(store, staging, "Characters")
    prophecy_id = create_category(store, staging, "Prophecy")

    create_question(store, staging, category_id, "Who built the ark?")
    create_question(
        store, staging, category_id, "Who interpreted Pharaoh's dreams?",
        difficulty="scholar",
    )
    blocked = create_question(store, staging, prophecy_id, "Who wrote Lamentations?")
    create_question(store, staging, category_id, "Not flagged yet?", flagged=False)

    summary = summarize_readiness(store)

    assert summary.total_flagged == 3
    assert summary.ready_to_migrate == 2
    assert summary.has_warnings_only == 1
    assert summary.has_errors == 1
    assert [d.question_id for d in summary.error_details] == [blocked]
    assert summary.error_details[0].errors == [
        'Category "Prophecy" does not exist in production. Migrate category first.'
    ]
    assert summary.ready_to_migrate + summary.has_errors == summary.total_flagged


def test_summary_is_idempotent_and_writes_nothing(store, staging, production):
    create_category(store, production, "Characters")
    category_id = create_category(store, staging, "Characters")
    create_question(store, staging, category_id)
    create_question(store, staging, None, "Orphaned question?")

    first = summarize_readiness(store)
    second = summarize_readiness(store)

    assert first == second
    assert store.count(production.questions) == 0
    assert store.count(production.categories) == 1
    assert store.count(staging.questions, ready_for_prod=True) == 2


def test_report_lists_every_flagged_question(store, staging, production):
    create_category(store, production, "Characters")
    category_id = create_category(store, staging, "Characters")
    ready = create_question(store, staging, category_id, "Who built the ark?")
    broken = create_question(
        store, staging, category_id, "Who led Israel out of Egypt?", correct_answer="Aaron"
    )

    report = {item.question_id: item for item in validate_all_flagged(store)}

    assert set(report) == {ready, broken}
    assert report[ready].is_ready is True
    assert report[broken].errors == ["Correct answer does not match any of the provided options"]


def test_malformed_row_reported_per_item(store, staging, production):
    create_category(store, production, "Characters")
    category_id = create_category(store, staging, "Characters")
    ready = create_question(store, staging, category_id, "Who built the ark?")
    malformed = create_question(store, staging, category_id, "Who fought the giants?", tags="giants")

    report = {item.question_id: item for item in validate_all_flagged(store)}
    summary = summarize_readiness(store)

    assert report[ready].is_ready is True
    assert report[malformed].is_ready is False
    assert report[malformed].errors[0].startswith("Validation error: Malformed question")
    assert summary.total_flagged == 2
    assert summary.has_errors == 1
    assert summary.error is None


def test_fetch_failure_returns_error(db):
    class BrokenStore(SqlContentStore):
        def fetch_all(self, table, **kwargs):
            raise StoreError("relation does not exist", table=table)

    summary = summarize_readiness(BrokenStore(db))

    assert summary.total_flagged == 0
    assert summary.error == "relation does not exist"
