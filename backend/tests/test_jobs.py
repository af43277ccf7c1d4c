"""Tests for the promotion job CLI."""

import json

import pytest
from click.testing import CliRunner

from trivia.jobs import run as run_module
from tests.helpers.seed import create_category, create_question

ADMIN_TOKEN = "test-admin-token"


@pytest.fixture
def runner(db, monkeypatch) -> CliRunner:
    monkeypatch.setattr(run_module, "SessionLocal", lambda: db)
    monkeypatch.setattr(run_module, "setup_logging", lambda: None)
    return CliRunner()


def seed(store, staging, production):
    create_category(store, production, "Characters")
    category_id = create_category(store, staging, "Characters")
    create_question(store, staging, category_id)


def test_readiness_summary(runner, store, staging, production):
    seed(store, staging, production)

    result = runner.invoke(run_module.run, ["readiness_summary"])

    assert result.exit_code == 0
    assert json.loads(result.output)["ready_to_migrate"] == 1


def test_promote_flagged_with_token(runner, store, staging, production):
    seed(store, staging, production)

    result = runner.invoke(run_module.run, ["promote_flagged", "--token", ADMIN_TOKEN])

    assert result.exit_code == 0
    assert json.loads(result.output)["items_migrated"] == 1
    assert store.count(production.questions) == 1


def test_promote_flagged_without_token_fails(runner, store, staging, production):
    seed(store, staging, production)

    result = runner.invoke(run_module.run, ["promote_flagged"], env={"TRIVIA_ADMIN_TOKEN": None})

    assert result.exit_code == 1
    assert json.loads(result.output)["failures"][0]["error_code"] == "UNAUTHENTICATED"
    assert store.count(production.questions) == 0


def test_unknown_job_rejected(runner):
    result = runner.invoke(run_module.run, ["reindex_search"])

    assert result.exit_code == 2
