"""CLI entry point for promotion jobs."""

import sys

import click

from trivia.core.logging import get_logger, setup_logging
from trivia.db.session import SessionLocal
from trivia.services.content_store import SqlContentStore, StoreError
from trivia.services.promotion import BearerTokenAuth, batch_migrate, summarize_readiness

logger = get_logger(__name__)

JOB_KEYS = ("promote_flagged", "readiness_summary")


@click.command()
@click.argument("job_key", type=click.Choice(JOB_KEYS))
@click.option(
    "--token",
    envvar="TRIVIA_ADMIN_TOKEN",
    default=None,
    help="Admin bearer token; production writes are refused without it.",
)
def run(job_key: str, token: str | None):
    """
    Run a promotion job against the configured database.

    Example:
        python -m trivia.jobs.run readiness_summary
    """
    setup_logging()
    db = SessionLocal()
    try:
        store = SqlContentStore(db)
        if job_key == "promote_flagged":
            result = batch_migrate(store, BearerTokenAuth(token))
            click.echo(result.model_dump_json(indent=2))
            if not result.success:
                sys.exit(1)
        else:
            summary = summarize_readiness(store)
            click.echo(summary.model_dump_json(indent=2))
            if summary.error:
                sys.exit(1)
    except StoreError as e:
        logger.error(f"Job failed: {e}", exc_info=True)
        click.echo(f"Job failed: {e}", err=True)
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    run()
