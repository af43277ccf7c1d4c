"""Content environment resolution.

Staging content lives in tables carrying a fixed suffix (``questions_dev``),
production content in the bare tables (``questions``). Everything that reads
or writes content resolves concrete table names through this module.

``EnvironmentManager`` holds the current mode for interactive callers (admin
API, tooling). Pipeline operations never consult it mid-operation: they take
a mode, or a ``TableNames`` snapshot resolved once, as an explicit argument.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from threading import Lock

from trivia.core.config import settings
from trivia.core.logging import get_logger

logger = get_logger(__name__)

CATEGORIES = "categories"
QUESTIONS = "questions"


class Environment(str, Enum):
    """Logical content environment."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"


# Staging is the development dataset; production is what live traffic reads.
STAGING = Environment.DEVELOPMENT


def table_name_for(logical_name: str, mode: Environment, suffix: str | None = None) -> str:
    """Map a logical table name to the concrete table for ``mode``."""
    if mode == Environment.PRODUCTION:
        return logical_name
    return f"{logical_name}{suffix if suffix is not None else settings.DEV_TABLE_SUFFIX}"


@dataclass(frozen=True)
class TableNames:
    """Concrete table names for one environment, resolved once."""

    mode: Environment
    categories: str
    questions: str


def resolve_tables(mode: Environment) -> TableNames:
    """Snapshot the concrete table names for ``mode``."""
    return TableNames(
        mode=mode,
        categories=table_name_for(CATEGORIES, mode),
        questions=table_name_for(QUESTIONS, mode),
    )


@dataclass(frozen=True)
class PromotionTables:
    """Source (staging) and target (production) tables for one promotion run."""

    source: TableNames
    target: TableNames


def resolve_promotion_tables() -> PromotionTables:
    return PromotionTables(
        source=resolve_tables(STAGING),
        target=resolve_tables(Environment.PRODUCTION),
    )


Listener = Callable[[Environment], None]


class EnvironmentManager:
    """Process-wide current mode with change notification.

    Persisting the mode across restarts is left to the caller; the initial
    mode comes from ``settings.CONTENT_ENV``.
    """

    def __init__(self, initial: Environment | None = None):
        self._mode = initial or Environment(settings.CONTENT_ENV)
        self._listeners: list[Listener] = []
        self._lock = Lock()

    def get(self) -> Environment:
        return self._mode

    def set(self, mode: Environment) -> None:
        """Change the current mode and notify subscribers (no-op if unchanged)."""
        with self._lock:
            if mode == self._mode:
                return
            previous = self._mode
            self._mode = mode
            listeners = list(self._listeners)

        logger.info(
            "content environment changed",
            extra={"event": "environment_changed", "from": previous.value, "to": mode.value},
        )
        for listener in listeners:
            listener(mode)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def tables(self) -> TableNames:
        return resolve_tables(self._mode)


# Global manager instance
environment_manager = EnvironmentManager()
