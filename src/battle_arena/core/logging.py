"""Structured logging for battle runs.

Every entry is tagged with the application name. Inside a run the session
binds the character name and game mode, so each battle, level-up and stage
entry can be traced back to who was playing what. Narration events carry
game enums (stages, outcomes, action kinds); they are flattened to their
plain values so the console and JSON renderers print the same thing.

Example:
    >>> from battle_arena.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Battle started", monster="Goblin", turn=1)
"""

from __future__ import annotations

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any

import structlog
from structlog.types import Processor

from battle_arena.core.config import get_settings


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger

    from battle_arena.core.config import Settings


APP_NAME = "battle_arena"

_log_stream: IO[str] | None = None


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag every log entry with the application name."""
    event_dict.setdefault("app", APP_NAME)
    return event_dict


def flatten_game_values(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Replace enum members in an entry with their plain values.

    ``Stage.CAVERNS`` becomes ``3`` and ``StageOutcome.CLEARED`` becomes
    ``"cleared"``.
    """
    for key, value in event_dict.items():
        if isinstance(value, Enum):
            event_dict[key] = value.value
    return event_dict


def _build_processors(json_format: bool) -> list[Processor]:
    shared: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        flatten_game_values,
    ]
    if json_format:
        return [
            *shared,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [
        *shared,
        structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
    ]


def _open_log_stream(log_file: str | Path | None) -> IO[str] | None:
    global _log_stream  # noqa: PLW0603

    if _log_stream is not None:
        _log_stream.close()
        _log_stream = None
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        _log_stream = path.open("a", encoding="utf-8")
    return _log_stream


def configure_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    log_file: str | Path | None = None,
) -> None:
    """Configure logging for the whole application.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Render one JSON object per line instead of the
            console format.
        log_file: Append entries to this file instead of stdout.

    Example:
        >>> configure_logging(level="DEBUG", json_format=True)
    """
    stream = _open_log_stream(log_file)
    logger_factory = (
        structlog.WriteLoggerFactory(file=stream)
        if stream is not None
        else structlog.PrintLoggerFactory()
    )

    structlog.configure(
        processors=_build_processors(json_format),
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=logger_factory,
        cache_logger_on_first_use=False,
    )


def configure_from_settings(settings: Settings | None = None) -> None:
    """Configure logging from application settings.

    ``debug`` forces the DEBUG level regardless of ``log_level``.

    Args:
        settings: Settings to read; the cached settings if omitted.
    """
    settings = settings or get_settings()
    configure_logging(
        level="DEBUG" if settings.debug else settings.log_level,
        json_format=settings.log_json,
        log_file=settings.log_file,
    )


def ensure_logging_configured(settings: Settings | None = None) -> bool:
    """Configure logging from settings unless the caller already has.

    Returns:
        True if this call configured logging.
    """
    if structlog.is_configured():
        return False
    configure_from_settings(settings)
    return True


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger, typically with ``__name__``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind values included in every later entry of this context.

    Example:
        >>> bind_context(character="Aria", mode="stage")
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop every bound value."""
    structlog.contextvars.clear_contextvars()


__all__ = [
    "APP_NAME",
    "add_app_context",
    "flatten_game_values",
    "configure_logging",
    "configure_from_settings",
    "ensure_logging_configured",
    "get_logger",
    "bind_context",
    "clear_context",
]
