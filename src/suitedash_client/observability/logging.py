"""structlog setup for the SuiteDash client and CLI."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars

if TYPE_CHECKING:
    from suitedash_core.config.settings import Settings

# httpx logs every request line at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "diskcache")


def configure_logging(settings: Settings) -> None:
    """Route structlog and stdlib logging through one stderr handler.

    ``settings.log_format`` picks JSON lines or the console renderer;
    ``settings.log_level`` sets the root level.
    """
    level = _resolve_level(settings.log_level)
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _select_renderer(settings.log_format),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def bind_resource_context(resource: str, **extra: object) -> None:
    """Attach the active resource screen to every following log entry."""
    bind_contextvars(resource=resource, **extra)


def clear_resource_context() -> None:
    clear_contextvars()


def _pre_chain() -> list[structlog.types.Processor]:
    """Processors applied to both structlog and foreign stdlib records."""
    return [
        merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _select_renderer(log_format: str) -> structlog.types.Processor:
    """JSON lines for machines, colourised key=value for terminals."""
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


_LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _resolve_level(level_name: str) -> int:
    """Map a level name to its logging constant; unknown names mean INFO."""
    return _LEVELS.get(level_name.upper(), logging.INFO)
