"""Opt-in structlog rendering for the client's log events.

The client emits structured events through structlog.get_logger(__name__),
so every event lands on a stdlib logger under the "kairosdb_client"
namespace. Nothing is configured on import. An application that wants those
events rendered calls configure_logging() once; it installs a single handler
on the "kairosdb_client" logger and leaves the root logger, and any handler
the application already owns, untouched.
"""

import logging
import sys
from typing import IO, Optional

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

LIBRARY_LOGGER = "kairosdb_client"

# Marks the handler installed by configure_logging so a second call replaces it
_HANDLER_NAME = "kairosdb_client.structlog"


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Stamp every event with the library name."""
    event_dict["app"] = "kairosdb-client"
    return event_dict


def _shared_processors(is_production: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
    ]
    if is_production:
        processors.append(structlog.processors.format_exc_info)
    return processors


def _build_handler(
    level: int, is_production: bool, stream: Optional[IO[str]]
) -> logging.Handler:
    renderer: Processor
    if is_production:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=_shared_processors(is_production),
        )
    )
    return handler


def configure_logging(
    log_level: str = "INFO",
    environment: str = "development",
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """Render the client's events through a handler on its own logger namespace.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        environment: "production" renders JSON lines, anything else console text
        stream: Output stream (default: stderr)

    Returns:
        The "kairosdb_client" stdlib logger that received the handler
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    is_production = environment.lower() == "production"

    structlog.configure(
        processors=_shared_processors(is_production)
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    library_logger = logging.getLogger(LIBRARY_LOGGER)
    for existing in list(library_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            library_logger.removeHandler(existing)
    library_logger.addHandler(_build_handler(level, is_production, stream))
    library_logger.setLevel(level)
    # Events are rendered here; the application's root handlers would print them twice
    library_logger.propagate = False

    # Every attempt is already logged by the client
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    structlog.get_logger(__name__).debug(
        "Logging configured",
        log_level=log_level,
        environment=environment,
        renderer="json" if is_production else "console",
    )
    return library_logger
