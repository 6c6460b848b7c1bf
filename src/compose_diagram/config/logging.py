"""Logging for compose_diagram.

Module loggers are structlog wrappers around stdlib loggers under the
``compose_diagram`` namespace, so a host application's logging setup decides
what is shown. The command line calls ``configure_logging`` to get console or
JSON lines on stderr.
"""

from __future__ import annotations

import logging
import sys

import structlog

PACKAGE_LOGGER = "compose_diagram"


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Structlog logger that emits through ``logging.getLogger(name)``."""
    return structlog.wrap_logger(logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger)


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Send structlog and stdlib records to one stderr handler.

    ``verbose`` lowers the package logger to DEBUG; otherwise only warnings
    and errors are shown. ``log_json`` switches to one JSON object per line.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
