"""structlog setup for the inxtone CLI and library callers.

stdout carries assembled context and prompts, so log records always go to
stderr.
"""

import logging
import sys
from typing import Any

import structlog


def _render_chain(log_format: str) -> list[Any]:
    if log_format == "console":
        return [structlog.dev.ConsoleRenderer(colors=False)]
    return [
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(ensure_ascii=False),
    ]


def configure_logging(log_level: str = "warning", log_format: str = "console") -> None:
    """Route structlog events through stdlib logging on stderr.

    Args:
        log_level: Level name, case-insensitive. Unknown names mean WARNING.
        log_format: "console" for human-readable lines, otherwise JSON lines
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.WARNING

    logging.basicConfig(format="%(message)s", stream=sys.stderr)
    logging.getLogger("inxtone").setLevel(level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            *_render_chain(log_format),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
