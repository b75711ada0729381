"""Structured logging via structlog.

Configured once by the CLI before any work is done. All subsequent calls to
`structlog.get_logger()` (or `logging.getLogger()` via the stdlib bridge)
use this configuration.

Renderer selection:
  debug=True  `ConsoleRenderer` with colours, DEBUG level.
  debug=False `JSONRenderer`, INFO level.

Log lines are written to stderr. Stdout carries the operator output (JWT,
API responses, remote URL) and must stay clean enough to pipe.

Context binding:
  The CLI binds `client_id` and `installation_id` with
  `structlog.contextvars.bind_contextvars`, so every log line of a run
  carries them without being passed around.
"""

from __future__ import annotations

import logging
import sys

import structlog


def _drop_secrets(
    logger: logging.Logger,
    method: str,
    event_dict: dict,
) -> dict:
    """Structlog processor: never let a JWT or token reach a log sink."""
    for key in ("jwt", "app_jwt", "token", "access_token"):
        if key in event_dict:
            event_dict[key] = "***"
    return event_dict


def configure_structlog(debug: bool = False) -> None:
    """Configure structlog for the process lifetime.

    Calling multiple times is safe; the last call wins.
    """
    level = logging.DEBUG if debug else logging.INFO

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _drop_secrets,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if debug:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    # Bridge stdlib logging so httpx/httpcore output lands on the same stream.
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
        force=True,
    )
    # httpx logs full request lines at INFO; keep them for --debug only.
    logging.getLogger("httpx").setLevel(level if debug else logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
