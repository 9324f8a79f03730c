"""structlog setup for config-diff.

Events are JSON lines on stderr. stdout belongs to the rendered report, so no
event may reach it, including events emitted by library callers that never run
the CLI.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

DEFAULT_LEVEL = "warning"


def _stderr_logger(*_args: Any) -> structlog.PrintLogger:
    # sys.stderr is looked up per event so redirected or captured streams are honoured.
    return structlog.PrintLogger(file=sys.stderr)


def setup_logging(level: str = DEFAULT_LEVEL) -> None:
    """Emit events at ``level`` and above as JSON lines on stderr."""

    threshold = getattr(logging, level.upper(), logging.WARNING)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(threshold),
        context_class=dict,
        logger_factory=_stderr_logger,
        # Module loggers are created at import; the CLI reconfigures afterwards.
        cache_logger_on_first_use=False,
    )


def get_logger(component: str) -> Any:
    """Return a logger bound to ``component``.

    structlog's own defaults print to stdout, so the stderr setup is installed
    when nothing has configured structlog yet.
    """

    if not structlog.is_configured():
        setup_logging()
    return structlog.get_logger(component=component)
