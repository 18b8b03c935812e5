import logging
import os
import sys
from typing import Any, Literal

import structlog

LogFormat = Literal["json", "plain", "auto"]

CI_ENV_VARS = ("CI", "CONTINUOUS_INTEGRATION", "GITHUB_ACTIONS", "JENKINS_URL")


def _wants_json() -> bool:
    """JSON lines under CI or when stderr is not an interactive terminal."""
    if any(os.environ.get(var) for var in CI_ENV_VARS):
        return True
    return not sys.stderr.isatty()


def setup_logging(
    format_type: LogFormat = "auto", level: int = logging.INFO
) -> None:
    """
    Configure structlog for ragchunk events.

    Events are written to stderr, leaving stdout to chunk output.

    Args:
        format_type: "json", "plain", or "auto" (json when ``_wants_json``)
        level: Events below this level are dropped; fallback decisions are
            logged at debug.
    """
    renderer: Any
    if format_type == "json" or (format_type == "auto" and _wants_json()):
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


log = structlog.get_logger()
