"""structlog setup and the per-research logging context."""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

RESEARCH_LOGGER_NAME = "mcp_server_tech_research.research"

_configured = False


def setup_structured_logging(level: str = "INFO") -> None:
    """Route structlog events through stdlib logging as JSON lines on stderr.

    Safe to call more than once; only the first call configures.
    """
    global _configured
    if _configured:
        return

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=getattr(logging, level.upper()))
    _configured = True


@contextmanager
def research_context(research_id: str, technology: str) -> Iterator[structlog.stdlib.BoundLogger]:
    """Tag every event logged inside the block with the research id and technology."""
    with structlog.contextvars.bound_contextvars(research_id=research_id, technology=technology):
        yield get_research_logger()


def get_research_logger() -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(RESEARCH_LOGGER_NAME)
