"""Observability helpers: structured logging with per-research context."""

from .logging import get_research_logger, research_context, setup_structured_logging

__all__ = [
    "get_research_logger",
    "research_context",
    "setup_structured_logging",
]
