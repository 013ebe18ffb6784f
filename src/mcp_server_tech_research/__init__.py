"""MCP server for technology research."""

from .config import settings
from .exceptions import AdapterFailure, RepositoryAnalysisError, ResearchCancelled, ResearchFailed, TechResearchError
from .research import ResearchOrchestrator, ResearchQuery, ResearchResult

__all__ = [
    "settings",
    "AdapterFailure",
    "RepositoryAnalysisError",
    "ResearchCancelled",
    "ResearchFailed",
    "ResearchOrchestrator",
    "ResearchQuery",
    "ResearchResult",
    "TechResearchError",
]
