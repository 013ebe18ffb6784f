"""Technology research: sources, scoring, synthesis and orchestration."""

from .analyzer import RepositoryStructureAnalyzer
from .cancellation import CancellationToken
from .models import CodeExample, RepositoryAnalysis, ResearchQuery, ResearchResult, Resource, ResourceType
from .orchestrator import ResearchOrchestrator, create_orchestrator, merge_resources, open_orchestrator
from .scoring import repository_relevance, text_relevance
from .synthesizer import recommend, summarize

__all__ = [
    "CancellationToken",
    "CodeExample",
    "RepositoryAnalysis",
    "RepositoryStructureAnalyzer",
    "ResearchOrchestrator",
    "ResearchQuery",
    "ResearchResult",
    "Resource",
    "ResourceType",
    "create_orchestrator",
    "merge_resources",
    "open_orchestrator",
    "recommend",
    "repository_relevance",
    "summarize",
    "text_relevance",
]
