"""Research orchestrator: concurrent fan-out to all sources, then synthesis."""

import asyncio
import logging
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import httpx

from ..exceptions import ResearchFailed
from ..observability import research_context
from .cancellation import CancellationToken
from .models import ResearchQuery, ResearchResult, Resource
from .sources import (
    CodeExampleSource,
    CodeSampleAdapter,
    DocumentationSourceAdapter,
    RepositorySourceAdapter,
    ResourceSource,
)
from .synthesizer import recommend, summarize

if TYPE_CHECKING:
    from ..config import AppSettings

logger = logging.getLogger(__name__)

DEDUPE_POLICIES = ("none", "url")


def merge_resources(repo_resources: list[Resource], doc_resources: list[Resource], dedupe: str = "none") -> list[Resource]:
    """Combine repository and documentation resources, repositories first.

    With ``dedupe="none"`` the lists are concatenated as-is, so one URL may
    appear twice with different provenance. ``dedupe="url"`` keeps the first
    resource seen for each URL.
    """
    combined = [*repo_resources, *doc_resources]
    if dedupe == "none":
        return combined
    if dedupe != "url":
        raise ValueError(f"Unknown dedupe policy: {dedupe}")

    seen: set[str] = set()
    unique: list[Resource] = []
    for resource in combined:
        if resource.url in seen:
            continue
        seen.add(resource.url)
        unique.append(resource)
    return unique


class ResearchOrchestrator:
    """Runs one research call across all sources and composes the result.

    Each source guarantees it returns (possibly empty) results instead of
    raising, so the only failure surfaced to callers is ``ResearchFailed``
    when composing the result itself goes wrong.
    """

    def __init__(
        self,
        repositories: ResourceSource,
        documentation: ResourceSource,
        code_samples: CodeExampleSource,
        *,
        dedupe: str = "none",
        deadline_seconds: float | None = None,
    ):
        if dedupe not in DEDUPE_POLICIES:
            raise ValueError(f"Unknown dedupe policy: {dedupe}")
        self.repositories = repositories
        self.documentation = documentation
        self.code_samples = code_samples
        self.dedupe = dedupe
        self.deadline_seconds = deadline_seconds

    async def research_topic(self, query: ResearchQuery, token: CancellationToken | None = None) -> ResearchResult:
        """Research a technology and return the best-effort result."""
        if token is None:
            token = CancellationToken(timeout=self.deadline_seconds)

        with research_context(str(uuid.uuid4()), query.technology) as research_logger:
            return await self._research(query, token, research_logger)

    async def _research(self, query: ResearchQuery, token: CancellationToken, research_logger) -> ResearchResult:
        research_logger.info("research_started", purpose=query.purpose[:100], constraints=list(query.constraints))

        try:
            repo_resources, doc_resources, code_examples = await asyncio.gather(
                self.repositories.search(query.technology, token),
                self.documentation.search(query.technology, token),
                self.code_samples.search(query.technology, token),
            )

            result = ResearchResult(
                summary=summarize(query, repo_resources, doc_resources),
                recommendations=recommend(query, repo_resources),
                code_examples=code_examples,
                resources=merge_resources(repo_resources, doc_resources, self.dedupe),
            )
            research_logger.info(
                "research_completed",
                repositories=len(repo_resources),
                documentation=len(doc_resources),
                code_examples=len(code_examples),
            )
            return result
        except Exception as e:
            logger.error(f"Research failed for '{query.technology}': {e}")
            research_logger.error("research_failed", error=str(e))
            raise ResearchFailed("Research operation failed") from e


def create_orchestrator(settings: "AppSettings", client: httpx.AsyncClient) -> ResearchOrchestrator:
    """Wire the default sources from settings around a shared HTTP client."""
    github = settings.github
    docs = settings.docs
    api_token = github.get_token()

    return ResearchOrchestrator(
        repositories=RepositorySourceAdapter(
            client,
            api_url=github.api_url,
            api_token=api_token,
            languages=github.languages,
            min_stars=github.min_stars,
            page_size=github.repository_page_size,
            timeout=github.request_timeout,
        ),
        documentation=DocumentationSourceAdapter(
            client,
            sites=docs.sites,
            timeout=docs.timeout,
            user_agent=docs.user_agent,
            fetch_mode=docs.fetch_mode,
            min_relevance=docs.min_relevance,
            max_results=docs.max_results,
            min_title_length=docs.min_title_length,
        ),
        code_samples=CodeSampleAdapter(
            client,
            api_url=github.api_url,
            api_token=api_token,
            languages=github.languages,
            page_size=github.code_page_size,
            timeout=github.request_timeout,
        ),
        dedupe=settings.research.dedupe,
        deadline_seconds=settings.research.deadline_seconds,
    )


@asynccontextmanager
async def open_orchestrator(settings: "AppSettings") -> AsyncIterator[ResearchOrchestrator]:
    """Create an orchestrator with its own HTTP client for the duration of the block."""
    async with httpx.AsyncClient(follow_redirects=True) as client:
        yield create_orchestrator(settings, client)
