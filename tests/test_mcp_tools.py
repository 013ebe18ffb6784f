"""Tests for MCP server tools using FastMCP in-memory testing."""

import json
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, patch

import pytest
from fastmcp import Client

from mcp_server_tech_research.exceptions import RepositoryAnalysisError, ResearchFailed
from mcp_server_tech_research.research.models import (
    CodeExample,
    RepositoryAnalysis,
    RepositoryInsights,
    ResearchResult,
    Resource,
    ResourceType,
)

RESULT = ResearchResult(
    summary="Research Summary for React:\n\nBased on analysis of 1 repositories and 0 documentation sources:",
    recommendations=["Consider using facebook/react as it has high community adoption"],
    code_examples=[CodeExample(language="typescript", code="useState()", description="Example from acme/app", source="https://github.com/acme/app")],
    resources=[Resource(title="facebook/react", url="https://github.com/facebook/react", type=ResourceType.REPOSITORY, relevance=0.95)],
)


class FakeOrchestrator:
    def __init__(self, result: ResearchResult | None = None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.queries = []

    async def research_topic(self, query, token=None):
        self.queries.append(query)
        if self.error:
            raise self.error
        return self.result


def _opener(orchestrator: FakeOrchestrator):
    @asynccontextmanager
    async def open_orchestrator(settings):
        yield orchestrator

    return open_orchestrator


@pytest.fixture
async def client() -> AsyncGenerator[Client, None]:
    """Create an in-memory FastMCP client."""
    from mcp_server_tech_research.server import serve

    async with Client(serve()) as client:
        yield client


@pytest.fixture
def no_results_dir(monkeypatch):
    from mcp_server_tech_research.config import settings

    monkeypatch.setattr(settings.server, "results_dir", None)


class TestListTools:
    """Test that all expected tools are registered."""

    @pytest.mark.asyncio
    async def test_list_tools(self, client: Client):
        tools = await client.list_tools()
        assert sorted(tool.name for tool in tools) == ["analyze_repository", "health_check", "research_technology"]

    @pytest.mark.asyncio
    async def test_research_technology_schema(self, client: Client):
        tools = await client.list_tools()
        tool = next(t for t in tools if t.name == "research_technology")

        assert tool.description is not None
        schema = str(tool.inputSchema)
        assert "technology" in schema
        assert "constraints" in schema


@pytest.mark.usefixtures("no_results_dir")
class TestResearchTechnology:
    @pytest.mark.asyncio
    async def test_returns_json_result(self, client: Client):
        orchestrator = FakeOrchestrator(RESULT)
        with patch("mcp_server_tech_research.server.open_orchestrator", _opener(orchestrator)):
            result = await client.call_tool(
                "research_technology",
                {"technology": "React", "purpose": "dashboard", "constraints": ["performance"]},
            )

        data = json.loads(result.content[0].text)
        assert set(data) == {"summary", "recommendations", "code_examples", "resources"}
        assert data["resources"][0]["type"] == "repository"
        assert data["resources"][0]["relevance"] == 0.95

        query = orchestrator.queries[0]
        assert query.technology == "React"
        assert query.purpose == "dashboard"
        assert query.constraints == ("performance",)

    @pytest.mark.asyncio
    async def test_markdown_output(self, client: Client):
        with patch("mcp_server_tech_research.server.open_orchestrator", _opener(FakeOrchestrator(RESULT))):
            result = await client.call_tool("research_technology", {"technology": "React", "output_format": "markdown"})

        text = result.content[0].text
        assert text.startswith("# Research Report: React")
        assert "[facebook/react](https://github.com/facebook/react)" in text

    @pytest.mark.asyncio
    async def test_blank_technology_is_rejected(self, client: Client):
        orchestrator = FakeOrchestrator(RESULT)
        with patch("mcp_server_tech_research.server.open_orchestrator", _opener(orchestrator)):
            result = await client.call_tool("research_technology", {"technology": "   "})

        assert result.content[0].text.startswith("Error: invalid research query")
        assert orchestrator.queries == []

    @pytest.mark.asyncio
    async def test_research_failure(self, client: Client):
        orchestrator = FakeOrchestrator(error=ResearchFailed("Research operation failed"))
        with patch("mcp_server_tech_research.server.open_orchestrator", _opener(orchestrator)):
            result = await client.call_tool("research_technology", {"technology": "React"})

        assert result.content[0].text == "Error: Research operation failed"

    @pytest.mark.asyncio
    async def test_saves_report_when_results_dir_set(self, client: Client, monkeypatch, tmp_path):
        from mcp_server_tech_research.config import settings

        monkeypatch.setattr(settings.server, "results_dir", str(tmp_path))
        with patch("mcp_server_tech_research.server.open_orchestrator", _opener(FakeOrchestrator(RESULT))):
            await client.call_tool("research_technology", {"technology": "React"})

        reports = list(tmp_path.glob("*.md"))
        assert len(reports) == 1
        assert reports[0].read_text().startswith("# Research Report: React")
        meta = json.loads(reports[0].with_suffix(".json").read_text())
        assert meta["query"]["technology"] == "React"


class TestAnalyzeRepository:
    @pytest.mark.asyncio
    async def test_analysis_omits_excluded_fields(self, client: Client):
        analysis = RepositoryAnalysis(
            repository="https://github.com/acme/app.git",
            structure=["src/"],
            technologies=None,
            patterns=["MVC Architecture"],
            insights=RepositoryInsights(complexity="low", tech_stack=["TypeScript"], recommended_improvements=["Add API documentation"]),
        )
        with patch("mcp_server_tech_research.server.RepositoryStructureAnalyzer") as analyzer_class:
            analyzer_class.return_value.analyze = AsyncMock(return_value=analysis)
            result = await client.call_tool("analyze_repository", {"repo_url": "https://github.com/acme/app.git", "include_technologies": False})

        data = json.loads(result.content[0].text)
        assert "technologies" not in data
        assert data["patterns"] == ["MVC Architecture"]
        assert data["insights"]["complexity"] == "low"
        analyzer_class.return_value.analyze.assert_awaited_once_with("https://github.com/acme/app.git", False, True)

    @pytest.mark.asyncio
    async def test_analysis_failure(self, client: Client):
        with patch("mcp_server_tech_research.server.RepositoryStructureAnalyzer") as analyzer_class:
            analyzer_class.return_value.analyze = AsyncMock(side_effect=RepositoryAnalysisError("Repository analysis failed"))
            result = await client.call_tool("analyze_repository", {"repo_url": "https://example.invalid/repo.git"})

        assert result.content[0].text == "Error: Repository analysis failed"


class TestHealthCheck:
    @pytest.mark.asyncio
    async def test_health_check(self, client: Client, monkeypatch):
        from mcp_server_tech_research.config import settings

        monkeypatch.setattr(settings.github, "token", None)
        result = await client.call_tool("health_check", {})
        data = json.loads(result.content[0].text)

        assert data["status"] == "healthy"
        assert data["github_token_configured"] is False
        assert data["documentation_fetch_mode"] in ("sequential", "concurrent")
        assert data["memory_mb"] > 0
