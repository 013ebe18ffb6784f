"""MCP server exposing technology research as tools."""

import json
import logging
import sys
import time


def _configure_stdio_logging() -> None:
    """Configure logging for stdio MCP mode - all logs MUST go to stderr.

    In stdio mode, stdout is reserved exclusively for JSON-RPC messages.
    Any logging or print() to stdout corrupts the protocol stream.
    """
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))

    root = logging.getLogger()
    root.handlers = [stderr_handler]
    root.setLevel(logging.WARNING)

    for logger_name in ["httpx", "httpcore", "asyncio"]:
        dep_logger = logging.getLogger(logger_name)
        dep_logger.setLevel(logging.WARNING)
        dep_logger.handlers = [stderr_handler]
        dep_logger.propagate = False


_configure_stdio_logging()

# ruff: noqa: E402 - Intentional late imports after logging configuration
from fastmcp import Context, FastMCP
from pydantic import ValidationError

from .config import settings
from .exceptions import RepositoryAnalysisError, ResearchFailed
from .observability import setup_structured_logging
from .research import RepositoryStructureAnalyzer, ResearchQuery, open_orchestrator
from .research.report import render_markdown
from .utils import save_research_report

logger = logging.getLogger("mcp_server_tech_research")
logger.setLevel(getattr(logging, settings.server.logging_level.upper()))

_server_start_time = time.time()


def serve() -> FastMCP:
    """Create and configure the MCP server."""
    setup_structured_logging(settings.server.logging_level)

    server = FastMCP("mcp_server_tech_research")

    @server.tool()
    async def research_technology(
        technology: str,
        ctx: Context,
        purpose: str = "",
        constraints: list[str] | None = None,
        output_format: str = "json",
    ) -> str:
        """
        Research a technology across repository search, documentation sites and code search.

        Args:
            technology: The technology to research (e.g. "React")
            purpose: What the technology would be used for (e.g. "building a web dashboard")
            constraints: Optional constraints such as "performance" or "security"
            output_format: "json" for the structured result, "markdown" for a report

        Returns:
            The research result as JSON or markdown
        """
        try:
            query = ResearchQuery(technology=technology, purpose=purpose, constraints=tuple(constraints or ()))
        except ValidationError as e:
            return f"Error: invalid research query: {e.errors()[0]['msg']}"

        logger.info(f"Starting research on: {query.technology}")
        await ctx.info(f"Researching {query.technology}")

        try:
            async with open_orchestrator(settings) as orchestrator:
                result = await orchestrator.research_topic(query)
        except ResearchFailed as e:
            logger.error(f"Research failed: {e}")
            return f"Error: {e}"

        report = render_markdown(query, result)
        if settings.server.results_dir:
            saved_path = save_research_report(query, result)
            await ctx.info(f"Saved to: {saved_path.name}")

        if output_format == "markdown":
            return report
        return json.dumps(result.model_dump(mode="json"), indent=2)

    @server.tool()
    async def analyze_repository(
        repo_url: str,
        include_technologies: bool = True,
        include_patterns: bool = True,
    ) -> str:
        """
        Clone a repository and report its structure, technologies and patterns.

        The structure/technology/pattern detection is a placeholder and returns
        fixed values regardless of the repository contents.

        Args:
            repo_url: Git URL of the repository to analyze
            include_technologies: Include detected technologies in the response
            include_patterns: Include detected patterns in the response

        Returns:
            JSON object with the analysis
        """
        analyzer = RepositoryStructureAnalyzer(
            clone_depth=settings.analyzer.clone_depth,
            keep_clone=settings.analyzer.keep_clone,
            work_dir=settings.analyzer.work_dir,
        )
        try:
            analysis = await analyzer.analyze(repo_url, include_technologies, include_patterns)
        except RepositoryAnalysisError as e:
            return f"Error: {e}"
        return json.dumps(analysis.model_dump(mode="json", exclude_none=True), indent=2)

    @server.tool()
    async def health_check() -> str:
        """
        Health check endpoint with process stats and research configuration.

        Returns:
            JSON object with server health status
        """
        import psutil

        process = psutil.Process()
        memory_info = process.memory_info()

        return json.dumps(
            {
                "status": "healthy",
                "uptime_seconds": round(time.time() - _server_start_time, 1),
                "memory_mb": round(memory_info.rss / 1024 / 1024, 1),
                "github_token_configured": settings.github.get_token() is not None,
                "documentation_sites": len(settings.docs.sites),
                "documentation_fetch_mode": settings.docs.fetch_mode,
                "dedupe": settings.research.dedupe,
            },
            indent=2,
        )

    return server


server_instance = serve()


def main() -> None:
    """Entry point for MCP server."""
    transport = settings.server.transport

    if transport == "stdio":
        server_instance.run(transport="stdio")
    elif transport in ("streamable-http", "sse"):
        logger.info(f"Starting MCP tech research server (transport: {transport})")
        logger.info(f"HTTP server at http://{settings.server.host}:{settings.server.port}/mcp")
        server_instance.run(transport=transport, host=settings.server.host, port=settings.server.port)
    else:
        raise ValueError(f"Unknown transport: {transport}")


if __name__ == "__main__":
    main()
