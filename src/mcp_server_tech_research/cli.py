"""CLI interface for the tech research engine."""

import asyncio
import json
from pathlib import Path

import typer
from pydantic import ValidationError

from .config import settings
from .exceptions import RepositoryAnalysisError, ResearchFailed
from .observability import setup_structured_logging
from .research import RepositoryStructureAnalyzer, ResearchQuery, open_orchestrator
from .research.report import render_markdown

app = typer.Typer(help="Technology research CLI: repositories, documentation and code examples")


@app.command()
def research(
    technology: str = typer.Argument(..., help="Technology to research"),
    purpose: str = typer.Option("", "--purpose", "-p", help="What the technology would be used for"),
    constraints: list[str] = typer.Option(None, "--constraint", "-c", help="Constraint such as 'performance' (repeatable)"),
    as_json: bool = typer.Option(False, "--json", help="Print the structured result as JSON"),
    save_to: str = typer.Option(None, "--save", "-s", help="File path to save the markdown report"),
) -> None:
    """Research a technology across all sources."""
    setup_structured_logging(settings.server.logging_level)

    try:
        query = ResearchQuery(technology=technology, purpose=purpose, constraints=tuple(constraints or ()))
    except ValidationError as e:
        typer.echo(f"Error: invalid research query: {e.errors()[0]['msg']}", err=True)
        raise typer.Exit(code=2) from e

    async def _research():
        async with open_orchestrator(settings) as orchestrator:
            return await orchestrator.research_topic(query)

    try:
        result = asyncio.run(_research())
    except ResearchFailed as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    report = render_markdown(query, result)
    if save_to:
        path = Path(save_to).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(report, encoding="utf-8")

    if as_json:
        print(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        print(report)


@app.command()
def analyze(
    repo_url: str = typer.Argument(..., help="Git URL of the repository"),
    no_technologies: bool = typer.Option(False, "--no-technologies", help="Omit detected technologies"),
    no_patterns: bool = typer.Option(False, "--no-patterns", help="Omit detected patterns"),
) -> None:
    """Clone a repository and print its analysis."""
    setup_structured_logging(settings.server.logging_level)

    analyzer = RepositoryStructureAnalyzer(
        clone_depth=settings.analyzer.clone_depth,
        keep_clone=settings.analyzer.keep_clone,
        work_dir=settings.analyzer.work_dir,
    )
    try:
        analysis = asyncio.run(analyzer.analyze(repo_url, not no_technologies, not no_patterns))
    except RepositoryAnalysisError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    print(json.dumps(analysis.model_dump(mode="json", exclude_none=True), indent=2))


@app.command()
def config() -> None:
    """Show current configuration."""
    print(f"API URL: {settings.github.api_url}")
    print(f"Token: {'(configured)' if settings.github.get_token() else '(none)'}")
    print(f"Languages: {', '.join(settings.github.languages)}")
    print(f"Documentation sites: {len(settings.docs.sites)} ({settings.docs.fetch_mode})")
    print(f"Site timeout: {settings.docs.timeout}s")
    print(f"Dedupe: {settings.research.dedupe}")
    print(f"Deadline: {settings.research.deadline_seconds or '(none)'}")


@app.command()
def server() -> None:
    """Start the MCP server."""
    from .server import main

    main()


if __name__ == "__main__":
    app()
