"""Repository structure analysis.

The analysis is a stub: the repository is shallow-cloned, but structure,
technologies and patterns are fixed values that do not depend on what was
cloned. Only the clone step is real.
"""

import asyncio
import logging
import shutil
import tempfile
import time
import uuid
from pathlib import Path

from ..exceptions import RepositoryAnalysisError
from .models import RepositoryAnalysis, RepositoryInsights

logger = logging.getLogger(__name__)

STUB_STRUCTURE = ["src/", "tests/", "docs/", "package.json"]
STUB_TECHNOLOGIES = ["TypeScript", "Node.js", "Express", "Jest"]
STUB_PATTERNS = ["MVC Architecture", "Service Layer Pattern", "Repository Pattern"]

RECOMMENDED_IMPROVEMENTS = [
    "Consider adding comprehensive unit tests",
    "Implement CI/CD pipeline",
    "Add API documentation",
    "Set up monitoring and logging",
]


def complexity_for(structure: list[str]) -> str:
    if len(structure) > 20:
        return "high"
    if len(structure) > 10:
        return "medium"
    return "low"


class RepositoryStructureAnalyzer:
    """Clones a repository and reports its (placeholder) structure."""

    def __init__(self, *, clone_depth: int = 1, keep_clone: bool = False, work_dir: str | None = None):
        self.clone_depth = clone_depth
        self.keep_clone = keep_clone
        self.work_dir = Path(work_dir).expanduser() if work_dir else Path(tempfile.gettempdir())

    def clone_path(self) -> Path:
        """A fresh, uniquely named directory for one clone."""
        return self.work_dir / f"repo-analysis-{time.time_ns()}-{uuid.uuid4().hex[:8]}"

    async def clone(self, repo_url: str, target: Path) -> None:
        """Shallow-clone ``repo_url`` into ``target``."""
        target.parent.mkdir(parents=True, exist_ok=True)
        try:
            process = await asyncio.create_subprocess_exec(
                "git",
                "clone",
                "--depth",
                str(self.clone_depth),
                repo_url,
                str(target),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            _, stderr = await process.communicate()
        except OSError as e:
            raise RepositoryAnalysisError("Repository analysis failed") from e

        if process.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip()
            logger.error(f"git clone of {repo_url} exited with {process.returncode}: {message}")
            raise RepositoryAnalysisError("Repository analysis failed")

    async def analyze(
        self,
        repo_url: str,
        include_technologies: bool = True,
        include_patterns: bool = True,
    ) -> RepositoryAnalysis:
        """Clone ``repo_url`` and return the analysis."""
        target = self.clone_path()
        logger.info(f"Cloning {repo_url} into {target}")
        try:
            await self.clone(repo_url, target)

            structure = list(STUB_STRUCTURE)
            technologies = list(STUB_TECHNOLOGIES)
            patterns = list(STUB_PATTERNS)
        finally:
            if not self.keep_clone:
                shutil.rmtree(target, ignore_errors=True)

        return RepositoryAnalysis(
            repository=repo_url,
            structure=structure,
            technologies=technologies if include_technologies else None,
            patterns=patterns if include_patterns else None,
            insights=RepositoryInsights(
                complexity=complexity_for(structure),
                tech_stack=technologies[:5],
                recommended_improvements=list(RECOMMENDED_IMPROVEMENTS),
            ),
        )
