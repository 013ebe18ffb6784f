"""Data models for technology research."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ResourceType(str, Enum):
    """Kind of resource returned by a source."""

    DOCUMENTATION = "documentation"
    TUTORIAL = "tutorial"
    REPOSITORY = "repository"
    ARTICLE = "article"


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class ResearchQuery(FrozenModel):
    """A technology to research, why, and under which constraints."""

    technology: str
    purpose: str = ""
    constraints: tuple[str, ...] = ()

    @field_validator("technology")
    @classmethod
    def _technology_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("technology must not be empty")
        return value


class Resource(FrozenModel):
    """A link found by one of the sources, scored against the technology term."""

    title: str
    url: str
    type: ResourceType
    relevance: float = Field(ge=0.0, le=1.0)


class CodeExample(FrozenModel):
    """A context window cut from a file matched by code search."""

    language: str
    code: str
    description: str
    source: str


class ResearchResult(FrozenModel):
    """Composed result of one research call."""

    summary: str
    recommendations: list[str] = Field(default_factory=list)
    code_examples: list[CodeExample] = Field(default_factory=list)
    resources: list[Resource] = Field(default_factory=list)


class RepositoryInsights(FrozenModel):
    complexity: str
    tech_stack: list[str] = Field(default_factory=list)
    recommended_improvements: list[str] = Field(default_factory=list)


class RepositoryAnalysis(FrozenModel):
    """Result of the (stubbed) clone-and-inspect analysis."""

    repository: str
    structure: list[str] = Field(default_factory=list)
    technologies: list[str] | None = None
    patterns: list[str] | None = None
    insights: RepositoryInsights


# --- Upstream response records, validated at the adapter boundary ---


class RepositoryItem(BaseModel):
    full_name: str
    html_url: str
    name: str
    stargazers_count: int
    description: str | None = None


class RepositorySearchResponse(BaseModel):
    items: list[RepositoryItem]


class CodeSearchRepository(BaseModel):
    full_name: str


class CodeSearchItem(BaseModel):
    url: str
    name: str
    html_url: str
    repository: CodeSearchRepository


class CodeSearchResponse(BaseModel):
    # Items are validated one by one so a malformed hit only drops that file.
    items: list[dict[str, Any]]


class FileContentResponse(BaseModel):
    content: str
    encoding: str = "base64"
