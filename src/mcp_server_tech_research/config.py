"""Configuration management using Pydantic settings with optional file persistence."""

import json
import os
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Paths ---

APP_NAME = "mcp-server-tech-research"


def get_config_dir() -> Path:
    """Get the configuration directory (e.g. ~/.config/mcp-server-tech-research)."""
    if os.name == "nt":
        base = Path(os.environ.get("APPDATA", Path.home() / ".config")).expanduser()
    else:
        base = Path("~/.config").expanduser()

    path = base / APP_NAME
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_default_results_dir() -> Path:
    """Get the default directory for saving research results."""
    base = Path("~/Documents").expanduser()
    if not base.exists():
        base = Path.home()

    path = base / "tech-research-results"
    return path


CONFIG_FILE = get_config_dir() / "config.json"


def load_config_file() -> dict[str, Any]:
    """Load settings from the JSON config file if it exists."""
    if not CONFIG_FILE.exists():
        return {}

    try:
        text = CONFIG_FILE.read_text(encoding="utf-8")
        if not text.strip():
            return {}
        return json.loads(text)
    except Exception:
        return {}


def save_config_file(config_data: dict[str, Any]) -> None:
    """Save settings to the JSON config file."""
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(config_data, indent=2), encoding="utf-8")


# Standard environment variable names for the GitHub token (first match wins)
STANDARD_TOKEN_ENV_VARS: list[str] = ["GITHUB_TOKEN", "GH_TOKEN"]

DEFAULT_DOCUMENTATION_SITES: list[str] = [
    "https://developer.mozilla.org/en-US/search?q={query}",
    "https://stackoverflow.com/search?q={query}",
    "https://docs.npmjs.com/search?q={query}",
]


class GitHubSettings(BaseSettings):
    """Repository and code search configuration."""

    model_config = SettingsConfigDict(env_prefix="MCP_GITHUB_")

    token: Optional[SecretStr] = Field(default=None, description="Bearer token override (highest priority)")
    api_url: str = Field(default="https://api.github.com")
    languages: list[str] = Field(default_factory=lambda: ["typescript", "javascript"], description="Language qualifiers added to every search")
    min_stars: int = Field(default=100, description="Star threshold for repository search")
    repository_page_size: int = Field(default=10)
    code_page_size: int = Field(default=5)
    request_timeout: float = Field(default=30.0, description="Timeout per API request in seconds")

    def get_token(self) -> Optional[str]:
        """Resolve the token with priority: MCP_GITHUB_TOKEN > GITHUB_TOKEN > GH_TOKEN.

        Returns:
            The resolved token or None if not found.
        """
        if self.token:
            return self.token.get_secret_value()

        for var_name in STANDARD_TOKEN_ENV_VARS:
            value = os.environ.get(var_name)
            if value:
                return value
        return None


FetchMode = Literal["sequential", "concurrent"]


class DocumentationSettings(BaseSettings):
    """Documentation site scraping configuration."""

    model_config = SettingsConfigDict(env_prefix="MCP_DOCS_")

    sites: list[str] = Field(default_factory=lambda: list(DEFAULT_DOCUMENTATION_SITES), description="URL templates, {query} is replaced")
    timeout: float = Field(default=5.0, description="Timeout per site in seconds")
    user_agent: str = Field(default="Tech-Research-Bot/1.0")
    fetch_mode: FetchMode = Field(default="sequential", description="Fetch sites one after another or all at once")
    min_relevance: float = Field(default=0.3, description="Results must score strictly above this")
    max_results: int = Field(default=10)
    min_title_length: int = Field(default=10, description="Anchor text must be longer than this")


DedupePolicy = Literal["none", "url"]


class ResearchSettings(BaseSettings):
    """Research orchestration configuration."""

    model_config = SettingsConfigDict(env_prefix="MCP_RESEARCH_")

    dedupe: DedupePolicy = Field(default="none", description="none: concatenate sources, url: keep first resource per URL")
    deadline_seconds: Optional[float] = Field(default=None, description="Overall deadline for one research call")


class AnalyzerSettings(BaseSettings):
    """Repository analysis configuration."""

    model_config = SettingsConfigDict(env_prefix="MCP_ANALYZER_")

    clone_depth: int = Field(default=1)
    keep_clone: bool = Field(default=False, description="Keep the cloned directory after analysis")
    work_dir: Optional[str] = Field(default=None, description="Parent directory for clones (default: system temp)")


TransportType = Literal["stdio", "streamable-http", "sse"]


class ServerSettings(BaseSettings):
    """Server configuration."""

    model_config = SettingsConfigDict(env_prefix="MCP_SERVER_")

    logging_level: str = Field(default="INFO")
    transport: TransportType = Field(default="stdio", description="MCP transport: stdio, streamable-http, or sse")
    host: str = Field(default="127.0.0.1", description="Host for HTTP transports")
    port: int = Field(default=8384, description="Port for HTTP transports")
    results_dir: Optional[str] = Field(default=None, description="Directory to save research results")


class AppSettings(BaseSettings):
    """Root application settings.

    Priority: Environment Variables > Config File > Defaults
    """

    model_config = SettingsConfigDict(env_prefix="MCP_", extra="ignore")

    github: GitHubSettings = Field(default_factory=GitHubSettings)
    docs: DocumentationSettings = Field(default_factory=DocumentationSettings)
    research: ResearchSettings = Field(default_factory=ResearchSettings)
    analyzer: AnalyzerSettings = Field(default_factory=AnalyzerSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    def save(self) -> Path:
        """Save current configuration to file (excluding secrets)."""
        data = self.model_dump(mode="json", exclude_none=True)
        if "github" in data and "token" in data["github"]:
            del data["github"]["token"]
        save_config_file(data)
        return CONFIG_FILE

    def get_results_dir(self) -> Path:
        """Get the results directory, creating if needed."""
        if self.server.results_dir:
            path = Path(self.server.results_dir).expanduser()
        else:
            path = get_default_results_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path


def _load_settings() -> AppSettings:
    """Load settings with file config as base, env vars overlay."""
    file_data = load_config_file()
    return AppSettings(**file_data)


settings = _load_settings()
