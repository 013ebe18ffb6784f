"""Pytest configuration and fixtures for tech research tests."""

import base64
from collections.abc import Callable

import httpx
import pytest

Handler = Callable[[httpx.Request], httpx.Response]


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: Tests that hit the network or spawn git")


@pytest.fixture(autouse=True)
def clean_token_env(monkeypatch):
    """Keep tokens from the developer environment out of the tests."""
    for var in ("MCP_GITHUB_TOKEN", "GITHUB_TOKEN", "GH_TOKEN"):
        monkeypatch.delenv(var, raising=False)


def mock_client(handler: Handler) -> httpx.AsyncClient:
    """An AsyncClient whose requests are answered by ``handler``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def repo_item(name: str, stars: int, description: str | None = "", owner: str = "acme") -> dict[str, object]:
    return {
        "full_name": f"{owner}/{name}",
        "html_url": f"https://github.com/{owner}/{name}",
        "name": name,
        "stargazers_count": stars,
        "description": description,
    }


def code_item(name: str, path: str, repo: str = "acme/app") -> dict[str, object]:
    return {
        "url": f"https://api.github.com/repos/{repo}/contents/{path}",
        "name": name,
        "html_url": f"https://github.com/{repo}/blob/main/{path}",
        "repository": {"full_name": repo},
    }


def file_record(text: str) -> dict[str, str]:
    return {"content": base64.b64encode(text.encode("utf-8")).decode("ascii"), "encoding": "base64"}


def anchors_page(links: list[tuple[str, str]]) -> str:
    body = "\n".join(f'<a href="{href}">{title}</a>' for href, title in links)
    return f"<html><body>{body}</body></html>"
