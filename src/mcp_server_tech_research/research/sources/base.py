"""Shared plumbing for source adapters.

Adapters talk to upstream services through an injected ``httpx.AsyncClient``.
Everything that can go wrong on the way (transport errors, HTTP status,
undecodable bodies, unexpected response shapes, an expired deadline) is
turned into ``AdapterFailure`` here, so each adapter only needs a single
``except AdapterFailure`` at its boundary.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ...exceptions import AdapterFailure
from ..cancellation import CancellationToken
from ..models import CodeExample, Resource

GITHUB_JSON_ACCEPT = "application/vnd.github.v3+json"

ModelT = TypeVar("ModelT", bound=BaseModel)


class ResourceSource(Protocol):
    async def search(self, technology: str, token: CancellationToken | None = None) -> list[Resource]: ...


class CodeExampleSource(Protocol):
    async def search(self, technology: str, token: CancellationToken | None = None) -> list[CodeExample]: ...


def github_headers(api_token: str | None, accept: str = GITHUB_JSON_ACCEPT) -> dict[str, str]:
    """Headers for the repository and code search API."""
    headers = {"Accept": accept}
    if api_token:
        headers["Authorization"] = f"Bearer {api_token}"
    return headers


def search_qualifiers(technology: str, languages: list[str], min_stars: int | None = None) -> str:
    """Build a search term such as ``"react language:typescript stars:>100"``."""
    parts = [technology, *(f"language:{lang}" for lang in languages)]
    if min_stars is not None:
        parts.append(f"stars:>{min_stars}")
    return " ".join(parts)


async def get(
    client: httpx.AsyncClient,
    url: str,
    *,
    timeout: float,
    token: CancellationToken | None = None,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Issue one GET, honouring the cancellation token and deadline."""
    if token is not None:
        token.raise_if_cancelled()
        timeout = token.clamp_timeout(timeout)

    try:
        response = await client.get(url, params=params, headers=headers, timeout=timeout)
        response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise AdapterFailure(f"GET {url} failed: {e}") from e
    return response


def parse_record(model: type[ModelT], response: httpx.Response) -> ModelT:
    """Validate a JSON response body against ``model``, failing closed."""
    try:
        return model.model_validate(response.json())
    except ValueError as e:
        # ValidationError is a ValueError; so is a JSON decode error.
        kind = "unexpected shape" if isinstance(e, ValidationError) else "invalid JSON"
        raise AdapterFailure(f"{kind} from {response.request.url}: {e}") from e


def validate_item(model: type[ModelT], data: Any) -> ModelT:
    """Validate one entry of a search response against ``model``."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise AdapterFailure(f"unexpected item shape: {e}") from e
