"""Repository search source."""

import logging

import httpx

from ...exceptions import AdapterFailure
from ..cancellation import CancellationToken
from ..models import RepositorySearchResponse, Resource, ResourceType
from ..scoring import repository_relevance
from .base import get, github_headers, parse_record, search_qualifiers

logger = logging.getLogger(__name__)


class RepositorySourceAdapter:
    """Finds popular repositories for a technology and scores them."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        api_url: str = "https://api.github.com",
        api_token: str | None = None,
        languages: list[str] | None = None,
        min_stars: int = 100,
        page_size: int = 10,
        timeout: float = 30.0,
    ):
        self.client = client
        self.api_url = api_url.rstrip("/")
        self.api_token = api_token
        self.languages = languages if languages is not None else ["typescript", "javascript"]
        self.min_stars = min_stars
        self.page_size = page_size
        self.timeout = timeout

    async def search(self, technology: str, token: CancellationToken | None = None) -> list[Resource]:
        """Return scored repository resources; an empty list on any failure."""
        try:
            response = await get(
                self.client,
                f"{self.api_url}/search/repositories",
                timeout=self.timeout,
                token=token,
                params={
                    "q": search_qualifiers(technology, self.languages, self.min_stars),
                    "sort": "stars",
                    "order": "desc",
                    "per_page": self.page_size,
                },
                headers=github_headers(self.api_token),
            )
            payload = parse_record(RepositorySearchResponse, response)
        except AdapterFailure as e:
            logger.warning(f"Repository search failed for '{technology}': {e}")
            return []

        resources = [
            Resource(
                title=item.full_name,
                url=item.html_url,
                type=ResourceType.REPOSITORY,
                relevance=repository_relevance(item, technology),
            )
            for item in payload.items
        ]
        logger.info(f"Repository search returned {len(resources)} results for '{technology}'")
        return resources
