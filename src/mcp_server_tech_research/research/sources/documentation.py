"""Documentation site source.

Fetches a fixed, ordered list of documentation and search pages, keeps the
anchors that link to the technology, and scores them by their visible text.
Sites are fetched one after another by default; ``fetch_mode="concurrent"``
fetches them all at once. Either way results keep site order until the final
relevance sort.
"""

import asyncio
import logging
from urllib.parse import quote, urljoin

import httpx
from bs4 import BeautifulSoup

from ..cancellation import CancellationToken
from ..models import Resource, ResourceType
from ..scoring import text_relevance
from .base import get

logger = logging.getLogger(__name__)

QUERY_PLACEHOLDER = "{query}"


def site_urls(templates: list[str], technology: str) -> list[str]:
    """Fill the URL-encoded technology term into each site template."""
    encoded = quote(technology, safe="")
    return [template.replace(QUERY_PLACEHOLDER, encoded) for template in templates]


def extract_links(html: str, page_url: str, technology: str, min_title_length: int = 10) -> list[Resource]:
    """Turn matching anchors of one page into scored documentation resources."""
    needle = technology.lower()
    soup = BeautifulSoup(html, "html.parser")

    resources: list[Resource] = []
    for anchor in soup.find_all("a", href=True):
        href = anchor["href"]
        if needle not in href:
            continue
        title = anchor.get_text().strip()
        if len(title) <= min_title_length:
            continue
        try:
            url = urljoin(page_url, href)
        except ValueError:
            logger.debug(f"Skipping unparseable link {href!r} on {page_url}")
            continue
        resources.append(
            Resource(
                title=title,
                url=url,
                type=ResourceType.DOCUMENTATION,
                relevance=text_relevance(title, technology),
            )
        )
    return resources


class DocumentationSourceAdapter:
    """Scrapes documentation and Q&A search pages for links about a technology."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        sites: list[str],
        timeout: float = 5.0,
        user_agent: str = "Tech-Research-Bot/1.0",
        fetch_mode: str = "sequential",
        min_relevance: float = 0.3,
        max_results: int = 10,
        min_title_length: int = 10,
    ):
        if fetch_mode not in ("sequential", "concurrent"):
            raise ValueError(f"Unknown fetch mode: {fetch_mode}")
        self.client = client
        self.sites = sites
        self.timeout = timeout
        self.user_agent = user_agent
        self.fetch_mode = fetch_mode
        self.min_relevance = min_relevance
        self.max_results = max_results
        self.min_title_length = min_title_length

    async def search(self, technology: str, token: CancellationToken | None = None) -> list[Resource]:
        """Return the best documentation links, highest relevance first."""
        urls = site_urls(self.sites, technology)

        if self.fetch_mode == "concurrent":
            per_site = await asyncio.gather(*(self._search_site(url, technology, token) for url in urls))
        else:
            per_site = []
            for url in urls:
                per_site.append(await self._search_site(url, technology, token))

        results = [resource for site_results in per_site for resource in site_results]
        filtered = [r for r in results if r.relevance > self.min_relevance]
        filtered.sort(key=lambda r: r.relevance, reverse=True)
        return filtered[: self.max_results]

    async def _search_site(self, url: str, technology: str, token: CancellationToken | None) -> list[Resource]:
        """Fetch and parse one site; a failure only drops this site."""
        try:
            response = await get(
                self.client,
                url,
                timeout=self.timeout,
                token=token,
                headers={"User-Agent": self.user_agent},
            )
            return extract_links(response.text, url, technology, self.min_title_length)
        except Exception as e:
            logger.warning(f"Failed to search documentation site {url}: {e}")
            return []
