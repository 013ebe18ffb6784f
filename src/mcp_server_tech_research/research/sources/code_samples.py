"""Code search source: finds files using a technology and cuts a context window."""

import base64
import binascii
import logging

import httpx

from ...exceptions import AdapterFailure
from ..cancellation import CancellationToken
from ..models import CodeExample, CodeSearchItem, CodeSearchResponse, FileContentResponse
from .base import get, github_headers, parse_record, search_qualifiers, validate_item

logger = logging.getLogger(__name__)

LANGUAGE_BY_EXTENSION: dict[str, str] = {
    "js": "javascript",
    "ts": "typescript",
    "py": "python",
    "java": "java",
    "go": "go",
    "rs": "rust",
    "cpp": "cpp",
    "c": "c",
    "cs": "csharp",
    "php": "php",
    "rb": "ruby",
}

CONTEXT_LINES_BEFORE = 3
CONTEXT_LINES_AFTER = 3
FALLBACK_LINES = 20


def detect_language(filename: str) -> str:
    """Map a file name to a display language; unknown extensions are ``text``."""
    extension = filename.rsplit(".", 1)[-1].lower()
    return LANGUAGE_BY_EXTENSION.get(extension, "text")


def extract_relevant_code(code: str, technology: str) -> str:
    """Cut the lines around the first mention of the technology.

    Takes three lines either side of the first matching line. Without a match
    the first 20 lines are returned verbatim.
    """
    lines = code.split("\n")
    needle = technology.lower()

    for i, line in enumerate(lines):
        if needle in line.lower():
            start = max(0, i - CONTEXT_LINES_BEFORE)
            end = min(len(lines), i + CONTEXT_LINES_AFTER + 1)
            return "\n".join(lines[start:end])

    return "\n".join(lines[:FALLBACK_LINES])


def decode_content(record: FileContentResponse) -> str:
    if record.encoding != "base64":
        raise AdapterFailure(f"Unsupported content encoding: {record.encoding}")
    try:
        raw = base64.b64decode(record.content)
    except (binascii.Error, ValueError) as e:
        raise AdapterFailure(f"Invalid base64 content: {e}") from e
    return raw.decode("utf-8", errors="replace")


class CodeSampleAdapter:
    """Collects short code examples for a technology from code search."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        api_url: str = "https://api.github.com",
        api_token: str | None = None,
        languages: list[str] | None = None,
        page_size: int = 5,
        timeout: float = 30.0,
    ):
        self.client = client
        self.api_url = api_url.rstrip("/")
        self.api_token = api_token
        self.languages = languages if languages is not None else ["typescript", "javascript"]
        self.page_size = page_size
        self.timeout = timeout

    async def search(self, technology: str, token: CancellationToken | None = None) -> list[CodeExample]:
        """Return code examples; files that fail to load are skipped."""
        try:
            response = await get(
                self.client,
                f"{self.api_url}/search/code",
                timeout=self.timeout,
                token=token,
                params={
                    "q": search_qualifiers(technology, self.languages),
                    "sort": "indexed",
                    "order": "desc",
                    "per_page": self.page_size,
                },
                headers=github_headers(self.api_token),
            )
            payload = parse_record(CodeSearchResponse, response)
        except AdapterFailure as e:
            logger.error(f"Code example search failed for '{technology}': {e}")
            return []

        examples: list[CodeExample] = []
        for position, raw_item in enumerate(payload.items):
            try:
                item = validate_item(CodeSearchItem, raw_item)
                examples.append(await self._fetch_example(item, technology, token))
            except AdapterFailure as e:
                logger.warning(f"Skipping code search item {position}: {e}")

        return examples

    async def _fetch_example(self, item: CodeSearchItem, technology: str, token: CancellationToken | None) -> CodeExample:
        response = await get(
            self.client,
            item.url,
            timeout=self.timeout,
            token=token,
            headers=github_headers(self.api_token),
        )
        code = decode_content(parse_record(FileContentResponse, response))

        return CodeExample(
            language=detect_language(item.name),
            code=extract_relevant_code(code, technology),
            description=f"Example from {item.repository.full_name}",
            source=item.html_url,
        )
