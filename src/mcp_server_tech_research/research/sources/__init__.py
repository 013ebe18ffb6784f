"""Source adapters: each queries one upstream channel and isolates its own failures."""

from .base import CodeExampleSource, ResourceSource
from .code_samples import CodeSampleAdapter, detect_language, extract_relevant_code
from .documentation import DocumentationSourceAdapter
from .repositories import RepositorySourceAdapter

__all__ = [
    "CodeExampleSource",
    "CodeSampleAdapter",
    "DocumentationSourceAdapter",
    "RepositorySourceAdapter",
    "ResourceSource",
    "detect_language",
    "extract_relevant_code",
]
