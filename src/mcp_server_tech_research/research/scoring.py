"""Relevance scoring heuristics.

Scores are floats in [0, 1]. A repository name match is the strongest signal,
a description match is secondary, and star count only breaks ties: it is
capped at 0.3 so popularity alone never dominates.
"""

from .models import RepositoryItem

NAME_MATCH_WEIGHT = 0.4
DESCRIPTION_MATCH_WEIGHT = 0.3
STARS_PER_POINT = 10_000
MAX_STARS_WEIGHT = 0.3

EXACT_TEXT_MATCH_SCORE = 0.8
PARTIAL_TEXT_MATCH_CEILING = 0.6


def _clamp(value: float) -> float:
    return max(0.0, min(value, 1.0))


def repository_relevance(repo: RepositoryItem, technology: str) -> float:
    """Score a repository search hit against the technology term."""
    term = technology.lower()
    relevance = 0.0

    if term in repo.name.lower():
        relevance += NAME_MATCH_WEIGHT

    if repo.description and term in repo.description.lower():
        relevance += DESCRIPTION_MATCH_WEIGHT

    relevance += min(repo.stargazers_count / STARS_PER_POINT, MAX_STARS_WEIGHT)

    return _clamp(relevance)


def text_relevance(text: str, technology: str) -> float:
    """Score a snippet of text (e.g. a link title) against the technology term.

    A full-term match scores exactly 0.8. Otherwise the score is the share of
    the term's words found in the text, scaled to at most 0.6.
    """
    lower_text = text.lower()
    lower_term = technology.lower()

    if lower_term in lower_text:
        return EXACT_TEXT_MATCH_SCORE

    words = lower_term.split()
    if not words:
        return 0.0
    matched = [word for word in words if word in lower_text]
    return len(matched) / len(words) * PARTIAL_TEXT_MATCH_CEILING
