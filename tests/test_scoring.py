"""Unit tests for research.scoring."""

import random
import string

import pytest

from mcp_server_tech_research.research.models import RepositoryItem
from mcp_server_tech_research.research.scoring import repository_relevance, text_relevance


def _repo(name: str, description: str | None, stars: int) -> RepositoryItem:
    return RepositoryItem(full_name=f"acme/{name}", html_url=f"https://github.com/acme/{name}", name=name, stargazers_count=stars, description=description)


class TestRepositoryRelevance:
    def test_name_match_with_capped_stars(self) -> None:
        assert repository_relevance(_repo("react", "", 200_000), "react") == pytest.approx(0.7)

    def test_name_and_description_match(self) -> None:
        score = repository_relevance(_repo("react-router", "Declarative routing for React", 5_000), "React")
        assert score == pytest.approx(1.0)

    def test_description_only(self) -> None:
        assert repository_relevance(_repo("router", "routing for react apps", 0), "react") == pytest.approx(0.3)

    def test_stars_only_contribute_proportionally(self) -> None:
        assert repository_relevance(_repo("router", None, 1_500), "react") == pytest.approx(0.15)

    def test_name_match_is_case_insensitive(self) -> None:
        assert repository_relevance(_repo("Svelte-Kit", "", 1_500), "svelte") == pytest.approx(0.55)

    def test_missing_description_is_not_a_match(self) -> None:
        assert repository_relevance(_repo("vue", None, 0), "vue") == pytest.approx(0.4)

    def test_negative_stars_clamped_to_zero(self) -> None:
        assert repository_relevance(_repo("other", None, -10_000_000), "react") == 0.0

    def test_scores_always_within_bounds(self) -> None:
        rng = random.Random(1234)
        alphabet = string.ascii_letters + " -_"
        for _ in range(500):
            term = "".join(rng.choice(alphabet) for _ in range(rng.randint(1, 8)))
            name = "".join(rng.choice(alphabet) for _ in range(rng.randint(1, 20)))
            if rng.random() < 0.5:
                name = name + term
            description = rng.choice([None, "", term, f"all about {term.upper()}"])
            stars = rng.choice([0, 1, 99, 10_000, 2**62, -(2**62), rng.randint(-1_000_000, 1_000_000)])
            score = repository_relevance(_repo(name, description, stars), term)
            assert 0.0 <= score <= 1.0


class TestTextRelevance:
    def test_exact_match_scores_fixed_value(self) -> None:
        assert text_relevance("React Tutorial for Beginners", "react") == 0.8

    def test_exact_multi_word_match(self) -> None:
        assert text_relevance("Intro to Machine Learning", "machine learning") == 0.8

    def test_partial_match_scaled_by_word_share(self) -> None:
        assert text_relevance("Machine basics", "machine learning") == pytest.approx(0.3)

    def test_partial_match_two_of_three_words(self) -> None:
        assert text_relevance("React state tricks", "react state management") == pytest.approx(0.4)

    def test_no_match(self) -> None:
        assert text_relevance("Something unrelated", "svelte") == 0.0

    def test_scores_always_within_bounds(self) -> None:
        rng = random.Random(99)
        words = ["react", "vue", "state", "native", "query", "hooks", "api", ""]
        for _ in range(300):
            term = " ".join(rng.choice(words[:-1]) for _ in range(rng.randint(1, 4)))
            text = " ".join(rng.choice(words) for _ in range(rng.randint(0, 6)))
            score = text_relevance(text, term)
            assert 0.0 <= score <= 1.0
            assert score == 0.8 or score <= 0.6
