"""Tests for the cancellation token."""

import time

import pytest

from mcp_server_tech_research.exceptions import AdapterFailure, ResearchCancelled
from mcp_server_tech_research.research.cancellation import CancellationToken


class TestCancellationToken:
    def test_fresh_token_without_deadline(self) -> None:
        token = CancellationToken()
        assert token.is_cancelled is False
        assert token.remaining() is None
        assert token.clamp_timeout(5.0) == 5.0
        token.raise_if_cancelled()

    def test_cancel(self) -> None:
        token = CancellationToken()
        token.cancel()
        assert token.is_cancelled is True
        with pytest.raises(ResearchCancelled, match="cancelled"):
            token.raise_if_cancelled()

    def test_deadline_clamps_timeouts(self) -> None:
        token = CancellationToken(timeout=2.0)
        assert token.clamp_timeout(5.0) <= 2.0
        assert token.clamp_timeout(0.5) == 0.5

    def test_expired_deadline(self, monkeypatch) -> None:
        token = CancellationToken(timeout=1.0)
        now = time.monotonic()
        monkeypatch.setattr(time, "monotonic", lambda: now + 5.0)

        assert token.remaining() == 0.0
        assert token.is_cancelled is True
        with pytest.raises(ResearchCancelled, match="deadline"):
            token.raise_if_cancelled()

    def test_cancellation_is_an_adapter_failure(self) -> None:
        assert issubclass(ResearchCancelled, AdapterFailure)
