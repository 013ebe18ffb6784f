"""Cooperative cancellation token with an optional deadline."""

import time

from ..exceptions import ResearchCancelled


class CancellationToken:
    """Cooperative cancellation token for one research call.

    Source adapters call ``raise_if_cancelled()`` before every network request
    and clamp request timeouts with ``clamp_timeout()``. The token is either
    cancelled explicitly via ``cancel()`` or expires once its deadline passes.

    Args:
        timeout: Seconds from now until the deadline. None means no deadline.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self._cancelled = False
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        """Request cancellation."""
        self._cancelled = True

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled or self.remaining() == 0.0

    def remaining(self) -> float | None:
        """Seconds left until the deadline, or None without a deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def clamp_timeout(self, timeout: float) -> float:
        """Return the smaller of ``timeout`` and the time left."""
        remaining = self.remaining()
        if remaining is None:
            return timeout
        return min(timeout, remaining)

    def raise_if_cancelled(self) -> None:
        """Raise ``ResearchCancelled`` if cancelled or past the deadline."""
        if self._cancelled:
            raise ResearchCancelled("Research was cancelled")
        if self.remaining() == 0.0:
            raise ResearchCancelled("Research deadline exceeded")
