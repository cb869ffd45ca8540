"""Explicit retry and deadline policies for upstream calls.

Nothing in the pipeline retries implicitly.  A :class:`RetryPolicy` with
``max_attempts=1`` (the default) means one bounded attempt per request; callers
that want retries pass a policy with their own bounds.  A :class:`Deadline` is
created once per pipeline run and threaded into every stage so that a hanging
upstream call ends in :class:`~comment_intel.errors.StageTimeoutError` instead
of blocking forever.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Type, TypeVar

from comment_intel.errors import NotFoundError, StageTimeoutError, TransportError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Bounds for retrying a single upstream request."""

    max_attempts: int = 1
    base_delay: float = 1.0
    max_delay: float = 30.0
    backoff_factor: float = 2.0
    jitter: bool = True
    retry_on: Tuple[Type[BaseException], ...] = (TransportError,)
    never_retry: Tuple[Type[BaseException], ...] = (StageTimeoutError, NotFoundError)

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0 or self.max_delay < 0:
            raise ValueError("retry delays must be non-negative")

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after the zero-based *attempt* failed."""
        delay = min(self.base_delay * (self.backoff_factor ** attempt), self.max_delay)
        if self.jitter:
            delay = delay * (0.5 + random.random() * 0.5)
        return delay

    def is_retryable(self, exc: BaseException) -> bool:
        if isinstance(exc, self.never_retry):
            return False
        return isinstance(exc, self.retry_on)


NO_RETRY = RetryPolicy()


class Deadline:
    """Absolute point in (monotonic) time after which a run must stop."""

    def __init__(self, expires_at: Optional[float], clock: Callable[[], float] = time.monotonic):
        self._expires_at = expires_at
        self._clock = clock

    @classmethod
    def after(cls, seconds: Optional[float], clock: Callable[[], float] = time.monotonic) -> "Deadline":
        if seconds is None:
            return cls(None, clock)
        if seconds <= 0:
            raise ValueError("deadline must be positive")
        return cls(clock() + seconds, clock)

    @classmethod
    def none(cls) -> "Deadline":
        return cls(None)

    @property
    def is_bounded(self) -> bool:
        return self._expires_at is not None

    def remaining(self) -> Optional[float]:
        """Seconds left, ``0.0`` once expired, ``None`` for an unbounded deadline."""
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - self._clock())

    @property
    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def check(self, stage: str) -> Optional[float]:
        """Return the remaining seconds or raise if the deadline has passed."""
        remaining = self.remaining()
        if remaining is not None and remaining <= 0:
            raise StageTimeoutError(stage)
        return remaining

    def __repr__(self) -> str:
        return f"Deadline(remaining={self.remaining()!r})"


def call_with_retry(
    func: Callable[[], T],
    *,
    policy: RetryPolicy | None = None,
    deadline: Deadline | None = None,
    stage: str = "request",
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call *func* under *policy*, never sleeping past *deadline*."""

    policy = policy or NO_RETRY
    deadline = deadline or Deadline.none()

    for attempt in range(policy.max_attempts):
        deadline.check(stage)
        try:
            result = func()
        except Exception as exc:
            last_attempt = attempt == policy.max_attempts - 1
            if last_attempt or not policy.is_retryable(exc):
                if attempt > 0:
                    logger.error("%s failed after %d attempts: %s", stage, attempt + 1, exc)
                raise

            delay = policy.delay_for(attempt)
            remaining = deadline.remaining()
            if remaining is not None and delay >= remaining:
                raise StageTimeoutError(stage) from exc

            logger.warning(
                "%s failed on attempt %d/%d, retrying in %.2fs: %s",
                stage, attempt + 1, policy.max_attempts, delay, exc,
            )
            sleep(delay)
            continue

        if attempt > 0:
            logger.info("%s succeeded on attempt %d", stage, attempt + 1)
        return result

    raise RuntimeError("unreachable")  # pragma: no cover


__all__ = ["RetryPolicy", "NO_RETRY", "Deadline", "call_with_retry"]
