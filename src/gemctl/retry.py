"""Retry with exponential backoff for provider calls."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import BaseModel, Field

logger = logging.getLogger("gemctl.retry")

__all__ = ["RetryPolicy", "retry_with_backoff"]

T = TypeVar("T")


class RetryPolicy(BaseModel):
    """Configures retry behaviour for provider calls.

    The default performs a single attempt.
    """

    max_retries: int = Field(default=0, ge=0)
    base_delay_seconds: float = Field(default=1.0, gt=0.0)
    max_delay_seconds: float = Field(default=30.0, gt=0.0)
    exponential_base: float = Field(default=2.0, gt=0.0)


def retry_with_backoff(
    fn: Callable[..., T],
    policy: RetryPolicy,
    *args: Any,
    should_retry: Callable[[Exception], bool] = lambda exc: True,
    sleep: Callable[[float], None] = time.sleep,
    **kwargs: Any,
) -> T:
    """Execute *fn* with exponential backoff retry.

    Exceptions for which *should_retry* returns False propagate at once.
    Raises the last exception if all retries are exhausted.
    """
    last_exc: Exception | None = None
    for attempt in range(1 + policy.max_retries):
        try:
            return fn(*args, **kwargs)
        except Exception as exc:
            last_exc = exc
            if attempt >= policy.max_retries or not should_retry(exc):
                break
            delay = min(
                policy.base_delay_seconds * (policy.exponential_base**attempt),
                policy.max_delay_seconds,
            )
            logger.warning(
                "Attempt %d/%d failed, retrying in %.1fs",
                attempt + 1,
                policy.max_retries + 1,
                delay,
                extra={"attempt": attempt + 1, "delay": delay},
            )
            sleep(delay)

    assert last_exc is not None
    raise last_exc
