"""Retry with exponential backoff for calls to the completion provider."""

from __future__ import annotations

import asyncio
import logging
import random
import re
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0
    exponential_base: float = 2.0
    jitter_factor: float = 0.2  # ±20% random variation

    def delay_for(self, attempt: int) -> float:
        """Backoff delay in seconds after the given zero-based attempt."""
        delay = min(self.base_delay * (self.exponential_base**attempt), self.max_delay)
        jitter = delay * self.jitter_factor * (2 * random.random() - 1)
        return max(0.0, delay + jitter)


class TransientError(Exception):
    """Exception for transient errors that should be retried."""

    pass


class PermanentError(Exception):
    """Exception for permanent errors that should not be retried."""

    pass


TRANSIENT_PATTERNS = (
    "timeout",
    "timed out",
    "connection reset",
    "connection refused",
    "connection aborted",
    "connection closed",
    "connection error",
    "rate limit",
    "quota",
    "temporar",
    "unavailable",
    "overloaded",
)

# Status codes only count as whole numbers, so "5000 tokens" is not a 500.
TRANSIENT_STATUS = re.compile(r"\b(429|500|502|503|504)\b")


def is_transient_error(error: BaseException) -> bool:
    """
    Determine if an error is transient and should be retried.

    Args:
        error: Exception to check

    Returns:
        True if error is transient, False otherwise
    """
    if isinstance(error, TransientError):
        return True
    if isinstance(error, PermanentError):
        return False
    if isinstance(error, (ConnectionError, TimeoutError, asyncio.TimeoutError)):
        return True

    message = str(error).lower()
    if TRANSIENT_STATUS.search(message):
        return True
    return any(pattern in message for pattern in TRANSIENT_PATTERNS)


async def retry_with_backoff(
    func: Callable[..., Awaitable[T]],
    config: RetryConfig,
    *args: Any,
    **kwargs: Any,
) -> T:
    """
    Await ``func(*args, **kwargs)`` and retry it on transient failures.

    Non-transient errors are re-raised unchanged on the first occurrence so
    callers can map them to their own error types.

    Args:
        func: Async callable to execute
        config: Retry configuration
        *args: Positional arguments for func
        **kwargs: Keyword arguments for func

    Returns:
        Result from the first successful attempt

    Raises:
        Exception: The last error once attempts are exhausted, or the first
            non-transient error
    """
    attempts = max(1, config.max_attempts)

    for attempt in range(attempts):
        try:
            result = await func(*args, **kwargs)
            if attempt > 0:
                logger.info(f"Retry succeeded on attempt {attempt + 1}")
            return result
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if not is_transient_error(e):
                raise
            if attempt == attempts - 1:
                logger.error(f"All {attempts} retry attempts failed")
                raise

            delay = config.delay_for(attempt)
            logger.warning(
                f"Attempt {attempt + 1}/{attempts} failed: {e}. Retrying in {delay:.2f}s..."
            )
            await asyncio.sleep(delay)

    raise RuntimeError("retry_with_backoff exhausted without a result")
