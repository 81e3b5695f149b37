"""Retry helpers for transient storage and network failures"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')

MAX_RETRY_ATTEMPTS = 3
BASE_RETRY_DELAY = 1.0  # seconds
MAX_RETRY_DELAY = 10.0  # seconds


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded exponential backoff

    Attributes:
        max_attempts (int): Total attempts, including the first one
        base_delay (float): Delay before the second attempt, in seconds
        max_delay (float): Upper bound on any single delay
        backoff_factor (float): Multiplier applied per attempt
    """
    max_attempts: int = MAX_RETRY_ATTEMPTS
    base_delay: float = BASE_RETRY_DELAY
    max_delay: float = MAX_RETRY_DELAY
    backoff_factor: float = 2.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0 or self.max_delay < 0:
            raise ValueError("delays must not be negative")
        if self.backoff_factor < 1:
            raise ValueError("backoff_factor must be at least 1")

    def delay_for(self, attempt: int) -> float:
        """Delay to wait after the given failed attempt (1-based)"""
        return min(self.base_delay * (self.backoff_factor ** (attempt - 1)), self.max_delay)


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    retry_on: Tuple[Type[BaseException], ...],
    description: str = "operation",
) -> T:
    """Run an async operation, retrying only the listed exception types

    Args:
        operation: Zero-argument callable returning a fresh awaitable per attempt
        policy: Backoff configuration
        retry_on: Exception types considered transient
        description: Name used in log messages

    Returns:
        T: Result of the first successful attempt

    Raises:
        Exception: The last transient error once attempts run out, or any
            non-transient error immediately
    """
    attempt = 1
    while True:
        try:
            return await operation()
        except retry_on as e:
            if attempt >= policy.max_attempts:
                logger.error(f"{description} failed after {attempt} attempts: {e}")
                raise
            delay = policy.delay_for(attempt)
            logger.warning(
                f"{description} failed (attempt {attempt}/{policy.max_attempts}), "
                f"retrying in {delay:.2f}s: {e}"
            )
            await asyncio.sleep(delay)
            attempt += 1

