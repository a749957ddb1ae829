"""
Retry policies for remote calls.

Provides the fixed-delay "retry a remote call N times" helper used by the
public API client when the retry strategy is enabled.
"""

import asyncio
import inspect
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Tuple, Type

logger = logging.getLogger(__name__)


class RetryPolicy(ABC):
    """
    Abstract base class for retry policies.

    Only exceptions listed in retryable_exceptions are retried; anything else
    propagates on the first failure. When attempts run out the last error
    is raised unchanged.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        retryable_exceptions: Tuple[Type[BaseException], ...] = (Exception,),
        sleep: Callable[[float], Any] = asyncio.sleep,
    ):
        """
        Initialize retry policy.

        Args:
            max_attempts: Maximum number of attempts, including the first one
            base_delay: Base delay between retries in seconds
            retryable_exceptions: Exception types that trigger a retry
            sleep: Awaitable delay, replaceable in tests
        """
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.retryable_exceptions = retryable_exceptions
        self._sleep = sleep

    @abstractmethod
    def calculate_delay(self, attempt: int) -> float:
        """Delay in seconds after the given (1-based) attempt."""

    def should_retry(self, attempt: int, exception: BaseException) -> bool:
        if attempt >= self.max_attempts:
            return False
        return isinstance(exception, self.retryable_exceptions)

    async def execute(self, func: Callable, *args, **kwargs) -> Any:
        """Execute a coroutine function (or plain callable) with this policy."""
        attempt = 0
        last_exception: Optional[Exception] = None

        while attempt < self.max_attempts:
            attempt += 1
            try:
                result = func(*args, **kwargs)
                if inspect.isawaitable(result):
                    result = await result
                if attempt > 1:
                    logger.info(f"Operation succeeded on attempt {attempt}")
                return result
            except Exception as e:
                last_exception = e
                if not self.should_retry(attempt, e):
                    break
                delay = self.calculate_delay(attempt)
                logger.warning(f"Attempt {attempt} failed: {e}. Retrying in {delay:.2f}s...")
                await self._sleep(delay)

        raise last_exception


class FixedBackoff(RetryPolicy):
    """
    Fixed delay retry policy.

    Uses constant delay between all retry attempts.
    """

    def calculate_delay(self, attempt: int) -> float:
        return self.base_delay


__all__ = [
    "RetryPolicy",
    "FixedBackoff",
]
