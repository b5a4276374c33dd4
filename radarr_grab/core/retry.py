"""
Bounded retry for async operations whose result must satisfy a predicate.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from radarr_grab.exceptions import RetryExhaustedError

log = logging.getLogger(__name__)

T = TypeVar("T")


class RetryPolicy:
    """Re-invokes an operation until its result is accepted or attempts run out."""

    def __init__(self, retries: int = 2, delay: float = 0.0):
        """
        Initialize retry policy.

        Args:
            retries: Extra attempts after the first one (total calls = retries + 1).
            delay: Fixed pause in seconds between attempts.
        """
        if retries < 0:
            raise ValueError("retries cannot be negative")
        self.retries = retries
        self.delay = delay

    @property
    def max_attempts(self) -> int:
        return self.retries + 1

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        is_success: Callable[[T], bool],
    ) -> T:
        """
        Run `operation` until `is_success` accepts its result.

        An attempt that raises counts as unsuccessful too.

        Returns:
            The first accepted result.

        Raises:
            The last exception if the final attempt raised, otherwise
            RetryExhaustedError.
        """
        last_exception: Optional[Exception] = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                result = await operation()
            except Exception as e:
                last_exception = e
                log.warning(f"Attempt {attempt}/{self.max_attempts} failed: {e}")
            else:
                if is_success(result):
                    return result
                last_exception = None
                log.debug(
                    f"Attempt {attempt}/{self.max_attempts} returned an "
                    "unusable result"
                )

            if attempt < self.max_attempts and self.delay > 0:
                await asyncio.sleep(self.delay)

        if last_exception is not None:
            raise last_exception
        raise RetryExhaustedError(
            f"No usable result after {self.max_attempts} attempts"
        )
