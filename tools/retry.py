"""Retry combinator with exponential backoff for calls to the text generator."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Tuple, Type, TypeVar

from stylist_app.logging_config import get_logger, log_event

logger = get_logger(__name__)
T = TypeVar("T")

DEFAULT_ATTEMPTS = 3
DEFAULT_BASE_DELAY = 1.0


class RetryError(RuntimeError):
    """Raised when every attempt failed; ``last_error`` holds the final cause."""

    def __init__(self, attempts: int, last_error: Optional[BaseException]) -> None:
        super().__init__(f"operation failed after {attempts} attempt(s): {last_error}")
        self.attempts = attempts
        self.last_error = last_error


def backoff_delay(attempt: int, base_delay: float = DEFAULT_BASE_DELAY) -> float:
    """Delay before retrying after ``attempt`` (1-based): base, 2*base, 4*base..."""

    return base_delay * (2 ** (attempt - 1))


def retry_with_backoff(
    operation: Callable[[], T],
    attempts: int = DEFAULT_ATTEMPTS,
    base_delay: float = DEFAULT_BASE_DELAY,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call ``operation`` until it succeeds or ``attempts`` are exhausted."""

    attempts = max(1, attempts)
    last_error: Optional[BaseException] = None
    for attempt in range(1, attempts + 1):
        try:
            return operation()
        except retry_on as exc:
            last_error = exc
            log_event(
                logger,
                logging.WARNING,
                "retry_attempt_failed",
                attempt=attempt,
                attempts=attempts,
                error=str(exc),
            )
            if attempt < attempts:
                sleep(backoff_delay(attempt, base_delay))
    raise RetryError(attempts, last_error) from last_error


__all__ = ["RetryError", "backoff_delay", "retry_with_backoff"]
