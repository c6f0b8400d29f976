"""
Retry logic with exponential backoff for rate-limited requests.

The retrier is a small state machine so a caller (or a test) can see where
a call ended up. Sleeping goes through an injected callable, which keeps
the backoff schedule testable without waiting on real time.
"""

import time
from typing import Callable, Optional, Tuple, Type


class RetryError(Exception):
    """Raised when all retry attempts are exhausted."""
    pass


def backoff_delay(
    attempt: int,
    base_delay: float = 1.0,
    exponential_base: float = 2.0,
    max_delay: float = 60.0,
) -> float:
    """
    Seconds to wait before retry number ``attempt`` (1-based).

    With the defaults this gives 1, 2, 4, 8... capped at ``max_delay``.
    """
    if attempt < 1:
        raise ValueError(f"attempt must be >= 1, got {attempt}")
    return min(base_delay * exponential_base ** (attempt - 1), max_delay)


class BackoffRetrier:
    """
    Runs a callable, retrying it with exponential backoff on chosen exceptions.

    States:
    - IDLE: nothing attempted yet
    - AWAITING_RESPONSE: an attempt is in flight
    - BACKING_OFF: waiting before the next attempt
    - SUCCEEDED: the last attempt returned
    - FAILED: a non-retryable error was raised or retries ran out

    A retrier holds per-call state; create one per operation.
    """

    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting_response"
    BACKING_OFF = "backing_off"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    def __init__(
        self,
        max_retries: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 60.0,
        exponential_base: float = 2.0,
        retry_on: Tuple[Type[Exception], ...] = (Exception,),
        sleep: Callable[[float], None] = time.sleep,
        on_retry: Optional[Callable] = None,
    ):
        """
        Args:
            max_retries: Maximum number of retry attempts (0 = no retries)
            base_delay: Delay before the first retry, in seconds
            max_delay: Maximum delay between retries in seconds
            exponential_base: Multiplier applied per retry
            retry_on: Exceptions that trigger a retry; anything else propagates
            sleep: Callable used to wait, ``time.sleep`` by default
            on_retry: Optional callback function(attempt, exception, delay)
        """
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base
        self.retry_on = retry_on
        self.sleep = sleep
        self.on_retry = on_retry

        self.state = self.IDLE
        self.attempts = 0
        self.delays: list[float] = []

    def call(self, func: Callable, *args, **kwargs):
        """
        Execute ``func`` until it returns or the retry budget is spent.

        Raises:
            RetryError: If every attempt raised a retryable exception
            Original exception: If a non-retryable exception is raised
        """
        last_exception: Optional[Exception] = None

        for attempt in range(self.max_retries + 1):
            if attempt > 0:
                delay = self.delay_for(attempt)
                self.state = self.BACKING_OFF
                if self.on_retry:
                    self.on_retry(attempt, last_exception, delay)
                self.delays.append(delay)
                self.sleep(delay)

            self.state = self.AWAITING_RESPONSE
            self.attempts += 1
            try:
                result = func(*args, **kwargs)
            except self.retry_on as e:
                last_exception = e
                continue
            except Exception:
                self.state = self.FAILED
                raise

            self.state = self.SUCCEEDED
            return result

        self.state = self.FAILED
        raise RetryError(
            f"Failed after {self.max_retries + 1} attempts: {last_exception}"
        ) from last_exception

    def delay_for(self, attempt: int) -> float:
        return backoff_delay(
            attempt,
            base_delay=self.base_delay,
            exponential_base=self.exponential_base,
            max_delay=self.max_delay,
        )


def is_rate_limited(status_code: int) -> bool:
    """True for the only status the export retries: 429 Too Many Requests."""
    return status_code == 429
