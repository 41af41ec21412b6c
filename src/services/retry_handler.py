"""
Retry handler with exponential backoff, jitter and a circuit breaker.

Every Google Sheets call made by the remote document store goes through
``RetryHandler.execute_with_retry``.
"""

import logging
import random
import threading
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Optional

from src.services.error_classifier import ErrorClassifier

logger = logging.getLogger(__name__)


class RetryExhaustedException(Exception):
    """Raised when all retry attempts have been exhausted."""

    def __init__(self, attempts: int, last_error: Exception):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Gave up after {attempts} attempts. "
            f"Last error: {type(last_error).__name__}: {last_error}"
        )


class CircuitBreakerError(Exception):
    """Raised when the circuit breaker is open and calls are refused."""


@dataclass
class RetryStatistics:
    """Counters kept by a RetryHandler."""

    total_calls: int = 0
    total_retries: int = 0
    total_failures: int = 0
    consecutive_failures: int = 0
    circuit_open: bool = False


class RetryHandler:
    """
    Runs callables with retries on transient errors.

    The delay before retry ``n`` (0-based) is ``base_delay * 2**n`` capped at
    ``max_delay``, plus or minus ``jitter_factor`` of itself. After
    ``circuit_breaker_threshold`` calls in a row have exhausted their retries
    the circuit opens and calls fail fast until ``circuit_breaker_timeout``
    seconds have passed. The handler is safe to share between threads.
    """

    def __init__(
        self,
        max_retries: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 30.0,
        jitter_factor: float = 0.1,
        circuit_breaker_threshold: int = 5,
        circuit_breaker_timeout: float = 60.0,
        retry_condition: Optional[Callable[[Exception], bool]] = None,
    ):
        """
        Initialize retry handler.

        Args:
            max_retries: Retries after the first attempt
            base_delay: Delay before the first retry (seconds)
            max_delay: Upper bound for a single delay (seconds)
            jitter_factor: Relative random jitter (0.0 to 1.0)
            circuit_breaker_threshold: Exhausted calls before the circuit opens
            circuit_breaker_timeout: Seconds before an open circuit is retried
            retry_condition: Predicate deciding whether an exception is
                retried; defaults to ErrorClassifier.is_retryable
        """
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.jitter_factor = jitter_factor
        self.circuit_breaker_threshold = circuit_breaker_threshold
        self.circuit_breaker_timeout = circuit_breaker_timeout
        self.retry_condition = retry_condition or ErrorClassifier().is_retryable

        self._stats = RetryStatistics()
        self._opened_at = 0.0
        self._lock = threading.Lock()

    def calculate_delay(self, attempt: int) -> float:
        """Backoff delay before retry number ``attempt`` (0-based)."""
        delay = min(self.base_delay * (2**attempt), self.max_delay)
        jitter = random.uniform(-self.jitter_factor, self.jitter_factor) * delay
        return max(0.0, delay + jitter)

    def _check_circuit(self) -> None:
        with self._lock:
            self._stats.total_calls += 1
            if not self._stats.circuit_open:
                return
            if time.time() - self._opened_at >= self.circuit_breaker_timeout:
                # Half-open: let this call through as a probe
                logger.info("Circuit breaker half-open, probing remote store")
                return
        raise CircuitBreakerError(
            "Remote store unavailable; circuit breaker is open"
        )

    def _on_success(self, retries: int) -> None:
        with self._lock:
            self._stats.total_retries += retries
            self._stats.consecutive_failures = 0
            if self._stats.circuit_open:
                logger.info("Circuit breaker closed")
                self._stats.circuit_open = False

    def _on_exhausted(self, retries: int) -> None:
        with self._lock:
            self._stats.total_retries += retries
            self._stats.total_failures += 1
            self._stats.consecutive_failures += 1
            if (
                not self._stats.circuit_open
                and self._stats.consecutive_failures >= self.circuit_breaker_threshold
            ):
                logger.warning(
                    f"Circuit breaker opened after "
                    f"{self._stats.consecutive_failures} failed calls"
                )
                self._stats.circuit_open = True
                self._opened_at = time.time()

    def execute_with_retry(self, func: Callable, *args, **kwargs) -> Any:
        """
        Call ``func(*args, **kwargs)``, retrying transient failures.

        Returns:
            Whatever ``func`` returns

        Raises:
            CircuitBreakerError: If the circuit breaker is open
            RetryExhaustedException: If every attempt failed with a
                retryable error
            Exception: The original exception if it is not retryable
        """
        self._check_circuit()
        func_name = getattr(func, "__name__", repr(func))

        for attempt in range(self.max_retries + 1):
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                if not self.retry_condition(e):
                    logger.debug(f"{func_name} failed with non-retryable {type(e).__name__}")
                    raise

                if attempt >= self.max_retries:
                    logger.warning(f"Max retries ({self.max_retries}) exceeded for {func_name}")
                    self._on_exhausted(attempt)
                    raise RetryExhaustedException(attempt + 1, e) from e

                delay = self.calculate_delay(attempt)
                logger.debug(
                    f"Retrying {func_name} in {delay:.2f}s "
                    f"(attempt {attempt + 1}/{self.max_retries + 1}): {e}"
                )
                time.sleep(delay)
                continue

            if attempt > 0:
                logger.info(f"{func_name} succeeded after {attempt} retries")
            self._on_success(attempt)
            return result

    def get_retry_statistics(self) -> dict:
        """Snapshot of the retry counters."""
        with self._lock:
            return asdict(self._stats)

    def reset_circuit_breaker(self) -> None:
        """Manually close the circuit breaker."""
        with self._lock:
            self._stats.circuit_open = False
            self._stats.consecutive_failures = 0
            self._opened_at = 0.0
        logger.info("Circuit breaker manually reset")
