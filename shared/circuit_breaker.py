"""
Circuit breaker for calls against a Moodle site.

After ``failure_threshold`` consecutive connection failures the breaker
opens and calls fail immediately for ``recovery_timeout`` seconds. The
next call after that is a probe: success closes the breaker, failure
opens it again.
"""

import time
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Tuple, Type, Union

from shared.logging import get_logger

ExceptionTypes = Union[Type[BaseException], Tuple[Type[BaseException], ...]]


class CircuitBreakerState(Enum):
    """Circuit breaker states."""
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"  # next call probes the site


class CircuitBreakerOpenException(Exception):
    """Raised instead of calling while the breaker is open."""

    def __init__(self, name: str, retry_after: float):
        super().__init__(f"Circuit breaker '{name}' is OPEN - blocking call")
        self.retry_after = retry_after


class CircuitBreaker:
    """Stops calling a site that keeps failing."""

    def __init__(self,
                 failure_threshold: int = 5,
                 recovery_timeout: float = 60.0,
                 expected_exception: ExceptionTypes = Exception,
                 name: str = "default",
                 clock: Callable[[], float] = time.monotonic):
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.expected_exception = expected_exception
        self.name = name
        self.clock = clock
        self.logger = get_logger(f"moodle.circuit_breaker.{name}")

        self._state = CircuitBreakerState.CLOSED
        self._failure_count = 0
        self._opened_at = 0.0
        self._success_count = 0

    @property
    def state(self) -> CircuitBreakerState:
        if self._state == CircuitBreakerState.OPEN and self.retry_after() == 0:
            self._state = CircuitBreakerState.HALF_OPEN
            self.logger.info("Circuit breaker transitioning to half-open")
        return self._state

    def retry_after(self) -> float:
        """Seconds until an open breaker lets a probe through."""
        if self._state != CircuitBreakerState.OPEN:
            return 0.0
        return max(0.0, self._opened_at + self.recovery_timeout - self.clock())

    async def call(self, func: Callable[..., Awaitable[Any]], *args, **kwargs) -> Any:
        """Await ``func`` unless the breaker is open."""
        if self.state == CircuitBreakerState.OPEN:
            raise CircuitBreakerOpenException(self.name, self.retry_after())

        try:
            result = await func(*args, **kwargs)
        except self.expected_exception:
            self._record_failure()
            raise

        self._record_success()
        return result

    def reset(self) -> None:
        """Close the breaker and forget past failures."""
        self._state = CircuitBreakerState.CLOSED
        self._failure_count = 0

    def _record_success(self):
        if self._state == CircuitBreakerState.HALF_OPEN:
            self.logger.info("Circuit breaker reset to CLOSED after successful probe")
        self.reset()
        self._success_count += 1

    def _record_failure(self):
        self._failure_count += 1
        self._success_count = 0

        if self._state == CircuitBreakerState.HALF_OPEN or self._failure_count >= self.failure_threshold:
            self._state = CircuitBreakerState.OPEN
            self._opened_at = self.clock()
            self.logger.warning(
                "Circuit breaker opened due to failures",
                failure_count=self._failure_count,
                threshold=self.failure_threshold,
                retry_after=self.recovery_timeout
            )

    def get_state(self) -> Dict[str, Any]:
        """Current breaker state, for diagnostics."""
        return {
            "name": self.name,
            "state": self.state.value,
            "failure_count": self._failure_count,
            "success_count": self._success_count,
            "retry_after": self.retry_after(),
            "failure_threshold": self.failure_threshold,
            "recovery_timeout": self.recovery_timeout
        }

    def is_open(self) -> bool:
        return self.state == CircuitBreakerState.OPEN
