"""
URL fetcher used by the Moodle API client.
"""

import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import httpx

from shared.circuit_breaker import CircuitBreaker, CircuitBreakerOpenException
from shared.errors import FetchError
from shared.logging import get_logger, redact
from shared.retry import RetryConfig, RetryError, call_with_retry


HEADER_PROFILES: List[List[Tuple[str, str]]] = [
    [
        ("DNT", "1"),
        ("Accept", "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"),
        ("User-Agent", "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_12_6) AppleWebKit/603.3.4 (KHTML, like Gecko) Version/10.1.2 Safari/603.3.4"),
        ("Upgrade-Insecure-Requests", "1"),
        ("Accept-Language", "en-au"),
    ],
    [
        ("Accept", "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,image/apng,*/*;q=0.8"),
        ("Accept-Language", "en-AU,en;q=0.8,en-US;q=0.6"),
        ("User-Agent", "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_12_6) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/61.0.3163.79 Safari/537.36"),
        ("Upgrade-Insecure-Requests", "1"),
    ],
]

TEXT_CONTENT_TYPES = (
    "application/xml",
    "application/json",
    "application/rss+xml",
    "application/atom+xml",
    "text/html",
    "text/json",
    "text/plain",
    "text/xml",
)

# Only failures where the request never reached the server are retried.
RETRYABLE_EXCEPTIONS = (httpx.ConnectError, httpx.ConnectTimeout)


def choose_header_profile(rng: Optional[random.Random] = None) -> Dict[str, str]:
    """Pick one browser header profile."""
    rng = rng or random.Random()
    return dict(rng.choice(HEADER_PROFILES))


@dataclass
class FetchConfig:
    """Per-client fetch settings. The header profile is fixed at construction."""
    connect_timeout: float = 8.0
    request_timeout: float = 16.0
    retry: RetryConfig = field(default_factory=RetryConfig)
    failure_threshold: int = 5
    recovery_timeout: float = 30.0
    headers: Dict[str, str] = field(default_factory=choose_header_profile)

    @classmethod
    def from_settings(cls, settings) -> "FetchConfig":
        return cls(
            connect_timeout=settings.connect_timeout,
            request_timeout=settings.request_timeout,
            retry=RetryConfig.from_settings(settings),
            failure_threshold=settings.breaker_failure_threshold,
            recovery_timeout=settings.breaker_recovery_timeout,
        )

    def timeout(self) -> httpx.Timeout:
        return httpx.Timeout(self.request_timeout, connect=self.connect_timeout)


@dataclass
class FetchResult:
    """Trimmed text body with status and content type."""
    body: str
    status_code: int
    content_type: str


class UrlFetcher:
    """Fetches text content over HTTP with a shared cookie jar."""

    def __init__(self, config: Optional[FetchConfig] = None, name: str = "moodle"):
        self.config = config or FetchConfig()
        self.cookies = httpx.Cookies()
        self.logger = get_logger("moodle.fetcher")
        self.circuit_breaker = CircuitBreaker(
            failure_threshold=self.config.failure_threshold,
            recovery_timeout=self.config.recovery_timeout,
            expected_exception=(RetryError, httpx.HTTPError),
            name=name
        )

    async def get(self, url: str) -> FetchResult:
        """Fetch the content of a URL."""
        async def _get():
            async with httpx.AsyncClient(timeout=self.config.timeout(), headers=self.config.headers,
                                         cookies=self.cookies) as client:
                return await client.get(url)

        return await self._fetch(_get, url)

    async def post(self, url: str, data: Optional[Dict[str, Any]] = None,
                   files: Optional[Dict[str, Any]] = None) -> FetchResult:
        """Upload form data and/or files to a URL."""
        async def _post():
            async with httpx.AsyncClient(timeout=self.config.timeout(), headers=self.config.headers,
                                         cookies=self.cookies) as client:
                return await client.post(url, data=data, files=files)

        return await self._fetch(_post, url)

    async def _fetch(self, request, url: str) -> FetchResult:
        safe_url = redact(url)
        self.logger.debug("Fetching URL", url=safe_url)

        try:
            response = await self.circuit_breaker.call(
                call_with_retry, request,
                exceptions=RETRYABLE_EXCEPTIONS,
                config=self.config.retry
            )
        except CircuitBreakerOpenException as e:
            raise FetchError(
                "Moodle site unavailable",
                details={"url": safe_url, "retry_after": round(e.retry_after, 1)}
            ) from e
        except RetryError as e:
            if isinstance(e.last_exception, httpx.ConnectTimeout):
                raise FetchError("Timeout connecting to server", details={"url": safe_url}) from e
            raise FetchError(
                f"Connection failed: {e.last_exception}",
                details={"url": safe_url, "attempts": e.attempts}
            ) from e
        except httpx.TimeoutException as e:
            raise FetchError("Timeout waiting for server", details={"url": safe_url}) from e
        except httpx.HTTPError as e:
            self.logger.error("HTTP error", url=safe_url, error=str(e))
            raise FetchError(str(e), details={"url": safe_url}) from e

        self.cookies.extract_cookies(response)

        content_type = response.headers.get("Content-Type", "")
        if response.status_code == 200 and not content_type.startswith(TEXT_CONTENT_TYPES):
            raise FetchError(
                f"Ignored non-text response: {content_type}",
                details={"url": safe_url, "content_type": content_type}
            )

        return FetchResult(
            body=response.text.strip(),
            status_code=response.status_code,
            content_type=content_type
        )
