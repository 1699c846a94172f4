"""
Transport package: the HTTP fetch collaborator of the API client.

Encapsulates timeouts, the browser header profile, the cookie jar,
retry of unsent requests, the circuit breaker, and the filtering of
non-text responses. Errors surface as shared.errors.FetchError.
"""

from .lookup import (
    HEADER_PROFILES, TEXT_CONTENT_TYPES, FetchConfig, FetchResult, UrlFetcher, choose_header_profile
)

__all__ = [
    "HEADER_PROFILES",
    "TEXT_CONTENT_TYPES",
    "FetchConfig",
    "FetchResult",
    "UrlFetcher",
    "choose_header_profile",
]
