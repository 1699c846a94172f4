"""
Shared utilities for the Moodle access client.

Cross-cutting building blocks used by the moodle_client package:

- config: Client configuration via pydantic-settings
- logging: Structured logging with call correlation and token redaction
- errors: Canonical error types and responses
- retry: Retry helpers with backoff
- circuit_breaker: Protection against a failing Moodle site
- test_helpers: Fetch result builders and payload factories for tests

Do not import from moodle_client into shared/ except in test_helpers.
"""
