"""
Unit tests for the retry helpers.
"""

from unittest.mock import AsyncMock, patch

import pytest

from shared.config import get_settings
from shared.retry import RetryConfig, RetryError, _calculate_delay, call_with_retry, retry_on_exception


class TestRetry:
    """Test cases for call_with_retry."""

    @pytest.fixture
    def config(self):
        return RetryConfig(max_attempts=3, base_delay=0.5, jitter=False)

    @pytest.mark.asyncio
    async def test_success_first_time(self, config):
        func = AsyncMock(return_value="ok")

        assert await call_with_retry(func, "a", config=config, flag=True) == "ok"
        func.assert_awaited_once_with("a", flag=True)

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self, config):
        func = AsyncMock(side_effect=[ConnectionError("down"), "ok"])

        with patch('shared.retry.asyncio.sleep', new_callable=AsyncMock) as mock_sleep:
            assert await call_with_retry(func, exceptions=(ConnectionError,), config=config) == "ok"

        assert func.await_count == 2
        mock_sleep.assert_awaited_once_with(0.5)

    @pytest.mark.asyncio
    async def test_exhausted(self, config):
        error = ConnectionError("down")
        func = AsyncMock(side_effect=error)

        with patch('shared.retry.asyncio.sleep', new_callable=AsyncMock) as mock_sleep:
            with pytest.raises(RetryError) as exc_info:
                await call_with_retry(func, exceptions=(ConnectionError,), config=config)

        assert exc_info.value.attempts == 3
        assert exc_info.value.last_exception is error
        assert [c.args[0] for c in mock_sleep.await_args_list] == [0.5, 1.0]

    @pytest.mark.asyncio
    async def test_other_exceptions_propagate(self, config):
        func = AsyncMock(side_effect=ValueError("bad"))

        with pytest.raises(ValueError):
            await call_with_retry(func, exceptions=(ConnectionError,), config=config)

        assert func.await_count == 1

    @pytest.mark.asyncio
    async def test_decorator(self):
        calls = []

        @retry_on_exception(exceptions=(ConnectionError,), config=RetryConfig(max_attempts=2, base_delay=0))
        async def flaky():
            calls.append(1)
            if len(calls) == 1:
                raise ConnectionError("down")
            return "ok"

        assert await flaky() == "ok"
        assert flaky.__name__ == "flaky"
        assert len(calls) == 2


class TestRetryConfig:
    """Test cases for RetryConfig and delay calculation."""

    def test_at_least_one_attempt(self):
        assert RetryConfig(max_attempts=0).max_attempts == 1

    def test_from_settings(self):
        config = RetryConfig.from_settings(get_settings(retry_attempts=4, retry_base_delay=0.1, retry_max_delay=2.0))

        assert (config.max_attempts, config.base_delay, config.max_delay) == (4, 0.1, 2.0)

    @pytest.mark.parametrize("strategy, attempt, expected", [
        ("exponential", 1, 1.0),
        ("exponential", 3, 4.0),
        ("exponential", 10, 5.0),
        ("linear", 3, 3.0),
        ("fixed", 3, 1.0),
    ])
    def test_delays(self, strategy, attempt, expected):
        config = RetryConfig(base_delay=1.0, max_delay=5.0, jitter=False, backoff_strategy=strategy)

        assert _calculate_delay(attempt, config) == expected

    def test_jitter_bounds(self):
        config = RetryConfig(base_delay=1.0, jitter=True)

        for _ in range(50):
            assert 0.9 <= _calculate_delay(1, config) <= 1.1
