"""Rate-limit aware execution of single Ariston API requests."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import httpx

from .api import (
    AristonApiRateLimitedError,
    AristonNetworkError,
    AristonRetryExhaustedError,
)
from .const import DEFAULT_MAX_ATTEMPTS, DEFAULT_REQUEST_TIMEOUT, DEFAULT_RETRY_DELAY

_LOGGER = logging.getLogger(__name__)

_T = TypeVar("_T")

SleepCallable = Callable[[float], Awaitable[Any]]


class AristonRequestExecutor:
    """Run a request with a bounded, fixed-delay retry on HTTP 429.

    Only throttling is retried. Transport failures, timeouts and every other
    error are raised after the first attempt.
    """

    def __init__(
        self,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        sleep: SleepCallable | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            max_attempts: Total attempts allowed for a throttled request.
            retry_delay: Seconds to wait between throttled attempts.
            request_timeout: Upper bound in seconds for a single attempt.
            sleep: Coroutine used to wait between attempts.

        """
        if max_attempts < 1:
            error_msg = "max_attempts must be at least 1"
            raise ValueError(error_msg)
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self.request_timeout = request_timeout
        self._sleep = sleep or asyncio.sleep

    async def execute(self, request_factory: Callable[[], Awaitable[_T]]) -> _T:
        """Execute the request built by ``request_factory``.

        The factory is called once per attempt so every attempt sends a new
        request.

        Raises:
            AristonRetryExhaustedError: If every attempt was rate limited.
            AristonNetworkError: On transport failure or timeout.
            AristonApiClientError: Any other API error, unchanged.

        """
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await self._attempt(request_factory)
            except AristonRetryExhaustedError:
                raise
            except AristonApiRateLimitedError:
                if attempt == self.max_attempts:
                    break
                _LOGGER.warning(
                    "Rate limited (attempt %d/%d), retrying in %.1fs",
                    attempt,
                    self.max_attempts,
                    self.retry_delay,
                )
                await self._sleep(self.retry_delay)

        _LOGGER.error("Giving up after %d rate limited attempts", self.max_attempts)
        raise AristonRetryExhaustedError(self.max_attempts)

    async def _attempt(self, request_factory: Callable[[], Awaitable[_T]]) -> _T:
        try:
            async with asyncio.timeout(self.request_timeout):
                return await request_factory()
        except TimeoutError as err:
            error_msg = f"Request timed out after {self.request_timeout}s"
            raise AristonNetworkError(error_msg) from err
        except httpx.TimeoutException as err:
            error_msg = f"Request timed out: {err}"
            raise AristonNetworkError(error_msg) from err
        except httpx.RequestError as err:
            error_msg = f"Connection error: {err}"
            raise AristonNetworkError(error_msg) from err
