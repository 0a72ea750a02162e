"""Periodic telemetry refresh owned by a device instance."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING

from .const import DEFAULT_POLL_INTERVAL

if TYPE_CHECKING:
    from .cache import AristonStateCache

_LOGGER = logging.getLogger(__name__)


class AristonTelemetryPoller:
    """Refresh the state cache every ``interval`` seconds until stopped."""

    def __init__(
        self,
        cache: AristonStateCache,
        interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        """Initialize the poller."""
        self._cache = cache
        self.interval = interval
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        """Return True while the polling task is alive."""
        return self._task is not None and not self._task.done()

    def async_start(self) -> None:
        """Start polling. Does nothing if already running."""
        if self.running:
            return
        _LOGGER.debug("Starting telemetry poller every %.0fs", self.interval)
        self._task = asyncio.create_task(self._async_run())

    async def async_stop(self) -> None:
        """Stop polling and wait for the task to finish."""
        if self._task is None:
            return

        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        _LOGGER.debug("Telemetry poller stopped")

    async def _async_run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            if not await self._cache.async_refresh(force=True):
                _LOGGER.debug("Scheduled telemetry refresh failed")
