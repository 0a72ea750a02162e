"""Time-bounded cache of the water heater telemetry."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections.abc import AsyncIterator, Callable
from typing import TYPE_CHECKING

from . import api
from .const import DEFAULT_CACHE_DURATION, DEFAULT_TEMPERATURE
from .models import DeviceState, Telemetry, TemperatureBounds

if TYPE_CHECKING:
    from .client import AristonPlantClient

_LOGGER = logging.getLogger(__name__)


class AristonStateCache:
    """Hold the last known device state and refill it when it expires.

    Reads never raise: when a refresh is impossible or fails the best known
    value is served, falling back to the configured default temperature.
    """

    def __init__(
        self,
        client: AristonPlantClient,
        normal_bounds: TemperatureBounds,
        *,
        cache_duration: float = DEFAULT_CACHE_DURATION,
        default_temperature: float = DEFAULT_TEMPERATURE,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            client: Plant client used to fetch telemetry.
            normal_bounds: Range reported targets are clamped into while ECO
                mode is off.
            cache_duration: Seconds a successful fetch is served without a
                new request. Zero disables caching.
            default_temperature: Value served when no valid reading exists.
            monotonic: Clock used to age the cached values.

        """
        self._client = client
        self._normal_bounds = normal_bounds
        self.cache_duration = cache_duration
        self.default_temperature = default_temperature
        self._monotonic = monotonic
        self._refresh_task: asyncio.Task[bool] | None = None
        self._generation = 0
        self._writers = 0
        self._closed = False
        self._state = DeviceState(
            current_temperature=default_temperature,
            target_temperature=normal_bounds.clamp(default_temperature),
        )

    @property
    def state(self) -> DeviceState:
        """Return the live device state."""
        return self._state

    @property
    def is_fresh(self) -> bool:
        """Return True if the cached values are inside the freshness window."""
        if self._state.fetched_at is None:
            return False
        return self._monotonic() - self._state.fetched_at < self.cache_duration

    def invalidate(self) -> None:
        """Force the next read to fetch from the API.

        Telemetry of a fetch already in flight is discarded when it arrives.
        """
        self._generation += 1
        self._state.fetched_at = None

    @contextlib.asynccontextmanager
    async def async_write(self) -> AsyncIterator[None]:
        """Mark a write in progress.

        Telemetry arriving while a write runs, or requested before it ended,
        is discarded. The cache is stale once the write is over.
        """
        self._writers += 1
        self.invalidate()
        try:
            yield
        finally:
            self._writers -= 1
            self.invalidate()

    async def async_get_current_temperature(self) -> float:
        """Return the current water temperature."""
        if self.is_fresh:
            _LOGGER.debug(
                "Returning cached temperature: %s", self._state.current_temperature
            )
            return self._state.current_temperature

        await self.async_refresh()
        return self._state.current_temperature

    async def async_get_target_temperature(self) -> float:
        """Return the target temperature, refreshing it when stale."""
        if not self.is_fresh:
            await self.async_refresh()
        return self._state.target_temperature

    async def async_refresh(self, *, force: bool = False) -> bool:
        """Fetch telemetry unless the cache is fresh.

        Concurrent callers share one request.

        Returns:
            True if the state is fresh afterwards, False if the fetch failed,
            was discarded or was cancelled by shutdown.

        """
        if self._closed:
            return False
        if not force and self.is_fresh:
            return True

        if self._refresh_task is None or self._refresh_task.done():
            self._refresh_task = asyncio.create_task(self._async_fetch())
        task = self._refresh_task
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if not task.cancelled() or (current and current.cancelling()):
                raise
            return False

    async def async_shutdown(self) -> None:
        """Cancel a refresh in flight and refuse new ones."""
        self._closed = True
        task, self._refresh_task = self._refresh_task, None
        if task is None or task.done():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _async_fetch(self) -> bool:
        generation = self._generation
        try:
            telemetry = await self._client.async_get_telemetry()
        except api.AristonApiAuthError as err:
            _LOGGER.warning(
                "Session refused or login failed, serving last known state: %s", err
            )
            return False
        except api.AristonApiClientError as err:
            _LOGGER.warning("Error refreshing telemetry: %s", err)
            return False
        except Exception:
            _LOGGER.exception("Unexpected error refreshing telemetry")
            return False

        if self._writers or generation != self._generation:
            _LOGGER.debug("Discarding telemetry requested before a local change")
            return False

        self.apply_telemetry(telemetry)
        return True

    def apply_telemetry(self, telemetry: Telemetry) -> None:
        """Update the state from a successful fetch."""
        state = self._state

        if telemetry.current_temperature is None:
            _LOGGER.warning(
                "Current temperature is invalid, defaulting to %s",
                self.default_temperature,
            )
            state.current_temperature = self.default_temperature
        else:
            state.current_temperature = telemetry.current_temperature

        if telemetry.power_on is not None:
            state.power_on = telemetry.power_on
        if telemetry.eco_active is not None:
            state.eco_active = telemetry.eco_active

        target = telemetry.target_temperature
        if target is not None:
            if not state.eco_active:
                target = self._normal_bounds.clamp(target)
            state.target_temperature = target

        state.fetched_at = self._monotonic()
        _LOGGER.debug("Updated state from telemetry: %s", state)
