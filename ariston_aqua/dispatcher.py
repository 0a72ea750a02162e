"""Public command and query surface of an Ariston water heater.

The adapter layer talks to the heater exclusively through
``AristonCommandDispatcher``. Reads always resolve to a value; writes raise
an ``AristonApiClientError`` subclass on any failure and leave the local
state as it was.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from typing import TYPE_CHECKING

from . import api
from .models import DeviceState, OperatingMode, TemperatureBounds

if TYPE_CHECKING:
    from .cache import AristonStateCache
    from .client import AristonPlantClient
    from .mode import AristonModeController

_LOGGER = logging.getLogger(__name__)


class AristonCommandDispatcher:
    """Serialize writes and route reads for one water heater.

    Telemetry that overlaps a write is discarded, so a fetch never
    overwrites the confirmed result of a command.
    """

    def __init__(
        self,
        client: AristonPlantClient,
        cache: AristonStateCache,
        mode_controller: AristonModeController,
    ) -> None:
        """Initialize the dispatcher."""
        self._client = client
        self._cache = cache
        self._modes = mode_controller
        self._write_lock = asyncio.Lock()

    @property
    def bounds(self) -> TemperatureBounds:
        """Return the temperature range currently offered."""
        return self._modes.bounds

    @property
    def state(self) -> DeviceState:
        """Return a snapshot of the device state."""
        return dataclasses.replace(self._cache.state)

    async def async_set_target_temperature(self, value: float) -> float:
        """Set the target temperature.

        The value is clamped into the current bounds.

        Returns:
            The temperature sent to the heater.

        Raises:
            AristonApiAuthError: If no session can be obtained.
            AristonTemperatureControlDisabledError: In ECO_AUTO mode.
            AristonApiClientError: If the command failed.

        """
        async with self._write_lock, self._cache.async_write():
            state = self._cache.state
            try:
                await self._client.session_manager.async_ensure_session()
                new = self._modes.clamp(value)
                if new != value:
                    _LOGGER.debug("Clamped requested temperature %s to %s", value, new)
                await self._client.async_set_temperature(new, state.target_temperature)
            except api.AristonApiClientError as err:
                _LOGGER.warning("Error setting target temperature: %s", err)
                raise

            state.target_temperature = new
            _LOGGER.info("Target temperature set to %s°C", new)
            return new

    async def async_set_power(self, on: bool) -> None:  # noqa: FBT001
        """Switch the heater on or off.

        Raises:
            AristonApiClientError: If the command failed.

        """
        async with self._write_lock, self._cache.async_write():
            try:
                await self._modes.async_set_power(on)
            except api.AristonApiClientError as err:
                _LOGGER.warning("Error updating heater state: %s", err)
                raise

    async def async_set_mode(self, mode: OperatingMode | str) -> None:
        """Change the operating mode.

        Raises:
            ValueError: If ``mode`` is not a known operating mode.
            AristonApiClientError: If a command failed.

        """
        mode = OperatingMode(mode)
        async with self._write_lock, self._cache.async_write():
            try:
                await self._modes.async_set_mode(mode)
            except api.AristonApiClientError as err:
                _LOGGER.warning("Error setting mode %s: %s", mode, err)
                raise

    async def async_get_current_temperature(self) -> float:
        """Return the current water temperature."""
        return await self._cache.async_get_current_temperature()

    async def async_get_target_temperature(self) -> float:
        """Return the target temperature.

        A heater that is off or a client without session cannot report a
        meaningful pending target, so the local value is returned without a
        request.
        """
        state = self._cache.state
        if not self._client.session_manager.has_session or not state.power_on:
            return state.target_temperature
        return await self._cache.async_get_target_temperature()

    def get_power_state(self) -> bool:
        """Return True if the heater is on."""
        return self._cache.state.power_on

    def get_mode(self) -> OperatingMode:
        """Return the current operating mode."""
        return self._modes.mode
