"""Operating mode state machine of the water heater."""

from __future__ import annotations

import contextlib
import dataclasses
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import TYPE_CHECKING

from .api import AristonApiClientError, AristonTemperatureControlDisabledError
from .const import DEFAULT_ECO_POWERS_ON
from .models import DeviceState, OperatingMode, TemperatureBounds

if TYPE_CHECKING:
    from .cache import AristonStateCache
    from .client import AristonPlantClient

_LOGGER = logging.getLogger(__name__)


class AristonModeController:
    """Drive the OFF / HEAT / ECO_AUTO transitions.

    Local state changes only after the remote command succeeded, so a failed
    transition leaves mode and temperature bounds untouched. Transitions that
    need two commands send a compensating command when the second one fails. ECO_AUTO
    withdraws the settable temperature range; the API itself does not
    enforce this.
    """

    def __init__(
        self,
        client: AristonPlantClient,
        cache: AristonStateCache,
        normal_bounds: TemperatureBounds,
        *,
        eco_powers_on: bool = DEFAULT_ECO_POWERS_ON,
    ) -> None:
        """Initialize the mode controller.

        Args:
            client: Plant client used to send commands.
            cache: Owner of the device state.
            normal_bounds: Range offered outside ECO_AUTO.
            eco_powers_on: Switch the heater on before entering ECO_AUTO
                when it is off.

        """
        self._client = client
        self._cache = cache
        self._normal_bounds = normal_bounds
        self.eco_powers_on = eco_powers_on

    @property
    def state(self) -> DeviceState:
        """Return the device state."""
        return self._cache.state

    @property
    def mode(self) -> OperatingMode:
        """Return the current operating mode."""
        return self.state.mode

    @property
    def bounds(self) -> TemperatureBounds:
        """Return the temperature range currently offered."""
        if self.state.eco_active:
            return TemperatureBounds.disabled()
        return self._normal_bounds

    def clamp(self, value: float) -> float:
        """Saturate ``value`` into the current bounds.

        Raises:
            AristonTemperatureControlDisabledError: In ECO_AUTO mode.

        """
        bounds = self.bounds
        if not bounds.enabled:
            error_msg = "Temperature control is disabled in AUTO mode"
            raise AristonTemperatureControlDisabledError(error_msg)
        return bounds.clamp(value)

    async def async_set_power(self, on: bool) -> None:  # noqa: FBT001
        """Switch the heater on or off, leaving ECO mode as it is."""
        await self._async_switch_power(on)

    async def async_set_mode(self, mode: OperatingMode) -> None:
        """Move to ``mode``.

        When the second command of a two-step transition fails, the first one
        is reverted on a best-effort basis and the local state is left at the
        previous mode before the error is raised.
        """
        _LOGGER.debug("Changing mode from %s to %s", self.mode, mode)
        previous = dataclasses.replace(self.state)

        if mode is OperatingMode.ECO_AUTO:
            if self.eco_powers_on and not self.state.power_on:
                await self._async_switch_power(True)  # noqa: FBT003
                async with self._async_revert_on_error(
                    previous,
                    lambda: self._client.async_switch_power(False),  # noqa: FBT003
                ):
                    await self._async_switch_eco(True)  # noqa: FBT003
            else:
                await self._async_switch_eco(True)  # noqa: FBT003
            return

        power_on = mode is OperatingMode.HEAT
        if not self.state.eco_active:
            await self._async_switch_power(power_on)
            return

        await self._async_switch_eco(False)  # noqa: FBT003
        if self.state.power_on == power_on:
            return
        async with self._async_revert_on_error(
            previous,
            lambda: self._client.async_switch_eco(True),  # noqa: FBT003
        ):
            await self._async_switch_power(power_on)

    @contextlib.asynccontextmanager
    async def _async_revert_on_error(
        self,
        previous: DeviceState,
        undo: Callable[[], Awaitable[None]],
    ) -> AsyncIterator[None]:
        try:
            yield
        except AristonApiClientError:
            _LOGGER.warning(
                "Mode change failed halfway, reverting to %s", previous.mode
            )
            try:
                await undo()
            except AristonApiClientError as err:
                _LOGGER.warning("Could not revert the first step: %s", err)
            state = self.state
            state.power_on = previous.power_on
            state.eco_active = previous.eco_active
            state.target_temperature = previous.target_temperature
            raise

    async def _async_switch_power(self, on: bool) -> None:  # noqa: FBT001
        _LOGGER.info("Turning heater %s", "ON" if on else "OFF")
        await self._client.async_switch_power(on)
        self.state.power_on = on
        _LOGGER.debug("Heater state updated successfully")

    async def _async_switch_eco(self, eco: bool) -> None:  # noqa: FBT001
        await self._client.async_switch_eco(eco)
        self.state.eco_active = eco
        _LOGGER.info("ECO mode set to %s", "ON" if eco else "OFF")
        if eco:
            _LOGGER.info("Target temperature control disabled in AUTO mode")
        else:
            self.state.target_temperature = self._normal_bounds.clamp(
                self.state.target_temperature
            )
            _LOGGER.info("Target temperature control enabled")
