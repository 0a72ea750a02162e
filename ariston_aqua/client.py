"""Authorized access to the endpoints of one Ariston plant."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, TypeVar

from . import api

if TYPE_CHECKING:
    import httpx

    from .executor import AristonRequestExecutor
    from .models import Telemetry
    from .session import AristonSessionManager

_LOGGER = logging.getLogger(__name__)

_T = TypeVar("_T")


class AristonPlantClient:
    """Send plant requests with the current session through the executor.

    A request refused for authorization invalidates the session it used.
    """

    def __init__(
        self,
        session: httpx.AsyncClient,
        session_manager: AristonSessionManager,
        executor: AristonRequestExecutor,
        plant_id: str,
    ) -> None:
        """Initialize the plant client."""
        self._http = session
        self.session_manager = session_manager
        self.executor = executor
        self.plant_id = plant_id

    async def _async_call(
        self,
        func: Callable[..., Awaitable[_T]],
        *args: Any,  # noqa: ANN401
    ) -> _T:
        session = await self.session_manager.async_ensure_session()
        try:
            return await self.executor.execute(
                lambda: func(self._http, session.token, self.plant_id, *args)
            )
        except api.AristonApiAuthError:
            _LOGGER.debug("Request for plant %s refused, dropping token", self.plant_id)
            self.session_manager.invalidate(session)
            raise

    async def async_get_telemetry(self) -> Telemetry:
        """Fetch the plant telemetry."""
        return await self._async_call(api.async_get_plant_data)

    async def async_set_temperature(self, new: float, old: float) -> None:
        """Request a new target temperature."""
        await self._async_call(api.async_set_temperature, new, old)

    async def async_switch_power(self, on: bool) -> None:  # noqa: FBT001
        """Switch the heater on or off."""
        await self._async_call(api.async_switch_power, on)

    async def async_switch_eco(self, eco: bool) -> None:  # noqa: FBT001
        """Enable or disable ECO mode."""
        await self._async_call(api.async_switch_eco, eco)
