"""Ariston water heater device instance.

Wires the session manager, request executor, state cache, mode controller,
dispatcher and poller of one plant together and owns their lifecycle.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import httpx

from . import api
from .cache import AristonStateCache
from .client import AristonPlantClient
from .config import AristonConfig
from .const import MANUFACTURER
from .dispatcher import AristonCommandDispatcher
from .executor import AristonRequestExecutor
from .mode import AristonModeController
from .poller import AristonTelemetryPoller
from .session import AristonSessionManager

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class AristonDeviceInfo:
    """Identification of a water heater for the adapter layer."""

    name: str
    manufacturer: str
    model: str
    serial_number: str


class AristonWaterHeater:
    """One Ariston water heater synchronized with the Ariston NET cloud."""

    def __init__(
        self,
        config: AristonConfig,
        session: httpx.AsyncClient | None = None,
        *,
        sleep: Callable[[float], Awaitable[Any]] | None = None,
    ) -> None:
        """Initialize the device.

        Args:
            config: Validated device settings.
            session: HTTP client to use. When omitted the device creates
                one and closes it on shutdown.
            sleep: Coroutine used by the executor between throttled attempts.

        """
        self.config = config
        self._owns_session = session is None
        self._http = session or api.create_session_client(config.request_timeout)

        self.session_manager = AristonSessionManager(
            self._http,
            config.username,
            config.password,
            request_timeout=config.request_timeout,
        )
        self.executor = AristonRequestExecutor(
            max_attempts=config.max_attempts,
            retry_delay=config.retry_delay,
            request_timeout=config.request_timeout,
            sleep=sleep,
        )
        self.client = AristonPlantClient(
            self._http, self.session_manager, self.executor, config.plant_id
        )
        self.cache = AristonStateCache(
            self.client,
            config.normal_bounds,
            cache_duration=config.cache_duration,
            default_temperature=config.default_temperature,
        )
        self.mode_controller = AristonModeController(
            self.client,
            self.cache,
            config.normal_bounds,
            eco_powers_on=config.eco_powers_on,
        )
        self.dispatcher = AristonCommandDispatcher(
            self.client, self.cache, self.mode_controller
        )
        self.poller = AristonTelemetryPoller(self.cache, config.poll_interval)

    @property
    def info(self) -> AristonDeviceInfo:
        """Return the device identification."""
        return AristonDeviceInfo(
            name=self.config.name,
            manufacturer=MANUFACTURER,
            model=self.config.model,
            serial_number=self.config.serial_number,
        )

    async def async_setup(self) -> bool:
        """Log in, fetch the first telemetry and start polling.

        A failed login is logged and not fatal; the next request retries it.

        Returns:
            True if the initial login succeeded.

        """
        _LOGGER.info("Setting up %s (plant %s)", self.config.name, self.config.plant_id)
        try:
            await self.session_manager.async_ensure_session()
        except api.AristonApiAuthError as err:
            _LOGGER.error("Error logging in for %s: %s", self.config.name, err)
            logged_in = False
        else:
            await self.cache.async_refresh(force=True)
            logged_in = True

        self.poller.async_start()
        return logged_in

    async def async_shutdown(self) -> None:
        """Stop polling, cancel a refresh in flight and release the client."""
        _LOGGER.info("Shutting down %s", self.config.name)
        await self.poller.async_stop()
        await self.cache.async_shutdown()
        if self._owns_session:
            await self._http.aclose()
