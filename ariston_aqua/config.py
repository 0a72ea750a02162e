"""Configuration handling for the Ariston Aqua water heater core."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import voluptuous as vol

from .const import (
    CONF_CACHE_DURATION,
    CONF_DEFAULT_TEMPERATURE,
    CONF_ECO_POWERS_ON,
    CONF_MAX_ATTEMPTS,
    CONF_MAX_TEMPERATURE,
    CONF_MIN_TEMPERATURE,
    CONF_MODEL,
    CONF_NAME,
    CONF_PASSWORD,
    CONF_PLANT_ID,
    CONF_POLL_INTERVAL,
    CONF_REQUEST_TIMEOUT,
    CONF_RETRY_DELAY,
    CONF_SERIAL_NUMBER,
    CONF_TEMPERATURE_STEP,
    CONF_USERNAME,
    DEFAULT_CACHE_DURATION,
    DEFAULT_ECO_POWERS_ON,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_TEMPERATURE,
    DEFAULT_MIN_TEMPERATURE,
    DEFAULT_MODEL,
    DEFAULT_NAME,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_RETRY_DELAY,
    DEFAULT_SERIAL_NUMBER,
    DEFAULT_TEMPERATURE,
    DEFAULT_TEMPERATURE_STEP,
)
from .models import TemperatureBounds

_NON_NEGATIVE = vol.All(vol.Coerce(float), vol.Range(min=0))
_POSITIVE = vol.All(vol.Coerce(float), vol.Range(min=0, min_included=False))
_TEMPERATURE = vol.All(vol.Coerce(float), vol.Range(min=0, max=100))


def _validate_temperature_range(config: dict[str, Any]) -> dict[str, Any]:
    if config[CONF_MIN_TEMPERATURE] > config[CONF_MAX_TEMPERATURE]:
        error_msg = "min_temperature must not exceed max_temperature"
        raise vol.Invalid(error_msg, path=[CONF_MIN_TEMPERATURE])
    return config


CONFIG_SCHEMA = vol.All(
    vol.Schema(
        {
            vol.Required(CONF_USERNAME): vol.All(str, vol.Length(min=1)),
            vol.Required(CONF_PASSWORD): vol.All(str, vol.Length(min=1)),
            vol.Required(CONF_PLANT_ID): vol.All(vol.Coerce(str), vol.Length(min=1)),
            vol.Optional(CONF_NAME, default=DEFAULT_NAME): str,
            vol.Optional(CONF_MODEL, default=DEFAULT_MODEL): str,
            vol.Optional(CONF_SERIAL_NUMBER, default=DEFAULT_SERIAL_NUMBER): str,
            vol.Optional(
                CONF_CACHE_DURATION, default=DEFAULT_CACHE_DURATION
            ): _NON_NEGATIVE,
            vol.Optional(CONF_POLL_INTERVAL, default=DEFAULT_POLL_INTERVAL): _POSITIVE,
            vol.Optional(CONF_RETRY_DELAY, default=DEFAULT_RETRY_DELAY): _NON_NEGATIVE,
            vol.Optional(CONF_MAX_ATTEMPTS, default=DEFAULT_MAX_ATTEMPTS): vol.All(
                vol.Coerce(int), vol.Range(min=1)
            ),
            vol.Optional(
                CONF_REQUEST_TIMEOUT, default=DEFAULT_REQUEST_TIMEOUT
            ): _POSITIVE,
            vol.Optional(
                CONF_DEFAULT_TEMPERATURE, default=DEFAULT_TEMPERATURE
            ): _TEMPERATURE,
            vol.Optional(
                CONF_MIN_TEMPERATURE, default=DEFAULT_MIN_TEMPERATURE
            ): _TEMPERATURE,
            vol.Optional(
                CONF_MAX_TEMPERATURE, default=DEFAULT_MAX_TEMPERATURE
            ): _TEMPERATURE,
            vol.Optional(
                CONF_TEMPERATURE_STEP, default=DEFAULT_TEMPERATURE_STEP
            ): _POSITIVE,
            vol.Optional(CONF_ECO_POWERS_ON, default=DEFAULT_ECO_POWERS_ON): bool,
        },
        extra=vol.REMOVE_EXTRA,
    ),
    _validate_temperature_range,
)


@dataclass(frozen=True)
class AristonConfig:
    """Validated settings of one water heater."""

    username: str
    password: str
    plant_id: str
    name: str = DEFAULT_NAME
    model: str = DEFAULT_MODEL
    serial_number: str = DEFAULT_SERIAL_NUMBER
    cache_duration: float = DEFAULT_CACHE_DURATION
    poll_interval: float = DEFAULT_POLL_INTERVAL
    retry_delay: float = DEFAULT_RETRY_DELAY
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    default_temperature: float = DEFAULT_TEMPERATURE
    min_temperature: float = DEFAULT_MIN_TEMPERATURE
    max_temperature: float = DEFAULT_MAX_TEMPERATURE
    temperature_step: float = DEFAULT_TEMPERATURE_STEP
    eco_powers_on: bool = DEFAULT_ECO_POWERS_ON

    def __repr__(self) -> str:
        """Return a representation without the password."""
        return (
            f"AristonConfig(username={self.username!r}, "
            f"plant_id={self.plant_id!r}, name={self.name!r})"
        )

    @property
    def normal_bounds(self) -> TemperatureBounds:
        """Return the temperature range offered outside ECO mode."""
        return TemperatureBounds.normal(
            self.min_temperature, self.max_temperature, self.temperature_step
        )


def load_config(data: Mapping[str, Any]) -> AristonConfig:
    """Validate a configuration mapping.

    Unknown keys are dropped.

    Raises:
        vol.Invalid: If the mapping is invalid.

    """
    return AristonConfig(**CONFIG_SCHEMA(dict(data)))
