"""Data models for the Ariston Aqua water heater core."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class OperatingMode(StrEnum):
    """Operating modes selectable on the water heater."""

    OFF = "off"
    HEAT = "heat"
    ECO_AUTO = "eco_auto"


@dataclass
class Session:
    """Represents an authentication token issued by the Ariston NET API."""

    token: str
    obtained_at: datetime
    valid: bool = True


@dataclass(frozen=True, slots=True)
class TemperatureBounds:
    """Range of target temperatures the control surface may offer.

    A disabled range carries no numeric bounds at all; it is used while the
    heater manages its own temperature in ECO/AUTO mode.
    """

    min: float | None
    max: float | None
    step: float | None

    @classmethod
    def normal(cls, minimum: float, maximum: float, step: float) -> TemperatureBounds:
        """Return an enabled range."""
        return cls(min=minimum, max=maximum, step=step)

    @classmethod
    def disabled(cls) -> TemperatureBounds:
        """Return a range with no settable values."""
        return cls(min=None, max=None, step=None)

    @property
    def enabled(self) -> bool:
        """Return True if a numeric range is available."""
        return self.min is not None and self.max is not None

    def clamp(self, value: float) -> float:
        """Saturate ``value`` into the range.

        Raises:
            ValueError: If the range is disabled.

        """
        if self.min is None or self.max is None:
            error_msg = "Temperature range is disabled"
            raise ValueError(error_msg)
        return float(max(self.min, min(value, self.max)))


@dataclass(slots=True)
class Telemetry:
    """Values decoded from one plant data response.

    Fields are None when the response did not carry a usable value.
    """

    current_temperature: float | None
    requested_temperature: float | None
    processed_requested_temperature: float | None
    power_on: bool | None
    eco_active: bool | None

    @property
    def target_temperature(self) -> float | None:
        """Return the reported target, preferring the processed request."""
        if self.processed_requested_temperature is not None:
            return self.processed_requested_temperature
        return self.requested_temperature


@dataclass(slots=True)
class DeviceState:
    """Last known state of the water heater."""

    current_temperature: float
    target_temperature: float
    power_on: bool = False
    eco_active: bool = False
    fetched_at: float | None = None  # Monotonic time of the last successful fetch

    @property
    def mode(self) -> OperatingMode:
        """Return the operating mode derived from the power and eco flags."""
        if self.eco_active:
            return OperatingMode.ECO_AUTO
        if self.power_on:
            return OperatingMode.HEAT
        return OperatingMode.OFF
