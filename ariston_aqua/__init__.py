"""Ariston Aqua water heater synchronization core."""

from .api import (
    AristonApiAuthError,
    AristonApiClientError,
    AristonApiRateLimitedError,
    AristonInvalidDataError,
    AristonNetworkError,
    AristonRemoteRejectedError,
    AristonRetryExhaustedError,
    AristonTemperatureControlDisabledError,
)
from .config import CONFIG_SCHEMA, AristonConfig, load_config
from .device import AristonDeviceInfo, AristonWaterHeater
from .dispatcher import AristonCommandDispatcher
from .models import DeviceState, OperatingMode, TemperatureBounds

__all__ = [
    "CONFIG_SCHEMA",
    "AristonApiAuthError",
    "AristonApiClientError",
    "AristonApiRateLimitedError",
    "AristonCommandDispatcher",
    "AristonConfig",
    "AristonDeviceInfo",
    "AristonInvalidDataError",
    "AristonNetworkError",
    "AristonRemoteRejectedError",
    "AristonRetryExhaustedError",
    "AristonTemperatureControlDisabledError",
    "AristonWaterHeater",
    "DeviceState",
    "OperatingMode",
    "TemperatureBounds",
    "load_config",
]
