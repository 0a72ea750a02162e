"""Shared constants and helpers for Ariston Aqua tests."""

import asyncio

from ariston_aqua.api import plant_url
from ariston_aqua.const import (
    BASE_URL,
    LOGIN_PATH,
    PLANT_DATA_PATH,
    SWITCH_ECO_PATH,
    SWITCH_PATH,
    TEMPERATURE_PATH,
)
from ariston_aqua.models import Telemetry

PLANT_ID = "plant123"
TOKEN = "test_token"  # noqa: S105

LOGIN_URL = BASE_URL + LOGIN_PATH
PLANT_DATA_URL = plant_url(PLANT_DATA_PATH, PLANT_ID)
TEMPERATURE_URL = plant_url(TEMPERATURE_PATH, PLANT_ID)
SWITCH_URL = plant_url(SWITCH_PATH, PLANT_ID)
SWITCH_ECO_URL = plant_url(SWITCH_ECO_PATH, PLANT_ID)


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, now: float = 1000.0) -> None:
        """Initialize the clock."""
        self.now = now

    def __call__(self) -> float:
        """Return the current time."""
        return self.now

    def advance(self, seconds: float) -> None:
        """Move the clock forward."""
        self.now += seconds


class GatedFetch:
    """Telemetry fetch that blocks until released."""

    def __init__(self, telemetry: Telemetry) -> None:
        """Initialize the fetch."""
        self.telemetry = telemetry
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def __call__(self) -> Telemetry:
        """Signal the start, then wait for the release."""
        self.started.set()
        await self.release.wait()
        return self.telemetry
