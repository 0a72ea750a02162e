"""Pytest configuration and fixtures for Ariston Aqua tests."""

from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest

from ariston_aqua.cache import AristonStateCache
from ariston_aqua.client import AristonPlantClient
from ariston_aqua.config import AristonConfig
from ariston_aqua.models import Telemetry, TemperatureBounds

from .common import PLANT_ID, TOKEN, FakeClock


@pytest.fixture
def config() -> AristonConfig:
    """Fixture providing a device configuration."""
    return AristonConfig(
        username="user@example.com",
        password="secret",  # noqa: S106
        plant_id=PLANT_ID,
        cache_duration=30.0,
        retry_delay=5.0,
    )


@pytest.fixture
def normal_bounds() -> TemperatureBounds:
    """Fixture providing the default 40..80 range."""
    return TemperatureBounds.normal(40.0, 80.0, 1.0)


@pytest.fixture
def clock() -> FakeClock:
    """Fixture providing a hand driven clock."""
    return FakeClock()


@pytest.fixture
def telemetry() -> Telemetry:
    """Fixture providing a heating telemetry sample."""
    return Telemetry(
        current_temperature=55.0,
        requested_temperature=60.0,
        processed_requested_temperature=None,
        power_on=True,
        eco_active=False,
    )


@pytest.fixture
def mock_client(telemetry: Telemetry) -> Mock:
    """Create a mock plant client with a valid session."""
    client = Mock(spec=AristonPlantClient)
    client.session_manager = Mock()
    client.session_manager.has_session = True
    client.session_manager.async_ensure_session = AsyncMock()
    client.async_get_telemetry = AsyncMock(return_value=telemetry)
    client.async_set_temperature = AsyncMock()
    client.async_switch_power = AsyncMock()
    client.async_switch_eco = AsyncMock()
    return client


@pytest.fixture
def cache(
    mock_client: Mock,
    normal_bounds: TemperatureBounds,
    clock: FakeClock,
) -> AristonStateCache:
    """Create a state cache backed by the mock client."""
    return AristonStateCache(
        mock_client,
        normal_bounds,
        cache_duration=30.0,
        default_temperature=40.0,
        monotonic=clock,
    )


@pytest.fixture
def sample_login_response() -> dict[str, Any]:
    """Fixture providing a sample login API response."""
    return {"token": TOKEN}


@pytest.fixture
def sample_plant_data_response() -> dict[str, Any]:
    """Fixture providing a sample plant data API response."""
    return {
        "temp": 52.5,
        "reqTemp": 60,
        "procReqTemp": 58,
        "on": True,
        "eco": False,
    }


@pytest.fixture
def sample_command_response() -> dict[str, Any]:
    """Fixture providing a successful command API response."""
    return {"success": True}
