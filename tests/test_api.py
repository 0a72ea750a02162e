"""Tests for the Ariston NET API client."""

import json
import math
from typing import Any
from unittest.mock import Mock

import httpx
import pytest
from pytest_httpx import HTTPXMock

from ariston_aqua import api
from ariston_aqua.api import (
    AristonApiAuthError,
    AristonApiClientError,
    AristonApiRateLimitedError,
    AristonInvalidDataError,
    AristonRemoteRejectedError,
    AristonRetryExhaustedError,
)
from ariston_aqua.const import APP_ID, APP_VERSION, AUTH_HEADER
from ariston_aqua.models import Telemetry

from .common import (
    LOGIN_URL,
    PLANT_DATA_URL,
    PLANT_ID,
    SWITCH_ECO_URL,
    SWITCH_URL,
    TEMPERATURE_URL,
    TOKEN,
)


def _response(status_code: int, body: Any = None) -> Mock:  # noqa: ANN401
    response = Mock(spec=httpx.Response)
    response.status_code = status_code
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


class TestExceptionHierarchy:
    """Tests for the API exception classes."""

    @pytest.mark.parametrize(
        "error_class",
        [
            api.AristonApiAuthError,
            api.AristonApiRateLimitedError,
            api.AristonNetworkError,
            api.AristonInvalidDataError,
            api.AristonRemoteRejectedError,
            api.AristonTemperatureControlDisabledError,
        ],
    )
    def test_errors_derive_from_client_error(self, error_class: type) -> None:
        """Test that every API error is an AristonApiClientError."""
        assert issubclass(error_class, AristonApiClientError)

    def test_retry_exhausted_is_rate_limited_error(self) -> None:
        """Test that RetryExhausted is a rate limit error carrying the attempts."""
        error = AristonRetryExhaustedError(3)
        assert isinstance(error, AristonApiRateLimitedError)
        assert error.attempts == 3
        assert "3 attempts" in str(error)


class TestCreateHeaders:
    """Tests for create_headers function."""

    def test_create_headers_returns_base_headers(self) -> None:
        """Test that create_headers returns JSON headers without token."""
        headers = api.create_headers()
        assert headers["Content-Type"] == "application/json"
        assert AUTH_HEADER not in headers

    def test_create_headers_includes_token_when_provided(self) -> None:
        """Test that create_headers carries the session token."""
        headers = api.create_headers(TOKEN)
        assert headers[AUTH_HEADER] == TOKEN


class TestStatusHelpers:
    """Tests for the HTTP status helpers."""

    def test_is_http_error(self) -> None:
        """Test that only 4xx and 5xx are errors."""
        assert api.is_http_error(200) is False
        assert api.is_http_error(299) is False
        assert api.is_http_error(400) is True
        assert api.is_http_error(500) is True

    def test_is_auth_error(self) -> None:
        """Test that 401 and 403 refuse the token."""
        assert api.is_auth_error(401) is True
        assert api.is_auth_error(403) is True
        assert api.is_auth_error(400) is False
        assert api.is_auth_error(429) is False

    def test_is_rate_limited(self) -> None:
        """Test that only 429 means throttling."""
        assert api.is_rate_limited(429) is True
        assert api.is_rate_limited(503) is False


class TestValidateResponse:
    """Tests for validate_response function."""

    def test_validate_response_returns_data_for_valid_response(self) -> None:
        """Test that validate_response returns data for valid response."""
        response = _response(200, {"success": True})
        assert api.validate_response(response) == {"success": True}

    def test_validate_response_raises_rate_limited_on_429(self) -> None:
        """Test that validate_response raises rate limit error on HTTP 429."""
        with pytest.raises(AristonApiRateLimitedError):
            api.validate_response(_response(429))

    @pytest.mark.parametrize("status", [401, 403])
    def test_validate_response_raises_auth_error(self, status: int) -> None:
        """Test that validate_response raises auth error on refused token."""
        with pytest.raises(AristonApiAuthError, match="Authentication error"):
            api.validate_response(_response(status))

    @pytest.mark.parametrize("status", [400, 404, 500])
    def test_validate_response_raises_rejected_on_other_errors(
        self, status: int
    ) -> None:
        """Test that validate_response raises rejected error on other statuses."""
        with pytest.raises(AristonRemoteRejectedError, match=f"{status}"):
            api.validate_response(_response(status))

    def test_validate_response_raises_rejected_on_malformed_body(self) -> None:
        """Test that a body that is not JSON is a rejected response."""
        response = _response(200, json.JSONDecodeError("bad", "", 0))
        with pytest.raises(AristonRemoteRejectedError, match="Malformed"):
            api.validate_response(response)


class TestExtractors:
    """Tests for the token and success extractors."""

    def test_extract_token(self) -> None:
        """Test that the token is read from the login response."""
        assert api.extract_token({"token": TOKEN}) == TOKEN

    @pytest.mark.parametrize("data", [{}, {"token": ""}, {"token": 12}, [], None])
    def test_extract_token_raises_auth_error_without_token(self, data: Any) -> None:  # noqa: ANN401
        """Test that a login response without token is an auth error."""
        with pytest.raises(AristonApiAuthError):
            api.extract_token(data)

    def test_extract_success(self) -> None:
        """Test that only an explicit true flag is success."""
        assert api.extract_success({"success": True}) is True
        assert api.extract_success({"success": False}) is False
        assert api.extract_success({"success": "yes"}) is False
        assert api.extract_success({}) is False
        assert api.extract_success(True) is False  # noqa: FBT003


class TestParseTemperature:
    """Tests for parse_temperature function."""

    def test_parse_temperature_accepts_numbers(self) -> None:
        """Test that ints and floats are accepted."""
        assert api.parse_temperature(52) == 52.0
        assert api.parse_temperature(52.5) == 52.5

    @pytest.mark.parametrize(
        "value", [None, "52", True, math.nan, math.inf, -math.inf, {}]
    )
    def test_parse_temperature_rejects_invalid_values(self, value: Any) -> None:  # noqa: ANN401
        """Test that non-numeric and non-finite values are rejected."""
        with pytest.raises(AristonInvalidDataError):
            api.parse_temperature(value)


class TestParseTelemetry:
    """Tests for parse_telemetry function."""

    def test_parse_telemetry_decodes_all_fields(
        self, sample_plant_data_response: dict[str, Any]
    ) -> None:
        """Test that a complete response decodes every field."""
        telemetry = api.parse_telemetry(sample_plant_data_response)
        assert telemetry == Telemetry(
            current_temperature=52.5,
            requested_temperature=60.0,
            processed_requested_temperature=58.0,
            power_on=True,
            eco_active=False,
        )
        assert telemetry.target_temperature == 58.0

    def test_parse_telemetry_falls_back_to_requested_temperature(self) -> None:
        """Test that the requested temperature is used without processed one."""
        telemetry = api.parse_telemetry({"temp": 50, "reqTemp": 65})
        assert telemetry.target_temperature == 65.0

    def test_parse_telemetry_maps_invalid_fields_to_none(self) -> None:
        """Test that invalid values decode to None instead of failing."""
        telemetry = api.parse_telemetry(
            {"temp": "hot", "reqTemp": None, "procReqTemp": "x", "on": "yes"}
        )
        assert telemetry.current_temperature is None
        assert telemetry.target_temperature is None
        assert telemetry.power_on is None
        assert telemetry.eco_active is None

    def test_parse_telemetry_rejects_non_object(self) -> None:
        """Test that a body that is not an object is rejected."""
        with pytest.raises(AristonRemoteRejectedError):
            api.parse_telemetry([1, 2, 3])


class TestAsyncLogin:
    """Tests for async_login function."""

    @pytest.mark.asyncio
    async def test_async_login_returns_token(
        self,
        httpx_mock: HTTPXMock,
        sample_login_response: dict[str, Any],
    ) -> None:
        """Test that async_login posts credentials and returns the token."""
        httpx_mock.add_response(
            url=LOGIN_URL, method="POST", json=sample_login_response
        )
        async with httpx.AsyncClient() as session:
            token = await api.async_login(session, "user@example.com", "secret")

        assert token == TOKEN
        request = httpx_mock.get_request()
        payload = json.loads(request.content)
        assert payload["usr"] == "user@example.com"
        assert payload["pwd"] == "secret"  # noqa: S105
        assert payload["imp"] is False
        assert payload["notTrack"] is True
        assert payload["appInfo"] == {"os": 2, "appVer": APP_VERSION, "appId": APP_ID}
        assert AUTH_HEADER not in request.headers

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 401, 403])
    async def test_async_login_raises_auth_error_on_bad_credentials(
        self, httpx_mock: HTTPXMock, status: int
    ) -> None:
        """Test that refused credentials raise auth error."""
        httpx_mock.add_response(url=LOGIN_URL, method="POST", status_code=status)
        async with httpx.AsyncClient() as session:
            with pytest.raises(AristonApiAuthError, match="Invalid credentials"):
                await api.async_login(session, "user@example.com", "wrong")

    @pytest.mark.asyncio
    async def test_async_login_raises_auth_error_without_token(
        self, httpx_mock: HTTPXMock
    ) -> None:
        """Test that a login response without token raises auth error."""
        httpx_mock.add_response(url=LOGIN_URL, method="POST", json={})
        async with httpx.AsyncClient() as session:
            with pytest.raises(AristonApiAuthError):
                await api.async_login(session, "user@example.com", "secret")


class TestAsyncGetPlantData:
    """Tests for async_get_plant_data function."""

    @pytest.mark.asyncio
    async def test_async_get_plant_data_returns_telemetry(
        self,
        httpx_mock: HTTPXMock,
        sample_plant_data_response: dict[str, Any],
    ) -> None:
        """Test that plant data is fetched with the token header."""
        httpx_mock.add_response(
            url=PLANT_DATA_URL, method="GET", json=sample_plant_data_response
        )
        async with httpx.AsyncClient() as session:
            telemetry = await api.async_get_plant_data(session, TOKEN, PLANT_ID)

        assert telemetry.current_temperature == 52.5
        assert telemetry.power_on is True
        assert httpx_mock.get_request().headers[AUTH_HEADER] == TOKEN

    @pytest.mark.asyncio
    async def test_async_get_plant_data_raises_auth_error_on_401(
        self, httpx_mock: HTTPXMock
    ) -> None:
        """Test that a refused token raises auth error."""
        httpx_mock.add_response(url=PLANT_DATA_URL, method="GET", status_code=401)
        async with httpx.AsyncClient() as session:
            with pytest.raises(AristonApiAuthError):
                await api.async_get_plant_data(session, TOKEN, PLANT_ID)

    @pytest.mark.asyncio
    async def test_async_get_plant_data_raises_rate_limited_on_429(
        self, httpx_mock: HTTPXMock
    ) -> None:
        """Test that throttling is reported as rate limit error."""
        httpx_mock.add_response(url=PLANT_DATA_URL, method="GET", status_code=429)
        async with httpx.AsyncClient() as session:
            with pytest.raises(AristonApiRateLimitedError):
                await api.async_get_plant_data(session, TOKEN, PLANT_ID)


class TestCommands:
    """Tests for the command endpoints."""

    @pytest.mark.asyncio
    async def test_async_set_temperature_sends_new_and_old(
        self,
        httpx_mock: HTTPXMock,
        sample_command_response: dict[str, Any],
    ) -> None:
        """Test that the temperature command carries new and old values."""
        httpx_mock.add_response(
            url=TEMPERATURE_URL, method="POST", json=sample_command_response
        )
        async with httpx.AsyncClient() as session:
            await api.async_set_temperature(session, TOKEN, PLANT_ID, 65.0, 60.0)

        request = httpx_mock.get_request()
        assert json.loads(request.content) == {"eco": False, "new": 65.0, "old": 60.0}
        assert request.headers[AUTH_HEADER] == TOKEN

    @pytest.mark.asyncio
    async def test_async_set_temperature_raises_when_rejected(
        self, httpx_mock: HTTPXMock
    ) -> None:
        """Test that an explicit failure flag raises rejected error."""
        httpx_mock.add_response(
            url=TEMPERATURE_URL, method="POST", json={"success": False}
        )
        async with httpx.AsyncClient() as session:
            with pytest.raises(AristonRemoteRejectedError, match="temperature"):
                await api.async_set_temperature(session, TOKEN, PLANT_ID, 65.0, 60.0)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("on", [True, False])
    async def test_async_switch_power_sends_bare_boolean(
        self,
        httpx_mock: HTTPXMock,
        sample_command_response: dict[str, Any],
        on: bool,  # noqa: FBT001
    ) -> None:
        """Test that the power switch body is a JSON boolean."""
        httpx_mock.add_response(
            url=SWITCH_URL, method="POST", json=sample_command_response
        )
        async with httpx.AsyncClient() as session:
            await api.async_switch_power(session, TOKEN, PLANT_ID, on)

        assert json.loads(httpx_mock.get_request().content) is on

    @pytest.mark.asyncio
    async def test_async_switch_power_raises_on_server_error(
        self, httpx_mock: HTTPXMock
    ) -> None:
        """Test that a 500 on the switch raises rejected error."""
        httpx_mock.add_response(url=SWITCH_URL, method="POST", status_code=500)
        async with httpx.AsyncClient() as session:
            with pytest.raises(AristonRemoteRejectedError, match="500"):
                await api.async_switch_power(session, TOKEN, PLANT_ID, True)  # noqa: FBT003

    @pytest.mark.asyncio
    async def test_async_switch_eco_sends_eco_flag(
        self,
        httpx_mock: HTTPXMock,
        sample_command_response: dict[str, Any],
    ) -> None:
        """Test that the ECO switch body carries the eco flag."""
        httpx_mock.add_response(
            url=SWITCH_ECO_URL, method="POST", json=sample_command_response
        )
        async with httpx.AsyncClient() as session:
            await api.async_switch_eco(session, TOKEN, PLANT_ID, True)  # noqa: FBT003

        assert json.loads(httpx_mock.get_request().content) == {"eco": True}


class TestCreateSessionClient:
    """Tests for create_session_client function."""

    @pytest.mark.asyncio
    async def test_create_session_client_sets_timeout(self) -> None:
        """Test that the client carries the configured timeout."""
        client = api.create_session_client(7.5)
        try:
            assert isinstance(client, httpx.AsyncClient)
            assert client.timeout.read == 7.5
            assert client.timeout.connect == 7.5
        finally:
            await client.aclose()
