"""API client for the Ariston NET cloud.

This module provides functions to interact with the Ariston NET API,
including authentication, telemetry reads and the water heater commands.
"""

import logging
import math
from typing import Any

import httpx

from .const import (
    APP_ID,
    APP_OS,
    APP_VERSION,
    AUTH_HEADER,
    BASE_URL,
    FIELD_ECO,
    FIELD_POWER,
    FIELD_PROCESSED_REQUESTED_TEMP,
    FIELD_REQUESTED_TEMP,
    FIELD_TEMP,
    LOGIN_PATH,
    PLANT_DATA_PATH,
    SWITCH_ECO_PATH,
    SWITCH_PATH,
    TEMPERATURE_PATH,
)
from .models import Telemetry

_LOGGER = logging.getLogger(__name__)

# HTTP status codes
HTTP_BAD_REQUEST = 400
HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403
HTTP_TOO_MANY_REQUESTS = 429


class AristonApiClientError(Exception):
    """Base exception for Ariston API client errors."""


class AristonApiAuthError(AristonApiClientError):
    """Exception raised when no valid session exists or the token was refused."""


class AristonApiRateLimitedError(AristonApiClientError):
    """Exception raised when the API answered 429 Too Many Requests."""


class AristonRetryExhaustedError(AristonApiRateLimitedError):
    """Exception raised when every attempt of a request was rate limited."""

    def __init__(self, attempts: int) -> None:
        """Initialize the error with the number of attempts made."""
        super().__init__(f"Rate limited on all {attempts} attempts")
        self.attempts = attempts


class AristonNetworkError(AristonApiClientError):
    """Exception raised for transport failures and timeouts."""


class AristonInvalidDataError(AristonApiClientError):
    """Exception raised for non-numeric or non-finite telemetry values."""


class AristonRemoteRejectedError(AristonApiClientError):
    """Exception raised when the API answered but reported a failure."""


class AristonTemperatureControlDisabledError(AristonApiClientError):
    """Exception raised when temperature is set while no range is available."""


def create_headers(token: str | None = None) -> dict[str, str]:
    """Create HTTP headers for Ariston API requests.

    Args:
        token: Optional session token to include in headers.

    Returns:
        Dictionary containing HTTP headers for API requests.

    """
    headers = {"Content-Type": "application/json"}
    if token:
        headers[AUTH_HEADER] = token
    return headers


def plant_url(path_template: str, plant_id: str) -> str:
    """Return the absolute URL of a plant endpoint."""
    return BASE_URL + path_template.format(plant_id=plant_id)


def is_http_error(status: int) -> bool:
    """Check if HTTP status code indicates an error.

    Args:
        status: HTTP status code to check.

    Returns:
        True if status code is 400 or higher, False otherwise.

    """
    return status >= HTTP_BAD_REQUEST


def is_auth_error(status: int) -> bool:
    """Check if HTTP status code indicates a refused token."""
    return status in (HTTP_UNAUTHORIZED, HTTP_FORBIDDEN)


def is_rate_limited(status: int) -> bool:
    """Check if HTTP status code indicates throttling."""
    return status == HTTP_TOO_MANY_REQUESTS


def validate_response(response: httpx.Response) -> Any:  # noqa: ANN401
    """Validate HTTP response and return parsed JSON data.

    Args:
        response: HTTP response object to validate.

    Returns:
        Parsed JSON data from response.

    Raises:
        AristonApiRateLimitedError: If the API answered 429.
        AristonApiAuthError: If the token was refused.
        AristonRemoteRejectedError: For any other error status or a body
            that is not JSON.

    """
    _validate_http_status(response)
    try:
        return response.json()
    except ValueError as err:
        error_msg = "Malformed response body"
        raise AristonRemoteRejectedError(error_msg) from err


def _validate_http_status(response: httpx.Response) -> None:
    if not is_http_error(response.status_code):
        return

    if is_rate_limited(response.status_code):
        rate_limited = "Too many requests"
        raise AristonApiRateLimitedError(rate_limited)

    if is_auth_error(response.status_code):
        auth_error = "Authentication error"
        raise AristonApiAuthError(auth_error)

    client_error = f"Request failed: {response.status_code}"
    raise AristonRemoteRejectedError(client_error)


def extract_token(data: Any) -> str:  # noqa: ANN401
    """Extract the session token from a login response.

    Raises:
        AristonApiAuthError: If the response carries no token.

    """
    token = data.get("token") if isinstance(data, dict) else None
    if not token or not isinstance(token, str):
        error_msg = "Login response did not contain a token"
        raise AristonApiAuthError(error_msg)
    return token


def extract_success(data: Any) -> bool:  # noqa: ANN401
    """Extract the success flag from a command response.

    Args:
        data: API response data.

    Returns:
        True if operation was successful, False otherwise.

    """
    if not isinstance(data, dict):
        return False
    return data.get("success") is True


def _ensure_success(data: Any, action: str) -> None:  # noqa: ANN401
    if not extract_success(data):
        error_msg = f"Remote rejected {action}"
        raise AristonRemoteRejectedError(error_msg)


def parse_temperature(value: Any) -> float:  # noqa: ANN401
    """Return ``value`` as a finite temperature.

    Raises:
        AristonInvalidDataError: If value is not a finite number.

    """
    if isinstance(value, bool) or not isinstance(value, int | float):
        error_msg = f"Temperature is not a number: {value!r}"
        raise AristonInvalidDataError(error_msg)
    if not math.isfinite(value):
        error_msg = f"Temperature is not finite: {value!r}"
        raise AristonInvalidDataError(error_msg)
    return float(value)


def _optional_temperature(data: dict[str, Any], field: str) -> float | None:
    if data.get(field) is None:
        return None
    try:
        return parse_temperature(data[field])
    except AristonInvalidDataError as err:
        _LOGGER.debug("Ignoring field %s: %s", field, err)
        return None


def _optional_flag(data: dict[str, Any], field: str) -> bool | None:
    value = data.get(field)
    return value if isinstance(value, bool) else None


def parse_telemetry(data: Any) -> Telemetry:  # noqa: ANN401
    """Decode a plant data response into a Telemetry.

    Missing or invalid fields decode to None.

    Raises:
        AristonRemoteRejectedError: If the body is not a JSON object.

    """
    if not isinstance(data, dict):
        error_msg = "Malformed plant data response"
        raise AristonRemoteRejectedError(error_msg)

    return Telemetry(
        current_temperature=_optional_temperature(data, FIELD_TEMP),
        requested_temperature=_optional_temperature(data, FIELD_REQUESTED_TEMP),
        processed_requested_temperature=_optional_temperature(
            data, FIELD_PROCESSED_REQUESTED_TEMP
        ),
        power_on=_optional_flag(data, FIELD_POWER),
        eco_active=_optional_flag(data, FIELD_ECO),
    )


def create_session_client(timeout: float) -> httpx.AsyncClient:
    """Create HTTP client for the Ariston API.

    Retries are not configured on the transport; throttling is handled by
    the request executor.

    Args:
        timeout: Per-request timeout in seconds.

    Returns:
        Configured httpx AsyncClient.

    """
    return httpx.AsyncClient(timeout=httpx.Timeout(timeout))


async def async_login(
    session: httpx.AsyncClient,
    username: str,
    password: str,
) -> str:
    """Authenticate with Ariston API using username and password.

    Args:
        session: HTTP client session.
        username: Ariston NET account name.
        password: Ariston NET password.

    Returns:
        The session token.

    Raises:
        AristonApiAuthError: If authentication fails.
        AristonApiClientError: If API request fails.

    """
    url = BASE_URL + LOGIN_PATH
    payload = {
        "usr": username,
        "pwd": password,
        "imp": False,
        "notTrack": True,
        "appInfo": {"os": APP_OS, "appVer": APP_VERSION, "appId": APP_ID},
    }

    _LOGGER.debug("Authenticating with Ariston API")
    response = await session.post(url, headers=create_headers(), json=payload)
    if response.status_code in (HTTP_BAD_REQUEST, HTTP_UNAUTHORIZED, HTTP_FORBIDDEN):
        error_msg = f"Invalid credentials (status {response.status_code})"
        raise AristonApiAuthError(error_msg)
    data = validate_response(response)
    token = extract_token(data)
    _LOGGER.debug("Successfully authenticated with Ariston API")
    return token


async def async_get_plant_data(
    session: httpx.AsyncClient,
    token: str,
    plant_id: str,
) -> Telemetry:
    """Fetch the current telemetry of a plant.

    Raises:
        AristonApiAuthError: If the token was refused.
        AristonApiClientError: If API request fails.

    """
    url = plant_url(PLANT_DATA_PATH, plant_id)

    _LOGGER.debug("Fetching plant data for %s", plant_id)
    response = await session.get(url, headers=create_headers(token))
    data = validate_response(response)
    telemetry = parse_telemetry(data)
    _LOGGER.debug("Plant data for %s: %s", plant_id, telemetry)
    return telemetry


async def async_set_temperature(
    session: httpx.AsyncClient,
    token: str,
    plant_id: str,
    new: float,
    old: float,
) -> None:
    """Request a new target temperature.

    The API requires the previously requested value alongside the new one.

    Raises:
        AristonRemoteRejectedError: If the API reports a failure.
        AristonApiAuthError: If the token was refused.

    """
    url = plant_url(TEMPERATURE_PATH, plant_id)
    payload = {"eco": False, "new": new, "old": old}

    _LOGGER.debug("Setting temperature of %s from %s to %s", plant_id, old, new)
    response = await session.post(url, headers=create_headers(token), json=payload)
    _ensure_success(validate_response(response), "temperature change")


async def async_switch_power(
    session: httpx.AsyncClient,
    token: str,
    plant_id: str,
    on: bool,  # noqa: FBT001
) -> None:
    """Switch the heater on or off.

    Raises:
        AristonRemoteRejectedError: If the API reports a failure.
        AristonApiAuthError: If the token was refused.

    """
    url = plant_url(SWITCH_PATH, plant_id)

    _LOGGER.debug("Switching %s %s", plant_id, "on" if on else "off")
    response = await session.post(url, headers=create_headers(token), json=on)
    _ensure_success(validate_response(response), "power switch")


async def async_switch_eco(
    session: httpx.AsyncClient,
    token: str,
    plant_id: str,
    eco: bool,  # noqa: FBT001
) -> None:
    """Enable or disable ECO mode.

    Raises:
        AristonRemoteRejectedError: If the API reports a failure.
        AristonApiAuthError: If the token was refused.

    """
    url = plant_url(SWITCH_ECO_PATH, plant_id)

    _LOGGER.debug("Switching ECO mode of %s %s", plant_id, "on" if eco else "off")
    response = await session.post(
        url, headers=create_headers(token), json={"eco": eco}
    )
    _ensure_success(validate_response(response), "ECO switch")
