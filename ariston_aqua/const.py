"""Constants for the Ariston Aqua water heater core.

This module contains all the constants used throughout the package,
including API endpoints, wire field names and configuration defaults.
"""

DOMAIN = "ariston_aqua"

BASE_URL = "https://www.ariston-net.remotethermo.com/api/v2"
LOGIN_PATH = "/accounts/login"
PLANT_DATA_PATH = "/velis/medPlantData/{plant_id}"
TEMPERATURE_PATH = PLANT_DATA_PATH + "/temperature"
SWITCH_PATH = PLANT_DATA_PATH + "/switch"
SWITCH_ECO_PATH = PLANT_DATA_PATH + "/switchEco"

AUTH_HEADER = "ar.authToken"

# Client identification sent with every login
APP_OS = 2
APP_VERSION = "5.6.7772.40151"
APP_ID = "com.remotethermo.aristonnet"

# Telemetry fields returned by the plant data endpoint
FIELD_TEMP = "temp"
FIELD_REQUESTED_TEMP = "reqTemp"
FIELD_PROCESSED_REQUESTED_TEMP = "procReqTemp"
FIELD_POWER = "on"
FIELD_ECO = "eco"

MANUFACTURER = "Ariston"
DEFAULT_NAME = "Ariston Heater"
DEFAULT_MODEL = "Unknown Model"
DEFAULT_SERIAL_NUMBER = "Unknown Serial"

DEFAULT_CACHE_DURATION = 60.0  # Seconds a telemetry fetch stays fresh
DEFAULT_POLL_INTERVAL = 600.0
DEFAULT_RETRY_DELAY = 5.0  # Fixed pause after a 429, not exponential
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_TEMPERATURE = 40.0
DEFAULT_MIN_TEMPERATURE = 40.0
DEFAULT_MAX_TEMPERATURE = 80.0
DEFAULT_TEMPERATURE_STEP = 1.0
DEFAULT_ECO_POWERS_ON = False

CONF_USERNAME = "username"
CONF_PASSWORD = "password"  # noqa: S105
CONF_PLANT_ID = "plant_id"
CONF_NAME = "name"
CONF_MODEL = "model"
CONF_SERIAL_NUMBER = "serial_number"
CONF_CACHE_DURATION = "cache_duration"
CONF_POLL_INTERVAL = "poll_interval"
CONF_RETRY_DELAY = "retry_delay"
CONF_MAX_ATTEMPTS = "max_attempts"
CONF_REQUEST_TIMEOUT = "request_timeout"
CONF_DEFAULT_TEMPERATURE = "default_temperature"
CONF_MIN_TEMPERATURE = "min_temperature"
CONF_MAX_TEMPERATURE = "max_temperature"
CONF_TEMPERATURE_STEP = "temperature_step"
CONF_ECO_POWERS_ON = "eco_powers_on"
