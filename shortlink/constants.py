from enum import StrEnum


class Backend(StrEnum):
    """Supported data store backends."""

    MEMORY = 'memory'
    REDIS = 'redis'


class ShortCode:
    """Short code generation parameters."""

    LENGTH = 7  # Fixed length of every generated short code
    MAX_COLLISION_RETRIES = 1_000  # Cap of the collision retry loop


class Limits:
    """Data model limits."""

    MAX_LONG_URL_LENGTH = 2_048


class Defaults:
    """Default configuration values."""

    BASE_URL = 'http://localhost:8081'
    BACKEND = Backend.MEMORY
    TOP_DOMAINS = 3  # Number of domains returned by the domain metrics request
    UNKNOWN_DOMAIN = 'unknown'  # Domain bucket for URLs without a parseable host


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        PROJECT_ROOT = 'PROJECT_ROOT'
        LOG_LEVEL = 'LOG_LEVEL'
        CONFIG_PATH = 'SHORTLINK_CONFIG'
        BASE_URL = 'BASE_URL'
