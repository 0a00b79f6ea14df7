class ShortLinkError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:shortlink_error'


class ShortCodeExhaustedError(ShortLinkError):
    """Raised when no free short code could be found for a URL."""

    error_code = 'app:short_code_exhausted_error'


class ConfigurationError(ShortLinkError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
