"""
Custom exception hierarchy for espacescan.

Each exception maps to a CLI exit code and a JSON error_code field.
cli.py catches all ESpaceScanError subclasses and formats them as JSON output.

Formatters never let these escape: ConversionError is raised by the unit
helpers and collapsed into a fallback literal by formatters.units.with_fallback.

Exit code mapping:
  1 — ESpaceScanError (generic error)
  2 — APIError (invalid key, rate limit, upstream error, empty result)
  3 — NetworkError (timeout, connection refused)
  4 — DataError (invalid address, unconvertible value)
  5 — ConfigError (missing/malformed config)
"""


class ESpaceScanError(Exception):
    """Base exception for all espacescan errors."""

    exit_code: int = 1
    error_code: str = "unknown_error"

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict:
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class APIError(ESpaceScanError):
    """Upstream API returned an error response."""

    exit_code = 2
    error_code = "api_error"


class InvalidAPIKeyError(APIError):
    """API key is invalid or rejected."""

    error_code = "invalid_api_key"


class RateLimitError(APIError):
    """API rate limit exceeded."""

    error_code = "rate_limited"

    def __init__(self, message: str, retry_after: int = 60, **kwargs) -> None:
        super().__init__(message, details={"retry_after_seconds": retry_after})
        self.retry_after = retry_after


class NoResultError(APIError):
    """API answered but the response carried no result payload."""

    error_code = "no_result"


class NetworkError(ESpaceScanError):
    """Network connectivity issue — timeout or connection failure."""

    exit_code = 3
    error_code = "network_error"


class NetworkTimeoutError(NetworkError):
    """Request timed out."""

    error_code = "network_timeout"


class ConnectionFailedError(NetworkError):
    """Could not connect to API endpoint."""

    error_code = "connection_failed"


class DataError(ESpaceScanError):
    """Data validation error."""

    exit_code = 4
    error_code = "data_error"


class InvalidAddressError(DataError):
    """Address is not a 0x-prefixed 40 hex char string."""

    error_code = "invalid_address"


class ConversionError(DataError):
    """A raw wire value could not be coerced to an exact number."""

    error_code = "conversion_failed"


class MissingValueError(ConversionError):
    """The raw value was absent (None or empty string)."""

    error_code = "missing_value"


class ConfigError(ESpaceScanError):
    """Config file is missing or malformed."""

    exit_code = 5
    error_code = "config_error"


class ConfigMissingError(ConfigError):
    """Config file does not exist; user should run `espacescan config init`."""

    error_code = "config_missing"


class ConfigInvalidError(ConfigError):
    """Config file exists but contains invalid TOML or invalid values."""

    error_code = "config_invalid"
