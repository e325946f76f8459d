"""Library exceptions."""

from __future__ import annotations


class PyParkingAvailabilityError(Exception):
    """Base exception for the library."""

    error_type = "unknown"
    default_code: str | None = None

    def __init__(
        self,
        message: str | None = None,
        *,
        error_code: str | None = None,
        detail: str | None = None,
        user_message: str | None = None,
    ) -> None:
        text = message or detail or ""
        super().__init__(text)
        self.error_code = error_code or self.default_code
        self.detail = detail or text
        self.user_message = user_message


class NetworkError(PyParkingAvailabilityError):
    """Raised when network communication fails."""

    error_type = "network"
    default_code = "network_error"


class RequestTimeoutError(NetworkError):
    """Raised when a request exceeds its timeout."""

    error_type = "timeout"
    default_code = "timeout"


class ValidationError(PyParkingAvailabilityError):
    """Raised when inputs fail validation."""

    error_type = "validation"
    default_code = "validation_error"


class ProviderError(PyParkingAvailabilityError):
    """Raised when a provider returns an error or is misconfigured."""

    error_type = "provider"
    default_code = "provider_error"


class ConfigError(PyParkingAvailabilityError):
    """Raised when the monitor configuration is invalid."""

    error_type = "config"
    default_code = "config_error"
