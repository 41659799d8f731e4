"""Error taxonomy for english_optimizer.

Prompt builders and providers raise these; the optimizer lets them pass
through untouched and the interactive sessions turn them into messages.
"""

from __future__ import annotations


class OptimizerError(Exception):
    """Base error carrying a machine-readable failure type."""

    failure_type = "error"

    def __init__(self, message: str, *, failure_type: str | None = None) -> None:
        super().__init__(message)
        if failure_type is not None:
            self.failure_type = failure_type


class ConfigurationError(OptimizerError):
    """A configuration value is present but unusable."""

    failure_type = "configuration"


class ConfigurationMissingError(OptimizerError):
    """A prompt configuration was required but never loaded."""

    failure_type = "configuration_missing"


class InvalidResponseError(OptimizerError):
    """The backend answered, but without usable text."""

    failure_type = "invalid_response"


class ServiceUnavailableError(OptimizerError):
    """The backend refused the connection."""

    failure_type = "service_unavailable"

    def __init__(self, message: str, *, address: str) -> None:
        super().__init__(message)
        self.address = address


class TransportError(OptimizerError):
    """No usable HTTP response: timeouts, resets, DNS and friends."""

    failure_type = "transport"


class ApiError(OptimizerError):
    """The backend answered with an error status."""

    failure_type = "api"

    def __init__(self, message: str, *, status: int) -> None:
        super().__init__(message)
        self.status = status


class AuthError(ApiError):
    failure_type = "auth"

    def __init__(self, message: str = "Invalid API key. Please check your API credentials.") -> None:
        super().__init__(message, status=401)


class RateLimitError(ApiError):
    failure_type = "rate_limit"

    def __init__(self, message: str = "Rate limit exceeded. Please try again later.") -> None:
        super().__init__(message, status=429)


class BillingError(ApiError):
    """The account behind the API key has run out of balance."""

    failure_type = "billing"

    def __init__(self, message: str, *, remediation_url: str, status: int = 0) -> None:
        super().__init__(message, status=status)
        self.remediation_url = remediation_url


__all__ = [
    "ApiError",
    "AuthError",
    "BillingError",
    "ConfigurationError",
    "ConfigurationMissingError",
    "InvalidResponseError",
    "OptimizerError",
    "RateLimitError",
    "ServiceUnavailableError",
    "TransportError",
]
