"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class RadarrGrabError(Exception):
    """Base exception for all application-specific errors."""


class FetchError(RadarrGrabError):
    """Raised when the release listing stays empty or cannot be retrieved."""


class NoSuitableReleaseError(RadarrGrabError):
    """Raised when release selection yields nothing to grab."""


class GrabFailedError(RadarrGrabError):
    """Raised when Radarr rejects the grab command for the selected release."""


class GrabError(RadarrGrabError):
    """Raised when issuing the grab command itself fails."""


class ConfigurationError(RadarrGrabError):
    """Raised for issues related to configuration loading or validation."""


class AuthenticationError(RadarrGrabError):
    """Raised when Radarr rejects the configured API key."""


class RadarrAPIError(RadarrGrabError):
    """Raised when the Radarr API answers with an unexpected status or payload."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class RetryExhaustedError(RadarrGrabError):
    """
    Raised when every attempt of a retried operation returned an unsuccessful
    value without raising.
    """
