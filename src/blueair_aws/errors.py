"""Exceptions raised by :mod:`blueair_aws`."""

from __future__ import annotations


class BlueairError(Exception):
    """Base class for all errors raised by this package."""


class ConfigError(BlueairError):
    """Raised when a region has no configuration entry."""


class ResolutionError(BlueairError):
    """Raised when the account's home region cannot be determined."""


class AuthError(BlueairError):
    """Raised when Gigya or the cloud login does not return a usable token."""


class ValidationError(BlueairError, ValueError):
    """Raised for a bad setter argument, before any request is sent."""


class ProtocolError(BlueairError):
    """Raised when a successful response lacks an expected field."""


class ApiCallError(BlueairError):
    """Raised when an HTTP call still fails after all retries.

    ``attempts`` is the number of attempts made; ``status`` is the HTTP
    status of the last response, or ``None`` if none was received.
    """

    def __init__(self, message: str, *, attempts: int = 1, status: int | None = None) -> None:
        super().__init__(message)
        self.attempts = attempts
        self.status = status


class ApiTimeoutError(ApiCallError):
    """Raised when the last attempt of an HTTP call timed out."""
