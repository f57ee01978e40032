"""Exceptions for healthprobe."""

from __future__ import annotations

from fastapi import status
from safir.fastapi import ClientRequestError
from safir.models import ErrorLocation

from .constants import SECRET_HEADER

__all__ = [
    "AuthenticationError",
    "InvalidSecretError",
    "MetricError",
    "MissingSecretError",
    "SamplingError",
    "UnavailableMetricError",
]


class AuthenticationError(ClientRequestError):
    """The request was not authenticated by the shared secret."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorLocation.header, [SECRET_HEADER])


class InvalidSecretError(AuthenticationError):
    """The shared secret header did not match the configured secret."""

    error = "invalid_secret"


class MissingSecretError(AuthenticationError):
    """The shared secret is configured but the header was not sent."""

    error = "missing_secret"


class MetricError(Exception):
    """Base class for errors evaluating a host metric."""


class SamplingError(MetricError):
    """The operating system could not provide a reading."""


class UnavailableMetricError(MetricError):
    """The reading cannot be turned into a percentage.

    Raised when the total is zero, such as when no volumes are mounted or no
    CPU cores are reported, since the usage percentage is then undefined.
    """
