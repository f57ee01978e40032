"""Shared-secret authentication for the health check endpoint.

This module only makes the decision. Turning a rejection into an HTTP
response is done by the FastAPI dependency in
`healthprobe.dependencies.auth`.
"""

from __future__ import annotations

import hmac
from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

from pydantic import SecretStr

__all__ = [
    "Admitted",
    "AuthDecision",
    "RejectReason",
    "Rejected",
    "check_secret",
]


class RejectReason(Enum):
    """Why a request was rejected."""

    missing = "missing"
    """A secret is configured but the request did not send one."""

    invalid = "invalid"
    """The request sent a secret that does not match."""


@dataclass(frozen=True, slots=True)
class Admitted:
    """The request may run the checks."""

    authenticated: bool
    """Whether a secret was checked, `False` if authentication is disabled."""


@dataclass(frozen=True, slots=True)
class Rejected:
    """The request must be refused without running any checks."""

    reason: RejectReason


AuthDecision: TypeAlias = Admitted | Rejected


def check_secret(
    configured: SecretStr | str | None, provided: str | None
) -> AuthDecision:
    """Decide whether a request is allowed to run the health checks.

    Parameters
    ----------
    configured
        Secret from the process configuration. `None` or the empty string
        disables authentication.
    provided
        Value of the secret header sent with the request, or `None` if the
        header was absent.

    Returns
    -------
    AuthDecision
        `Admitted` or `Rejected` with the reason. The comparison is exact
        (case-sensitive, no normalization) and constant-time.
    """
    if isinstance(configured, SecretStr):
        configured = configured.get_secret_value()
    if not configured:
        return Admitted(authenticated=False)
    if provided is None:
        return Rejected(RejectReason.missing)
    if not hmac.compare_digest(
        provided.encode("utf-8"), configured.encode("utf-8")
    ):
        return Rejected(RejectReason.invalid)
    return Admitted(authenticated=True)
