"""Authentication dependency for FastAPI."""

from typing import Annotated

from fastapi import Depends, Header

from ..auth import Rejected, RejectReason, check_secret
from ..constants import SECRET_HEADER
from ..exceptions import InvalidSecretError, MissingSecretError
from .context import RequestContext, context_dependency

__all__ = ["verify_secret"]


async def verify_secret(
    *,
    secret: Annotated[
        str | None,
        Header(
            alias=SECRET_HEADER,
            title="Shared secret",
            description="Required if a secret is configured",
        ),
    ] = None,
    context: Annotated[RequestContext, Depends(context_dependency)],
) -> RequestContext:
    """Require the shared secret header if one is configured.

    Returns
    -------
    RequestContext
        The request context, so that handlers protected by this dependency
        need not request it separately.

    Raises
    ------
    InvalidSecretError
        Raised if the header does not match the configured secret.
    MissingSecretError
        Raised if a secret is configured and the header was not sent.
    """
    decision = check_secret(context.config.token, secret)
    if isinstance(decision, Rejected):
        context.logger.warning(
            "Rejected health check request", reason=decision.reason.value
        )
        if decision.reason == RejectReason.missing:
            raise MissingSecretError(f"Missing {SECRET_HEADER} header")
        else:
            raise InvalidSecretError(f"Invalid {SECRET_HEADER} header")
    context.rebind_logger(authenticated=decision.authenticated)
    return context
