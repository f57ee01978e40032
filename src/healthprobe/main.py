"""Application definition for healthprobe."""

from __future__ import annotations

import json
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from safir.fastapi import ClientRequestError, client_request_error_handler
from safir.logging import configure_uvicorn_logging

from .dependencies.config import config_dependency
from .dependencies.context import context_dependency
from .handlers import health, internal
from .sampler import MetricSampler

__all__ = ["create_app", "create_openapi"]


def create_app(
    *, load_config: bool = True, sampler: MetricSampler | None = None
) -> FastAPI:
    """Create the FastAPI application.

    This is in a function rather than using a global variable (as is more
    typical for FastAPI) so that the test suite can create a fresh
    application with a different configuration or sampler for each test.

    Parameters
    ----------
    load_config
        If set to `False`, do not load the configuration or configure
        Uvicorn logging. This is used for OpenAPI schema generation, where
        constructing the app is required but the configuration won't matter.
    sampler
        Metric sampler to use instead of reading from the operating system,
        used by the test suite.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        config = config_dependency.config()
        await context_dependency.initialize(config, sampler)

        yield

        await context_dependency.aclose()

    app = FastAPI(
        title="healthprobe",
        description=(
            "healthprobe reports disk, memory, and CPU usage of the host it"
            " runs on in the format expected by Oh Dear application health"
            " monitoring."
        ),
        version=version("healthprobe"),
        tags_metadata=[
            {
                "name": "health",
                "description": "Host health checks for external monitoring.",
            },
            {
                "name": "internal",
                "description": "Internal routes with application metadata.",
            },
        ],
        lifespan=lifespan,
    )

    # Add all of the routes.
    app.include_router(internal.router)
    app.include_router(health.router)

    # Load configuration if it is available to us and configure Uvicorn
    # logging.
    if load_config:
        config_dependency.config()
        configure_uvicorn_logging()

    # Handle exceptions descended from ClientRequestError, which includes the
    # authentication failures.
    app.exception_handler(ClientRequestError)(client_request_error_handler)

    return app


def create_openapi() -> str:
    """Generate the OpenAPI schema.

    Returns
    -------
    str
        OpenAPI schema as serialized JSON.
    """
    app = create_app(load_config=False)
    schema = get_openapi(
        title=app.title,
        description=app.description,
        version=app.version,
        routes=app.routes,
    )
    return json.dumps(schema)
