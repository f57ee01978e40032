"""Command-line interface for healthprobe."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click
import uvicorn
from safir.click import display_help

from .dependencies.config import config_dependency
from .factory import Factory
from .main import create_openapi
from .models.health import CheckStatus

__all__ = [
    "check",
    "help",
    "main",
    "openapi_schema",
    "run",
]


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(message="%(version)s")
def main() -> None:
    """Command-line interface for healthprobe."""


@main.command()
@click.argument("topic", default=None, required=False, nargs=1)
@click.pass_context
def help(ctx: click.Context, topic: str | None) -> None:
    """Show help for any command."""
    display_help(main, ctx, topic)


@main.command()
def check() -> None:
    """Run the health checks once and print the report.

    Exits with status 1 if any check failed or could not be evaluated. Log
    messages go to standard error so that standard output holds only the
    JSON report.
    """
    config = config_dependency.config()
    for handler in logging.getLogger("healthprobe").handlers:
        if isinstance(handler, logging.StreamHandler):
            handler.setStream(sys.stderr)
    factory = Factory.standalone(config)
    health_check_service = factory.create_health_check_service()
    report = asyncio.run(health_check_service.check())
    sys.stdout.write(report.model_dump_json(by_alias=True, indent=2) + "\n")
    bad = {CheckStatus.failed, CheckStatus.crashed}
    if any(r.status in bad for r in report.check_results):
        sys.exit(1)


@main.command()
@click.option(
    "--output",
    default=None,
    type=click.Path(path_type=Path),
    help="Output path (output to stdout if not given).",
)
def openapi_schema(*, output: Path | None) -> None:
    """Generate the OpenAPI schema."""
    schema = create_openapi()
    if output:
        output.parent.mkdir(exist_ok=True)
        output.write_text(schema)
    else:
        sys.stdout.write(schema)


@main.command()
@click.option("--host", default="127.0.0.1", help="Address to listen on.")
@click.option(
    "--port", default=8080, type=int, help="Port to run the application on."
)
@click.option(
    "--reload",
    default=False,
    is_flag=True,
    help="Reload on source changes (for development only).",
)
def run(*, host: str, port: int, reload: bool) -> None:
    """Run the application."""
    uvicorn.run(
        "healthprobe.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        reload_dirs=["src"] if reload else None,
    )
