"""Change the test application configuration."""

from __future__ import annotations

from healthprobe.config import Config
from healthprobe.dependencies.config import config_dependency
from healthprobe.dependencies.context import context_dependency
from healthprobe.sampler import MetricSampler

__all__ = ["ENVIRONMENT_VARIABLES", "reconfigure"]

ENVIRONMENT_VARIABLES = (
    "OHDEAR_TOKEN",
    "DISK_FAILURE_THRESHOLD",
    "DISK_WARNING_THRESHOLD",
    "MEMORY_FAILURE_THRESHOLD",
    "MEMORY_WARNING_THRESHOLD",
    "CPU_FAILURE_THRESHOLD",
    "CPU_WARNING_THRESHOLD",
    "CPU_TIMESPAN_MS",
    "HEALTHPROBE_LOG_LEVEL",
    "HEALTHPROBE_LOG_PROFILE",
)
"""Environment variables read by the configuration."""


async def reconfigure(sampler: MetricSampler) -> Config:
    """Reload the configuration from the environment.

    The running application picks up the new configuration immediately, so
    tests can change environment variables with ``monkeypatch`` and then
    call this function.

    Parameters
    ----------
    sampler
        Metric sampler for the application to use.

    Returns
    -------
    Config
        The new configuration.
    """
    config = config_dependency.reload()
    await context_dependency.initialize(config, sampler)
    return config
