"""Create healthprobe components."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Self

import structlog
from structlog.stdlib import BoundLogger

from .config import Config
from .sampler import MetricSampler, PsutilSampler
from .services.health import HealthCheckService

__all__ = ["Factory", "ProcessContext"]


@dataclass(frozen=True, slots=True)
class ProcessContext:
    """Per-process application context.

    Holds the objects shared by every request. None of them carry mutable
    state, so no locking is needed between concurrent requests.
    """

    config: Config
    """healthprobe's configuration."""

    sampler: MetricSampler
    """Source of host metric readings."""

    @classmethod
    def from_config(
        cls, config: Config, sampler: MetricSampler | None = None
    ) -> Self:
        """Create a new process context from the configuration.

        Parameters
        ----------
        config
            healthprobe configuration.
        sampler
            Metric sampler to use instead of reading from the operating
            system, used by the test suite.

        Returns
        -------
        ProcessContext
            Shared context for a healthprobe process.
        """
        logger = structlog.get_logger("healthprobe")
        return cls(config=config, sampler=sampler or PsutilSampler(logger))


class Factory:
    """Build healthprobe components.

    Parameters
    ----------
    context
        Shared process context.
    logger
        Logger to use for errors.
    """

    @classmethod
    def standalone(
        cls, config: Config, sampler: MetricSampler | None = None
    ) -> Self:
        """Create a component factory outside of a request.

        Intended for the command-line interface.

        Parameters
        ----------
        config
            healthprobe configuration.
        sampler
            Metric sampler to use instead of reading from the operating
            system.

        Returns
        -------
        Factory
            Newly-created factory.
        """
        logger = structlog.get_logger("healthprobe")
        context = ProcessContext.from_config(config, sampler)
        return cls(context, logger)

    def __init__(self, context: ProcessContext, logger: BoundLogger) -> None:
        self._context = context
        self._logger = logger

    def create_health_check_service(self) -> HealthCheckService:
        """Create a service for running the host health checks.

        Returns
        -------
        HealthCheckService
            Newly-created health check service.
        """
        return HealthCheckService(
            self._context.config, self._context.sampler, self._logger
        )

    def set_logger(self, logger: BoundLogger) -> None:
        """Replace the internal logger.

        Used by the context dependency to update the logger for all
        newly-created components when it's rebound with additional context.

        Parameters
        ----------
        logger
            New logger.
        """
        self._logger = logger
