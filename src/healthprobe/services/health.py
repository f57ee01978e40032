"""Evaluation of host health checks."""

from __future__ import annotations

import asyncio
import math
from collections.abc import Awaitable, Callable
from datetime import timedelta

from safir.datetime import current_datetime
from structlog.stdlib import BoundLogger

from ..config import Config
from ..constants import (
    CPU_CHECK_LABEL,
    CPU_CHECK_NAME,
    DISK_CHECK_LABEL,
    DISK_CHECK_NAME,
    MEMORY_CHECK_LABEL,
    MEMORY_CHECK_NAME,
    UNKNOWN_SUMMARY,
)
from ..exceptions import MetricError, UnavailableMetricError
from ..models.health import CheckResult, CheckStatus, HealthReport, Thresholds
from ..sampler import MetricSampler

__all__ = [
    "HealthCheckService",
    "average_load",
    "used_percentage",
]


def average_load(cores: list[float]) -> int:
    """Compute the average CPU load across cores.

    The per-core values are summed first and only the mean is truncated.

    Parameters
    ----------
    cores
        Usage percentage of each core.

    Returns
    -------
    int
        Mean usage, rounded down.

    Raises
    ------
    UnavailableMetricError
        Raised if no cores were reported.
    """
    if not cores:
        raise UnavailableMetricError("No CPU cores reported")
    return math.floor(sum(cores) / len(cores))


def used_percentage(total: int, available: int) -> int:
    """Compute the used percentage of a resource.

    The available fraction is rounded down before subtracting from 100, so
    the used percentage errs on the high side.

    Parameters
    ----------
    total
        Total size of the resource.
    available
        Portion of the resource still available.

    Returns
    -------
    int
        ``100 - floor(available / total * 100)``.

    Raises
    ------
    UnavailableMetricError
        Raised if the total is zero, since the percentage is undefined.
    """
    if total <= 0:
        raise UnavailableMetricError("Total size reported as zero")
    return 100 - math.floor(available / total * 100)


class HealthCheckService:
    """Run the disk, memory, and CPU checks and assemble the report.

    Each call takes fresh readings from the sampler. The service holds no
    state between calls, so a single instance may be shared by concurrent
    requests.

    Parameters
    ----------
    config
        healthprobe configuration, used for the thresholds.
    sampler
        Source of host metric readings.
    logger
        Logger to use.
    """

    def __init__(
        self, config: Config, sampler: MetricSampler, logger: BoundLogger
    ) -> None:
        self._config = config
        self._sampler = sampler
        self._logger = logger

    async def check(self) -> HealthReport:
        """Run all checks and build the health report.

        The checks always appear in the order disk, memory, CPU. A check that
        cannot be evaluated is reported as crashed and does not prevent the
        others from running.

        Returns
        -------
        HealthReport
            Report stamped with the time it was assembled.
        """
        config = self._config
        disk = await self._run(
            DISK_CHECK_NAME,
            DISK_CHECK_LABEL,
            lambda: self.check_disk(config.disk_thresholds),
        )
        memory = await self._run(
            MEMORY_CHECK_NAME,
            MEMORY_CHECK_LABEL,
            lambda: self.check_memory(config.memory_thresholds),
        )
        cpu = await self._run(
            CPU_CHECK_NAME,
            CPU_CHECK_LABEL,
            lambda: self.check_cpu(config.cpu_thresholds, config.cpu_window),
        )
        results = [disk, memory, cpu]
        report = HealthReport(
            finished_at=int(current_datetime().timestamp()),
            check_results=results,
        )
        self._logger.info(
            "Health checks finished",
            statuses={r.name: r.status.value for r in results},
        )
        return report

    async def check_cpu(
        self, thresholds: Thresholds, window: timedelta
    ) -> CheckResult:
        """Check the average CPU load across all cores.

        Does not return before ``window`` has elapsed, since the load is
        measured between two samples that far apart.

        Parameters
        ----------
        thresholds
            Warning and failure percentages.
        window
            Time between the two CPU samples.

        Raises
        ------
        MetricError
            Raised if the CPU usage could not be read or no cores were
            reported.
        """
        cores = await asyncio.to_thread(self._sampler.cpu_usage, window)
        self._logger.debug(
            "Sampled CPU usage",
            cores=len(cores),
            total_load=sum(cores),
            window_ms=int(window.total_seconds() * 1000),
        )
        percent = average_load(cores)
        return CheckResult(
            name=CPU_CHECK_NAME,
            label=CPU_CHECK_LABEL,
            status=thresholds.classify(percent),
            notification_message=(
                f"The cpu load in the last minute is ({percent}%)"
            ),
            short_summary=f"{percent}%",
        )

    async def check_disk(self, thresholds: Thresholds) -> CheckResult:
        """Check used space summed across all visible volumes.

        Parameters
        ----------
        thresholds
            Warning and failure percentages.

        Raises
        ------
        MetricError
            Raised if the volumes could not be read or their total size is
            zero.
        """
        volumes = await asyncio.to_thread(self._sampler.disk_usage)
        total = sum(v.total for v in volumes)
        available = sum(v.available for v in volumes)
        self._logger.debug(
            "Sampled disk usage",
            available=available,
            total=total,
            volumes=len(volumes),
        )
        percent = used_percentage(total, available)
        return CheckResult(
            name=DISK_CHECK_NAME,
            label=DISK_CHECK_LABEL,
            status=thresholds.classify(percent),
            notification_message=(
                f"The disk usage percentage is at ({percent}% used)"
            ),
            short_summary=f"{percent}%",
        )

    async def check_memory(self, thresholds: Thresholds) -> CheckResult:
        """Check used physical memory.

        Parameters
        ----------
        thresholds
            Warning and failure percentages.

        Raises
        ------
        MetricError
            Raised if memory could not be read or the total is zero.
        """
        memory = await asyncio.to_thread(self._sampler.memory_usage)
        self._logger.debug(
            "Sampled memory usage",
            available=memory.available,
            total=memory.total,
        )
        percent = used_percentage(memory.total, memory.available)
        return CheckResult(
            name=MEMORY_CHECK_NAME,
            label=MEMORY_CHECK_LABEL,
            status=thresholds.classify(percent),
            notification_message=(
                f"The memory usage percentage is at ({percent}% used)"
            ),
            short_summary=f"{percent}%",
        )

    async def _run(
        self,
        name: str,
        label: str,
        check: Callable[[], Awaitable[CheckResult]],
    ) -> CheckResult:
        """Run one check, converting metric errors into a crashed result."""
        try:
            return await check()
        except MetricError as e:
            self._logger.error(
                "Check could not be evaluated", check=name, error=str(e)
            )
            return CheckResult(
                name=name,
                label=label,
                status=CheckStatus.crashed,
                notification_message=f"The {label.lower()} check failed: {e}",
                short_summary=UNKNOWN_SUMMARY,
            )
