"""Sampling of host resource usage from the operating system."""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from datetime import timedelta

import psutil
import structlog
from structlog.stdlib import BoundLogger

from .constants import MINIMUM_CPU_WINDOW
from .exceptions import SamplingError

__all__ = [
    "MemoryReading",
    "MetricSampler",
    "PsutilSampler",
    "VolumeReading",
]


@dataclass(frozen=True, slots=True)
class VolumeReading:
    """Space on one mounted storage volume, in bytes."""

    mountpoint: str
    total: int
    available: int


@dataclass(frozen=True, slots=True)
class MemoryReading:
    """Physical memory of the host, in bytes."""

    total: int
    available: int


class MetricSampler(metaclass=ABCMeta):
    """Abstract source of raw host metric readings.

    Every method takes a fresh reading. Nothing is cached between calls.
    """

    @abstractmethod
    def disk_usage(self) -> list[VolumeReading]:
        """Read total and available space of every visible volume.

        Returns
        -------
        list of VolumeReading
            One entry per volume. May be empty if no volumes are visible.

        Raises
        ------
        SamplingError
            Raised if the operating system could not list the volumes.
        """

    @abstractmethod
    def memory_usage(self) -> MemoryReading:
        """Read total and available physical memory.

        Raises
        ------
        SamplingError
            Raised if the operating system could not report memory.
        """

    @abstractmethod
    def cpu_usage(self, window: timedelta) -> list[float]:
        """Measure per-core CPU usage over an interval.

        Takes one sample, waits for ``window``, and takes another, so this
        blocks the calling thread for at least ``window``.

        Parameters
        ----------
        window
            Time between the two samples.

        Returns
        -------
        list of float
            Usage percentage of each core over the window.

        Raises
        ------
        SamplingError
            Raised if the operating system could not report CPU times.
        """


class PsutilSampler(MetricSampler):
    """Read host metrics with psutil.

    Parameters
    ----------
    logger
        Logger used to report volumes that could not be read.
    """

    def __init__(self, logger: BoundLogger | None = None) -> None:
        self._logger = logger or structlog.get_logger("healthprobe")

    def disk_usage(self) -> list[VolumeReading]:
        try:
            partitions = psutil.disk_partitions(all=False)
        except (OSError, psutil.Error) as e:
            raise SamplingError(f"Cannot list disk partitions: {e}") from e

        # The same device may be mounted more than once, such as with bind
        # mounts, and must only be counted once.
        seen: set[str] = set()
        volumes = []
        for partition in partitions:
            if partition.device in seen:
                continue
            try:
                usage = psutil.disk_usage(partition.mountpoint)
            except OSError as e:
                self._logger.warning(
                    "Skipping unreadable volume",
                    mountpoint=partition.mountpoint,
                    error=str(e),
                )
                continue
            seen.add(partition.device)
            volume = VolumeReading(
                mountpoint=partition.mountpoint,
                total=usage.total,
                available=usage.free,
            )
            volumes.append(volume)
        return volumes

    def memory_usage(self) -> MemoryReading:
        try:
            memory = psutil.virtual_memory()
        except (OSError, psutil.Error) as e:
            raise SamplingError(f"Cannot read memory usage: {e}") from e
        return MemoryReading(total=memory.total, available=memory.available)

    def cpu_usage(self, window: timedelta) -> list[float]:
        # Passing an interval makes psutil take both samples itself instead
        # of comparing against its module-wide previous sample, which other
        # requests running concurrently would otherwise reset.
        interval = max(window, MINIMUM_CPU_WINDOW).total_seconds()
        try:
            return psutil.cpu_percent(interval=interval, percpu=True)
        except (OSError, psutil.Error) as e:
            raise SamplingError(f"Cannot read CPU usage: {e}") from e
