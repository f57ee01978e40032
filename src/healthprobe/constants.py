"""Constants for healthprobe."""

from __future__ import annotations

from datetime import timedelta

__all__ = [
    "CPU_CHECK_LABEL",
    "CPU_CHECK_NAME",
    "DEFAULT_CPU_FAILURE_THRESHOLD",
    "DEFAULT_CPU_TIMESPAN",
    "DEFAULT_CPU_WARNING_THRESHOLD",
    "DEFAULT_DISK_FAILURE_THRESHOLD",
    "DEFAULT_DISK_WARNING_THRESHOLD",
    "DEFAULT_MEMORY_FAILURE_THRESHOLD",
    "DEFAULT_MEMORY_WARNING_THRESHOLD",
    "DISK_CHECK_LABEL",
    "DISK_CHECK_NAME",
    "MEMORY_CHECK_LABEL",
    "MEMORY_CHECK_NAME",
    "MINIMUM_CPU_WINDOW",
    "SECRET_HEADER",
    "UNKNOWN_SUMMARY",
]

SECRET_HEADER = "oh-dear-health-check-secret"
"""Header carrying the shared secret sent by Oh Dear."""

DEFAULT_DISK_FAILURE_THRESHOLD = 90
DEFAULT_DISK_WARNING_THRESHOLD = 80
DEFAULT_MEMORY_FAILURE_THRESHOLD = 80
DEFAULT_MEMORY_WARNING_THRESHOLD = 70
DEFAULT_CPU_FAILURE_THRESHOLD = 80
DEFAULT_CPU_WARNING_THRESHOLD = 70

DEFAULT_CPU_TIMESPAN = 500
"""Default CPU sampling window in milliseconds."""

MINIMUM_CPU_WINDOW = timedelta(milliseconds=100)
"""Shortest interval between the two CPU samples psutil is asked for."""

DISK_CHECK_NAME = "UsedDiskSpace"
DISK_CHECK_LABEL = "Used Disk Space"
MEMORY_CHECK_NAME = "MemorySpace"
MEMORY_CHECK_LABEL = "Memory Space"
CPU_CHECK_NAME = "Load"
CPU_CHECK_LABEL = "CPU Load"

UNKNOWN_SUMMARY = "unknown"
"""Short summary used for a check whose reading could not be evaluated."""
