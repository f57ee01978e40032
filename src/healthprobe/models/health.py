"""Models for health check results.

The serialized form of these models is consumed by the Oh Dear application
health monitor, so field names are fixed and rendered in camel case.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

__all__ = [
    "CheckResult",
    "CheckStatus",
    "HealthReport",
    "Thresholds",
]


class CheckStatus(str, Enum):
    """Status of a single check."""

    ok = "ok"
    """The reading is below the warning threshold."""

    warning = "warning"
    """The reading is at or above the warning threshold."""

    failed = "failed"
    """The reading is at or above the failure threshold."""

    crashed = "crashed"
    """The reading could not be evaluated, such as a zero total."""


class Thresholds(BaseModel):
    """Warning and failure percentages for one metric."""

    model_config = ConfigDict(frozen=True)

    warning: Annotated[
        int,
        Field(
            title="Warning threshold",
            description="Usage percentage at which the check warns",
            ge=0,
            le=100,
        ),
    ]

    failure: Annotated[
        int,
        Field(
            title="Failure threshold",
            description="Usage percentage at which the check fails",
            ge=0,
            le=100,
        ),
    ]

    def classify(self, percent: int) -> CheckStatus:
        """Classify a usage percentage against these thresholds.

        A reading equal to a threshold takes that threshold's severity.

        Parameters
        ----------
        percent
            Usage percentage, already truncated to an integer.

        Returns
        -------
        CheckStatus
            One of ``ok``, ``warning``, or ``failed``.
        """
        if percent >= self.failure:
            return CheckStatus.failed
        elif percent >= self.warning:
            return CheckStatus.warning
        else:
            return CheckStatus.ok


class CheckResult(BaseModel):
    """Result of one metric check."""

    model_config = ConfigDict(
        alias_generator=to_camel, frozen=True, populate_by_name=True
    )

    name: Annotated[
        str,
        Field(
            title="Name",
            description="Stable machine identifier of the check",
            examples=["UsedDiskSpace"],
        ),
    ]

    label: Annotated[
        str,
        Field(
            title="Label",
            description="Human-readable name of the check",
            examples=["Used Disk Space"],
        ),
    ]

    status: Annotated[CheckStatus, Field(title="Status")]

    notification_message: Annotated[
        str,
        Field(
            title="Notification message",
            description="Description of the reading for notifications",
            examples=["The disk usage percentage is at (42% used)"],
        ),
    ]

    short_summary: Annotated[
        str,
        Field(
            title="Short summary",
            description="Compact form of the reading",
            examples=["42%"],
        ),
    ]


class HealthReport(BaseModel):
    """Complete response of the health check endpoint."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    finished_at: Annotated[
        int,
        Field(
            title="Finished at",
            description="Time the report was assembled, in Unix seconds",
        ),
    ]

    check_results: Annotated[
        list[CheckResult],
        Field(
            title="Check results",
            description="Results in fixed order: disk, memory, then CPU",
        ),
    ]
