"""Tests for health check models."""

from __future__ import annotations

from healthprobe.models.health import (
    CheckResult,
    CheckStatus,
    HealthReport,
    Thresholds,
)

_SEVERITY = {CheckStatus.ok: 0, CheckStatus.warning: 1, CheckStatus.failed: 2}


def test_classify_boundaries() -> None:
    thresholds = Thresholds(warning=80, failure=90)
    assert thresholds.classify(0) == CheckStatus.ok
    assert thresholds.classify(79) == CheckStatus.ok
    assert thresholds.classify(80) == CheckStatus.warning
    assert thresholds.classify(89) == CheckStatus.warning
    assert thresholds.classify(90) == CheckStatus.failed
    assert thresholds.classify(100) == CheckStatus.failed

    # Equal thresholds skip the warning state entirely.
    thresholds = Thresholds(warning=50, failure=50)
    assert thresholds.classify(49) == CheckStatus.ok
    assert thresholds.classify(50) == CheckStatus.failed

    # A zero warning threshold always warns.
    thresholds = Thresholds(warning=0, failure=100)
    assert thresholds.classify(0) == CheckStatus.warning
    assert thresholds.classify(100) == CheckStatus.failed


def test_classify_monotonic() -> None:
    for warning in range(0, 101, 10):
        for failure in range(warning, 101, 15):
            thresholds = Thresholds(warning=warning, failure=failure)
            previous = 0
            for percent in range(101):
                status = thresholds.classify(percent)
                assert _SEVERITY[status] >= previous
                previous = _SEVERITY[status]
                if percent == failure:
                    assert status == CheckStatus.failed
                elif percent == warning:
                    assert status == CheckStatus.warning


def test_serialization() -> None:
    result = CheckResult(
        name="UsedDiskSpace",
        label="Used Disk Space",
        status=CheckStatus.warning,
        notification_message="The disk usage percentage is at (80% used)",
        short_summary="80%",
    )
    report = HealthReport(finished_at=1700000000, check_results=[result])
    assert report.model_dump(mode="json", by_alias=True) == {
        "finishedAt": 1700000000,
        "checkResults": [
            {
                "name": "UsedDiskSpace",
                "label": "Used Disk Space",
                "status": "warning",
                "notificationMessage": (
                    "The disk usage percentage is at (80% used)"
                ),
                "shortSummary": "80%",
            }
        ],
    }
