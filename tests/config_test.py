"""Tests for the healthprobe configuration."""

from __future__ import annotations

from datetime import timedelta

import pytest

from healthprobe.config import Config
from healthprobe.models.health import Thresholds


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CPU_TIMESPAN_MS")
    config = Config()

    assert config.token is None
    assert config.disk_thresholds == Thresholds(warning=80, failure=90)
    assert config.memory_thresholds == Thresholds(warning=70, failure=80)
    assert config.cpu_thresholds == Thresholds(warning=70, failure=80)
    assert config.cpu_timespan == 500
    assert config.cpu_window == timedelta(milliseconds=500)


def test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OHDEAR_TOKEN", "some-secret")
    monkeypatch.setenv("DISK_FAILURE_THRESHOLD", "95")
    monkeypatch.setenv("DISK_WARNING_THRESHOLD", "85")
    monkeypatch.setenv("MEMORY_FAILURE_THRESHOLD", "60")
    monkeypatch.setenv("MEMORY_WARNING_THRESHOLD", "50")
    monkeypatch.setenv("CPU_FAILURE_THRESHOLD", "99")
    monkeypatch.setenv("CPU_WARNING_THRESHOLD", "0")
    monkeypatch.setenv("CPU_TIMESPAN_MS", "1500")
    config = Config()

    assert config.token
    assert config.token.get_secret_value() == "some-secret"
    assert config.disk_thresholds == Thresholds(warning=85, failure=95)
    assert config.memory_thresholds == Thresholds(warning=50, failure=60)
    assert config.cpu_thresholds == Thresholds(warning=0, failure=99)
    assert config.cpu_window == timedelta(milliseconds=1500)

    # The secret must never show up in a repr or in logs.
    assert "some-secret" not in repr(config)


def test_empty_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OHDEAR_TOKEN", "")
    config = Config()
    assert config.token is None


@pytest.mark.parametrize(
    "value",
    ["", "abc", "12.5", "-1", "101", "0x10", "90%", " 85 ", "8_5", "85\n"],
)
def test_invalid_thresholds(
    value: str, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("DISK_FAILURE_THRESHOLD", value)
    monkeypatch.setenv("MEMORY_WARNING_THRESHOLD", value)
    monkeypatch.setenv("CPU_FAILURE_THRESHOLD", value)
    config = Config()

    assert config.disk_failure_threshold == 90
    assert config.memory_warning_threshold == 70
    assert config.cpu_failure_threshold == 80

    # Other settings are unaffected.
    assert config.disk_warning_threshold == 80


@pytest.mark.parametrize(
    "value", ["", "abc", "1.5", "-1", "500ms", " 50 ", "5_0"]
)
def test_invalid_timespan(value: str, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CPU_TIMESPAN_MS", value)
    assert Config().cpu_window == timedelta(milliseconds=500)


def test_large_timespan(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CPU_TIMESPAN_MS", "5000")
    assert Config().cpu_window == timedelta(seconds=5)


def test_signed_thresholds(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DISK_FAILURE_THRESHOLD", "+85")
    monkeypatch.setenv("CPU_TIMESPAN_MS", "+50")
    config = Config()
    assert config.disk_failure_threshold == 85
    assert config.cpu_window == timedelta(milliseconds=50)
