"""Configuration for healthprobe.

healthprobe is configured entirely through environment variables. The names
of the threshold variables are fixed by existing deployments of the Oh Dear
health check agent, so each field carries an explicit ``validation_alias``.

Thresholds and the CPU sampling window never cause a startup failure. A value
that cannot be parsed, or that is outside its allowed range, is treated as if
it were not set and the default is used instead.
"""

from __future__ import annotations

import re
from datetime import timedelta
from typing import Any

from pydantic import (
    Field,
    SecretStr,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic_core import PydanticUseDefault
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)
from safir.logging import LogLevel, Profile, configure_logging
from typing_extensions import override

from .constants import (
    DEFAULT_CPU_FAILURE_THRESHOLD,
    DEFAULT_CPU_TIMESPAN,
    DEFAULT_CPU_WARNING_THRESHOLD,
    DEFAULT_DISK_FAILURE_THRESHOLD,
    DEFAULT_DISK_WARNING_THRESHOLD,
    DEFAULT_MEMORY_FAILURE_THRESHOLD,
    DEFAULT_MEMORY_WARNING_THRESHOLD,
)
from .models.health import Thresholds

__all__ = ["Config"]

_INTEGER_REGEX = re.compile(r"[+-]?[0-9]+")
"""Accepted form of integer settings, with no whitespace or underscores."""


class Config(BaseSettings):
    """Configuration for healthprobe."""

    model_config = SettingsConfigDict(extra="ignore")

    token: SecretStr | None = Field(
        None,
        title="Shared secret",
        description=(
            "Secret that must be sent in the ``oh-dear-health-check-secret``"
            " header. If unset or empty, authentication is disabled and any"
            " caller may run the checks."
        ),
        validation_alias="OHDEAR_TOKEN",
    )

    disk_failure_threshold: int = Field(
        DEFAULT_DISK_FAILURE_THRESHOLD,
        title="Disk failure threshold",
        description="Used disk percentage at which the disk check fails",
        ge=0,
        le=100,
        validation_alias="DISK_FAILURE_THRESHOLD",
    )

    disk_warning_threshold: int = Field(
        DEFAULT_DISK_WARNING_THRESHOLD,
        title="Disk warning threshold",
        description="Used disk percentage at which the disk check warns",
        ge=0,
        le=100,
        validation_alias="DISK_WARNING_THRESHOLD",
    )

    memory_failure_threshold: int = Field(
        DEFAULT_MEMORY_FAILURE_THRESHOLD,
        title="Memory failure threshold",
        description="Used memory percentage at which the memory check fails",
        ge=0,
        le=100,
        validation_alias="MEMORY_FAILURE_THRESHOLD",
    )

    memory_warning_threshold: int = Field(
        DEFAULT_MEMORY_WARNING_THRESHOLD,
        title="Memory warning threshold",
        description="Used memory percentage at which the memory check warns",
        ge=0,
        le=100,
        validation_alias="MEMORY_WARNING_THRESHOLD",
    )

    cpu_failure_threshold: int = Field(
        DEFAULT_CPU_FAILURE_THRESHOLD,
        title="CPU failure threshold",
        description="Average CPU load percentage at which the CPU check fails",
        ge=0,
        le=100,
        validation_alias="CPU_FAILURE_THRESHOLD",
    )

    cpu_warning_threshold: int = Field(
        DEFAULT_CPU_WARNING_THRESHOLD,
        title="CPU warning threshold",
        description="Average CPU load percentage at which the CPU check warns",
        ge=0,
        le=100,
        validation_alias="CPU_WARNING_THRESHOLD",
    )

    cpu_timespan: int = Field(
        DEFAULT_CPU_TIMESPAN,
        title="CPU sampling window",
        description=(
            "Milliseconds between the two CPU usage samples. Every request"
            " to the health endpoint takes at least this long."
        ),
        ge=0,
        validation_alias="CPU_TIMESPAN_MS",
    )

    log_level: LogLevel = Field(
        LogLevel.INFO,
        title="Log level",
        validation_alias="HEALTHPROBE_LOG_LEVEL",
    )

    log_profile: Profile = Field(
        Profile.production,
        title="Logging profile",
        description="Use ``development`` for human-readable log output",
        validation_alias="HEALTHPROBE_LOG_PROFILE",
    )

    @override
    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Override the sources of settings.

        Deactivate :file:`.env` and secret file support, since all
        configuration comes from the process environment.
        """
        return (init_settings, env_settings)

    @field_validator("token", mode="before")
    @classmethod
    def _validate_token(cls, v: Any) -> Any:
        if isinstance(v, str) and not v:
            return None
        if isinstance(v, SecretStr) and not v.get_secret_value():
            return None
        return v

    @field_validator(
        "disk_failure_threshold",
        "disk_warning_threshold",
        "memory_failure_threshold",
        "memory_warning_threshold",
        "cpu_failure_threshold",
        "cpu_warning_threshold",
        "cpu_timespan",
        mode="wrap",
    )
    @classmethod
    def _default_if_invalid(
        cls, v: Any, handler: ValidatorFunctionWrapHandler
    ) -> int:
        if isinstance(v, str) and not _INTEGER_REGEX.fullmatch(v):
            raise PydanticUseDefault
        try:
            return handler(v)
        except ValidationError:
            raise PydanticUseDefault from None

    @property
    def cpu_thresholds(self) -> Thresholds:
        """Thresholds for the CPU load check."""
        return Thresholds(
            warning=self.cpu_warning_threshold,
            failure=self.cpu_failure_threshold,
        )

    @property
    def cpu_window(self) -> timedelta:
        """Interval between the two CPU usage samples."""
        return timedelta(milliseconds=self.cpu_timespan)

    @property
    def disk_thresholds(self) -> Thresholds:
        """Thresholds for the used disk space check."""
        return Thresholds(
            warning=self.disk_warning_threshold,
            failure=self.disk_failure_threshold,
        )

    @property
    def memory_thresholds(self) -> Thresholds:
        """Thresholds for the memory check."""
        return Thresholds(
            warning=self.memory_warning_threshold,
            failure=self.memory_failure_threshold,
        )

    def configure_logging(self) -> None:
        """Configure logging based on the healthprobe configuration."""
        configure_logging(
            name="healthprobe",
            profile=self.log_profile,
            log_level=self.log_level,
        )
