"""Config dependency for FastAPI."""

from __future__ import annotations

from ..config import Config

__all__ = ["ConfigDependency", "config_dependency"]


class ConfigDependency:
    """Provides the configuration as a dependency.

    The configuration comes from the environment, so it is loaded when it is
    first requested and then reused by every request. The test suite changes
    the environment and calls `reload` to pick up the new settings.
    """

    def __init__(self) -> None:
        self._config: Config | None = None

    async def __call__(self) -> Config:
        """Load the configuration if necessary and return it."""
        return self.config()

    def config(self) -> Config:
        """Load the configuration if necessary and return it.

        This is equivalent to using the dependency as a callable except that
        it's not async and can therefore be used from non-async functions.
        """
        if not self._config:
            self._config = Config()
            self._config.configure_logging()
        return self._config

    def reload(self) -> Config:
        """Reread the configuration from the environment.

        Returns
        -------
        Config
            The new configuration.
        """
        self._config = Config()
        self._config.configure_logging()
        return self._config


config_dependency = ConfigDependency()
"""The dependency that will return the current configuration."""
