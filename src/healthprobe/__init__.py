"""Health check endpoint reporting host disk, memory, and CPU usage."""

from importlib.metadata import PackageNotFoundError, version

__all__ = ["__version__"]

__version__: str
"""The version string of healthprobe (PEP 440 / SemVer compatible)."""

try:
    __version__ = version("healthprobe")
except PackageNotFoundError:
    # package is not installed
    __version__ = "0.0.0"
