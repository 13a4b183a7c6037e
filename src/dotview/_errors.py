"""Dotview error hierarchy.

All dotview-specific errors inherit from DotviewError for easy catching.
"""

from pathlib import Path


class DotviewError(Exception):
    """Base error for all dotview operations."""


class ConfigError(DotviewError):
    """Invalid or missing configuration."""


class TargetNotFoundError(ConfigError):
    """The DOT file to preview does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"DOT file not found: {path}")


class TargetReadError(ConfigError):
    """The DOT file exists but could not be read as UTF-8 text."""

    def __init__(self, path: Path, reason: BaseException) -> None:
        self.path = path
        super().__init__(f"Cannot read DOT file {path}: {reason}")


class WatchError(DotviewError):
    """The file watcher could not be started."""
