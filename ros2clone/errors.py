"""
errors.py

Responsibility: the error taxonomy shared by every pipeline stage.

Stages raise; only `cli.main` catches, reports, and turns an error into an exit code.
"""

from __future__ import annotations

from typing import Sequence


class Ros2CloneError(RuntimeError):
    """Base class for all failures that abort the clone pipeline."""

    exit_code = 1


class UsageError(Ros2CloneError):
    """Missing or invalid command-line argument."""

    exit_code = 2


class UnsupportedValueError(Ros2CloneError):
    """A distribution was given but is not in the allow-list."""

    def __init__(self, value: str, supported: Sequence[str]) -> None:
        self.value = value
        self.supported = tuple(supported)
        super().__init__(f"Invalid distribution: {value} (supported: {', '.join(self.supported)})")


class PrerequisiteMissingError(Ros2CloneError):
    def __init__(self, tool: str, hint: str = "") -> None:
        self.tool = tool
        self.hint = hint
        message = f"{tool} is not installed."
        if hint:
            message = f"{message} {hint}"
        super().__init__(message)


class ManifestUnreachableError(Ros2CloneError):
    def __init__(self, url: str, reason: str = "") -> None:
        self.url = url
        self.reason = reason
        message = f"The .repos file does not exist at URL: {url}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ImportFailureError(Ros2CloneError):
    """The external repository importer reported failure."""


class InterruptedByUserError(Ros2CloneError):
    exit_code = 130


class ConfigError(Ros2CloneError):
    pass


class WorkspaceError(Ros2CloneError):
    pass


class RenderError(Ros2CloneError):
    pass
