"""
config.py

Responsibility: Load tool settings and hold the per-run configuration.

Two immutable models live here:
- `Settings`: tool-level defaults, optionally read from a YAML file
  (`--config PATH` or the `ROS2CLONE_CONFIG` environment variable).
- `Configuration`: what a single invocation asked for (distro, release, target, clean).

The CLI builds both once at entry and passes them explicitly to each stage.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ros2clone.errors import ConfigError

CONFIG_ENV_VAR = "ROS2CLONE_CONFIG"

DEFAULT_BASE_URL = "https://raw.githubusercontent.com/ros2/ros2"
DEFAULT_TARGET = "ros2_ws"

_TOP_LEVEL_KEYS = {
    "base_url",
    "target",
    "probe_timeout",
    "vcs_executable",
    "git_executable",
    "package_marker",
    "build",
}
_BUILD_KEYS = {"build_type", "cmake_args", "event_handlers"}


@dataclass(frozen=True)
class BuildSettings:
    """Values rendered into the workspace Makefile for colcon."""

    build_type: str = "Release"
    cmake_args: tuple[str, ...] = ()
    event_handlers: str = "console_direct+"


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    target: str = DEFAULT_TARGET
    probe_timeout: float = 30.0
    vcs_executable: str = "vcs"
    git_executable: str = "git"
    package_marker: str = "package.xml"
    build: BuildSettings = field(default_factory=BuildSettings)


@dataclass(frozen=True)
class Configuration:
    """Parsed command-line input for one clone run."""

    distribution: str
    release_tag: str | None = None
    target_directory: Path = Path(DEFAULT_TARGET)
    clean_before_clone: bool = False

    @property
    def src_directory(self) -> Path:
        return self.target_directory / "src"


def _as_str(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, (str, int, float)):
        raise ConfigError(f"`{key}` must be a string when provided.")
    text = str(value).strip()
    if not text:
        raise ConfigError(f"`{key}` must not be empty.")
    return text


def _parse_cmake_args(raw: Any) -> tuple[str, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        return tuple(raw.split())
    if isinstance(raw, list) and all(isinstance(item, (str, int, float)) for item in raw):
        return tuple(str(item) for item in raw)
    raise ConfigError("`build.cmake_args` must be a string or a list of strings.")


def _parse_build(raw: Any) -> BuildSettings:
    if raw is None:
        return BuildSettings()
    if not isinstance(raw, dict):
        raise ConfigError("`build` must be an object/mapping when provided.")
    unknown = sorted(set(raw) - _BUILD_KEYS)
    if unknown:
        raise ConfigError(f"Unknown `build` settings: {', '.join(map(str, unknown))}")

    defaults = BuildSettings()
    return BuildSettings(
        build_type=_as_str(raw, "build_type", defaults.build_type),
        cmake_args=_parse_cmake_args(raw.get("cmake_args")),
        event_handlers=_as_str(raw, "event_handlers", defaults.event_handlers),
    )


def parse_settings(data: dict[str, Any]) -> Settings:
    """Build `Settings` from an already-loaded mapping, rejecting unknown keys."""
    unknown = sorted(set(data) - _TOP_LEVEL_KEYS)
    if unknown:
        raise ConfigError(f"Unknown settings: {', '.join(map(str, unknown))}")

    defaults = Settings()

    timeout_raw = data.get("probe_timeout", defaults.probe_timeout)
    try:
        probe_timeout = float(timeout_raw)
    except (TypeError, ValueError) as e:
        raise ConfigError("`probe_timeout` must be a number.") from e
    if probe_timeout <= 0:
        raise ConfigError("`probe_timeout` must be greater than zero.")

    return Settings(
        base_url=_as_str(data, "base_url", defaults.base_url).rstrip("/"),
        target=_as_str(data, "target", defaults.target),
        probe_timeout=probe_timeout,
        vcs_executable=_as_str(data, "vcs_executable", defaults.vcs_executable),
        git_executable=_as_str(data, "git_executable", defaults.git_executable),
        package_marker=_as_str(data, "package_marker", defaults.package_marker),
        build=_parse_build(data.get("build")),
    )


def load_settings(config_path: str | Path | None = None) -> Settings:
    """
    Load `Settings` from a YAML file.

    Resolution order for the file: explicit `config_path`, then `$ROS2CLONE_CONFIG`.
    With neither set, built-in defaults are returned.
    """
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR) or None
    if config_path is None:
        return Settings()

    path = Path(config_path)
    if not path.is_file():
        raise ConfigError(f"Config file does not exist: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file is not valid YAML: {path}") from e
    if not isinstance(data, dict):
        raise ConfigError("Config file must be a mapping/object at the top level.")
    return parse_settings(data)
