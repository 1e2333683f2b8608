"""
ros2clone package

This package implements a CLI-first utility that clones ROS 2 sources for a
given distribution (and optional release tag) into a colcon workspace.

Key responsibilities are split across modules:
- `config.py`: load optional YAML settings into a typed, immutable model
- `distro.py`: distribution allow-list and manifest URL resolution
- `manifest_probe.py`: isolated HTTP existence check for the `ros2.repos` manifest
- `workspace.py`: target directory preparation and package counting
- `vcs.py`: external tool lookup and `vcs import` / `vcs status` invocations
- `renderer.py`: workspace Makefile scaffold rendering
- `cli.py`: CLI entrypoint and orchestration (validate -> probe -> prepare -> import -> summary)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
