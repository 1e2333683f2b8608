"""
renderer.py

Responsibility: Render the workspace scaffold (a colcon Makefile) into a target directory.

Rules:
- The template is rendered with Jinja2 and StrictUndefined; missing values fail loudly.
- Output is written with LF line endings.
- A file that already exists in the destination is never overwritten.

This module intentionally does NOT know about vcstool, HTTP, or CLI parsing.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateError

from ros2clone.config import BuildSettings, Configuration
from ros2clone.errors import RenderError

MAKEFILE_TEMPLATE = Path(__file__).resolve().parent / "templates" / "workspace" / "Makefile"


@dataclass(frozen=True)
class RenderResult:
    path: Path
    written: bool


def build_context(config: Configuration, build: BuildSettings) -> dict[str, Any]:
    return {
        "distribution": config.distribution,
        "release_tag": config.release_tag or "",
        "build_type": build.build_type,
        "cmake_args": list(build.cmake_args),
        "event_handlers": build.event_handlers,
    }


def render_template(
    *,
    template_path: str | Path,
    destination_path: str | Path,
    context: dict[str, Any],
) -> RenderResult:
    src_path = Path(template_path)
    dst_path = Path(destination_path).resolve()

    if not src_path.is_file():
        raise RenderError(f"Template not found: {src_path}")
    if dst_path.exists():
        return RenderResult(path=dst_path, written=False)

    env = Environment(
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    try:
        out = env.from_string(src_path.read_text(encoding="utf-8")).render(**context)
    except TemplateError as e:
        raise RenderError(f"Failed rendering template file: {src_path.name}") from e

    dst_path.parent.mkdir(parents=True, exist_ok=True)
    # Makefiles need LF endings regardless of platform.
    dst_path.write_text(out, encoding="utf-8", newline="\n")
    return RenderResult(path=dst_path, written=True)


def render_workspace_scaffold(config: Configuration, build: BuildSettings) -> RenderResult:
    """Write the colcon Makefile into the workspace root unless one is already there."""
    return render_template(
        template_path=MAKEFILE_TEMPLATE,
        destination_path=config.target_directory / "Makefile",
        context=build_context(config, build),
    )
