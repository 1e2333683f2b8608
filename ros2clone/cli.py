"""
cli.py

Responsibility: CLI entrypoint for ros2clone.

High-level flow (single command):
1) Parse flags -> `Configuration` (+ optional YAML `Settings`)
2) Check that vcstool and git are installed
3) Validate the distribution against the allow-list
4) Resolve the `ros2.repos` URL and confirm it exists (HEAD)
5) Prepare `<target>/src` (optionally wiping the target first)
6) `vcs import` the manifest into `src`
7) Print a summary (never fatal), optionally drop a colcon Makefile

This module should orchestrate behavior but keep concerns isolated:
- Settings: `config.py`
- Distro / URL rules: `distro.py`
- HTTP: `manifest_probe.py`
- Filesystem: `workspace.py`
- External tools: `vcs.py`
- Makefile scaffold: `renderer.py`
"""

from __future__ import annotations

import argparse
import signal
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from ros2clone import __version__
from ros2clone.config import Configuration, Settings, load_settings
from ros2clone.distro import SUPPORTED_DISTROS, is_safe_release_tag, resolve_manifest, validate_distribution
from ros2clone.errors import (
    InterruptedByUserError,
    RenderError,
    Ros2CloneError,
    UnsupportedValueError,
    UsageError,
)
from ros2clone.log import MARKUP, get_logger, setup_logging
from ros2clone.manifest_probe import ManifestProber
from ros2clone.renderer import render_workspace_scaffold
from ros2clone.vcs import check_prerequisites, import_repositories, repository_status
from ros2clone.workspace import count_packages, prepare_workspace

logger = get_logger(__name__)

_console = Console()

EXAMPLES = """\
Examples:
  ros2clone -d humble                    # Latest Humble version
  ros2clone -d humble -r 20250331        # Dated Humble release
  ros2clone -d iron -t my_workspace      # Iron in custom workspace
  ros2clone -d humble -r 20250331 -c     # Dated release with cleanup

Notes:
  - For meta-ros synchronization, use the exact tag from meta-ros
  - The manifest URL is validated before cloning
  - Requires vcstool and git to be installed
"""


@dataclass(frozen=True)
class WorkspaceSummary:
    distribution: str
    release_tag: str | None
    directory: Path
    package_count: int | None
    status_report: str | None


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ros2clone",
        description="Clone ROS 2 source repositories for a specific distribution and release.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("-d", "--distro", default=None, help=f"ROS 2 distribution ({', '.join(SUPPORTED_DISTROS)})")
    p.add_argument("-r", "--release", default=None, help="Specific release tag (optional)")
    p.add_argument("-t", "--target", default=None, help="Target directory (default: ros2_ws)")
    p.add_argument("-c", "--clean", action="store_true", help="Clean target directory before cloning")
    p.add_argument("--config", default=None, help="YAML settings file (or set env ROS2CLONE_CONFIG)")
    p.add_argument("--makefile", action="store_true", help="Write a colcon Makefile into the workspace root")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def _configuration_from_args(args: argparse.Namespace, settings: Settings) -> Configuration:
    return Configuration(
        distribution=args.distro or "",
        release_tag=args.release or None,
        target_directory=Path(args.target or settings.target),
        clean_before_clone=bool(args.clean),
    )


def collect_summary(config: Configuration, settings: Settings) -> WorkspaceSummary:
    """
    Gather what the summary shows. Failures here are logged, never raised:
    the clone has already succeeded.
    """
    try:
        package_count: int | None = count_packages(config.src_directory, settings.package_marker)
    except OSError as e:
        logger.warning("Could not count packages: %s", e)
        package_count = None

    try:
        status_report: str | None = repository_status(config.src_directory, executable=settings.vcs_executable)
    except (subprocess.CalledProcessError, OSError) as e:
        logger.warning("Could not read repository status: %s", e)
        status_report = None

    return WorkspaceSummary(
        distribution=config.distribution,
        release_tag=config.release_tag,
        directory=config.target_directory.resolve(),
        package_count=package_count,
        status_report=status_report,
    )


def _report_summary(summary: WorkspaceSummary) -> None:
    logger.info("Cloning summary:")
    _console.print(f"  - Distribution: {summary.distribution}", markup=False, highlight=False)
    if summary.release_tag:
        _console.print(f"  - Release: {summary.release_tag}", markup=False, highlight=False)
    _console.print(f"  - Directory: {summary.directory}", markup=False, highlight=False)
    count = "unknown" if summary.package_count is None else str(summary.package_count)
    _console.print(f"  - Number of packages: {count}", markup=False, highlight=False)

    if summary.status_report is not None:
        logger.info("Repository information:")
        _console.print(summary.status_report, markup=False, highlight=False, end="")

    logger.info("[green]ROS 2 workspace ready in: %s[/green]", escape(str(summary.directory)), extra=MARKUP)
    logger.info("To build: cd %s && colcon build", summary.directory)


def run_pipeline(
    config: Configuration,
    settings: Settings,
    *,
    prober: ManifestProber | None = None,
    with_makefile: bool = False,
) -> WorkspaceSummary:
    """
    Run every stage in order; the first failing stage raises and nothing after it runs.
    """
    check_prerequisites(settings)
    validate_distribution(config.distribution)

    if config.release_tag and not is_safe_release_tag(config.release_tag):
        logger.warning("Release tag %r is not a plain path segment; using it verbatim", config.release_tag)

    reference = resolve_manifest(config.distribution, config.release_tag, base_url=settings.base_url)
    logger.info("Repos file URL: %s", reference.url)

    logger.info("Checking .repos file existence...")
    prober = prober or ManifestProber(timeout=settings.probe_timeout)
    reference = prober.ensure_reachable(reference)
    logger.info("[green].repos file found[/green]", extra=MARKUP)

    src = prepare_workspace(config)

    logger.info("Starting ROS 2 source cloning...")
    logger.info("Distribution: %s", config.distribution)
    if config.release_tag:
        logger.info("Release: %s", config.release_tag)
    import_repositories(reference, src, executable=settings.vcs_executable)
    logger.info("[green]Cloning completed successfully[/green]", extra=MARKUP)

    summary = collect_summary(config, settings)
    _report_summary(summary)

    if with_makefile:
        try:
            result = render_workspace_scaffold(config, settings.build)
        except (RenderError, OSError) as e:
            logger.warning("Could not write workspace Makefile: %s", e)
        else:
            if result.written:
                logger.info("Wrote %s (run `make` to build)", result.path)
            else:
                logger.info("Kept existing %s", result.path)

    return summary


def _raise_interrupted(signum: int, frame: Any) -> None:
    raise InterruptedByUserError("Script interrupted by user")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=bool(args.verbose))

    previous_sigterm = signal.signal(signal.SIGTERM, _raise_interrupted)
    try:
        settings = load_settings(args.config)
        config = _configuration_from_args(args, settings)
        logger.info("=== ROS 2 Source Cloning ===")
        run_pipeline(config, settings, with_makefile=bool(args.makefile))
    except KeyboardInterrupt:
        logger.error("Script interrupted by user")
        return InterruptedByUserError.exit_code
    except UsageError as e:
        logger.error("%s", e)
        parser.print_help(sys.stderr)
        return e.exit_code
    except UnsupportedValueError as e:
        logger.error("Invalid distribution: %s", e.value)
        logger.info("Supported distributions: %s", " ".join(e.supported))
        return e.exit_code
    except Ros2CloneError as e:
        logger.error("%s", e)
        return e.exit_code
    finally:
        signal.signal(signal.SIGTERM, previous_sigterm)

    logger.info("[green]=== Cloning completed successfully ===[/green]", extra=MARKUP)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
