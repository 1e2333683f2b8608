"""
workspace.py

Responsibility: own the filesystem side of a clone run.

- `clean_workspace` is the only function that deletes anything.
- `prepare_workspace` guarantees `<target>/src` exists.
- `count_packages` feeds the summary.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from ros2clone.config import Configuration
from ros2clone.errors import WorkspaceError
from ros2clone.log import get_logger

logger = get_logger(__name__)


def clean_workspace(target: Path) -> bool:
    """
    Recursively remove `target`. Irreversible; no prompt, no backup.

    A symlinked target is unlinked; the directory it points to is left alone.
    Returns False when there was nothing to remove.
    """
    if target.is_symlink():
        logger.warning("Removing target symlink %s...", target)
        try:
            target.unlink()
        except OSError as e:
            raise WorkspaceError(f"Failed to remove target symlink: {target}") from e
        return True
    if not target.exists():
        return False
    if not target.is_dir():
        raise WorkspaceError(f"Target is not a directory: {target}")
    logger.warning("Cleaning target directory %s...", target)
    try:
        shutil.rmtree(target)
    except OSError as e:
        raise WorkspaceError(f"Failed to remove target directory: {target}") from e
    return True


def prepare_workspace(config: Configuration) -> Path:
    """
    Make sure `<target>/src` exists, cleaning the target first if requested.

    Without `clean_before_clone` this is idempotent and leaves every existing
    file in place.
    """
    if config.clean_before_clone:
        clean_workspace(config.target_directory)

    src = config.src_directory
    try:
        src.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise WorkspaceError(f"Failed to create source directory: {src}") from e

    logger.info("Working directory: %s", config.target_directory.resolve())
    return src


def count_packages(src: Path, marker: str = "package.xml") -> int:
    # A package is any directory holding a manifest file; nested ones count too.
    if not src.is_dir():
        return 0
    return sum(1 for p in src.rglob(marker) if p.is_file())
