"""
vcs.py

Responsibility: every interaction with external command-line tools.

- `check_prerequisites`: make sure `vcs` (vcstool) and `git` are on PATH
- `import_repositories`: `vcs import --input <manifest url> <src>`
- `repository_status`: `vcs status <src>` for the summary
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

from ros2clone.config import Settings
from ros2clone.distro import ResolvedManifestReference
from ros2clone.errors import ImportFailureError, PrerequisiteMissingError
from ros2clone.log import MARKUP, get_logger

logger = get_logger(__name__)

_INSTALL_HINTS = {
    "vcs": "Install it with: pip install vcstool",
    "git": "Install it with your system package manager.",
}


def check_prerequisites(settings: Settings) -> dict[str, str]:
    """
    Locate the importer and git executables.

    Returns a mapping of executable name to resolved path.
    """
    logger.info("Checking prerequisites...")
    found: dict[str, str] = {}
    for tool in (settings.vcs_executable, settings.git_executable):
        path = shutil.which(tool)
        if path is None:
            hint = _INSTALL_HINTS.get(Path(tool).name, "")
            label = "vcstool" if tool == settings.vcs_executable else tool
            raise PrerequisiteMissingError(label, hint)
        found[tool] = path
    logger.info("[green]Prerequisites OK[/green]", extra=MARKUP)
    return found


def import_repositories(
    reference: ResolvedManifestReference,
    src: Path,
    *,
    executable: str = "vcs",
) -> None:
    """
    Clone every repository listed in the manifest into `src`.

    The importer's own output goes straight to the terminal. Any failure is
    reported as a single `ImportFailureError`.
    """
    if not reference.confirmed:
        raise ImportFailureError(f"Refusing to import from an unconfirmed manifest URL: {reference.url}")

    cmd = [executable, "import", "--input", reference.url, str(src)]
    logger.debug("Running: %s", " ".join(cmd))
    try:
        subprocess.run(cmd, check=True)
    except (subprocess.CalledProcessError, OSError) as e:
        raise ImportFailureError("Error during cloning") from e


def repository_status(src: Path, *, executable: str = "vcs") -> str:
    cmd = [executable, "status", str(src)]
    # vcs status may print non-UTF-8 bytes from repository metadata.
    proc = subprocess.run(
        cmd, check=True, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, encoding="utf-8", errors="replace"
    )
    return proc.stdout
