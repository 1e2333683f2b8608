"""
distro.py

Responsibility: decide which distributions are supported and where their
`ros2.repos` manifest lives.

Everything here is pure: no network, no filesystem.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

from ros2clone.config import DEFAULT_BASE_URL
from ros2clone.errors import UnsupportedValueError, UsageError

SUPPORTED_DISTROS: tuple[str, ...] = ("humble", "iron", "jazzy", "rolling")

MANIFEST_NAME = "ros2.repos"

_SAFE_TAG = re.compile(r"[A-Za-z0-9._-]+")


@dataclass(frozen=True)
class ResolvedManifestReference:
    """A manifest URL plus whether its existence has been confirmed."""

    url: str
    confirmed: bool = False

    def confirm(self) -> "ResolvedManifestReference":
        return replace(self, confirmed=True)


def validate_distribution(distribution: str | None) -> str:
    """
    Return `distribution` unchanged if it is supported.

    An empty value is a usage mistake (`UsageError`); an unknown one is
    `UnsupportedValueError`.
    """
    if not distribution:
        raise UsageError("Distribution not specified. Use -d or --distro")
    if distribution not in SUPPORTED_DISTROS:
        raise UnsupportedValueError(distribution, SUPPORTED_DISTROS)
    return distribution


def resolve_manifest_url(
    distribution: str,
    release_tag: str | None = None,
    *,
    base_url: str = DEFAULT_BASE_URL,
) -> str:
    # The release tag is concatenated verbatim; see is_safe_release_tag.
    base = base_url.rstrip("/")
    if release_tag:
        return f"{base}/{distribution}-{release_tag}/{MANIFEST_NAME}"
    return f"{base}/{distribution}/{MANIFEST_NAME}"


def resolve_manifest(
    distribution: str,
    release_tag: str | None = None,
    *,
    base_url: str = DEFAULT_BASE_URL,
) -> ResolvedManifestReference:
    return ResolvedManifestReference(url=resolve_manifest_url(distribution, release_tag, base_url=base_url))


def is_safe_release_tag(release_tag: str) -> bool:
    """
    True if the tag is a single plain path segment.

    Tags like `release/humble` or ones with `?`, `#` or spaces change the URL
    structure when concatenated.
    """
    if release_tag in (".", ".."):
        return False
    return _SAFE_TAG.fullmatch(release_tag) is not None
