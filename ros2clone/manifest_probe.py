"""
manifest_probe.py

Responsibility: Isolate the HTTP existence check for a `.repos` manifest.

This module must be the only place that:
- Sends HTTP requests for the manifest URL
- Interprets the response status as reachable / unreachable

It only ever issues HEAD requests; the manifest body is left for `vcs import` to fetch.
"""

from __future__ import annotations

from dataclasses import dataclass

import requests

from ros2clone import __version__
from ros2clone.distro import ResolvedManifestReference
from ros2clone.errors import ManifestUnreachableError
from ros2clone.log import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProbeResult:
    url: str
    reachable: bool
    status_code: int | None = None
    reason: str = ""


class ManifestProber:
    def __init__(self, timeout: float = 30.0, session: requests.Session | None = None) -> None:
        self._timeout = timeout
        self._session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        return {"User-Agent": f"ros2clone/{__version__}"}

    def probe(self, url: str) -> ProbeResult:
        """
        Issue a HEAD request for `url`; reachable only on a final 200.

        Transport failures (DNS, TLS, timeout) are reported as unreachable, not raised.
        """
        try:
            r = self._session.head(url, headers=self._headers(), allow_redirects=True, timeout=self._timeout)
        except requests.RequestException as e:
            logger.debug("HEAD %s failed: %s", url, e)
            return ProbeResult(url=url, reachable=False, reason=str(e))
        logger.debug("HEAD %s -> %s", url, r.status_code)
        if r.status_code != 200:
            return ProbeResult(url=url, reachable=False, status_code=r.status_code, reason=f"HTTP {r.status_code}")
        return ProbeResult(url=url, reachable=True, status_code=r.status_code)

    def ensure_reachable(self, reference: ResolvedManifestReference) -> ResolvedManifestReference:
        """Return a confirmed copy of `reference`, or raise `ManifestUnreachableError`."""
        result = self.probe(reference.url)
        if not result.reachable:
            raise ManifestUnreachableError(reference.url, result.reason)
        return reference.confirm()
