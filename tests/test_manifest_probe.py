from types import SimpleNamespace
from typing import Any

import pytest
import requests

from ros2clone.distro import ResolvedManifestReference
from ros2clone.errors import ManifestUnreachableError
from ros2clone.manifest_probe import ManifestProber

URL = "https://raw.githubusercontent.com/ros2/ros2/humble/ros2.repos"


class FakeSession:
    def __init__(self, status_code: int | None = 200, error: Exception | None = None) -> None:
        self.status_code = status_code
        self.error = error
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def head(self, url: str, **kwargs: Any) -> SimpleNamespace:
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return SimpleNamespace(status_code=self.status_code)


def test_probe_ok_uses_head_with_redirects() -> None:
    session = FakeSession(200)
    result = ManifestProber(timeout=7, session=session).probe(URL)  # type: ignore[arg-type]

    assert result.reachable
    assert result.status_code == 200
    url, kwargs = session.calls[0]
    assert url == URL
    assert kwargs["allow_redirects"] is True
    assert kwargs["timeout"] == 7
    assert kwargs["headers"]["User-Agent"].startswith("ros2clone/")


@pytest.mark.parametrize("status", [404, 403, 500, 204])
def test_probe_non_200_is_unreachable(status: int) -> None:
    result = ManifestProber(session=FakeSession(status)).probe(URL)  # type: ignore[arg-type]
    assert not result.reachable
    assert result.reason == f"HTTP {status}"


def test_probe_transport_error_is_unreachable() -> None:
    session = FakeSession(error=requests.ConnectionError("name resolution failed"))
    result = ManifestProber(session=session).probe(URL)  # type: ignore[arg-type]
    assert not result.reachable
    assert result.status_code is None
    assert "name resolution failed" in result.reason


def test_ensure_reachable_confirms() -> None:
    prober = ManifestProber(session=FakeSession(200))  # type: ignore[arg-type]
    ref = prober.ensure_reachable(ResolvedManifestReference(url=URL))
    assert ref.confirmed
    assert ref.url == URL


def test_ensure_reachable_names_url_on_failure() -> None:
    prober = ManifestProber(session=FakeSession(404))  # type: ignore[arg-type]
    with pytest.raises(ManifestUnreachableError) as exc:
        prober.ensure_reachable(ResolvedManifestReference(url=URL))
    assert exc.value.url == URL
    assert URL in str(exc.value)
