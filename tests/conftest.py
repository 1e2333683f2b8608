"""Shared fixtures: fake external tools and a fake network."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

import pytest

from ros2clone.manifest_probe import ManifestProber, ProbeResult


class FakeVcs:
    """Stands in for `subprocess.run` inside `ros2clone.vcs`."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.import_returncode = 0
        self.packages = ("ament_cmake", "rclcpp/rclcpp", "rclcpp/rclcpp_action")

    def __call__(self, cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
        self.calls.append(list(cmd))
        if cmd[1] == "import":
            if self.import_returncode != 0:
                raise subprocess.CalledProcessError(self.import_returncode, cmd)
            src = Path(cmd[-1])
            for pkg in self.packages:
                (src / pkg).mkdir(parents=True, exist_ok=True)
                (src / pkg / "package.xml").write_text("<package/>", encoding="utf-8")
            return subprocess.CompletedProcess(cmd, 0)
        if cmd[1] == "status":
            return subprocess.CompletedProcess(cmd, 0, stdout="=== src/ament_cmake (git) ===\n")
        raise AssertionError(f"unexpected command: {cmd}")

    def commands(self, verb: str) -> list[list[str]]:
        return [c for c in self.calls if c[1] == verb]


@pytest.fixture
def tools_present(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("ros2clone.vcs.shutil.which", lambda tool: f"/usr/bin/{tool}")


@pytest.fixture
def fake_vcs(monkeypatch: pytest.MonkeyPatch, tools_present: None) -> FakeVcs:
    fake = FakeVcs()
    monkeypatch.setattr("ros2clone.vcs.subprocess.run", fake)
    return fake


@pytest.fixture
def probed_urls(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Every HEAD probe succeeds; the probed URLs are recorded."""
    urls: list[str] = []

    def probe(self: ManifestProber, url: str) -> ProbeResult:
        urls.append(url)
        return ProbeResult(url=url, reachable=True, status_code=200)

    monkeypatch.setattr(ManifestProber, "probe", probe)
    return urls
