import pytest

from ros2clone.distro import (
    SUPPORTED_DISTROS,
    ResolvedManifestReference,
    is_safe_release_tag,
    resolve_manifest,
    resolve_manifest_url,
    validate_distribution,
)
from ros2clone.errors import UnsupportedValueError, UsageError

BASE = "https://raw.githubusercontent.com/ros2/ros2"


@pytest.mark.parametrize("distro", SUPPORTED_DISTROS)
def test_validate_accepts_supported(distro: str) -> None:
    assert validate_distribution(distro) == distro


@pytest.mark.parametrize("value", ["pacman", "Humble", "foxy", " humble", "humble-20250331"])
def test_validate_rejects_unknown(value: str) -> None:
    with pytest.raises(UnsupportedValueError) as exc:
        validate_distribution(value)
    assert exc.value.supported == ("humble", "iron", "jazzy", "rolling")


@pytest.mark.parametrize("value", ["", None])
def test_validate_missing_is_usage_error(value) -> None:
    with pytest.raises(UsageError):
        validate_distribution(value)


def test_missing_and_unsupported_are_distinct() -> None:
    assert not issubclass(UsageError, UnsupportedValueError)
    assert not issubclass(UnsupportedValueError, UsageError)


@pytest.mark.parametrize("distro", SUPPORTED_DISTROS)
def test_url_without_release(distro: str) -> None:
    assert resolve_manifest_url(distro) == f"{BASE}/{distro}/ros2.repos"
    assert resolve_manifest_url(distro, "") == f"{BASE}/{distro}/ros2.repos"


@pytest.mark.parametrize("distro", SUPPORTED_DISTROS)
def test_url_with_release(distro: str) -> None:
    assert resolve_manifest_url(distro, "20250331") == f"{BASE}/{distro}-20250331/ros2.repos"


def test_url_tag_is_concatenated_verbatim() -> None:
    assert resolve_manifest_url("humble", "release/humble") == f"{BASE}/humble-release/humble/ros2.repos"


def test_url_custom_base_trailing_slash() -> None:
    assert resolve_manifest_url("iron", base_url="https://mirror.example/ros2/") == (
        "https://mirror.example/ros2/iron/ros2.repos"
    )


def test_resolved_reference_starts_unconfirmed() -> None:
    ref = resolve_manifest("jazzy")
    assert ref == ResolvedManifestReference(url=f"{BASE}/jazzy/ros2.repos", confirmed=False)
    confirmed = ref.confirm()
    assert confirmed.confirmed
    assert confirmed.url == ref.url
    assert not ref.confirmed


@pytest.mark.parametrize("tag", ["20250331", "2023.04.17", "release-1_2"])
def test_safe_tags(tag: str) -> None:
    assert is_safe_release_tag(tag)


@pytest.mark.parametrize("tag", ["release/humble", "..", ".", "a b", "x?y=1", "a#b"])
def test_unsafe_tags(tag: str) -> None:
    assert not is_safe_release_tag(tag)
