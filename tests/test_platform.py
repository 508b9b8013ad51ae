import pytest

from adapters import platform_probe
from adapters.platform_probe import SystemLibcProbe
from core.domain.platform import LibC, normalize_arch, normalize_os


@pytest.mark.parametrize(
    ("machine", "expected"),
    [
        ("aarch64", "arm64"),
        ("x86_64", "amd64"),
        ("amd64", "amd64"),
        ("armv7l", "armv7l"),
        ("ppc64le", "ppc64le"),
    ],
)
def test_normalize_arch(machine, expected):
    assert normalize_arch(machine) == expected


def test_normalize_os_linux_musl_is_alpine():
    assert normalize_os("Linux", LibC.MUSL) == "alpine"


def test_normalize_os_linux_glibc_is_linux():
    assert normalize_os("Linux", LibC.GLIBC) == "linux"
    assert normalize_os("linux", LibC.UNKNOWN) == "linux"


def test_normalize_os_darwin_is_macos():
    assert normalize_os("Darwin") == "macos"


def test_normalize_os_other_systems_pass_through_lowercased():
    assert normalize_os("FreeBSD") == "freebsd"


def test_system_probe_detects_glibc(monkeypatch):
    monkeypatch.setattr(platform_probe.platform, "libc_ver", lambda: ("glibc", "2.36"))

    assert SystemLibcProbe().detect() is LibC.GLIBC


def test_system_probe_detects_musl_loader(monkeypatch, tmp_path):
    monkeypatch.setattr(platform_probe.platform, "libc_ver", lambda: ("", ""))
    (tmp_path / "ld-musl-x86_64.so.1").write_text("")

    probe = SystemLibcProbe(musl_loader_glob=str(tmp_path / "ld-musl-*.so.1"))

    assert probe.detect() is LibC.MUSL


def test_system_probe_unknown_without_loader(monkeypatch, tmp_path):
    monkeypatch.setattr(platform_probe.platform, "libc_ver", lambda: ("", ""))

    probe = SystemLibcProbe(musl_loader_glob=str(tmp_path / "ld-musl-*.so.1"))

    assert probe.detect() is LibC.UNKNOWN
