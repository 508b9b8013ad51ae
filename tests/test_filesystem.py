import os
import stat
import subprocess

from adapters import filesystem
from adapters.filesystem import symlink_asar


def test_symlink_asar_creates_relative_link(tmp_path):
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "marker").write_text("x")

    link = symlink_asar(tmp_path)

    assert link.is_symlink()
    assert os.readlink(link) == "node_modules"
    assert (link / "marker").read_text() == "x"


def test_symlink_asar_replaces_existing_directory(tmp_path):
    (tmp_path / "node_modules").mkdir()
    stale = tmp_path / "node_modules.asar"
    stale.mkdir()
    (stale / "old").write_text("old")

    link = symlink_asar(tmp_path)

    assert link.is_symlink()
    assert not (link / "old").exists()


def test_symlink_asar_replaces_existing_link(tmp_path):
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules.asar").symlink_to("somewhere-else")

    link = symlink_asar(tmp_path)

    assert os.readlink(link) == "node_modules"


def test_symlink_asar_uses_junction_on_windows(tmp_path, monkeypatch):
    calls = []

    def fake_run(args, **kwargs):
        calls.append((args, kwargs["cwd"]))
        return subprocess.CompletedProcess(args, 0)

    monkeypatch.setattr(filesystem.subprocess, "run", fake_run)
    (tmp_path / "node_modules.asar").write_text("stale")

    symlink_asar(tmp_path, windows=True)

    assert calls == [(["cmd", "/c", "mklink", "/J", "node_modules.asar", "node_modules"], tmp_path)]
    assert not (tmp_path / "node_modules.asar").exists()


def test_symlink_asar_replaces_existing_junction_on_windows(tmp_path, monkeypatch):
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "keep").write_text("x")
    junction = tmp_path / "node_modules.asar"
    junction.mkdir()

    def fake_rmtree(path, *args, **kwargs):
        raise OSError("Cannot call rmtree on a symbolic link")

    monkeypatch.setattr(filesystem, "_is_junction", lambda path: path == junction)
    monkeypatch.setattr(filesystem.shutil, "rmtree", fake_rmtree)
    monkeypatch.setattr(filesystem.subprocess, "run", lambda args, **kwargs: subprocess.CompletedProcess(args, 0))

    symlink_asar(tmp_path, windows=True)

    assert not junction.exists()
    assert (tmp_path / "node_modules" / "keep").read_text() == "x"


def test_is_junction_falls_back_to_reparse_tag(tmp_path, monkeypatch):
    class FakeStat:
        st_reparse_tag = stat.IO_REPARSE_TAG_MOUNT_POINT

    monkeypatch.delattr(filesystem.os.path, "isjunction", raising=False)
    monkeypatch.setattr(filesystem.os, "lstat", lambda path: FakeStat())

    assert filesystem._is_junction(tmp_path / "node_modules.asar") is True


def test_is_junction_false_for_plain_directory(tmp_path):
    assert filesystem._is_junction(tmp_path) is False
