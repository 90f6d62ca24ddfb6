import stat
import sys

import pytest

from gitvendor.layout import (
    VENDOR_DIR,
    is_git_installed,
    is_vendor_initialized,
    license_path,
)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("test-vendor", "vendor/licenses/test-vendor.txt"),
        ("another-lib", "vendor/licenses/another-lib.txt"),
        ("my-package", "vendor/licenses/my-package.txt"),
    ],
)
def test_license_path(name, expected):
    assert license_path("vendor", name) == expected


def test_is_vendor_initialized_tracks_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert is_vendor_initialized() is False

    vendor = tmp_path / VENDOR_DIR
    vendor.mkdir()
    assert is_vendor_initialized() is True

    vendor.rmdir()
    assert is_vendor_initialized() is False


def test_is_vendor_initialized_false_for_plain_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / VENDOR_DIR).write_text("not a directory")
    assert is_vendor_initialized() is False


def test_is_git_installed_false_with_empty_path(tmp_path, monkeypatch):
    monkeypatch.setenv("PATH", str(tmp_path))
    assert is_git_installed() is False


def test_is_git_installed_finds_executable_on_path(tmp_path, monkeypatch):
    name = "git.exe" if sys.platform == "win32" else "git"
    fake = tmp_path / name
    fake.write_text("#!/bin/sh\nexit 0\n")
    fake.chmod(fake.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    monkeypatch.setenv("PATH", str(tmp_path))
    assert is_git_installed() is True