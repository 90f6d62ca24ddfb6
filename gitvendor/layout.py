"""Names and locations of the files that make up a vendored project."""

from __future__ import annotations

import os
import shutil

VENDOR_DIR = "vendor"
CONFIG_NAME = "vendor.yml"
LOCK_NAME = "vendor.lock"
LICENSE_DIR = "licenses"

ALLOWED_LICENSES: tuple[str, ...] = (
    "MIT",
    "Apache-2.0",
    "BSD-3-Clause",
    "BSD-2-Clause",
    "ISC",
    "Unlicense",
    "CC0-1.0",
)

LICENSE_FILE_NAMES: tuple[str, ...] = ("LICENSE", "LICENSE.txt", "COPYING")

ERR_STALE_COMMIT = (
    "locked commit {} no longer exists in the repository.\n\n"
    "This usually happens when the remote repository has been force-pushed or the commit was deleted.\n"
    "Run 'git-vendor update' to fetch the latest commit and update the lockfile, then try syncing again"
)
ERR_PATH_NOT_FOUND = "path '{}' not found"
ERR_INVALID_URL = "invalid url"
ERR_VENDOR_NOT_FOUND = "vendor '{}' not found"
ERR_COMPLIANCE_FAILED = "compliance check failed"
ERR_NOT_INITIALIZED = "vendor directory not found. Run 'git-vendor init' first"


def is_git_installed() -> bool:
    """Return True when a git executable can be found on PATH."""
    return shutil.which("git") is not None


def is_vendor_initialized() -> bool:
    """Return True when the vendor directory exists in the current directory."""
    return os.path.isdir(VENDOR_DIR)


def license_path(root_dir: str, name: str) -> str:
    """Return the path under which a vendor's license text is kept."""
    return f"{root_dir}/{LICENSE_DIR}/{name}.txt"