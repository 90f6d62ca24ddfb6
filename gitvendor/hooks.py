"""Running the pre-sync and post-sync shell hooks of a vendor."""

from __future__ import annotations

import os
import subprocess
import sys
from dataclasses import dataclass, field

from gitvendor.stores import VendorSpec


@dataclass
class HookContext:
    """What a hook is told about the sync through its environment."""

    vendor_name: str = ""
    vendor_url: str = ""
    ref: str = ""
    commit_hash: str = ""
    root_dir: str = ""
    files_copied: int = 0
    dirs_created: int = 0
    environment: dict[str, str] = field(default_factory=dict)


class HookError(RuntimeError):
    """Raised when a hook command cannot be run or exits unsuccessfully."""


class HookService:
    """Runs a vendor's hooks through the platform shell."""

    def __init__(self, ui=None) -> None:
        self.ui = ui

    def execute_pre_sync(self, vendor: VendorSpec, context: HookContext) -> None:
        """Run the pre-sync hook, if one is configured."""
        if vendor.hooks is None or not vendor.hooks.pre_sync:
            return
        print("  🪝 Running pre-sync hook...")
        self._execute(vendor.hooks.pre_sync, context)

    def execute_post_sync(self, vendor: VendorSpec, context: HookContext) -> None:
        """Run the post-sync hook, if one is configured."""
        if vendor.hooks is None or not vendor.hooks.post_sync:
            return
        print("  🪝 Running post-sync hook...")
        self._execute(vendor.hooks.post_sync, context)

    def _execute(self, command: str, context: HookContext) -> None:
        if sys.platform == "win32":
            argv = ["cmd", "/c", command]
        else:
            argv = ["sh", "-c", command]
        try:
            result = subprocess.run(
                argv,
                cwd=context.root_dir or None,
                env=_build_environment(context),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as exc:
            raise HookError(f"hook failed: {exc}") from exc

        if result.stdout:
            print(result.stdout, end="")
        if result.returncode != 0:
            raise HookError(f"hook failed: exit status {result.returncode}")


def _build_environment(context: HookContext) -> dict[str, str]:
    env = dict(os.environ)
    env.update(
        {
            "GIT_VENDOR_NAME": context.vendor_name,
            "GIT_VENDOR_URL": context.vendor_url,
            "GIT_VENDOR_REF": context.ref,
            "GIT_VENDOR_COMMIT": context.commit_hash,
            "GIT_VENDOR_ROOT": context.root_dir,
            "GIT_VENDOR_FILES_COPIED": str(context.files_copied),
            "GIT_VENDOR_DIRS_CREATED": str(context.dirs_created),
        }
    )
    env.update(context.environment or {})
    return env