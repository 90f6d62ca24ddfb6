"""Comparing locked commits with the latest commits upstream."""

from __future__ import annotations

import contextlib
from dataclasses import dataclass, field
from typing import Iterator

from gitvendor.git import CommitInfo, GitError
from gitvendor.layout import ERR_VENDOR_NOT_FOUND
from gitvendor.stores import BranchSpec, VendorSpec

_MAX_COMMITS = 10

_MONTHS = {
    "01": "Jan", "02": "Feb", "03": "Mar", "04": "Apr",
    "05": "May", "06": "Jun", "07": "Jul", "08": "Aug",
    "09": "Sep", "10": "Oct", "11": "Nov", "12": "Dec",
}


@dataclass
class VendorDiff:
    """The difference between the locked and latest commit of a vendor@ref."""

    vendor_name: str = ""
    ref: str = ""
    old_hash: str = ""
    new_hash: str = ""
    old_date: str = ""
    new_date: str = ""
    commits: list[CommitInfo] = field(default_factory=list)
    commit_count: int = 0


class VendorNotFoundError(LookupError):
    """Raised when a vendor is not declared in the configuration."""


@contextlib.contextmanager
def _step(message: str) -> Iterator[None]:
    try:
        yield
    except (GitError, OSError) as exc:
        raise GitError(f"{message}: {exc}") from exc


class DiffService:
    """Works out which upstream commits a vendor's lock is behind."""

    def __init__(self, config_store, lock_store, git_client, fs) -> None:
        self._config_store = config_store
        self._lock_store = lock_store
        self._git = git_client
        self._fs = fs

    def diff_vendor(self, vendor_name: str) -> list[VendorDiff]:
        """Return one diff per locked ref of the named vendor."""
        config = self._config_store.load()
        lock = self._lock_store.load()

        vendor = next((v for v in config.vendors if v.name == vendor_name), None)
        if vendor is None:
            raise VendorNotFoundError(ERR_VENDOR_NOT_FOUND.format(vendor_name))

        diffs = []
        for spec in vendor.specs:
            entry = next(
                (e for e in lock.vendors if e.name == vendor.name and e.ref == spec.ref),
                None,
            )
            if entry is None or not entry.commit_hash:
                continue
            diffs.append(self._diff_spec(vendor, spec, entry.commit_hash, entry.updated))
        return diffs

    def _diff_spec(
        self, vendor: VendorSpec, spec: BranchSpec, locked_hash: str, locked_date: str
    ) -> VendorDiff:
        with _step("failed to create temp dir"):
            temp_dir = self._fs.create_temp("", "diff-check-*")
        try:
            with _step("failed to init temp repo"):
                self._git.init(temp_dir)
            with _step("failed to add remote"):
                self._git.add_remote(temp_dir, "origin", vendor.url)
            try:
                self._git.fetch_all(temp_dir)
            except (GitError, OSError):
                with _step(f"failed to fetch ref '{spec.ref}'"):
                    self._git.fetch(temp_dir, 0, spec.ref)
            with _step("failed to checkout FETCH_HEAD"):
                self._git.checkout(temp_dir, "FETCH_HEAD")
            with _step("failed to get HEAD hash"):
                latest_hash = self._git.head_hash(temp_dir)

            try:
                commits = self._git.commit_log(temp_dir, locked_hash, latest_hash, _MAX_COMMITS)
            except (GitError, OSError):
                commits = []

            latest_date = commits[0].date if latest_hash != locked_hash and commits else ""
            return VendorDiff(
                vendor_name=vendor.name,
                ref=spec.ref,
                old_hash=locked_hash,
                new_hash=latest_hash,
                old_date=locked_date,
                new_date=latest_date,
                commits=list(commits),
                commit_count=len(commits),
            )
        finally:
            with contextlib.suppress(OSError):
                self._fs.remove_all(temp_dir)


def format_date(iso_date: str) -> str:
    """Turn '2024-12-20 15:30:45 -0800' into 'Dec 20'; return other input unchanged."""
    parts = iso_date.split()
    if not parts:
        return iso_date
    fields = parts[0].split("-")
    if len(fields) != 3:
        return iso_date
    month = _MONTHS.get(fields[1])
    if month is None:
        return iso_date
    return f"{month} {fields[2]}"


def format_diff_output(diff: VendorDiff) -> str:
    """Render a diff for display."""
    lines = [f"📦 {diff.vendor_name} @ {diff.ref}\n"]

    if diff.old_hash == diff.new_hash:
        lines.append(f"   ✓ Up to date ({diff.old_hash[:7]})\n")
        return "".join(lines)

    old = f"   Old: {diff.old_hash[:7]}"
    if diff.old_date:
        old += f" ({format_date(diff.old_date)})"
    lines.append(old + "\n")

    new = f"   New: {diff.new_hash[:7]}"
    if diff.new_date:
        new += f" ({format_date(diff.new_date)})"
    lines.append(new + "\n")

    if diff.commit_count > 0:
        lines.append(f"\n   Commits (+{diff.commit_count}):\n")
        lines.extend(
            f"   • {c.short_hash} - {c.subject} ({format_date(c.date)})\n" for c in diff.commits
        )
    else:
        lines.append("\n   ⚠ Commits diverged or ahead\n")

    return "".join(lines)