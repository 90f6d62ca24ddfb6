"""Git operations performed by running the system git executable."""

from __future__ import annotations

import re
import subprocess
import sys
from dataclasses import dataclass
from typing import Sequence

_LIST_TREE_TIMEOUT = 30.0
_LOG_FORMAT = "--pretty=format:%H|%h|%s|%an|%ai"
_DEEP_URL = re.compile(r"(github\.com/[^/]+/[^/]+)/(blob|tree)/([^/]+)/(.+)")


@dataclass
class CommitInfo:
    """One commit as reported by git log."""

    hash: str = ""
    short_hash: str = ""
    subject: str = ""
    author: str = ""
    date: str = ""


@dataclass
class CloneOptions:
    """Options passed to git clone."""

    filter: str = ""
    no_checkout: bool = False
    depth: int = 0


class GitError(RuntimeError):
    """Raised when a git command fails."""


class SystemGitClient:
    """Runs git commands through the git executable found on PATH."""

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose

    def init(self, directory: str) -> None:
        """Initialise a repository in directory."""
        self._run(directory, "init")

    def add_remote(self, directory: str, name: str, url: str) -> None:
        """Add a named remote."""
        self._run(directory, "remote", "add", name, url)

    def fetch(self, directory: str, depth: int, ref: str) -> None:
        """Fetch ref from origin, shallowly when depth is positive."""
        args = ["fetch"]
        if depth > 0:
            args += ["--depth", str(depth)]
        args += ["origin", ref]
        self._run(directory, *args)

    def fetch_all(self, directory: str) -> None:
        """Fetch every ref from origin."""
        self._run(directory, "fetch", "origin")

    def checkout(self, directory: str, ref: str) -> None:
        """Check out ref."""
        self._run(directory, "checkout", ref)

    def head_hash(self, directory: str) -> str:
        """Return the full hash of HEAD."""
        return self._output(directory, ["rev-parse", "HEAD"]).strip()

    def clone(self, directory: str, url: str, options: CloneOptions | None = None) -> None:
        """Clone url into directory."""
        args = ["clone"]
        if options is not None:
            if options.filter:
                args.append(f"--filter={options.filter}")
            if options.no_checkout:
                args.append("--no-checkout")
            if options.depth > 0:
                args += ["--depth", str(options.depth)]
        args += [url, "."]
        self._run(directory, *args)

    def list_tree(self, directory: str, ref: str = "", subdir: str = "") -> list[str]:
        """List the entries at ref below subdir, sorted; directories end with '/'."""
        target = ref or "HEAD"
        scoped = subdir not in ("", ".")
        args = ["ls-tree", target]
        if scoped:
            args.append(subdir.removesuffix("/") + "/")
        try:
            out = self._output(directory, args, timeout=_LIST_TREE_TIMEOUT)
        except GitError as first:
            if not subdir:
                raise GitError(f"git ls-tree failed: {first}") from first
            try:
                out = self._output(
                    directory,
                    ["ls-tree", target, subdir.removesuffix("/")],
                    timeout=_LIST_TREE_TIMEOUT,
                )
            except GitError as exc:
                raise GitError(f"git ls-tree failed: {exc}") from exc

        prefix = subdir.removesuffix("/") + "/" if scoped else ""
        items = []
        for line in out.splitlines():
            parts = line.split()
            if len(parts) < 4:
                continue
            obj_type = parts[1]
            full_path = " ".join(parts[3:])
            if prefix:
                if not full_path.startswith(prefix):
                    continue
                rel_name = full_path[len(prefix):]
            else:
                rel_name = full_path
            if not rel_name:
                continue
            items.append(rel_name + "/" if obj_type == "tree" else rel_name)
        return sorted(items)

    def commit_log(
        self, directory: str, old_hash: str, new_hash: str, max_count: int = 0
    ) -> list[CommitInfo]:
        """Return commits reachable from new_hash but not old_hash, newest first."""
        args = ["log", _LOG_FORMAT]
        if max_count > 0:
            args.append(f"-{max_count}")
        args.append(f"{old_hash}..{new_hash}")
        try:
            out = self._output(directory, args)
        except GitError as exc:
            raise GitError(f"git log failed: {exc}") from exc

        commits = []
        for line in out.strip().splitlines():
            if not line:
                continue
            parts = line.split("|")
            if len(parts) != 5:
                continue
            commits.append(CommitInfo(*parts))
        return commits

    def _run(self, directory: str, *args: str) -> None:
        if self.verbose:
            print(f"[DEBUG] git {' '.join(args)} (in {directory})", file=sys.stderr)
        try:
            result = subprocess.run(
                ["git", *args],
                cwd=directory or None,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as exc:
            raise GitError(str(exc)) from exc
        if result.returncode != 0:
            raise GitError(result.stdout)

    def _output(
        self, directory: str, args: Sequence[str], timeout: float | None = None
    ) -> str:
        try:
            result = subprocess.run(
                ["git", *args],
                cwd=directory or None,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise GitError(str(exc)) from exc
        if result.returncode != 0:
            message = result.stderr.strip()
            raise GitError(message or f"git {args[0]} exited with status {result.returncode}")
        return result.stdout


def clean_url(raw: str) -> str:
    """Trim surrounding whitespace and leading backslashes."""
    return raw.strip().lstrip("\\")


def parse_smart_url(raw_url: str) -> tuple[str, str, str]:
    """Split a GitHub blob/tree URL into (repository URL, ref, path)."""
    raw_url = clean_url(raw_url)
    match = _DEEP_URL.search(raw_url)
    if match:
        return "https://" + match.group(1), match.group(3), match.group(4)
    base = raw_url.removesuffix("/").removesuffix(".git")
    return base, "", ""