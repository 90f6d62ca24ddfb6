"""File system operations used when vendoring files."""

from __future__ import annotations

import os
import shutil
import stat
import tempfile
from dataclasses import dataclass
from typing import Iterator


@dataclass
class CopyStats:
    """Counts of files and bytes copied."""

    file_count: int = 0
    byte_count: int = 0

    def add(self, other: CopyStats) -> None:
        """Accumulate another set of statistics into this one."""
        self.file_count += other.file_count
        self.byte_count += other.byte_count


class InvalidDestinationError(ValueError):
    """Raised when a destination path is absolute or escapes the working tree."""


class OSFileSystem:
    """File system operations backed by the operating system."""

    def copy_file(self, src: str | os.PathLike, dst: str | os.PathLike) -> CopyStats:
        """Copy one file; the destination directory must already exist."""
        with open(src, "rb") as source, open(dst, "wb") as dest:
            shutil.copyfileobj(source, dest)
            copied = dest.tell()
        return CopyStats(file_count=1, byte_count=copied)

    def copy_dir(self, src: str | os.PathLike, dst: str | os.PathLike) -> CopyStats:
        """Recursively copy a directory, skipping anything whose path mentions .git."""
        src = os.fspath(src)
        dst = os.fspath(dst)
        stats = CopyStats()
        for path, info in self._walk(src):
            rel = os.path.relpath(path, src)
            if ".git" in rel:
                continue
            dest_path = os.path.normpath(os.path.join(dst, rel))
            if stat.S_ISDIR(info.st_mode):
                os.makedirs(dest_path, mode=stat.S_IMODE(info.st_mode), exist_ok=True)
            else:
                stats.add(self.copy_file(path, dest_path))
        return stats

    def _walk(self, top: str) -> Iterator[tuple[str, os.stat_result]]:
        info = os.lstat(top)
        yield top, info
        if stat.S_ISDIR(info.st_mode):
            for name in sorted(os.listdir(top)):
                yield from self._walk(os.path.join(top, name))

    def mkdir_all(self, path: str | os.PathLike, mode: int = 0o755) -> None:
        """Create a directory and any missing parents."""
        os.makedirs(path, mode=mode, exist_ok=True)

    def read_dir(self, path: str | os.PathLike) -> list[str]:
        """List a directory sorted by name; directories carry a trailing slash."""
        path = os.fspath(path) or "."
        with os.scandir(path) as entries:
            items = [
                entry.name + "/" if entry.is_dir(follow_symlinks=False) else entry.name
                for entry in entries
            ]
        return sorted(items)

    def stat(self, path: str | os.PathLike) -> os.stat_result:
        """Return file information."""
        return os.stat(path)

    def remove(self, path: str | os.PathLike) -> None:
        """Remove a file or an empty directory."""
        if os.path.isdir(path) and not os.path.islink(path):
            os.rmdir(path)
        else:
            os.remove(path)

    def create_temp(self, directory: str | None, pattern: str) -> str:
        """Create a temporary directory; the last '*' in pattern marks the random part."""
        prefix, star, suffix = pattern.rpartition("*")
        if not star:
            prefix, suffix = pattern, ""
        return tempfile.mkdtemp(suffix=suffix, prefix=prefix, dir=directory or None)

    def remove_all(self, path: str | os.PathLike) -> None:
        """Remove a path and everything below it; a missing path is not an error."""
        if not os.path.lexists(path):
            return
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.remove(path)


def validate_dest_path(dest_path: str) -> None:
    """Reject absolute destinations and destinations that climb out with '..'."""
    cleaned = os.path.normpath(dest_path) if dest_path else "."
    absolute = f"invalid destination path: {dest_path} (absolute paths are not allowed)"

    if dest_path.startswith(("/", "\\")):
        raise InvalidDestinationError(absolute)
    if len(dest_path) >= 2 and dest_path[1] == ":" and dest_path[0].isascii() and dest_path[0].isalpha():
        raise InvalidDestinationError(absolute)
    if os.path.isabs(cleaned):
        raise InvalidDestinationError(absolute)
    if cleaned.startswith("..") or (os.sep + "..") in cleaned:
        raise InvalidDestinationError(
            f"invalid destination path: {dest_path} (path traversal with .. is not allowed)"
        )