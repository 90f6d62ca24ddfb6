"""Incremental sync cache kept as JSON files under vendor/.cache."""

from __future__ import annotations

import hashlib
import json
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from gitvendor.filesystem import OSFileSystem
from gitvendor.layout import VENDOR_DIR

MAX_CACHE_FILES = 1000


@dataclass
class FileChecksum:
    """A file path and the SHA-256 of its contents."""

    path: str = ""
    hash: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FileChecksum:
        return cls(path=str(data.get("path") or ""), hash=str(data.get("hash") or ""))

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "hash": self.hash}


@dataclass
class IncrementalSyncCache:
    """Checksums of the files synced for a vendor@ref at a given commit."""

    vendor_name: str = ""
    ref: str = ""
    commit_hash: str = ""
    cached_at: str = ""
    files: list[FileChecksum] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IncrementalSyncCache:
        if not isinstance(data, Mapping):
            raise ValueError("cache document is not an object")
        return cls(
            vendor_name=str(data.get("vendor_name") or ""),
            ref=str(data.get("ref") or ""),
            commit_hash=str(data.get("commit_hash") or ""),
            cached_at=str(data.get("cached_at") or ""),
            files=[FileChecksum.from_dict(f) for f in data.get("files") or []],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "vendor_name": self.vendor_name,
            "ref": self.ref,
            "commit_hash": self.commit_hash,
            "cached_at": self.cached_at,
            "files": [f.to_dict() for f in self.files],
        }


class CorruptedCacheError(ValueError):
    """Raised when a cache file exists but cannot be parsed."""


def sanitize_filename(value: str) -> str:
    """Replace every character other than ASCII letters, digits, '-' and '.' with '_'."""
    return "".join(
        ch if (ch.isascii() and ch.isalnum()) or ch in "-." else "_" for ch in value
    )


class CacheStore:
    """Reads and writes incremental sync caches below a root directory."""

    def __init__(self, root_dir: str, fs: OSFileSystem | None = None) -> None:
        self._root_dir = root_dir
        self._fs = fs or OSFileSystem()

    @property
    def cache_dir(self) -> str:
        return os.path.join(self._root_dir, VENDOR_DIR, ".cache")

    def _cache_path(self, vendor_name: str, ref: str) -> str:
        filename = f"{sanitize_filename(vendor_name)}-{sanitize_filename(ref)}.json"
        return os.path.join(self.cache_dir, filename)

    def load(self, vendor_name: str, ref: str) -> IncrementalSyncCache:
        """Return the cache for vendor@ref; a missing cache comes back empty."""
        path = self._cache_path(vendor_name, ref)
        try:
            with open(path, "rb") as handle:
                raw = handle.read()
        except FileNotFoundError:
            return IncrementalSyncCache()
        try:
            return IncrementalSyncCache.from_dict(json.loads(raw))
        except (ValueError, TypeError, AttributeError) as exc:
            raise CorruptedCacheError(f"corrupted cache file {path}: {exc}") from exc

    def save(self, cache: IncrementalSyncCache) -> None:
        """Write the cache for its vendor@ref."""
        self._fs.mkdir_all(self.cache_dir, 0o755)
        path = self._cache_path(cache.vendor_name, cache.ref)
        with open(path, "w", encoding="utf-8") as handle:
            json.dump(cache.to_dict(), handle, indent=2)

    def delete(self, vendor_name: str, ref: str) -> None:
        """Remove the cache for vendor@ref; a missing cache is not an error."""
        try:
            os.remove(self._cache_path(vendor_name, ref))
        except FileNotFoundError:
            pass

    def compute_file_checksum(self, path: str) -> str:
        """Return the hex SHA-256 of a file's contents."""
        digest = hashlib.sha256()
        with open(path, "rb") as handle:
            for chunk in iter(lambda: handle.read(65536), b""):
                digest.update(chunk)
        return digest.hexdigest()

    def build_cache(
        self, vendor_name: str, ref: str, commit_hash: str, files: Iterable[str]
    ) -> IncrementalSyncCache:
        """Checksum up to the first thousand files; unreadable files are skipped."""
        cache = IncrementalSyncCache(
            vendor_name=vendor_name,
            ref=ref,
            commit_hash=commit_hash,
            cached_at=datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        )
        for path in list(files)[:MAX_CACHE_FILES]:
            try:
                checksum = self.compute_file_checksum(path)
            except OSError:
                continue
            cache.files.append(FileChecksum(path=path, hash=checksum))
        return cache