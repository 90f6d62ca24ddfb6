"""Vendor files from remote git repositories: stores, sync cache, git access, diffs and hooks."""

__version__ = "0.1.0"

__all__ = [
    "cache_store",
    "completion",
    "diff",
    "filesystem",
    "git",
    "hooks",
    "layout",
    "stores",
]