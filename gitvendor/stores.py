"""Reading and writing vendor.yml and vendor.lock."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Mapping

import yaml

from gitvendor.layout import CONFIG_NAME, LOCK_NAME


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


def _items(data: Mapping[str, Any], key: str) -> list:
    value = data.get(key)
    return list(value) if value else []


@dataclass
class PathMapping:
    """A path inside the vendored repository and its local destination."""

    from_path: str = ""
    to: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> PathMapping:
        data = data or {}
        return cls(from_path=_text(data, "from"), to=_text(data, "to"))

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"from": self.from_path}
        if self.to:
            out["to"] = self.to
        return out


@dataclass
class BranchSpec:
    """The mappings to vendor from one ref."""

    ref: str = ""
    default_target: str = ""
    mapping: list[PathMapping] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> BranchSpec:
        data = data or {}
        return cls(
            ref=_text(data, "ref"),
            default_target=_text(data, "default_target"),
            mapping=[PathMapping.from_dict(m) for m in _items(data, "mapping")],
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"ref": self.ref}
        if self.default_target:
            out["default_target"] = self.default_target
        out["mapping"] = [m.to_dict() for m in self.mapping]
        return out


@dataclass
class HookConfig:
    """Shell commands run before and after a vendor is synced."""

    pre_sync: str = ""
    post_sync: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> HookConfig:
        data = data or {}
        return cls(pre_sync=_text(data, "pre_sync"), post_sync=_text(data, "post_sync"))

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.pre_sync:
            out["pre_sync"] = self.pre_sync
        if self.post_sync:
            out["post_sync"] = self.post_sync
        return out


@dataclass
class VendorSpec:
    """One vendored dependency as declared in vendor.yml."""

    name: str = ""
    url: str = ""
    license: str = ""
    groups: list[str] = field(default_factory=list)
    specs: list[BranchSpec] = field(default_factory=list)
    hooks: HookConfig | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> VendorSpec:
        data = data or {}
        hooks = data.get("hooks")
        return cls(
            name=_text(data, "name"),
            url=_text(data, "url"),
            license=_text(data, "license"),
            groups=[str(g) for g in _items(data, "groups")],
            specs=[BranchSpec.from_dict(s) for s in _items(data, "specs")],
            hooks=HookConfig.from_dict(hooks) if hooks else None,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "url": self.url, "license": self.license}
        if self.groups:
            out["groups"] = list(self.groups)
        out["specs"] = [s.to_dict() for s in self.specs]
        if self.hooks is not None and self.hooks.to_dict():
            out["hooks"] = self.hooks.to_dict()
        return out


@dataclass
class VendorConfig:
    """The contents of vendor.yml."""

    vendors: list[VendorSpec] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> VendorConfig:
        data = data or {}
        return cls(vendors=[VendorSpec.from_dict(v) for v in _items(data, "vendors")])

    def to_dict(self) -> dict[str, Any]:
        return {"vendors": [v.to_dict() for v in self.vendors]}


@dataclass
class LockDetails:
    """The commit a vendor@ref is locked to."""

    name: str = ""
    ref: str = ""
    commit_hash: str = ""
    license_path: str = ""
    updated: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> LockDetails:
        data = data or {}
        return cls(
            name=_text(data, "name"),
            ref=_text(data, "ref"),
            commit_hash=_text(data, "commit_hash"),
            license_path=_text(data, "license_path"),
            updated=_text(data, "updated"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "ref": self.ref, "commit_hash": self.commit_hash}
        if self.license_path:
            out["license_path"] = self.license_path
        out["updated"] = self.updated
        return out


@dataclass
class VendorLock:
    """The contents of vendor.lock."""

    vendors: list[LockDetails] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> VendorLock:
        data = data or {}
        return cls(vendors=[LockDetails.from_dict(v) for v in _items(data, "vendors")])

    def to_dict(self) -> dict[str, Any]:
        return {"vendors": [v.to_dict() for v in self.vendors]}


class _YamlFile:
    """A YAML document stored as one file under a root directory."""

    def __init__(self, root_dir: str, filename: str, allow_missing: bool) -> None:
        self._path = os.path.join(root_dir, filename)
        self._allow_missing = allow_missing

    @property
    def path(self) -> str:
        return self._path

    def read(self) -> Mapping[str, Any]:
        try:
            with open(self._path, encoding="utf-8") as handle:
                data = yaml.safe_load(handle)
        except FileNotFoundError:
            if self._allow_missing:
                return {}
            raise
        if data is None:
            return {}
        if not isinstance(data, Mapping):
            raise ValueError(f"{self._path}: expected a mapping at the top level")
        return data

    def write(self, data: Mapping[str, Any]) -> None:
        parent = os.path.dirname(self._path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(self._path, "w", encoding="utf-8") as handle:
            yaml.safe_dump(dict(data), handle, sort_keys=False, allow_unicode=True)


class ConfigStore:
    """vendor.yml under a root directory; a missing file reads as an empty config."""

    def __init__(self, root_dir: str) -> None:
        self._file = _YamlFile(root_dir, CONFIG_NAME, allow_missing=True)

    def path(self) -> str:
        """Return the path of vendor.yml."""
        return self._file.path

    def load(self) -> VendorConfig:
        """Read and parse vendor.yml."""
        return VendorConfig.from_dict(self._file.read())

    def save(self, config: VendorConfig) -> None:
        """Write vendor.yml."""
        self._file.write(config.to_dict())


class LockStore:
    """vendor.lock under a root directory; a missing file is an error."""

    def __init__(self, root_dir: str) -> None:
        self._file = _YamlFile(root_dir, LOCK_NAME, allow_missing=False)

    def path(self) -> str:
        """Return the path of vendor.lock."""
        return self._file.path

    def load(self) -> VendorLock:
        """Read and parse vendor.lock."""
        return VendorLock.from_dict(self._file.read())

    def save(self, lock: VendorLock) -> None:
        """Write vendor.lock."""
        self._file.write(lock.to_dict())

    def get_hash(self, vendor_name: str, ref: str) -> str:
        """Return the locked commit for vendor@ref, or '' if unknown or unreadable."""
        try:
            lock = self.load()
        except (OSError, ValueError, yaml.YAMLError):
            return ""
        return next(
            (e.commit_hash for e in lock.vendors if e.name == vendor_name and e.ref == ref),
            "",
        )