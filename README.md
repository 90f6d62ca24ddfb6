# gitvendor

`gitvendor` is a library for copying chosen files and directories out of
remote git repositories into a project. It records which commit each one
came from.

Vendored dependencies are described in `vendor/vendor.yml`. The commits
they were taken from are pinned in `vendor/vendor.lock`.

## What it provides

- **Layout** (`gitvendor.layout`): the names `VENDOR_DIR`, `CONFIG_NAME`,
  `LOCK_NAME` and `LICENSE_DIR`, and the default `ALLOWED_LICENSES`.
  `is_git_installed()` reports whether `git` is on the `PATH`.
  `is_vendor_initialized()` reports whether a `vendor` directory exists in
  the current directory. `license_path(root_dir, name)` gives
  `<root_dir>/licenses/<name>.txt`.
- **Config and lock stores** (`gitvendor.stores`): `ConfigStore` and
  `LockStore` read and write `vendor.yml` and `vendor.lock` under a root
  directory.
  - Their records are `VendorConfig`, `VendorSpec`, `BranchSpec`,
    `PathMapping`, `HookConfig`, `VendorLock` and `LockDetails`.
  - A missing `vendor.yml` reads as an empty config. A missing
    `vendor.lock` raises `FileNotFoundError`.
  - `LockStore.get_hash(vendor_name, ref)` returns the pinned commit, or
    `""` when there is none.
- **Incremental sync cache** (`gitvendor.cache_store`): `CacheStore`
  keeps SHA-256 checksums of synced files in `vendor/.cache/`, one JSON
  file per vendor and ref.
  - A missing cache loads as an empty `IncrementalSyncCache`. An
    unparsable one raises `CorruptedCacheError`.
  - `build_cache` checksums at most the first 1000 files and skips files
    it cannot read.
- **Git access** (`gitvendor.git`): `SystemGitClient` runs the `git`
  executable and raises `GitError` when a command fails. It covers init,
  remote add, fetch, checkout, clone, `rev-parse HEAD`, `ls-tree` and
  `log`.
  - `commit_log` returns `CommitInfo` records, newest first.
  - `parse_smart_url` splits a GitHub `blob`/`tree` link into repository,
    ref and path.
- **Diffs** (`gitvendor.diff`): `DiffService(config_store, lock_store,
  git_client, fs)` has a `diff_vendor(name)` method.
  - For each locked ref of the vendor, it fetches the repository into a
    temporary directory and compares the locked commit with the newest
    one. It returns `VendorDiff` records with up to 10 commits.
  - An unknown vendor raises `VendorNotFoundError`.
  - `format_diff_output` renders a diff for the terminal.
- **Hooks** (`gitvendor.hooks`): `HookService` runs a vendor's pre-sync
  and post-sync commands through `sh -c` (or `cmd /c` on Windows).
  - The commands run in the context's root directory, with these variables
    added to the environment: `GIT_VENDOR_NAME`, `GIT_VENDOR_URL`,
    `GIT_VENDOR_REF`, `GIT_VENDOR_COMMIT`, `GIT_VENDOR_ROOT`,
    `GIT_VENDOR_FILES_COPIED` and `GIT_VENDOR_DIRS_CREATED`, plus any in
    `HookContext.environment`.
  - A non-zero exit raises `HookError`.
- **Safe copying** (`gitvendor.filesystem`): `OSFileSystem` copies files
  and directory trees and returns `CopyStats`.
  - Directory copies skip any path that mentions `.git`.
  - `validate_dest_path` rejects absolute paths, drive-letter paths and
    `..` traversal with `InvalidDestinationError`.
- **Shell completion** (`gitvendor.completion`): scripts for bash, zsh,
  fish and PowerShell, and `command_description` for each command name.

## Examples

Split a GitHub link into its parts:

```python
from gitvendor.git import parse_smart_url

base, ref, path = parse_smart_url(
    "https://github.com/owner/repo/blob/main/src/file.go"
)
# base == "https://github.com/owner/repo", ref == "main", path == "src/file.go"
```

Refuse a destination that escapes the project:

```python
from gitvendor.filesystem import InvalidDestinationError, validate_dest_path

validate_dest_path("lib/src")          # fine
try:
    validate_dest_path("../etc/passwd")
except InvalidDestinationError as exc:
    print(exc)
```

Look up a pinned commit:

```python
from gitvendor.stores import LockStore

print(LockStore("vendor").get_hash("my-lib", "main"))
```

Write a shell completion script:

```python
from gitvendor.completion import generate_bash_completion

with open("git-vendor.bash", "w", encoding="utf-8") as handle:
    handle.write(generate_bash_completion())
```

## What it does not do

- There is no command-line program. The completion scripts describe
  commands that this package does not install.
- The package does not sync or update vendors, and it does not copy
  mappings into place.
- It does not detect a repository's license or check it for compliance.
  The allowed-license list and the license file paths are provided, but
  nothing here fills them in.

## Requirements

Python 3.10 or later, PyYAML, and `git` on the `PATH`.