import os
import re
import subprocess

import pytest

from gitvendor.git import (
    CloneOptions,
    CommitInfo,
    GitError,
    SystemGitClient,
    clean_url,
    parse_smart_url,
)


def run_git(directory, *args):
    result = subprocess.run(
        ["git", *args], cwd=directory, capture_output=True, text=True
    )
    assert result.returncode == 0, result.stdout + result.stderr
    return result.stdout


def configure_user(directory):
    run_git(directory, "config", "user.name", "Test User")
    run_git(directory, "config", "user.email", "test@example.com")
    run_git(directory, "config", "commit.gpgsign", "false")


def commit_file(directory, name, content, message):
    path = os.path.join(directory, name)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w") as handle:
        handle.write(content)
    run_git(directory, "add", ".")
    run_git(directory, "commit", "-m", message)


@pytest.fixture
def repo(tmp_path):
    directory = str(tmp_path / "repo")
    os.makedirs(directory)
    git = SystemGitClient()
    git.init(directory)
    configure_user(directory)
    return git, directory


def test_commit_log_between_commits(repo):
    git, directory = repo
    commit_file(directory, "file1.txt", "content1", "First commit")
    first = git.head_hash(directory)
    commit_file(directory, "file2.txt", "content2", "Second commit")
    commit_file(directory, "file3.txt", "content3", "Third commit")
    last = git.head_hash(directory)

    commits = git.commit_log(directory, first, last, 0)

    assert [c.subject for c in commits] == ["Third commit", "Second commit"]
    newest = commits[0]
    assert newest.hash == last
    assert newest.hash.startswith(newest.short_hash)
    assert newest.author == "Test User"
    assert re.match(r"\d{4}-\d{2}-\d{2} ", newest.date)


def test_commit_log_max_count(repo):
    git, directory = repo
    commit_file(directory, "file1.txt", "content1", "First commit")
    first = git.head_hash(directory)
    for i in range(2, 7):
        commit_file(directory, f"file{i}.txt", "content", f"Commit {i}")
    last = git.head_hash(directory)

    commits = git.commit_log(directory, first, last, 3)

    assert len(commits) == 3
    assert commits[0].subject == "Commit 6"


def test_commit_log_empty_range(repo):
    git, directory = repo
    commit_file(directory, "file1.txt", "content1", "First commit")
    head = git.head_hash(directory)
    assert git.commit_log(directory, head, head, 0) == []


def test_commit_log_invalid_range(repo):
    git, directory = repo
    commit_file(directory, "file1.txt", "content1", "First commit")
    with pytest.raises(GitError, match="git log failed"):
        git.commit_log(directory, "invalid-hash", "another-invalid-hash", 0)


def test_head_hash_is_full_sha(repo):
    git, directory = repo
    commit_file(directory, "a.txt", "a", "A")
    head = git.head_hash(directory)
    assert len(head) == 40
    assert head == run_git(directory, "rev-parse", "HEAD").strip()


def test_head_hash_without_commits_fails(repo):
    git, directory = repo
    with pytest.raises(GitError):
        git.head_hash(directory)


def test_list_tree_root_and_subdir(repo):
    git, directory = repo
    commit_file(directory, "README.md", "readme", "readme")
    commit_file(directory, "src/b.go", "b", "b")
    commit_file(directory, "src/a.go", "a", "a")

    assert git.list_tree(directory, "", "") == ["README.md", "src/"]
    assert git.list_tree(directory, "HEAD", "src") == ["a.go", "b.go"]
    assert git.list_tree(directory, "HEAD", "src/") == ["a.go", "b.go"]


def test_list_tree_bad_ref_fails(repo):
    git, directory = repo
    commit_file(directory, "README.md", "readme", "readme")
    with pytest.raises(GitError, match="git ls-tree failed"):
        git.list_tree(directory, "no-such-ref", "")


def test_checkout_unknown_ref_raises(repo):
    git, directory = repo
    commit_file(directory, "a.txt", "a", "A")
    with pytest.raises(GitError):
        git.checkout(directory, "does-not-exist")


def test_fetch_and_checkout_fetch_head(repo, tmp_path):
    git, source = repo
    commit_file(source, "a.txt", "a", "A")
    expected = git.head_hash(source)

    target = str(tmp_path / "target")
    os.makedirs(target)
    git.init(target)
    git.add_remote(target, "origin", source)
    git.fetch(target, 0, "HEAD")
    git.checkout(target, "FETCH_HEAD")

    assert git.head_hash(target) == expected


def test_clone_with_depth(repo, tmp_path):
    git, source = repo
    commit_file(source, "a.txt", "a", "A")
    commit_file(source, "b.txt", "b", "B")
    expected = git.head_hash(source)

    target = str(tmp_path / "clone")
    os.makedirs(target)
    git.clone(target, "file://" + source, CloneOptions(depth=1))

    assert git.head_hash(target) == expected
    assert os.path.exists(os.path.join(target, "b.txt"))
    count = run_git(target, "rev-list", "--count", "HEAD").strip()
    assert count == "1"


def test_verbose_logs_command(tmp_path, capsys):
    git = SystemGitClient(verbose=True)
    git.init(str(tmp_path))
    err = capsys.readouterr().err
    assert f"[DEBUG] git init (in {tmp_path})" in err


def test_commit_info_fields():
    info = CommitInfo("h", "s", "subj", "me", "2024-01-01")
    assert (info.hash, info.short_hash, info.subject) == ("h", "s", "subj")


def test_parse_smart_url_blob():
    assert parse_smart_url("https://github.com/owner/repo/blob/main/src/file.go") == (
        "https://github.com/owner/repo",
        "main",
        "src/file.go",
    )


def test_parse_smart_url_tree():
    assert parse_smart_url("github.com/owner/repo/tree/v1.0/lib/dir") == (
        "https://github.com/owner/repo",
        "v1.0",
        "lib/dir",
    )


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("https://github.com/owner/repo.git", "https://github.com/owner/repo"),
        ("https://github.com/owner/repo/", "https://github.com/owner/repo"),
        ("  https://gitlab.com/group/project  ", "https://gitlab.com/group/project"),
    ],
)
def test_parse_smart_url_plain(raw, expected):
    assert parse_smart_url(raw) == (expected, "", "")


def test_clean_url():
    assert clean_url("  \\\\https://example.com/repo \n") == "https://example.com/repo"