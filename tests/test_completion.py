import pytest

from gitvendor.completion import (
    COMMANDS,
    command_description,
    generate_bash_completion,
    generate_fish_completion,
    generate_powershell_completion,
    generate_zsh_completion,
)


def test_bash_completion():
    script = generate_bash_completion()
    assert "# bash completion for git-vendor" in script
    assert "_git_vendor_completions()" in script
    assert "complete -F _git_vendor_completions git-vendor" in script
    for cmd in COMMANDS:
        assert cmd in script
    assert "--dry-run" in script
    assert "--force" in script
    assert "--parallel" in script
    assert "update)" in script
    assert "bash zsh fish powershell" in script


def test_bash_completion_lists_commands_in_order():
    script = generate_bash_completion()
    assert 'opts="' + " ".join(COMMANDS) + '"' in script
    assert '${COMP_WORDS[COMP_CWORD]}' in script


def test_zsh_completion():
    script = generate_zsh_completion()
    assert "#compdef git-vendor" in script
    assert "_git_vendor()" in script
    assert "_describe 'command' commands" in script
    for cmd in COMMANDS:
        desc = command_description(cmd)
        assert f"{cmd}:{desc}" in script
    assert "--dry-run[Preview without changes]" in script
    assert "--force[Re-download even if synced]" in script
    assert "--no-cache[Skip incremental cache]" in script
    assert "--parallel[Enable parallel processing]" in script
    assert "update)" in script
    assert "1:shell:(bash zsh fish powershell)" in script


def test_zsh_line_continuations():
    script = generate_zsh_completion()
    assert "_arguments -C \\\n" in script
    assert "    'init:Initialize vendor directory'" in script


def test_fish_completion():
    script = generate_fish_completion()
    assert "complete -c git-vendor" in script
    assert "__fish_use_subcommand" in script
    for cmd in COMMANDS:
        desc = command_description(cmd)
        assert f"-a '{cmd}'" in script
        assert desc in script
    assert "__fish_seen_subcommand_from sync" in script
    assert "-l dry-run -d 'Preview without changes'" in script
    assert "-l force -d 'Re-download even if synced'" in script
    assert "-l parallel -d 'Enable parallel processing'" in script
    assert "__fish_seen_subcommand_from update" in script
    assert "__fish_seen_subcommand_from completion" in script
    assert "-a 'bash zsh fish powershell'" in script


def test_powershell_completion():
    script = generate_powershell_completion()
    assert "# PowerShell completion for git-vendor" in script
    assert "Register-ArgumentCompleter -Native -CommandName git-vendor" in script
    assert "ScriptBlock" in script
    for cmd in COMMANDS:
        assert f"'{cmd}'" in script
    assert "'sync'" in script
    assert "'--dry-run'" in script
    assert "'--force'" in script
    assert "'--parallel'" in script
    assert "'update'" in script
    assert "'completion'" in script
    assert "'bash', 'zsh', 'fish', 'powershell'" in script
    assert "CompletionResult" in script


@pytest.mark.parametrize(
    "command, description",
    [
        ("init", "Initialize vendor directory"),
        ("add", "Add vendor dependency"),
        ("edit", "Edit vendor configuration"),
        ("remove", "Remove vendor dependency"),
        ("list", "List all vendors"),
        ("sync", "Sync dependencies at locked versions"),
        ("update", "Update lockfile with latest commits"),
        ("validate", "Validate config and check conflicts"),
        ("status", "Check sync status"),
        ("check-updates", "Check for available updates"),
        ("diff", "Show commit differences"),
        ("watch", "Watch for config changes"),
        ("completion", "Generate shell completion script"),
        ("help", "Show help information"),
        ("nonexistent", ""),
    ],
)
def test_command_description(command, description):
    assert command_description(command) == description


def test_all_commands_have_descriptions():
    for cmd in COMMANDS:
        assert command_description(cmd) != "", cmd
        assert len(command_description(cmd)) > 0


def test_bash_contains_all_sync_flags():
    script = generate_bash_completion()
    for flag in ["--dry-run", "--force", "--no-cache", "--group", "--parallel", "--workers", "--verbose", "-v"]:
        assert flag in script


def test_zsh_contains_all_sync_flags():
    script = generate_zsh_completion()
    for flag in [
        "--dry-run[Preview without changes]",
        "--force[Re-download even if synced]",
        "--no-cache[Skip incremental cache]",
        "--group[Sync vendor group]",
        "--parallel[Enable parallel processing]",
        "--workers[Number of parallel workers]",
        "--verbose[Show git commands]",
        "-v[Show git commands]",
    ]:
        assert flag in script


def test_fish_contains_all_sync_flags():
    script = generate_fish_completion()
    for flag in [
        "-l dry-run",
        "-l force",
        "-l no-cache",
        "-l group",
        "-l parallel",
        "-l workers",
        "-l verbose -s v",
    ]:
        assert flag in script


def test_powershell_contains_all_sync_flags():
    script = generate_powershell_completion()
    for flag in ["'--dry-run'", "'--force'", "'--no-cache'", "'--group'", "'--parallel'", "'--workers'", "'--verbose'", "'-v'"]:
        assert flag in script