"""Shell completion scripts for the git-vendor command line."""

from __future__ import annotations

from dataclasses import dataclass

COMMANDS: tuple[str, ...] = (
    "init",
    "add",
    "edit",
    "remove",
    "list",
    "sync",
    "update",
    "validate",
    "status",
    "check-updates",
    "diff",
    "watch",
    "completion",
    "help",
)

SHELLS: tuple[str, ...] = ("bash", "zsh", "fish", "powershell")

_DESCRIPTIONS: dict[str, str] = {
    "init": "Initialize vendor directory",
    "add": "Add vendor dependency",
    "edit": "Edit vendor configuration",
    "remove": "Remove vendor dependency",
    "list": "List all vendors",
    "sync": "Sync dependencies at locked versions",
    "update": "Update lockfile with latest commits",
    "validate": "Validate config and check conflicts",
    "status": "Check sync status",
    "check-updates": "Check for available updates",
    "diff": "Show commit differences",
    "watch": "Watch for config changes",
    "completion": "Generate shell completion script",
    "help": "Show help information",
}


@dataclass(frozen=True)
class _Flag:
    name: str
    description: str
    short: str = ""
    value: str = ""


@dataclass(frozen=True)
class _FlagSet:
    commands: tuple[str, ...]
    flags: tuple[_Flag, ...]


_PARALLEL = _Flag("parallel", "Enable parallel processing")
_WORKERS = _Flag("workers", "Number of parallel workers", value="workers")
_VERBOSE = _Flag("verbose", "Show git commands", short="v")
_QUIET = _Flag("quiet", "Minimal output", short="q")
_JSON = _Flag("json", "JSON output")

_FLAG_SETS: tuple[_FlagSet, ...] = (
    _FlagSet(
        ("sync",),
        (
            _Flag("dry-run", "Preview without changes"),
            _Flag("force", "Re-download even if synced"),
            _Flag("no-cache", "Skip incremental cache"),
            _Flag("group", "Sync vendor group", value="group"),
            _PARALLEL,
            _WORKERS,
            _VERBOSE,
        ),
    ),
    _FlagSet(("update",), (_PARALLEL, _WORKERS, _VERBOSE)),
    _FlagSet(("remove",), (_Flag("yes", "Skip confirmation", short="y"), _QUIET, _JSON)),
    _FlagSet(("list", "validate", "status", "check-updates"), (_QUIET, _JSON)),
)

_NO_FLAG_COMMANDS: tuple[str, ...] = ("diff", "watch")

_PS_RESULT = "[System.Management.Automation.CompletionResult]::new($_, $_, 'ParameterValue', $_)"
_PS_FILTER = 'Where-Object { $_ -like "$wordToComplete*" } | ForEach-Object {'


def command_description(command: str) -> str:
    """Return the short description of a command, or an empty string."""
    return _DESCRIPTIONS.get(command, "")


def _option_words(flags: tuple[_Flag, ...]) -> list[str]:
    words: list[str] = []
    for flag in flags:
        words.append(f"--{flag.name}")
        if flag.short:
            words.append(f"-{flag.short}")
    return words


def _bash_case(label: str, words: str) -> list[str]:
    return [f"        {label})", f'            opts="{words}"', "            ;;"]


def generate_bash_completion() -> str:
    """Return the bash completion script."""
    cases: list[str] = []
    for flag_set in _FLAG_SETS:
        cases += _bash_case("|".join(flag_set.commands), " ".join(_option_words(flag_set.flags)))
    cases += _bash_case("completion", " ".join(SHELLS))
    cases += _bash_case("|".join(_NO_FLAG_COMMANDS), "")

    lines = [
        "# bash completion for git-vendor",
        "_git_vendor_completions() {",
        "    local cur prev opts",
        "    COMPREPLY=()",
        '    cur="${COMP_WORDS[COMP_CWORD]}"',
        '    prev="${COMP_WORDS[COMP_CWORD-1]}"',
        "",
        "    # Commands",
        f'    opts="{" ".join(COMMANDS)}"',
        "",
        "    # Command-specific options",
        '    case "${prev}" in',
        *cases,
        "    esac",
        "",
        '    COMPREPLY=( $(compgen -W "${opts}" -- ${cur}) )',
        "    return 0",
        "}",
        "",
        "complete -F _git_vendor_completions git-vendor",
        "",
    ]
    return "\n".join(lines)


def _zsh_specs(flags: tuple[_Flag, ...]) -> list[str]:
    specs: list[str] = []
    for flag in flags:
        suffix = f":{flag.value}:" if flag.value else ""
        specs.append(f"'--{flag.name}[{flag.description}]{suffix}'")
        if flag.short:
            specs.append(f"'-{flag.short}[{flag.description}]'")
    return specs


def generate_zsh_completion() -> str:
    """Return the zsh completion script."""
    entries = [f"    '{cmd}:{command_description(cmd)}'" for cmd in COMMANDS]

    cases: list[str] = []
    for flag_set in _FLAG_SETS:
        specs = _zsh_specs(flag_set.flags)
        cases.append(f"                {'|'.join(flag_set.commands)})")
        cases.append("                    _arguments \\")
        cases.extend(
            f"                        {spec}" + (" \\" if index < len(specs) - 1 else "")
            for index, spec in enumerate(specs)
        )
        cases.append("                    ;;")
    cases += [
        "                completion)",
        f"                    _arguments '1:shell:({' '.join(SHELLS)})'",
        "                    ;;",
    ]

    lines = [
        "#compdef git-vendor",
        "",
        "_git_vendor() {",
        "    local -a commands",
        "    commands=(",
        *entries,
        "    )",
        "",
        "    _arguments -C \\",
        "        '1: :->command' \\",
        "        '*::arg:->args'",
        "",
        "    case $state in",
        "        command)",
        "            _describe 'command' commands",
        "            ;;",
        "        args)",
        "            case $words[1] in",
        *cases,
        "            esac",
        "            ;;",
        "    esac",
        "}",
        "",
        '_git_vendor "$@"',
        "",
    ]
    return "\n".join(lines)


def _fish_flag_line(commands: tuple[str, ...], flag: _Flag) -> str:
    line = f"complete -c git-vendor -n '__fish_seen_subcommand_from {' '.join(commands)}' -l {flag.name}"
    if flag.short:
        line += f" -s {flag.short}"
    line += f" -d '{flag.description}'"
    if flag.value:
        line += " -r"
    return line


def generate_fish_completion() -> str:
    """Return the fish completion script."""
    lines = [
        f"complete -c git-vendor -f -n '__fish_use_subcommand' -a '{cmd}' -d '{command_description(cmd)}'"
        for cmd in COMMANDS
    ]
    for flag_set in _FLAG_SETS:
        kind = " command flags" if len(flag_set.commands) == 1 else " flags"
        lines.append("# " + "/".join(flag_set.commands) + kind)
        lines.extend(_fish_flag_line(flag_set.commands, flag) for flag in flag_set.flags)
    lines.append("# completion command shells")
    lines.append(
        "complete -c git-vendor -n '__fish_seen_subcommand_from completion' "
        f"-f -a '{' '.join(SHELLS)}'"
    )
    return "\n".join(lines)


def _ps_quote(words) -> str:
    return ", ".join(f"'{word}'" for word in words)


def _ps_case(label: str, words) -> list[str]:
    return [
        f"            {label} {{",
        f"                @({_ps_quote(words)}) |",
        f"                    {_PS_FILTER}",
        f"                        {_PS_RESULT}",
        "                    }",
        "            }",
    ]


def generate_powershell_completion() -> str:
    """Return the PowerShell completion script."""
    cases: list[str] = []
    for flag_set in _FLAG_SETS:
        if len(flag_set.commands) == 1:
            label = f"'{flag_set.commands[0]}'"
        else:
            label = "{ $_ -in " + ",".join(f"'{c}'" for c in flag_set.commands) + " }"
        cases += _ps_case(label, _option_words(flag_set.flags))
    cases += _ps_case("'completion'", SHELLS)

    lines = [
        "# PowerShell completion for git-vendor",
        "Register-ArgumentCompleter -Native -CommandName git-vendor -ScriptBlock {",
        "    param($wordToComplete, $commandAst, $cursorPosition)",
        "",
        f"    $commands = @({_ps_quote(COMMANDS)})",
        "",
        "    $line = $commandAst.ToString()",
        "    $tokens = $line.Split(' ')",
        "",
        "    if ($tokens.Count -eq 2) {",
        "        # Complete command",
        f"        $commands | {_PS_FILTER}",
        f"            {_PS_RESULT}",
        "        }",
        "    }",
        "    elseif ($tokens.Count -gt 2) {",
        "        $subcommand = $tokens[1]",
        "",
        "        switch ($subcommand) {",
        *cases,
        "        }",
        "    }",
        "}",
        "",
    ]
    return "\n".join(lines)