"""Shell completion scripts for the phantom command.

The scripts are generated from one command table so that every shell offers
the same commands and options. Worktree names are completed at runtime
through `phantom list --names`.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Tuple

from git_phantom.exceptions import ValidationError


@dataclass
class CompletionCommand:
    name: str
    description: str
    # (long option, description, takes a value)
    options: List[Tuple[str, str, bool]] = field(default_factory=list)
    completes_worktrees: bool = False


COMMANDS: List[CompletionCommand] = [
    CompletionCommand("create", "Create a new worktree", [
        ("shell", "Open an interactive shell in the new worktree", False),
        ("exec", "Execute a command in the new worktree", True),
        ("tmux", "Open the worktree in a new tmux window", False),
        ("tmux-vertical", "Open the worktree in a vertical tmux pane", False),
        ("tmux-horizontal", "Open the worktree in a horizontal tmux pane", False),
        ("kitty", "Open the worktree in a new kitty tab", False),
        ("kitty-vertical", "Open the worktree in a vertical kitty split", False),
        ("kitty-horizontal", "Open the worktree in a horizontal kitty split", False),
        ("copy-file", "Copy a file from the repository root", True),
    ]),
    CompletionCommand("attach", "Attach a worktree to an existing branch", [
        ("shell", "Open an interactive shell in the worktree", False),
        ("exec", "Execute a command in the worktree", True),
    ]),
    CompletionCommand("list", "List worktrees", [
        ("fzf", "Use fzf for interactive selection", False),
        ("names", "Output only worktree names", False),
    ]),
    CompletionCommand("where", "Output the path of a worktree", [
        ("fzf", "Use fzf for interactive selection", False),
    ], completes_worktrees=True),
    CompletionCommand("delete", "Delete a worktree and its branch", [
        ("force", "Delete even with uncommitted changes", False),
        ("current", "Delete the current worktree", False),
        ("fzf", "Use fzf for interactive selection", False),
    ], completes_worktrees=True),
    CompletionCommand("exec", "Execute a command in a worktree", completes_worktrees=True),
    CompletionCommand("shell", "Open an interactive shell in a worktree", [
        ("fzf", "Use fzf for interactive selection", False),
    ], completes_worktrees=True),
    CompletionCommand("version", "Display the version"),
    CompletionCommand("completion", "Generate shell completion scripts"),
]

SUPPORTED_SHELLS = ("fish", "zsh", "bash")


def fish_script(prog: str = "phantom") -> str:
    lines = [
        f"# Fish completion for {prog}",
        f"# Save as ~/.config/fish/completions/{prog}.fish",
        "",
        f"function __{prog}_list_worktrees",
        f"    {prog} list --names 2>/dev/null",
        "end",
        "",
        f"complete -c {prog} -f",
    ]
    for cmd in COMMANDS:
        lines.append(
            f'complete -c {prog} -n "__fish_use_subcommand" -a "{cmd.name}" -d "{cmd.description}"'
        )
    lines.append(f'complete -c {prog} -l help -d "Show help"')
    lines.append(f'complete -c {prog} -l version -d "Show version"')
    for cmd in COMMANDS:
        condition = f'"__fish_seen_subcommand_from {cmd.name}"'
        for option, description, takes_value in cmd.options:
            value_flag = " -x" if takes_value else ""
            lines.append(
                f'complete -c {prog} -n {condition} -l {option} -d "{description}"{value_flag}'
            )
        if cmd.completes_worktrees:
            lines.append(f'complete -c {prog} -n {condition} -a "(__{prog}_list_worktrees)"')
    lines.append(
        f'complete -c {prog} -n "__fish_seen_subcommand_from completion" -a "{" ".join(SUPPORTED_SHELLS)}"'
    )
    return "\n".join(lines)


def zsh_script(prog: str = "phantom") -> str:
    lines = [
        f"#compdef {prog}",
        f"# Zsh completion for {prog}",
        f'# Load with: eval "$({prog} completion zsh)"',
        "",
        f"_{prog}() {{",
        "    local -a commands",
        "    commands=(",
    ]
    for cmd in COMMANDS:
        lines.append(f"        '{cmd.name}:{cmd.description}'")
    lines += [
        "    )",
        "",
        "    _arguments -C \\",
        "        '--help[Show help]' \\",
        "        '--version[Show version]' \\",
        "        '1:command:->command' \\",
        "        '*::arg:->args'",
        "",
        "    case ${state} in",
        "        command)",
        f"            _describe '{prog} command' commands",
        "            ;;",
        "        args)",
        "            local -a worktrees",
        f'            worktrees=(${{(f)"$({prog} list --names 2>/dev/null)"}})',
        "            case ${line[1]} in",
    ]
    for cmd in COMMANDS:
        specs = []
        for option, description, takes_value in cmd.options:
            suffix = f":{option}:" if takes_value else ""
            specs.append(f"'--{option}[{description}]{suffix}'")
        if cmd.completes_worktrees:
            specs.append("'1:worktree:(${worktrees[@]})'")
        if cmd.name == "completion":
            specs.append(f"'1:shell:({' '.join(SUPPORTED_SHELLS)})'")
        if not specs:
            continue
        lines.append(f"                {cmd.name})")
        lines.append("                    _arguments " + " ".join(specs))
        lines.append("                    ;;")
    lines += [
        "            esac",
        "            ;;",
        "    esac",
        "}",
        "",
        f"compdef _{prog} {prog}",
    ]
    return "\n".join(lines)


def bash_script(prog: str = "phantom") -> str:
    case_lines = []
    for cmd in COMMANDS:
        words = " ".join(f"--{option}" for option, _, _ in cmd.options)
        if cmd.name == "completion":
            words = " ".join(SUPPORTED_SHELLS)
        if cmd.completes_worktrees:
            words = f'{words} $({prog} list --names 2>/dev/null)'.strip()
        if words:
            case_lines.append(f'        {cmd.name}) COMPREPLY=($(compgen -W "{words}" -- "$cur")) ;;')

    commands = " ".join(cmd.name for cmd in COMMANDS)
    return "\n".join([
        f"# Bash completion for {prog}",
        f'# Load with: eval "$({prog} completion bash)"',
        "",
        f"_{prog}() {{",
        '    local cur="${COMP_WORDS[COMP_CWORD]}"',
        "    if [[ ${COMP_CWORD} -eq 1 ]]; then",
        f'        COMPREPLY=($(compgen -W "{commands} --help --version" -- "$cur"))',
        "        return",
        "    fi",
        '    case "${COMP_WORDS[1]}" in',
        *case_lines,
        "    esac",
        "}",
        "",
        f"complete -F _{prog} {prog}",
    ])


GENERATORS: Dict[str, Callable[[str], str]] = {
    "fish": fish_script,
    "zsh": zsh_script,
    "bash": bash_script,
}


def completion_script(shell: str, prog: str = "phantom") -> str:
    """Completion script for a shell.

    Raises:
        ValidationError: unsupported shell
    """
    generator = GENERATORS.get(shell.lower())
    if generator is None:
        raise ValidationError(
            f"Unsupported shell: {shell}. Supported shells: {', '.join(SUPPORTED_SHELLS)}"
        )
    return generator(prog)
