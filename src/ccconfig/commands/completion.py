"""Shell completion scripts.

Each script completes subcommands, their flags, ``mode`` values, ``env``
formats and profile names. Profile names are fetched at completion time
from ``ccconfig list --names`` so the scripts never go stale.
"""

from __future__ import annotations

from ..context import Context
from ..defaults import MODES, PROG
from ..errors import UserInputError
from ..shells import ENV_FORMATS

COMMANDS = (
    "list",
    "ls",
    "add",
    "update",
    "use",
    "start",
    "safe-start",
    "remove",
    "rm",
    "current",
    "mode",
    "env",
    "edit",
    "completion",
)
# Commands whose first positional argument is a profile name.
PROFILE_COMMANDS = ("use", "start", "safe-start", "update", "remove", "rm")
COMPLETION_SHELLS = ("bash", "zsh", "fish", "powershell", "pwsh")


def _words(items) -> str:
    return " ".join(items)


def bash_script() -> str:
    return f"""# {PROG} bash completion
# Add to ~/.bashrc:  eval "$({PROG} completion bash)"
_{PROG}_completions() {{
    local cur prev commands
    COMPREPLY=()
    cur="${{COMP_WORDS[COMP_CWORD]}}"
    prev="${{COMP_WORDS[COMP_CWORD-1]}}"
    commands="{_words(COMMANDS)}"

    if [ "$COMP_CWORD" -eq 1 ]; then
        COMPREPLY=( $(compgen -W "$commands --help --version" -- "$cur") )
        return 0
    fi

    case "${{COMP_WORDS[1]}}" in
        {'|'.join(PROFILE_COMMANDS)})
            if [ "$COMP_CWORD" -eq 2 ]; then
                local profiles
                profiles="$({PROG} list --names 2>/dev/null)"
                COMPREPLY=( $(compgen -W "$profiles" -- "$cur") )
            elif [ "${{COMP_WORDS[1]}}" = "use" ]; then
                COMPREPLY=( $(compgen -W "--permanent -p" -- "$cur") )
            fi
            ;;
        mode)
            [ "$COMP_CWORD" -eq 2 ] && COMPREPLY=( $(compgen -W "{_words(MODES)}" -- "$cur") )
            ;;
        env)
            [ "$COMP_CWORD" -eq 2 ] && COMPREPLY=( $(compgen -W "{_words(ENV_FORMATS)}" -- "$cur") )
            ;;
        current)
            COMPREPLY=( $(compgen -W "--show-secret -s" -- "$cur") )
            ;;
        list|ls)
            COMPREPLY=( $(compgen -W "--names" -- "$cur") )
            ;;
        completion)
            [ "$COMP_CWORD" -eq 2 ] && COMPREPLY=( $(compgen -W "{_words(COMPLETION_SHELLS)}" -- "$cur") )
            ;;
    esac
    return 0
}}
complete -F _{PROG}_completions {PROG}
"""


def zsh_script() -> str:
    command_specs = "\n".join(
        f"        '{name}:{desc}'"
        for name, desc in (
            ("list", "List all configurations"),
            ("ls", "List all configurations"),
            ("add", "Add a new configuration"),
            ("update", "Update an existing configuration"),
            ("use", "Switch to a configuration"),
            ("start", "Start Claude Code with a configuration"),
            ("safe-start", "Start Claude Code with permission prompts"),
            ("remove", "Remove a configuration"),
            ("rm", "Remove a configuration"),
            ("current", "Show the current configuration"),
            ("mode", "Show or switch the activation mode"),
            ("env", "Print environment variables for a shell"),
            ("edit", "Show the configuration file location"),
            ("completion", "Print a shell completion script"),
        )
    )
    return f"""#compdef {PROG}
# {PROG} zsh completion
# Add to ~/.zshrc:  eval "$({PROG} completion zsh)"
_{PROG}_profiles() {{
    local -a profiles
    profiles=(${{(f)"$({PROG} list --names 2>/dev/null)"}})
    _describe 'configuration' profiles
}}

_{PROG}() {{
    local -a commands
    commands=(
{command_specs}
    )

    if (( CURRENT == 2 )); then
        _describe 'command' commands
        return
    fi

    case "$words[2]" in
        {'|'.join(PROFILE_COMMANDS)})
            if (( CURRENT == 3 )); then
                _{PROG}_profiles
            elif [[ "$words[2]" == use ]]; then
                _values 'option' '--permanent' '-p'
            fi
            ;;
        mode)
            (( CURRENT == 3 )) && _values 'mode' {_words(MODES)}
            ;;
        env)
            (( CURRENT == 3 )) && _values 'format' {_words(ENV_FORMATS)}
            ;;
        current)
            _values 'option' '--show-secret' '-s'
            ;;
        list|ls)
            _values 'option' '--names'
            ;;
        completion)
            (( CURRENT == 3 )) && _values 'shell' {_words(COMPLETION_SHELLS)}
            ;;
    esac
}}

compdef _{PROG} {PROG}
"""


def fish_script() -> str:
    lines = [
        f"# {PROG} fish completion",
        f"# Add to ~/.config/fish/config.fish:  {PROG} completion fish | source",
        f"complete -c {PROG} -f",
        f"complete -c {PROG} -n '__fish_use_subcommand' -a '{_words(COMMANDS)}'",
        (
            f"complete -c {PROG} -n '__fish_seen_subcommand_from "
            f"{_words(PROFILE_COMMANDS)}' -a '({PROG} list --names 2>/dev/null)'"
        ),
        f"complete -c {PROG} -n '__fish_seen_subcommand_from use' -s p -l permanent",
        f"complete -c {PROG} -n '__fish_seen_subcommand_from mode' -a '{_words(MODES)}'",
        f"complete -c {PROG} -n '__fish_seen_subcommand_from env' -a '{_words(ENV_FORMATS)}'",
        f"complete -c {PROG} -n '__fish_seen_subcommand_from current' -s s -l show-secret",
        f"complete -c {PROG} -n '__fish_seen_subcommand_from list ls' -l names",
        (
            f"complete -c {PROG} -n '__fish_seen_subcommand_from completion' "
            f"-a '{_words(COMPLETION_SHELLS)}'"
        ),
    ]
    return "\n".join(lines) + "\n"


def _ps_list(items) -> str:
    return ", ".join(f"'{item}'" for item in items)


def powershell_script() -> str:
    return f"""# {PROG} PowerShell completion
# Add to your $PROFILE:  {PROG} completion pwsh | Out-String | Invoke-Expression
Register-ArgumentCompleter -Native -CommandName {PROG} -ScriptBlock {{
    param($wordToComplete, $commandAst, $cursorPosition)
    $tokens = @($commandAst.CommandElements | ForEach-Object {{ $_.ToString() }})
    $position = $tokens.Count
    if ($wordToComplete -ne '') {{ $position -= 1 }}

    $candidates = @()
    if ($position -le 1) {{
        $candidates = @({_ps_list(COMMANDS)})
    }} else {{
        $command = $tokens[1]
        if (@({_ps_list(PROFILE_COMMANDS)}) -contains $command) {{
            if ($position -eq 2) {{
                $candidates = @(& {PROG} list --names 2>$null)
            }} elseif ($command -eq 'use') {{
                $candidates = @('--permanent', '-p')
            }}
        }} elseif ($command -eq 'mode' -and $position -eq 2) {{
            $candidates = @({_ps_list(MODES)})
        }} elseif ($command -eq 'env' -and $position -eq 2) {{
            $candidates = @({_ps_list(ENV_FORMATS)})
        }} elseif ($command -eq 'current') {{
            $candidates = @('--show-secret', '-s')
        }} elseif ($command -eq 'list' -or $command -eq 'ls') {{
            $candidates = @('--names')
        }} elseif ($command -eq 'completion' -and $position -eq 2) {{
            $candidates = @({_ps_list(COMPLETION_SHELLS)})
        }}
    }}

    $candidates | Where-Object {{ $_ -like "$wordToComplete*" }} | ForEach-Object {{
        [System.Management.Automation.CompletionResult]::new($_, $_, 'ParameterValue', $_)
    }}
}}
"""


_SCRIPTS = {
    "bash": bash_script,
    "zsh": zsh_script,
    "fish": fish_script,
    "powershell": powershell_script,
    "pwsh": powershell_script,
}


def print_completion(ctx: Context, shell: str) -> int:
    """Print the completion script for ``shell``."""
    builder = _SCRIPTS.get((shell or "").lower())
    if builder is None:
        raise UserInputError(
            f"Unsupported shell: {shell}" if shell else "Missing shell name",
            f"Supported shells: {', '.join(COMPLETION_SHELLS)}",
            f"Usage: {PROG} completion <shell>",
        )
    print(builder(), end="")
    return 0


__all__ = [
    "COMMANDS",
    "COMPLETION_SHELLS",
    "bash_script",
    "zsh_script",
    "fish_script",
    "powershell_script",
    "print_completion",
]
