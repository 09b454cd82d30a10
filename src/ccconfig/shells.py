"""Shell dispatch table and detection.

Every shell-specific behavior (quoting, export syntax, startup file location,
one-line activation command) lives in a single :class:`ShellSpec` entry of
``SHELLS``. ``ENV_FORMATS`` maps the format names accepted by
``ccconfig env`` onto the same entries, plus the flat ``dotenv`` format.
"""

from __future__ import annotations
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional

from .defaults import PROG
from .escaping import escape_env_value, fish_quote, posix_quote, powershell_quote


@dataclass(frozen=True)
class ShellSpec:
    """Everything ccconfig needs to know about one shell family."""

    name: str
    label: str
    quote: Callable[[str], str]
    export_template: str
    config_path: Callable[[Path, str], Path]
    env_format: str
    activation: str

    def export_line(self, key: str, value: object) -> str:
        rendered = "" if value is None else str(value)
        return self.export_template.format(key=key, value=self.quote(rendered))


def _bash_rc(home: Path, platform: str) -> Path:
    # macOS terminals start login shells, which read .bash_profile.
    if platform == "darwin":
        profile = home / ".bash_profile"
        bashrc = home / ".bashrc"
        if profile.exists() or not bashrc.exists():
            return profile
        return bashrc
    return home / ".bashrc"


def _zsh_rc(home: Path, platform: str) -> Path:
    return home / ".zshrc"


def _fish_config(home: Path, platform: str) -> Path:
    return home / ".config" / "fish" / "config.fish"


def _powershell_profile(home: Path, platform: str) -> Path:
    if platform.startswith("win"):
        return home / "Documents" / "PowerShell" / "Microsoft.PowerShell_profile.ps1"
    return home / ".config" / "powershell" / "Microsoft.PowerShell_profile.ps1"


_POSIX_ACTIVATION = f'eval "$({PROG} env bash)"'

SHELLS: Dict[str, ShellSpec] = {
    "bash": ShellSpec(
        name="bash",
        label="bash",
        quote=posix_quote,
        export_template="export {key}={value}",
        config_path=_bash_rc,
        env_format="bash",
        activation=_POSIX_ACTIVATION,
    ),
    "zsh": ShellSpec(
        name="zsh",
        label="zsh",
        quote=posix_quote,
        export_template="export {key}={value}",
        config_path=_zsh_rc,
        env_format="zsh",
        activation=_POSIX_ACTIVATION,
    ),
    "fish": ShellSpec(
        name="fish",
        label="fish",
        quote=fish_quote,
        export_template="set -gx {key} {value}",
        config_path=_fish_config,
        env_format="fish",
        activation=f"{PROG} env fish | source",
    ),
    "powershell": ShellSpec(
        name="powershell",
        label="PowerShell",
        quote=powershell_quote,
        export_template="$env:{key}={value}",
        config_path=_powershell_profile,
        env_format="pwsh",
        activation=f"{PROG} env pwsh | iex",
    ),
}

SHELL_ALIASES: Dict[str, str] = {
    "bash": "bash",
    "sh": "bash",
    "zsh": "zsh",
    "fish": "fish",
    "powershell": "powershell",
    "pwsh": "powershell",
}

DOTENV = "dotenv"
ENV_FORMATS: List[str] = ["bash", "zsh", "sh", "fish", "powershell", "pwsh", DOTENV]

# Generic activation hints shown after ``use`` in env mode.
ACTIVATION_HINTS = [
    (_POSIX_ACTIVATION, "# Bash/Zsh"),
    (SHELLS["fish"].activation, "# Fish"),
    (SHELLS["powershell"].activation, "# PowerShell"),
]


def shell_for(name: str) -> Optional[ShellSpec]:
    """Return the :class:`ShellSpec` for a shell or format alias (``sh``, ``pwsh``, ...)."""
    key = SHELL_ALIASES.get((name or "").lower())
    return SHELLS[key] if key else None


def format_env_line(fmt: str, key: str, value: object) -> str:
    """Render one variable in ``fmt`` (any of ``ENV_FORMATS``)."""
    if fmt == DOTENV:
        rendered = "" if value is None else str(value)
        return f"{key}={escape_env_value(rendered)}"
    spec = shell_for(fmt)
    if spec is None:
        raise KeyError(fmt)
    return spec.export_line(key, value)


def detect_shell(
    environ: Optional[Mapping[str, str]] = None, platform: Optional[str] = None
) -> Optional[ShellSpec]:
    """Guess the user's interactive shell from environment hints.

    Precedence: fish hints, zsh hints, PowerShell hints, ``bash`` in
    ``$SHELL``, then (Windows only) a ``ComSpec`` pointing at PowerShell.
    Returns ``None`` when nothing matches; callers must not guess.
    """
    env = os.environ if environ is None else environ
    platform = sys.platform if platform is None else platform
    shell_path = (env.get("SHELL") or "").lower()

    if env.get("FISH_VERSION") or "fish" in shell_path:
        return SHELLS["fish"]
    if env.get("ZSH_NAME") or env.get("ZSH_VERSION") or "zsh" in shell_path:
        return SHELLS["zsh"]
    if (
        env.get("POWERSHELL_DISTRIBUTION_CHANNEL")
        or "pwsh" in shell_path
        or "powershell" in shell_path
    ):
        return SHELLS["powershell"]
    if "bash" in shell_path:
        return SHELLS["bash"]
    if platform.startswith("win"):
        comspec = (env.get("ComSpec") or env.get("COMSPEC") or "").lower()
        if "powershell" in comspec:
            return SHELLS["powershell"]
    return None


def supported_shell_labels() -> str:
    return ", ".join(spec.label for spec in SHELLS.values())


__all__ = [
    "ShellSpec",
    "SHELLS",
    "SHELL_ALIASES",
    "ENV_FORMATS",
    "DOTENV",
    "ACTIVATION_HINTS",
    "shell_for",
    "format_env_line",
    "detect_shell",
    "supported_shell_labels",
]
