"""Status and output commands: current, mode, env, edit."""

from __future__ import annotations

import os
from typing import Any, Mapping, Optional

from ..context import Context
from ..defaults import (
    BASE_URL_KEY,
    CREDENTIAL_KEYS,
    MODE_ENV,
    MODE_SETTINGS,
    MODEL_KEYS,
    MODES,
    PROG,
)
from ..errors import UserInputError
from ..logging_utils import log_event
from ..resolve import active_env_vars, current_profile_name, settings_env
from ..shells import ENV_FORMATS, format_env_line
from ..ui import BOLD, c, mask, ok

_RULE = "═" * 43
_THIN_RULE = "─" * 43


def _print_source(env: Optional[Mapping[str, Any]], show_secret: bool) -> None:
    if not env or not any(env.get(k) for k in (BASE_URL_KEY,) + CREDENTIAL_KEYS):
        print("  (not configured)")
        return
    print(f"  {BASE_URL_KEY + ':':<28}{env.get(BASE_URL_KEY) or '(not set)'}")
    cred_key = next((k for k in CREDENTIAL_KEYS if env.get(k)), CREDENTIAL_KEYS[0])
    cred = env.get(cred_key)
    shown = mask(str(cred), show=show_secret) if cred else "(not set)"
    print(f"  {cred_key + ':':<28}{shown}")
    for key in MODEL_KEYS:
        if env.get(key):
            print(f"  {key + ':':<28}{env[key]}")


def show_current(ctx: Context, show_secret: bool = False) -> int:
    """Report the active profile and what each of the three sources holds."""
    storage = ctx.storage
    mode = storage.get_mode()
    current = current_profile_name(storage)

    print(_RULE)
    print(c("Claude Code Configuration Status", BOLD))
    print(_RULE)
    print()
    print(f"Current Mode: {mode}")
    print(f"Active Configuration: {current or '(no matching configuration)'}")
    print()

    print(f"[1] Claude settings ({storage.paths.claude_settings}):")
    _print_source(settings_env(storage.load_native_settings()), show_secret)
    print()
    print(f"[2] Environment variables file ({storage.paths.snapshot}):")
    _print_source(storage.read_snapshot(), show_secret)
    print()
    print("[3] Current process environment variables:")
    process_env = {
        k: ctx.environ.get(k)
        for k in (BASE_URL_KEY,) + CREDENTIAL_KEYS + MODEL_KEYS
        if ctx.environ.get(k)
    }
    _print_source(process_env, show_secret)
    print()

    print(_THIN_RULE)
    print("Notes:")
    print("  • settings mode: Claude Code reads from [1]")
    print("  • env mode: Claude Code reads from [3] (loaded from [2])")
    if not show_secret:
        print()
        print("Use --show-secret to display full tokens")
    print(_RULE)
    return 0


_MODE_DESCRIPTIONS = {
    MODE_SETTINGS: (
        "SETTINGS mode:",
        "  - Directly modifies the Claude settings file",
        "  - No shell configuration needed",
        "  - Restart Claude Code to take effect",
    ),
    MODE_ENV: (
        "ENV mode:",
        "  - Uses an environment variable file",
        "  - Needs your shell to load it (see ccconfig use output)",
        "  - Works across shells; apply instantly with ccconfig env",
    ),
}


def set_or_show_mode(ctx: Context, value: Optional[str] = None) -> int:
    """Print the current mode, or switch to ``value``."""
    storage = ctx.storage
    if value is None:
        current = storage.get_mode()
        print(f"Current mode: {current}")
        print()
        for line in _MODE_DESCRIPTIONS[current]:
            print(line)
        print()
        other = MODE_ENV if current == MODE_SETTINGS else MODE_SETTINGS
        print(f"Alternative: {other} mode")
        for line in _MODE_DESCRIPTIONS[other][1:]:
            print(line)
        print()
        print("Switch modes:")
        for mode in MODES:
            print(f"  {PROG} mode {mode}")
        return 0

    if value not in MODES:
        raise UserInputError(
            f"Invalid mode '{value}'", f"Available modes: {', '.join(MODES)}"
        )
    old = storage.get_mode()
    storage.set_mode(value)
    log_event("mode_changed", mode=value)
    ok(f"Mode switched: {old} -> {value}")
    print()
    if value == MODE_SETTINGS:
        print("SETTINGS mode enabled")
        print(f"  Next '{PROG} use' will write to {storage.paths.claude_settings}")
    else:
        print("ENV mode enabled")
        print(f"  Next '{PROG} use' will write to {storage.paths.snapshot}")
        print("  Make sure your shell loads it, or apply it with ccconfig env")
    print(f"  Run '{PROG} use <name>' to activate a configuration in the new mode")
    return 0


def print_env(ctx: Context, fmt: str = "bash") -> int:
    """Emit the active variables as shell-loadable lines."""
    if fmt not in ENV_FORMATS:
        raise UserInputError(
            f"Unsupported format: {fmt}",
            f"Supported formats: {', '.join(ENV_FORMATS)}",
        )
    env = active_env_vars(ctx.storage)
    if not env:
        raise UserInputError(
            "No available environment variable configuration found",
            f"Please run {PROG} use <name> to select a configuration first",
        )
    for key, value in env.items():
        print(format_env_line(fmt, key, value))
    return 0


def _default_editor(ctx: Context) -> str:
    editor = ctx.environ.get("VISUAL") or ctx.environ.get("EDITOR")
    if editor:
        return editor
    return "notepad" if os.name == "nt" or ctx.platform.startswith("win") else "vim"


def show_edit(ctx: Context) -> int:
    """Print where the registry lives and how to open it."""
    path = ctx.storage.paths.profiles
    if not ctx.storage.registry_exists():
        raise UserInputError(
            "Configuration file does not exist",
            f"Please add a configuration first: {PROG} add <name>",
        )
    print("Configuration file path:")
    print(f"  {path}")
    print()
    print("Open it with your preferred editor, for example:")
    print(f'  {_default_editor(ctx)} "{path}"')
    return 0


__all__ = ["show_current", "set_or_show_mode", "print_env", "show_edit"]
