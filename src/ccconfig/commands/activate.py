"""Activation commands: use, start, safe-start."""

from __future__ import annotations

from typing import Optional, Sequence

from ..context import Context
from ..defaults import KNOWN_ENV_KEYS, MODE_SETTINGS, PROG, SKIP_PERMISSIONS_FLAG
from ..launcher import launch_claude
from ..logging_utils import log_event
from ..shells import ACTIVATION_HINTS, detect_shell
from ..ui import info, ok
from ._common import load_activatable, print_env
from .permanent import write_permanent


def _normalize(command: str) -> str:
    return " ".join(command.split())


def _print_activation_hints(ctx: Context, name: str) -> None:
    detected = detect_shell(ctx.environ, ctx.platform)
    print("Apply immediately in current shell (optional):")
    suggested = ""
    if detected:
        suggested = _normalize(detected.activation)
        print(f"  {detected.activation}  # Detected {detected.label}")
    for command, note in ACTIVATION_HINTS:
        if _normalize(command) == suggested:
            continue
        print(f"  {command}  {note}")
    print()
    print(f"Or write it to your shell startup file: {PROG} use {name} --permanent")


def use_profile(ctx: Context, name: Optional[str], permanent: bool = False) -> int:
    """Activate ``name`` through the channel selected by the current mode."""
    storage = ctx.storage
    profile = load_activatable(storage, name, "use")
    env = profile.child_env()
    mode = storage.get_mode()

    if mode == MODE_SETTINGS:
        settings = storage.load_native_settings(strict=True)
        current = settings.get("env")
        merged = dict(current) if isinstance(current, dict) else {}
        # Drop every managed key so keys from the previous profile can't linger.
        for key in KNOWN_ENV_KEYS:
            merged.pop(key, None)
        merged.update(env)
        settings["env"] = merged
        storage.save_native_settings(settings)
        log_event("profile_activated", profile=profile.name, mode=mode)

        ok(f"Switched to configuration: {profile.name} (settings mode)")
        print("  Environment variables:")
        print_env(env, indent="    ")
        print()
        print(f"Configuration written to {storage.paths.claude_settings}")
        print("Restart Claude Code to make configuration take effect")
        if permanent:
            print()
            info(
                "--permanent is not needed in settings mode; "
                "settings.json changes already persist"
            )
        return 0

    storage.write_snapshot(env)
    log_event("profile_activated", profile=profile.name, mode=mode)
    ok(f"Switched to configuration: {profile.name} (env mode)")
    print("  Environment variables:")
    print_env(env, indent="    ")
    print()
    print(f"Environment variable file updated: {storage.paths.snapshot}")
    if permanent:
        return write_permanent(ctx, profile)
    print()
    _print_activation_hints(ctx, profile.name)
    return 0


def start_profile(
    ctx: Context,
    name: Optional[str],
    extra_args: Sequence[str] = (),
    safe: bool = False,
) -> int:
    """Launch Claude Code with ``name``'s variables; returns its exit code.

    ``start`` passes ``--dangerously-skip-permissions`` ahead of the user's
    arguments; ``safe-start`` passes the arguments through untouched.
    """
    profile = load_activatable(ctx.storage, name, "safe-start" if safe else "start")
    info(f"Starting Claude Code with configuration: {profile.name}")
    if not safe:
        info(f"Permission prompts disabled ({SKIP_PERMISSIONS_FLAG})")
    return launch_claude(
        profile.env,
        extra_args,
        skip_permissions=not safe,
        base_env=ctx.environ,
    )


__all__ = ["use_profile", "start_profile"]
