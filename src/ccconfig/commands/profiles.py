"""Profile CRUD commands: list, add, update, remove."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..context import Context
from ..defaults import (
    API_KEY_KEY,
    AUTH_TOKEN_KEY,
    BASE_URL_KEY,
    DEFAULT_BASE_URL,
    MODE_SETTINGS,
    MODEL_KEY,
    PROG,
    SMALL_FAST_MODEL_KEY,
)
from ..errors import UserInputError
from ..logging_utils import log_event
from ..prompts import ask, is_null_input, require_interactive
from ..registry import Profile, Registry
from ..resolve import current_profile_name, match_profile, settings_env
from ..ui import GREEN, c, info, mask, ok
from ._common import check_name, is_sensitive, print_env


@dataclass(frozen=True)
class _Field:
    key: str
    optional: bool = False
    default: str = ""
    label: str = ""


# Prompt order for add/update. Optional fields are dropped when left blank;
# required ones are stored as "" so the key set stays predictable.
_FIELDS: Tuple[_Field, ...] = (
    _Field(BASE_URL_KEY, default=DEFAULT_BASE_URL),
    _Field(AUTH_TOKEN_KEY),
    _Field(API_KEY_KEY),
    _Field(MODEL_KEY, optional=True, label="Model"),
    _Field(SMALL_FAST_MODEL_KEY, optional=True, label="Small/fast model"),
)


def _prompt_field(ctx: Context, fld: _Field, current: str, updating: bool) -> Optional[str]:
    """Ask for one value; ``None`` means the user typed ``null`` to clear it."""
    default = current if updating else (current or fld.default)
    question = f"Please enter {fld.key}"
    if fld.optional:
        question += " (optional)"
    elif not updating:
        question += " (can be empty)"
    if default:
        shown = mask(default) if is_sensitive(fld.key) else default
        question += f" [{shown}]"
    answer = ask(question, default, reader=ctx.reader, show_default=False)
    if updating and is_null_input(answer):
        return None
    return answer


def _prompt_profile(
    ctx: Context, env: Dict[str, str], description: str, updating: bool
) -> Tuple[Dict[str, str], str]:
    """Collect env values and description, preserving hand-added keys."""
    new_env = dict(env)
    for fld in _FIELDS:
        value = _prompt_field(ctx, fld, str(env.get(fld.key) or ""), updating)
        if fld.optional and not value:
            new_env.pop(fld.key, None)
        else:
            new_env[fld.key] = value or ""
    desc = ask(
        "Please enter configuration description (optional)"
        + (f" [{description}]" if description else ""),
        description,
        reader=ctx.reader,
        show_default=False,
    )
    if updating and is_null_input(desc):
        desc = ""
    return new_env, desc


def _print_saved(ctx: Context, profile: Profile) -> None:
    print()
    print("Saved environment variables:")
    print_env(profile.env)
    if profile.description:
        print(f"  Description: {profile.description}")
    print()
    print("This information has been saved to:")
    print(f"  {ctx.storage.paths.profiles}")
    print(f"You can edit this file directly to further customize the profile ({PROG} edit)")


def list_profiles(ctx: Context, names_only: bool = False) -> int:
    """Print stored profiles with the active one marked."""
    storage = ctx.storage
    registry = storage.load_registry()

    if names_only:
        for profile in registry:
            print(profile.name)
        return 0

    if not registry:
        print("No configurations found.")
        print()
        print("Add your first configuration:")
        print(f"  {PROG} add work")
        print()
        print("The command will guide you through configuration step by step.")
        return 0

    mode = storage.get_mode()
    native = settings_env(storage.load_native_settings())
    source = native if mode == MODE_SETTINGS else storage.read_snapshot()
    current = match_profile(registry, source)
    print("Available configurations:")
    print()
    for profile in registry:
        marker = c(" ← current", GREEN) if profile.name == current else ""
        print(f"  {profile.name}{marker}")
        if profile.env.get(BASE_URL_KEY):
            print(f"    URL: {profile.env[BASE_URL_KEY]}")
        for fld in _FIELDS:
            if fld.label and profile.env.get(fld.key):
                print(f"    {fld.label}: {profile.env[fld.key]}")
        if profile.description:
            print(f"    Description: {profile.description}")
        print()

    if current:
        print(f"Currently active: {current} ({mode} mode)")
        return 0
    if native and native.get(BASE_URL_KEY):
        print("Currently using custom configuration (not in configuration list)")
        print(f"  URL: {native[BASE_URL_KEY]}")
    else:
        print("Claude Code environment variables not configured yet")
        print(f"Activate one with: {PROG} use <name>")
    return 0


def add_profile(ctx: Context, name: Optional[str] = None) -> int:
    """Interactively create a new profile."""
    require_interactive(ctx.interactive, "adding configurations")
    storage = ctx.storage
    if not storage.registry_exists():
        storage.save_registry(Registry())
        ok(f"Configuration file created: {storage.paths.profiles}")
        print()

    if not name:
        name = ask("Please enter configuration name (e.g., work)", reader=ctx.reader)
    name = check_name(name, "add")
    registry = storage.load_registry()
    if name in registry:
        raise UserInputError(
            f"Configuration '{name}' already exists",
            f"To change it, run: {PROG} update {name}",
        )

    env, description = _prompt_profile(ctx, {}, "", updating=False)
    profile = Profile(name=name, env=env, description=description)
    registry.put(profile)
    storage.save_registry(registry)
    log_event("profile_added", profile=name)

    ok(f"Configuration '{name}' added")
    _print_saved(ctx, profile)
    print()
    print("Run the following command to activate:")
    print(f"  {PROG} use {name}")
    print(f"Or launch Claude Code with it directly: {PROG} start {name}")
    return 0


def update_profile(ctx: Context, name: Optional[str] = None) -> int:
    """Interactively edit an existing profile, keeping values on Enter."""
    require_interactive(ctx.interactive, "updating configurations")
    storage = ctx.storage
    if not name:
        name = ask("Please enter configuration name to update", reader=ctx.reader)
    name = check_name(name, "update")
    registry = storage.load_registry()
    profile = registry.get(name)
    if profile is None:
        raise UserInputError(
            f"Configuration '{name}' does not exist",
            f"To create it, run: {PROG} add {name}",
        )

    info(f"Updating configuration '{name}'")
    print("Press Enter to keep the current value, or type 'null' to clear it.")
    print()
    env, description = _prompt_profile(ctx, profile.env, profile.description, updating=True)
    profile.env = env
    profile.description = description
    storage.save_registry(registry)
    log_event("profile_updated", profile=name)

    ok(f"Configuration '{name}' updated")
    _print_saved(ctx, profile)
    if current_profile_name(storage, registry) != name:
        print()
        print(f"Run {PROG} use {name} to apply the changes")
    return 0


def remove_profile(ctx: Context, name: Optional[str] = None) -> int:
    """Delete a profile immediately (no confirmation)."""
    name = check_name(name, "remove")
    storage = ctx.storage
    if not storage.registry_exists():
        raise UserInputError(
            "Configuration file does not exist",
            f"Please add a configuration first: {PROG} add <name>",
        )
    registry = storage.load_registry()
    if name not in registry:
        raise UserInputError(
            f"Configuration '{name}' does not exist",
            f"Run {PROG} list to see available configurations",
        )
    was_current = current_profile_name(storage, registry) == name
    registry.remove(name)
    storage.save_registry(registry)
    log_event("profile_removed", profile=name)
    ok(f"Configuration '{name}' removed")
    if was_current:
        info(
            "It was the active configuration; its variables stay in effect "
            f"until you run {PROG} use <name>"
        )
    return 0


__all__ = ["list_profiles", "add_profile", "update_profile", "remove_profile"]
