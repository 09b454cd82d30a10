"""Helpers shared by several command handlers."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..defaults import PROG, SENSITIVE_KEYS
from ..errors import UserInputError
from ..registry import Profile, is_valid_profile_name
from ..storage import Storage
from ..ui import mask


def check_name(name: Optional[str], command: str) -> str:
    """Validate a profile name given to ``command`` or raise."""
    if not name:
        raise UserInputError(
            "Missing configuration name", f"Usage: {PROG} {command} <name>"
        )
    if not is_valid_profile_name(name):
        raise UserInputError(
            f"Invalid configuration name '{name}'",
            "Use only letters, numbers, hyphens (-) and underscores (_), "
            "at most 64 characters",
        )
    return name


def load_activatable(storage: Storage, name: Optional[str], command: str) -> Profile:
    """Return the named profile if it exists and has a non-empty env."""
    name = check_name(name, command)
    registry = storage.load_registry()
    if not registry:
        raise UserInputError(
            "No configurations found",
            f"Please add a configuration first: {PROG} add <name>",
        )
    profile = registry.get(name)
    if profile is None:
        raise UserInputError(
            f"Configuration '{name}' does not exist",
            f"Run {PROG} list to see available configurations",
        )
    if not profile.env:
        raise UserInputError(
            f"Configuration '{name}' has empty environment variables",
            f"Run {PROG} update {name} or {PROG} edit to add them",
        )
    return profile


_SECRET_SUFFIXES = ("_KEY", "_TOKEN", "_SECRET", "_PASSWORD")


def is_sensitive(key: str) -> bool:
    """Known credentials plus hand-added keys that look like secrets."""
    return key in SENSITIVE_KEYS or key.upper().endswith(_SECRET_SUFFIXES)


def display_value(key: str, value: Any, show_secret: bool = False) -> str:
    if value is None or value == "":
        return "(not set)"
    if is_sensitive(key):
        return mask(str(value), show=show_secret)
    return str(value)


def print_env(env: Mapping[str, Any], indent: str = "  ", show_secret: bool = False) -> None:
    """Print ``KEY: value`` lines with credentials masked."""
    for key, value in env.items():
        print(f"{indent}{key}: {display_value(key, value, show_secret)}")


__all__ = [
    "check_name",
    "load_activatable",
    "is_sensitive",
    "display_value",
    "print_env",
]
