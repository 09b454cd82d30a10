"""Prompt helpers for interactive commands.

``ask`` is the one primitive: show a question, read a line, fall back to a
default on an empty answer. The line reader is a parameter so scripted input
can drive a whole command in tests; by default it is :func:`safe_input`,
which wraps :func:`input`.
"""

from __future__ import annotations

import sys
from typing import Callable, Optional

from .errors import EnvironmentSetupError

Reader = Callable[[str], str]


def safe_input(prompt: str) -> str:
    """input() that propagates Ctrl-C so callers can decide behavior."""
    try:
        return input(prompt)
    except KeyboardInterrupt:
        print()
        raise


def is_null_input(s: str) -> bool:
    """Return True when the input represents an explicit null value.

    Accepts the string ``"null"`` (case-insensitive) and ignores surrounding
    whitespace. Used by ``update`` to allow clearing a field.
    """
    return s.strip().lower() == "null"


def is_interactive() -> bool:
    """True when both stdin and stdout are attached to a terminal."""
    try:
        return bool(sys.stdin.isatty() and sys.stdout.isatty())
    except (AttributeError, ValueError):
        return False


def require_interactive(interactive: bool, action: str) -> None:
    if not interactive:
        raise EnvironmentSetupError(
            f"Interactive mode required for {action}",
            "This command must be run in an interactive terminal",
        )


def ask(
    question: str,
    default: str = "",
    reader: Optional[Reader] = None,
    show_default: bool = True,
) -> str:
    """Prompt once; return the trimmed answer or ``default`` when blank.

    ``show_default`` controls whether the default is echoed in the prompt
    (``Question (default): ``); secrets pass a masked rendering through the
    question text instead.
    """
    reader = reader or safe_input
    suffix = f" ({default})" if default and show_default else ""
    answer = reader(f"{question}{suffix}: ").strip()
    return answer if answer else default.strip()


def confirm_explicit(question: str, reader: Optional[Reader] = None) -> bool:
    """Only an explicit ``yes``/``y`` confirms; anything else declines."""
    reader = reader or safe_input
    answer = reader(f"{question} (yes/no): ").strip().lower()
    return answer in ("y", "yes")


__all__ = [
    "Reader",
    "safe_input",
    "is_null_input",
    "is_interactive",
    "require_interactive",
    "ask",
    "confirm_explicit",
]
