"""Console UI helpers (color, messages, and secret masking).

This module centralizes tiny, dependency‑free helpers for terminal output:
 - ANSI color/style codes gated by a conservative capability check
 - Convenience printers for info/ok/warn/error with consistent prefixes
 - Masking of secret values for display

Design goals:
 - No third‑party dependencies; safe to import anywhere
 - Never raise on capability checks
 - Respect ``NO_COLOR`` and only emit ANSI when the target stream is a TTY
 - Status output goes to stdout; warnings and errors go to stderr so that
   commands like ``ccconfig env`` stay safe to capture
"""

from __future__ import annotations
import os
import sys
from typing import Optional, TextIO

from .defaults import MASK_PREFIX

# ANSI color/style codes (used only when supports_color() returns True)
RESET = "\033[0m"
BOLD = "\033[1m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"


def supports_color(stream: Optional[TextIO] = None) -> bool:
    """Return True when ANSI colors are likely supported on ``stream``.

    Honors ``NO_COLOR`` to disable color globally and requires the stream
    (``sys.stdout`` by default) to be a TTY. Any errors during detection
    result in ``False``.
    """
    try:
        if os.environ.get("NO_COLOR"):
            return False
        stream = stream if stream is not None else sys.stdout
        return bool(getattr(stream, "isatty", lambda: False)())
    except Exception:
        return False


def c(s: str, color: str, stream: Optional[TextIO] = None) -> str:
    """Conditionally colorize a string for ``stream`` (stdout by default)."""
    return f"{color}{s}{RESET}" if supports_color(stream) else s


def mask(value: Optional[str], show: bool = False) -> str:
    """Return ``value`` truncated for display.

    Values longer than ``MASK_PREFIX`` characters are cut to that prefix and
    suffixed with ``...``; shorter values are shown in full. ``show`` disables
    masking entirely.
    """
    if value is None:
        return ""
    text = str(value)
    if show or len(text) <= MASK_PREFIX:
        return text
    return text[:MASK_PREFIX] + "..."


def info(msg: str) -> None:
    """Print an informational message prefixed with "ℹ"."""
    print(c("ℹ ", BLUE) + msg)


def ok(msg: str) -> None:
    """Print a success message prefixed with "✓"."""
    print(c("✓ ", GREEN) + msg)


def warn(msg: str) -> None:
    """Print a warning message prefixed with "!" to stderr."""
    print(c("! ", YELLOW, sys.stderr) + msg, file=sys.stderr)


def err(msg: str) -> None:
    """Print an error message prefixed with "✗" to stderr."""
    print(c("✗ ", RED, sys.stderr) + msg, file=sys.stderr)


def hint(msg: str) -> None:
    """Print an indented follow-up line under an error, to stderr."""
    print("  " + msg, file=sys.stderr)


__all__ = [
    "supports_color",
    "c",
    "mask",
    "info",
    "ok",
    "warn",
    "err",
    "hint",
    "RESET",
    "BOLD",
    "RED",
    "GREEN",
    "YELLOW",
    "BLUE",
]
