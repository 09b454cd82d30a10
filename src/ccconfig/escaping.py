"""String escaping for the snapshot file and for shell dialects.

Snapshot values use a tiny backslash scheme (``\\\\``, ``\\n``, ``\\r``,
``\\t``) so that any value fits on one ``KEY=value`` line. Shell quoting
produces literals that each shell reads back as the exact original value.
"""

from __future__ import annotations
import re

_SNAPSHOT_ESCAPES = {"\\": "\\\\", "\n": "\\n", "\r": "\\r", "\t": "\\t"}
_SNAPSHOT_UNESCAPES = {"\\": "\\", "n": "\n", "r": "\r", "t": "\t"}
_ESCAPE_RE = re.compile(r"[\\\n\r\t]")
_UNESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


def escape_env_value(value: str) -> str:
    """Escape backslash, newline, carriage return and tab for a snapshot line."""
    return _ESCAPE_RE.sub(lambda m: _SNAPSHOT_ESCAPES[m.group(0)], value)


def unescape_env_value(value: str) -> str:
    """Reverse :func:`escape_env_value` in a single left-to-right pass.

    Unknown escape sequences are kept verbatim, and so is a lone trailing
    backslash.
    """
    return _UNESCAPE_RE.sub(
        lambda m: _SNAPSHOT_UNESCAPES.get(m.group(1), m.group(0)), value
    )


def posix_quote(value: str) -> str:
    """Single-quote for sh/bash/zsh; embedded quotes become ``'\\''``."""
    return "'" + value.replace("'", "'\\''") + "'"


def fish_quote(value: str) -> str:
    """Double-quote for fish, escaping backslash, double quote and dollar."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$")
    return '"' + escaped + '"'


def powershell_quote(value: str) -> str:
    """Single-quote for PowerShell; embedded quotes are doubled."""
    return "'" + value.replace("'", "''") + "'"


__all__ = [
    "escape_env_value",
    "unescape_env_value",
    "posix_quote",
    "fish_quote",
    "powershell_quote",
]
