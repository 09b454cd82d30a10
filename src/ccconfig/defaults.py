"""Well-known names and defaults (env keys, modes, markers, patterns)."""

from __future__ import annotations
import re
from typing import Tuple

BASE_URL_KEY = "ANTHROPIC_BASE_URL"
AUTH_TOKEN_KEY = "ANTHROPIC_AUTH_TOKEN"
API_KEY_KEY = "ANTHROPIC_API_KEY"
MODEL_KEY = "ANTHROPIC_MODEL"
SMALL_FAST_MODEL_KEY = "ANTHROPIC_SMALL_FAST_MODEL"

# Order matters: credentials are compared in this preference order.
CREDENTIAL_KEYS: Tuple[str, ...] = (AUTH_TOKEN_KEY, API_KEY_KEY)
MODEL_KEYS: Tuple[str, ...] = (MODEL_KEY, SMALL_FAST_MODEL_KEY)
KNOWN_ENV_KEYS: Tuple[str, ...] = (BASE_URL_KEY,) + CREDENTIAL_KEYS + MODEL_KEYS
SENSITIVE_KEYS = frozenset(CREDENTIAL_KEYS)

DEFAULT_BASE_URL = "https://api.anthropic.com"

MODE_SETTINGS = "settings"
MODE_ENV = "env"
MODES: Tuple[str, ...] = (MODE_SETTINGS, MODE_ENV)
DEFAULT_MODE = MODE_ENV

PROFILE_NAME_RE = re.compile(r"^[A-Za-z0-9_-]{1,64}$")
SNAPSHOT_LINE_RE = re.compile(r"^([A-Z_][A-Z0-9_]*)=(.*)$")

MASK_PREFIX = 20

BLOCK_START = "# >>> ccconfig >>>"
BLOCK_END = "# <<< ccconfig <<<"

CLAUDE_BIN = "claude"
SKIP_PERMISSIONS_FLAG = "--dangerously-skip-permissions"
CLAUDE_INSTALL_HINT = "npm install -g @anthropic-ai/claude-code"

PROG = "ccconfig"

__all__ = [
    "BASE_URL_KEY",
    "AUTH_TOKEN_KEY",
    "API_KEY_KEY",
    "MODEL_KEY",
    "SMALL_FAST_MODEL_KEY",
    "CREDENTIAL_KEYS",
    "MODEL_KEYS",
    "KNOWN_ENV_KEYS",
    "SENSITIVE_KEYS",
    "DEFAULT_BASE_URL",
    "MODE_SETTINGS",
    "MODE_ENV",
    "MODES",
    "DEFAULT_MODE",
    "PROFILE_NAME_RE",
    "SNAPSHOT_LINE_RE",
    "MASK_PREFIX",
    "BLOCK_START",
    "BLOCK_END",
    "CLAUDE_BIN",
    "SKIP_PERMISSIONS_FLAG",
    "CLAUDE_INSTALL_HINT",
    "PROG",
]
