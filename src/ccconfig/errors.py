"""Error types raised by command handlers.

Handlers raise; ``main_flow.main`` renders the message and hints once on
stderr and turns the failure into exit status 1.
"""

from __future__ import annotations
from typing import Tuple


class CcconfigError(Exception):
    """A reported failure with optional corrective hints."""

    exit_code = 1

    def __init__(self, message: str, *hints: str) -> None:
        super().__init__(message)
        self.message = message
        self.hints: Tuple[str, ...] = tuple(h for h in hints if h)


class UserInputError(CcconfigError):
    """Missing or invalid names, unknown commands/formats/modes, etc."""


class EnvironmentSetupError(CcconfigError):
    """Non-interactive terminal, missing binary, undetectable shell."""


class StorageError(CcconfigError):
    """Unreadable or corrupt registry/settings, failed writes."""


class LaunchError(CcconfigError):
    """The external client could not be spawned."""


__all__ = [
    "CcconfigError",
    "UserInputError",
    "EnvironmentSetupError",
    "StorageError",
    "LaunchError",
]
