"""Per-invocation context handed to every command handler."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from .prompts import Reader, safe_input, is_interactive
from .storage import FileStorage, Storage, StoragePaths


@dataclass
class Context:
    """Storage plus the bits of the outside world handlers look at.

    ``environ`` is the live process environment (shell detection, the
    ``current`` report, the child environment for ``start``); ``home`` is
    where shell startup files live; ``reader`` supplies prompt answers.
    """

    storage: Storage
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)
    home: Path = field(default_factory=Path.home)
    platform: str = sys.platform
    interactive: bool = False
    reader: Reader = safe_input

    @classmethod
    def from_process(cls, storage: Optional[Storage] = None) -> "Context":
        environ = os.environ
        return cls(
            storage=storage or FileStorage(StoragePaths.from_env(environ)),
            environ=environ,
            home=Path.home(),
            platform=sys.platform,
            interactive=is_interactive(),
            reader=safe_input,
        )


__all__ = ["Context"]
