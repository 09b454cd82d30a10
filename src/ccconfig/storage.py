"""Storage port for the registry, native settings, snapshot and mode files.

Command handlers only talk to a :class:`Storage`. Two implementations share
all parsing and defaulting rules through :class:`TextStorage`:

 - :class:`FileStorage` reads and writes the real files (atomic, owner-only)
 - :class:`MemoryStorage` keeps the same texts in a dict, for tests

Rules common to both:
 - A missing file is a normal first-run state and yields a default (empty
   registry, ``{}`` settings, ``None`` snapshot, ``env`` mode).
 - A corrupt registry raises :class:`StorageError` and is never rewritten.
 - Corrupt native settings degrade to a warning and ``{}`` unless the caller
   asks for ``strict`` loading because it intends to write the document back.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol

from .defaults import DEFAULT_MODE, MODE_SETTINGS, MODES, SNAPSHOT_LINE_RE
from .errors import StorageError
from .escaping import escape_env_value, unescape_env_value
from .io_safe import secure_write_text
from .logging_utils import log_event
from .registry import Registry, RegistryFormatError
from .ui import warn

logger = logging.getLogger(__name__)

REGISTRY = "registry"
SETTINGS = "settings"
SNAPSHOT = "snapshot"
MODE = "mode"


@dataclass(frozen=True)
class StoragePaths:
    """Resolved locations of every file ccconfig reads or writes."""

    config_dir: Path
    profiles: Path
    snapshot: Path
    mode: Path
    claude_settings: Path

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, home: Optional[Path] = None
    ) -> "StoragePaths":
        """Default locations, honoring ``CCCONFIG_HOME`` and ``CLAUDE_CONFIG_DIR``."""
        env = os.environ if environ is None else environ
        home = Path.home() if home is None else home
        config_dir = Path(env.get("CCCONFIG_HOME") or home / ".config" / "claude-code")
        claude_dir = Path(env.get("CLAUDE_CONFIG_DIR") or home / ".claude")
        return cls(
            config_dir=config_dir,
            profiles=config_dir / "profiles.json",
            snapshot=config_dir / "current.env",
            mode=config_dir / "mode",
            claude_settings=claude_dir / "settings.json",
        )

    def for_kind(self, kind: str) -> Path:
        return {
            REGISTRY: self.profiles,
            SETTINGS: self.claude_settings,
            SNAPSHOT: self.snapshot,
            MODE: self.mode,
        }[kind]


class Storage(Protocol):
    """What command handlers need from persistent state."""

    paths: StoragePaths

    def registry_exists(self) -> bool: ...

    def load_registry(self) -> Registry: ...

    def save_registry(self, registry: Registry) -> None: ...

    def load_native_settings(self, strict: bool = False) -> Dict[str, Any]: ...

    def save_native_settings(self, doc: Dict[str, Any]) -> None: ...

    def read_snapshot(self) -> Optional[Dict[str, str]]: ...

    def write_snapshot(self, env: Mapping[str, Any]) -> None: ...

    def get_mode(self) -> str: ...

    def set_mode(self, value: str) -> None: ...


def format_snapshot(env: Mapping[str, Any]) -> str:
    """Render ``KEY=escaped_value`` lines with a trailing newline."""
    lines = []
    for key, value in env.items():
        rendered = "" if value is None else str(value)
        lines.append(f"{key}={escape_env_value(rendered)}")
    return "\n".join(lines) + "\n" if lines else ""


def parse_snapshot(text: str) -> Dict[str, str]:
    """Parse snapshot text; malformed lines are skipped silently."""
    env: Dict[str, str] = {}
    for line in text.split("\n"):
        m = SNAPSHOT_LINE_RE.match(line.rstrip("\r"))
        if m:
            env[m.group(1)] = unescape_env_value(m.group(2))
    return env


class TextStorage:
    """Shared semantics; subclasses move raw text in and out."""

    paths: StoragePaths

    def _read_text(self, kind: str) -> Optional[str]:
        """Return the text of ``kind`` or ``None`` when it does not exist."""
        raise NotImplementedError

    def _write_text(self, kind: str, text: str) -> None:
        raise NotImplementedError

    # Registry

    def registry_exists(self) -> bool:
        raise NotImplementedError

    def load_registry(self) -> Registry:
        path = self.paths.profiles
        try:
            text = self._read_text(REGISTRY)
        except (OSError, ValueError) as e:
            raise StorageError(
                f"Unable to read configuration file: {e}",
                f"File: {path}",
            )
        if text is None:
            return Registry()
        try:
            return Registry.from_dict(json.loads(text))
        except (ValueError, RegistryFormatError) as e:
            raise StorageError(
                f"Unable to read configuration file: {e}",
                f"File: {path}",
                "The file was left untouched; fix it by hand (ccconfig edit) and retry.",
            )

    def save_registry(self, registry: Registry) -> None:
        text = json.dumps(registry.to_dict(), indent=2, ensure_ascii=False) + "\n"
        self._save(REGISTRY, text, "Unable to save configuration file")
        log_event("registry_saved", path=str(self.paths.profiles))

    # Native settings

    def load_native_settings(self, strict: bool = False) -> Dict[str, Any]:
        path = self.paths.claude_settings
        try:
            text = self._read_text(SETTINGS)
            if text is None:
                return {}
            data = json.loads(text)
            if not isinstance(data, dict):
                raise ValueError("top-level value is not an object")
            return data
        except (OSError, ValueError) as e:
            if strict:
                raise StorageError(
                    f"Unable to read Claude settings file: {e}",
                    f"File: {path}",
                    "Refusing to overwrite it; fix the file and retry.",
                )
            warn(f"Unable to read Claude settings file {path}: {e}")
            return {}

    def save_native_settings(self, doc: Dict[str, Any]) -> None:
        text = json.dumps(doc, indent=2, ensure_ascii=False) + "\n"
        self._save(SETTINGS, text, "Unable to save Claude settings file")
        log_event("settings_saved", path=str(self.paths.claude_settings))

    # Snapshot

    def read_snapshot(self) -> Optional[Dict[str, str]]:
        try:
            text = self._read_text(SNAPSHOT)
        except (OSError, ValueError) as e:
            logger.debug("Cannot read snapshot %s: %s", self.paths.snapshot, e)
            return None
        if text is None:
            return None
        return parse_snapshot(text)

    def write_snapshot(self, env: Mapping[str, Any]) -> None:
        self._save(SNAPSHOT, format_snapshot(env), "Unable to write environment file")
        log_event("snapshot_written", path=str(self.paths.snapshot))

    # Mode

    def get_mode(self) -> str:
        try:
            text = self._read_text(MODE)
        except (OSError, ValueError) as e:
            logger.debug("Cannot read mode file %s: %s", self.paths.mode, e)
            return DEFAULT_MODE
        if text is not None and text.strip() == MODE_SETTINGS:
            return MODE_SETTINGS
        return DEFAULT_MODE

    def set_mode(self, value: str) -> None:
        if value not in MODES:
            raise ValueError(f"invalid mode: {value!r}")
        self._save(MODE, value + "\n", "Unable to save mode setting")
        log_event("mode_saved", mode=value, path=str(self.paths.mode))

    def _save(self, kind: str, text: str, what: str) -> None:
        try:
            self._write_text(kind, text)
        except OSError as e:
            raise StorageError(f"{what}: {e}", f"File: {self.paths.for_kind(kind)}")


class FileStorage(TextStorage):
    """Storage backed by the real files under ``paths``."""

    def __init__(self, paths: Optional[StoragePaths] = None) -> None:
        self.paths = paths or StoragePaths.from_env()

    def registry_exists(self) -> bool:
        return self.paths.profiles.exists()

    def _read_text(self, kind: str) -> Optional[str]:
        path = self.paths.for_kind(kind)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def _write_text(self, kind: str, text: str) -> None:
        secure_write_text(self.paths.for_kind(kind), text)


class MemoryStorage(TextStorage):
    """In-memory storage with file semantics; ``texts`` maps kind to content."""

    def __init__(
        self,
        paths: Optional[StoragePaths] = None,
        texts: Optional[Dict[str, str]] = None,
    ) -> None:
        self.paths = paths or StoragePaths.from_env({}, home=Path("/home/user"))
        self.texts: Dict[str, str] = dict(texts or {})

    def registry_exists(self) -> bool:
        return REGISTRY in self.texts

    def _read_text(self, kind: str) -> Optional[str]:
        return self.texts.get(kind)

    def _write_text(self, kind: str, text: str) -> None:
        self.texts[kind] = text


__all__ = [
    "StoragePaths",
    "Storage",
    "TextStorage",
    "FileStorage",
    "MemoryStorage",
    "format_snapshot",
    "parse_snapshot",
    "REGISTRY",
    "SETTINGS",
    "SNAPSHOT",
    "MODE",
]
