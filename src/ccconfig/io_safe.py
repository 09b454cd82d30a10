"""Safe I/O helpers (atomic writes and owner-only permissions).

Every file this tool writes may contain credentials, so writes share one
path through here:
 - Parent directories are created on demand, owner-only when created
 - Text is written atomically (temp file, fsync, rename)
 - The final file is restricted to owner read/write on POSIX systems, on
   every write and not just on creation, so a loosened file self-heals
"""

from __future__ import annotations
import os
import tempfile
from pathlib import Path

PRIVATE_DIR_MODE = 0o700
PRIVATE_FILE_MODE = 0o600


def supports_posix_permissions() -> bool:
    return os.name != "nt"


def ensure_private_dir(path: Path) -> None:
    """Create ``path`` (and parents) if missing; new leaf is owner-only."""
    if path.is_dir():
        return
    path.mkdir(parents=True, exist_ok=True)
    if supports_posix_permissions():
        os.chmod(path, PRIVATE_DIR_MODE)


def restrict_permissions(path: Path) -> None:
    """Restrict ``path`` to owner read/write where POSIX modes apply."""
    if supports_posix_permissions():
        os.chmod(path, PRIVATE_FILE_MODE)


def _write_target(path: Path) -> Path:
    # Write through symlinks (e.g. dotfile managers) instead of replacing them.
    return path.resolve() if path.is_symlink() else path


def atomic_write(path: Path, text: str) -> None:
    """Atomically write UTF‑8 text to ``path`` with fsync.

    Writes to a temporary file in the same directory, fsyncs it when
    possible, then renames into place. Propagates write errors after cleaning
    up the temporary file.
    """
    target = _write_target(path)
    ensure_private_dir(target.parent)
    fd, tmppath = tempfile.mkstemp(
        prefix=target.name + ".", suffix=".tmp", dir=str(target.parent)
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
            f.flush()
            try:
                os.fsync(f.fileno())
            except OSError:  # pragma: no cover
                pass
        os.replace(tmppath, target)
    except Exception:
        try:
            os.remove(tmppath)
        except OSError:  # pragma: no cover
            pass
        raise


def secure_write_text(path: Path, text: str) -> None:
    """Atomic write followed by an unconditional owner-only chmod."""
    atomic_write(path, text)
    restrict_permissions(_write_target(path))


__all__ = [
    "PRIVATE_DIR_MODE",
    "PRIVATE_FILE_MODE",
    "supports_posix_permissions",
    "ensure_private_dir",
    "restrict_permissions",
    "atomic_write",
    "secure_write_text",
]
