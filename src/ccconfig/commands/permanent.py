"""Write profile variables into the user's shell startup file.

The managed section is delimited by ``BLOCK_START``/``BLOCK_END`` marker
lines. Re-running replaces that section in place; nothing outside the markers
is ever touched. The write only happens after the user has seen the target,
a masked preview and a description, and typed ``yes``.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Mapping

from ..context import Context
from ..defaults import BLOCK_END, BLOCK_START, PROG
from ..errors import EnvironmentSetupError, StorageError
from ..io_safe import secure_write_text
from ..logging_utils import log_event
from ..prompts import confirm_explicit, require_interactive
from ..registry import Profile
from ..shells import ShellSpec, detect_shell, supported_shell_labels
from ..ui import BOLD, c, info, mask, ok
from ._common import is_sensitive

_BLOCK_RE = re.compile(
    re.escape(BLOCK_START) + r"[\s\S]*?" + re.escape(BLOCK_END) + r"\n?"
)


def render_block(spec: ShellSpec, env: Mapping[str, object]) -> str:
    lines = [BLOCK_START]
    lines.extend(spec.export_line(key, value) for key, value in env.items())
    lines.append(BLOCK_END)
    return "\n".join(lines) + "\n"


def merge_block(existing: str, block: str) -> str:
    """Replace the first managed block in ``existing`` or append ``block``."""
    if _BLOCK_RE.search(existing):
        # A function replacement keeps backslashes in values literal.
        return _BLOCK_RE.sub(lambda _m: block, existing, count=1)
    if existing and not existing.endswith("\n"):
        existing += "\n"
    return existing + block


def _masked(env: Mapping[str, str]) -> dict:
    return {k: mask(v) if is_sensitive(k) else v for k, v in env.items()}


def write_permanent(ctx: Context, profile: Profile) -> int:
    """Confirm with the user, then write ``profile`` into the shell config."""
    spec = detect_shell(ctx.environ, ctx.platform)
    if spec is None:
        raise EnvironmentSetupError(
            "Unable to detect your shell; shell configuration was not modified",
            f"Supported shells: {supported_shell_labels()}",
            f"Load the variables manually instead, e.g.: {PROG} env bash",
        )
    require_interactive(ctx.interactive, "writing shell configuration")

    path: Path = spec.config_path(ctx.home, ctx.platform)
    env = profile.child_env()

    print()
    print(c(f"Permanent write to your {spec.label} configuration", BOLD))
    print(f"  Target file: {path}")
    print("  Content (secrets masked):")
    for line in render_block(spec, _masked(env)).splitlines():
        print(f"    {line}")
    print()
    print(
        f"Every new {spec.label} session will export these variables, even "
        f"after switching with {PROG} use, until the block is removed."
    )
    print(
        "An existing ccconfig block in the file is replaced; "
        "everything outside the markers is left unchanged."
    )
    print()
    if not confirm_explicit("Write to this file?", reader=ctx.reader):
        info("Cancelled; shell configuration was not modified.")
        print(f"Apply to the current session only with: {spec.activation}")
        return 0

    try:
        existing = path.read_text(encoding="utf-8") if path.exists() else ""
    except (OSError, ValueError) as e:
        raise StorageError(f"Unable to read {path}: {e}")
    try:
        secure_write_text(path, merge_block(existing, render_block(spec, env)))
    except OSError as e:
        raise StorageError(f"Unable to write {path}: {e}")
    log_event("shell_config_written", path=str(path), shell=spec.name, profile=profile.name)

    ok(f"Shell configuration updated: {path}")
    print(f"Open a new terminal, or apply now with: {spec.activation}")
    return 0


__all__ = ["render_block", "merge_block", "write_permanent"]
