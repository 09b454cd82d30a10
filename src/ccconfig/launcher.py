"""Discovery and launching of the external Claude Code CLI.

The child process inherits stdin/stdout/stderr and owns the terminal until it
exits; its exit status becomes ccconfig's own.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from typing import Dict, List, Mapping, Optional, Sequence

from .defaults import CLAUDE_BIN, CLAUDE_INSTALL_HINT, SKIP_PERMISSIONS_FLAG
from .errors import EnvironmentSetupError, LaunchError
from .logging_utils import log_event

logger = logging.getLogger(__name__)


def find_claude_cmd() -> Optional[str]:
    """Return the resolved path of ``claude`` on PATH, or ``None``.

    ``shutil.which`` honors ``PATHEXT`` on Windows, so ``claude.cmd`` from a
    global npm install is found as well.
    """
    return shutil.which(CLAUDE_BIN)


def ensure_claude_cli() -> str:
    """Return the ``claude`` executable or fail before spawning anything."""
    path = find_claude_cmd()
    if not path:
        raise EnvironmentSetupError(
            f"'{CLAUDE_BIN}' command not found on PATH",
            f"Install Claude Code first: {CLAUDE_INSTALL_HINT}",
        )
    return path


def build_claude_args(extra_args: Sequence[str], skip_permissions: bool) -> List[str]:
    """Arguments after the executable; the skip flag always comes first."""
    args = [SKIP_PERMISSIONS_FLAG] if skip_permissions else []
    return args + list(extra_args)


def build_child_env(
    base: Mapping[str, str], profile_env: Mapping[str, object]
) -> Dict[str, str]:
    """Copy of ``base`` with profile values (as strings) layered on top."""
    env = dict(base)
    for key, value in profile_env.items():
        env[key] = "" if value is None else str(value)
    return env


def launch_claude(
    profile_env: Mapping[str, object],
    extra_args: Sequence[str] = (),
    *,
    skip_permissions: bool = False,
    base_env: Optional[Mapping[str, str]] = None,
) -> int:
    """Run ``claude`` with the profile env and return its exit code.

    A ``KeyboardInterrupt`` is converted into exit code ``130`` for
    consistency with typical shell semantics. A child killed by a signal maps
    to ``128 + signal`` and a missing status to ``1``. Failing to spawn
    raises :class:`LaunchError`.
    """
    executable = ensure_claude_cli()
    cmd = [executable] + build_claude_args(extra_args, skip_permissions)
    env = build_child_env(os.environ if base_env is None else base_env, profile_env)
    log_event("claude_launch", command=" ".join(cmd[1:]) or "(no args)")
    try:
        result = subprocess.run(cmd, env=env)
    except KeyboardInterrupt:
        return 130
    except OSError as e:
        raise LaunchError(
            f"Failed to start {CLAUDE_BIN}: {e}",
            f"Check that {executable} is executable, or reinstall: {CLAUDE_INSTALL_HINT}",
        )
    code = result.returncode
    logger.debug("%s exited with %s", CLAUDE_BIN, code)
    if code is None:
        return 1
    return 128 - code if code < 0 else code


__all__ = [
    "find_claude_cmd",
    "ensure_claude_cli",
    "build_claude_args",
    "build_child_env",
    "launch_claude",
]
