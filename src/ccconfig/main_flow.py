"""Command-line entry point: parse, configure logging, dispatch, report."""

from __future__ import annotations
import argparse
import logging
from typing import List, Optional

from .args import parse_args
from .commands import (
    add_profile,
    list_profiles,
    print_completion,
    print_env,
    remove_profile,
    set_or_show_mode,
    show_current,
    show_edit,
    start_profile,
    update_profile,
    use_profile,
)
from .context import Context
from .defaults import PROG
from .errors import CcconfigError
from .logging_utils import configure_logging, log_event
from .ui import err, hint, warn
from .utils import get_version


def dispatch(ctx: Context, args: argparse.Namespace) -> int:
    """Run the handler for ``args.cmd`` and return its exit code."""
    cmd = args.cmd
    if cmd == "list":
        return list_profiles(ctx, names_only=bool(getattr(args, "names", False)))
    if cmd == "add":
        return add_profile(ctx, args.name)
    if cmd == "update":
        return update_profile(ctx, args.name)
    if cmd == "use":
        return use_profile(ctx, args.name, permanent=args.permanent)
    if cmd in ("start", "safe-start"):
        return start_profile(
            ctx, args.name, args.claude_args, safe=(cmd == "safe-start")
        )
    if cmd == "remove":
        return remove_profile(ctx, args.name)
    if cmd == "current":
        return show_current(ctx, show_secret=args.show_secret)
    if cmd == "mode":
        return set_or_show_mode(ctx, args.value)
    if cmd == "env":
        return print_env(ctx, args.format)
    if cmd == "edit":
        return show_edit(ctx)
    if cmd == "completion":
        return print_completion(ctx, args.shell)
    raise AssertionError(f"unhandled command: {cmd}")


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI tool; returns the process exit status."""
    try:
        args = parse_args(argv)
    except SystemExit as e:
        # argparse exits for --help (0) and usage errors (1).
        return e.code if isinstance(e.code, int) else 0

    if args.version:
        print(f"{PROG} version {get_version()}")
        return 0

    configure_logging(args.verbose, args.log_file, args.log_json, args.log_level)
    logging.getLogger(__name__).debug("command=%s", args.cmd)

    try:
        return dispatch(Context.from_process(), args)
    except CcconfigError as e:
        err(e.message)
        for line in e.hints:
            hint(line)
        log_event(
            "command_failed",
            level=logging.DEBUG,
            command=args.cmd,
            error_type=type(e).__name__,
        )
        return e.exit_code
    except KeyboardInterrupt:
        print()
        warn("Aborted by user.")
        return 130


__all__ = ["main", "dispatch"]
