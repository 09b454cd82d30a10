"""Argument parsing.

Global logging/version flags live on the top-level parser; every command is a
subparser that records its canonical name in ``ns.cmd`` (aliases such as
``ls`` and ``rm`` resolve to ``list`` and ``remove``). Profile names are
optional at the parser level so handlers can report a missing name with a
usage hint of their own.
"""

from __future__ import annotations
import argparse
import sys
from typing import List, Optional

from .defaults import MODES, PROG
from .ui import err, hint


class CliParser(argparse.ArgumentParser):
    """ArgumentParser that reports errors through ``ui.err`` and exits 1."""

    def error(self, message: str):
        err(message)
        hint(f"Run '{self.prog} --help' for usage")
        self.exit(1)


def _add_global_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "-V", "--version", action="store_true", help="Print version and exit"
    )
    p.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    p.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        help="Explicit log level (overrides --verbose)",
    )
    p.add_argument("--log-file", help="Also write logs to this file")
    p.add_argument(
        "--log-json", action="store_true", help="Emit logs as JSON lines on stderr"
    )


def _add_commands(p: argparse.ArgumentParser) -> None:
    sub = p.add_subparsers(dest="command", metavar="<command>")

    sp = sub.add_parser("list", aliases=["ls"], help="List all configurations")
    sp.add_argument(
        "--names", action="store_true", help="Print profile names only, one per line"
    )
    sp.set_defaults(cmd="list")

    sp = sub.add_parser("add", help="Add a new configuration (interactive)")
    sp.add_argument("name", nargs="?")
    sp.set_defaults(cmd="add")

    sp = sub.add_parser("update", help="Update an existing configuration (interactive)")
    sp.add_argument("name", nargs="?")
    sp.set_defaults(cmd="update")

    sp = sub.add_parser("use", help="Switch to a configuration")
    sp.add_argument("name", nargs="?")
    sp.add_argument(
        "-p",
        "--permanent",
        action="store_true",
        help="Also write the variables to your shell startup file (env mode)",
    )
    sp.set_defaults(cmd="use")

    for name, help_text in (
        ("start", "Start Claude Code with a configuration (skips permission prompts)"),
        ("safe-start", "Start Claude Code with a configuration (keeps permission prompts)"),
    ):
        sp = sub.add_parser(name, help=help_text)
        sp.add_argument("name", nargs="?")
        sp.add_argument(
            "claude_args",
            nargs=argparse.REMAINDER,
            help="Arguments passed through to claude",
        )
        sp.set_defaults(cmd=name)

    sp = sub.add_parser("remove", aliases=["rm"], help="Remove a configuration")
    sp.add_argument("name", nargs="?")
    sp.set_defaults(cmd="remove")

    sp = sub.add_parser("current", help="Show the current configuration status")
    sp.add_argument(
        "-s", "--show-secret", action="store_true", help="Show full credentials"
    )
    sp.set_defaults(cmd="current")

    sp = sub.add_parser("mode", help="Show or switch the activation mode")
    sp.add_argument("value", nargs="?", metavar="|".join(MODES))
    sp.set_defaults(cmd="mode")

    sp = sub.add_parser("env", help="Print environment variables for a shell")
    sp.add_argument("format", nargs="?", default="bash")
    sp.set_defaults(cmd="env")

    sp = sub.add_parser("edit", help="Show the configuration file location")
    sp.set_defaults(cmd="edit")

    sp = sub.add_parser("completion", help="Print a shell completion script")
    sp.add_argument("shell", nargs="?")
    sp.set_defaults(cmd="completion")


def build_parser() -> CliParser:
    p = CliParser(
        prog=PROG,
        description="Claude Code configuration switcher",
        epilog=(
            "Examples:\n"
            f"  {PROG} add work\n"
            f"  {PROG} use work\n"
            f"  {PROG} start work\n"
            f'  eval "$({PROG} env bash)"\n'
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    _add_global_args(p)
    _add_commands(p)
    return p


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse ``argv`` (default ``sys.argv[1:]``); no command means ``list``."""
    if argv is None:
        argv = sys.argv[1:]
    ns = build_parser().parse_args(argv)
    if not getattr(ns, "cmd", None):
        ns.cmd = "list"
        ns.names = False
    extra = list(getattr(ns, "claude_args", None) or [])
    if extra and extra[0] == "--":
        extra = extra[1:]
    ns.claude_args = extra
    return ns


__all__ = ["CliParser", "build_parser", "parse_args"]
