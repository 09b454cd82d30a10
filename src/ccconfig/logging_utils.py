"""Logging configuration helpers (human + JSON + file).

This module centralizes lightweight logging setup for the CLI:
 - Plain human-readable logs to stderr
 - Optional JSON lines (also to stderr, so stdout stays evaluable)
 - Optional file logs

Design goals
 - No third‑party dependencies; stdlib logging only
 - Idempotent configuration for tests and repeated calls
 - Never let a logging failure break the command being run
"""

from __future__ import annotations
import json
import logging
import sys
from typing import Optional

_STRUCTURED_FIELDS = (
    "event",
    "profile",
    "mode",
    "path",
    "shell",
    "command",
    "returncode",
    "error_type",
)


class JSONFormatter(logging.Formatter):
    """Minimal JSON formatter for structured log collection.

    Emits an object with ``level`` and ``message`` plus optional structured
    fields (``event``, ``profile``, ``mode``, ``path``, ``shell``,
    ``command``, ``returncode``, ``error_type``) when set via ``extra=...``.
    """

    def format(self, record):
        payload = {
            "level": record.levelname,
            "message": record.getMessage(),
        }
        for k in _STRUCTURED_FIELDS:
            if hasattr(record, k):
                payload[k] = getattr(record, k)
        return json.dumps(payload)


def configure_logging(
    verbose: bool,
    log_file: Optional[str] = None,
    log_json: bool = False,
    log_level: Optional[str] = None,
) -> None:
    """Configure the root logger according to CLI flags.

    Parameters
    - ``verbose``: When ``True``, sets level to ``DEBUG`` (unless ``log_level``
      overrides). Otherwise defaults to ``WARNING``.
    - ``log_file``: Optional path to tee logs to a file (plain text format).
    - ``log_json``: When ``True``, emit JSON lines to stderr instead of the
      plain format.
    - ``log_level``: Optional explicit level name (debug, info, warning, error).

    Handlers previously added by this function are removed first to avoid
    duplicates across repeated invocations (common in tests).
    """
    if log_level:
        level = {
            "debug": logging.DEBUG,
            "info": logging.INFO,
            "warning": logging.WARNING,
            "error": logging.ERROR,
        }.get(log_level.lower(), logging.WARNING)
    else:
        level = logging.DEBUG if verbose else logging.WARNING

    logger = logging.getLogger()
    logger.setLevel(level)

    for h in list(logger.handlers):
        if getattr(h, "_added_by_configure_logging", False):
            logger.removeHandler(h)
            h.close()

    fmt = "%(levelname)s: %(message)s"
    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(JSONFormatter() if log_json else logging.Formatter(fmt))
    setattr(stream, "_added_by_configure_logging", True)
    logger.addHandler(stream)

    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(logging.Formatter("%(asctime)s " + fmt))
        setattr(fh, "_added_by_configure_logging", True)
        logger.addHandler(fh)

    for handler in logger.handlers:
        handler.setLevel(level)


def log_event(event: str, level: int = logging.INFO, **fields) -> None:
    """Emit a structured event log at the given level.

    Common ``fields`` include ``profile``, ``mode``, ``path`` and
    ``error_type``. Secret values must never be passed here. The function
    never raises.
    """
    try:
        logging.getLogger("ccconfig").log(
            level, event, extra={"event": event, **fields}
        )
    except Exception:
        # Never let logging break CLI flow
        pass


__all__ = ["configure_logging", "log_event", "JSONFormatter"]
