"""Version discovery."""

from __future__ import annotations

import re
from importlib.metadata import PackageNotFoundError, version as pkg_version
from pathlib import Path

DIST_NAME = "ccconfig"


def get_version() -> str:
    """Return the tool version string.

    Lookup order (first match wins):
    1) ``importlib.metadata.version('ccconfig')`` (installed package)
    2) ``project.version`` from ``pyproject.toml`` (source checkout)
    3) Fallback string ``"0.0.0+unknown"``
    """
    try:
        return pkg_version(DIST_NAME)
    except PackageNotFoundError:
        pass

    pyproj = Path(__file__).resolve().parents[2] / "pyproject.toml"
    if pyproj.exists():
        try:
            text = pyproj.read_text(encoding="utf-8")
        except OSError:
            return "0.0.0+unknown"
        m = re.search(r"(?ms)^\[project\].*?^version\s*=\s*\"([^\"]+)\"", text)
        if m:
            return m.group(1)

    return "0.0.0+unknown"


__all__ = ["get_version"]
