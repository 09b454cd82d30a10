"""ccconfig: store Claude Code credential profiles and switch between them."""

from .main_flow import main

__all__ = ["main"]
