"""Command handlers; each takes a :class:`~ccconfig.context.Context` and returns an exit code."""

from .activate import start_profile, use_profile
from .completion import print_completion
from .profiles import add_profile, list_profiles, remove_profile, update_profile
from .status import print_env, set_or_show_mode, show_current, show_edit

__all__ = [
    "list_profiles",
    "add_profile",
    "update_profile",
    "remove_profile",
    "use_profile",
    "start_profile",
    "show_current",
    "set_or_show_mode",
    "print_env",
    "show_edit",
    "print_completion",
]
