"""Work out which environment is active and which profile it belongs to.

Two questions, answered differently on purpose:

 - ``active_env_vars`` feeds ``ccconfig env``. In settings mode it falls
   back to the snapshot file, because a user may have switched modes without
   re-running ``use``.
 - ``current_profile_name`` feeds ``list`` and ``current`` and only looks at
   the source the current mode actually activates, with no fallback.

Matching compares the base URL and the first credential only; model keys are
ignored, so profiles that differ only in model selection are
indistinguishable here.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from .defaults import BASE_URL_KEY, MODE_ENV, MODE_SETTINGS
from .registry import Profile, Registry, credential_of
from .storage import Storage


def settings_env(settings: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
    env = settings.get("env") if isinstance(settings, Mapping) else None
    return env if isinstance(env, dict) else None


def active_env_vars(storage: Storage) -> Optional[Dict[str, Any]]:
    """Env vars that ``ccconfig env`` should emit, or ``None``."""
    if storage.get_mode() == MODE_ENV:
        return storage.read_snapshot()
    env = settings_env(storage.load_native_settings())
    if env and env.get(BASE_URL_KEY):
        return env
    snapshot = storage.read_snapshot()
    if snapshot:
        return snapshot
    return None


def mode_source_env(storage: Storage, mode: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """The env the given (or persisted) mode activates, without fallback."""
    mode = mode or storage.get_mode()
    if mode == MODE_SETTINGS:
        return settings_env(storage.load_native_settings())
    return storage.read_snapshot()


def profile_matches(profile: Profile, env: Mapping[str, Any]) -> bool:
    """True when base URL and credential both equal those in ``env``."""
    if profile.env.get(BASE_URL_KEY) != env.get(BASE_URL_KEY):
        return False
    return credential_of(profile.env) == credential_of(dict(env))


def match_profile(registry: Registry, env: Optional[Mapping[str, Any]]) -> Optional[str]:
    """First profile (in registry order) matching ``env``."""
    if env is None:
        return None
    for profile in registry:
        if profile.env and profile_matches(profile, env):
            return profile.name
    return None


def current_profile_name(
    storage: Storage, registry: Optional[Registry] = None
) -> Optional[str]:
    """Name of the stored profile the current mode has active, or ``None``."""
    if registry is None:
        if not storage.registry_exists():
            return None
        registry = storage.load_registry()
    return match_profile(registry, mode_source_env(storage))


__all__ = [
    "settings_env",
    "active_env_vars",
    "mode_source_env",
    "profile_matches",
    "match_profile",
    "current_profile_name",
]
