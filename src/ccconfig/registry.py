"""Profile registry model (the contents of ``profiles.json``).

The registry is plain JSON on disk::

    {"profiles": {"work": {"env": {"ANTHROPIC_BASE_URL": "..."},
                           "description": "..."}}}

:class:`Profile` and :class:`Registry` wrap that shape without losing
anything a user added by hand: unknown env keys, unknown per-profile fields
and unknown top-level keys all survive a load/save cycle, and profile order
is preserved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional

from .defaults import CREDENTIAL_KEYS, PROFILE_NAME_RE


class RegistryFormatError(ValueError):
    """The registry document does not have the expected shape."""


def is_valid_profile_name(name: Optional[str]) -> bool:
    return bool(name) and bool(PROFILE_NAME_RE.fullmatch(name))


@dataclass
class Profile:
    """One named set of environment variables."""

    name: str
    env: Dict[str, str] = field(default_factory=dict)
    description: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def credential(self) -> Optional[str]:
        return credential_of(self.env)

    def child_env(self) -> Dict[str, str]:
        """Env values coerced to strings, ready for ``subprocess``."""
        return {k: "" if v is None else str(v) for k, v in self.env.items()}

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = dict(self.extra)
        data["env"] = dict(self.env)
        if self.description:
            data["description"] = self.description
        else:
            data.pop("description", None)
        return data

    @classmethod
    def from_dict(cls, name: str, data: Any) -> "Profile":
        if not isinstance(data, dict):
            raise RegistryFormatError(f"profile '{name}' is not an object")
        env = data.get("env") or {}
        if not isinstance(env, dict):
            raise RegistryFormatError(f"profile '{name}' has a non-object env")
        extra = {k: v for k, v in data.items() if k not in ("env", "description")}
        return cls(
            name=name,
            env=dict(env),
            description=str(data.get("description") or ""),
            extra=extra,
        )


@dataclass
class Registry:
    """Ordered mapping of profile name to :class:`Profile`."""

    profiles: Dict[str, Profile] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)

    def __contains__(self, name: object) -> bool:
        return name in self.profiles

    def __iter__(self) -> Iterator[Profile]:
        return iter(self.profiles.values())

    def __len__(self) -> int:
        return len(self.profiles)

    def get(self, name: str) -> Optional[Profile]:
        return self.profiles.get(name)

    def put(self, profile: Profile) -> None:
        self.profiles[profile.name] = profile

    def remove(self, name: str) -> Profile:
        return self.profiles.pop(name)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = dict(self.extra)
        data["profiles"] = {p.name: p.to_dict() for p in self.profiles.values()}
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "Registry":
        if not isinstance(data, dict):
            raise RegistryFormatError("top-level value is not an object")
        raw = data.get("profiles")
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise RegistryFormatError("'profiles' is not an object")
        profiles = {name: Profile.from_dict(name, body) for name, body in raw.items()}
        extra = {k: v for k, v in data.items() if k != "profiles"}
        return cls(profiles=profiles, extra=extra)


def credential_of(env: Optional[Dict[str, Any]]) -> Optional[str]:
    """First non-empty credential in preference order, or ``None``."""
    if not env:
        return None
    for key in CREDENTIAL_KEYS:
        value = env.get(key)
        if value:
            return value
    return None


__all__ = [
    "Profile",
    "Registry",
    "RegistryFormatError",
    "credential_of",
    "is_valid_profile_name",
]
