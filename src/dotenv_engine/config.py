"""
Configuration loading helpers for named loading profiles.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .loader import DotenvError


class ConfigError(DotenvError):
    """Raised when the user provided configuration is invalid."""


@dataclass
class SourceConfig:
    """A dotenv file that belongs to a profile."""

    path: Path
    required: bool = True


@dataclass
class ProfileConfig:
    """An ordered list of dotenv files loaded together."""

    name: str
    sources: List[SourceConfig]
    override: bool = False
    strict: bool | None = None


@dataclass
class LoaderConfig:
    """Top-level configuration object used by the EnvLoader."""

    profiles: Dict[str, ProfileConfig]
    default_profile: str = "default"
    encoding: str = "utf-8"
    strict: bool = False

    def profile(self, name: str | None = None) -> ProfileConfig:
        profile_name = name or self.default_profile
        if profile_name not in self.profiles:
            known = ", ".join(sorted(self.profiles)) or "none"
            raise ConfigError(f"Unknown profile {profile_name!r} (known: {known})")
        return self.profiles[profile_name]


def _require(dictionary: Dict[str, Any], key: str) -> Any:
    if key not in dictionary:
        raise ConfigError(f"Missing required configuration key: {key}")
    return dictionary[key]


def _as_bool(value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"Configuration key {key} must be true or false, got {value!r}")
    return value


def _load_encoding(value: Any) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"Configuration key encoding must be a codec name, got {value!r}")
    try:
        codecs.lookup(value)
    except LookupError as exc:
        raise ConfigError(f"Unknown encoding in configuration: {value}") from exc
    return value


def _load_sources(raw_files: Any, base_dir: Path, profile_name: str) -> List[SourceConfig]:
    if not isinstance(raw_files, list) or not raw_files:
        raise ConfigError(f"Profile {profile_name!r} needs a non-empty list of files")

    sources = []
    for entry in raw_files:
        if isinstance(entry, str):
            path, required = entry, True
        elif isinstance(entry, dict):
            path = _require(entry, "path")
            required = _as_bool(entry.get("required", True), "required")
        else:
            raise ConfigError(f"Invalid file entry in profile {profile_name!r}: {entry!r}")
        if not isinstance(path, str) or not path:
            raise ConfigError(f"Invalid file path in profile {profile_name!r}: {path!r}")
        resolved = Path(path)
        if not resolved.is_absolute():
            resolved = base_dir / resolved
        sources.append(SourceConfig(path=resolved, required=required))
    return sources


def _load_profiles(raw_profiles: Any, base_dir: Path) -> Dict[str, ProfileConfig]:
    if not isinstance(raw_profiles, dict) or not raw_profiles:
        raise ConfigError("profiles must be a non-empty mapping")

    profiles = {}
    for name, raw in raw_profiles.items():
        if not isinstance(raw, dict):
            raise ConfigError(f"Invalid profile configuration: {name}")
        strict = raw.get("strict")
        profiles[str(name)] = ProfileConfig(
            name=str(name),
            sources=_load_sources(_require(raw, "files"), base_dir, str(name)),
            override=_as_bool(raw.get("override", False), "override"),
            strict=None if strict is None else _as_bool(strict, "strict"),
        )
    return profiles


def load_config(path: str | Path) -> LoaderConfig:
    """Load LoaderConfig from a YAML file."""

    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        with config_path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Configuration file is not valid YAML: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Configuration file could not be read: {path} ({exc})") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"Configuration file must contain a mapping: {path}")

    config = LoaderConfig(
        profiles=_load_profiles(_require(raw, "profiles"), config_path.resolve().parent),
        default_profile=str(raw.get("default_profile", "default")),
        encoding=_load_encoding(raw.get("encoding", "utf-8")),
        strict=_as_bool(raw.get("strict", False), "strict"),
    )
    config.profile()
    return config


__all__ = [
    "ConfigError",
    "LoaderConfig",
    "ProfileConfig",
    "SourceConfig",
    "load_config",
]
