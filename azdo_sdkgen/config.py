"""
config.py

Responsibility: Load the optional YAML configuration file into a typed, immutable model.

Every key is optional; a missing file means "all defaults". CLI flags are
applied on top by `cli.py`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from azdo_sdkgen.cache import default_cache_dir
from azdo_sdkgen.errors import ConfigError
from azdo_sdkgen.generator import DEFAULT_ADDITIONAL_PROPERTIES, DEFAULT_COMMAND, DEFAULT_GENERATOR
from azdo_sdkgen.github_client import DEFAULT_OWNER, DEFAULT_REPO
from azdo_sdkgen.selection import DEFAULT_PREFERRED_PATTERNS
from azdo_sdkgen.versions import DEFAULT_PRERELEASE_MARKERS

DEFAULT_CONFIG_NAME = "azdo-sdk-gen.yaml"


@dataclass(frozen=True)
class GeneratorConfig:
    name: str = DEFAULT_GENERATOR
    command: tuple[str, ...] = DEFAULT_COMMAND
    additional_properties: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ADDITIONAL_PROPERTIES))


@dataclass(frozen=True)
class Settings:
    owner: str = DEFAULT_OWNER
    repo: str = DEFAULT_REPO
    ref: str = "master"
    cache_dir: Path = field(default_factory=default_cache_dir)
    out: str = "packages/generated"
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    preferred_patterns: tuple[str, ...] = DEFAULT_PREFERRED_PATTERNS
    prerelease_markers: tuple[str, ...] = DEFAULT_PRERELEASE_MARKERS


def _mapping(value: Any, name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"`{name}` must be an object/mapping when provided.")
    return value


def _string_list(value: Any, name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    if value is None:
        return default
    if isinstance(value, str) or not isinstance(value, list):
        raise ConfigError(f"`{name}` must be a list of strings.")
    items = tuple(str(v).strip() for v in value)
    if not items or not all(items):
        raise ConfigError(f"`{name}` must contain at least one non-empty string.")
    return items


def _text(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    if value is None:
        return default
    text = str(value).strip()
    if not text:
        raise ConfigError(f"`{key}` must not be empty.")
    return text


def _stringify(value: Any) -> str:
    # YAML turns `true` into a bool; the generator expects the literal text.
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def settings_from_mapping(data: dict[str, Any]) -> Settings:
    defaults = Settings()

    gen_raw = _mapping(data.get("generator"), "generator")
    props_raw = _mapping(gen_raw.get("additional_properties"), "generator.additional_properties")
    generator = GeneratorConfig(
        name=_text(gen_raw, "name", defaults.generator.name),
        command=_string_list(gen_raw.get("command"), "generator.command", defaults.generator.command),
        additional_properties=(
            {str(k): _stringify(v) for k, v in props_raw.items()} if props_raw else dict(defaults.generator.additional_properties)
        ),
    )

    patterns = _string_list(data.get("preferred_patterns"), "preferred_patterns", defaults.preferred_patterns)
    for pattern in patterns:
        if "{key}" not in pattern:
            raise ConfigError(f"Preferred pattern {pattern!r} must contain the `{{key}}` placeholder.")

    cache_raw = data.get("cache_dir")
    cache_dir = Path(str(cache_raw)).expanduser() if cache_raw else defaults.cache_dir

    return Settings(
        owner=_text(data, "owner", defaults.owner),
        repo=_text(data, "repo", defaults.repo),
        ref=_text(data, "ref", defaults.ref),
        cache_dir=cache_dir,
        out=_text(data, "out", defaults.out),
        generator=generator,
        preferred_patterns=patterns,
        prerelease_markers=_string_list(data.get("prerelease_markers"), "prerelease_markers", defaults.prerelease_markers),
    )


def load_settings(path: str | Path | None = None, *, cwd: str | Path | None = None) -> Settings:
    """
    Load settings from `path`, or from `azdo-sdk-gen.yaml` in `cwd` when present.

    An explicit path that does not exist is an error; a missing default file is not.
    """
    if path is None:
        candidate = Path(cwd or Path.cwd()) / DEFAULT_CONFIG_NAME
        if not candidate.is_file():
            return Settings()
        config_path = candidate
    else:
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigError(f"Config file does not exist: {config_path}")

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError("Config must be a mapping/object at the top level.")
    return settings_from_mapping(data)
