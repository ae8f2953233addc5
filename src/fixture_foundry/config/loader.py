"""
fixture-foundry — runtime config loader.

Purpose
- Load effective generation config from defaults, a TOML file, env vars, and
  explicit overrides.

Functional requirements
- Precedence: overrides > env (``FIXTURE_FOUNDRY_``) > file > defaults.
- TOML loading via ``tomllib``.
- Deterministic environment variable mapping and coercion.
"""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Final, Literal

from fixture_foundry.config.schema import (
    ConfigValidationError,
    GenerationConfig,
    assert_valid_config,
    default_config,
    merge_config,
)

DEFAULT_CONFIG_FILE: Final[str] = "fixture_foundry.toml"
ENV_PREFIX: Final[str] = "FIXTURE_FOUNDRY_"

_BOOLEAN_TRUE: Final[frozenset[str]] = frozenset({"1", "true", "t", "yes", "y", "on"})
_BOOLEAN_FALSE: Final[frozenset[str]] = frozenset({"0", "false", "f", "no", "n", "off"})


@dataclass(frozen=True, slots=True)
class _Binding:
    path: tuple[str, ...]
    value_type: Literal["str", "int", "float", "bool"]


class ConfigLoadError(ValueError):
    """Raised when config cannot be loaded or overrides cannot be coerced."""


def load_config(
    config_path: str | Path | None = None,
    *,
    overrides: Mapping[str, object] | None = None,
    environ: Mapping[str, str] | None = None,
) -> GenerationConfig:
    """Load effective config with deterministic precedence: overrides > env > file > defaults."""

    resolved_path = _resolve_config_path(config_path)
    env_map = dict(os.environ if environ is None else environ)

    file_payload = _load_toml_file(resolved_path, required=config_path is not None)
    merged = merge_config(default_config(), file_payload)
    merged = merge_config(merged, _collect_env_overrides(merged, env_map))
    merged = merge_config(merged, _materialize_overrides(overrides or {}))

    try:
        assert_valid_config(merged)
        return GenerationConfig.from_mapping(merged)
    except ConfigValidationError as exc:
        raise ConfigLoadError(f"invalid configuration: {exc}") from exc


def dump_effective_config(config: GenerationConfig) -> str:
    """Return a deterministic JSON dump of the effective config."""

    return json.dumps(asdict(config), sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _resolve_config_path(config_path: str | Path | None) -> Path:
    if config_path is None:
        return (Path.cwd() / DEFAULT_CONFIG_FILE).resolve()
    return Path(config_path).expanduser().resolve()


def _load_toml_file(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.exists():
        if required:
            raise ConfigLoadError(f"config file not found: {path}")
        return {}

    try:
        with path.open("rb") as handle:
            parsed = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigLoadError(f"invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigLoadError(f"unable to read config file {path}: {exc}") from exc

    return parsed


def _collect_env_overrides(
    config: Mapping[str, object], environ: Mapping[str, str]
) -> dict[str, Any]:
    bindings = _build_bindings(config)
    overrides: dict[str, Any] = {}
    for env_name in sorted(bindings):
        raw = environ.get(env_name)
        if raw is None:
            continue
        binding = bindings[env_name]
        value = _coerce_env(raw, binding.value_type, env_name, binding.path)
        _set_nested(overrides, binding.path, value)
    return overrides


def _build_bindings(config: Mapping[str, object]) -> dict[str, _Binding]:
    bindings: dict[str, _Binding] = {}
    for path, value in _iter_scalar_paths(config):
        kind = _kind_for_value(value)
        if kind is None:
            continue
        bindings[_env_name_for_path(path)] = _Binding(path=path, value_type=kind)

    # Keys whose default is null still need a typed binding.
    bindings.setdefault(
        _env_name_for_path(("generation", "seed")), _Binding(("generation", "seed"), "int")
    )
    return bindings


def _iter_scalar_paths(
    payload: Mapping[str, object],
    prefix: tuple[str, ...] = (),
) -> list[tuple[tuple[str, ...], object]]:
    pairs: list[tuple[tuple[str, ...], object]] = []
    for key in sorted(payload):
        value = payload[key]
        path = (*prefix, key)
        if isinstance(value, Mapping):
            pairs.extend(_iter_scalar_paths(value, path))
        else:
            pairs.append((path, value))
    return pairs


def _kind_for_value(value: object) -> Literal["str", "int", "float", "bool"] | None:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "str"
    return None


def _coerce_env(
    raw: str,
    value_type: Literal["str", "int", "float", "bool"],
    env_name: str,
    path: tuple[str, ...],
) -> object:
    value = raw.strip()
    if value_type == "str":
        return value
    if value_type == "int":
        try:
            return int(value)
        except ValueError as exc:
            raise ConfigLoadError(f"{env_name} -> {'.'.join(path)} must be an integer") from exc
    if value_type == "float":
        try:
            return float(value)
        except ValueError as exc:
            raise ConfigLoadError(f"{env_name} -> {'.'.join(path)} must be a number") from exc

    lowered = value.lower()
    if lowered in _BOOLEAN_TRUE:
        return True
    if lowered in _BOOLEAN_FALSE:
        return False
    raise ConfigLoadError(
        f"{env_name} -> {'.'.join(path)} must be a boolean (true/false/1/0/yes/no/on/off)"
    )


def _materialize_overrides(overrides: Mapping[str, object]) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    for key in sorted(overrides):
        value = overrides[key]
        path = tuple(part for part in key.split(".") if part)
        if not path:
            raise ConfigLoadError(f"invalid override key {key!r}")
        if isinstance(value, Mapping):
            _set_nested(payload, path, merge_config(payload.get(path[0], {}), value))
            continue
        _set_nested(payload, path, value)
    return payload


def _set_nested(target: dict[str, Any], path: tuple[str, ...], value: object) -> None:
    cursor = target
    for part in path[:-1]:
        next_node = cursor.get(part)
        if not isinstance(next_node, dict):
            next_node = {}
            cursor[part] = next_node
        cursor = next_node
    cursor[path[-1]] = value


def _env_name_for_path(path: tuple[str, ...]) -> str:
    return ENV_PREFIX + "_".join(part.upper() for part in path)


__all__ = [
    "DEFAULT_CONFIG_FILE",
    "ENV_PREFIX",
    "ConfigLoadError",
    "dump_effective_config",
    "load_config",
]
