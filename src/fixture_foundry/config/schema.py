"""
fixture-foundry — configuration schema and validation.

Purpose
- Define authoritative configuration defaults and strict validation rules.
- Materialize validated payloads into an immutable ``GenerationConfig``.

Functional requirements
- Validate config payloads and return structured issues (field path + message).
- Reject unknown sections and keys so typos do not silently fall back to defaults.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Final

from fixture_foundry import constants
from fixture_foundry.compilation.temporal import TemporalMargins
from fixture_foundry.generation import randoms
from fixture_foundry.generation.containers import ContainerSizeInfo

ConfigSchemaVersion: Final[int] = constants.CONFIG_SCHEMA_VERSION
LOG_FORMATS: Final[tuple[str, ...]] = ("json", "console")

DEFAULT_CONFIG: Final[dict[str, dict[str, Any]]] = {
    "meta": {"schema_version": ConfigSchemaVersion},
    "generation": {"seed": None},
    "containers": {
        "default_min_size": constants.DEFAULT_CONTAINER_MIN_SIZE,
        "default_max_size": constants.DEFAULT_CONTAINER_MAX_SIZE,
    },
    "temporal": {
        "future_margin_seconds": constants.FUTURE_MARGIN_SECONDS,
        "future_or_present_margin_seconds": constants.FUTURE_OR_PRESENT_MARGIN_SECONDS,
        "past_margin_seconds": constants.PAST_MARGIN_SECONDS,
    },
    "observability": {"log_level": "INFO", "log_format": "json"},
}

# (section, key) -> accepted python types; ``None`` marks an optional value.
_FIELD_TYPES: Final[dict[tuple[str, str], tuple[type | None, ...]]] = {
    ("meta", "schema_version"): (int,),
    ("generation", "seed"): (int, None),
    ("containers", "default_min_size"): (int,),
    ("containers", "default_max_size"): (int,),
    ("temporal", "future_margin_seconds"): (int, float),
    ("temporal", "future_or_present_margin_seconds"): (int, float),
    ("temporal", "past_margin_seconds"): (int, float),
    ("observability", "log_level"): (str,),
    ("observability", "log_format"): (str,),
}


@dataclass(frozen=True, slots=True)
class ConfigValidationIssue:
    path: str
    message: str

    def render(self) -> str:
        return f"{self.path}: {self.message}"


class ConfigValidationError(ValueError):
    """Raised when a config payload fails validation."""

    def __init__(self, issues: tuple[ConfigValidationIssue, ...]) -> None:
        self.issues = issues
        super().__init__("; ".join(issue.render() for issue in issues))


def default_config() -> dict[str, dict[str, Any]]:
    return copy.deepcopy(DEFAULT_CONFIG)


def merge_config(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    """Deterministic deep merge; ``overlay`` wins on scalar conflicts."""
    merged: dict[str, Any] = copy.deepcopy(dict(base))
    for key in sorted(overlay):
        value = overlay[key]
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = merge_config(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _type_matches(value: object, accepted: tuple[type | None, ...]) -> bool:
    if value is None:
        return None in accepted
    if isinstance(value, bool):
        return bool in accepted
    return any(kind is not None and isinstance(value, kind) for kind in accepted)


def validate_config(config: Mapping[str, Any]) -> tuple[ConfigValidationIssue, ...]:
    issues: list[ConfigValidationIssue] = []

    for section in sorted(config):
        if section not in DEFAULT_CONFIG:
            issues.append(ConfigValidationIssue(section, "unknown section"))
            continue
        payload = config[section]
        if not isinstance(payload, Mapping):
            issues.append(ConfigValidationIssue(section, "must be a table"))
            continue
        for key in sorted(payload):
            accepted = _FIELD_TYPES.get((section, key))
            if accepted is None:
                issues.append(ConfigValidationIssue(f"{section}.{key}", "unknown key"))
                continue
            if not _type_matches(payload[key], accepted):
                names = ", ".join("null" if kind is None else kind.__name__ for kind in accepted)
                issues.append(
                    ConfigValidationIssue(
                        f"{section}.{key}",
                        f"expected {names}, got {type(payload[key]).__name__}",
                    )
                )
    if issues:
        return tuple(issues)

    merged = merge_config(DEFAULT_CONFIG, config)
    if merged["meta"]["schema_version"] != ConfigSchemaVersion:
        issues.append(
            ConfigValidationIssue(
                "meta.schema_version",
                f"unsupported schema version {merged['meta']['schema_version']}; "
                f"expected {ConfigSchemaVersion}",
            )
        )

    containers = merged["containers"]
    if containers["default_min_size"] < 0:
        issues.append(ConfigValidationIssue("containers.default_min_size", "must be >= 0"))
    if containers["default_max_size"] < containers["default_min_size"]:
        issues.append(
            ConfigValidationIssue(
                "containers.default_max_size", "must be >= containers.default_min_size"
            )
        )

    temporal = merged["temporal"]
    for key in ("future_margin_seconds", "past_margin_seconds"):
        if temporal[key] <= 0:
            issues.append(ConfigValidationIssue(f"temporal.{key}", "must be > 0"))
    if temporal["future_or_present_margin_seconds"] < 0:
        issues.append(
            ConfigValidationIssue("temporal.future_or_present_margin_seconds", "must be >= 0")
        )

    observability = merged["observability"]
    level_name = observability["log_level"].strip().upper()
    if not isinstance(logging.getLevelName(level_name), int):
        issues.append(
            ConfigValidationIssue("observability.log_level", f"unknown level {level_name!r}")
        )
    if observability["log_format"] not in LOG_FORMATS:
        issues.append(
            ConfigValidationIssue(
                "observability.log_format", f"must be one of: {', '.join(LOG_FORMATS)}"
            )
        )

    return tuple(issues)


def assert_valid_config(config: Mapping[str, Any]) -> dict[str, Any]:
    issues = validate_config(config)
    if issues:
        raise ConfigValidationError(issues)
    return merge_config(DEFAULT_CONFIG, config)


@dataclass(frozen=True, slots=True)
class GenerationConfig:
    """Effective generation settings."""

    seed: int | None = None
    default_container_min_size: int = constants.DEFAULT_CONTAINER_MIN_SIZE
    default_container_max_size: int = constants.DEFAULT_CONTAINER_MAX_SIZE
    future_margin_seconds: float = constants.FUTURE_MARGIN_SECONDS
    future_or_present_margin_seconds: float = constants.FUTURE_OR_PRESENT_MARGIN_SECONDS
    past_margin_seconds: float = constants.PAST_MARGIN_SECONDS
    log_level: str = "INFO"
    log_format: str = "json"

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> GenerationConfig:
        merged = assert_valid_config(config)
        return cls(
            seed=merged["generation"]["seed"],
            default_container_min_size=merged["containers"]["default_min_size"],
            default_container_max_size=merged["containers"]["default_max_size"],
            future_margin_seconds=merged["temporal"]["future_margin_seconds"],
            future_or_present_margin_seconds=merged["temporal"]["future_or_present_margin_seconds"],
            past_margin_seconds=merged["temporal"]["past_margin_seconds"],
            log_level=merged["observability"]["log_level"].strip().upper(),
            log_format=merged["observability"]["log_format"],
        )

    def temporal_margins(self) -> TemporalMargins:
        return TemporalMargins(
            future=timedelta(seconds=self.future_margin_seconds),
            future_or_present=timedelta(seconds=self.future_or_present_margin_seconds),
            past=timedelta(seconds=self.past_margin_seconds),
        )

    def container_defaults(self) -> ContainerSizeInfo:
        return ContainerSizeInfo(self.default_container_min_size, self.default_container_max_size)

    def apply_seed(self) -> None:
        """Reseed the process-wide random source; an unset seed restores OS entropy."""
        randoms.set_seed(self.seed)


__all__ = [
    "DEFAULT_CONFIG",
    "LOG_FORMATS",
    "ConfigSchemaVersion",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "GenerationConfig",
    "assert_valid_config",
    "default_config",
    "merge_config",
    "validate_config",
]
