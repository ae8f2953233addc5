"""
fixture-foundry config package public API.

Purpose
- Export config loading/validation entrypoints and public error types.

Functional requirements
- Support loading from ``fixture_foundry.toml`` + ``FIXTURE_FOUNDRY_`` env overrides.
- Fail fast with clear structured validation/load errors.
"""

from fixture_foundry.config.loader import (
    DEFAULT_CONFIG_FILE,
    ENV_PREFIX,
    ConfigLoadError,
    dump_effective_config,
    load_config,
)
from fixture_foundry.config.schema import (
    DEFAULT_CONFIG,
    LOG_FORMATS,
    ConfigSchemaVersion,
    ConfigValidationError,
    ConfigValidationIssue,
    GenerationConfig,
    assert_valid_config,
    default_config,
    merge_config,
    validate_config,
)

__all__ = [
    "ConfigLoadError",
    "ConfigSchemaVersion",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "DEFAULT_CONFIG",
    "DEFAULT_CONFIG_FILE",
    "ENV_PREFIX",
    "GenerationConfig",
    "LOG_FORMATS",
    "assert_valid_config",
    "default_config",
    "dump_effective_config",
    "load_config",
    "merge_config",
    "validate_config",
]
