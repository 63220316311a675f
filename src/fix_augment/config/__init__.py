"""Configuration management for the fix-augment pipeline.

Resolve-once, freeze-then-flow:

- ResolvedConfig: merged configuration with audit metadata
- FrozenConfig: immutable configuration handed to the pipeline
- SourceMap: where each value came from
"""

from .api import (
    check_environment,
    get_effective_profile,
    list_available_profiles,
    print_config_audit,
    resolve_config,
    validate_profile,
)
from .audit import SourceTracker, generate_audit, generate_telemetry_summary
from .file_loader import ConfigFileError, FileConfigLoader
from .resolver import ConfigResolver
from .schema import FixAugmentSettings
from .scope import config_override, config_scope, get_ambient_resolved_config
from .types import ConfigOrigin, FrozenConfig, ResolvedConfig, SourceMap

__all__ = [  # noqa: RUF022
    # Main API
    "resolve_config",
    "list_available_profiles",
    "get_effective_profile",
    "validate_profile",
    "print_config_audit",
    "check_environment",
    # Scoping
    "config_scope",
    "config_override",
    "get_ambient_resolved_config",
    # Core types
    "ResolvedConfig",
    "FrozenConfig",
    "SourceMap",
    "ConfigOrigin",
    # Advanced usage
    "FixAugmentSettings",
    "ConfigResolver",
    "FileConfigLoader",
    "ConfigFileError",
    "SourceTracker",
    "generate_audit",
    "generate_telemetry_summary",
]
