"""Public API for the configuration system."""

from pathlib import Path
from typing import Any

from .resolver import ConfigResolver
from .scope import get_ambient_resolved_config
from .types import ResolvedConfig

# Global resolver instance for efficient reuse
_resolver = ConfigResolver()

# ruff: noqa: T201


def resolve_config(
    programmatic: dict[str, Any] | None = None,
    *,
    profile: str | None = None,
    use_env_file: str | Path | None = None,
    project_root: Path | None = None,
) -> ResolvedConfig:
    """Resolve configuration from all sources with proper precedence.

    Programmatic > Environment > Project file > Home file > Defaults.
    Inside :func:`config_scope` the scoped config is the base instead and only
    ``programmatic`` is applied on top of it.

    Args:
        programmatic: Field overrides (highest precedence). Unknown fields
                     are ignored.
        profile: Profile name to load from configuration files. If None,
                uses ``FIX_AUGMENT_PROFILE`` if set.
        use_env_file: Optional ``.env`` file loaded before reading variables.
        project_root: Directory to search for pyproject.toml.

    Raises:
        ConfigurationError: If the merged values are invalid or a file is malformed.

    Example:
        config = resolve_config({"max_chunk_size": 6000}, profile="strict")
    """
    ambient_config = get_ambient_resolved_config()
    if ambient_config is not None:
        if programmatic:
            return ambient_config.with_overrides(**programmatic)
        return ambient_config

    return _resolver.resolve(
        programmatic=programmatic,
        profile=profile,
        use_env_file=use_env_file,
        project_root=project_root,
    )


def list_available_profiles(project_root: Path | None = None) -> dict[str, list[str]]:
    """Profile names available in the project and home files."""
    return _resolver.list_available_profiles(project_root)


def get_effective_profile() -> str | None:
    return _resolver.get_effective_profile()


def validate_profile(profile: str, project_root: Path | None = None) -> dict[str, bool]:
    """Report where ``profile`` is defined.

    Raises:
        ValueError: If the profile doesn't exist in any configuration file.
    """
    exists_in_project, exists_in_home = _resolver.validate_profile_exists(
        profile, project_root
    )
    if not exists_in_project and not exists_in_home:
        available = list_available_profiles(project_root)
        all_profiles = available["project"] + available["home"]
        raise ValueError(
            f"Profile '{profile}' not found. Available profiles: {all_profiles}"
        )
    return {"project": exists_in_project, "home": exists_in_home}


def print_config_audit(config: ResolvedConfig) -> None:
    """Print where each configuration value came from."""
    print(config.audit())


def check_environment() -> dict[str, str]:
    """Currently set ``FIX_AUGMENT_*`` variables."""
    return _resolver.env_loader.get_env_summary()
