"""Configuration resolution with precedence handling.

Sources are merged in this order, later ones winning:
Defaults < Home file < Project file < Environment < Programmatic
"""

import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from fix_augment.exceptions import ConfigurationError

from .audit import SourceTracker
from .env_loader import EnvironmentConfigLoader
from .file_loader import ConfigFileError, FileConfigLoader
from .schema import FixAugmentSettings
from .types import ResolvedConfig

log = logging.getLogger(__name__)

PROFILE_ENV = "FIX_AUGMENT_PROFILE"


def validate_values(values: dict[str, Any]) -> dict[str, Any]:
    """Validate a complete set of field values through the schema.

    Raises:
        ConfigurationError: Chained from pydantic's error, listing each problem.
    """
    try:
        return FixAugmentSettings(**values).to_dict()
    except PydanticValidationError as e:
        problems = [
            f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}"
            for err in e.errors()
        ]
        raise ConfigurationError(
            f"Configuration validation failed: {'; '.join(problems)}",
            code="INVALID_CONFIG",
            details={"errors": problems},
        ) from e


class ConfigResolver:
    """Resolves configuration from multiple sources with proper precedence."""

    def __init__(self) -> None:
        self.file_loader = FileConfigLoader()
        self.env_loader = EnvironmentConfigLoader()

    def resolve(
        self,
        programmatic: dict[str, Any] | None = None,
        *,
        profile: str | None = None,
        use_env_file: str | Path | None = None,
        project_root: Path | None = None,
    ) -> ResolvedConfig:
        """Resolve configuration from all sources with proper precedence.

        Args:
            programmatic: Programmatic overrides (highest precedence)
            profile: Profile name to load from files
            use_env_file: Optional .env file to load
            project_root: Directory to search for pyproject.toml

        Returns:
            ResolvedConfig with merged values and source tracking.

        Raises:
            ConfigurationError: If validation fails.
            ConfigFileError: If the project file is malformed.
        """
        source_tracker = SourceTracker()
        merged_config: dict[str, Any] = {}

        if profile is None:
            profile = os.getenv(PROFILE_ENV)

        # Step 1: schema defaults
        for field, value in FixAugmentSettings.default_values().items():
            merged_config[field] = value
            source_tracker.set_origin(field, "default")

        # Step 2: home file; problems here never block resolution
        try:
            home_config = self.file_loader.load_home_config(profile=profile)
        except ConfigFileError as e:
            log.warning("Ignoring home configuration: %s", e.message)
            home_config = {}
        self._apply(merged_config, source_tracker, home_config, "file")

        # Step 3: project file
        try:
            project_config = self.file_loader.load_project_config(
                project_root=project_root, profile=profile
            )
        except ConfigFileError:
            # a broken base file is fatal; a profile defined only at home is not
            if profile is None:
                raise
            project_config = {}
        self._apply(merged_config, source_tracker, project_config, "file")

        # Step 4: environment
        env_config = self.env_loader.load_env_config(env_file=use_env_file)
        self._apply(merged_config, source_tracker, env_config, "env")

        # Step 5: programmatic overrides
        if programmatic:
            self._apply(merged_config, source_tracker, programmatic, "programmatic")

        final_config = validate_values(merged_config)
        log.debug("Resolved configuration (profile=%s)", profile)
        return ResolvedConfig(**final_config, origin=source_tracker.get_source_map())

    @staticmethod
    def _apply(
        merged: dict[str, Any],
        tracker: SourceTracker,
        values: dict[str, Any],
        origin: Any,
    ) -> None:
        for field, value in values.items():
            if field in merged:  # Only override known fields
                merged[field] = value
                tracker.set_origin(field, origin)

    def validate_profile_exists(
        self, profile: str, project_root: Path | None = None
    ) -> tuple[bool, bool]:
        """Return ``(exists_in_project, exists_in_home)``."""
        available_profiles = self.file_loader.list_available_profiles(project_root)
        return profile in available_profiles["project"], profile in available_profiles["home"]

    def get_effective_profile(self) -> str | None:
        return os.getenv(PROFILE_ENV)

    def list_available_profiles(
        self, project_root: Path | None = None
    ) -> dict[str, list[str]]:
        return self.file_loader.list_available_profiles(project_root)
