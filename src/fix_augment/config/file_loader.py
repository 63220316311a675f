"""File-based configuration loading with profile support.

Two files are read: the project's ``pyproject.toml`` (table
``[tool.fix_augment]``) and a home file, ``~/.config/fix_augment.toml`` by
default. Both may hold named profiles under ``profiles.<name>``. Keys may be
written in snake_case or in the editor's camelCase (``maxChunkSize``).
"""

import os
from pathlib import Path
import tomllib
from typing import Any

from fix_augment.exceptions import ConfigurationError

from .types import to_field_name

PYPROJECT_PATH_ENV = "FIX_AUGMENT_PYPROJECT_PATH"
CONFIG_HOME_ENV = "FIX_AUGMENT_CONFIG_HOME"
TOOL_TABLE = "fix_augment"


class ConfigFileError(ConfigurationError):
    """Raised when configuration file loading fails."""

    def __init__(
        self, file_path: Path, message: str, cause: Exception | None = None
    ) -> None:
        self.file_path = file_path
        self.cause = cause
        super().__init__(
            f"Config file error in {file_path}: {message}",
            code="CONFIG_FILE_ERROR",
            details={"file": str(file_path)},
        )


def _normalize_keys(section: dict[str, Any]) -> dict[str, Any]:
    return {to_field_name(key): value for key, value in section.items()}


class FileConfigLoader:
    """Loads configuration from TOML files with profile support."""

    def load_project_config(
        self, project_root: Path | None = None, profile: str | None = None
    ) -> dict[str, Any]:
        """Load configuration from pyproject.toml.

        Args:
            project_root: Directory to search for pyproject.toml. If None,
                         searches current directory and parents.
            profile: Optional profile under ``[tool.fix_augment.profiles.<name>]``.

        Returns:
            Configuration values, or an empty dict when there is no file or
            no ``[tool.fix_augment]`` table.

        Raises:
            ConfigFileError: If the file cannot be parsed or the profile is missing.
        """
        pyproject_path = self._find_pyproject_toml(project_root)
        if not pyproject_path:
            return {}

        data = self._read_toml(pyproject_path)
        section = data.get("tool", {}).get(TOOL_TABLE, {})
        if not section:
            return {}
        return self._select(pyproject_path, section, profile)

    def load_home_config(self, profile: str | None = None) -> dict[str, Any]:
        """Load configuration from the home file.

        Raises:
            ConfigFileError: If the file cannot be parsed or the profile is missing.
        """
        home_config_path = self._get_home_config_path()
        if not home_config_path.exists():
            return {}
        return self._select(home_config_path, self._read_toml(home_config_path), profile)

    def list_available_profiles(
        self, project_root: Path | None = None
    ) -> dict[str, list[str]]:
        """Profile names from the project and home files; unreadable files list none."""
        profiles: dict[str, list[str]] = {"project": [], "home": []}

        pyproject_path = self._find_pyproject_toml(project_root)
        if pyproject_path:
            try:
                data = self._read_toml(pyproject_path)
                section = data.get("tool", {}).get(TOOL_TABLE, {})
                profiles["project"] = list(section.get("profiles", {}))
            except ConfigFileError:
                pass

        home_config_path = self._get_home_config_path()
        if home_config_path.exists():
            try:
                profiles["home"] = list(self._read_toml(home_config_path).get("profiles", {}))
            except ConfigFileError:
                pass

        return profiles

    def _select(
        self, path: Path, section: dict[str, Any], profile: str | None
    ) -> dict[str, Any]:
        if profile:
            profiles = section.get("profiles", {})
            if profile not in profiles:
                raise ConfigFileError(
                    path,
                    f"Profile '{profile}' not found. Available profiles: {list(profiles)}",
                )
            return _normalize_keys(dict(profiles[profile]))
        config = dict(section)
        config.pop("profiles", None)
        return _normalize_keys(config)

    def _read_toml(self, path: Path) -> dict[str, Any]:
        try:
            with path.open(mode="rb") as f:
                return tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigFileError(path, f"Failed to parse TOML: {e}", cause=e) from e

    def _find_pyproject_toml(self, start_dir: Path | None = None) -> Path | None:
        """Find pyproject.toml by searching up the directory tree."""
        explicit = os.getenv(PYPROJECT_PATH_ENV)
        if explicit:
            path = Path(explicit)
            return path if path.exists() else None

        current = Path(start_dir or Path.cwd()).resolve()
        while current != current.parent:
            pyproject_path = current / "pyproject.toml"
            if pyproject_path.exists():
                return pyproject_path
            current = current.parent
        return None

    def _get_home_config_path(self) -> Path:
        override = os.getenv(CONFIG_HOME_ENV)
        if override:
            return Path(override)
        return Path.home() / ".config" / "fix_augment.toml"
