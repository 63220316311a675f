"""Environment variable configuration loading.

Reads ``FIX_AUGMENT_*`` variables, optionally after loading a ``.env`` file.
Values are returned as raw strings; the resolver validates and coerces the
merged result in one place.
"""

import os
from pathlib import Path

from fix_augment.exceptions import ConfigurationError

from .schema import FixAugmentSettings
from .types import ENV_PREFIX


def env_var_names() -> dict[str, str]:
    """Map each environment variable to the field it sets."""
    return {f"{ENV_PREFIX}{name.upper()}": name for name in FixAugmentSettings.model_fields}


class EnvironmentConfigLoader:
    """Loads configuration from ``FIX_AUGMENT_*`` variables and ``.env`` files."""

    def load_env_config(self, env_file: str | Path | None = None) -> dict[str, str]:
        """Return the fields actually set in the environment.

        Args:
            env_file: Optional ``.env`` file loaded first. Variables already
                     present in the environment win over the file.

        Raises:
            ConfigurationError: If the ``.env`` file is missing or malformed.
        """
        if env_file:
            self._load_env_file(env_file)

        return {
            field: os.environ[var]
            for var, field in env_var_names().items()
            if var in os.environ
        }

    def _load_env_file(self, env_file: str | Path) -> None:
        env_path = Path(env_file)
        if not env_path.exists():
            raise ConfigurationError(
                f"Environment file not found: {env_path}",
                code="ENV_FILE_NOT_FOUND",
                details={"file": str(env_path)},
            )

        try:
            with env_path.open(encoding="utf-8") as f:
                for line_num, line in enumerate(f, 1):
                    line = line.strip()
                    if not line or line.startswith("#"):
                        continue

                    if "=" not in line:
                        raise ConfigurationError(
                            f"Invalid format at line {line_num}: {line}. "
                            "Expected KEY=VALUE format.",
                            code="ENV_FILE_INVALID",
                            details={"file": str(env_path), "line": line_num},
                        )

                    key, value = line.split("=", 1)
                    key = key.strip()
                    value = value.strip()
                    if (value.startswith('"') and value.endswith('"')) or (
                        value.startswith("'") and value.endswith("'")
                    ):
                        value = value[1:-1]

                    # don't override existing env vars
                    if key not in os.environ:
                        os.environ[key] = value

        except OSError as e:
            raise ConfigurationError(
                f"Failed to read environment file {env_path}: {e}",
                code="ENV_FILE_INVALID",
                details={"file": str(env_path)},
            ) from e

    def get_env_summary(self) -> dict[str, str]:
        """Currently set ``FIX_AUGMENT_*`` variables."""
        return {var: value for var, value in os.environ.items() if var.startswith(ENV_PREFIX)}
