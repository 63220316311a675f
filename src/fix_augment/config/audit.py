"""Configuration audit and source tracking."""

from typing import Any

from .types import ENV_PREFIX, FIELD_ORDER, ConfigOrigin, SourceMap


class SourceTracker:
    """Builds up a SourceMap while configuration is resolved."""

    def __init__(self) -> None:
        self._origins: dict[str, ConfigOrigin] = {}

    def set_origin(self, field: str, origin: ConfigOrigin) -> None:
        self._origins[field] = origin

    def set_multiple(self, fields: dict[str, Any], origin: ConfigOrigin) -> None:
        for field in fields:
            self._origins[field] = origin

    def get_source_map(self) -> SourceMap:
        """Return a copy of the origins recorded so far."""
        return dict(self._origins)

    def has_origin(self, field: str) -> bool:
        return field in self._origins


def generate_telemetry_summary(source_map: SourceMap) -> dict[str, int]:
    """Count fields per origin, e.g. ``{"env": 3, "file": 2}``."""
    counts: dict[str, int] = {}
    for origin in source_map.values():
        counts[origin] = counts.get(origin, 0) + 1
    return counts


def generate_audit(config_dict: dict[str, Any], source_map: SourceMap) -> str:
    """Human-readable report showing where each value came from.

    Args:
        config_dict: The configuration values
        source_map: The source origins for each field

    Returns:
        One ``field: origin:value`` line per tracked field.
    """
    lines = []
    for field in FIELD_ORDER:
        if field not in source_map:
            continue
        origin = source_map[field]
        actual_value = config_dict.get(field, "<missing>")
        if origin == "env":
            value_display = f"env:{ENV_PREFIX}{field.upper()}={actual_value}"
        else:
            value_display = f"{origin}:{actual_value}"
        lines.append(f"{field}: {value_display}")
    return "\n".join(lines)
