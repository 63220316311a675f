"""Core configuration data types.

Configuration follows the resolve-once, freeze-then-flow pattern: sources are
merged into a :class:`ResolvedConfig` that remembers where every value came
from, then frozen into a :class:`FrozenConfig` handed to the pipeline.
"""

from collections.abc import Mapping
from dataclasses import dataclass, fields
import re
from typing import Any, Literal, NamedTuple

from fix_augment.chunking.types import ChunkMode

# --- Source Tracking Types ---

ConfigOrigin = Literal["programmatic", "env", "file", "default"]
SourceMap = Mapping[str, ConfigOrigin]

ENV_PREFIX = "FIX_AUGMENT_"

# Display order for audits and introspection
FIELD_ORDER = (
    "enabled",
    "auto_fix_double_quotes",
    "warn_large_input",
    "max_safe_input_size",
    "suggest_task_breakdown",
    "complexity_threshold",
    "min_chunk_size",
    "max_chunk_size",
    "context_overlap_size",
    "chunk_mode",
    "output_format",
    "context_health_monitoring",
    "context_refresh_threshold",
)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_field_name(key: str) -> str:
    """Map a host setting key to a field name.

    Accepts ``max_chunk_size``, ``maxChunkSize`` and ``fixAugment.maxChunkSize``.
    """
    key = key.rsplit(".", 1)[-1]
    return _CAMEL_BOUNDARY.sub("_", key).lower()


# --- Core Configuration Data ---


class ResolvedConfig(NamedTuple):
    """Configuration after resolution from all sources, before freezing.

    Logically immutable; use :meth:`with_overrides` to derive variants.
    """

    enabled: bool
    auto_fix_double_quotes: bool
    warn_large_input: bool
    max_safe_input_size: int
    suggest_task_breakdown: bool
    complexity_threshold: int
    min_chunk_size: int
    max_chunk_size: int
    context_overlap_size: int
    chunk_mode: ChunkMode
    output_format: str
    context_health_monitoring: bool
    context_refresh_threshold: int

    # Audit metadata - tracks where each field value came from
    origin: SourceMap

    def to_frozen(self) -> "FrozenConfig":
        """Convert to the immutable configuration used in the pipeline."""
        values = self._asdict()
        values.pop("origin")
        return FrozenConfig(**values)

    def with_overrides(self, **overrides: object) -> "ResolvedConfig":
        """Create a new ResolvedConfig with programmatic overrides applied.

        Unknown fields are ignored. The result is re-validated, so an invalid
        override raises ``ConfigurationError``.
        """
        from .resolver import validate_values

        new_values = self._asdict()
        new_origin = dict(self.origin)
        new_values.pop("origin")

        for field, value in overrides.items():
            if field in new_values:
                new_values[field] = value
                new_origin[field] = "programmatic"

        return ResolvedConfig(**validate_values(new_values), origin=new_origin)

    def audit(self) -> str:
        """Human-readable report showing the origin of each field."""
        from .audit import generate_audit

        return generate_audit(self._asdict(), self.origin)


@dataclass(frozen=True)
class FrozenConfig:
    """Immutable configuration handed to the pipeline.

    Also serves hosts without a settings store of their own through
    :meth:`get`.
    """

    enabled: bool
    auto_fix_double_quotes: bool
    warn_large_input: bool
    max_safe_input_size: int
    suggest_task_breakdown: bool
    complexity_threshold: int
    min_chunk_size: int
    max_chunk_size: int
    context_overlap_size: int
    chunk_mode: ChunkMode
    output_format: str
    context_health_monitoring: bool
    context_refresh_threshold: int

    def get(self, key: str, default: Any = None) -> Any:
        """Read one setting by snake_case or camelCase key."""
        return getattr(self, to_field_name(key), default)

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
