"""Configuration scoping for entry-time overrides.

A scope only changes what :func:`resolve_config` returns inside it. Objects
already built from a FrozenConfig keep the values they were given.
"""

from collections.abc import Generator
from contextlib import contextmanager
import contextvars
from typing import Any

from .types import ResolvedConfig

_ambient_resolved_config: contextvars.ContextVar[ResolvedConfig] = (
    contextvars.ContextVar("fix_augment_resolved_config")
)


def get_ambient_resolved_config() -> ResolvedConfig | None:
    """Return the config set by the innermost scope, or None outside any scope."""
    return _ambient_resolved_config.get(None)


@contextmanager
def config_scope(config: ResolvedConfig) -> Generator[None]:
    """Temporarily use a different resolved configuration.

    Async-safe: the scope is carried by a context variable.

    Example:
        base = resolve_config()
        with config_scope(base.with_overrides(chunk_mode="naive")):
            pipeline = TextPipeline()  # sees chunk_mode == "naive"
    """
    token = _ambient_resolved_config.set(config)
    try:
        yield
    finally:
        _ambient_resolved_config.reset(token)


@contextmanager
def config_override(**overrides: Any) -> Generator[None]:
    """Scope with a few fields overridden on top of the current configuration.

    Example:
        with config_override(max_chunk_size=4000):
            config = resolve_config()  # max_chunk_size == 4000
    """
    base_config = get_ambient_resolved_config()
    if base_config is None:
        from .api import resolve_config

        base_config = resolve_config()

    with config_scope(base_config.with_overrides(**overrides)):
        yield
