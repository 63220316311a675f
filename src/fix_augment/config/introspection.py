"""Configuration introspection utilities for debugging and validation."""

import argparse
import json
import sys
from typing import Any

from fix_augment.exceptions import FixAugmentError

from .api import resolve_config
from .types import FIELD_ORDER, ResolvedConfig

# ruff: noqa: T201


def print_config_debug(
    *,
    profile: str | None = None,
    show_sources: bool = True,
    show_validation: bool = True,
    programmatic_overrides: dict[str, Any] | None = None,
) -> None:
    """Print the effective configuration with sources and validation info."""
    try:
        resolved = resolve_config(programmatic=programmatic_overrides, profile=profile)
    except FixAugmentError as e:
        print(f"Configuration Error: {e.message}", file=sys.stderr)
        sys.exit(1)

    print("=== Effective Configuration ===")
    _print_config_values(resolved)

    if show_sources:
        print("\n=== Configuration Sources ===")
        _print_config_sources(resolved)

    if show_validation:
        print("\n=== Validation Results ===")
        _print_validation_results(resolved)


def check_config_validation(
    *,
    profile: str | None = None,
    programmatic_overrides: dict[str, Any] | None = None,
) -> bool:
    """True if configuration resolves without errors."""
    try:
        resolve_config(programmatic=programmatic_overrides, profile=profile)
        return True
    except FixAugmentError:
        return False


def get_config_info(*, profile: str | None = None) -> dict[str, Any]:
    """Structured configuration details, sources and validation status."""
    try:
        resolved = resolve_config(profile=profile)
    except FixAugmentError as e:
        return {
            "status": "invalid",
            "error": e.message,
            "config": None,
            "sources": {},
            "validation": {"errors": [e.message], "warnings": []},
        }

    return {
        "status": "valid",
        "config": {field: getattr(resolved, field) for field in FIELD_ORDER},
        "sources": dict(resolved.origin),
        "validation": {"errors": [], "warnings": get_config_warnings(resolved)},
    }


def get_config_warnings(resolved: ResolvedConfig) -> list[str]:
    """Non-fatal issues worth pointing out."""
    warnings = []
    if not resolved.enabled:
        warnings.append("Processing is disabled - input and output pass through unchanged")
    if resolved.max_chunk_size > resolved.max_safe_input_size:
        warnings.append(
            "max_chunk_size exceeds max_safe_input_size - long chunks will "
            "still trigger size warnings"
        )
    if resolved.context_overlap_size == 0:
        warnings.append("context_overlap_size is 0 - chunks carry no preceding context")
    if not resolved.auto_fix_double_quotes:
        warnings.append("Double quotes are not escaped before submission")
    return warnings


def _print_config_values(resolved: ResolvedConfig) -> None:
    for field in FIELD_ORDER:
        print(f"  {field}: {getattr(resolved, field)}")


def _print_config_sources(resolved: ResolvedConfig) -> None:
    for field, source in resolved.origin.items():
        print(f"  {field}: {source}")


def _print_validation_results(resolved: ResolvedConfig) -> None:
    print("Configuration is valid")
    warnings = get_config_warnings(resolved)
    if warnings:
        print("\nWarnings:")
        for warning in warnings:
            print(f"  - {warning}")
    else:
        print("No warnings")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for configuration introspection."""
    parser = argparse.ArgumentParser(
        description="Inspect fix-augment configuration",
        prog="python -m fix_augment.config",
    )
    parser.add_argument("--profile", help="Configuration profile to use")
    parser.add_argument(
        "--no-sources", action="store_true", help="Don't show configuration sources"
    )
    parser.add_argument(
        "--no-validation", action="store_true", help="Don't show validation results"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON instead of human-readable format",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Just check if configuration is valid (exit code 0=valid, 1=invalid)",
    )

    args = parser.parse_args(argv)

    if args.check:
        sys.exit(0 if check_config_validation(profile=args.profile) else 1)

    if args.json:
        print(json.dumps(get_config_info(profile=args.profile), indent=2))
    else:
        print_config_debug(
            profile=args.profile,
            show_sources=not args.no_sources,
            show_validation=not args.no_validation,
        )
